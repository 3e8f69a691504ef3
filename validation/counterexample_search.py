"""Counterexample search over divisors and dividends.

This module runs independently of the test suite.  It compares the
strategy built by ``make_divisor`` with native truncating division and
records every disagreement:

1. Quotient mismatches: the strategy returns a different value.
2. Unexpected errors: the strategy raises where native division does not.
3. Misrouting: a power-of-two magnitude built as a magic divisor, or
   the other way round.

Narrow words are searched exhaustively (every divisor, every dividend);
wider ones use a fixed list of divisors and a seeded dividend sample.

Run directly::

    python -m validation.counterexample_search
"""
from __future__ import annotations

import random
import sys
from dataclasses import dataclass, field
from typing import Iterable

from divisor import MagicDivisor, NativeDivisor, ShiftDivisor, make_divisor
from magic import is_power_of_two
from word import INT8, INT16, INT32, INT64, OverflowMode, Word


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass
class Counterexample:
    category: str
    divisor: int
    dividend: int | None
    expected: str
    actual: str


@dataclass
class SearchReport:
    word: Word
    counterexamples: list[Counterexample] = field(default_factory=list)
    checks_run: int = 0

    @property
    def passed(self) -> bool:
        return len(self.counterexamples) == 0

    def summary(self) -> str:
        lines = [
            f"Counterexample Search Report ({self.word.bits}-bit)",
            "=" * 40,
            f"Total checks: {self.checks_run}",
            f"Counterexamples found: {len(self.counterexamples)}",
        ]
        if self.counterexamples:
            lines.append("")
            for i, cx in enumerate(self.counterexamples, 1):
                lines.append(f"  [{i}] {cx.category}")
                lines.append(f"      Inputs:   {cx.dividend} / {cx.divisor}")
                lines.append(f"      Expected: {cx.expected}")
                lines.append(f"      Actual:   {cx.actual}")
        else:
            lines.append("\nNo counterexamples found.")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Search functions
# ---------------------------------------------------------------------------

def search_routing(
    word: Word,
    divisors: Iterable[int],
) -> tuple[list[Counterexample], int]:
    """Every power-of-two magnitude must take the shift path, nothing else."""
    cxs: list[Counterexample] = []
    checks = 0

    for d in divisors:
        checks += 1
        strategy = make_divisor(d, word)
        expected = ShiftDivisor if is_power_of_two(abs(d)) else MagicDivisor
        if not isinstance(strategy, expected):
            cxs.append(Counterexample(
                category="misrouted",
                divisor=d,
                dividend=None,
                expected=expected.kind,
                actual=strategy.kind,
            ))

    return cxs, checks


def search_quotient_mismatches(
    word: Word,
    divisors: Iterable[int],
    dividends: Iterable[int],
    overflow: OverflowMode = OverflowMode.WRAP,
) -> tuple[list[Counterexample], int]:
    """Compare the strategy with native division for every pair."""
    cxs: list[Counterexample] = []
    checks = 0
    dividends = list(dividends)

    for d in divisors:
        strategy = make_divisor(d, word, overflow)
        native = NativeDivisor(d, word, overflow)
        for n in dividends:
            checks += 1
            try:
                expected = native.divide(n)
            except OverflowError:
                continue  # lo / -1 under OverflowMode.ERROR

            try:
                actual = strategy.divide(n)
            except Exception as e:
                cxs.append(Counterexample(
                    category="unexpected_error",
                    divisor=d,
                    dividend=n,
                    expected=str(expected),
                    actual=f"{type(e).__name__}: {e}",
                ))
                continue

            if actual != expected:
                cxs.append(Counterexample(
                    category="quotient_mismatch",
                    divisor=d,
                    dividend=n,
                    expected=str(expected),
                    actual=str(actual),
                ))

    return cxs, checks


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

def all_divisors(word: Word) -> list[int]:
    return [d for d in word.all_values() if d != 0]


def edge_divisors(word: Word) -> list[int]:
    """Powers of two, their neighbours, and a few classic constants."""
    values = {word.lo, word.lo + 1, word.hi, word.hi - 1, 3, 5, 6, 7, 10, 100, 641}
    for k in range(word.bits - 1):
        for v in (1 << k, (1 << k) + 1, (1 << k) - 1):
            values.update((v, -v))
    return sorted(v for v in values if v != 0 and word.contains(v))


def sample_dividends(word: Word, count: int, seed: int = 0) -> list[int]:
    rng = random.Random(seed)
    edges = [word.lo, word.lo + 1, -1, 0, 1, word.hi - 1, word.hi]
    return edges + [rng.randint(word.lo, word.hi) for _ in range(count)]


# ---------------------------------------------------------------------------
# Top-level runner
# ---------------------------------------------------------------------------

def run_search(
    word: Word,
    overflow: OverflowMode = OverflowMode.WRAP,
    samples: int = 2_000,
    exhaustive: bool | None = None,
) -> SearchReport:
    """Run the complete search for one word width."""
    if exhaustive is None:
        exhaustive = word.bits <= 8
    if exhaustive:
        divisors = all_divisors(word)
        dividends = list(word.all_values())
    else:
        divisors = edge_divisors(word)
        dividends = sample_dividends(word, samples)

    report = SearchReport(word=word)
    for cxs, checks in (
        search_routing(word, divisors),
        search_quotient_mismatches(word, divisors, dividends, overflow),
    ):
        report.counterexamples.extend(cxs)
        report.checks_run += checks

    return report


def main() -> None:
    """Run the search across every supported word width."""
    configs = [
        ("INT8  / WRAP   exhaustive", INT8, OverflowMode.WRAP),
        ("INT8  / ERROR  exhaustive", INT8, OverflowMode.ERROR),
        ("INT16 / WRAP   sampled", INT16, OverflowMode.WRAP),
        ("INT32 / WRAP   sampled", INT32, OverflowMode.WRAP),
        ("INT64 / WRAP   sampled", INT64, OverflowMode.WRAP),
    ]

    all_passed = True
    for name, word, overflow in configs:
        print(f"\n--- Configuration: {name} ---")
        report = run_search(word, overflow)
        print(report.summary())
        if not report.passed:
            all_passed = False

    print("\n" + "=" * 40)
    if all_passed:
        print("ALL CONFIGURATIONS PASSED")
    else:
        print("SOME CONFIGURATIONS HAD COUNTEREXAMPLES")
        sys.exit(1)


if __name__ == "__main__":
    main()
