"""
The divisor factory.

The factory does NOT just construct divisors - it *verifies* them
against their contract before releasing them.

Flow:
  1. Caller requests a divisor for a given value and word.
  2. Factory classifies the value and builds the strategy.
  3. Factory checks the contract for the *requested* divisor.
  4. If verification passes  -> return the divisor.
     If verification fails   -> raise, never hand out a broken instance.

Verification runs once per divisor, so its cost is amortised over every
later ``divide`` call exactly like the constant derivation is.
"""

from __future__ import annotations

import inspect
import itertools
import logging
import random
from dataclasses import dataclass, field
from typing import Callable

from contract import DivisionContract, DivisionStrategy, Property, division_contract
from divisor import Divisor, make_divisor
from word import INT32, OverflowMode, Word

logger = logging.getLogger(__name__)


@dataclass
class PropertyOutcome:
    """How one property fared, with the first failing dividends if any."""

    name: str
    passed: bool
    counterexample: tuple | None = None
    checked: int = 0
    error: str | None = None

    def __str__(self) -> str:
        line = f"{'ok  ' if self.passed else 'FAIL'} {self.name} x{self.checked}"
        if self.counterexample is not None:
            line += f" at n={self.counterexample}"
        if self.error:
            line += f" ({self.error})"
        return line


@dataclass
class VerificationReport:
    """Outcomes of every property for one requested divisor."""

    divisor: int
    bits: int
    outcomes: list[PropertyOutcome] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(o.passed for o in self.outcomes)

    @property
    def failures(self) -> list[PropertyOutcome]:
        return [o for o in self.outcomes if not o.passed]

    def summary(self) -> str:
        verdict = "verified" if self.passed else "REJECTED"
        head = f"{self.bits}-bit divisor {self.divisor}: {verdict}"
        return "\n".join([head] + [f"  {o}" for o in self.outcomes])


class VerificationError(Exception):
    """Raised when a strategy fails its contract."""

    def __init__(self, report: VerificationReport):
        self.report = report
        super().__init__(report.summary())


# ---------------------------------------------------------------------------
# The factory
# ---------------------------------------------------------------------------

class DivisorFactory:
    """
    Produces divisors that are proven correct for their word.

    For narrow words the factory checks *every* dividend.  For wider
    ones it checks the edge values plus a seeded random sample, so the
    same divisor is always checked against the same dividends.
    """

    EXHAUSTIVE_THRESHOLD = 256  # max word width for brute-force check
    SAMPLE_COUNT = 1_000
    SAMPLE_SEED = 0x5EED

    @classmethod
    def create(
        cls,
        divisor: int,
        word: Word = INT32,
        overflow: OverflowMode = OverflowMode.WRAP,
        build: Callable[..., DivisionStrategy] = make_divisor,
    ) -> Divisor:
        """Build, verify, and return the strategy for ``divisor``.

        ``build`` defaults to ``make_divisor``; passing another builder
        verifies an alternative strategy against the same contract.
        """
        strategy = build(divisor, word, overflow)
        logger.debug(
            "built %s divisor for %d (%d-bit)",
            getattr(strategy, "kind", type(strategy).__name__), divisor, word.bits,
        )
        cls.verify(strategy, word, overflow, divisor=divisor)
        return strategy

    @classmethod
    def verify(
        cls,
        strategy: DivisionStrategy,
        word: Word = INT32,
        overflow: OverflowMode = OverflowMode.WRAP,
        divisor: int | None = None,
    ) -> VerificationReport:
        """Check ``strategy`` against the contract for ``divisor``.

        ``divisor`` defaults to the strategy's own; ``create`` always
        passes the requested value so a strategy cannot pick its contract.
        """
        if divisor is None:
            divisor = strategy.divisor
        contract = division_contract(divisor, word, overflow)
        report = VerificationReport(divisor=divisor, bits=word.bits)
        for prop in contract:
            report.outcomes.append(cls._verify_property(prop, strategy, contract))
        if not report.passed:
            logger.debug("verification failed:\n%s", report.summary())
            raise VerificationError(report)
        logger.debug("verified %s", contract.name)
        return report

    # -- internal ---------------------------------------------------------

    @classmethod
    def _verify_property(
        cls,
        prop: Property,
        strategy: DivisionStrategy,
        contract: DivisionContract,
    ) -> PropertyOutcome:
        word = contract.word
        arity = _predicate_arity(prop)
        if word.width <= cls.EXHAUSTIVE_THRESHOLD:
            samples = itertools.product(word.all_values(), repeat=arity)
        else:
            samples = _generate_samples(
                word, arity, count=cls.SAMPLE_COUNT, seed=cls.SAMPLE_SEED
            )

        checked = 0
        for combo in samples:
            checked += 1
            try:
                holds = prop.predicate(strategy, *combo)
            except OverflowError as e:
                if contract.refusal_allowed(combo):
                    continue
                return PropertyOutcome(
                    prop.name, False, combo, checked, f"OverflowError: {e}"
                )
            if not holds:
                return PropertyOutcome(prop.name, False, combo, checked)

        return PropertyOutcome(prop.name, True, checked=checked)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _predicate_arity(prop: Property) -> int:
    """Number of dividend arguments, after the leading strategy."""
    return len(inspect.signature(prop.predicate).parameters) - 1


def _generate_samples(
    word: Word, arity: int, count: int, seed: int
) -> list[tuple[int, ...]]:
    """Edge values first, then a seeded random fill up to ``count``."""
    if arity == 0:
        return [()]
    rng = random.Random(seed)

    edge_values = [word.lo, word.lo + 1, -1, 0, 1, word.hi - 1, word.hi]
    samples = list(itertools.product(edge_values, repeat=arity))

    while len(samples) < count:
        samples.append(tuple(rng.randint(word.lo, word.hi) for _ in range(arity)))

    return samples
