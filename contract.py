"""
Contract layer for division strategies.

A DivisionContract states what a strategy for one requested divisor must
satisfy, whichever way it computes the quotient.  It is purely
declarative - it says WHAT must be true of ``divide``, not HOW.

The contract is bound to the divisor the caller asked for, never to the
value a strategy reports about itself, and it knows the single dividend
a strategy may refuse: lo / -1 when the overflow mode is ERROR.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Protocol

from divisor import NativeDivisor
from word import OverflowMode, Word


class DivisionStrategy(Protocol):
    """Anything with a fixed divisor and a one-argument ``divide``."""

    @property
    def divisor(self) -> int: ...

    def divide(self, dividend: int) -> int: ...


@dataclass(frozen=True)
class Property:
    """A named predicate over (strategy, dividend...)."""

    name: str
    description: str
    predicate: Callable[..., bool]


@dataclass
class DivisionContract:
    """Every property a strategy for ``divisor`` in ``word`` must hold."""

    divisor: int
    word: Word
    overflow: OverflowMode = OverflowMode.WRAP
    properties: list[Property] = field(default_factory=list)

    @property
    def name(self) -> str:
        return f"{self.word.bits}-bit division by {self.divisor}"

    def refusal_allowed(self, dividends: tuple[int, ...]) -> bool:
        """True when raising OverflowError for ``dividends`` is correct."""
        return (
            self.overflow == OverflowMode.ERROR
            and len(dividends) > 0
            and self.word.div_overflows(dividends[0], self.divisor)
        )

    def __iter__(self):
        return iter(self.properties)

    def __len__(self):
        return len(self.properties)


def division_contract(
    divisor: int,
    word: Word,
    overflow: OverflowMode = OverflowMode.WRAP,
) -> DivisionContract:
    """Build the full contract for division by ``divisor`` in ``word``."""
    lo, hi = word.lo, word.hi
    native = NativeDivisor(divisor, word=word, overflow=overflow)

    def truncates(div: DivisionStrategy, n: int) -> bool:
        if word.div_overflows(n, divisor):
            return True
        q = div.divide(n)
        rem = n - q * divisor
        return abs(rem) < abs(divisor) and (rem == 0 or (rem < 0) == (n < 0))

    def symmetric(div: DivisionStrategy, n: int) -> bool:
        if not lo <= -n <= hi:
            return True
        if word.div_overflows(n, divisor) or word.div_overflows(-n, divisor):
            return True
        return div.divide(-n) == -div.divide(n)

    return DivisionContract(divisor, word, overflow, [
        Property(
            "same_divisor",
            "the strategy divides by the requested divisor",
            lambda div: div.divisor == divisor,
        ),
        Property(
            "closure",
            "quotient stays within the word",
            lambda div, n: lo <= div.divide(n) <= hi,
        ),
        Property(
            "matches_native",
            "q == n / d with native truncating division",
            lambda div, n: div.divide(n) == native.divide(n),
        ),
        Property(
            "truncation",
            "|n - q*d| < |d| and the remainder has the sign of n",
            truncates,
        ),
        Property(
            "odd_symmetry",
            "(-n) / d == -(n / d) when -n is representable",
            symmetric,
        ),
        Property(
            "zero_numerator",
            "0 / d == 0",
            lambda div: div.divide(0) == 0,
        ),
    ])
