"""
Word layer for constant division.

A Word is a fixed-width two's-complement integer domain.  Every value the
divisors consume or produce lives inside one, and every arithmetic step
they perform is one of the machine operations modelled here: wrapping
add/negate, arithmetic and logical right shift, and the high half of a
double-width multiply.

Python ints never overflow, so each operation re-imposes the word width
explicitly.  That is what makes the bit tricks in divisor.py reproduce
native behaviour exactly.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class OverflowMode(Enum):
    """What to do when a quotient is not representable (MIN / -1)."""

    WRAP = auto()        # Two's-complement wrap-around, MIN / -1 == MIN
    ERROR = auto()       # Raise an OverflowError


@dataclass(frozen=True)
class Word:
    """
    A signed two's-complement integer of ``bits`` bits.

    The inclusive range is [lo, hi] = [-2**(bits-1), 2**(bits-1) - 1].
    """

    bits: int

    def __post_init__(self):
        if self.bits < 2:
            raise ValueError(f"bits ({self.bits}) must be >= 2")

    @property
    def lo(self) -> int:
        return -(1 << (self.bits - 1))

    @property
    def hi(self) -> int:
        return (1 << (self.bits - 1)) - 1

    @property
    def mask(self) -> int:
        return (1 << self.bits) - 1

    @property
    def width(self) -> int:
        """Total number of representable values."""
        return 1 << self.bits

    def contains(self, value: int) -> bool:
        return self.lo <= value <= self.hi

    def all_values(self) -> range:
        return range(self.lo, self.hi + 1)

    def check(self, value: int, what: str = "value") -> int:
        """Reject a value outside the word, return it unchanged otherwise."""
        if not self.contains(value):
            raise ValueError(
                f"{what} {value} is outside [{self.lo}, {self.hi}]"
            )
        return value

    # -- machine operations ------------------------------------------------

    def wrap(self, raw: int) -> int:
        """Reduce an unbounded integer to the word (modular wrap-around)."""
        return ((raw - self.lo) & self.mask) + self.lo

    def unsigned(self, value: int) -> int:
        """Reinterpret the bit pattern of a word value as unsigned."""
        return value & self.mask

    def neg(self, value: int) -> int:
        return self.wrap(-value)

    def abs(self, value: int) -> int:
        """Two's-complement absolute value: abs(lo) wraps back to lo."""
        return self.neg(value) if value < 0 else value

    def sar(self, value: int, shift: int) -> int:
        """Arithmetic (sign-propagating) right shift, like ``>>``."""
        return value >> shift

    def shr(self, value: int, shift: int) -> int:
        """Logical (zero-filling) right shift, like Java's ``>>>``."""
        return self.wrap(self.unsigned(value) >> shift)

    def mul_hi(self, a: int, b: int) -> int:
        """High half of the exact double-width signed product a * b."""
        return self.wrap((a * b) >> self.bits)

    def highest_bit(self, magnitude: int) -> int:
        """Index of the highest set bit, i.e. bits - 1 - nlz(magnitude)."""
        return magnitude.bit_length() - 1

    # -- reference division ------------------------------------------------

    def div_overflows(self, dividend: int, divisor: int) -> bool:
        """True for the single unrepresentable quotient, lo / -1."""
        return divisor == -1 and dividend == self.lo

    def truncating_div(
        self,
        dividend: int,
        divisor: int,
        overflow: OverflowMode = OverflowMode.WRAP,
    ) -> int:
        """Native signed division: round toward zero, then apply overflow."""
        if divisor == 0:
            raise ZeroDivisionError("division by zero")
        # Python's divmod rounds toward -inf; adjust when the
        # mathematical quotient is negative with a remainder.
        q, r = divmod(dividend, divisor)
        if r != 0 and (dividend < 0) != (divisor < 0):
            q += 1
        if not self.contains(q):
            if overflow == OverflowMode.ERROR:
                raise OverflowError(
                    f"{dividend} / {divisor} is outside [{self.lo}, {self.hi}]"
                )
            return self.wrap(q)
        return q


# ---------------------------------------------------------------------------
# Common word presets
# ---------------------------------------------------------------------------

INT8 = Word(bits=8)
INT16 = Word(bits=16)
INT32 = Word(bits=32)
INT64 = Word(bits=64)

WORDS = {w.bits: w for w in (INT8, INT16, INT32, INT64)}

INT32_MIN = INT32.lo
INT32_MAX = INT32.hi
