"""
Division strategies for a fixed divisor.

A divisor is classified once, when it is made, and the result is an
immutable value whose ``divide`` runs a short fixed sequence of word
operations:

  ShiftDivisor   |d| == 2**k       bias, add, arithmetic shift
  MagicDivisor   any other d       multiply-high, add, shift, sign fix

NativeDivisor performs the plain truncating division the other two must
reproduce.  It is the reference the contract and the factory compare
against.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

from magic import derive_magic
from word import INT32, OverflowMode, Word


@dataclass(frozen=True)
class ShiftDivisor:
    """Division by +-2**shift using shifts and one addition."""

    kind: ClassVar[str] = "shift"

    shift: int
    is_negative: bool
    word: Word = INT32
    overflow: OverflowMode = OverflowMode.WRAP

    @property
    def divisor(self) -> int:
        value = 1 << self.shift
        return -value if self.is_negative else value

    def divide(self, dividend: int) -> int:
        word = self.word
        word.check(dividend, "dividend")

        if self.shift == 0:
            if not self.is_negative:
                return dividend
            if self.overflow == OverflowMode.ERROR and dividend == word.lo:
                raise OverflowError(
                    f"{dividend} / -1 is outside [{word.lo}, {word.hi}]"
                )
            return word.neg(dividend)

        # Arithmetic shift floors; adding 2**shift - 1 to negative
        # dividends first turns that into truncation toward zero.
        i = word.sar(dividend, self.shift - 1)
        i = word.shr(i, word.bits - self.shift)
        i = word.wrap(i + dividend)
        i = word.sar(i, self.shift)
        if self.is_negative:
            return word.neg(i)
        return i


@dataclass(frozen=True)
class MagicDivisor:
    """Division by any other divisor via a precomputed magic multiplier."""

    kind: ClassVar[str] = "magic"

    magic: int
    shift: int
    is_negative: bool
    magnitude: int
    word: Word = INT32

    @property
    def divisor(self) -> int:
        return -self.magnitude if self.is_negative else self.magnitude

    def divide(self, dividend: int) -> int:
        word = self.word
        word.check(dividend, "dividend")

        r = word.mul_hi(self.magic, dividend)
        if self.magic < 0:
            r = word.wrap(r + dividend)
        r = word.sar(r, self.shift)
        o = word.sar(dividend, word.bits - 1)
        if self.is_negative:
            return word.wrap(o - r)
        return word.wrap(r - o)


@dataclass(frozen=True)
class NativeDivisor:
    """Plain truncating division, the behaviour the strategies must match."""

    kind: ClassVar[str] = "native"

    divisor: int
    word: Word = INT32
    overflow: OverflowMode = OverflowMode.WRAP

    def __post_init__(self):
        if self.divisor == 0:
            raise ZeroDivisionError("divisor must be non-zero")
        self.word.check(self.divisor, "divisor")

    def divide(self, dividend: int) -> int:
        self.word.check(dividend, "dividend")
        return self.word.truncating_div(dividend, self.divisor, self.overflow)


Divisor = Union[ShiftDivisor, MagicDivisor]


def make_divisor(
    divisor: int,
    word: Word = INT32,
    overflow: OverflowMode = OverflowMode.WRAP,
) -> Divisor:
    """Classify ``divisor`` and build its division strategy.

    Raises ZeroDivisionError for a zero divisor and ValueError for one
    outside the word.
    """
    if divisor == 0:
        raise ZeroDivisionError("divisor must be non-zero")
    word.check(divisor, "divisor")

    # abs(lo) wraps to lo; read unsigned that is 2**(bits-1), a power of two.
    magnitude = word.unsigned(word.abs(divisor))
    k = word.highest_bit(magnitude)
    if 1 << k == magnitude:
        return ShiftDivisor(
            shift=k,
            is_negative=divisor < 0,
            word=word,
            overflow=overflow,
        )

    constants = derive_magic(magnitude, word)
    return MagicDivisor(
        magic=constants.magic,
        shift=constants.shift,
        is_negative=divisor < 0,
        magnitude=magnitude,
        word=word,
    )
