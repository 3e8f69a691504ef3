"""
Magic-number derivation for signed division by a constant.

Given the magnitude ``ad`` of a divisor that is not a power of two, find
the multiplier M and shift s such that

    q = (mulhi(M, n) [+ n if M < 0]) >> s,  corrected by the sign of n

equals n / ad truncated toward zero for every n in the word.

This is Hacker's Delight (2nd ed.), Figure 10-1.  The book keeps every
intermediate in an unsigned word because 2**(W-1) overflows the signed
one; Python ints are unbounded, so the same refinement runs directly on
plain integers and only the final multiplier is wrapped into the word.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from word import INT32, Word


@dataclass(frozen=True)
class MagicConstants:
    """The (multiplier, shift) pair derived from a divisor magnitude."""

    magic: int
    shift: int
    iterations: int = field(default=0, compare=False)


def is_power_of_two(magnitude: int) -> bool:
    return magnitude > 0 and magnitude & (magnitude - 1) == 0


def derive_magic(ad: int, word: Word = INT32) -> MagicConstants:
    """Compute the smallest magic multiplier and shift for ``ad``.

    ``ad`` must be in [2, word.hi] and must not be a power of two; those
    divisors take the shift path instead.  The divisor's sign is not an
    input: the strategy applies it after the multiply.
    """
    if not 2 <= ad <= word.hi:
        raise ValueError(f"magnitude {ad} is outside [2, {word.hi}]")
    if is_power_of_two(ad):
        raise ValueError(f"magnitude {ad} is a power of two")

    two = 1 << (word.bits - 1)
    # Largest dividend that needs no correction term.
    anc = two - 1 - two % ad
    q1, r1 = divmod(two, anc)
    q2, r2 = divmod(two, ad)
    p = word.bits - 1
    iterations = 0

    while True:
        iterations += 1
        p += 1
        q1 *= 2
        r1 *= 2
        if r1 >= anc:
            q1 += 1
            r1 -= anc
        q2 *= 2
        r2 *= 2
        if r2 >= ad:
            q2 += 1
            r2 -= ad
        delta = ad - r2
        if not (q1 < delta or (q1 == delta and r1 == 0)):
            break

    return MagicConstants(
        magic=word.wrap(q2 + 1),
        shift=p - word.bits,
        iterations=iterations,
    )
