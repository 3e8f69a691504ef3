"""
Property-based tests using Hypothesis.

These extend the factory's built-in verification with Hypothesis's
shrinking and strategy machinery across the whole 32-bit and 64-bit
divisor range, where exhaustive checking is infeasible.
"""

from hypothesis import given, settings, assume
from hypothesis.strategies import integers, sampled_from

from divisor import MagicDivisor, ShiftDivisor, make_divisor
from magic import is_power_of_two
from word import INT32, INT64, Word


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def word_ints(word: Word):
    """Hypothesis strategy that generates ints within a word."""
    return integers(min_value=word.lo, max_value=word.hi)


def nonzero_divisors(word: Word):
    return word_ints(word).filter(lambda d: d != 0)


def powers_of_two(word: Word):
    return integers(min_value=0, max_value=word.bits - 2).flatmap(
        lambda k: sampled_from([1 << k, -(1 << k)])
    )


# ---------------------------------------------------------------------------
# Equivalence with native division
# ---------------------------------------------------------------------------

class TestEquivalence32:
    word = INT32

    @given(d=nonzero_divisors(INT32), n=word_ints(INT32))
    @settings(max_examples=2000)
    def test_matches_native(self, d, n):
        assume(not self.word.div_overflows(n, d))
        assert make_divisor(d).divide(n) == self.word.truncating_div(n, d)

    @given(d=powers_of_two(INT32), n=word_ints(INT32))
    @settings(max_examples=500)
    def test_power_of_two_matches_native(self, d, n):
        assume(not self.word.div_overflows(n, d))
        strategy = make_divisor(d)
        assert isinstance(strategy, ShiftDivisor)
        assert strategy.divide(n) == self.word.truncating_div(n, d)

    @given(d=nonzero_divisors(INT32), n=word_ints(INT32))
    def test_small_divisors_large_dividends(self, d, n):
        d = d % 1000 + 1
        assert make_divisor(d).divide(n) == self.word.truncating_div(n, d)
        assert make_divisor(-d).divide(n) == self.word.truncating_div(n, -d)


class TestEquivalence64:
    word = INT64

    @given(d=nonzero_divisors(INT64), n=word_ints(INT64))
    @settings(max_examples=1000)
    def test_matches_native(self, d, n):
        assume(not self.word.div_overflows(n, d))
        strategy = make_divisor(d, self.word)
        assert strategy.divide(n) == self.word.truncating_div(n, d)


# ---------------------------------------------------------------------------
# Structural properties
# ---------------------------------------------------------------------------

class TestStructure:
    @given(d=nonzero_divisors(INT32))
    def test_routing_follows_magnitude(self, d):
        strategy = make_divisor(d)
        if is_power_of_two(abs(d)):
            assert isinstance(strategy, ShiftDivisor)
        else:
            assert isinstance(strategy, MagicDivisor)

    @given(d=nonzero_divisors(INT32))
    def test_divisor_round_trips(self, d):
        assert make_divisor(d).divisor == d

    @given(d=nonzero_divisors(INT32))
    def test_deterministic(self, d):
        assert make_divisor(d) == make_divisor(d)

    @given(n=word_ints(INT32))
    def test_identity(self, n):
        assert make_divisor(1).divide(n) == n

    @given(d=nonzero_divisors(INT32))
    def test_zero_numerator(self, d):
        assert make_divisor(d).divide(0) == 0

    @given(d=nonzero_divisors(INT32), n=word_ints(INT32))
    def test_sign_of_divisor(self, d, n):
        """n / -d == -(n / d) whenever both sides are representable."""
        assume(d != INT32.lo)
        assume(not INT32.div_overflows(n, d) and not INT32.div_overflows(n, -d))
        assert make_divisor(-d).divide(n) == -make_divisor(d).divide(n)

    @given(d=nonzero_divisors(INT32), n=word_ints(INT32))
    def test_quotient_magnitude_never_exceeds_dividend(self, d, n):
        assume(not INT32.div_overflows(n, d))
        assert abs(make_divisor(d).divide(n)) <= abs(n)
