"""Shared fixtures for divisor tests."""

from __future__ import annotations

import random

import pytest

from models import DivisorCreate, OverflowPolicy
from store import DivisorStore
from word import INT32


# Divisors whose magnitude is a power of two, including both extremes.
POWER_OF_TWO_DIVISORS = [1, -1, 2, -2, 4, -4, 2**30, -(2**30), INT32.lo]

# Divisors that need a magic multiplier.
MAGIC_DIVISORS = [3, -3, 5, 6, 7, -7, 100, -100, 123, -123, INT32.hi, INT32.lo + 1]

EDGE_DIVIDENDS = [0, 1, -1, 17, -17, 100, -100, INT32.lo, INT32.lo + 1, INT32.hi, INT32.hi - 1]


@pytest.fixture
def random_dividends() -> list[int]:
    """10,000 reproducible pseudo-random 32-bit dividends."""
    rng = random.Random(20240601)
    return [rng.randint(INT32.lo, INT32.hi) for _ in range(10_000)]


@pytest.fixture
def store() -> DivisorStore:
    return DivisorStore()


@pytest.fixture
def seven() -> DivisorCreate:
    return DivisorCreate(divisor=7)


@pytest.fixture
def minus_one_checked() -> DivisorCreate:
    """-1 with the overflowing quotient reported instead of wrapped."""
    return DivisorCreate(divisor=-1, overflow=OverflowPolicy.ERROR)
