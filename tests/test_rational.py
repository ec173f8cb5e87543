"""Tests for joltage.rational."""
import math
from fractions import Fraction

import numpy as np
import pytest

from joltage.rational import (
    add,
    ceil_div,
    floor_div,
    inv,
    is_zero,
    mul,
    neg,
    rat,
    to_integer,
)


def _random_fractions(seed, count=200):
    rng = np.random.default_rng(seed)
    nums = rng.integers(-50, 51, size=count)
    dens = rng.integers(1, 30, size=count) * rng.choice([-1, 1], size=count)
    return [rat(int(a), int(b)) for a, b in zip(nums, dens)]


def _canonical(q):
    return q.denominator > 0 and math.gcd(abs(q.numerator), q.denominator) == 1


# --- construction ---

def test_rat_reduces_to_lowest_terms():
    q = rat(6, -4)
    assert (q.numerator, q.denominator) == (-3, 2)


def test_zero_is_canonical():
    q = rat(0, -7)
    assert (q.numerator, q.denominator) == (0, 1)


def test_rat_zero_denominator():
    with pytest.raises(ZeroDivisionError):
        rat(1, 0)


# --- arithmetic ---

def test_add_commutes():
    qs = _random_fractions(0)
    for a, b in zip(qs, reversed(qs)):
        assert add(a, b) == add(b, a)


def test_mul_by_inverse_is_one():
    for a in _random_fractions(1):
        if not is_zero(a):
            assert mul(a, inv(a)) == Fraction(1)


def test_results_stay_canonical():
    qs = _random_fractions(2)
    for a, b in zip(qs, qs[1:]):
        assert _canonical(add(a, b))
        assert _canonical(mul(a, b))
        assert _canonical(neg(a))
        if not is_zero(a):
            assert _canonical(inv(a))


def test_inv_zero_raises():
    with pytest.raises(ZeroDivisionError):
        inv(rat(0))


def test_large_intermediates_are_exact():
    q = rat(1)
    for k in range(1, 40):
        q = mul(q, rat(3**k, 2**k + 1))
    for k in range(39, 0, -1):
        q = mul(q, rat(2**k + 1, 3**k))
    assert q == 1


# --- integrality ---

def test_to_integer_integral():
    assert to_integer(rat(12, 4)) == 3
    assert to_integer(rat(-5)) == -5
    assert to_integer(rat(0, 9)) == 0


def test_to_integer_non_integral():
    assert to_integer(rat(7, 2)) is None


def test_floor_and_ceil_div():
    assert floor_div(rat(7), rat(2)) == 3
    assert ceil_div(rat(7), rat(2)) == 4
    assert floor_div(rat(-7), rat(2)) == -4
    assert ceil_div(rat(-7), rat(2)) == -3
    assert ceil_div(rat(-3), rat(-1)) == 3
