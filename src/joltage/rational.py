from __future__ import annotations

from fractions import Fraction
from typing import Optional


def rat(num: int, den: int = 1) -> Fraction:
    """Exact rational num/den in lowest terms with a positive denominator."""
    return Fraction(num, den)


def add(a: Fraction, b: Fraction) -> Fraction:
    return a + b


def mul(a: Fraction, b: Fraction) -> Fraction:
    return a * b


def neg(a: Fraction) -> Fraction:
    return -a


def inv(a: Fraction) -> Fraction:
    if a == 0:
        raise ZeroDivisionError("inverse of zero")
    return 1 / a


def is_zero(a: Fraction) -> bool:
    return a.numerator == 0


def to_integer(a: Fraction) -> Optional[int]:
    """Return a as an int, or None if it is not integral."""
    if a.denominator != 1:
        return None
    return a.numerator


def floor_div(a: Fraction, b: Fraction) -> int:
    # Fraction // Fraction floors towards -inf
    return int(Fraction(a) // Fraction(b))


def ceil_div(a: Fraction, b: Fraction) -> int:
    return -int(-Fraction(a) // Fraction(b))
