"""Tests for joltage.search."""
from fractions import Fraction

import numpy as np

from joltage.algebra import build_augmented, free_columns, rref_augmented
from joltage.search import derive_free_bounds, pivot_values, search_min_total

EXAMPLE_BUTTONS = [[3], [1, 3], [2], [2, 3], [0, 2], [0, 1]]
EXAMPLE_TARGETS = [3, 5, 4, 7]


def _matrix(rows):
    return np.array([[Fraction(x) for x in row] for row in rows], dtype=object)


def _reduced_example():
    R, pivcols = rref_augmented(build_augmented(EXAMPLE_BUTTONS, EXAMPLE_TARGETS))
    return R, pivcols, free_columns(pivcols, len(EXAMPLE_BUTTONS))


# --- bounds ---

def test_bounds_on_example():
    R, pivcols, frees = _reduced_example()
    assert frees == [3, 5]
    bounds = derive_free_bounds(R, pivcols, frees, EXAMPLE_BUTTONS, EXAMPLE_TARGETS)
    # button 3 is capped by its counters (4, 7), button 5 by rows 1 and 3
    assert bounds == [(0, 4), (0, 3)]


def test_positive_coefficient_tightens_upper():
    R = _matrix([[1, 2, 7]])
    assert derive_free_bounds(R, [0], [1], [[0], [0]], [9]) == [(0, 3)]


def test_negative_coefficient_tightens_lower():
    R = _matrix([[1, -2, -5]])
    assert derive_free_bounds(R, [0], [1], [[0], [0]], [9]) == [(3, 9)]


def test_mixed_sign_row_does_not_cap():
    # x0 = 2 - x1 + x2 admits x1 = 5, x2 = 3
    R = _matrix([[1, 1, -1, 2]])
    bounds = derive_free_bounds(R, [0], [1, 2], [[0], [0], [0]], [9])
    assert bounds == [(0, 9), (0, 9)]


def test_button_without_counters_is_pinned_to_zero():
    R = _matrix([[1, 0, 4]])
    assert derive_free_bounds(R, [0], [1], [[0], []], [4]) == [(0, 0)]


def test_empty_range_is_infeasible():
    R = _matrix([[1, -1, -3]])
    assert derive_free_bounds(R, [0], [1], [[0], [0]], [2]) is None


# --- back-substitution ---

def test_pivot_values_all_free_zero():
    R, pivcols, frees = _reduced_example()
    assert pivot_values(R, pivcols, frees, [0, 0]) == [2, 5, 1, 3]


def test_pivot_values_negative_rejected():
    R, pivcols, frees = _reduced_example()
    assert pivot_values(R, pivcols, frees, [3, 0]) is None


def test_pivot_values_non_integral_rejected():
    R = _matrix([[1, Fraction(1, 2), 1]])
    assert pivot_values(R, [0], [1], [1]) is None
    assert pivot_values(R, [0], [1], [2]) == [0]


# --- search ---

def test_search_example_minimum():
    R, pivcols, frees = _reduced_example()
    bounds = derive_free_bounds(R, pivcols, frees, EXAMPLE_BUTTONS, EXAMPLE_TARGETS)
    total, presses = search_min_total(R, pivcols, frees, bounds)
    assert total == 10
    assert sum(presses) == 10
    assert len(presses) == len(EXAMPLE_BUTTONS)


def test_search_without_free_columns():
    R = _matrix([[1, 0, 2], [0, 1, 3]])
    assert search_min_total(R, [0, 1], [], []) == (5, [2, 3])


def test_search_without_free_columns_negative_pivot():
    R = _matrix([[1, 0, 2], [0, 1, -1]])
    assert search_min_total(R, [0, 1], [], []) is None


def test_search_finds_nothing_in_range():
    # x0 = 1/2 - x1 / 2 is integral only for odd x1
    R = _matrix([[1, Fraction(1, 2), Fraction(1, 2)]])
    assert search_min_total(R, [0], [1], [(0, 0)]) is None
    assert search_min_total(R, [0], [1], [(0, 1)]) == (1, [0, 1])
