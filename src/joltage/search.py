from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np

from .rational import add, ceil_div, floor_div, is_zero, mul, neg, rat, to_integer

Bounds = list[Tuple[int, int]]


def derive_free_bounds(
    R: np.ndarray,
    pivcols: Sequence[int],
    frees: Sequence[int],
    buttons: Sequence[Sequence[int]],
    targets: Sequence[int],
) -> Optional[Bounds]:
    """Integer [lower, upper] press range for every free column.

    Returns None as soon as one range is empty, which makes the whole
    system infeasible.

    A pivot row reads x_p = rhs - sum_g coef_g * x_g over the free columns.
    When every other coefficient in the row is non-negative, the others can
    only lower x_p, so x_p >= 0 with them at zero is a necessary condition
    on x_f alone:
        coef > 0  =>  x_f <= floor(rhs / coef)
        coef < 0  =>  x_f >= ceil(rhs / coef)
    Rows with mixed signs give no per-variable bound and are left to the
    search.
    """
    n = R.shape[1] - 1
    bounds: Bounds = []
    for f in frees:
        # a press adds 1 to each counter it touches
        touched = [targets[j] for j in set(buttons[f])]
        upper = min(touched) if touched else 0
        lower = 0

        for ri in range(len(pivcols)):
            coef = R[ri, f]
            if is_zero(coef):
                continue
            if any(R[ri, g] < 0 for g in frees if g != f):
                continue
            rhs = R[ri, n]
            if coef > 0:
                upper = min(upper, floor_div(rhs, coef))
            else:
                lower = max(lower, ceil_div(rhs, coef))

        if upper < lower:
            return None
        bounds.append((lower, upper))
    return bounds


def pivot_values(
    R: np.ndarray,
    pivcols: Sequence[int],
    frees: Sequence[int],
    free_vals: Sequence[int],
) -> Optional[list[int]]:
    """Back-substitute free values into the pivot rows.

    Returns the pivot press counts in row order, or None if any of them is
    non-integral or negative.
    """
    n = R.shape[1] - 1
    values: list[int] = []
    for ri in range(len(pivcols)):
        acc = R[ri, n]
        for f, v in zip(frees, free_vals):
            coef = R[ri, f]
            if not is_zero(coef):
                acc = add(acc, neg(mul(coef, rat(v))))
        value = to_integer(acc)
        if value is None or value < 0:
            return None
        values.append(value)
    return values


def search_min_total(
    R: np.ndarray,
    pivcols: Sequence[int],
    frees: Sequence[int],
    bounds: Bounds,
) -> Optional[Tuple[int, list[int]]]:
    """Enumerate free assignments within bounds, keep the cheapest valid one.

    Returns (total_presses, presses_per_button) or None if no assignment
    yields non-negative integral pivots.
    """
    assert len(bounds) == len(frees), "one bound per free column"
    n = R.shape[1] - 1
    k = len(frees)

    # cheapest possible contribution of free columns k.. (all at lower bound)
    rest_min = [0] * (k + 1)
    for i in range(k - 1, -1, -1):
        rest_min[i] = rest_min[i + 1] + bounds[i][0]

    free_vals = [0] * k
    best_total: Optional[int] = None
    best_presses: Optional[list[int]] = None

    def visit(i: int, partial: int) -> None:
        nonlocal best_total, best_presses
        if i == k:
            pivots = pivot_values(R, pivcols, frees, free_vals)
            if pivots is None:
                return
            total = partial + sum(pivots)
            if best_total is None or total < best_total:
                presses = [0] * n
                for pc, v in zip(pivcols, pivots):
                    presses[pc] = v
                for f, v in zip(frees, free_vals):
                    presses[f] = v
                best_total, best_presses = total, presses
            return

        lo, hi = bounds[i]
        for v in range(lo, hi + 1):
            # values are ascending, so once this cannot beat the best
            # neither can anything after it
            if best_total is not None and partial + v + rest_min[i + 1] >= best_total:
                break
            free_vals[i] = v
            visit(i + 1, partial + v)

    visit(0, 0)
    if best_total is None or best_presses is None:
        return None
    return best_total, best_presses
