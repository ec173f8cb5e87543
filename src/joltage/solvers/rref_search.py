from __future__ import annotations

from typing import Optional, Sequence, Tuple

from ..algebra import build_augmented, free_columns, is_inconsistent, rref_augmented
from ..search import derive_free_bounds, search_min_total


def min_press_solution(
    buttons: Sequence[Sequence[int]], targets: Sequence[int]
) -> Tuple[Optional[list[int]], bool]:
    """Return one minimum-total press assignment (per button) if any exists."""
    M = build_augmented(buttons, targets)
    n = len(buttons)
    R, pivcols = rref_augmented(M)
    if is_inconsistent(R, n):
        return None, False

    frees = free_columns(pivcols, n)
    bounds = derive_free_bounds(R, pivcols, frees, buttons, targets)
    if bounds is None:
        return None, False

    found = search_min_total(R, pivcols, frees, bounds)
    if found is None:
        return None, False
    _, presses = found
    return presses, True


def solve(
    buttons: Sequence[Sequence[int]], targets: Sequence[int]
) -> Optional[int]:
    """Minimum total presses reaching every target exactly, None if infeasible."""
    presses, ok = min_press_solution(buttons, targets)
    if not ok or presses is None:
        return None
    return sum(presses)


class RrefSearchSolver:
    """Exact solver: rational RREF, bounded search over the free buttons."""

    name = "joltage"

    def solve(
        self, buttons: Sequence[Sequence[int]], targets: Sequence[int]
    ) -> Optional[int]:
        return solve(buttons, targets)
