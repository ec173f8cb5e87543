from __future__ import annotations

from typing import Optional, Sequence


def presses_used(presses: Sequence[int]) -> int:
    return int(sum(presses))


def is_valid_solution(
    buttons: Sequence[Sequence[int]],
    targets: Sequence[int],
    presses: Sequence[int],
) -> bool:
    # every counter must land exactly on its target
    if len(presses) != len(buttons) or any(p < 0 for p in presses):
        return False
    counters = [0] * len(targets)
    for button, p in zip(buttons, presses):
        for j in set(button):
            counters[j] += p
    return counters == list(targets)


def approximation_gap(exact: Optional[int], approx: Optional[int]):
    # returns approx - exact, or None when either side found no solution
    if exact is None or approx is None:
        return None
    return approx - exact
