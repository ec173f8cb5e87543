from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from ..algebra import build_A, gf2_min_weight_solution


def min_light_presses(
    lights: Sequence[bool], buttons: Sequence[Sequence[int]]
) -> Optional[int]:
    """Fewest presses toggling the all-off panel into `lights`.

    Pressing a button twice cancels out, so each button is pressed at most
    once and the answer is a minimum-weight solution over GF(2).
    """
    A = build_A(buttons, len(lights))
    target = np.asarray(lights, dtype=np.uint8)
    solution, is_valid = gf2_min_weight_solution(A, target)
    if not is_valid or solution is None:
        return None
    return int(solution.sum())


class LightsSolver:
    """Indicator-light variant: `targets` is the on/off diagram."""

    name = "lights"

    def solve(
        self, buttons: Sequence[Sequence[int]], targets: Sequence[bool]
    ) -> Optional[int]:
        return min_light_presses(targets, buttons)
