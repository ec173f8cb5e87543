from __future__ import annotations
from typing import Optional, Protocol, Sequence


class InfeasibleError(Exception):
    """Raised when no non-negative integer press counts reach the targets."""

    pass


class Solver(Protocol):
    name: str

    def solve(
        self, buttons: Sequence[Sequence[int]], targets: Sequence
    ) -> Optional[int]: ...


def solve_or_raise(
    solver: Solver, buttons: Sequence[Sequence[int]], targets: Sequence
) -> int:
    result = solver.solve(buttons, targets)
    if result is None:
        raise InfeasibleError(
            f"{solver.name}: no solution for buttons={list(buttons)} "
            f"targets={list(targets)}"
        )
    return result
