from __future__ import annotations

import multiprocessing as mp
from concurrent.futures import ProcessPoolExecutor
from typing import Iterable, Optional

from .machine import Machine
from .solvers import GreedySolver, LightsSolver, RrefSearchSolver
from .solvers.base import InfeasibleError


def make_solver(name: str):
    name = name.lower()
    if name in ("joltage", "rref", "exact"):
        return RrefSearchSolver()
    if name == "lights":
        return LightsSolver()
    if name == "greedy":
        return GreedySolver()
    raise ValueError(f"Unknown solver: {name}")


def _solve_one(job) -> Optional[int]:
    solver_name, machine = job
    solver = make_solver(solver_name)
    if solver.name == "lights":
        return solver.solve(machine.buttons, machine.lights)
    return solver.solve(machine.buttons, machine.targets)


def solve_all(
    machines: Iterable[Machine],
    solver: str = "joltage",
    workers: int | None = None,
    timeout: float | None = None,
) -> list[Optional[int]]:
    """Solve every machine independently; results keep the input order.

    `timeout` bounds the whole batch. Exceeding it raises
    concurrent.futures.TimeoutError instead of dropping machines.
    """
    make_solver(solver)  # fail on unknown names before spawning workers
    jobs = [(solver, m) for m in machines]
    if workers == 1 or len(jobs) <= 1:
        return [_solve_one(j) for j in jobs]

    ctx = mp.get_context("spawn")
    with ProcessPoolExecutor(max_workers=workers, mp_context=ctx) as ex:
        return list(ex.map(_solve_one, jobs, timeout=timeout))


def total_presses(results: Iterable[Optional[int]]) -> int:
    """Sum per-machine minima, refusing to skip an infeasible machine."""
    total = 0
    for idx, r in enumerate(results):
        if r is None:
            raise InfeasibleError(f"Machine {idx} has no solution")
        total += r
    return total
