from joltage.solvers.base import InfeasibleError, Solver, solve_or_raise
from joltage.solvers.greedy import GreedySolver
from joltage.solvers.lights import LightsSolver, min_light_presses
from joltage.solvers.rref_search import (
    RrefSearchSolver,
    min_press_solution,
    solve,
)
