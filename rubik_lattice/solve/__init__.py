# rubik_lattice/solve/__init__.py
from rubik_lattice.solve.reversal_solver import (
    HistoryReversalSolver,
    apply_solution,
    get_solver,
)
from rubik_lattice.solve.solution import Solution, SolutionPhase, Solver

__all__ = [
    "HistoryReversalSolver",
    "Solution",
    "SolutionPhase",
    "Solver",
    "apply_solution",
    "get_solver",
]
