"""
dpllsat: a DPLL satisfiability solver for CNF formulas.
"""

from dpllsat.assignment import Assignment
from dpllsat.formula import Clause, Formula, Literal, negate
from dpllsat.search import SearchStatistics, solve, solve_iterative, solve_recursive
from dpllsat.solvers import DPLLSolver, SolverRegistry, SolverResult, SolverStatus

__version__ = "0.1.0"

__all__ = [
    "Assignment",
    "Clause",
    "Formula",
    "Literal",
    "negate",
    "SearchStatistics",
    "solve",
    "solve_iterative",
    "solve_recursive",
    "DPLLSolver",
    "SolverRegistry",
    "SolverResult",
    "SolverStatus",
]
