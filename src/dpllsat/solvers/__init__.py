"""
SAT Solver package with unified interface.
"""

from .base import SolverBase, SolverResult, SolverStatus
from .config import SolverConfig, get_config, load_config
from .registry import SolverRegistry, register_solver

# Importing the solver modules registers their classes
from .dpll_solver import DPLLSolver  # noqa: E402  isort: skip
from .brute_force_solver import BruteForceSolver  # noqa: E402  isort: skip

SolverRegistry.set_default("dpll")

__all__ = [
    "SolverBase",
    "SolverResult",
    "SolverStatus",
    "SolverRegistry",
    "register_solver",
    "get_config",
    "load_config",
    "SolverConfig",
    "DPLLSolver",
    "BruteForceSolver",
]
