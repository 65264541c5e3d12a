"""
DPLL solver implementation using the unified solver interface.
"""

import logging
import time
from typing import Any

from dpllsat.assignment import Assignment
from dpllsat.formula import Formula
from dpllsat.search import STRATEGIES, SearchListener, SearchStatistics, solve
from dpllsat.utils.exceptions import ConfigurationError

from .base import SolverBase, SolverResult, SolverStatus
from .config import get_config
from .registry import register_solver

# Set up logging
logger = logging.getLogger(__name__)


@register_solver("dpll")
class DPLLSolver(SolverBase):
    """
    Plain DPLL backtracking search: no propagation, lowest variable first,
    positive polarity before negative.
    """

    def __init__(
        self,
        num_vars: int | None = None,
        listener: SearchListener | None = None,
        **kwargs,
    ):
        """
        Initialize the DPLL solver.

        Args:
            num_vars: Number of variables in the problem; inferred from the
                largest variable in the clauses when None
            listener: Optional receiver of decision/backtrack/result events
            **kwargs: Additional configuration parameters (e.g. strategy)
        """
        config = get_config()

        self.num_vars = num_vars
        self.listener = listener
        self.strategy = None
        self.configure(
            {"strategy": config.get("solver.dpll.strategy", "iterative"), **kwargs}
        )

        self.clauses: list[list[int]] = []
        self.assignment: Assignment | None = None
        self.solve_time = 0.0

        self.stats: dict[str, Any] = {
            "total_clauses": 0,
            "solver_name": "dpll",
            "strategy": self.strategy,
        }

    @classmethod
    def from_formula(cls, formula: Formula, **kwargs) -> "DPLLSolver":
        solver = cls(num_vars=formula.num_vars, **kwargs)
        solver.add_clauses(formula.to_dimacs())
        return solver

    def add_clause(self, clause: list[int]) -> None:
        """
        Add a single clause to the solver.

        Args:
            clause: A list of integers representing literals in the clause.
        """
        self.clauses.append(list(clause))
        self.stats["total_clauses"] = len(self.clauses)

    def add_clauses(self, clauses: list[list[int]]) -> None:
        """
        Add multiple clauses to the solver.

        Args:
            clauses: A list of clauses, where each clause is a list of integers.
        """
        for clause in clauses:
            self.add_clause(clause)

    def _build_formula(self) -> Formula:
        num_vars = self.num_vars
        if num_vars is None:
            num_vars = max((abs(lit) for clause in self.clauses for lit in clause), default=0)
        return Formula.from_dimacs(self.clauses, num_vars)

    def solve(self) -> SolverResult:
        """
        Run the DPLL search over the clauses added so far.

        Returns:
            SolverResult with the satisfying assignment, or the UNSAT verdict
        """
        formula = self._build_formula()
        search_stats = SearchStatistics()

        start_time = time.perf_counter()
        self.assignment = solve(formula, self.strategy, search_stats, self.listener)
        self.solve_time = time.perf_counter() - start_time

        self.stats.update(search_stats.to_dict())
        self.stats["strategy"] = self.strategy
        self.stats["runtime"] = self.solve_time

        status = (
            SolverStatus.SATISFIABLE
            if self.assignment is not None
            else SolverStatus.UNSATISFIABLE
        )
        logger.info(
            f"DPLL finished: {status.value} in {self.solve_time:.4f}s "
            f"({search_stats.decisions} decisions, {search_stats.backtracks} backtracks)"
        )

        return SolverResult(
            status=status,
            assignment=self.assignment,
            runtime=self.solve_time,
            statistics=dict(self.stats),
        )

    def get_model(self) -> list[int] | None:
        """
        Get the satisfying assignment if one exists.

        Returns:
            Assigned literals in ascending variable order (variables the search
            never had to decide are left out), or None
        """
        if self.assignment is None:
            return None
        return self.assignment.to_dimacs()

    def get_statistics(self) -> dict[str, Any]:
        return self.stats

    def configure(self, config: dict[str, Any]) -> None:
        """
        Configure the solver with the given parameters.

        Args:
            config: Dictionary of configuration parameters
        """
        for key, value in config.items():
            if key == "strategy" and value not in STRATEGIES:
                raise ConfigurationError(
                    f"Unknown search strategy '{value}', expected one of {STRATEGIES}"
                )
            if hasattr(self, key):
                setattr(self, key, value)
                logger.debug(f"Set {key}={value} for DPLL solver")
            else:
                logger.warning(f"Unknown configuration parameter: {key}")
