"""
Base interface for all SAT solvers in the package.
Defines the standardized solver interface that all solver implementations must follow.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

from dpllsat.assignment import Assignment

UNSATISFIABLE_OUTPUT = "UNSATISFIABLE"


class SolverStatus(Enum):
    """Enum representing the status of a solver run."""

    UNKNOWN = "unknown"
    SATISFIABLE = "satisfiable"
    UNSATISFIABLE = "unsatisfiable"


class SolverResult:
    """
    Standardized result object returned by all solvers.
    """

    def __init__(
        self,
        status: SolverStatus = SolverStatus.UNKNOWN,
        assignment: Assignment | None = None,
        runtime: float = 0.0,
        statistics: dict[str, Any] | None = None,
        error_message: str | None = None,
    ):
        self.status = status
        self.assignment = assignment
        self.runtime = runtime
        self.statistics = statistics or {}
        self.error_message = error_message

    @property
    def is_sat(self) -> bool:
        """Returns True if the problem is satisfiable."""
        return self.status == SolverStatus.SATISFIABLE

    @property
    def is_unsat(self) -> bool:
        """Returns True if the problem is unsatisfiable."""
        return self.status == SolverStatus.UNSATISFIABLE

    @property
    def solution(self) -> list[int] | None:
        """Assigned literals as signed integers, or None without a model."""
        if self.assignment is None:
            return None
        return self.assignment.to_dimacs()

    def to_output(self) -> str:
        """
        Render the verdict the way the command line prints it.

        Returns:
            The assignment line (ids, negated ids or UNASSIGNED, then 0) when
            satisfiable, otherwise "UNSATISFIABLE"
        """
        if self.is_sat:
            return str(self.assignment)
        if self.is_unsat:
            return UNSATISFIABLE_OUTPUT
        return self.status.value.upper()

    def __str__(self) -> str:
        """String representation of the result."""
        status_str = str(self.status.value).upper()
        if self.status == SolverStatus.SATISFIABLE:
            assigned = self.assignment.num_assigned
            return f"SAT Result: {status_str} ({assigned}/{self.assignment.num_vars} variables assigned, {self.runtime:.4f}s)"
        elif self.status == SolverStatus.UNSATISFIABLE:
            return f"SAT Result: {status_str} (proved in {self.runtime:.4f}s)"
        else:
            return "SAT Result: UNKNOWN"


class SolverBase(ABC):
    """
    Abstract base class for SAT solver implementations.
    All solver implementations must inherit from this class.
    """

    @abstractmethod
    def add_clause(self, clause: list[int]) -> None:
        """
        Add a single clause to the solver.

        Args:
            clause: A list of integers representing literals in the clause.
                   Positive integers represent positive literals, negative integers
                   represent negative literals.
        """

    @abstractmethod
    def add_clauses(self, clauses: list[list[int]]) -> None:
        """
        Add multiple clauses to the solver.

        Args:
            clauses: A list of clauses, where each clause is a list of integers.
        """

    @abstractmethod
    def solve(self) -> SolverResult:
        """
        Decide the SAT instance.

        Returns:
            SolverResult containing the verdict and other information
        """

    @abstractmethod
    def get_model(self) -> list[int] | None:
        """
        Get the satisfying assignment if one exists.

        Returns:
            List of literals representing the satisfying assignment,
            or None if problem is unsatisfiable
        """

    @abstractmethod
    def get_statistics(self) -> dict[str, Any]:
        """
        Get solver statistics.

        Returns:
            Dictionary of statistics
        """

    @abstractmethod
    def configure(self, config: dict[str, Any]) -> None:
        """
        Configure the solver with the given parameters.

        Args:
            config: Dictionary of configuration parameters
        """
