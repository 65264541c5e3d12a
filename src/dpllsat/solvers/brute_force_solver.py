"""
Exhaustive truth-table solver.

Evaluates every total assignment at once with numpy. Exponential in memory
as well as time, so it is only meant for small instances, where it serves as
a reference for checking the DPLL search.
"""

import logging
import time
from typing import Any

import numpy as np

from dpllsat.assignment import Assignment
from dpllsat.formula import Formula, Literal
from dpllsat.utils.exceptions import ConfigurationError

from .base import SolverBase, SolverResult, SolverStatus
from .config import get_config
from .registry import register_solver

logger = logging.getLogger(__name__)


def truth_table(num_vars: int) -> np.ndarray:
    """
    All total assignments over ``num_vars`` variables.

    Row ``r`` holds the values of variables 1..num_vars (columns 0..num_vars-1).
    Variable 1 changes slowest and every variable is True before it is False,
    so row 0 is all True and the last row all False.
    """
    rows = np.arange(2**num_vars, dtype=np.int64)[:, None]
    shifts = np.arange(num_vars - 1, -1, -1, dtype=np.int64)
    return ((rows >> shifts) & 1) == 0


def truth_table_row(num_vars: int, index: int) -> np.ndarray:
    """Row ``index`` of truth_table(num_vars), computed without building the table."""
    shifts = np.arange(num_vars - 1, -1, -1, dtype=np.int64)
    return ((np.int64(index) >> shifts) & 1) == 0


def satisfying_rows(formula: Formula) -> np.ndarray:
    """Boolean mask over truth_table(formula.num_vars) marking the models."""
    table = truth_table(formula.num_vars)
    satisfied = np.ones(len(table), dtype=bool)
    for clause in formula:
        clause_sat = np.zeros(len(table), dtype=bool)
        for lit in clause:
            column = table[:, lit.variable - 1]
            clause_sat |= ~column if lit.negated else column
        satisfied &= clause_sat
    return satisfied


@register_solver("bruteforce")
class BruteForceSolver(SolverBase):
    """
    Decides satisfiability by evaluating the whole truth table.
    """

    def __init__(self, num_vars: int | None = None, **kwargs):
        config = get_config()

        self.num_vars = num_vars
        self.max_vars = config.get("solver.bruteforce.max_vars", 20)
        self.configure(kwargs)

        self.clauses: list[list[int]] = []
        self.assignment: Assignment | None = None
        self.stats: dict[str, Any] = {
            "total_clauses": 0,
            "solver_name": "bruteforce",
        }

    def add_clause(self, clause: list[int]) -> None:
        self.clauses.append(list(clause))
        self.stats["total_clauses"] = len(self.clauses)

    def add_clauses(self, clauses: list[list[int]]) -> None:
        for clause in clauses:
            self.add_clause(clause)

    def solve(self) -> SolverResult:
        """
        Evaluate every total assignment.

        Returns:
            SolverResult holding the first model in truth_table() order, or the
            UNSAT verdict
        """
        num_vars = self.num_vars
        if num_vars is None:
            num_vars = max((abs(lit) for clause in self.clauses for lit in clause), default=0)
        if num_vars > self.max_vars:
            raise ConfigurationError(
                f"Brute force limited to {self.max_vars} variables, got {num_vars}"
            )
        formula = Formula.from_dimacs(self.clauses, num_vars)

        start_time = time.perf_counter()
        models = satisfying_rows(formula)
        runtime = time.perf_counter() - start_time

        self.stats["candidates"] = len(models)
        self.stats["models"] = np.count_nonzero(models)
        self.stats["runtime"] = runtime

        indices = np.flatnonzero(models)
        if len(indices) == 0:
            self.assignment = None
            return SolverResult(
                status=SolverStatus.UNSATISFIABLE,
                runtime=runtime,
                statistics=dict(self.stats),
            )

        row = truth_table_row(num_vars, int(indices[0]))
        self.assignment = Assignment(num_vars)
        for variable, value in enumerate(row, start=1):
            self.assignment.assign(Literal(variable, not bool(value)))
        logger.debug(f"Brute force found {self.stats['models']} models")

        return SolverResult(
            status=SolverStatus.SATISFIABLE,
            assignment=self.assignment,
            runtime=runtime,
            statistics=dict(self.stats),
        )

    def get_model(self) -> list[int] | None:
        if self.assignment is None:
            return None
        return self.assignment.to_dimacs()

    def get_statistics(self) -> dict[str, Any]:
        return self.stats

    def configure(self, config: dict[str, Any]) -> None:
        for key, value in config.items():
            if hasattr(self, key):
                setattr(self, key, value)
            else:
                logger.warning(f"Unknown configuration parameter: {key}")
