"""
DPLL backtracking search.

Each node of the search tree first checks whether some clause is falsified
(backtrack) or every clause is satisfied (done); otherwise it branches on the
lowest unassigned variable, trying the positive literal before the negative
one. There is no propagation and no variable-ordering heuristic, so the worst
case explores the full binary tree of depth ``num_vars``.

Two engines are provided. ``solve_recursive`` follows the textbook recursion;
``solve_iterative`` keeps the decision frames on an explicit stack so the
search depth is not limited by the interpreter's recursion limit. Both visit
the nodes in the same order and return the same assignment.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Any, Protocol

from dpllsat.assignment import Assignment
from dpllsat.formula import Formula, Literal

logger = logging.getLogger(__name__)

STRATEGY_RECURSIVE = "recursive"
STRATEGY_ITERATIVE = "iterative"
STRATEGIES = (STRATEGY_RECURSIVE, STRATEGY_ITERATIVE)


class SearchListener(Protocol):
    """Receives the events of a running search."""

    def on_decision(self, literal: Literal, depth: int) -> None: ...

    def on_backtrack(self, literal: Literal, depth: int) -> None: ...

    def on_result(self, satisfiable: bool, statistics: dict[str, Any]) -> None: ...


@dataclass
class SearchStatistics:
    """Counters collected during one search."""

    nodes: int = 0
    decisions: int = 0
    backtracks: int = 0
    max_depth: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass
class _Frame:
    literal: Literal
    flipped: bool = False


class _Search:
    """Bookkeeping shared by both engines."""

    def __init__(self, formula, assignment, stats, listener):
        self.formula = formula
        self.assignment = assignment
        self.stats = stats
        self.listener = listener

    def visit(self, depth: int) -> None:
        self.stats.nodes += 1
        if depth > self.stats.max_depth:
            self.stats.max_depth = depth

    def decide(self, literal: Literal, depth: int) -> None:
        self.assignment.assign(literal)
        self.stats.decisions += 1
        if self.listener is not None:
            self.listener.on_decision(literal, depth)

    def backtrack(self, literal: Literal, depth: int) -> None:
        self.assignment.un_assign(literal)
        self.stats.backtracks += 1
        if self.listener is not None:
            self.listener.on_backtrack(literal, depth)

    def falsified(self) -> bool:
        return self.formula.is_falsified(self.assignment)

    def satisfied(self) -> bool:
        return self.formula.is_satisfied(self.assignment)

    def finish(self, satisfiable: bool) -> bool:
        verdict = "SAT" if satisfiable else "UNSAT"
        logger.debug(
            f"Search finished: {verdict} after {self.stats.nodes} nodes, "
            f"{self.stats.backtracks} backtracks"
        )
        if self.listener is not None:
            self.listener.on_result(satisfiable, self.stats.to_dict())
        return satisfiable


def solve_recursive(
    formula: Formula,
    assignment: Assignment,
    stats: SearchStatistics | None = None,
    listener: SearchListener | None = None,
) -> bool:
    """
    Run the DPLL search by direct recursion.

    Args:
        formula: Formula to satisfy
        assignment: Search state, mutated in place; unassigned on failure
        stats: Optional statistics record to update
        listener: Optional receiver of decision/backtrack/result events

    Returns:
        True if the assignment now satisfies every clause, False if the
        formula is unsatisfiable under the starting assignment
    """
    search = _Search(formula, assignment, stats or SearchStatistics(), listener)

    def dpll(depth: int) -> bool:
        search.visit(depth)
        if search.falsified():
            return False
        if search.satisfied():
            return True

        literal = assignment.next_unassigned()
        for branch in (literal, literal.negate()):
            search.decide(branch, depth)
            if dpll(depth + 1):
                return True
            search.backtrack(branch, depth)
        return False

    return search.finish(dpll(0))


def solve_iterative(
    formula: Formula,
    assignment: Assignment,
    stats: SearchStatistics | None = None,
    listener: SearchListener | None = None,
) -> bool:
    """
    Run the DPLL search with an explicit stack of decision frames.

    Same contract and same visit order as solve_recursive().
    """
    search = _Search(formula, assignment, stats or SearchStatistics(), listener)
    frames: list[_Frame] = []

    while True:
        search.visit(len(frames))
        if not search.falsified():
            if search.satisfied():
                return search.finish(True)
            literal = assignment.next_unassigned()
            depth = len(frames)
            frames.append(_Frame(literal))
            search.decide(literal, depth)
            continue

        # Chronological backtracking: undo until a frame still has its
        # negative branch left to try.
        while frames:
            frame = frames[-1]
            depth = len(frames) - 1
            search.backtrack(frame.literal, depth)
            if not frame.flipped:
                frame.flipped = True
                frame.literal = frame.literal.negate()
                search.decide(frame.literal, depth)
                break
            frames.pop()
        else:
            return search.finish(False)


def solve(
    formula: Formula,
    strategy: str = STRATEGY_ITERATIVE,
    stats: SearchStatistics | None = None,
    listener: SearchListener | None = None,
) -> Assignment | None:
    """
    Decide satisfiability of a formula.

    Args:
        formula: Formula to solve
        strategy: "iterative" or "recursive"
        stats: Optional statistics record to update
        listener: Optional receiver of search events

    Returns:
        The satisfying (possibly partial) assignment, or None if unsatisfiable
    """
    if strategy == STRATEGY_RECURSIVE:
        engine = solve_recursive
    elif strategy == STRATEGY_ITERATIVE:
        engine = solve_iterative
    else:
        raise ValueError(f"Unknown search strategy '{strategy}', expected one of {STRATEGIES}")

    logger.debug(
        f"Solving {len(formula)} clauses over {formula.num_vars} variables ({strategy})"
    )
    assignment = Assignment(formula.num_vars)
    if engine(formula, assignment, stats, listener):
        return assignment
    return None
