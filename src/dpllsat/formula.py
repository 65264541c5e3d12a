"""
Propositional CNF data model: literals, clauses and formulas.

Variables are identified by 1-based integers, as in DIMACS.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from dpllsat.utils.exceptions import InvalidClauseError

if TYPE_CHECKING:
    from dpllsat.assignment import Assignment


# frozen to be hashable
@dataclass(frozen=True)
class Literal:
    """A variable id together with whether that variable is negated."""

    variable: int
    negated: bool = False

    @classmethod
    def from_dimacs(cls, value: int) -> "Literal":
        """
        Build a literal from a signed DIMACS integer.

        Args:
            value: Nonzero integer; magnitude is the variable, sign the polarity

        Returns:
            The corresponding literal
        """
        if value == 0:
            raise ValueError("0 is a clause terminator, not a literal")
        return cls(abs(value), value < 0)

    def to_dimacs(self) -> int:
        return -self.variable if self.negated else self.variable

    def negate(self) -> "Literal":
        """
        Return the complementary literal.
        """
        return Literal(self.variable, not self.negated)

    def __str__(self):
        return str(self.to_dimacs())


def negate(literal: Literal) -> Literal:
    return literal.negate()


class Clause:
    """
    An ordered disjunction of literals.

    An empty clause can never be satisfied and is falsified by every assignment.
    """

    __slots__ = ("literals",)

    def __init__(self, literals: Iterable[Literal] = ()):
        self.literals = tuple(literals)

    @classmethod
    def from_dimacs(cls, values: Iterable[int]) -> "Clause":
        return cls(Literal.from_dimacs(v) for v in values)

    def is_satisfied(self, assignment: "Assignment") -> bool:
        """True iff at least one literal is assigned with its own polarity."""
        return any(assignment.is_assigned(lit) for lit in self.literals)

    def is_falsified(self, assignment: "Assignment") -> bool:
        """True iff the complement of every literal is assigned."""
        return all(assignment.is_assigned(lit.negate()) for lit in self.literals)

    def variables(self) -> set[int]:
        return {lit.variable for lit in self.literals}

    def to_dimacs(self) -> list[int]:
        return [lit.to_dimacs() for lit in self.literals]

    def __iter__(self) -> Iterator[Literal]:
        return iter(self.literals)

    def __len__(self):
        return len(self.literals)

    def __eq__(self, other):
        if not isinstance(other, Clause):
            return NotImplemented
        return self.literals == other.literals

    def __hash__(self):
        return hash(self.literals)

    def __repr__(self):
        return f"Clause({self.to_dimacs()})"


class Formula:
    """
    A CNF formula: a fixed collection of clauses over variables 1..num_vars.
    """

    def __init__(self, clauses: Iterable[Clause], num_vars: int):
        if num_vars < 0:
            raise ValueError(f"num_vars must be non-negative, got {num_vars}")
        self.clauses = tuple(clauses)
        self.num_vars = num_vars

        for clause in self.clauses:
            for lit in clause:
                if not 1 <= lit.variable <= num_vars:
                    raise InvalidClauseError(
                        f"Variable {lit.variable} outside 1..{num_vars}",
                        clause.to_dimacs(),
                    )

    @classmethod
    def from_dimacs(cls, clauses: Iterable[Iterable[int]], num_vars: int) -> "Formula":
        """
        Build a formula from clauses given as lists of signed integers.

        Args:
            clauses: Clauses, each a list of nonzero DIMACS literals
            num_vars: Number of variables in the formula

        Returns:
            The formula
        """
        return cls((Clause.from_dimacs(c) for c in clauses), num_vars)

    def is_satisfied(self, assignment: "Assignment") -> bool:
        return all(clause.is_satisfied(assignment) for clause in self.clauses)

    def is_falsified(self, assignment: "Assignment") -> bool:
        return any(clause.is_falsified(assignment) for clause in self.clauses)

    def to_dimacs(self) -> list[list[int]]:
        return [clause.to_dimacs() for clause in self.clauses]

    def __iter__(self) -> Iterator[Clause]:
        return iter(self.clauses)

    def __len__(self):
        return len(self.clauses)

    def __eq__(self, other):
        if not isinstance(other, Formula):
            return NotImplemented
        return self.num_vars == other.num_vars and self.clauses == other.clauses

    def __repr__(self):
        return f"Formula(num_vars={self.num_vars}, clauses={self.to_dimacs()})"
