"""
Partial truth assignment used as the search state of the DPLL engine.
"""

from dpllsat.formula import Literal
from dpllsat.utils.exceptions import InconsistentAssignmentError, NoUnassignedVariableError

UNASSIGNED = "UNASSIGNED"


class Assignment:
    """
    A partial assignment of polarities to variables 1..num_vars.

    Slot ``i`` of the internal list holds None when variable ``i`` is
    unassigned, otherwise the ``negated`` flag of the literal assigned to it.
    Slot 0 is unused. Every variable below ``_lowest_free`` is assigned and
    ``_lowest_free`` itself is not (or exceeds num_vars), so the next branching
    variable is found without a scan while the search assigns and un-assigns
    in stack order.
    """

    def __init__(self, num_vars: int):
        self.num_vars = num_vars
        self._polarity: list[bool | None] = [None] * (num_vars + 1)
        self.num_assigned = 0
        self._lowest_free = 1

    def assign(self, literal: Literal) -> None:
        """
        Record the literal's polarity for its variable.

        Args:
            literal: Literal to make true; its variable must be unassigned
        """
        if self._polarity[literal.variable] is not None:
            raise InconsistentAssignmentError(
                "Variable is already assigned", variable=literal.variable
            )
        self._polarity[literal.variable] = literal.negated
        self.num_assigned += 1
        if literal.variable == self._lowest_free:
            self._advance_lowest_free()

    def un_assign(self, literal: Literal) -> None:
        """
        Clear the recorded polarity of the literal's variable.

        Args:
            literal: Literal previously passed to assign()
        """
        if self._polarity[literal.variable] != literal.negated:
            raise InconsistentAssignmentError(
                f"Literal {literal} is not assigned", variable=literal.variable
            )
        self._polarity[literal.variable] = None
        self.num_assigned -= 1
        if literal.variable < self._lowest_free:
            self._lowest_free = literal.variable

    def _advance_lowest_free(self) -> None:
        while (
            self._lowest_free <= self.num_vars
            and self._polarity[self._lowest_free] is not None
        ):
            self._lowest_free += 1

    def is_assigned(self, literal: Literal) -> bool:
        """True iff the variable is assigned with exactly this literal's polarity."""
        return self._polarity[literal.variable] == literal.negated

    def next_unassigned(self) -> Literal:
        """
        Return the lowest unassigned variable as a non-negated literal.

        Raises:
            NoUnassignedVariableError: if every variable is assigned
        """
        if self._lowest_free > self.num_vars:
            raise NoUnassignedVariableError()
        return Literal(self._lowest_free, False)

    def value(self, variable: int) -> bool | None:
        """Truth value of a variable, or None if it is unassigned."""
        negated = self._polarity[variable]
        return None if negated is None else not negated

    def is_complete(self) -> bool:
        return self.num_assigned == self.num_vars

    def to_dimacs(self) -> list[int]:
        """Assigned literals as signed integers, in ascending variable order."""
        return [
            -variable if negated else variable
            for variable, negated in enumerate(self._polarity)
            if variable > 0 and negated is not None
        ]

    def to_dict(self) -> dict[int, bool]:
        return {abs(lit): lit > 0 for lit in self.to_dimacs()}

    def copy(self) -> "Assignment":
        other = Assignment(self.num_vars)
        other._polarity = list(self._polarity)
        other.num_assigned = self.num_assigned
        other._lowest_free = self._lowest_free
        return other

    def __eq__(self, other):
        if not isinstance(other, Assignment):
            return NotImplemented
        return self._polarity == other._polarity

    def __str__(self):
        tokens = []
        for variable in range(1, self.num_vars + 1):
            negated = self._polarity[variable]
            if negated is None:
                tokens.append(UNASSIGNED)
            else:
                tokens.append(f"-{variable}" if negated else str(variable))
        tokens.append("0")
        return " ".join(tokens)

    def __repr__(self):
        return f"Assignment({self.to_dimacs()}, num_vars={self.num_vars})"
