"""
Custom exception classes for SAT solving operations.

This module defines specialized exceptions for the failure modes of the
DIMACS reader, the assignment bookkeeping and the solver configuration.
"""


class SATBaseException(Exception):
    """Base exception class for all dpllsat related exceptions."""

    def __init__(self, message: str | None = None):
        self.message = message
        super().__init__(message)


class DimacsParseError(SATBaseException, ValueError):
    """
    Raised when DIMACS CNF text cannot be turned into a formula.

    Attributes:
        line_number: 1-based line of the input where the problem was found,
            or None if it concerns the input as a whole
    """

    def __init__(self, message: str = "Invalid DIMACS input", line_number: int | None = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"{message} (line {line_number})"
        super().__init__(message)


class InvalidProblemLineError(DimacsParseError):
    """Raised when the `p cnf <vars> <clauses>` line is missing or malformed."""

    def __init__(self, message: str = "Illegal problem line", line_number: int | None = None):
        super().__init__(message, line_number)


class InvalidLiteralError(DimacsParseError):
    """Raised when a literal token is not an integer or is out of range."""

    def __init__(self, message: str = "Illegal variable", line_number: int | None = None):
        super().__init__(message, line_number)


class TooManyClausesError(DimacsParseError):
    """Raised when the input holds more clauses than the problem line declares."""

    def __init__(self, declared: int, line_number: int | None = None):
        self.declared = declared
        super().__init__(f"Too many clauses (expected {declared})", line_number)


class TooFewClausesError(DimacsParseError):
    """Raised when the input holds fewer terminated clauses than declared."""

    def __init__(self, declared: int, found: int):
        self.declared = declared
        self.found = found
        super().__init__(f"Too few clauses (expected {declared}, found {found})")


class InvalidClauseError(SATBaseException):
    """
    Raised when an invalid clause is detected (e.g. a literal referring to a
    variable outside the formula).
    """

    def __init__(self, message: str = "Invalid clause detected", clause=None):
        self.clause = clause
        if clause is not None:
            message = f"{message}: {clause}"
        super().__init__(message)


class InconsistentAssignmentError(SATBaseException):
    """
    Raised when an assignment update breaks the one-polarity-per-variable
    rule (assigning an assigned variable, or un-assigning the wrong polarity).
    """

    def __init__(self, message: str = "Inconsistent variable assignment detected", variable=None):
        self.variable = variable
        if variable is not None:
            message = f"{message} for variable {variable}"
        super().__init__(message)


class NoUnassignedVariableError(SATBaseException):
    """Raised when the next branching variable is requested from a complete assignment."""

    def __init__(self, message: str = "No unassigned variable left"):
        super().__init__(message)


class ConfigurationError(SATBaseException):
    """
    Raised when there's a problem with solver configuration.
    """
