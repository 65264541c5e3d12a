"""
CNF file handling utilities.

This module provides functions for loading, parsing and writing CNF formulas
in DIMACS format, and for checking assignments against raw clause lists.
"""

import os
from typing import Any, TextIO

from dpllsat.formula import Clause, Formula, Literal
from dpllsat.utils.exceptions import (
    InvalidLiteralError,
    InvalidProblemLineError,
    TooFewClausesError,
    TooManyClausesError,
)


def load_cnf_file(file_path: str) -> tuple[Formula, dict[str, Any]]:
    """
    Load a CNF formula from a DIMACS file.

    Args:
        file_path: Path to the CNF file in DIMACS format

    Returns:
        Tuple of (formula, metadata), see parse_dimacs()

    Raises:
        FileNotFoundError: If the file doesn't exist
        DimacsParseError: If the file format is invalid
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"CNF file not found: {file_path}")

    with open(file_path) as f:
        return parse_dimacs(f)


def _parse_problem_line(line: str, line_number: int) -> tuple[int, int]:
    parts = line.split()
    if len(parts) != 4 or parts[0] != "p":
        raise InvalidProblemLineError(f"Illegal problem line: {line!r}", line_number)
    if parts[1] != "cnf":
        raise InvalidProblemLineError(f"Unsupported format '{parts[1]}'", line_number)

    try:
        num_vars = int(parts[2])
    except ValueError:
        raise InvalidProblemLineError(
            f"2nd argument in problem line not valid: {parts[2]!r}", line_number
        ) from None
    try:
        num_clauses = int(parts[3])
    except ValueError:
        raise InvalidProblemLineError(
            f"3rd argument in problem line not valid: {parts[3]!r}", line_number
        ) from None

    if num_vars <= 0 or num_clauses <= 0:
        raise InvalidProblemLineError(
            "Variable and clause counts must be positive", line_number
        )
    return num_vars, num_clauses


def parse_dimacs(source: str | TextIO) -> tuple[Formula, dict[str, Any]]:
    """
    Parse a CNF formula from DIMACS text.

    Comment lines (starting with ``c``) and blank lines are skipped anywhere.
    The problem line ``p cnf <vars> <clauses>`` must come before any clause
    data. Clauses are sequences of nonzero integers ended by ``0`` and may
    span several lines; a lone ``0`` is an empty clause.

    Args:
        source: DIMACS content as a string or file-like object

    Returns:
        Tuple of (formula, metadata)
        - formula: the parsed Formula
        - metadata: dict with "comments", "num_variables" and "num_clauses"

    Raises:
        InvalidProblemLineError: missing, duplicate or malformed problem line
        InvalidLiteralError: non-integer or out-of-range literal
        TooManyClausesError: more clauses than declared
        TooFewClausesError: fewer terminated clauses than declared
    """
    if isinstance(source, str):
        lines = source.splitlines()
    else:
        lines = source.readlines()

    metadata: dict[str, Any] = {"comments": [], "num_variables": 0, "num_clauses": 0}
    problem = None
    clauses: list[Clause] = []
    current: list[Literal] = []

    for line_number, raw_line in enumerate(lines, start=1):
        line = raw_line.strip()

        if not line:
            continue

        if line.startswith("c"):
            metadata["comments"].append(line[1:].strip())
            continue

        if line.startswith("p"):
            if problem is not None:
                raise InvalidProblemLineError("Multiple problem lines", line_number)
            problem = _parse_problem_line(line, line_number)
            metadata["num_variables"], metadata["num_clauses"] = problem
            continue

        if problem is None:
            raise InvalidProblemLineError(
                "Illegal problem line: clause data before 'p cnf'", line_number
            )
        num_vars, num_clauses = problem

        for token in line.split():
            try:
                value = int(token)
            except ValueError:
                raise InvalidLiteralError(
                    f"Illegal variable: {token!r}", line_number
                ) from None

            if len(clauses) >= num_clauses:
                raise TooManyClausesError(num_clauses, line_number)

            if value == 0:
                clauses.append(Clause(current))
                current = []
            elif abs(value) > num_vars:
                raise InvalidLiteralError(
                    f"Variable {abs(value)} out of range 1..{num_vars}", line_number
                )
            else:
                current.append(Literal.from_dimacs(value))

    if problem is None:
        raise InvalidProblemLineError("No problem line found")

    num_vars, num_clauses = problem
    if len(clauses) < num_clauses:
        raise TooFewClausesError(num_clauses, len(clauses))

    return Formula(clauses, num_vars), metadata


def formula_to_dimacs(
    formula: Formula,
    comments: list[str] | None = None,
) -> str:
    """
    Convert a formula to DIMACS format.

    Args:
        formula: Formula to write
        comments: List of comment lines to include

    Returns:
        DIMACS format string representation
    """
    lines = [f"c {comment}" for comment in comments or []]
    lines.append(f"p cnf {formula.num_vars} {len(formula)}")
    for clause in formula:
        lines.append(" ".join(str(lit) for lit in clause.to_dimacs() + [0]))
    return "\n".join(lines) + "\n"


def save_cnf_file(
    file_path: str,
    formula: Formula,
    comments: list[str] | None = None,
) -> None:
    """
    Save a CNF formula to a DIMACS file.

    Args:
        file_path: Path to save the CNF file
        formula: Formula to write
        comments: List of comment lines to include
    """
    with open(file_path, "w") as f:
        f.write(formula_to_dimacs(formula, comments))


def check_solution(formula: list[list[int]], assignment: dict[int, bool]) -> bool:
    """
    Check whether an assignment satisfies every clause of a formula.

    Unassigned variables satisfy nothing, so a partial assignment passes only
    if the literals it does assign already cover every clause.

    Args:
        formula: List of clauses, each clause being a list of literals
        assignment: Dictionary mapping variable indices to Boolean values

    Returns:
        True if the assignment satisfies the formula
    """
    return compute_satisfied_clauses(formula, assignment) == len(formula)


def compute_satisfied_clauses(formula: list[list[int]], assignment: dict[int, bool]) -> int:
    """
    Count the number of clauses satisfied by an assignment.

    Args:
        formula: List of clauses, each clause being a list of literals
        assignment: Dictionary mapping variable indices to Boolean values

    Returns:
        Number of satisfied clauses
    """
    satisfied_count = 0

    for clause in formula:
        for literal in clause:
            var_idx = abs(literal)
            if var_idx in assignment and assignment[var_idx] == (literal > 0):
                satisfied_count += 1
                break

    return satisfied_count
