"""
CNF handling utilities.

This module provides functions for loading and writing CNF formulas in DIMACS
format, converting signed-integer clauses into kernel Formulas, and checking
solutions, including a brute-force decision procedure for small instances.
"""

import itertools
import os
from typing import Any, TextIO

from ..formula import Formula, Literal
from .exceptions import InvalidClauseError, InvalidDimacsError


def load_cnf_file(file_path: str) -> tuple[list[list[int]], dict[str, Any]]:
    """
    Load a CNF formula from a DIMACS file.

    Args:
        file_path: Path to the CNF file in DIMACS format

    Returns:
        Tuple of (formula, metadata)

    Raises:
        FileNotFoundError: If the file doesn't exist
        InvalidDimacsError: If the file format is invalid
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"CNF file not found: {file_path}")

    with open(file_path) as f:
        return parse_dimacs(f)


def parse_dimacs(source: str | TextIO) -> tuple[list[list[int]], dict[str, Any]]:
    """
    Parse a CNF formula from DIMACS format.

    Args:
        source: DIMACS content as a string or file-like object

    Returns:
        Tuple of (formula, metadata)
        - formula: List of clauses (each clause is a list of signed literals)
        - metadata: Dictionary with comments, num_variables and num_clauses

    Raises:
        InvalidDimacsError: If the format is invalid
    """
    if isinstance(source, str):
        lines = source.strip().split("\n")
    else:
        lines = source.readlines()

    formula = []
    metadata = {"comments": [], "num_variables": 0, "num_clauses": 0}

    found_problem_line = False
    current_clause = []

    for line in lines:
        line = line.strip()

        if not line:
            continue

        if line.startswith("c"):
            metadata["comments"].append(line[1:].strip())
            continue

        # Some benchmark files end with a "%" trailer
        if line.startswith("%"):
            break

        if line.startswith("p"):
            if found_problem_line:
                raise InvalidDimacsError("Multiple problem lines in CNF file", line)

            parts = line.split()
            if len(parts) < 4 or parts[1] != "cnf":
                raise InvalidDimacsError("Invalid problem line", line)

            try:
                metadata["num_variables"] = int(parts[2])
                metadata["num_clauses"] = int(parts[3])
            except ValueError:
                raise InvalidDimacsError("Invalid numbers in problem line", line)

            found_problem_line = True
            continue

        try:
            values = [int(x) for x in line.split()]
        except ValueError:
            raise InvalidDimacsError("Invalid clause line", line)

        for value in values:
            if value == 0:
                if current_clause:
                    formula.append(current_clause)
                    current_clause = []
            else:
                current_clause.append(value)

    if current_clause:
        formula.append(current_clause)

    if not found_problem_line:
        raise InvalidDimacsError("No problem line found in CNF file")

    if len(formula) != metadata["num_clauses"]:
        raise InvalidDimacsError(
            f"Expected {metadata['num_clauses']} clauses, but found {len(formula)}"
        )

    return formula, metadata


def formula_to_dimacs(
    formula: list[list[int]],
    num_variables: int | None = None,
    comments: list[str] | None = None,
) -> str:
    """
    Convert a formula to DIMACS format.

    Args:
        formula: List of clauses (each clause is a list of signed literals)
        num_variables: Number of variables (computed if not provided)
        comments: List of comment lines to include

    Returns:
        DIMACS format string representation
    """
    if num_variables is None:
        num_variables = max_variable(formula)

    lines = [f"c {comment}" for comment in comments or []]
    lines.append(f"p cnf {num_variables} {len(formula)}")
    for clause in formula:
        lines.append(" ".join(map(str, clause)) + " 0")

    return "\n".join(lines)


def save_cnf_file(
    file_path: str,
    formula: list[list[int]],
    num_variables: int | None = None,
    comments: list[str] | None = None,
) -> None:
    """Save a CNF formula to a DIMACS file."""
    with open(file_path, "w") as f:
        f.write(formula_to_dimacs(formula, num_variables, comments))


def max_variable(formula: list[list[int]]) -> int:
    """Highest DIMACS variable number used in the formula (0 if none)."""
    return max((abs(lit) for clause in formula for lit in clause), default=0)


def validate_clause(clause: list[int], num_vars: int | None = None) -> list[int]:
    """
    Check a signed-integer clause and return it as a list.

    Raises:
        InvalidClauseError: On a non-integer or zero literal, or a variable
            above ``num_vars`` when given
    """
    clause = list(clause)
    for lit in clause:
        if isinstance(lit, bool) or not isinstance(lit, int):
            raise InvalidClauseError("Literals must be integers", clause)
        if lit == 0:
            raise InvalidClauseError("Literal 0 is not allowed", clause)
        if num_vars is not None and abs(lit) > num_vars:
            raise InvalidClauseError(f"Variable exceeds num_vars={num_vars}", clause)
    return clause


def to_literal_formula(clauses: list[list[int]]) -> Formula:
    """
    Convert signed-integer clauses to a kernel Formula.

    Repeated literals inside a clause are dropped (first occurrence kept);
    the kernel treats a clause made only of copies of one pure literal as
    unreachable.
    """
    return Formula(
        list(dict.fromkeys(Literal.from_int(lit) for lit in clause))
        for clause in clauses
    )


def model_to_assignment(model: list[int]) -> dict[int, bool]:
    """Map a signed-integer model to ``{variable: value}`` (1-indexed)."""
    return {abs(lit): lit > 0 for lit in model}


def check_solution(
    formula: list[list[int]], assignment: dict[int, bool], partial: bool = False
) -> bool | None:
    """
    Check if a variable assignment satisfies a CNF formula.

    Args:
        formula: List of clauses, each clause being a list of signed literals
        assignment: Dictionary mapping variable indices (1-indexed) to values
        partial: Whether to allow partial assignments

    Returns:
        True if the assignment satisfies the formula,
        False if it does not satisfy the formula,
        None if the assignment is partial and partial=True
    """
    result = True
    clause_unknown = False

    for clause in formula:
        clause_satisfied = False
        unknown = False

        for literal in clause:
            var_idx = abs(literal)
            if var_idx not in assignment:
                unknown = True
                continue
            if assignment[var_idx] == (literal > 0):
                clause_satisfied = True
                break

        if clause_satisfied:
            continue
        if unknown and partial:
            clause_unknown = True
            continue
        result = False
        break

    if partial and result and clause_unknown:
        return None

    return result


def brute_force_satisfiable(
    formula: list[list[int]], num_vars: int | None = None
) -> dict[int, bool] | None:
    """
    Decide satisfiability by enumerating every total assignment.

    Only meant for small instances (cost is 2 ** num_vars).

    Returns:
        The first satisfying assignment found, or None if there is none
    """
    if num_vars is None:
        num_vars = max_variable(formula)

    for values in itertools.product((False, True), repeat=num_vars):
        assignment = {v + 1: value for v, value in enumerate(values)}
        if check_solution(formula, assignment):
            return assignment
    return None
