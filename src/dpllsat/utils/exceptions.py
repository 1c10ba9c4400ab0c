"""
Custom exception classes for the DPLL solver.

This module defines the exceptions raised by the kernel, the solver front end
and the CNF helpers, so callers can tell input problems from broken
invariants.
"""


class SATBaseException(Exception):
    """Base exception class for all solver related exceptions."""
    pass


class SearchInvariantError(SATBaseException):
    """
    Raised when the search reaches a state its invariants rule out.

    Every variable is assigned but clauses remain, so propagation,
    elimination or branching left the formula inconsistent with the
    assignment. This is a defect, not a solver result.

    Attributes:
        formula: Snapshot of the remaining clauses when the error was raised
    """
    def __init__(self, message="Search invariant violated", formula=None):
        self.formula = formula
        self.message = message
        super().__init__(self.message)

    def __str__(self):
        if self.formula is None:
            return self.message
        return f"{self.message} (remaining clauses: {self.formula})"


class InvalidClauseError(SATBaseException):
    """
    Raised when an invalid clause is given (e.g. a zero literal or a variable
    out of range).
    """
    def __init__(self, message="Invalid clause detected", clause=None):
        self.clause = clause
        self.message = message
        if clause is not None:
            self.message = f"{message}: {clause}"
        super().__init__(self.message)


class InvalidDimacsError(InvalidClauseError, ValueError):
    """Raised when DIMACS text cannot be parsed."""

    def __init__(self, message="Invalid DIMACS input", line=None):
        self.line = line
        super().__init__(message if line is None else f"{message}: {line!r}")


class ConfigurationError(SATBaseException):
    """
    Raised when there's a problem with solver configuration.
    """
    pass
