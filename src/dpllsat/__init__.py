"""
dpllsat: a DPLL decision procedure for CNF satisfiability.
"""

from dpllsat.elimination import eliminate_pure_literals, is_pure
from dpllsat.formula import Assignment, Formula, Literal, is_unit
from dpllsat.propagation import full_unit_propagate, unit_propagate
from dpllsat.search import dpll
from dpllsat.solvers import DPLLSolver, SolverRegistry, SolverResult, SolverStatus

__version__ = "0.1.0"

__all__ = [
    "Assignment",
    "Formula",
    "Literal",
    "is_unit",
    "unit_propagate",
    "full_unit_propagate",
    "is_pure",
    "eliminate_pure_literals",
    "dpll",
    "DPLLSolver",
    "SolverRegistry",
    "SolverResult",
    "SolverStatus",
]
