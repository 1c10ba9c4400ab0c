"""
Utilities for the dpllsat package.
"""

from dpllsat.utils import cnf, exceptions, logging_utils
from dpllsat.utils.cnf import (
    brute_force_satisfiable,
    check_solution,
    formula_to_dimacs,
    load_cnf_file,
    parse_dimacs,
    save_cnf_file,
    to_literal_formula,
)

__all__ = [
    "load_cnf_file",
    "save_cnf_file",
    "parse_dimacs",
    "formula_to_dimacs",
    "to_literal_formula",
    "check_solution",
    "brute_force_satisfiable",
    "cnf",
    "exceptions",
    "logging_utils",
]
