"""
Pure literal elimination for the DPLL kernel.
"""

import logging
from collections import Counter

from .formula import Assignment, Formula, Literal

logger = logging.getLogger(__name__)


def is_pure(variable: int, formula: Formula) -> bool | None:
    """
    Check whether a variable occurs with a single polarity.

    Returns:
        The polarity it always occurs with, or None if it is absent or
        occurs with both polarities
    """
    seen = False
    polarity = False
    for clause in formula:
        for lit in clause:
            if lit.variable != variable:
                continue
            if not seen:
                seen = True
                polarity = lit.polarity
            elif lit.polarity != polarity:
                return None
    if not seen:
        return None
    return polarity


def eliminate_pure_literals(
    assignment: Assignment, formula: Formula, stats: Counter | None = None
) -> list[Literal]:
    """
    Assign every unassigned pure variable and drop the clauses it satisfies.

    Variables are visited once each in ascending order. For each pure one the
    satisfied clauses are deleted and a unit clause recording the choice is
    appended to the formula.

    Returns:
        The pure literals that were assigned, in the order found
    """
    found = []
    for variable in range(len(assignment)):
        if assignment.is_assigned(variable):
            continue
        polarity = is_pure(variable, formula)
        if polarity is None:
            continue

        pure = Literal(variable, polarity)
        assignment.assign(variable, polarity)

        ix = 0
        while ix < len(formula):
            if pure in formula[ix]:
                formula.remove_clause(ix)
            else:
                ix += 1

        formula.append_clause([pure])
        found.append(pure)

    if found:
        logger.debug(f"Eliminated pure literals: {found}")
        if stats is not None:
            stats["pure_assignments"] += len(found)
    return found
