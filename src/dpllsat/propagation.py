"""
Unit propagation for the DPLL kernel.
"""

import logging
from collections import Counter

from .formula import Assignment, Formula, is_unit

logger = logging.getLogger(__name__)


def unit_propagate(
    assignment: Assignment, formula: Formula, stats: Counter | None = None
) -> bool:
    """
    Run a single round of unit propagation.

    Every unit clause present at the start of the round is recorded in the
    assignment (in clause order, so a later unit on the same variable
    overwrites an earlier one). Then, for each recorded unit, clauses it
    satisfies are deleted and opposite-polarity literals are removed. A clause
    reduced to nothing is left in place for the caller to find.

    Args:
        assignment: Variable assignment, updated in place
        formula: Formula, simplified in place
        stats: Optional counter for propagation statistics

    Returns:
        True if any clause or literal was touched
    """
    units = []
    for clause in formula:
        if is_unit(clause):
            lit = clause[0]
            assignment.assign(lit.variable, lit.polarity)
            units.append(lit)

    if not units:
        return False

    if stats is not None:
        stats["propagation_rounds"] += 1
        stats["unit_assignments"] += len(units)

    changed = False
    for unit in units:
        ix = 0
        while ix < len(formula):
            clause = formula[ix]
            satisfied = False
            iy = 0
            while iy < len(clause):
                lit = clause[iy]
                if lit.variable == unit.variable:
                    changed = True
                    if lit.polarity == unit.polarity:
                        satisfied = True
                        break
                    formula.remove_literal(ix, iy)
                    continue
                iy += 1
            if satisfied:
                formula.remove_clause(ix)
            else:
                ix += 1
    return changed


def full_unit_propagate(
    assignment: Assignment, formula: Formula, stats: Counter | None = None
) -> None:
    """Repeat unit propagation rounds until one reports no change."""
    rounds = 0
    while unit_propagate(assignment, formula, stats):
        rounds += 1
    if rounds:
        logger.debug(f"Unit propagation reached fixpoint after {rounds} rounds")
