"""
DPLL search driver.

The driver interleaves unit propagation and pure literal elimination with
case splits on the lowest unassigned variable. A case split is recorded by
appending a unit clause, so the propagation machinery discharges it. When the
first branch fails, both structures are rolled back to the state right after
that clause was appended and its literal is flipped in place.

Recursion depth equals the number of decisions, which is bounded by the
number of variables. Large instances need a raised interpreter recursion
limit; ``DPLLSolver`` handles that.
"""

import logging
from collections import Counter

from .elimination import eliminate_pure_literals
from .formula import Assignment, Formula, Literal
from .propagation import full_unit_propagate
from .utils.exceptions import SearchInvariantError

logger = logging.getLogger(__name__)


def dpll(
    assignment: Assignment,
    formula: Formula,
    stats: Counter | None = None,
    trace=None,
    depth: int = 0,
) -> bool:
    """
    Decide satisfiability of ``formula``, consuming it and ``assignment``.

    Args:
        assignment: All-unassigned assignment sized to the formula's variables
        formula: Formula to solve, mutated in place
        stats: Optional counter for search statistics
        trace: Optional SearchTraceLogger receiving decision events
        depth: Current decision depth

    Returns:
        True if satisfiable; ``assignment`` then holds a witness (slots left
        unassigned are don't-care)

    Raises:
        SearchInvariantError: If every variable is assigned while clauses remain
    """
    if stats is not None:
        stats["max_depth"] = max(stats["max_depth"], depth)

    full_unit_propagate(assignment, formula, stats)
    eliminate_pure_literals(assignment, formula, stats)

    if len(formula) == 0:
        return True

    if formula.has_empty_clause():
        logger.debug(f"Conflict at depth {depth}")
        if stats is not None:
            stats["conflicts"] += 1
        if trace is not None:
            trace.log_conflict(depth, len(formula))
        return False

    variable = assignment.first_unassigned()
    if variable is None:
        raise SearchInvariantError(
            "All variables are assigned, yet the formula is not empty",
            formula=formula.to_list(),
        )

    if stats is not None:
        stats["decisions"] += 1
    if trace is not None:
        trace.log_decision(depth, variable, True)
    logger.debug(f"Branching on variable {variable} at depth {depth}")

    formula.append_clause([Literal(variable, True)])
    formula_mark = formula.checkpoint()
    assignment_mark = assignment.checkpoint()

    if dpll(assignment, formula, stats, trace, depth + 1):
        return True

    formula.rollback(formula_mark)
    assignment.rollback(assignment_mark)

    # the assumption is still the last clause after the rollback
    last = len(formula) - 1
    formula.replace_literal(last, 0, formula[last][0].negated())

    if stats is not None:
        stats["backtracks"] += 1
    if trace is not None:
        trace.log_backtrack(depth, variable)

    return dpll(assignment, formula, stats, trace, depth + 1)
