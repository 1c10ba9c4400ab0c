"""
DPLL solver implementation using the unified solver interface.
"""

import logging
import sys
import time
from collections import Counter
from datetime import datetime
from typing import Any

from ..formula import Assignment
from ..search import dpll
from ..utils.cnf import (
    check_solution,
    max_variable,
    model_to_assignment,
    to_literal_formula,
    validate_clause,
)
from ..utils.exceptions import ConfigurationError, SearchInvariantError
from ..utils.logging_utils import SearchTraceLogger, create_trace_logger
from .base import SolverBase, SolverResult, SolverStatus
from .config import get_config
from .registry import register_solver

# Set up logging
logger = logging.getLogger(__name__)

# Stack frames needed on top of one frame per decision level
RECURSION_HEADROOM = 500


@register_solver("dpll")
class DPLLSolver(SolverBase):
    """
    Front end for the DPLL kernel.

    Clauses are collected as DIMACS-style signed integers and converted into a
    fresh Formula on every ``solve`` call, so the solver can be re-run.
    """

    solver_name = "dpll"

    CONFIG_KEYS = ("num_vars", "recursion_limit", "trace_dir", "trace_format")

    def __init__(self, num_vars: int | None = None, **kwargs):
        """
        Initialize the DPLL solver.

        Args:
            num_vars: Number of variables; inferred from the clauses when 0/None
            **kwargs: Overrides for recursion_limit, trace_dir, trace_format
        """
        config = get_config()

        self.clauses = []
        self.model = None
        self.last_result = None
        self.stats = {
            "solver_name": self.solver_name,
            "total_clauses": 0,
        }

        self.num_vars = 0
        self.recursion_limit = 10000
        self.trace_dir = None
        self.trace_format = SearchTraceLogger.FORMAT_JSON
        self.configure(
            {
                "num_vars": num_vars or config.get("problem.num_vars", 0),
                "recursion_limit": config.get("solver.recursion_limit", 10000),
                "trace_dir": config.get("logging.trace_dir"),
                "trace_format": config.get("logging.trace_format", "json"),
                **kwargs,
            }
        )

    def add_clause(self, clause: list[int]) -> None:
        """
        Add a single clause to the solver.

        Args:
            clause: A list of integers representing literals in the clause.

        Raises:
            InvalidClauseError: If the clause contains 0, non-integers or
                variables beyond a fixed num_vars
        """
        self.clauses.append(validate_clause(clause, self.num_vars or None))
        self.stats["total_clauses"] = len(self.clauses)

    def _resolve_num_vars(self, assumptions: list[int]) -> int:
        if self.num_vars:
            return self.num_vars
        return max_variable(self.clauses + [assumptions])

    def _ensure_recursion_limit(self, num_vars: int) -> None:
        """Raise the interpreter recursion limit so the search can reach full depth."""
        required = num_vars + RECURSION_HEADROOM
        current = sys.getrecursionlimit()
        if required <= current:
            return

        if required > self.recursion_limit:
            logger.warning(
                f"{num_vars} variables may need {required} stack frames, above "
                f"solver.recursion_limit={self.recursion_limit}; "
                "deep searches can raise RecursionError"
            )
            required = self.recursion_limit

        if required > current:
            logger.debug(f"Raising recursion limit from {current} to {required}")
            sys.setrecursionlimit(required)

    def _create_trace(self) -> SearchTraceLogger | None:
        if not self.trace_dir:
            return None
        run_name = f"dpll_{datetime.now():%Y%m%d_%H%M%S_%f}"
        return create_trace_logger(run_name, self.trace_dir, self.trace_format)

    def solve(self, assumptions: list[int] | None = None) -> SolverResult:
        """
        Run DPLL on the clauses added so far.

        Args:
            assumptions: Literals to force, added as unit clauses

        Returns:
            SolverResult; for satisfiable instances ``model`` holds a
            signed-integer model with don't-care variables set to false

        Raises:
            InvalidClauseError: If an assumption or a stored clause names a
                variable beyond num_vars
            SearchInvariantError: If the search reports a model that does not
                satisfy the clauses
        """
        limit = self.num_vars or None
        for clause in self.clauses:
            validate_clause(clause, limit)
        assumptions = validate_clause(assumptions or [], limit)
        num_vars = self._resolve_num_vars(assumptions)

        clauses = self.clauses + [[lit] for lit in assumptions]
        formula = to_literal_formula(clauses)
        assignment = Assignment(num_vars)
        search_stats = Counter()

        previous_limit = sys.getrecursionlimit()
        trace = self._create_trace()
        start_time = time.time()
        try:
            self._ensure_recursion_limit(num_vars)
            satisfiable = dpll(assignment, formula, search_stats, trace)
        except Exception:
            if trace is not None:
                trace.finalize()
            raise
        finally:
            sys.setrecursionlimit(previous_limit)
        runtime = time.time() - start_time

        if satisfiable:
            status = SolverStatus.SATISFIABLE
            self.model = assignment.to_model()
            if not check_solution(clauses, model_to_assignment(self.model)):
                raise SearchInvariantError(
                    f"Search returned model {self.model} that falsifies a clause",
                    formula=clauses,
                )
        else:
            status = SolverStatus.UNSATISFIABLE
            self.model = None

        self.stats = {
            "solver_name": self.solver_name,
            "total_clauses": len(self.clauses),
            "num_vars": num_vars,
            "runtime": runtime,
            **search_stats,
        }

        result = SolverResult(
            status=status,
            model=self.model,
            runtime=runtime,
            num_vars=num_vars,
            num_clauses=len(clauses),
            statistics=dict(self.stats),
        )
        self.last_result = result

        if trace is not None:
            trace.log_result(status.value, runtime, assignment.values, dict(search_stats))
            trace.finalize()

        logger.info(str(result))
        return result

    def get_model(self) -> list[int] | None:
        return self.model

    def get_statistics(self) -> dict[str, Any]:
        return dict(self.stats)

    def configure(self, config: dict[str, Any]) -> None:
        """
        Configure the solver with the given parameters.

        Nothing is applied unless every option is valid.

        Args:
            config: Any of num_vars, recursion_limit, trace_dir, trace_format

        Raises:
            ConfigurationError: On unknown keys or invalid values, including a
                num_vars below a variable already used by a stored clause
        """
        unknown = [key for key in config if key not in self.CONFIG_KEYS]
        if unknown:
            raise ConfigurationError(f"Unknown DPLL solver option: {', '.join(unknown)}")

        num_vars = config.get("num_vars", self.num_vars)
        recursion_limit = config.get("recursion_limit", self.recursion_limit)
        trace_format = config.get("trace_format", self.trace_format)

        if (
            not isinstance(recursion_limit, int)
            or isinstance(recursion_limit, bool)
            or recursion_limit <= 0
        ):
            raise ConfigurationError(
                f"recursion_limit must be a positive integer, got {recursion_limit!r}"
            )
        if not isinstance(num_vars, int) or isinstance(num_vars, bool) or num_vars < 0:
            raise ConfigurationError(f"num_vars must be >= 0, got {num_vars!r}")
        used = max_variable(self.clauses)
        if num_vars and num_vars < used:
            raise ConfigurationError(
                f"num_vars={num_vars} is below variable {used} used by the stored clauses"
            )
        if trace_format not in (
            SearchTraceLogger.FORMAT_JSON,
            SearchTraceLogger.FORMAT_CSV,
        ):
            raise ConfigurationError(f"Unknown trace format: {trace_format}")

        self.num_vars = num_vars
        self.recursion_limit = recursion_limit
        self.trace_format = trace_format
        self.trace_dir = config.get("trace_dir", self.trace_dir)
