"""
Solver interface and result type shared by the solvers in this package.
"""

import dataclasses
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any


class SolverStatus(Enum):
    """Outcome of a solve call."""

    UNKNOWN = "unknown"
    SATISFIABLE = "satisfiable"
    UNSATISFIABLE = "unsatisfiable"


@dataclasses.dataclass
class SolverResult:
    """
    What a complete solver reports back.

    Attributes:
        status: Satisfiable, unsatisfiable, or unknown before solving
        model: Signed-integer model (DIMACS numbering) when satisfiable
        runtime: Wall time of the search in seconds
        num_vars: Variables the search ran over
        num_clauses: Clauses given to the search, assumptions included
        statistics: Search counters (decisions, conflicts, backtracks, ...)
    """

    status: SolverStatus = SolverStatus.UNKNOWN
    model: list[int] | None = None
    runtime: float = 0.0
    num_vars: int = 0
    num_clauses: int = 0
    statistics: dict[str, Any] = dataclasses.field(default_factory=dict)

    @property
    def is_sat(self) -> bool:
        return self.status == SolverStatus.SATISFIABLE

    @property
    def is_unsat(self) -> bool:
        return self.status == SolverStatus.UNSATISFIABLE

    @property
    def decisions(self) -> int:
        return self.statistics.get("decisions", 0)

    @property
    def conflicts(self) -> int:
        return self.statistics.get("conflicts", 0)

    def __str__(self) -> str:
        if self.status == SolverStatus.UNKNOWN:
            return "DPLL: not solved"
        return (
            f"DPLL: {self.status.value.upper()} "
            f"({self.num_vars} vars, {self.num_clauses} clauses, "
            f"{self.decisions} decisions, {self.conflicts} conflicts, "
            f"{self.runtime:.4f}s)"
        )


class SolverBase(ABC):
    """
    Clause-at-a-time solver interface.

    Clauses are DIMACS-style signed integers: ``k`` asserts variable ``k``,
    ``-k`` its negation.
    """

    @abstractmethod
    def add_clause(self, clause: list[int]) -> None:
        """Add one clause; implementations validate it here."""

    def add_clauses(self, clauses: list[list[int]]) -> None:
        for clause in clauses:
            self.add_clause(clause)

    @abstractmethod
    def solve(self, assumptions: list[int] | None = None) -> SolverResult:
        """
        Decide the clauses added so far.

        Args:
            assumptions: Literals forced for this call only
        """

    @abstractmethod
    def get_model(self) -> list[int] | None:
        """Model from the last satisfiable solve, else None."""

    @abstractmethod
    def get_statistics(self) -> dict[str, Any]:
        """Counters from the last solve."""

    @abstractmethod
    def configure(self, config: dict[str, Any]) -> None:
        """
        Apply solver options.

        Implementations check every option before applying any of them.
        """
