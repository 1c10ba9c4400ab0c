"""
Core data types for the DPLL kernel.

Defines the Literal value type, the mutable Formula (a list of clauses, each a
list of literals) and the Assignment array. Formula and Assignment record every
mutation in an undo journal so the search driver can roll back to a checkpoint
instead of cloning state on each branch.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

import numpy as np

# Assignment encoding, same convention as the environment observations
UNASSIGNED = 0
TRUE = 1
FALSE = -1


@dataclass(frozen=True, repr=False)
class Literal:
    """
    A variable paired with a polarity (True = affirmed, False = negated).

    Hashable and compared by value, but unordered and never equal to a tuple.
    """

    variable: int
    polarity: bool

    def negated(self) -> "Literal":
        return Literal(self.variable, not self.polarity)

    @classmethod
    def from_int(cls, lit: int) -> "Literal":
        """
        Build a literal from a DIMACS signed integer.

        DIMACS variables are 1-indexed, so ``+k`` maps to variable ``k - 1``.
        """
        if lit == 0:
            raise ValueError("0 is not a valid DIMACS literal")
        return cls(abs(lit) - 1, lit > 0)

    def to_int(self) -> int:
        return self.variable + 1 if self.polarity else -(self.variable + 1)

    def __repr__(self) -> str:
        if self.polarity:
            return f"{self.variable}"
        return f"¬{self.variable}"


Clause = list[Literal]


def is_unit(clause: Clause) -> bool:
    return len(clause) == 1


class Formula:
    """
    A conjunction of clauses, mutated in place by the search.

    Clause and literal order is preserved across deletions. All mutations go
    through the methods below so they can be undone with ``rollback``.
    """

    def __init__(self, clauses: Iterable[Iterable[Literal]] | None = None):
        self._clauses: list[Clause] = [list(c) for c in (clauses or [])]
        self._journal: list[tuple] = []

    def __len__(self) -> int:
        return len(self._clauses)

    def __iter__(self) -> Iterator[Clause]:
        return iter(self._clauses)

    def __getitem__(self, index: int) -> Clause:
        return self._clauses[index]

    def __eq__(self, other) -> bool:
        if isinstance(other, Formula):
            return self._clauses == other._clauses
        if isinstance(other, list):
            return self._clauses == [list(c) for c in other]
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"Formula({self._clauses!r})"

    def has_empty_clause(self) -> bool:
        return any(not clause for clause in self._clauses)

    def variables(self) -> set[int]:
        return {lit.variable for clause in self._clauses for lit in clause}

    def copy(self) -> "Formula":
        """Return an independent copy with an empty journal."""
        return Formula(self._clauses)

    def to_list(self) -> list[Clause]:
        return [list(c) for c in self._clauses]

    def append_clause(self, clause: Iterable[Literal]) -> None:
        self._clauses.append(list(clause))
        self._journal.append(("append",))

    def remove_clause(self, ix: int) -> None:
        clause = self._clauses.pop(ix)
        self._journal.append(("remove_clause", ix, clause))

    def remove_literal(self, ix: int, iy: int) -> None:
        lit = self._clauses[ix].pop(iy)
        self._journal.append(("remove_literal", ix, iy, lit))

    def replace_literal(self, ix: int, iy: int, lit: Literal) -> None:
        old = self._clauses[ix][iy]
        self._clauses[ix][iy] = lit
        self._journal.append(("replace_literal", ix, iy, old))

    def checkpoint(self) -> int:
        """Return a mark that ``rollback`` can restore to."""
        return len(self._journal)

    def rollback(self, mark: int) -> None:
        """Undo every mutation recorded after ``mark``, newest first."""
        while len(self._journal) > mark:
            entry = self._journal.pop()
            op = entry[0]
            if op == "append":
                self._clauses.pop()
            elif op == "remove_clause":
                _, ix, clause = entry
                self._clauses.insert(ix, clause)
            elif op == "remove_literal":
                _, ix, iy, lit = entry
                self._clauses[ix].insert(iy, lit)
            else:
                _, ix, iy, old = entry
                self._clauses[ix][iy] = old


class Assignment:
    """
    Truth values for variables ``0..n-1``.

    Stored as an ``int8`` array (0 = unassigned, 1 = true, -1 = false); indexing
    returns ``None``, ``True`` or ``False``. Variable indices are not range
    checked beyond what numpy does.
    """

    def __init__(self, num_vars: int):
        self.num_vars = num_vars
        self.values = np.zeros(num_vars, dtype=np.int8)
        self._journal: list[tuple[int, int]] = []

    def __len__(self) -> int:
        return self.num_vars

    def __getitem__(self, variable: int) -> bool | None:
        code = self.values[variable]
        if code == UNASSIGNED:
            return None
        return bool(code == TRUE)

    def __setitem__(self, variable: int, value: bool | None) -> None:
        self.assign(variable, value)

    def __eq__(self, other) -> bool:
        if isinstance(other, Assignment):
            return np.array_equal(self.values, other.values)
        if isinstance(other, (list, tuple)):
            return self.to_list() == list(other)
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"Assignment({self.to_list()!r})"

    def assign(self, variable: int, value: bool | None) -> None:
        if value is None:
            code = UNASSIGNED
        else:
            code = TRUE if value else FALSE
        self._journal.append((variable, int(self.values[variable])))
        self.values[variable] = code

    def is_assigned(self, variable: int) -> bool:
        return self.values[variable] != UNASSIGNED

    def first_unassigned(self) -> int | None:
        free = np.flatnonzero(self.values == UNASSIGNED)
        if free.size == 0:
            return None
        return int(free[0])

    def is_complete(self) -> bool:
        return not np.any(self.values == UNASSIGNED)

    def satisfies(self, clauses: Iterable[Iterable[Literal]]) -> bool:
        """True if every clause has a literal made true by this assignment."""
        return all(
            any(self[lit.variable] == lit.polarity for lit in clause)
            for clause in clauses
        )

    def to_list(self) -> list[bool | None]:
        return [self[v] for v in range(self.num_vars)]

    def to_model(self, default: bool = False) -> list[int]:
        """
        Signed-integer model in DIMACS numbering.

        Unassigned variables are don't-care and take ``default``.
        """
        model = []
        for v in range(self.num_vars):
            value = self[v]
            if value is None:
                value = default
            model.append(v + 1 if value else -(v + 1))
        return model

    def checkpoint(self) -> int:
        return len(self._journal)

    def rollback(self, mark: int) -> None:
        while len(self._journal) > mark:
            variable, code = self._journal.pop()
            self.values[variable] = code
