"""
Unit tests for the kernel data types: Literal, Formula and Assignment.
"""

import os
import sys
import unittest

import numpy as np

# Add the src directory to the path so we can import the package
sys.path.insert(
    0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src")
)

from dpllsat.formula import FALSE, TRUE, UNASSIGNED, Assignment, Formula, Literal, is_unit


class TestLiteral(unittest.TestCase):
    """Test cases for the Literal value type."""

    def test_equality_uses_both_fields(self):
        self.assertEqual(Literal(3, True), Literal(3, True))
        self.assertNotEqual(Literal(3, True), Literal(3, False))
        self.assertNotEqual(Literal(3, True), Literal(4, True))

    def test_not_a_tuple(self):
        self.assertNotEqual(Literal(3, True), (3, True))
        with self.assertRaises(TypeError):
            Literal(0, True) < Literal(1, True)
        with self.assertRaises(AttributeError):
            Literal(0, True).variable = 1
        self.assertEqual(len({Literal(1, False), Literal(1, False)}), 1)

    def test_negated(self):
        lit = Literal(2, True)
        self.assertEqual(lit.negated(), Literal(2, False))
        self.assertEqual(lit.negated().negated(), lit)

    def test_dimacs_conversion(self):
        """DIMACS numbering is 1-indexed, kernel variables are 0-indexed."""
        self.assertEqual(Literal.from_int(1), Literal(0, True))
        self.assertEqual(Literal.from_int(-4), Literal(3, False))
        self.assertEqual(Literal(3, False).to_int(), -4)
        with self.assertRaises(ValueError):
            Literal.from_int(0)

    def test_repr(self):
        self.assertEqual(repr(Literal(5, True)), "5")
        self.assertEqual(repr(Literal(5, False)), "¬5")

    def test_is_unit(self):
        self.assertTrue(is_unit([Literal(0, False)]))
        self.assertFalse(is_unit([Literal(0, False), Literal(1, True), Literal(0, False)]))
        self.assertFalse(is_unit([]))


class TestFormula(unittest.TestCase):
    """Test cases for Formula mutation and rollback."""

    def setUp(self):
        self.clauses = [
            [Literal(0, True), Literal(1, False), Literal(2, True)],
            [Literal(1, True)],
            [Literal(2, False), Literal(0, False)],
        ]
        self.formula = Formula(self.clauses)

    def test_equality_with_lists_and_formulas(self):
        self.assertEqual(self.formula, self.clauses)
        self.assertEqual(self.formula, Formula(self.clauses))
        self.assertNotEqual(self.formula, [])

    def test_construction_copies_clauses(self):
        self.formula.remove_literal(0, 0)
        self.assertEqual(len(self.clauses[0]), 3)

    def test_removal_preserves_order(self):
        self.formula.remove_literal(0, 1)
        self.formula.remove_clause(1)
        self.assertEqual(
            self.formula,
            [
                [Literal(0, True), Literal(2, True)],
                [Literal(2, False), Literal(0, False)],
            ],
        )

    def test_has_empty_clause(self):
        self.assertFalse(self.formula.has_empty_clause())
        self.formula.remove_literal(1, 0)
        self.assertTrue(self.formula.has_empty_clause())

    def test_rollback_restores_exact_state(self):
        """Every mutation after the checkpoint is undone, in place."""
        original = self.formula.to_list()
        mark = self.formula.checkpoint()

        self.formula.remove_literal(0, 1)
        self.formula.remove_clause(1)
        self.formula.append_clause([Literal(4, True)])
        self.formula.replace_literal(2, 0, Literal(4, False))
        self.formula.remove_literal(1, 0)
        self.formula.remove_clause(0)

        self.formula.rollback(mark)
        self.assertEqual(self.formula, original)
        self.assertEqual(self.formula.checkpoint(), mark)

    def test_nested_checkpoints(self):
        self.formula.append_clause([Literal(3, True)])
        outer = self.formula.checkpoint()
        self.formula.remove_clause(0)
        inner = self.formula.checkpoint()
        self.formula.remove_clause(0)

        self.formula.rollback(inner)
        self.assertEqual(len(self.formula), 3)
        self.assertEqual(self.formula[0], [Literal(1, True)])

        self.formula.rollback(outer)
        self.assertEqual(len(self.formula), 4)
        self.assertEqual(self.formula[-1], [Literal(3, True)])

    def test_copy_is_independent(self):
        duplicate = self.formula.copy()
        self.formula.remove_clause(0)
        self.assertEqual(len(duplicate), 3)

    def test_variables(self):
        self.assertEqual(self.formula.variables(), {0, 1, 2})


class TestAssignment(unittest.TestCase):
    """Test cases for the Assignment array."""

    def test_starts_unassigned(self):
        assignment = Assignment(3)
        self.assertEqual(assignment.to_list(), [None, None, None])
        self.assertEqual(assignment.first_unassigned(), 0)
        self.assertFalse(assignment.is_complete())
        self.assertEqual(assignment.values.dtype, np.int8)

    def test_encoding(self):
        assignment = Assignment(3)
        assignment[0] = True
        assignment[2] = False
        np.testing.assert_array_equal(assignment.values, [TRUE, UNASSIGNED, FALSE])
        self.assertIs(assignment[0], True)
        self.assertIsNone(assignment[1])
        self.assertIs(assignment[2], False)
        self.assertEqual(assignment, [True, None, False])

    def test_first_unassigned_and_complete(self):
        assignment = Assignment(2)
        assignment.assign(0, False)
        self.assertEqual(assignment.first_unassigned(), 1)
        assignment.assign(1, True)
        self.assertIsNone(assignment.first_unassigned())
        self.assertTrue(assignment.is_complete())

    def test_out_of_range_is_not_guarded(self):
        with self.assertRaises(IndexError):
            Assignment(2).assign(5, True)

    def test_rollback(self):
        assignment = Assignment(3)
        assignment.assign(0, True)
        mark = assignment.checkpoint()
        assignment.assign(1, False)
        assignment.assign(0, False)
        assignment.rollback(mark)
        self.assertEqual(assignment.to_list(), [True, None, None])

    def test_satisfies(self):
        assignment = Assignment(2)
        assignment.assign(0, True)
        clauses = [[Literal(0, True), Literal(1, True)], [Literal(1, False)]]
        self.assertFalse(assignment.satisfies(clauses))
        assignment.assign(1, False)
        self.assertTrue(assignment.satisfies(clauses))

    def test_to_model_fills_dont_care(self):
        assignment = Assignment(3)
        assignment.assign(1, True)
        self.assertEqual(assignment.to_model(), [-1, 2, -3])
        self.assertEqual(assignment.to_model(default=True), [1, 2, 3])


if __name__ == "__main__":
    unittest.main()
