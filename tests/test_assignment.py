"""
Unit tests for the partial assignment.
"""

import unittest

from dpllsat.assignment import Assignment
from dpllsat.formula import Literal
from dpllsat.utils.exceptions import InconsistentAssignmentError, NoUnassignedVariableError


class TestAssignment(unittest.TestCase):
    """Test cases for Assignment."""

    def setUp(self):
        self.assignment = Assignment(3)

    def test_starts_unassigned(self):
        self.assertEqual(self.assignment.num_assigned, 0)
        for variable in (1, 2, 3):
            self.assertIsNone(self.assignment.value(variable))
            self.assertFalse(self.assignment.is_assigned(Literal(variable)))
            self.assertFalse(self.assignment.is_assigned(Literal(variable, True)))

    def test_is_assigned_checks_polarity(self):
        self.assignment.assign(Literal(2, True))
        self.assertTrue(self.assignment.is_assigned(Literal(2, True)))
        self.assertFalse(self.assignment.is_assigned(Literal(2, False)))
        self.assertFalse(self.assignment.value(2))

    def test_assign_and_un_assign(self):
        lit = Literal(1)
        self.assignment.assign(lit)
        self.assertEqual(self.assignment.num_assigned, 1)
        self.assignment.un_assign(lit)
        self.assertEqual(self.assignment.num_assigned, 0)
        self.assertIsNone(self.assignment.value(1))

    def test_assign_twice_is_rejected(self):
        self.assignment.assign(Literal(1))
        with self.assertRaises(InconsistentAssignmentError) as ctx:
            self.assignment.assign(Literal(1, True))
        self.assertEqual(ctx.exception.variable, 1)
        self.assertEqual(self.assignment.num_assigned, 1)

    def test_un_assign_wrong_polarity_is_rejected(self):
        self.assignment.assign(Literal(1))
        with self.assertRaises(InconsistentAssignmentError):
            self.assignment.un_assign(Literal(1, True))
        with self.assertRaises(InconsistentAssignmentError):
            self.assignment.un_assign(Literal(2))

    def test_next_unassigned_is_lowest_positive(self):
        self.assertEqual(self.assignment.next_unassigned(), Literal(1, False))
        self.assignment.assign(Literal(1, True))
        self.assignment.assign(Literal(3))
        self.assertEqual(self.assignment.next_unassigned(), Literal(2, False))

    def test_next_unassigned_on_complete_assignment(self):
        for variable in (1, 2, 3):
            self.assignment.assign(Literal(variable))
        self.assertTrue(self.assignment.is_complete())
        with self.assertRaises(NoUnassignedVariableError):
            self.assignment.next_unassigned()

    def test_next_unassigned_after_un_assign(self):
        for variable in (1, 2, 3):
            self.assignment.assign(Literal(variable))
        self.assignment.un_assign(Literal(3))
        self.assertEqual(self.assignment.next_unassigned(), Literal(3, False))
        self.assignment.un_assign(Literal(1))
        self.assertEqual(self.assignment.next_unassigned(), Literal(1, False))
        self.assignment.assign(Literal(1, True))
        self.assertEqual(self.assignment.next_unassigned(), Literal(3, False))

    def test_next_unassigned_out_of_order(self):
        assignment = Assignment(5)
        assignment.assign(Literal(4))
        assignment.assign(Literal(2))
        self.assertEqual(assignment.next_unassigned(), Literal(1, False))
        assignment.assign(Literal(1))
        self.assertEqual(assignment.next_unassigned(), Literal(3, False))
        assignment.assign(Literal(3))
        self.assertEqual(assignment.next_unassigned(), Literal(5, False))
        assignment.un_assign(Literal(2))
        self.assertEqual(assignment.next_unassigned(), Literal(2, False))
        assignment.assign(Literal(2, True))
        assignment.assign(Literal(5))
        with self.assertRaises(NoUnassignedVariableError):
            assignment.next_unassigned()

    def test_next_unassigned_without_variables(self):
        with self.assertRaises(NoUnassignedVariableError):
            Assignment(0).next_unassigned()

    def test_copy_keeps_next_unassigned(self):
        self.assignment.assign(Literal(1))
        other = self.assignment.copy()
        self.assertEqual(other.next_unassigned(), Literal(2, False))
        other.assign(Literal(2))
        self.assertEqual(other.next_unassigned(), Literal(3, False))
        self.assertEqual(self.assignment.next_unassigned(), Literal(2, False))

    def test_rendering(self):
        self.assignment.assign(Literal(1))
        self.assignment.assign(Literal(3, True))
        self.assertEqual(str(self.assignment), "1 UNASSIGNED -3 0")
        self.assertEqual(self.assignment.to_dimacs(), [1, -3])
        self.assertEqual(self.assignment.to_dict(), {1: True, 3: False})

    def test_rendering_without_variables(self):
        self.assertEqual(str(Assignment(0)), "0")

    def test_copy_is_independent(self):
        self.assignment.assign(Literal(1))
        other = self.assignment.copy()
        self.assertEqual(other, self.assignment)
        other.assign(Literal(2))
        self.assertNotEqual(other, self.assignment)
        self.assertEqual(self.assignment.num_assigned, 1)


if __name__ == "__main__":
    unittest.main()
