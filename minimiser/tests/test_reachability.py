from django.test import TestCase
from minimiser.machine_model import MEALY, MOORE, build_machine
from minimiser.reachability import (
    NO_STATE_REMOVED,
    accessible_states,
    format_removed_states,
    remove_inaccessible_states,
)


class TestRemoveInaccessibleStates(TestCase):
    """Test cases for the reachability filter"""

    def setUp(self):
        self.machine = build_machine(['A', 'X', 'B', 'Y'], 'A', ['0', '1'], [
            ['B', 'A', '0'],
            ['Y', 'A', '1'],
            ['A', 'B', '1'],
            ['X', 'Y', '0'],
        ], MOORE)

    def test_accessible_states(self):
        """Test the depth-first walk from the initial state"""
        self.assertEqual(accessible_states(self.machine), {'A', 'B'})

    def test_removes_unreachable_states(self):
        """Test that unreachable states are dropped and listed in table order"""
        filtered, report = remove_inaccessible_states(self.machine)

        self.assertEqual(list(filtered.states), ['A', 'B'])
        self.assertEqual(report, '[ X,Y ]')
        self.assertEqual(filtered.initial_state, 'A')

    def test_original_machine_is_untouched(self):
        """Test that filtering returns a new machine"""
        filtered, _ = remove_inaccessible_states(self.machine)

        self.assertEqual(list(self.machine.states), ['A', 'X', 'B', 'Y'])
        self.assertIsNot(filtered.states, self.machine.states)

    def test_nothing_removed(self):
        """Test the report when every state is reachable"""
        machine = build_machine(['A', 'B'], 'A', ['0'], [
            [['B', 'x']],
            [['A', 'y']],
        ], MEALY)

        filtered, report = remove_inaccessible_states(machine)

        self.assertEqual(report, NO_STATE_REMOVED)
        self.assertEqual(filtered.states, machine.states)
        self.assertIsNot(filtered.states, machine.states)

    def test_initial_state_is_never_removed(self):
        """Test that a state with no incoming transitions survives if it is initial"""
        machine = build_machine(['A', 'B'], 'A', ['0'], [
            ['B', '0'],
            ['B', '1'],
        ], MOORE)

        filtered, report = remove_inaccessible_states(machine)

        self.assertEqual(list(filtered.states), ['A', 'B'])
        self.assertEqual(report, NO_STATE_REMOVED)

    def test_long_chain_does_not_recurse(self):
        """Test a chain longer than the default recursion limit"""
        count = 3000
        states = [f'q{i}' for i in range(count)]
        matrix = [[states[min(i + 1, count - 1)], '0'] for i in range(count)]
        machine = build_machine(states, 'q0', ['a'], matrix, MOORE)

        self.assertEqual(len(accessible_states(machine)), count)

    def test_format_removed_states(self):
        self.assertEqual(format_removed_states([]), NO_STATE_REMOVED)
        self.assertEqual(format_removed_states(['E']), '[ E ]')
