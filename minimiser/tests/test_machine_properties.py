from django.test import TestCase
from minimiser.machine_properties import (
    clean_symbol_input,
    generate_empty_matrix,
    is_duplicate,
    is_fully_filled,
    normalise_machine_definition,
    parse_symbol_list,
    remove_invalid_commas,
    remove_trailing_comma,
    validate_machine_structure,
)


class TestIsFullyFilled(TestCase):
    """Test cases for the fully filled transition table check"""

    def test_empty_matrices(self):
        self.assertFalse(is_fully_filled(None))
        self.assertFalse(is_fully_filled([]))
        self.assertFalse(is_fully_filled([[]]))

    def test_moore_rows(self):
        """Test Moore rows with and without missing cells"""
        self.assertTrue(is_fully_filled([['A', 'B', '0'], ['B', 'A', '1']]))
        self.assertFalse(is_fully_filled([['A', None, '0'], ['B', 'A', '1']]))
        self.assertFalse(is_fully_filled([['A', 'B', '0'], ['B', 'A', '']]))

    def test_mealy_cells(self):
        """Test that both parts of a Mealy cell must be present"""
        self.assertTrue(is_fully_filled([[{'nextState': 'A', 'output': 'x'}, ['A', 'y']]]))
        self.assertFalse(is_fully_filled([[{'nextState': 'A', 'output': ''}]]))
        self.assertFalse(is_fully_filled([[{'output': 'x'}]]))
        self.assertFalse(is_fully_filled([[['A', None]]]))

    def test_short_row(self):
        self.assertFalse(is_fully_filled([['A', 'B', '0'], ['A', 'B']]))

    def test_generate_empty_matrix(self):
        self.assertEqual(generate_empty_matrix(2, 2, 1), [[None, None, None], [None, None, None]])
        self.assertEqual(generate_empty_matrix(1, 3), [[None, None, None]])
        self.assertFalse(is_fully_filled(generate_empty_matrix(2, 2, 1)))


class TestSymbolInput(TestCase):
    """Test cases for cleaning comma separated state and alphabet input"""

    def test_remove_invalid_commas(self):
        self.assertEqual(remove_invalid_commas(',A,,B'), 'A,B')
        self.assertEqual(remove_invalid_commas('A,B,'), 'A,B,')

    def test_remove_trailing_comma(self):
        self.assertEqual(remove_trailing_comma('A,B,'), 'A,B')
        self.assertEqual(remove_trailing_comma('A,B'), 'A,B')
        self.assertEqual(remove_trailing_comma(''), '')

    def test_clean_symbol_input(self):
        self.assertEqual(clean_symbol_input(' ,A, ,B,'), 'A,B')

    def test_is_duplicate(self):
        """Test that only the last typed element is checked"""
        self.assertTrue(is_duplicate('A,B', 'A,B,A'))
        self.assertFalse(is_duplicate('A,B', 'A,B,C'))
        self.assertFalse(is_duplicate('A,B,C', 'A,B'))

    def test_parse_symbol_list(self):
        self.assertEqual(parse_symbol_list('A,B,C'), ['A', 'B', 'C'])
        self.assertEqual(parse_symbol_list(',q0,,q1,'), ['q0', 'q1'])
        self.assertEqual(parse_symbol_list([' q0 ', 'q1']), ['q0', 'q1'])
        self.assertEqual(parse_symbol_list(''), [])

    def test_parse_symbol_list_rejects_duplicates(self):
        with self.assertRaises(ValueError) as context:
            parse_symbol_list('A,B,A', 'state')
        self.assertIn("Duplicate state value 'A'", str(context.exception))

    def test_parse_symbol_list_rejects_non_alphanumeric(self):
        with self.assertRaises(ValueError):
            parse_symbol_list('A,B-')

    def test_normalise_machine_definition(self):
        """Test that comma strings become lists without touching the original"""
        definition = {'type': ' Moore ', 'states': 'A,B', 'inputAlphabet': '0,1', 'initialState': 'A'}

        normalised = normalise_machine_definition(definition)

        self.assertEqual(normalised['type'], 'moore')
        self.assertEqual(normalised['states'], ['A', 'B'])
        self.assertEqual(normalised['inputAlphabet'], ['0', '1'])
        self.assertEqual(definition['states'], 'A,B')


class TestValidateMachineStructure(TestCase):
    """Test cases for machine definition validation"""

    def setUp(self):
        self.moore = {
            'type': 'moore',
            'states': ['A', 'B'],
            'initialState': 'A',
            'inputAlphabet': ['0', '1'],
            'matrix': [['B', 'A', '0'], ['A', 'B', '1']],
        }
        self.mealy = {
            'type': 'mealy',
            'states': ['A', 'B'],
            'initialState': 'A',
            'inputAlphabet': ['0'],
            'matrix': [[{'nextState': 'B', 'output': 'x'}], [['A', 'y']]],
        }

    def test_valid_machines(self):
        self.assertEqual(validate_machine_structure(self.moore), {'valid': True})
        self.assertEqual(validate_machine_structure(self.mealy), {'valid': True})

    def test_empty_cells_are_allowed(self):
        """Test that completeness is left to is_fully_filled"""
        self.moore['matrix'][0][0] = None
        self.mealy['matrix'][0][0] = None

        self.assertTrue(validate_machine_structure(self.moore)['valid'])
        self.assertTrue(validate_machine_structure(self.mealy)['valid'])

    def test_not_a_dictionary(self):
        result = validate_machine_structure(['A'])
        self.assertFalse(result['valid'])
        self.assertEqual(result['error'], 'Machine must be a dictionary')

    def test_missing_key(self):
        del self.moore['matrix']
        result = validate_machine_structure(self.moore)
        self.assertFalse(result['valid'])
        self.assertEqual(result['error'], 'Missing required key: matrix')

    def test_unknown_type(self):
        self.moore['type'] = 'turing'
        self.assertFalse(validate_machine_structure(self.moore)['valid'])

    def test_duplicate_states(self):
        self.moore['states'] = ['A', 'A']
        result = validate_machine_structure(self.moore)
        self.assertEqual(result['error'], 'State names must be unique')

    def test_initial_state_not_in_states(self):
        self.moore['initialState'] = 'Z'
        result = validate_machine_structure(self.moore)
        self.assertEqual(result['error'], 'Initial state not in states list')

    def test_wrong_row_count(self):
        self.moore['matrix'] = self.moore['matrix'][:1]
        self.assertFalse(validate_machine_structure(self.moore)['valid'])

    def test_moore_row_needs_output_column(self):
        self.moore['matrix'][1] = ['A', 'B']
        result = validate_machine_structure(self.moore)
        self.assertEqual(result['error'], 'Row for state B must have 3 cells')

    def test_unknown_next_state(self):
        self.moore['matrix'][1][0] = 'Z'
        result = validate_machine_structure(self.moore)
        self.assertEqual(result['error'], 'Transition from B on 0 references unknown state Z')

    def test_mealy_unknown_next_state(self):
        self.mealy['matrix'][1][0] = {'nextState': 'Q', 'output': 'x'}
        self.assertFalse(validate_machine_structure(self.mealy)['valid'])

    def test_mealy_cell_must_be_a_pair(self):
        self.mealy['matrix'][0][0] = 'B'
        self.assertFalse(validate_machine_structure(self.mealy)['valid'])
