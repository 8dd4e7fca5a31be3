from typing import Dict, List, Optional, Sequence, Union

from .machine_model import MEALY, MOORE, VARIANTS


def _is_filled(cell) -> bool:
    if cell is None:
        return False
    if isinstance(cell, str):
        return cell.strip() != ''
    if isinstance(cell, dict):
        return _is_filled(cell.get('nextState', cell.get('next_state'))) and _is_filled(cell.get('output'))
    if isinstance(cell, (list, tuple)):
        return len(cell) == 2 and all(_is_filled(part) for part in cell)
    return True


def is_fully_filled(matrix: Optional[Sequence[Sequence]]) -> bool:
    """
    Checks that every cell of the transition table holds a value.

    Minimisation may only run on a fully filled table. An empty matrix, or one
    whose first row is empty, counts as not filled.
    """
    if not matrix or not matrix[0]:
        return False

    width = len(matrix[0])
    for row in matrix:
        if row is None or len(row) < width:
            return False
        for cell in row[:width]:
            if not _is_filled(cell):
                return False

    return True


def generate_empty_matrix(rows: int, columns: int, extra_columns: int = 0) -> List[List[None]]:
    """A rows x (columns + extra_columns) table of None cells for the editor to fill in."""
    return [[None] * (columns + extra_columns) for _ in range(rows)]


def remove_invalid_commas(text: str) -> str:
    """Drops commas at the start of the text or straight after another comma."""
    cleaned = []
    for char in text:
        if char == ',' and (not cleaned or cleaned[-1] == ','):
            continue
        cleaned.append(char)
    return ''.join(cleaned)


def remove_trailing_comma(text: str) -> str:
    if text.endswith(','):
        return text[:-1]
    return text


def clean_symbol_input(text: str) -> str:
    """Normalises free-text such as ',A,,B,' into 'A,B'."""
    return remove_trailing_comma(remove_invalid_commas(text.replace(' ', '')))


def is_duplicate(original: str, new: str) -> bool:
    """
    Checks whether the last element typed into new already exists in original.

    Only an edit that grows the text can introduce a duplicate, so a shorter
    new text is never reported.
    """
    if len(new) < len(original):
        return False
    last_element = new.split(',')[-1]
    return last_element in original.split(',')


def parse_symbol_list(value: Union[str, Sequence[str]], name: str = 'symbols') -> List[str]:
    """
    Parses a comma separated string (or a list) of labels.

    Free text may only hold alphanumeric labels. Lists are taken as given
    so that merged labels such as '{A,B}' can be fed back in.

    Raises:
        ValueError: If a label is invalid or appears twice.
    """
    free_text = isinstance(value, str)
    if free_text:
        cleaned = clean_symbol_input(value)
        symbols = cleaned.split(',') if cleaned else []
    else:
        symbols = [str(symbol).strip() for symbol in value]

    seen = set()
    for symbol in symbols:
        if not symbol or (free_text and not symbol.isalnum()):
            raise ValueError(f"Invalid {name} value '{symbol}': only alphanumeric values are allowed")
        if symbol in seen:
            raise ValueError(f"Duplicate {name} value '{symbol}'")
        seen.add(symbol)

    return symbols


def normalise_machine_definition(definition: Dict) -> Dict:
    """
    Returns a copy of a machine definition with comma separated states and
    input alphabet turned into lists and the machine type lower-cased.
    """
    normalised = dict(definition)
    if 'states' in normalised and isinstance(normalised['states'], (str, list, tuple)):
        normalised['states'] = parse_symbol_list(normalised['states'], 'state')
    if 'inputAlphabet' in normalised and isinstance(normalised['inputAlphabet'], (str, list, tuple)):
        normalised['inputAlphabet'] = parse_symbol_list(normalised['inputAlphabet'], 'input symbol')
    if isinstance(normalised.get('type'), str):
        normalised['type'] = normalised['type'].strip().lower()
    return normalised


def _cell_next_state(cell, variant: str) -> Optional[str]:
    if variant == MOORE:
        return None if cell is None else str(cell)
    if isinstance(cell, dict):
        next_state = cell.get('nextState', cell.get('next_state'))
        return None if next_state is None else str(next_state)
    if isinstance(cell, (list, tuple)) and cell:
        return None if cell[0] is None else str(cell[0])
    return None


def validate_machine_structure(definition: Dict) -> Dict:
    """
    Validates a machine definition before it is handed to the minimiser.

    Empty cells are allowed here; whether the table is complete is checked
    separately with is_fully_filled.

    Args:
        definition: A dictionary with the keys type, states, initialState,
            inputAlphabet and matrix. states and inputAlphabet must already be
            lists (see normalise_machine_definition).

    Returns:
        Dict: Validation result with 'valid' boolean and optional 'error' message
    """
    if not isinstance(definition, dict):
        return {'valid': False, 'error': 'Machine must be a dictionary'}

    required_keys = ['type', 'states', 'initialState', 'inputAlphabet', 'matrix']

    for key in required_keys:
        if key not in definition:
            return {'valid': False, 'error': f'Missing required key: {key}'}

    variant = definition['type']
    if variant not in VARIANTS:
        return {'valid': False, 'error': f"Unknown machine type: {variant}"}

    states = definition['states']
    alphabet = definition['inputAlphabet']
    matrix = definition['matrix']

    if not isinstance(states, list) or not states:
        return {'valid': False, 'error': 'states must be a non-empty list'}

    if not isinstance(alphabet, list) or not alphabet:
        return {'valid': False, 'error': 'inputAlphabet must be a non-empty list'}

    if len(set(states)) != len(states):
        return {'valid': False, 'error': 'State names must be unique'}

    if len(set(alphabet)) != len(alphabet):
        return {'valid': False, 'error': 'Input symbols must be unique'}

    if definition['initialState'] not in states:
        return {'valid': False, 'error': 'Initial state not in states list'}

    if not isinstance(matrix, list):
        return {'valid': False, 'error': 'matrix must be a list'}

    if len(matrix) != len(states):
        return {'valid': False, 'error': f'matrix must have one row per state ({len(states)} expected)'}

    width = len(alphabet) + (1 if variant == MOORE else 0)
    known_states = set(states)

    for row_index, row in enumerate(matrix):
        state = states[row_index]
        if not isinstance(row, list) or len(row) != width:
            return {'valid': False, 'error': f'Row for state {state} must have {width} cells'}

        for column, cell in enumerate(row[:len(alphabet)]):
            if variant == MEALY and cell is not None and not isinstance(cell, (dict, list, tuple)):
                return {'valid': False, 'error': f'Mealy cell for state {state} on {alphabet[column]} '
                                                 f'must hold a next state and an output'}
            next_state = _cell_next_state(cell, variant)
            if next_state and next_state not in known_states:
                return {'valid': False, 'error': f'Transition from {state} on {alphabet[column]} '
                                                 f'references unknown state {next_state}'}

    return {'valid': True}
