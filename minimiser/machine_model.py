from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple

MOORE = 'moore'
MEALY = 'mealy'
VARIANTS = (MOORE, MEALY)


class Transition(NamedTuple):
    """A single outgoing edge. Only Mealy transitions carry an output."""
    next_state: str
    output: Optional[str] = None


class State(NamedTuple):
    """
    One row of the transition table.

    transitions holds one entry per input symbol, in alphabet order. Moore
    states own an output symbol; Mealy states leave it as None.
    """
    transitions: Tuple[Transition, ...]
    output: Optional[str] = None

    def next_states(self) -> List[str]:
        return [transition.next_state for transition in self.transitions]


class Machine(NamedTuple):
    """
    A Moore or Mealy machine.

    states is an insertion-ordered mapping from label to State; the order is
    the row order of the transition table and drives partition block order
    and merged label synthesis.
    """
    initial_state: str
    states: Dict[str, State]
    input_alphabet: Tuple[str, ...]
    variant: str

    @property
    def is_mealy(self) -> bool:
        return self.variant == MEALY

    def target(self, state: str, symbol_index: int) -> str:
        return self.states[state].transitions[symbol_index].next_state


def check_variant(variant: str) -> str:
    """Normalise a variant name, raising ValueError for unknown machine types."""
    normalised = str(variant).strip().lower()
    if normalised not in VARIANTS:
        raise ValueError(f"Unknown machine type '{variant}'. Expected one of: {', '.join(VARIANTS)}")
    return normalised


def decode_mealy_cell(cell) -> Transition:
    """
    Decode a Mealy matrix cell into a Transition.

    Cells are either {'nextState': ..., 'output': ...} objects (the shape the
    table editor produces) or two-item [next_state, output] sequences.
    """
    if isinstance(cell, dict):
        next_state = cell.get('nextState', cell.get('next_state'))
        output = cell.get('output')
        if next_state is None or output is None:
            raise ValueError(f"Mealy cell must define nextState and output: {cell!r}")
        return Transition(str(next_state), str(output))

    if isinstance(cell, (list, tuple)) and len(cell) == 2:
        return Transition(str(cell[0]), str(cell[1]))

    raise ValueError(f"Cannot decode Mealy cell: {cell!r}")


def build_machine(states: Sequence[str], initial_state: str, input_alphabet: Sequence[str],
                  matrix: Sequence[Sequence], variant: str) -> Machine:
    """
    Builds a Machine from the tabular description entered by the user.

    Args:
        states: Ordered state labels, one per matrix row.
        initial_state: Label of the initial state.
        input_alphabet: Ordered input symbols, one per transition column.
        matrix: The transition table. Moore rows hold len(input_alphabet)
            next-state cells followed by the state's output cell. Mealy rows
            hold len(input_alphabet) (next_state, output) cells.
        variant: MOORE or MEALY.

    Returns:
        Machine: The typed machine. The table is assumed to be fully filled;
        no reference checking is done here.
    """
    variant = check_variant(variant)
    alphabet = tuple(str(symbol) for symbol in input_alphabet)
    width = len(alphabet)
    states_map: Dict[str, State] = {}

    for row_index, label in enumerate(states):
        row = matrix[row_index]
        if variant == MEALY:
            transitions = tuple(decode_mealy_cell(row[j]) for j in range(width))
            states_map[str(label)] = State(transitions)
        else:
            transitions = tuple(Transition(str(row[j])) for j in range(width))
            # The output lives in the last column of a Moore row
            states_map[str(label)] = State(transitions, str(row[width]))

    return Machine(str(initial_state), states_map, alphabet, variant)
