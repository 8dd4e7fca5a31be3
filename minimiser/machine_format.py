from typing import Dict, List, Sequence

from .machine_model import Machine
from .partitioning import Partition, partition_to_string


def machine_to_dict(machine: Machine) -> Dict:
    """
    Converts a machine to the same JSON shape used to describe it on input.

    Moore rows list the next states followed by the state's output; Mealy
    rows list {'nextState', 'output'} cells.
    """
    matrix = []
    for state in machine.states.values():
        if machine.is_mealy:
            row = [
                {'nextState': transition.next_state, 'output': transition.output}
                for transition in state.transitions
            ]
        else:
            row = state.next_states() + [state.output]
        matrix.append(row)

    return {
        'type': machine.variant,
        'states': list(machine.states),
        'initialState': machine.initial_state,
        'inputAlphabet': list(machine.input_alphabet),
        'matrix': matrix,
    }


def partition_history_to_lists(history: Sequence[Partition]) -> List[List[List[str]]]:
    return [[list(block) for block in partition] for partition in history]


def partition_listing(history: Sequence[Partition]) -> List[str]:
    """Renders a partition history as ['P0 = {A,B},{C,D}', ...]."""
    return [f"P{index} = {partition_to_string(partition)}" for index, partition in enumerate(history)]
