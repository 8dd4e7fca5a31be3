from typing import Dict, Sequence

from .machine_model import Machine, State, Transition
from .partitioning import Block, Partition, block_to_string, output_key


def merged_state_label(block: Block) -> str:
    """Joins a block's members in insertion order, e.g. ('A', 'B') -> '{A,B}'."""
    return block_to_string(block)


def state_equivalences(partition: Partition) -> Dict[str, str]:
    """Maps every state label to the merged label of its block."""
    equivalences = {}
    for block in partition:
        merged = merged_state_label(block)
        for state in block:
            equivalences[state] = merged
    return equivalences


def _check_block_outputs(machine: Machine, block: Block) -> None:
    representative_key = output_key(machine.states[block[0]], machine.is_mealy)
    for state in block[1:]:
        if output_key(machine.states[state], machine.is_mealy) != representative_key:
            raise ValueError(
                f"States {block[0]} and {state} were merged but produce different outputs"
            )


def rebuild_machine(machine: Machine, partition_history: Sequence[Partition]) -> Machine:
    """
    Collapses every block of the fixpoint partition into a single state.

    Args:
        machine: The machine the partitions were computed over.
        partition_history: The refinement history; only its last entry is used.

    Returns:
        Machine: The minimised machine, with one state per block. Each merged
        state takes its representative's transition row with next states
        relabelled, and keeps outputs unchanged.

    Raises:
        ValueError: If members of a block do not share the same outputs.
    """
    fixpoint = partition_history[-1]
    equivalences = state_equivalences(fixpoint)
    new_states: Dict[str, State] = {}

    for block in fixpoint:
        _check_block_outputs(machine, block)
        representative = machine.states[block[0]]
        transitions = tuple(
            Transition(equivalences[transition.next_state], transition.output)
            for transition in representative.transitions
        )
        new_states[merged_state_label(block)] = State(transitions, representative.output)

    return Machine(
        initial_state=equivalences[machine.initial_state],
        states=new_states,
        input_alphabet=machine.input_alphabet,
        variant=machine.variant,
    )
