from typing import Dict, List, Tuple

from .machine_model import Machine, State

Block = Tuple[str, ...]
Partition = Tuple[Block, ...]


def output_key(state: State, is_mealy: bool) -> Tuple[str, ...]:
    """
    The output a state shows after one step of observation.

    Moore states are keyed on their own output. Mealy states are keyed on the
    outputs of all their transitions in alphabet order.
    """
    if is_mealy:
        return tuple(transition.output for transition in state.transitions)
    return (state.output,)


def first_partition(machine: Machine) -> Partition:
    """
    Builds the first distinguishable partition (P0).

    States are grouped by their output key; blocks appear in order of the
    first state showing each key and members keep table order.

    Args:
        machine: A Moore or Mealy machine.

    Returns:
        Partition: The coarsest partition consistent with one step of output
        observation.
    """
    groups: Dict[Tuple[str, ...], List[str]] = {}
    for label, state in machine.states.items():
        groups.setdefault(output_key(state, machine.is_mealy), []).append(label)
    return tuple(tuple(block) for block in groups.values())


def block_index(partition: Partition) -> Dict[str, int]:
    """Maps each state to the position of its block in the partition."""
    index = {}
    for position, block in enumerate(partition):
        for state in block:
            index[state] = position
    return index


def are_compatible(machine: Machine, state_a: str, state_b: str, index: Dict[str, int]) -> bool:
    """
    Checks whether two states stay together after one refinement step.

    They must already share a block of the previous partition, which carries
    the output equality of P0 forward, and for every input symbol their next
    states must share a block as well. Mealy outputs are not compared here.
    """
    if index[state_a] != index[state_b]:
        return False

    for symbol_index in range(len(machine.input_alphabet)):
        if index[machine.target(state_a, symbol_index)] != index[machine.target(state_b, symbol_index)]:
            return False

    return True


def refine_partition(machine: Machine, partition: Partition) -> Partition:
    """One refinement pass: each state joins the first block whose representative it is compatible with."""
    index = block_index(partition)
    blocks: List[List[str]] = []

    for state in machine.states:
        for block in blocks:
            # The first member added is the block's representative
            if are_compatible(machine, state, block[0], index):
                block.append(state)
                break
        else:
            blocks.append([state])

    return tuple(tuple(block) for block in blocks)


def partitions_equal(a: Partition, b: Partition) -> bool:
    """Positional, block-by-block set comparison of two partitions."""
    if len(a) != len(b):
        return False
    return all(set(block_a) == set(block_b) for block_a, block_b in zip(a, b))


def refine_partitions(machine: Machine, initial_partition: Partition) -> Tuple[Partition, ...]:
    """
    Refines the initial partition until it reaches a fixpoint.

    Args:
        machine: The machine whose states are partitioned.
        initial_partition: P0, normally the result of first_partition.

    Returns:
        Tuple[Partition, ...]: The partition history. Index 0 is the initial
        partition and the last entry is the fixpoint; the confirming pass that
        reproduces the fixpoint is not recorded.

    Raises:
        RuntimeError: If the loop fails to settle within one pass per state.
    """
    history = [initial_partition]
    max_passes = max(len(machine.states), 1)

    while True:
        previous = history[-1]
        current = refine_partition(machine, previous)
        if partitions_equal(current, previous):
            return tuple(history)

        # Each unsettled pass adds at least one block, so there can be no
        # more recorded partitions than states
        if len(current) <= len(previous) or len(history) >= max_passes:
            raise RuntimeError(
                f"Partition refinement did not converge after {len(history)} passes "
                f"over {len(machine.states)} states"
            )
        history.append(current)


def block_to_string(block: Block) -> str:
    return '{' + ','.join(block) + '}'


def partition_to_string(partition: Partition) -> str:
    """Renders a partition as {A,B},{C,D}."""
    return ','.join(block_to_string(block) for block in partition)
