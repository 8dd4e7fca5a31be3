import logging
from typing import NamedTuple, Sequence, Tuple

from .machine_model import Machine, build_machine
from .partitioning import Partition, first_partition, refine_partitions
from .reachability import remove_inaccessible_states
from .rebuild import rebuild_machine

logger = logging.getLogger(__name__)


class MinimisationResult(NamedTuple):
    """Result of minimising a Moore or Mealy machine"""
    machine: Machine
    minimised_partitions: Tuple[Partition, ...]
    removed_states: str


def minimise_machine(machine: Machine) -> MinimisationResult:
    """
    Minimises an already built machine.

    Inaccessible states are dropped first, then the output based partition is
    refined to a fixpoint and each equivalence class becomes one state.
    """
    connected, removed_states = remove_inaccessible_states(machine)
    logger.debug("Reachability filter on %s machine: %s", machine.variant, removed_states)

    partition_history = refine_partitions(connected, first_partition(connected))
    logger.debug("Partition refinement settled after %d partition(s)", len(partition_history))

    minimised = rebuild_machine(connected, partition_history)
    logger.debug("Minimised %d state(s) down to %d", len(machine.states), len(minimised.states))

    return MinimisationResult(minimised, partition_history, removed_states)


def minimise(states: Sequence[str], initial_state: str, input_alphabet: Sequence[str],
             matrix: Sequence[Sequence], variant: str) -> MinimisationResult:
    """
    Builds a machine from its tabular description and minimises it.

    Args:
        states: Ordered state labels, one per matrix row.
        initial_state: Label of the initial state.
        input_alphabet: Ordered input symbols.
        matrix: Fully filled transition table (see build_machine for the
            row layout of each variant).
        variant: 'moore' or 'mealy'.

    Returns:
        MinimisationResult: The minimised machine, the partition history
        (P0 first, fixpoint last) and the removed state report.

    Raises:
        ValueError: If the variant is unknown or a Mealy cell cannot be decoded.
    """
    machine = build_machine(states, initial_state, input_alphabet, matrix, variant)
    return minimise_machine(machine)
