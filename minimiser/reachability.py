from typing import Set, Tuple

from .machine_model import Machine

NO_STATE_REMOVED = 'No state was removed'


def accessible_states(machine: Machine) -> Set[str]:
    """Depth-first walk from the initial state, using an explicit stack."""
    visited = {machine.initial_state}
    stack = [machine.initial_state]

    while stack:
        current = stack.pop()
        for target in machine.states[current].next_states():
            if target not in visited:
                visited.add(target)
                stack.append(target)

    return visited


def format_removed_states(removed) -> str:
    if not removed:
        return NO_STATE_REMOVED
    return '[ ' + ','.join(removed) + ' ]'


def remove_inaccessible_states(machine: Machine) -> Tuple[Machine, str]:
    """
    Remove states that cannot be reached from the initial state.

    The given machine is left untouched; a filtered copy is returned together
    with a human-readable report of what was removed.

    Args:
        machine: The machine to filter. Its initial state must be one of its
            states.

    Returns:
        Tuple[Machine, str]: The filtered machine and either
        "No state was removed" or "[ E,F ]" listing the removed labels in
        table order.
    """
    reachable = accessible_states(machine)

    if len(reachable) == len(machine.states):
        return machine._replace(states=dict(machine.states)), NO_STATE_REMOVED

    removed = [label for label in machine.states if label not in reachable]
    kept = {label: state for label, state in machine.states.items() if label in reachable}

    return machine._replace(states=kept), format_removed_states(removed)
