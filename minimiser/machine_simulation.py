from typing import List, Optional, Sequence, Tuple

from .machine_model import Machine


def simulate_machine(machine: Machine, inputs: Sequence[str],
                     start: Optional[str] = None) -> List[Tuple[str, str, str, str]]:
    """
    Runs a Moore or Mealy machine over a sequence of input symbols.

    Args:
        machine: The machine to run.
        inputs: Input symbols, each of which must belong to the input alphabet.
        start: State to start from; defaults to the initial state.

    Returns:
        A list of steps in the format [(current_state, symbol, next_state, output), ...].
        For a Moore machine the output is the output of the state entered, for
        a Mealy machine it is the output attached to the transition taken.

    Raises:
        ValueError: If a symbol is not in the input alphabet or the start
        state is unknown.
    """
    current_state = machine.initial_state if start is None else start
    if current_state not in machine.states:
        raise ValueError(f"Unknown state '{current_state}'")

    symbol_positions = {symbol: index for index, symbol in enumerate(machine.input_alphabet)}
    execution_path = []

    for position, symbol in enumerate(inputs):
        if symbol not in symbol_positions:
            raise ValueError(f"Symbol '{symbol}' at position {position} not in input alphabet")

        transition = machine.states[current_state].transitions[symbol_positions[symbol]]
        next_state = transition.next_state

        if machine.is_mealy:
            output = transition.output
        else:
            output = machine.states[next_state].output

        execution_path.append((current_state, symbol, next_state, output))
        current_state = next_state

    return execution_path


def output_sequence(machine: Machine, inputs: Sequence[str], start: Optional[str] = None) -> List[str]:
    """The outputs produced while running the machine over inputs."""
    return [step[3] for step in simulate_machine(machine, inputs, start)]
