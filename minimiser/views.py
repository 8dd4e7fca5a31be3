import json
import logging

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from .machine_format import machine_to_dict, partition_history_to_lists, partition_listing
from .machine_model import MOORE, VARIANTS, build_machine
from .machine_properties import (
    clean_symbol_input,
    generate_empty_matrix,
    is_fully_filled,
    normalise_machine_definition,
    validate_machine_structure,
)
from .machine_simulation import simulate_machine
from .minimisation import minimise

logger = logging.getLogger(__name__)


def _load_machine_definition(request):
    """
    Parses the request body and returns ((data, definition), error_response).

    Exactly one of the two is None.
    """
    data = json.loads(request.body)
    definition = data.get('machine')

    if not definition:
        return None, JsonResponse({'error': 'Missing machine definition'}, status=400)

    if not isinstance(definition, dict):
        return None, JsonResponse({'error': 'Machine must be a dictionary'}, status=400)

    definition = normalise_machine_definition(definition)

    validation = validate_machine_structure(definition)
    if not validation['valid']:
        return None, JsonResponse({'error': validation['error']}, status=400)

    return (data, definition), None


@csrf_exempt
@require_POST
def minimise_machine(request):
    """
    Django view to handle Moore/Mealy machine minimisation requests.

    Expects a POST request with a JSON body containing:
    - machine: {type, states, initialState, inputAlphabet, matrix}

    Returns a JSON response with the minimised machine, the equivalence
    partitions and the states removed as inaccessible.
    """
    try:
        loaded, error_response = _load_machine_definition(request)
        if error_response:
            return error_response
        _, definition = loaded

        if not is_fully_filled(definition['matrix']):
            return JsonResponse({'error': 'Transition table is not fully filled'}, status=400)

        result = minimise(
            definition['states'],
            definition['initialState'],
            definition['inputAlphabet'],
            definition['matrix'],
            definition['type'],
        )

        original_count = len(definition['states'])
        minimised_count = len(result.machine.states)
        statistics = {
            'original_states_count': original_count,
            'minimised_states_count': minimised_count,
            'states_reduced': original_count - minimised_count,
            'states_reduction_percentage': round(
                ((original_count - minimised_count) / original_count) * 100, 2
            ),
            'partition_count': len(result.minimised_partitions),
            'is_already_minimal': original_count == minimised_count,
        }
        logger.info("Minimised %s machine from %d to %d states",
                    definition['type'], original_count, minimised_count)

        return JsonResponse({
            'success': True,
            'minimised_machine': machine_to_dict(result.machine),
            'partitions': partition_history_to_lists(result.minimised_partitions),
            'partition_listing': partition_listing(result.minimised_partitions),
            'removed_states': result.removed_states,
            'statistics': statistics,
            'message': 'Machine was already minimal' if statistics['is_already_minimal']
                       else 'Machine minimised successfully'
        })

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception("Machine minimisation failed")
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


@csrf_exempt
@require_POST
def check_machine(request):
    """
    Django view to validate a machine definition without minimising it.

    Returns whether the structure is valid and whether the transition table is
    fully filled, i.e. whether minimisation may run.
    """
    try:
        data = json.loads(request.body)
        definition = data.get('machine')

        if not definition:
            return JsonResponse({'error': 'Missing machine definition'}, status=400)

        if not isinstance(definition, dict):
            return JsonResponse({'error': 'Machine must be a dictionary'}, status=400)

        definition = normalise_machine_definition(definition)
        validation = validate_machine_structure(definition)
        fully_filled = is_fully_filled(definition.get('matrix'))

        return JsonResponse({
            'valid': validation['valid'],
            'error': validation.get('error'),
            'fully_filled': fully_filled,
            'can_minimise': validation['valid'] and fully_filled,
        })

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception("Machine check failed")
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


@csrf_exempt
@require_POST
def matrix_template(request):
    """
    Django view returning an empty transition table for a machine shape.

    Expects a POST request with a JSON body containing type, states and
    inputAlphabet. Moore tables get one extra column for the state output.
    """
    try:
        data = json.loads(request.body)
        shape = normalise_machine_definition({
            'type': data.get('type', MOORE),
            'states': data.get('states', []),
            'inputAlphabet': data.get('inputAlphabet', []),
        })

        if shape['type'] not in VARIANTS:
            return JsonResponse({'error': f"Unknown machine type: {shape['type']}"}, status=400)

        extra_columns = 1 if shape['type'] == MOORE else 0
        matrix = generate_empty_matrix(len(shape['states']), len(shape['inputAlphabet']), extra_columns)

        return JsonResponse({
            'type': shape['type'],
            'states': shape['states'],
            'inputAlphabet': shape['inputAlphabet'],
            'matrix': matrix,
        })

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception("Matrix template generation failed")
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


@csrf_exempt
@require_POST
def simulate_machine_view(request):
    """
    Django view to run a Moore or Mealy machine over an input sequence.

    Expects a POST request with a JSON body containing:
    - machine: The machine definition
    - input: A list of input symbols or a comma separated string

    Returns a JSON response with the step path and the output sequence.
    """
    try:
        loaded, error_response = _load_machine_definition(request)
        if error_response:
            return error_response
        data, definition = loaded

        if not is_fully_filled(definition['matrix']):
            return JsonResponse({'error': 'Transition table is not fully filled'}, status=400)

        raw_input = data.get('input', [])
        if isinstance(raw_input, str):
            cleaned = clean_symbol_input(raw_input)
            inputs = cleaned.split(',') if cleaned else []
        else:
            inputs = [str(symbol) for symbol in raw_input]

        machine = build_machine(
            definition['states'],
            definition['initialState'],
            definition['inputAlphabet'],
            definition['matrix'],
            definition['type'],
        )
        path = simulate_machine(machine, inputs)

        return JsonResponse({
            'path': path,
            'outputs': [step[3] for step in path],
            'final_state': path[-1][2] if path else machine.initial_state,
        })

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception("Machine simulation failed")
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)
