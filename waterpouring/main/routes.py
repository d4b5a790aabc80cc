from flask import current_app, request, jsonify, send_from_directory
import logging
import os
import threading
import uuid

from waterpouring.config import get_configuration_timeout
from waterpouring.main import main_bp
from waterpouring.main.errors import exception_response_mapper
from waterpouring.main.timeout import apply_timeout
from waterpouring.main.pouring_solver.solver.models import replay
from waterpouring.main.pouring_solver.solver.solver_visualizer import SolutionVisualizer
from waterpouring.main.pouring_solver.solver.utils.conversion import (
    state_from_json, format_state, move_to_dict
)
from waterpouring.performance import log_performance_report

logger = logging.getLogger(__name__)


def _run_solver(solver, initial, final, cancel_event):
    """Solve on the worker thread and log that thread's timing report."""
    try:
        return solver.solve(initial, final, cancel_event=cancel_event)
    finally:
        log_performance_report()


@main_bp.route('/health')
def health():
    config = current_app.config['SERVER_CONFIG']
    return jsonify({
        'status': 'ok',
        'timeout_in_seconds': config.timeout_in_seconds
    })


@main_bp.route('/solve', methods=['POST'])
def solve():
    """
    Solve a water pouring puzzle.

    Request body (JSON):
    {
        "from": "0/5, 0/3",
        "to": "4/5, 0/3",
        "visualize": bool (default: false)
    }

    Returns:
    {
        "success": true,
        "num_moves": 7,
        "moves": [{"type": "Fill", "index": 0}, {"type": "Pour", "from": 0, "to": 1}, ...],
        "states": ["0/5, 0/3", "5/5, 0/3", ...],
        "images": {"solution": "solution_<id>.png"}   (only with visualize)
    }
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400

    if 'from' not in data or 'to' not in data:
        return jsonify({'error': 'Both "from" and "to" states are required'}), 400

    visualize = data.get('visualize', False)
    if not isinstance(visualize, bool):
        return jsonify({'error': '"visualize" must be a boolean'}), 400

    mapper = exception_response_mapper()
    config = current_app.config['SERVER_CONFIG']
    solver = current_app.config['SOLVER']

    try:
        initial = state_from_json(data['from'])
        final = state_from_json(data['to'])

        cancel_event = threading.Event()
        moves = apply_timeout(_run_solver, get_configuration_timeout(config),
                              solver, initial, final, cancel_event,
                              cancel_event=cancel_event)
        states = replay(initial, moves)

        response = {
            'success': True,
            'num_moves': len(moves),
            'moves': [move_to_dict(m) for m in moves],
            'states': [format_state(s) for s in states]
        }

        if visualize:
            visualizer = SolutionVisualizer(output_dir=config.output_dir)
            filename = visualizer.visualize_solution(initial, moves, uuid.uuid4().hex[:12])
            response['images'] = {'solution': filename}

        return jsonify(response)

    except Exception as e:
        mapped = mapper(e)
        if mapped is None:
            logger.exception("Unexpected error while solving")
            return jsonify({'error': str(e)}), 500
        status, message = mapped
        logger.info("Solve request rejected (%d): %s", status, message)
        return jsonify({'error': message}), status


@main_bp.route('/images/<filename>')
def solution_image(filename):
    """Serve a rendered solution image."""
    output_dir = os.path.abspath(current_app.config['SERVER_CONFIG'].output_dir)
    filename = os.path.basename(filename)
    if not os.path.isfile(os.path.join(output_dir, filename)):
        return jsonify({'error': 'File not found'}), 404
    return send_from_directory(output_dir, filename)
