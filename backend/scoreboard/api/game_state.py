from flask import Blueprint, jsonify, request, current_app
from scoreboard import control_surface
from scoreboard.schema import SchemaViolation


game_state = Blueprint('game_state', __name__)


@game_state.route('', methods=['GET'])
def get_game_state():
    try:
        state = control_surface().store.get()
    except Exception:
        current_app.logger.exception('[state-get] failed')
        return jsonify({'error': 'Failed to get game state'}), 500
    return jsonify(state)


@game_state.route('', methods=['PATCH'])
def update_game_state():
    updates = request.get_json(silent=True)
    if not isinstance(updates, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400
    try:
        state = control_surface().store.update(updates)
    except SchemaViolation as e:
        current_app.logger.info(f'[state-update] rejected path={e.path} reason={e.message}')
        return jsonify({'error': 'Invalid game state update', 'details': e.to_dict()}), 400
    except Exception:
        current_app.logger.exception('[state-update] failed')
        return jsonify({'error': 'Failed to update game state'}), 500
    current_app.logger.info(f"[state-update] fields={','.join(sorted(updates))}")
    return jsonify(state)


@game_state.route('/reset', methods=['POST'])
def reset_game_state():
    try:
        state = control_surface().store.reset()
    except Exception:
        current_app.logger.exception('[state-reset] failed')
        return jsonify({'error': 'Failed to reset game state'}), 500
    current_app.logger.info('[state-reset] defaults restored')
    return jsonify(state)
