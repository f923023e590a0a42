from flask import Blueprint, jsonify, request, current_app
from scoreboard import control_surface
from scoreboard.schema import PENALTIES, SchemaViolation
from scoreboard.socketio_events import broadcast_animation


control = Blueprint('control', __name__)


def _body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _respond(operation: str, action):
    """Run a control operation and shape the response.

    Bad arguments are the operator's fault (400); anything else is ours (500).
    """
    surface = control_surface()
    try:
        state = action(surface)
    except SchemaViolation as e:
        current_app.logger.info(f'[control] {operation} rejected path={e.path} reason={e.message}')
        return jsonify({'error': 'Invalid game state update', 'details': e.to_dict()}), 400
    except KeyError as e:
        return jsonify({'error': f'Missing field: {e.args[0]}'}), 400
    except (TypeError, ValueError) as e:
        current_app.logger.info(f'[control] {operation} bad request: {e}')
        return jsonify({'error': str(e) or f'Invalid arguments for {operation}'}), 400
    except Exception:
        current_app.logger.exception(f'[control] {operation} failed')
        return jsonify({'error': f'Failed to {operation.replace("_", " ")}'}), 500
    return jsonify({'state': state, 'animations': surface.animations.snapshot()})


def _quarter(value):
    return value if value == 'OT' else int(value)


@control.route('/penalties', methods=['GET'])
def list_penalties():
    return jsonify({'penalties': list(PENALTIES)})


@control.route('/score', methods=['POST'])
def update_score():
    data = _body()

    def _score(surface):
        state = surface.update_score(data['team'], int(data['points']))
        broadcast_animation(surface.animations.snapshot())
        return state

    return _respond('update_score', _score)


@control.route('/team', methods=['POST'])
def update_team():
    data = dict(_body())
    team = data.pop('team', None)
    return _respond('update_team', lambda s: s.update_team(team, **data))


@control.route('/timeouts', methods=['POST'])
def adjust_timeouts():
    data = _body()
    return _respond('adjust_timeouts', lambda s: s.adjust_timeouts(data['team'], int(data['delta'])))


@control.route('/clock/toggle', methods=['POST'])
def toggle_clock():
    return _respond('toggle_clock', lambda s: s.toggle_clock())


@control.route('/clock/reset', methods=['POST'])
def reset_clock():
    return _respond('reset_clock', lambda s: s.reset_clock())


@control.route('/clock/adjust', methods=['POST'])
def adjust_time():
    data = _body()
    return _respond('adjust_time', lambda s: s.adjust_time(int(data['seconds'])))


@control.route('/quarter', methods=['POST'])
def set_quarter():
    data = _body()
    return _respond('set_quarter', lambda s: s.set_quarter(_quarter(data['quarter'])))


@control.route('/possession', methods=['POST'])
def set_possession():
    data = _body()
    return _respond('set_possession', lambda s: s.set_possession(data.get('team')))


@control.route('/possession/toggle', methods=['POST'])
def toggle_possession():
    return _respond('toggle_possession', lambda s: s.toggle_possession())


@control.route('/down', methods=['POST'])
def set_down():
    data = _body()
    return _respond('set_down', lambda s: s.set_down(int(data['down'])))


@control.route('/yards-to-go', methods=['POST'])
def set_yards_to_go():
    data = _body()
    return _respond('set_yards_to_go', lambda s: s.set_yards_to_go(int(data['yards'])))


@control.route('/yards-to-go/adjust', methods=['POST'])
def adjust_yards_to_go():
    data = _body()
    return _respond('adjust_yards_to_go', lambda s: s.adjust_yards_to_go(int(data['delta'])))


@control.route('/field-position', methods=['POST'])
def set_field_position():
    data = _body()
    return _respond(
        'set_field_position',
        lambda s: s.set_field_position(int(data['yard_line']), data['side']),
    )


@control.route('/field-position/adjust', methods=['POST'])
def adjust_field_position():
    data = _body()
    return _respond('adjust_field_position', lambda s: s.adjust_field_position(int(data['delta'])))


@control.route('/flag', methods=['POST'])
def set_flag():
    data = _body()
    return _respond('set_flag', lambda s: s.set_flag(data['team'], data['type']))


@control.route('/flag', methods=['DELETE'])
def clear_flag():
    return _respond('clear_flag', lambda s: s.clear_flag())


@control.route('/reset', methods=['POST'])
def reset_game():
    return _respond('reset_game', lambda s: s.reset_game())
