from flask import Blueprint, jsonify, render_template, current_app, request
from scoreboard import control_surface
from scoreboard.schema import PENALTIES, QUARTERS, DOWNS, SCORE_DELTAS
from scoreboard.services.display import build_display

main = Blueprint('main', __name__)


def _current_display():
    surface = control_surface()
    state = surface.store.get()
    animations = surface.animations.snapshot()
    return state, build_display(state, animations), animations


def _control_context():
    state, view, animations = _current_display()
    return {
        'state': state,
        'view': view,
        'animations': animations,
        'penalties': PENALTIES,
        'quarters': QUARTERS,
        'downs': DOWNS,
        'score_deltas': SCORE_DELTAS,
    }


@main.route('/')
def index():
    """Operator control page."""
    return render_template(
        'control.html',
        poll_ms=current_app.config.get('CONTROL_POLL_MS', 5000),
        overlay_url=request.host_url.rstrip('/') + '/overlay',
        **_control_context(),
    )


@main.route('/overlay')
def overlay():
    """Read-only scoreboard for embedding in broadcast software."""
    _, view, animations = _current_display()
    return render_template(
        'overlay.html',
        view=view,
        animations=animations,
        poll_ms=current_app.config.get('OVERLAY_POLL_MS', 1000),
    )


@main.route('/display/fragment')
def display_fragment():
    _, view, animations = _current_display()
    return render_template('_scoreboard.html', view=view, animations=animations)


@main.route('/control/fragment')
def control_fragment():
    return render_template('_controls.html', **_control_context())


@main.route('/api/display', methods=['GET'])
def get_display():
    try:
        _, view, animations = _current_display()
    except Exception:
        current_app.logger.exception('[display] failed to build view')
        return jsonify({'error': 'Failed to build display'}), 500
    return jsonify({'display': view, 'animations': animations})
