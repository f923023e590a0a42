from flask import Flask, current_app
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

from scoreboard.store import GameStateStore
from scoreboard.services.animations import AnimationTracker
from scoreboard.services.clock import GameClock
from scoreboard.services.control import ControlSurface

socketio = SocketIO(async_mode=None)


def control_surface() -> ControlSurface:
    """The control surface (and through it the store) of the current app."""
    return current_app.extensions['scoreboard']


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    origins = flask_app.config.get('CORS_ORIGINS') or []
    CORS(flask_app, origins=origins)
    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=origins)

    # One game state per app, created here and torn down with the process
    cfg = flask_app.config
    period_length = int(cfg.get('PERIOD_LENGTH_SEC', 900))
    store = GameStateStore(
        period_length=period_length,
        enforce_schema=bool(cfg.get('ENFORCE_SCHEMA', False)),
    )
    animations = AnimationTracker(
        field_goal_sec=float(cfg.get('FIELD_GOAL_ANIMATION_SEC', 3.5)),
        touchdown_sec=float(cfg.get('TOUCHDOWN_ANIMATION_SEC', 4.0)),
        score_pulse_sec=float(cfg.get('SCORE_PULSE_SEC', 0.4)),
    )
    clock = GameClock(
        store,
        period_length=period_length,
        tick_sec=float(cfg.get('CLOCK_TICK_SEC', 1.0)),
        log=flask_app.logger,
    )
    flask_app.extensions['scoreboard'] = ControlSurface(store, clock, animations, log=flask_app.logger)

    # Import and register blueprints here
    from scoreboard.main import main
    flask_app.register_blueprint(main)

    from scoreboard.api.game_state import game_state
    flask_app.register_blueprint(game_state, url_prefix='/api/game-state')

    from scoreboard.api.control import control
    flask_app.register_blueprint(control, url_prefix='/api/control')

    # Register Socket.IO event handlers and push every state change to /ws
    from scoreboard.socketio_events import register_socketio_handlers, broadcast_state
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))
    store.subscribe(broadcast_state)

    # Server-owned clock; tests drive clock.tick() directly
    if cfg.get('CLOCK_ENABLED', True) and not cfg.get('TESTING'):
        socketio.start_background_task(clock.run, socketio.sleep)
        flask_app.logger.info(f'[clock] ticker scheduled every {clock.tick_sec}s')

    return flask_app
