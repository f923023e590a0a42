import os
import sys
import pytest

# Ensure the backend root (containing the `scoreboard` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from scoreboard import create_app, socketio, control_surface
from scoreboard.store import GameStateStore


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ORIGINS = ['http://localhost']
    ENFORCE_SCHEMA = False
    CLOCK_ENABLED = False
    CLOCK_TICK_SEC = 1.0
    PERIOD_LENGTH_SEC = 900
    OVERLAY_POLL_MS = 1000
    CONTROL_POLL_MS = 5000
    FIELD_GOAL_ANIMATION_SEC = 3.5
    TOUCHDOWN_ANIMATION_SEC = 4.0
    SCORE_PULSE_SEC = 0.4


class StrictConfig(TestConfig):
    ENFORCE_SCHEMA = True


class FakeClock:
    """Stand-in for time.monotonic that only moves when told to."""

    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def strict_app():
    application = create_app(StrictConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def strict_client(strict_app):
    return strict_app.test_client()


@pytest.fixture()
def surface(flask_app):
    return control_surface()


@pytest.fixture()
def fake_clock(surface):
    clock = FakeClock()
    surface.animations._now = clock
    return clock


@pytest.fixture()
def store():
    return GameStateStore()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass
