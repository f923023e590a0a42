import os


def _flag(name, default='0'):
    return os.environ.get(name, default).lower() in ('1', 'true', 'yes', 'on')


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Browser origins allowed to call the API / socket (comma separated)
    CORS_ORIGINS = [o.strip() for o in os.environ.get(
        'CORS_ORIGINS', 'http://localhost:5000,http://127.0.0.1:5000'
    ).split(',') if o.strip()]
    # Reject PATCH bodies that violate the game state schema (off = store as-is)
    ENFORCE_SCHEMA = _flag('ENFORCE_SCHEMA')
    # Server-owned game clock
    CLOCK_ENABLED = _flag('CLOCK_ENABLED', '1')
    CLOCK_TICK_SEC = float(os.environ.get('CLOCK_TICK_SEC', '1'))
    PERIOD_LENGTH_SEC = int(os.environ.get('PERIOD_LENGTH_SEC', '900'))
    # Client polling intervals (ms)
    OVERLAY_POLL_MS = int(os.environ.get('OVERLAY_POLL_MS', '1000'))
    CONTROL_POLL_MS = int(os.environ.get('CONTROL_POLL_MS', '5000'))
    # Animation durations (seconds)
    FIELD_GOAL_ANIMATION_SEC = float(os.environ.get('FIELD_GOAL_ANIMATION_SEC', '3.5'))
    TOUCHDOWN_ANIMATION_SEC = float(os.environ.get('TOUCHDOWN_ANIMATION_SEC', '4.0'))
    SCORE_PULSE_SEC = float(os.environ.get('SCORE_PULSE_SEC', '0.4'))
