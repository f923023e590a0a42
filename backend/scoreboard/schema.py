"""Game state schema shared by the server and the browser views.

The JSON Schema documents below are the single definition of what a valid
``GameState`` looks like. The store accepts any merge patch unless the app is
configured with ``ENFORCE_SCHEMA``; views and the control surface read the
enumerations and limits from here.
"""

import copy

import jsonschema

SIDES = ('home', 'away')
QUARTERS = (1, 2, 3, 4, 'OT')
DOWNS = (1, 2, 3, 4)

MAX_TIMEOUTS = 3
MAX_YARDS_TO_GO = 99
MAX_FIELD_POSITION = 100
MIDFIELD = 50
TEAM_NAME_MAX_LEN = 15
TEAM_RECORD_MAX_LEN = 7
SCORE_DELTAS = (-1, 1, 3, 6, 7)

PENALTIES = (
    'False Start',
    'Holding',
    'Pass Interference',
    'Offsides',
    'Illegal Formation',
    'Roughing the Passer',
    'Facemask',
    'Delay of Game',
    'Unsportsmanlike Conduct',
    'Unnecessary Roughness',
    'Personal Foul',
    'Illegal Block Above the Waist',
    'Clipping',
    'Illegal Use of Hands',
    'Encroachment',
    'Neutral Zone Infraction',
    'Illegal Shift',
    'Illegal Motion',
    'Roughing the Kicker',
    'Running Into the Kicker',
    'Illegal Substitution',
    'Too Many Men on Field',
    'Taunting',
    'Horse Collar Tackle',
    'Lowering the Head to Initiate Contact',
    'Tripping',
    'Chop Block',
    'Illegal Blindside Block',
)

TEAM_SCHEMA = {
    'type': 'object',
    'properties': {
        'name': {'type': 'string'},
        'score': {'type': 'integer', 'minimum': 0},
        'record': {'type': 'string'},
        'logo': {'type': 'string'},
        'primaryColor': {'type': 'string'},
        'timeouts': {'type': 'integer', 'minimum': 0, 'maximum': MAX_TIMEOUTS},
        'flags': {'type': 'integer', 'minimum': 0},
    },
    'required': ['name', 'score', 'record', 'logo', 'primaryColor', 'timeouts', 'flags'],
}

_FIELDS = {
    'homeTeam': TEAM_SCHEMA,
    'awayTeam': TEAM_SCHEMA,
    'quarter': {'enum': list(QUARTERS)},
    'timeRemaining': {'type': 'integer', 'minimum': 0},
    'isClockRunning': {'type': 'boolean'},
    'possession': {'enum': ['home', 'away', None]},
    'down': {'enum': list(DOWNS)},
    'yardsToGo': {'type': 'integer', 'minimum': 0, 'maximum': MAX_YARDS_TO_GO},
    'fieldPosition': {'type': 'integer', 'minimum': 0, 'maximum': MAX_FIELD_POSITION},
    'ballOn': {'enum': list(SIDES)},
    'activeFlag': {
        'oneOf': [
            {'type': 'null'},
            {
                'type': 'object',
                'properties': {
                    'team': {'enum': list(SIDES)},
                    'type': {'type': 'string'},
                },
                'required': ['team', 'type'],
            },
        ],
    },
}

GAME_STATE_SCHEMA = {
    'type': 'object',
    'properties': _FIELDS,
    'required': list(_FIELDS),
}

# A merge patch: any subset of the top-level fields, nothing else.
GAME_STATE_PATCH_SCHEMA = {
    'type': 'object',
    'properties': _FIELDS,
    'additionalProperties': False,
}

DEFAULT_GAME_STATE = {
    'homeTeam': {
        'name': 'Chiefs',
        'score': 0,
        'record': '3-3',
        'logo': '\U0001F3C8',
        'primaryColor': '#E31837',
        'timeouts': 3,
        'flags': 0,
    },
    'awayTeam': {
        'name': 'Raiders',
        'score': 0,
        'record': '2-4',
        'logo': '\U0001F3F4\u200D\u2620\uFE0F',
        'primaryColor': '#000000',
        'timeouts': 3,
        'flags': 0,
    },
    'quarter': 1,
    'timeRemaining': 900,
    'isClockRunning': False,
    'possession': None,
    'down': 1,
    'yardsToGo': 10,
    'fieldPosition': MIDFIELD,
    'ballOn': 'away',
    'activeFlag': None,
}


class SchemaViolation(ValueError):
    """A game state or patch failed schema validation."""

    def __init__(self, message, path=()):
        super().__init__(message)
        self.message = message
        self.path = '.'.join(str(p) for p in path)

    def to_dict(self):
        return {'message': self.message, 'path': self.path}


def default_game_state(period_length=None):
    state = copy.deepcopy(DEFAULT_GAME_STATE)
    if period_length is not None:
        state['timeRemaining'] = int(period_length)
    return state


def team_key(team):
    """Map ``'home'``/``'away'`` to the nested state key."""
    if team not in SIDES:
        raise ValueError(f'Unknown team: {team!r}')
    return f'{team}Team'


def _validate(instance, schema):
    try:
        jsonschema.validate(instance, schema)
    except jsonschema.ValidationError as e:
        raise SchemaViolation(e.message, e.absolute_path) from e


def validate_game_state(state):
    _validate(state, GAME_STATE_SCHEMA)


def validate_patch(patch):
    _validate(patch, GAME_STATE_PATCH_SCHEMA)
