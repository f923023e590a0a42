"""Display rendering: game state + animation flags -> display view model.

Everything here is a pure function of its arguments; the templates and the
overlay script only lay out what ``build_display`` returns. The store keeps
raw patches as given, so every helper has to cope with missing or
mistyped fields and still produce something printable.
"""

from typing import Any, Dict, Optional, Tuple

from ..schema import MAX_TIMEOUTS, MIDFIELD, SIDES
from .animations import idle_animations

IMAGE_PREFIXES = ('http://', 'https://', 'data:')
_SUFFIXES = ('th', 'st', 'nd', 'rd')


def _as_int(value) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def _text(value) -> str:
    return '' if value is None else str(value)


def format_clock(seconds) -> str:
    """Render integer seconds as zero padded ``mm:ss``; junk counts as 0."""
    seconds = max(0, _as_int(seconds) or 0)
    mins, secs = divmod(seconds, 60)
    return f'{mins:02d}:{secs:02d}'


def ordinal_suffix(n: int) -> str:
    v = int(n) % 100
    if 11 <= v <= 13:
        return 'th'
    last = v % 10
    return _SUFFIXES[last] if last < len(_SUFFIXES) else 'th'


def ordinal(n) -> str:
    number = _as_int(n)
    if number is None or number != n:
        return _text(n)
    return f'{number}{ordinal_suffix(number)}'


def quarter_label(quarter) -> str:
    if quarter == 'OT':
        return 'OT'
    return ordinal(quarter)


def down_and_distance(down, yards_to_go) -> str:
    return f'{ordinal(down)} & {_text(yards_to_go)}'


def team_abbreviation(name) -> str:
    return _text(name)[:3].upper()


def _team(state: Dict[str, Any], side: str) -> Dict[str, Any]:
    team = state.get(f'{side}Team')
    return team if isinstance(team, dict) else {}


def _side_abbreviation(state, side):
    return team_abbreviation(_team(state, side).get('name'))


def field_position_label(state: Dict[str, Any]) -> str:
    """Broadcast label for the ball spot: ``50`` or ``<ABBR> <yard line>``."""
    position = _as_int(state.get('fieldPosition'))
    if position is None:
        return _text(state.get('fieldPosition'))
    if position == MIDFIELD:
        return str(MIDFIELD)
    if position < MIDFIELD:
        return f"{_side_abbreviation(state, 'home')} {position}"
    return f"{_side_abbreviation(state, 'away')} {100 - position}"


def field_position_control(state: Dict[str, Any]) -> Tuple[str, str]:
    """Operator panel variant: (yard line, ``MIDFIELD`` / ``<ABBR> SIDE``)."""
    position = _as_int(state.get('fieldPosition'))
    if position is None:
        return _text(state.get('fieldPosition')), ''
    if position == MIDFIELD:
        return str(MIDFIELD), 'MIDFIELD'
    if position < MIDFIELD:
        return str(position), f"{_side_abbreviation(state, 'home')} SIDE"
    return str(100 - position), f"{_side_abbreviation(state, 'away')} SIDE"


def logo_view(logo) -> Dict[str, str]:
    logo = _text(logo)
    if logo.startswith(IMAGE_PREFIXES):
        return {'kind': 'image', 'src': logo}
    return {'kind': 'text', 'text': logo}


def team_color(state: Dict[str, Any], side: Optional[str]) -> Optional[str]:
    if side not in SIDES:
        return None
    return _team(state, side).get('primaryColor')


def _team_view(state, side, animations):
    team = _team(state, side)
    timeouts = _as_int(team.get('timeouts')) or 0
    return {
        'side': side,
        'name': _text(team.get('name')).upper(),
        'abbreviation': team_abbreviation(team.get('name')),
        'record': f"({_text(team.get('record'))})",
        'logo': logo_view(team.get('logo')),
        'color': team.get('primaryColor'),
        'score': team.get('score', 0),
        'timeouts': min(max(0, timeouts), MAX_TIMEOUTS),
        'has_possession': state.get('possession') == side,
        'score_animating': bool(animations['scoreAnimating'].get(side)),
    }


def _banner_view(state, banner):
    if not banner or not banner.get('active') or banner.get('team') not in SIDES:
        return None
    return {'team': banner['team'], 'color': team_color(state, banner['team'])}


def build_display(state: Dict[str, Any], animations: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    animations = animations or idle_animations()
    flag = state.get('activeFlag')
    if not isinstance(flag, dict):
        flag = None
    yard_line, side_caption = field_position_control(state)
    return {
        'home': _team_view(state, 'home', animations),
        'away': _team_view(state, 'away', animations),
        'clock': format_clock(state.get('timeRemaining')),
        'clock_running': bool(state.get('isClockRunning')),
        'quarter': quarter_label(state.get('quarter')),
        'down_and_distance': down_and_distance(state.get('down'), state.get('yardsToGo')),
        'field_position': field_position_label(state),
        'field_position_control': {'yard_line': yard_line, 'caption': side_caption},
        'possession': state.get('possession'),
        'flag': None if not flag else {
            'type': flag.get('type'),
            'team': flag.get('team'),
            'color': team_color(state, flag.get('team')),
        },
        'touchdown': _banner_view(state, animations.get('touchdownAnimation')),
        'field_goal': _banner_view(state, animations.get('fieldGoalAnimation')),
    }
