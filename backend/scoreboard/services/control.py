import logging
from typing import Any, Dict, Optional

from ..schema import (
    DOWNS,
    MAX_FIELD_POSITION,
    MAX_TIMEOUTS,
    MAX_YARDS_TO_GO,
    MIDFIELD,
    PENALTIES,
    QUARTERS,
    SCORE_DELTAS,
    SIDES,
    TEAM_NAME_MAX_LEN,
    TEAM_RECORD_MAX_LEN,
    team_key,
)
from ..store import GameStateStore
from .animations import AnimationTracker
from .clock import GameClock

logger = logging.getLogger(__name__)

TEAM_FIELDS = ('name', 'score', 'record', 'logo', 'primaryColor', 'timeouts', 'flags')


def clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))


def ball_side(field_position: int) -> str:
    """Side of the field the ball is on; midfield counts as away."""
    return 'home' if field_position < MIDFIELD else 'away'


def _side(team):
    if team not in SIDES:
        raise ValueError(f'Unknown team: {team!r}')
    return team


class ControlSurface:
    """Operator operations on the shared game state.

    Each operation reads the current state, computes a merge patch, clamps
    it to the game invariants and hands it to the store. Nested team
    objects are always sent whole since the store merges shallowly.
    """

    def __init__(self, store: GameStateStore, clock: GameClock,
                 animations: AnimationTracker, log: Optional[logging.Logger] = None):
        self.store = store
        self.clock = clock
        self.animations = animations
        self.log = log or logger

    # ---- teams / scores ----
    def _update_team(self, team: str, compute):
        key = team_key(team)

        def _patch(state):
            current = dict(state.get(key) or {})
            return {key: {**current, **compute(current)}}

        return self.store.modify(_patch)

    def update_score(self, team: str, delta: int) -> Dict[str, Any]:
        delta = int(delta)
        if delta not in SCORE_DELTAS:
            raise ValueError(f'Unsupported score change: {delta}')
        state = self._update_team(team, lambda t: {'score': max(0, int(t.get('score') or 0) + delta)})
        self.animations.trigger_for_score(team, delta)
        self.log.info(f"[score] team={team} delta={delta:+d} score={state[team_key(team)]['score']}")
        return state

    def update_team(self, team: str, **fields) -> Dict[str, Any]:
        unknown = set(fields) - set(TEAM_FIELDS)
        if unknown:
            raise ValueError(f"Unknown team fields: {', '.join(sorted(unknown))}")
        if 'name' in fields:
            fields['name'] = str(fields['name']).upper()[:TEAM_NAME_MAX_LEN]
        if 'record' in fields:
            fields['record'] = str(fields['record'])[:TEAM_RECORD_MAX_LEN]
        if 'score' in fields:
            fields['score'] = max(0, int(fields['score']))
        if 'timeouts' in fields:
            fields['timeouts'] = clamp(int(fields['timeouts']), 0, MAX_TIMEOUTS)
        if 'flags' in fields:
            fields['flags'] = max(0, int(fields['flags']))
        return self._update_team(team, lambda t: fields)

    def adjust_timeouts(self, team: str, delta: int) -> Dict[str, Any]:
        return self._update_team(
            team, lambda t: {'timeouts': clamp(int(t.get('timeouts') or 0) + int(delta), 0, MAX_TIMEOUTS)}
        )

    # ---- clock ----
    def toggle_clock(self) -> Dict[str, Any]:
        return self.clock.toggle()

    def reset_clock(self) -> Dict[str, Any]:
        return self.clock.reset()

    def adjust_time(self, seconds: int) -> Dict[str, Any]:
        return self.clock.adjust(seconds)

    # ---- game situation ----
    def set_quarter(self, quarter) -> Dict[str, Any]:
        if quarter not in QUARTERS or isinstance(quarter, bool):
            raise ValueError(f'Invalid quarter: {quarter!r}')
        return self.store.update({'quarter': quarter})

    def toggle_possession(self) -> Dict[str, Any]:
        cycle = {'home': 'away', 'away': None, None: 'home'}
        return self.store.modify(lambda state: {'possession': cycle.get(state.get('possession'), 'home')})

    def set_possession(self, team: Optional[str]) -> Dict[str, Any]:
        if team is not None:
            _side(team)
        return self.store.update({'possession': team})

    def set_down(self, down: int) -> Dict[str, Any]:
        if down not in DOWNS or isinstance(down, bool):
            raise ValueError(f'Invalid down: {down!r}')
        return self.store.update({'down': down})

    def adjust_yards_to_go(self, delta: int) -> Dict[str, Any]:
        return self.store.modify(
            lambda state: {'yardsToGo': clamp(int(state.get('yardsToGo') or 0) + int(delta), 0, MAX_YARDS_TO_GO)}
        )

    def set_yards_to_go(self, yards: int) -> Dict[str, Any]:
        return self.store.update({'yardsToGo': clamp(int(yards), 0, MAX_YARDS_TO_GO)})

    def adjust_field_position(self, delta: int) -> Dict[str, Any]:
        def _patch(state):
            position = clamp(int(state.get('fieldPosition') or 0) + int(delta), 0, MAX_FIELD_POSITION)
            return {'fieldPosition': position, 'ballOn': ball_side(position)}

        return self.store.modify(_patch)

    def set_field_position(self, yard_line: int, side: str) -> Dict[str, Any]:
        """Spot the ball on ``side``'s ``yard_line`` (0-50)."""
        yard_line = int(yard_line)
        _side(side)
        if not 0 <= yard_line <= MIDFIELD:
            raise ValueError(f'Yard line must be between 0 and {MIDFIELD}')
        if yard_line == MIDFIELD:
            position = MIDFIELD
        elif side == 'home':
            position = yard_line
        else:
            position = MAX_FIELD_POSITION - yard_line
        return self.store.update({'fieldPosition': position, 'ballOn': side})

    # ---- penalties ----
    def set_flag(self, team: str, penalty: str) -> Dict[str, Any]:
        _side(team)
        if penalty not in PENALTIES:
            raise ValueError(f'Unknown penalty: {penalty!r}')
        state = self.store.update({'activeFlag': {'team': team, 'type': penalty}})
        self.log.info(f'[flag-set] team={team} type={penalty}')
        return state

    def clear_flag(self) -> Dict[str, Any]:
        return self.store.modify(lambda state: None if state.get('activeFlag') is None else {'activeFlag': None})

    # ---- whole game ----
    def reset_game(self) -> Dict[str, Any]:
        self.animations.clear()
        state = self.store.reset()
        self.log.info('[game-reset] state restored to defaults')
        return state
