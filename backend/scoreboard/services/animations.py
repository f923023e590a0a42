import threading
import time
from typing import Callable, Dict, Optional

from ..schema import SIDES

FIELD_GOAL_POINTS = (3,)
TOUCHDOWN_POINTS = (6, 7)


class AnimationTracker:
    """Time-boxed scoring animations, never written to the game state.

    Each animation is stored as a deadline on ``now()`` rather than a pending
    timer, so ``clear()`` cancels everything at once and nothing fires after
    the owning view is gone.
    """

    def __init__(
        self,
        field_goal_sec: float = 3.5,
        touchdown_sec: float = 4.0,
        score_pulse_sec: float = 0.4,
        now: Callable[[], float] = time.monotonic,
    ):
        self.field_goal_sec = field_goal_sec
        self.touchdown_sec = touchdown_sec
        self.score_pulse_sec = score_pulse_sec
        self._now = now
        self._lock = threading.Lock()
        self._pulse_until: Dict[str, float] = {}
        self._touchdown: Optional[tuple] = None  # (team, deadline)
        self._field_goal: Optional[tuple] = None

    def trigger_for_score(self, team: str, points: int) -> Dict:
        """Start the animations a score change of ``points`` calls for."""
        if team not in SIDES:
            raise ValueError(f'Unknown team: {team!r}')
        now = self._now()
        with self._lock:
            self._pulse_until[team] = now + self.score_pulse_sec
            if points in FIELD_GOAL_POINTS:
                self._field_goal = (team, now + self.field_goal_sec)
            elif points in TOUCHDOWN_POINTS:
                self._touchdown = (team, now + self.touchdown_sec)
        return self.snapshot()

    def clear(self) -> None:
        with self._lock:
            self._pulse_until.clear()
            self._touchdown = None
            self._field_goal = None

    def snapshot(self) -> Dict:
        now = self._now()
        with self._lock:
            return {
                'scoreAnimating': {
                    side: self._pulse_until.get(side, 0.0) > now for side in SIDES
                },
                'touchdownAnimation': _banner(self._touchdown, now),
                'fieldGoalAnimation': _banner(self._field_goal, now),
            }


def _banner(entry, now):
    if entry and entry[1] > now:
        return {'active': True, 'team': entry[0], 'remaining': round(entry[1] - now, 3)}
    return {'active': False, 'team': None, 'remaining': 0.0}


def idle_animations() -> Dict:
    return {
        'scoreAnimating': {side: False for side in SIDES},
        'touchdownAnimation': {'active': False, 'team': None, 'remaining': 0.0},
        'fieldGoalAnimation': {'active': False, 'team': None, 'remaining': 0.0},
    }
