import logging
from typing import Callable, Optional

from ..store import GameStateStore

logger = logging.getLogger(__name__)


def _seconds(value) -> int:
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return 0


class GameClock:
    """Server-owned game clock: STOPPED <-> RUNNING.

    While running, every ``tick`` takes one second off ``timeRemaining``;
    reaching zero forces the clock back to stopped. The store is the only
    place the clock lives, so anything that PATCHes ``isClockRunning``
    starts or stops it too.
    """

    def __init__(self, store: GameStateStore, period_length: int = 900,
                 tick_sec: float = 1.0, log: Optional[logging.Logger] = None):
        self.store = store
        self.period_length = int(period_length)
        self.tick_sec = tick_sec
        self.log = log or logger
        self._stopped = False

    def is_running(self) -> bool:
        return bool(self.store.get().get('isClockRunning'))

    def start(self):
        def _start(state):
            if _seconds(state.get('timeRemaining')) == 0:
                return None
            return {'isClockRunning': True}
        state = self.store.modify(_start)
        self.log.info(f"[clock-start] remaining={state.get('timeRemaining')} running={state.get('isClockRunning')}")
        return state

    def stop(self):
        state = self.store.update({'isClockRunning': False})
        self.log.info(f"[clock-stop] remaining={state.get('timeRemaining')}")
        return state

    def toggle(self):
        return self.stop() if self.is_running() else self.start()

    def reset(self):
        return self.store.update({'timeRemaining': self.period_length, 'isClockRunning': False})

    def adjust(self, seconds: int):
        return self.store.modify(
            lambda state: {'timeRemaining': max(0, _seconds(state.get('timeRemaining')) + int(seconds))}
        )

    def tick(self):
        """Advance one second. Returns the new state, or None when stopped."""
        ticked = []

        def _tick(state):
            if not state.get('isClockRunning'):
                return None
            remaining = max(0, _seconds(state.get('timeRemaining')) - 1)
            ticked.append(remaining)
            patch = {'timeRemaining': remaining}
            if remaining == 0:
                patch['isClockRunning'] = False
            return patch

        state = self.store.modify(_tick)
        if not ticked:
            return None
        if ticked[0] == 0:
            self.log.info('[clock-expired] clock stopped at 00:00')
        return state

    def run(self, sleep: Callable[[float], None]) -> None:
        """Background loop; ``sleep`` is the async-mode aware sleeper."""
        self._stopped = False
        self.log.info(f'[clock-worker] started tick={self.tick_sec}s')
        while not self._stopped:
            sleep(self.tick_sec)
            if self._stopped:
                break
            try:
                self.tick()
            except Exception:
                self.log.exception('[clock-worker] tick failed')
        self.log.info('[clock-worker] stopped')

    def shutdown(self) -> None:
        self._stopped = True
