import copy
import logging
import threading
from typing import Any, Callable, Dict, List, Optional

from .schema import default_game_state, validate_patch

logger = logging.getLogger(__name__)

Listener = Callable[[Dict[str, Any]], None]


class GameStateStore:
    """In-memory holder for the single game state.

    ``update`` is a shallow merge: every key in the patch replaces the
    top-level field wholesale, nested team objects included. Patches are
    stored as given unless the store was built with ``enforce_schema``.
    """

    def __init__(self, period_length: int = 900, enforce_schema: bool = False):
        self.period_length = int(period_length)
        self.enforce_schema = enforce_schema
        self._lock = threading.Lock()
        self._listeners: List[Listener] = []
        self._state = default_game_state(self.period_length)

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def get(self) -> Dict[str, Any]:
        with self._lock:
            return copy.deepcopy(self._state)

    def update(self, patch: Dict[str, Any]) -> Dict[str, Any]:
        if not isinstance(patch, dict):
            raise TypeError('patch must be a JSON object')
        if self.enforce_schema:
            validate_patch(patch)
        with self._lock:
            self._state = {**self._state, **copy.deepcopy(patch)}
            snapshot = copy.deepcopy(self._state)
        self._notify(snapshot)
        return snapshot

    def modify(self, compute_patch: Callable[[Dict[str, Any]], Optional[Dict[str, Any]]]) -> Dict[str, Any]:
        """Read-modify-write under the store lock.

        ``compute_patch`` receives a copy of the current state and returns the
        patch to merge, or None to leave the state untouched.
        """
        with self._lock:
            patch = compute_patch(copy.deepcopy(self._state))
            if patch is None:
                return copy.deepcopy(self._state)
            if self.enforce_schema:
                validate_patch(patch)
            self._state = {**self._state, **copy.deepcopy(patch)}
            snapshot = copy.deepcopy(self._state)
        self._notify(snapshot)
        return snapshot

    def reset(self) -> Dict[str, Any]:
        with self._lock:
            self._state = default_game_state(self.period_length)
            snapshot = copy.deepcopy(self._state)
        self._notify(snapshot)
        return snapshot

    def _notify(self, snapshot):
        # runs after commit: listener errors are logged, never raised
        for listener in list(self._listeners):
            try:
                listener(copy.deepcopy(snapshot))
            except Exception:
                logger.exception('[store] listener %r failed', listener)
