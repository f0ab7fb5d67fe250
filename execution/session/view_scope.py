"""
execution/session/view_scope.py

Mount tokens for views. Each page mount gets a fresh token; a result that
comes back for a token that is no longer current belongs to a view that was
navigated away from and must be dropped, not applied.
"""

import itertools
import threading


class ViewScope:
    """Tracks which view mount is current."""

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._current: int | None = None
        self._lock = threading.Lock()

    def mount(self) -> int:
        """Start a new mount and return its token; older tokens go stale."""
        with self._lock:
            self._current = next(self._counter)
            return self._current

    def unmount(self) -> None:
        with self._lock:
            self._current = None

    @property
    def current(self) -> int | None:
        return self._current

    def is_current(self, token: int | None) -> bool:
        return token is not None and token == self._current
