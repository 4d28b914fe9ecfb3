"""Creation-order identifiers for tasks and session records."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Iterable


class MonotonicIdGenerator:
    """Millisecond-timestamp ids that never repeat or go backwards.

    Two ids requested within the same millisecond (or after the wall clock
    steps back) are bumped past the previous one.
    """

    def __init__(self, now_ms: Callable[[], int] | None = None):
        self._now_ms = now_ms or (lambda: time.time_ns() // 1_000_000)
        self._last = 0
        self._lock = threading.Lock()

    def observe(self, existing: Iterable[int]) -> None:
        """Make sure future ids sort after ids already in use."""
        with self._lock:
            for value in existing:
                if value > self._last:
                    self._last = value

    def next_id(self) -> int:
        with self._lock:
            candidate = max(self._now_ms(), self._last + 1)
            self._last = candidate
            return candidate
