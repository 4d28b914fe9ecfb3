"""Clock sources that drive the timer engine with periodic ticks.

A clock hands out a ``TickHandle`` per schedule. The engine owns the handle
and cancels it whenever the countdown stops running, so a cancelled handle
never delivers another tick.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable

logger = logging.getLogger(__name__)

TICK_INTERVAL_SECONDS = 1.0


class TickHandle(ABC):
    """Cancellable handle for a repeating tick schedule."""

    @abstractmethod
    def cancel(self) -> None:
        """Stop delivering ticks. Safe to call more than once."""

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        """Whether ``cancel`` has been called."""


class ClockSource(ABC):
    """Schedules a callback to run repeatedly at a fixed interval."""

    @abstractmethod
    def schedule_repeating(
        self, callback: Callable[[], None], interval: float = TICK_INTERVAL_SECONDS
    ) -> TickHandle:
        """Start invoking ``callback`` every ``interval`` seconds."""


class _ThreadTickHandle(TickHandle):
    def __init__(self, callback: Callable[[], None], interval: float):
        self._callback = callback
        self._interval = interval
        self._stop = threading.Event()
        self._thread = threading.Thread(
            target=self._run, name="taskflow-clock", daemon=True
        )

    def start(self) -> None:
        self._thread.start()

    def _run(self) -> None:
        # Event.wait returns True once cancelled, ending the loop between ticks.
        while not self._stop.wait(self._interval):
            try:
                self._callback()
            except Exception:
                logger.exception("Tick callback failed")

    def cancel(self) -> None:
        self._stop.set()

    @property
    def cancelled(self) -> bool:
        return self._stop.is_set()


class ThreadingClock(ClockSource):
    """Clock backed by one daemon thread per schedule."""

    def schedule_repeating(
        self, callback: Callable[[], None], interval: float = TICK_INTERVAL_SECONDS
    ) -> TickHandle:
        handle = _ThreadTickHandle(callback, interval)
        handle.start()
        return handle
