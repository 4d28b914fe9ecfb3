"""Test doubles shared across the suite."""

from __future__ import annotations

from collections.abc import Callable

from taskflow_cli.models.timer.clock import ClockSource, TickHandle
from taskflow_cli.repositories.repository import KeyValueStorage, StorageError
from taskflow_cli.services.notification_service import Notifier


class ManualTickHandle(TickHandle):
    def __init__(self, callback: Callable[[], None], interval: float):
        self.callback = callback
        self.interval = interval
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ManualClock(ClockSource):
    """Clock that only ticks when the test says so."""

    def __init__(self):
        self.handles: list[ManualTickHandle] = []

    def schedule_repeating(self, callback, interval: float = 1.0) -> ManualTickHandle:
        handle = ManualTickHandle(callback, interval)
        self.handles.append(handle)
        return handle

    @property
    def live_handles(self) -> list[ManualTickHandle]:
        return [h for h in self.handles if not h.cancelled]

    def advance(self, seconds: int = 1) -> None:
        for _ in range(seconds):
            for handle in self.live_handles:
                handle.callback()


class BrokenStorage(KeyValueStorage):
    """Storage whose reads and writes always fail."""

    def __init__(self, fail_reads: bool = True, reject_writes: bool = False):
        self.fail_reads = fail_reads
        self.reject_writes = reject_writes
        self.write_attempts = 0

    def get(self, key: str) -> bytes | None:
        if self.fail_reads:
            raise StorageError("disk on fire")
        return None

    def set(self, key: str, value: bytes) -> bool:
        self.write_attempts += 1
        if self.reject_writes:
            return False
        raise StorageError("disk on fire")

    def delete(self, key: str) -> None:
        raise StorageError("disk on fire")


class ExplodingNotifier(Notifier):
    def __init__(self):
        self.calls = 0

    def notify(self, title: str, body: str) -> None:
        self.calls += 1
        raise RuntimeError("notification daemon unavailable")
