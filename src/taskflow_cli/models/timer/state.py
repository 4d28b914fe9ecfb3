"""Countdown state owned by the timer engine."""

from dataclasses import asdict, dataclass
from enum import Enum

from .presets import PresetKind


class TimerPhase(str, Enum):
    """Observable phase of the countdown, derived from ``TimerState``."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


@dataclass
class TimerState:
    """Mutable countdown state.

    Invariant: ``0 <= time_left_seconds <= original_seconds`` and
    ``is_active`` only while ``time_left_seconds > 0``.
    """

    type: PresetKind
    time_left_seconds: int
    original_seconds: int
    is_active: bool = False

    @property
    def elapsed_seconds(self) -> int:
        """Time consumed since activation."""
        return self.original_seconds - self.time_left_seconds

    @property
    def phase(self) -> TimerPhase:
        if self.is_active:
            return TimerPhase.RUNNING
        if self.time_left_seconds == 0:
            return TimerPhase.COMPLETED
        if self.time_left_seconds == self.original_seconds:
            return TimerPhase.IDLE
        return TimerPhase.PAUSED

    def copy(self) -> "TimerState":
        """Detached snapshot for display consumers."""
        return TimerState(
            type=self.type,
            time_left_seconds=self.time_left_seconds,
            original_seconds=self.original_seconds,
            is_active=self.is_active,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        data = asdict(self)
        data["type"] = self.type.value
        data["phase"] = self.phase.value
        return data
