"""Timer mode - Pomodoro countdown engine and session history for Taskflow CLI."""

from .analytics import SessionStats, summarize_sessions
from .clock import ClockSource, ThreadingClock, TickHandle
from .engine import TimerEngine
from .history import SessionRecord, SessionStore
from .presets import TIMER_PRESETS, PresetKind, TimerConfig, TimerPreset
from .state import TimerPhase, TimerState

__all__ = [
    "ClockSource",
    "PresetKind",
    "SessionRecord",
    "SessionStats",
    "SessionStore",
    "TIMER_PRESETS",
    "ThreadingClock",
    "TickHandle",
    "TimerConfig",
    "TimerEngine",
    "TimerPhase",
    "TimerPreset",
    "TimerState",
    "summarize_sessions",
]
