"""Timer presets and per-activation timer configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PresetKind(str, Enum):
    """Named timer configurations. Values match the persisted history format."""

    POMODORO = "pomodoro"
    FOCUS30 = "focus30"
    FOCUS60 = "focus60"
    DEEP_WORK = "deepWork"
    SHORT_BREAK = "shortBreak"
    LONG_BREAK = "longBreak"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value: "PresetKind | str") -> "PresetKind":
        """Resolve a preset from its value (``deepWork``) or name (``deep_work``)."""
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for kind in cls:
            if text == kind.value or text.lower() in (
                kind.name.lower(),
                kind.value.lower(),
            ):
                return kind
        raise ValueError(f"Unknown timer preset: {value!r}")


@dataclass(frozen=True)
class TimerPreset:
    """Display metadata and default duration for a preset."""

    kind: PresetKind
    name: str
    duration_seconds: int
    description: str
    color: str


TIMER_PRESETS: dict[PresetKind, TimerPreset] = {
    PresetKind.POMODORO: TimerPreset(
        PresetKind.POMODORO, "Pomodoro", 25 * 60, "Classic 25-minute focus session", "red"
    ),
    PresetKind.FOCUS30: TimerPreset(
        PresetKind.FOCUS30, "Focus 30", 30 * 60, "30-minute focus session", "dark_orange"
    ),
    PresetKind.FOCUS60: TimerPreset(
        PresetKind.FOCUS60, "Focus 60", 60 * 60, "1-hour deep focus session", "slate_blue1"
    ),
    PresetKind.DEEP_WORK: TimerPreset(
        PresetKind.DEEP_WORK, "Deep Work", 120 * 60, "2-hour deep work session", "grey62"
    ),
    PresetKind.SHORT_BREAK: TimerPreset(
        PresetKind.SHORT_BREAK, "Short Break", 5 * 60, "5-minute break", "green"
    ),
    PresetKind.LONG_BREAK: TimerPreset(
        PresetKind.LONG_BREAK, "Long Break", 15 * 60, "15-minute break", "blue"
    ),
    PresetKind.CUSTOM: TimerPreset(
        PresetKind.CUSTOM, "Custom", 10 * 60, "Custom duration timer", "magenta"
    ),
}

DEFAULT_CUSTOM_MINUTES = 10
MIN_CUSTOM_MINUTES = 1
MAX_CUSTOM_MINUTES = 300


def get_preset(kind: PresetKind | str) -> TimerPreset:
    """Look up preset metadata; unknown kinds fall back to ``custom``."""
    try:
        return TIMER_PRESETS[PresetKind.parse(kind)]
    except ValueError:
        return TIMER_PRESETS[PresetKind.CUSTOM]


def clamp_custom_minutes(minutes: int | float | str | None) -> int:
    """Clamp a user-supplied custom duration into [1, 300] minutes.

    Non-numeric input falls back to the default custom duration.
    """
    try:
        value = int(float(minutes))  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_CUSTOM_MINUTES
    return max(MIN_CUSTOM_MINUTES, min(MAX_CUSTOM_MINUTES, value))


@dataclass(frozen=True)
class TimerConfig:
    """Immutable configuration for one timer activation."""

    type: PresetKind
    duration_seconds: int

    @classmethod
    def from_preset(
        cls, kind: PresetKind | str, custom_minutes: int | float | str | None = None
    ) -> "TimerConfig":
        """Build a config for a preset.

        ``custom_minutes`` is only consulted for the custom preset, where it is
        clamped into range (a missing value uses the default custom duration).
        """
        kind = PresetKind.parse(kind)
        if kind is PresetKind.CUSTOM:
            minutes = (
                DEFAULT_CUSTOM_MINUTES
                if custom_minutes is None
                else clamp_custom_minutes(custom_minutes)
            )
            return cls(type=kind, duration_seconds=minutes * 60)
        return cls(type=kind, duration_seconds=TIMER_PRESETS[kind].duration_seconds)
