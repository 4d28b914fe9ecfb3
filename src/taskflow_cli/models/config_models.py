"""Configuration models for Taskflow CLI."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from taskflow_cli.models.timer.presets import (
    DEFAULT_CUSTOM_MINUTES,
    PresetKind,
    clamp_custom_minutes,
)


class TimerSettings(BaseModel):
    """Timer behaviour."""

    default_preset: PresetKind = Field(default=PresetKind.POMODORO)
    custom_minutes: int = Field(default=DEFAULT_CUSTOM_MINUTES)
    min_recorded_seconds: int = Field(default=60, ge=0)
    history_limit: int = Field(default=100, ge=1)
    notifications: bool = Field(default=True)
    bell: bool = Field(default=True)

    @field_validator("default_preset", mode="before")
    @classmethod
    def parse_preset(cls, v):
        """Accept preset values (``deepWork``) and names (``deep_work``)."""
        return PresetKind.parse(v)

    @field_validator("custom_minutes", mode="before")
    @classmethod
    def clamp_minutes(cls, v) -> int:
        """Clamp rather than reject out-of-range durations."""
        return clamp_custom_minutes(v)


class StorageSettings(BaseModel):
    """Where tasks and session history are kept."""

    backend: Literal["sqlite", "memory"] = Field(default="sqlite")
    path: str | None = Field(
        default=None, description="SQLite file; defaults to the user data dir"
    )

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v.strip()


class OutputConfig(BaseModel):
    """Output configuration."""

    format: Literal["pretty", "table", "json", "yaml"] = Field(default="pretty")
    color: bool = Field(default=True)


class AppConfig(BaseModel):
    """Main Taskflow configuration"""

    timer: TimerSettings = Field(default_factory=TimerSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    output: OutputConfig = Field(default_factory=OutputConfig)
