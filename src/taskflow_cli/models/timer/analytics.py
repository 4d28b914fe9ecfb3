"""Aggregate statistics over the session ledger."""

from collections.abc import Iterable
from dataclasses import dataclass

from .history import SessionRecord
from .presets import PresetKind


@dataclass(frozen=True)
class SessionStats:
    """Summary of a sequence of session records."""

    total_sessions: int
    completed_sessions: int
    stopped_sessions: int
    total_focus_seconds: int
    by_type: dict[str, int]

    @property
    def completion_rate(self) -> float:
        if self.total_sessions == 0:
            return 0.0
        return round(self.completed_sessions / self.total_sessions * 100, 1)

    def to_dict(self) -> dict:
        return {
            "total_sessions": self.total_sessions,
            "completed_sessions": self.completed_sessions,
            "stopped_sessions": self.stopped_sessions,
            "completion_rate": self.completion_rate,
            "total_focus_seconds": self.total_focus_seconds,
            "by_type": dict(self.by_type),
        }


def summarize_sessions(records: Iterable[SessionRecord]) -> SessionStats:
    """Compute totals the way the history view reports them.

    Focus time counts completed sessions only; stopped sessions are
    tallied separately and contribute nothing to ``total_focus_seconds``.
    """
    total = completed = focus_seconds = 0
    by_type: dict[str, int] = {}

    for record in records:
        total += 1
        if record.completed:
            completed += 1
            focus_seconds += record.duration_seconds
            kind = PresetKind.parse(record.type).value
            by_type[kind] = by_type.get(kind, 0) + 1

    return SessionStats(
        total_sessions=total,
        completed_sessions=completed,
        stopped_sessions=total - completed,
        total_focus_seconds=focus_seconds,
        by_type=by_type,
    )
