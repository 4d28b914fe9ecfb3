"""Session history ledger: a bounded, newest-first log of timer sessions."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from taskflow_cli.repositories.repository import KeyValueStorage
from taskflow_cli.services.persistence import load_json_list, save_json_list
from taskflow_cli.utils.ids import MonotonicIdGenerator
from taskflow_cli.utils.time_utils import format_date, format_timestamp

from .presets import PresetKind

logger = logging.getLogger(__name__)

HISTORY_STORAGE_KEY = "taskflow-history-v9"
DEFAULT_HISTORY_LIMIT = 100


@dataclass(frozen=True)
class SessionRecord:
    """One finished timer session.

    ``duration_seconds`` is the configured duration for completed sessions
    and the elapsed time for stopped ones.
    """

    id: int
    type: PresetKind
    duration_seconds: int
    completed: bool
    timestamp: str
    date: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to the persisted dictionary shape."""
        return {
            "id": self.id,
            "type": self.type.value,
            "duration": self.duration_seconds,
            "completed": self.completed,
            "timestamp": self.timestamp,
            "date": self.date,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SessionRecord":
        """Create from the persisted dictionary shape.

        Raises:
            ValueError, KeyError, TypeError: If the entry has an unexpected shape.
        """
        duration = data["duration"]
        if isinstance(duration, bool) or not isinstance(duration, int) or duration < 0:
            raise ValueError(f"invalid duration: {duration!r}")
        return cls(
            id=int(data["id"]),
            type=PresetKind.parse(data["type"]),
            duration_seconds=duration,
            completed=bool(data["completed"]),
            timestamp=str(data.get("timestamp", "")),
            date=str(data.get("date", "")),
        )


class SessionStore:
    """Append-only ledger of timer sessions, persisted after every mutation.

    Entries are kept newest first. Appending beyond ``limit`` evicts the
    oldest entries. A missing or corrupt stored value loads as an empty
    ledger.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        limit: int = DEFAULT_HISTORY_LIMIT,
        key: str = HISTORY_STORAGE_KEY,
        id_generator: MonotonicIdGenerator | None = None,
        now: Callable[[], datetime] | None = None,
    ):
        if limit < 1:
            raise ValueError("History limit must be at least 1")
        self.storage = storage
        self.limit = limit
        self.key = key
        self._ids = id_generator or MonotonicIdGenerator()
        self._now = now or datetime.now
        self._records: list[SessionRecord] = self._load()
        self._ids.observe(record.id for record in self._records)

    def _load(self) -> list[SessionRecord]:
        raw = load_json_list(self.storage, self.key)
        if raw is None:
            return []
        try:
            records = [SessionRecord.from_dict(item) for item in raw]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning("Discarding malformed session history: %s", e)
            return []
        return records[: self.limit]

    def _persist(self) -> bool:
        return save_json_list(
            self.storage, self.key, [record.to_dict() for record in self._records]
        )

    def new_record(
        self, kind: PresetKind, duration_seconds: int, completed: bool
    ) -> SessionRecord:
        """Build a record stamped with a fresh id and the current wall-clock time."""
        moment = self._now()
        return SessionRecord(
            id=self._ids.next_id(),
            type=kind,
            duration_seconds=duration_seconds,
            completed=completed,
            timestamp=format_timestamp(moment),
            date=format_date(moment),
        )

    def append(self, record: SessionRecord) -> None:
        """Prepend ``record`` and trim the ledger to the most recent entries."""
        self._records.insert(0, record)
        evicted = len(self._records) - self.limit
        if evicted > 0:
            del self._records[self.limit :]
            logger.debug("Evicted %d oldest session(s) from history", evicted)
        self._persist()

    def record(
        self, kind: PresetKind, duration_seconds: int, completed: bool
    ) -> SessionRecord:
        """Create and append a record in one step."""
        record = self.new_record(kind, duration_seconds, completed)
        self.append(record)
        return record

    def clear(self) -> None:
        """Remove every entry."""
        self._records = []
        self._persist()

    def list(self) -> tuple[SessionRecord, ...]:
        """Read-only view of the ledger, newest first."""
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)
