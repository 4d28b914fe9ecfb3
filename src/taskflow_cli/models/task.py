"""Task data model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass
class Task:
    """A to-do item. Timestamps are ISO 8601 strings."""

    id: int
    text: str
    completed: bool = False
    created_at: str = ""
    completed_at: str | None = None

    @property
    def created_datetime(self) -> datetime | None:
        """Parse created time as datetime."""
        if not self.created_at:
            return None
        return datetime.fromisoformat(self.created_at.replace("Z", "+00:00"))

    @property
    def completed_datetime(self) -> datetime | None:
        """Parse completion time as datetime."""
        if not self.completed_at:
            return None
        return datetime.fromisoformat(self.completed_at.replace("Z", "+00:00"))

    def to_dict(self) -> dict[str, Any]:
        """Convert to the persisted dictionary shape."""
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "createdAt": self.created_at,
            "completedAt": self.completed_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        """Create from the persisted dictionary shape.

        Raises:
            ValueError, KeyError, TypeError: If the entry has an unexpected shape.
        """
        text = data["text"]
        if not isinstance(text, str) or not text.strip():
            raise ValueError("task text must be a non-empty string")
        completed_at = data.get("completedAt")
        return cls(
            id=int(data["id"]),
            text=text,
            completed=bool(data.get("completed", False)),
            created_at=str(data.get("createdAt") or ""),
            completed_at=str(completed_at) if completed_at else None,
        )
