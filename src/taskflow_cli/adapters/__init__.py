"""Storage adapters for Taskflow CLI."""

from .memory import InMemoryStorage
from .sqlite import SqliteStorage

__all__ = ["InMemoryStorage", "SqliteStorage"]
