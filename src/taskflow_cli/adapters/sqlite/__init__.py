"""SQLite adapter for the local key-value store."""

from .kv_store import SqliteStorage

__all__ = ["SqliteStorage"]
