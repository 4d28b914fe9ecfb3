"""SQLite-backed key-value store for the local Taskflow vault.

One table, ``kv_store(key TEXT PRIMARY KEY, value BLOB, updated_at TEXT)``.
The connection is opened lazily and reused; writes are committed immediately
so every mutation is durable once ``set`` returns.
"""

from __future__ import annotations

import logging
import os
import sqlite3
import threading
import time
from datetime import datetime
from pathlib import Path

from platformdirs import user_data_dir

from taskflow_cli.repositories.repository import KeyValueStorage, StorageError

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value BLOB NOT NULL,
    updated_at TEXT NOT NULL
)
"""


def default_db_path() -> Path:
    """Default database location inside the platform data directory."""
    return Path(user_data_dir("taskflow_cli")) / "taskflow.db"


class SqliteStorage(KeyValueStorage):
    """Persistent key-value storage in a single SQLite file."""

    def __init__(self, db_path: str | Path | None = None):
        self.db_path = Path(db_path) if db_path is not None else default_db_path()
        self._connection: sqlite3.Connection | None = None
        # The clock thread and the UI thread may both persist.
        self._lock = threading.Lock()

    def _get_connection(self) -> sqlite3.Connection:
        if self._connection is not None:
            return self._connection

        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        is_new_database = not self.db_path.exists()

        try:
            connection = sqlite3.connect(
                str(self.db_path),
                check_same_thread=False,
                timeout=30.0,
            )
            connection.execute("PRAGMA journal_mode = WAL")
            connection.execute(_SCHEMA)
            connection.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open database {self.db_path}: {e}") from e

        if is_new_database:
            os.chmod(self.db_path, 0o600)

        logger.debug("Opened key-value store at %s", self.db_path)
        self._connection = connection
        return connection

    def _execute_with_retry(
        self, sql: str, params: tuple = (), max_retries: int = 3
    ) -> sqlite3.Cursor:
        connection = self._get_connection()
        for attempt in range(max_retries):
            try:
                return connection.execute(sql, params)
            except sqlite3.OperationalError as e:
                if "database is locked" in str(e) and attempt < max_retries - 1:
                    # Exponential backoff: 0.1s, 0.2s, 0.4s
                    time.sleep(0.1 * (2**attempt))
                    continue
                raise
        raise sqlite3.OperationalError("Max retries exceeded")

    def get(self, key: str) -> bytes | None:
        with self._lock:
            try:
                row = self._execute_with_retry(
                    "SELECT value FROM kv_store WHERE key = ?", (key,)
                ).fetchone()
            except sqlite3.Error as e:
                raise StorageError(f"Failed to read {key!r}: {e}") from e
        if row is None:
            return None
        value = row[0]
        return value.encode("utf-8") if isinstance(value, str) else bytes(value)

    def set(self, key: str, value: bytes) -> bool:
        with self._lock:
            try:
                self._execute_with_retry(
                    """
                    INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = excluded.updated_at
                    """,
                    (key, sqlite3.Binary(value), datetime.now().isoformat()),
                )
                self._get_connection().commit()
            except sqlite3.Error as e:
                raise StorageError(f"Failed to write {key!r}: {e}") from e
        return True

    def delete(self, key: str) -> None:
        with self._lock:
            try:
                self._execute_with_retry("DELETE FROM kv_store WHERE key = ?", (key,))
                self._get_connection().commit()
            except sqlite3.Error as e:
                raise StorageError(f"Failed to delete {key!r}: {e}") from e

    def close(self) -> None:
        with self._lock:
            if self._connection is not None:
                try:
                    self._connection.commit()
                    self._connection.close()
                finally:
                    self._connection = None
