"""Key-value storage abstraction for Taskflow CLI.

The task list and the session ledger each serialize their whole collection
under a single key, so the only persistence contract needed is a flat
byte-oriented get/set namespace.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class StorageError(Exception):
    """Raised by adapters when the backing store cannot be read or written."""


class KeyValueStorage(ABC):
    """Abstract base class for persistent key-value storage.

    Adapters may raise ``StorageError`` from either method; callers treat a
    failed read as an absent value and a failed write as best-effort.
    """

    @abstractmethod
    def get(self, key: str) -> bytes | None:
        """Return the stored value, or ``None`` if the key is absent."""
        raise NotImplementedError("KeyValueStorage.get() must be implemented by adapter")

    @abstractmethod
    def set(self, key: str, value: bytes) -> bool:
        """Store ``value`` under ``key``. Returns ``True`` on success."""
        raise NotImplementedError("KeyValueStorage.set() must be implemented by adapter")

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key`` if present."""
        raise NotImplementedError(
            "KeyValueStorage.delete() must be implemented by adapter"
        )

    def close(self) -> None:
        """Release any held resources."""
        return
