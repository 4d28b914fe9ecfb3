"""In-memory key-value storage."""

from __future__ import annotations

from taskflow_cli.repositories.repository import KeyValueStorage


class InMemoryStorage(KeyValueStorage):
    """Dictionary-backed storage; contents vanish with the process."""

    def __init__(self, initial: dict[str, bytes] | None = None):
        self._data: dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> bytes | None:
        return self._data.get(key)

    def set(self, key: str, value: bytes) -> bool:
        self._data[key] = bytes(value)
        return True

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)
