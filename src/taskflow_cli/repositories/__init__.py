"""Storage ports for the Taskflow CLI.

Implementations (adapters) live in:
- taskflow_cli.adapters.sqlite (local SQLite file)
- taskflow_cli.adapters.memory (process-local, used for ephemeral runs)
"""

from .repository import KeyValueStorage, StorageError

__all__ = ["KeyValueStorage", "StorageError"]
