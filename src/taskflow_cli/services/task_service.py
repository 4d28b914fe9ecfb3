"""Task list service.

The task list is independent of the timer: it only talks to storage. Every
mutation rewrites the whole collection under one key.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from taskflow_cli.models.task import Task
from taskflow_cli.repositories.repository import KeyValueStorage
from taskflow_cli.utils.ids import MonotonicIdGenerator

from .persistence import load_json_list, save_json_list

logger = logging.getLogger(__name__)

TASKS_STORAGE_KEY = "taskflow-tasks-v9"


class TaskList:
    """Insertion-ordered to-do list persisted in key-value storage.

    Args:
        storage: Backing key-value store.
        key: Storage key holding the serialized list.
        id_generator: Source of creation-order ids.
        now: Clock used for ``created_at`` / ``completed_at`` stamps.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = TASKS_STORAGE_KEY,
        id_generator: MonotonicIdGenerator | None = None,
        now: Callable[[], datetime] | None = None,
    ):
        self.storage = storage
        self.key = key
        self._ids = id_generator or MonotonicIdGenerator()
        self._now = now or (lambda: datetime.now().astimezone())
        self._tasks: list[Task] = self._load()
        self._ids.observe(task.id for task in self._tasks)

    def _load(self) -> list[Task]:
        raw = load_json_list(self.storage, self.key)
        if raw is None:
            return []
        try:
            return [Task.from_dict(item) for item in raw]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning("Discarding malformed task list: %s", e)
            return []

    def _persist(self) -> bool:
        return save_json_list(self.storage, self.key, [t.to_dict() for t in self._tasks])

    def list_tasks(self) -> list[Task]:
        """All tasks in insertion order."""
        return list(self._tasks)

    def get(self, task_id: int) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def add(self, text: str) -> Task | None:
        """Append a task. Empty or whitespace-only text is ignored."""
        text = (text or "").strip()
        if not text:
            return None

        task = Task(
            id=self._ids.next_id(),
            text=text,
            created_at=self._now().isoformat(),
        )
        self._tasks.append(task)
        self._persist()
        logger.debug("Added task %s", task.id)
        return task

    def toggle(self, task_id: int) -> Task | None:
        """Flip completion, stamping or clearing ``completed_at``.

        Returns the updated task, or ``None`` if no task has ``task_id``.
        """
        task = self.get(task_id)
        if task is None:
            return None

        task.completed = not task.completed
        task.completed_at = self._now().isoformat() if task.completed else None
        self._persist()
        return task

    def delete(self, task_id: int) -> bool:
        """Remove a task. Returns ``False`` if no task has ``task_id``."""
        remaining = [t for t in self._tasks if t.id != task_id]
        if len(remaining) == len(self._tasks):
            return False
        self._tasks = remaining
        self._persist()
        return True

    def clear_completed(self) -> int:
        """Remove every completed task. Returns how many were removed."""
        remaining = [t for t in self._tasks if not t.completed]
        removed = len(self._tasks) - len(remaining)
        if removed:
            self._tasks = remaining
            self._persist()
        return removed

    @property
    def completed_count(self) -> int:
        return sum(1 for t in self._tasks if t.completed)

    def __len__(self) -> int:
        return len(self._tasks)
