"""Application context: the single owner of storage, timer and task list.

Commands build one ``AppContext`` per invocation instead of reaching for
module-level singletons, so tests can hand in in-memory storage and a
manual clock.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from rich.console import Console

from taskflow_cli.adapters.memory import InMemoryStorage
from taskflow_cli.adapters.sqlite.kv_store import SqliteStorage
from taskflow_cli.models.config_models import AppConfig
from taskflow_cli.models.timer.clock import ClockSource
from taskflow_cli.models.timer.engine import TimerEngine
from taskflow_cli.models.timer.history import SessionStore
from taskflow_cli.models.timer.presets import TimerConfig
from taskflow_cli.repositories.repository import KeyValueStorage
from taskflow_cli.utils.ids import MonotonicIdGenerator

from .notification_service import ConsoleNotifier, Notifier, NullNotifier
from .task_service import TaskList

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Everything a command needs, wired together."""

    config: AppConfig
    storage: KeyValueStorage
    sessions: SessionStore
    tasks: TaskList
    engine: TimerEngine
    notifier: Notifier
    ids: MonotonicIdGenerator = field(default_factory=MonotonicIdGenerator)

    def close(self) -> None:
        self.engine.close()
        self.storage.close()

    def __enter__(self) -> "AppContext":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def create_storage(config: AppConfig, db_path=None) -> KeyValueStorage:
    """Instantiate the configured storage backend."""
    if config.storage.backend == "memory":
        return InMemoryStorage()
    return SqliteStorage(db_path or config.storage.path)


def create_notifier(config: AppConfig, console: Console | None = None) -> Notifier:
    if not config.timer.notifications:
        return NullNotifier()
    return ConsoleNotifier(console=console, bell=config.timer.bell)


def build_app_context(
    config: AppConfig,
    storage: KeyValueStorage | None = None,
    notifier: Notifier | None = None,
    clock: ClockSource | None = None,
    db_path=None,
) -> AppContext:
    """Wire an ``AppContext`` from configuration.

    Args:
        config: Loaded application configuration.
        storage: Overrides the configured backend.
        notifier: Overrides the configured notifier.
        clock: Drives the engine; ``None`` leaves ticking to the caller.
        db_path: SQLite file used when ``storage`` is not given.
    """
    if storage is None:
        storage = create_storage(config, db_path)
    if notifier is None:
        notifier = create_notifier(config)
    ids = MonotonicIdGenerator()

    sessions = SessionStore(storage, limit=config.timer.history_limit, id_generator=ids)
    tasks = TaskList(storage, id_generator=ids)
    engine = TimerEngine(
        session_store=sessions,
        notifier=notifier,
        clock=clock,
        min_recorded_seconds=config.timer.min_recorded_seconds,
        initial=TimerConfig.from_preset(
            config.timer.default_preset, config.timer.custom_minutes
        ),
    )
    logger.debug(
        "App context ready: %d task(s), %d session(s)", len(tasks), len(sessions)
    )
    return AppContext(
        config=config,
        storage=storage,
        sessions=sessions,
        tasks=tasks,
        engine=engine,
        notifier=notifier,
        ids=ids,
    )
