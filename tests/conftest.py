"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from the real filesystem: config,
data and log directories are redirected into *tmp_path*.
"""

from __future__ import annotations

import logging
import logging.handlers
from unittest.mock import patch

import pytest

from taskflow_cli.adapters.memory import InMemoryStorage
from taskflow_cli.models.timer.engine import TimerEngine
from taskflow_cli.models.timer.history import SessionStore
from taskflow_cli.services.notification_service import RecordingNotifier

from .fakes import ManualClock


# ---------------------------------------------------------------------------
# Logging isolation
# ---------------------------------------------------------------------------


def _drop_file_handlers() -> None:
    app_logger = logging.getLogger("taskflow_cli")
    for handler in list(app_logger.handlers):
        if isinstance(handler, logging.handlers.RotatingFileHandler):
            app_logger.removeHandler(handler)
            handler.close()


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path):
    """Send the application log file into tmp_path and reset the singleton.

    Only the rotating file handler is removed; handlers installed by pytest's
    logging plugin are left in place.
    """
    import taskflow_cli.utils.logger as logger_mod

    logger_mod._logger = None
    _drop_file_handlers()
    with patch("taskflow_cli.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        yield
    logger_mod._logger = None
    _drop_file_handlers()


# ---------------------------------------------------------------------------
# Core collaborators
# ---------------------------------------------------------------------------


@pytest.fixture()
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture()
def session_store(storage) -> SessionStore:
    return SessionStore(storage)


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture()
def engine(session_store, notifier, clock) -> TimerEngine:
    """Pomodoro engine driven by a manual clock."""
    return TimerEngine(session_store=session_store, notifier=notifier, clock=clock)


# ---------------------------------------------------------------------------
# Config isolation
# ---------------------------------------------------------------------------


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a real ConfigService backed by a temporary directory.

    Patches platform dirs so config/data files land in *tmp_path* only and
    clears the lru_cache so each test gets a fresh service instance.
    """
    from taskflow_cli.services.config_service import ConfigService, get_config_service

    tmpdir = str(tmp_path)
    get_config_service.cache_clear()
    with patch("taskflow_cli.services.config_service.user_config_dir", return_value=tmpdir):
        with patch("taskflow_cli.services.config_service.user_data_dir", return_value=tmpdir):
            yield ConfigService()
    get_config_service.cache_clear()


@pytest.fixture()
def cli_env(tmp_path):
    """Point every command at a throwaway config file and SQLite database.

    The shared console is widened so tables render without wrapping.
    """
    from taskflow_cli.services.config_service import get_config_service
    from taskflow_cli.utils.ui.console import get_console

    tmpdir = str(tmp_path)
    console = get_console()
    get_config_service.cache_clear()
    console.width = 200
    with patch("taskflow_cli.services.config_service.user_config_dir", return_value=tmpdir):
        with patch("taskflow_cli.services.config_service.user_data_dir", return_value=tmpdir):
            yield tmp_path
    console.width = None
    console.no_color = False
    get_config_service.cache_clear()
