"""Application-wide logger writing to platformdirs user_log_dir.

Every module logs through ``logging.getLogger(__name__)``; those loggers sit
under the ``taskflow_cli`` namespace and share the file handler installed
here. ``TASKFLOW_LOG_LEVEL`` overrides the default ``DEBUG`` threshold.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "taskflow_cli"
LOG_FILE = "taskflow.log"
LEVEL_ENV_VAR = "TASKFLOW_LOG_LEVEL"

_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3
_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

_logger: logging.Logger | None = None


def log_file_path() -> Path:
    return Path(user_log_dir(APP_NAME)) / LOG_FILE


def _level_from_env() -> int:
    name = os.environ.get(LEVEL_ENV_VAR, "").strip().upper()
    level = logging.getLevelName(name) if name else logging.DEBUG
    return level if isinstance(level, int) else logging.DEBUG


def get_logger() -> logging.Logger:
    """Return the namespace logger, attaching the rotating file on first call."""
    global _logger
    if _logger is not None:
        return _logger

    app_logger = logging.getLogger(APP_NAME)
    app_logger.setLevel(_level_from_env())
    if not any(
        isinstance(h, logging.handlers.RotatingFileHandler) for h in app_logger.handlers
    ):
        path = log_file_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            path, maxBytes=_MAX_BYTES, backupCount=_BACKUP_COUNT, encoding="utf-8"
        )
        file_handler.setFormatter(
            logging.Formatter(_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S")
        )
        app_logger.addHandler(file_handler)
    # Keep log records off the terminal the timer draws on.
    app_logger.propagate = False

    _logger = app_logger
    return _logger
