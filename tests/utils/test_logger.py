"""Tests for the application logger."""

import logging
import logging.handlers

from taskflow_cli.utils.logger import get_logger


def test_singleton(tmp_path):
    assert get_logger() is get_logger()


def _file_handlers(logger):
    return [h for h in logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]


def test_writes_rotating_file(tmp_path):
    logger = get_logger()
    (handler,) = _file_handlers(logger)
    assert handler.maxBytes == 5 * 1024 * 1024
    assert handler.backupCount == 3

    logging.getLogger("taskflow_cli.models.timer.engine").info("engine says hi")
    handler.flush()

    log_file = tmp_path / "logs" / "taskflow.log"
    assert "engine says hi" in log_file.read_text(encoding="utf-8")


def test_file_handler_added_alongside_existing_handlers(tmp_path):
    app_logger = logging.getLogger("taskflow_cli")
    foreign = logging.NullHandler()
    app_logger.addHandler(foreign)
    try:
        logger = get_logger()
        assert foreign in logger.handlers
        (handler,) = _file_handlers(logger)

        logger.info("written despite other handlers")
        handler.flush()
        log_file = tmp_path / "logs" / "taskflow.log"
        assert "written despite other handlers" in log_file.read_text(encoding="utf-8")
    finally:
        app_logger.removeHandler(foreign)


def test_does_not_propagate_to_root():
    assert get_logger().propagate is False


def test_level_from_environment(monkeypatch):
    monkeypatch.setenv("TASKFLOW_LOG_LEVEL", "warning")
    assert get_logger().level == logging.WARNING


def test_unknown_level_falls_back_to_debug(monkeypatch):
    monkeypatch.setenv("TASKFLOW_LOG_LEVEL", "chatty")
    assert get_logger().level == logging.DEBUG
