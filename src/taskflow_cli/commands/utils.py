"""Shared helpers for command modules."""

from __future__ import annotations

from taskflow_cli.models.timer.clock import ClockSource
from taskflow_cli.services.app_context import AppContext, build_app_context, create_notifier
from taskflow_cli.services.config_service import get_config_service
from taskflow_cli.services.notification_service import Notifier
from taskflow_cli.utils.ui.console import apply_color_setting, get_console


def open_app_context(
    clock: ClockSource | None = None, notifier: Notifier | None = None
) -> AppContext:
    """Build the application context from the user's configuration.

    Alerts go to the shared console unless another notifier is given.
    """
    svc = get_config_service()
    apply_color_setting(svc.config.output.color)
    if notifier is None:
        notifier = create_notifier(svc.config, get_console())
    return build_app_context(
        svc.config,
        clock=clock,
        notifier=notifier,
        db_path=svc.database_path,
    )


def resolve_output_format(output: str | None) -> str:
    """Use ``--output`` when given, otherwise the configured ``output.format``."""
    return output or get_config_service().config.output.format


def parse_config_value(value: str) -> str | int | bool:
    """Convert a CLI string to bool/int when it looks like one."""
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    if value.lstrip("-").isdigit():
        return int(value)
    return value
