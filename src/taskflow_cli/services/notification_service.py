"""User-visible alerts fired when a timer finishes naturally."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from rich.console import Console
from rich.panel import Panel

logger = logging.getLogger(__name__)


class Notifier(ABC):
    """Delivers a completion alert. Availability is the notifier's concern."""

    @abstractmethod
    def notify(self, title: str, body: str) -> None:
        """Show an alert with ``title`` and ``body``."""


class NullNotifier(Notifier):
    """Notifier used when notifications are disabled."""

    def notify(self, title: str, body: str) -> None:
        logger.debug("Notification suppressed: %s", title)


class ConsoleNotifier(Notifier):
    """Rings the terminal bell and prints a panel on the console."""

    def __init__(self, console: Console | None = None, bell: bool = True):
        self.console = console or Console()
        self.bell = bell

    def notify(self, title: str, body: str) -> None:
        if self.bell:
            self.console.bell()
        self.console.print(
            Panel(
                f"[bold green]{title}[/bold green]\n\n{body}",
                border_style="green",
                padding=(1, 2),
            )
        )


class RecordingNotifier(Notifier):
    """Keeps every alert in memory; used when the display renders them itself."""

    def __init__(self):
        self.messages: list[tuple[str, str]] = []

    def notify(self, title: str, body: str) -> None:
        self.messages.append((title, body))

    @property
    def last(self) -> tuple[str, str] | None:
        return self.messages[-1] if self.messages else None
