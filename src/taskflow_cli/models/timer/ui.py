"""Full-screen timer UI and result panels."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from rich.align import Align
from rich.console import Console, Group
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from taskflow_cli.utils.time_utils import format_time, get_duration_text, get_progress
from taskflow_cli.utils.ui.formatters import get_progress_bar

from .engine import TimerEngine
from .history import SessionRecord
from .keyboard import NullKeyboard, get_keyboard_handler
from .presets import TIMER_PRESETS, PresetKind, get_preset
from .state import TimerPhase, TimerState

# Number keys switch presets, in display order.
PRESET_KEYS: dict[str, PresetKind] = {
    str(i): kind for i, kind in enumerate(TIMER_PRESETS, start=1)
}


@dataclass
class TimerOutcome:
    """How a full-screen run ended."""

    status: str  # completed | stopped | quit | interrupted
    records: list[SessionRecord]


def handle_key(engine: TimerEngine, key: str | None, custom_minutes: int | None = None):
    """Apply one keypress to the engine.

    Returns ``(action, record)`` where ``action`` names what happened (or
    ``None`` for an unbound key) and ``record`` is any session written.
    """
    if key is None:
        return None, None
    if key in (" ", "p"):
        engine.toggle()
        return "toggle", None
    if key == "s":
        return "stop", engine.stop()
    if key == "r":
        engine.reset()
        return "reset", None
    if key == "q":
        return "quit", engine.stop()
    if key in PRESET_KEYS:
        # Switching while running stops the session, which may record it.
        previous = engine.session_store.list()
        newest_id = previous[0].id if previous else None
        engine.activate(PRESET_KEYS[key], custom_minutes)
        sessions = engine.session_store.list()
        record = sessions[0] if sessions and sessions[0].id != newest_id else None
        return "switch", record
    return None, None


class TimerDisplay:
    """Manages the fullscreen timer display."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def create_layout(self, state: TimerState, notice: str | None = None) -> Layout:
        """Create the timer layout with all components."""
        layout = Layout()
        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=3),
        )

        preset = get_preset(state.type)
        phase = state.phase
        if phase is TimerPhase.RUNNING:
            title, color = "Focus Time", preset.color
        elif phase is TimerPhase.COMPLETED:
            title, color = "COMPLETED", "green"
        elif phase is TimerPhase.PAUSED:
            title, color = "PAUSED", "yellow"
        else:
            title, color = "Ready", "cyan"

        header_text = Text(
            f"{preset.name}  -  {title}", style=f"bold {color}", justify="center"
        )
        layout["header"].update(Align.center(header_text, vertical="middle"))

        layout["body"].update(
            Align.center(self._create_body_content(state, notice), vertical="middle")
        )
        layout["footer"].update(
            Align.center(self._create_footer_text(phase), vertical="middle")
        )
        return layout

    def _create_body_content(self, state: TimerState, notice: str | None) -> Group:
        """Create the main body content."""
        components = []

        remaining = state.time_left_seconds
        if state.phase is TimerPhase.PAUSED:
            timer_color = "yellow"
        elif remaining < 60:
            timer_color = "red"
        elif remaining < 300:
            timer_color = "yellow"
        else:
            timer_color = "cyan"

        big_timer = Text(justify="center")
        big_timer.append(" " * 10)
        big_timer.append(format_time(remaining), style=f"bold {timer_color}")
        big_timer.append(" " * 10)
        components.append(big_timer)
        components.append(Text(""))

        progress_pct = get_progress(remaining, state.original_seconds)
        progress_text = Text(justify="center")
        progress_text.append(
            get_progress_bar(progress_pct) + f"  {progress_pct}%", style="dim"
        )
        components.append(progress_text)

        components.append(Text(""))
        components.append(
            Text(
                f"{get_duration_text(state.original_seconds)} session",
                style="dim",
                justify="center",
            )
        )

        if notice:
            components.append(Text(""))
            components.append(Text(notice, style="bold green", justify="center"))

        return Group(*components)

    def _create_footer_text(self, phase: TimerPhase) -> Text:
        """Create footer with keyboard hints."""
        if phase is TimerPhase.RUNNING:
            first = "'p' pause"
        elif phase is TimerPhase.PAUSED:
            first = "'p' resume"
        else:
            first = "'p' start"
        hints = f"{first}  •  's' stop  •  'r' reset  •  1-7 preset  •  'q' quit"
        return Text(hints, style="dim", justify="center")

    def run_timer(
        self,
        engine: TimerEngine,
        keyboard=None,
        custom_minutes: int | None = None,
        sleep: Callable[[float], None] = time.sleep,
        on_record: Callable[[SessionRecord], None] | None = None,
    ) -> TimerOutcome:
        """
        Run the fullscreen timer until completion or quit.

        The engine is expected to be driven by its own clock; this loop only
        polls the keyboard and redraws. When stdin is not a terminal the loop
        ends as soon as the timer is not running.
        """
        keyboard = keyboard or get_keyboard_handler()
        # Without key input an idle or paused timer can never move again.
        interactive = not isinstance(keyboard, NullKeyboard)
        records: list[SessionRecord] = []
        notice: str | None = None

        def keep(record: SessionRecord | None) -> None:
            if record is not None:
                records.append(record)
                if on_record:
                    on_record(record)

        try:
            with Live(
                self.create_layout(engine.state),
                console=self.console,
                refresh_per_second=4,
                screen=True,
            ) as live:
                while True:
                    action, record = handle_key(engine, keyboard.get_key(), custom_minutes)
                    keep(record)

                    if action == "quit":
                        return TimerOutcome("quit", records)
                    if action == "stop":
                        notice = (
                            f"Stopped - {get_duration_text(record.duration_seconds)} saved"
                            if record
                            else "Stopped - under a minute, not saved"
                        )
                    elif action is not None:
                        notice = None

                    state = engine.state
                    if state.phase is TimerPhase.COMPLETED:
                        sessions = engine.session_store.list()
                        if sessions and sessions[0].completed:
                            keep(sessions[0])
                        live.update(self.create_layout(state, "Session complete!"))
                        sleep(2)
                        return TimerOutcome("completed", records)
                    if not interactive and not state.is_active:
                        return TimerOutcome("quit", records)

                    live.update(self.create_layout(state, notice))
                    sleep(0.25)

        except KeyboardInterrupt:
            keep(engine.stop())
            return TimerOutcome("interrupted", records)
        finally:
            keyboard.stop()


def show_completion_message(record: SessionRecord, console: Console | None = None):
    """Show a completion message after the timer ends."""
    console = console or Console()
    preset = get_preset(record.type)

    panel = Panel(
        f"""[bold green]🎉 {preset.name} Complete![/bold green]

Duration: {get_duration_text(record.duration_seconds)}
Finished at: {record.timestamp} • {record.date}

Session saved to history.""",
        border_style="green",
        padding=(1, 2),
    )
    console.print(panel)


def show_stopped_message(record: SessionRecord | None, console: Console | None = None):
    """Show a message when a session is stopped early."""
    console = console or Console()

    if record is None:
        body = "[yellow]Session Stopped[/yellow]\n\nLess than a minute elapsed; nothing was saved."
    else:
        preset = get_preset(record.type)
        body = f"""[yellow]{preset.name} Stopped[/yellow]

Time focused: {get_duration_text(record.duration_seconds)}

Partial session saved to history."""

    console.print(Panel(body, border_style="yellow", padding=(1, 2)))
