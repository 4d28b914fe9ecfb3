"""Pomodoro timer commands for Taskflow CLI."""

import typer
from rich.prompt import Confirm
from rich.table import Table

from taskflow_cli.models.timer.analytics import summarize_sessions
from taskflow_cli.models.timer.clock import ThreadingClock
from taskflow_cli.models.timer.presets import TIMER_PRESETS, PresetKind
from taskflow_cli.models.timer.ui import (
    PRESET_KEYS,
    TimerDisplay,
    show_completion_message,
    show_stopped_message,
)
from taskflow_cli.services.notification_service import RecordingNotifier
from taskflow_cli.utils.exit_codes import ERROR_INVALID_ARGS
from taskflow_cli.utils.time_utils import format_time, get_duration_text
from taskflow_cli.utils.ui.console import get_console
from taskflow_cli.utils.ui.formatters import format_output, format_success

from .decorators import AppError, command_wrapper
from .utils import open_app_context, resolve_output_format

console = get_console()
app = typer.Typer(help="Pomodoro timer for focus sessions")


def _parse_preset(preset: str) -> PresetKind:
    try:
        return PresetKind.parse(preset)
    except ValueError as e:
        choices = ", ".join(kind.value for kind in PresetKind)
        raise AppError(f"{e}. Choose one of: {choices}", ERROR_INVALID_ARGS) from e


@app.command("start")
@command_wrapper
def start_timer(
    preset: str = typer.Argument(
        None, help="Preset: pomodoro, focus30, focus60, deepWork, shortBreak, longBreak, custom"
    ),
    minutes: int | None = typer.Option(
        None, "--minutes", "-m", help="Custom duration in minutes (1-300)"
    ),
    paused: bool = typer.Option(
        False, "--paused", help="Open the timer without starting the countdown"
    ),
):
    """Start a full-screen timer session."""
    ctx = open_app_context(clock=ThreadingClock())
    settings = ctx.config.timer
    # Completion alerts are buffered while the full-screen display owns the
    # terminal, then handed to the configured notifier once it closes.
    alerts = RecordingNotifier()
    ctx.engine.notifier = alerts

    with ctx:
        if preset is not None or minutes is not None:
            kind = _parse_preset(preset) if preset else PresetKind.CUSTOM
            if minutes is not None and kind is not PresetKind.CUSTOM:
                raise AppError(
                    f"--minutes only applies to the custom preset, not {kind.value}",
                    ERROR_INVALID_ARGS,
                )
            custom_minutes = minutes if minutes is not None else settings.custom_minutes
            config = ctx.engine.activate(kind, custom_minutes)
        else:
            custom_minutes = settings.custom_minutes
            config = ctx.engine.config

        console.print(
            f"[dim]{TIMER_PRESETS[config.type].name}: "
            f"{get_duration_text(config.duration_seconds)}[/dim]"
        )
        if not paused:
            ctx.engine.start()

        outcome = TimerDisplay(console).run_timer(ctx.engine, custom_minutes=custom_minutes)

    for title, body in alerts.messages:
        ctx.notifier.notify(title, body)

    completed = [r for r in outcome.records if r.completed]
    stopped = [r for r in outcome.records if not r.completed]
    if outcome.status == "completed" and completed:
        show_completion_message(completed[0], console)
    elif stopped:
        show_stopped_message(stopped[-1], console)
    else:
        console.print("[dim]Timer closed. Nothing was saved to history.[/dim]")


@app.command("presets")
@command_wrapper
def list_presets():
    """List timer presets and their keyboard shortcuts."""
    keys = {kind: key for key, kind in PRESET_KEYS.items()}

    table = Table(title="Timer Presets", show_header=True)
    table.add_column("Key", justify="center", style="dim")
    table.add_column("Preset", style="cyan")
    table.add_column("Name")
    table.add_column("Duration", justify="right")
    table.add_column("Description", style="dim")

    for kind, preset in TIMER_PRESETS.items():
        table.add_row(
            keys.get(kind, ""),
            kind.value,
            f"[{preset.color}]{preset.name}[/{preset.color}]",
            format_time(preset.duration_seconds),
            preset.description,
        )
    console.print(table)
    console.print("\nUse: [cyan]taskflow timer start <preset>[/cyan]\n")


@app.command("history")
@command_wrapper
def show_history(
    limit: int = typer.Option(20, "--limit", "-n", help="Number of sessions to show"),
    output: str | None = typer.Option(
        None, "--output", "-o", help="Output format (pretty/table/json/yaml)"
    ),
):
    """Show recent timer sessions, newest first."""
    output = resolve_output_format(output)
    with open_app_context() as ctx:
        records = list(ctx.sessions.list()[: max(0, limit)])

    if output != "pretty":
        format_output([r.to_dict() for r in records], output)
        return

    if not records:
        console.print("[yellow]No timer sessions found[/yellow]")
        return

    table = Table(title=f"Recent Sessions ({len(records)})", show_header=True)
    table.add_column("Date", style="cyan")
    table.add_column("Time")
    table.add_column("Type")
    table.add_column("Duration", justify="right")
    table.add_column("Status")

    for record in records:
        preset = TIMER_PRESETS.get(record.type, TIMER_PRESETS[PresetKind.CUSTOM])
        status = "[green]completed[/green]" if record.completed else "[yellow]stopped[/yellow]"
        table.add_row(
            record.date,
            record.timestamp,
            preset.name,
            get_duration_text(record.duration_seconds),
            status,
        )
    console.print(table)


@app.command("stats")
@command_wrapper
def show_stats(
    output: str | None = typer.Option(
        None, "--output", "-o", help="Output format (pretty/table/json/yaml)"
    ),
):
    """Summarize the session history."""
    output = resolve_output_format(output)
    with open_app_context() as ctx:
        stats = summarize_sessions(ctx.sessions.list())

    if output != "pretty":
        format_output(stats.to_dict(), output)
        return

    console.print("\n[bold cyan]Timer Statistics[/bold cyan]\n")
    console.print(f"Total Sessions:   {stats.total_sessions}")
    console.print(f"Completed:        [green]{stats.completed_sessions}[/green]")
    console.print(f"Stopped:          [yellow]{stats.stopped_sessions}[/yellow]")
    console.print(f"Completion Rate:  {stats.completion_rate}%")
    console.print(f"Total Focus Time: {get_duration_text(stats.total_focus_seconds)}")

    if stats.by_type:
        console.print("\n[bold]Completed by preset[/bold]")
        for kind, count in sorted(stats.by_type.items(), key=lambda kv: -kv[1]):
            console.print(f"  {TIMER_PRESETS[PresetKind.parse(kind)].name}: {count}")
    console.print()


@app.command("clear-history")
@command_wrapper
def clear_history(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Delete every recorded session."""
    with open_app_context() as ctx:
        count = len(ctx.sessions)
        if count and not yes and not Confirm.ask(f"Delete {count} session(s)?"):
            console.print("[yellow]Cancelled[/yellow]")
            raise typer.Exit(0)
        ctx.sessions.clear()

    format_success(f"Cleared {count} session(s) from history")
