"""Main entry point for Taskflow CLI."""

import typer
from rich.console import Console

from taskflow_cli import __version__
from taskflow_cli.commands import config, tasks, timer

app = typer.Typer(
    name="taskflow",
    help="Pomodoro timer and task list for the terminal",
    no_args_is_help=True,
)

console = Console()


app.add_typer(timer.app, name="timer", help="Pomodoro timer for focus sessions")
app.add_typer(tasks.app, name="tasks", help="Task list commands")
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]Taskflow CLI[/bold] version [cyan]{__version__}[/cyan]")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
