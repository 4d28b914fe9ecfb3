"""Task list commands for Taskflow CLI."""

import typer
from rich.table import Table

from taskflow_cli.models.task import Task
from taskflow_cli.utils.exit_codes import ERROR_NOT_FOUND
from taskflow_cli.utils.ui.console import get_console
from taskflow_cli.utils.ui.formatters import format_output, format_success, format_warning

from .decorators import AppError, command_wrapper
from .utils import open_app_context, resolve_output_format

console = get_console()
app = typer.Typer(help="Task list commands")


def _short_time(value: str | None) -> str:
    if not value:
        return "-"
    return value[:16].replace("T", " ")


def _print_tasks(tasks: list[Task]) -> None:
    if not tasks:
        console.print("[yellow]No tasks yet. Add one with 'taskflow tasks add'.[/yellow]")
        return

    done = sum(1 for t in tasks if t.completed)
    table = Table(title=f"{done} of {len(tasks)} tasks completed", show_header=True)
    table.add_column("ID", style="dim")
    table.add_column("", justify="center")
    table.add_column("Task")
    table.add_column("Created", style="cyan")
    table.add_column("Completed", style="green")

    for task in tasks:
        text = f"[strike dim]{task.text}[/strike dim]" if task.completed else task.text
        table.add_row(
            str(task.id),
            "[green]✓[/green]" if task.completed else "○",
            text,
            _short_time(task.created_at),
            _short_time(task.completed_at),
        )
    console.print(table)


@app.command("add")
@command_wrapper
def add_task(text: str = typer.Argument(..., help="Task description")):
    """Add a task to the list."""
    with open_app_context() as ctx:
        task = ctx.tasks.add(text)

    if task is None:
        format_warning("Empty task ignored")
        return
    format_success(f"Added task {task.id}: {task.text}")


@app.command("list")
@command_wrapper
def list_tasks(
    output: str | None = typer.Option(
        None, "--output", "-o", help="Output format (pretty/table/json/yaml)"
    ),
):
    """List tasks in the order they were added."""
    output = resolve_output_format(output)
    with open_app_context() as ctx:
        tasks = ctx.tasks.list_tasks()

    if output == "pretty":
        _print_tasks(tasks)
    else:
        format_output([t.to_dict() for t in tasks], output)


@app.command("toggle")
@command_wrapper
def toggle_task(task_id: int = typer.Argument(..., help="Task ID")):
    """Mark a task done, or back to pending."""
    with open_app_context() as ctx:
        task = ctx.tasks.toggle(task_id)

    if task is None:
        raise AppError(f"Task {task_id} not found", ERROR_NOT_FOUND)
    state = "completed" if task.completed else "reopened"
    format_success(f"Task {task.id} {state}: {task.text}")


@app.command("delete")
@command_wrapper
def delete_task(task_id: int = typer.Argument(..., help="Task ID")):
    """Delete a task."""
    with open_app_context() as ctx:
        deleted = ctx.tasks.delete(task_id)

    if not deleted:
        raise AppError(f"Task {task_id} not found", ERROR_NOT_FOUND)
    format_success(f"Deleted task {task_id}")


@app.command("clear-completed")
@command_wrapper
def clear_completed():
    """Remove every completed task."""
    with open_app_context() as ctx:
        removed = ctx.tasks.clear_completed()

    format_success(f"Removed {removed} completed task(s)")
