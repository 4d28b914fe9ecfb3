"""Output formatters shared by the command modules.

``json`` and ``yaml`` go to plain stdout so they can be piped; every other
format renders a Rich table on the shared console.
"""

import json
from typing import Any

import yaml
from rich.table import Table

from .console import get_console

console = get_console()


def format_output(data: Any, output_format: str = "table") -> None:
    """Print ``data`` as JSON, YAML or a table."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str, ensure_ascii=False))
    elif output_format == "yaml":
        print(yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True))
    elif isinstance(data, dict):
        format_mapping(data)
    elif isinstance(data, list) and data and all(isinstance(row, dict) for row in data):
        format_rows(data)
    elif data:
        for item in data if isinstance(data, list) else [data]:
            console.print(item)
    else:
        console.print("[yellow]Nothing to display[/yellow]")


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if value is None:
        return "-"
    if isinstance(value, (list, tuple)):
        return ", ".join(_cell(v) for v in value)
    return str(value)


def _flatten(data: dict, prefix: str = "") -> list[tuple[str, Any]]:
    pairs: list[tuple[str, Any]] = []
    for key, value in data.items():
        name = f"{prefix}{key}"
        if isinstance(value, dict) and value:
            pairs.extend(_flatten(value, f"{name}."))
        else:
            pairs.append((name, value))
    return pairs


def format_rows(rows: list[dict]) -> None:
    """One table row per dictionary; columns come from the first row."""
    columns = list(rows[0])
    table = Table(show_header=True, header_style="bold magenta")
    for column in columns:
        table.add_column(column.replace("_", " ").title())
    for row in rows:
        table.add_row(*(_cell(row.get(column)) for column in columns))
    console.print(table)


def format_mapping(data: dict) -> None:
    """Key/value table; nested sections appear as dotted keys (``timer.bell``)."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for key, value in _flatten(data):
        table.add_row(key, _cell(value))
    console.print(table)


def format_error(message: str) -> None:
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def get_progress_bar(percentage: float, width: int = 40) -> str:
    """Render a text progress bar for a 0-100 percentage."""
    filled = int(width * max(0.0, min(100.0, percentage)) / 100)
    return "▓" * filled + "░" * (width - filled)
