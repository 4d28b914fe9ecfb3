"""Shared Rich console for Taskflow CLI output."""

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=2)
def get_console(highlight: bool = True) -> Console:
    """Get the Rich Console every command prints through."""
    return Console(highlight=highlight)


def apply_color_setting(color: bool) -> None:
    """Strip colour from the shared console when ``output.color`` is off."""
    get_console().no_color = not color
