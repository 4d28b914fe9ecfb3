"""Taskflow CLI - Pomodoro timer and task list for the terminal."""

__version__ = "0.9.0"
