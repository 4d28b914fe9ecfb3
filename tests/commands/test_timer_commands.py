"""CLI tests for the timer command group.

The full-screen display is replaced with a stub; everything else (config,
SQLite storage, history) runs for real inside a temporary directory.
"""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from taskflow_cli.commands.utils import open_app_context
from taskflow_cli.main import app
from taskflow_cli.models.timer.presets import PresetKind
from taskflow_cli.models.timer.ui import TimerOutcome
from taskflow_cli.services.notification_service import ConsoleNotifier, RecordingNotifier
from taskflow_cli.utils.ui.console import get_console

runner = CliRunner()


def _invoke(*args, input=None):
    return runner.invoke(app, list(args), input=input)


def _seed_history(*entries):
    """Record sessions through the real storage stack."""
    with open_app_context() as ctx:
        for kind, duration, completed in entries:
            ctx.sessions.record(PresetKind.parse(kind), duration, completed)


class FakeDisplay:
    """Stands in for TimerDisplay; finishes the session immediately."""

    calls: list = []

    def __init__(self, console=None):
        self.console = console

    def run_timer(self, engine, custom_minutes=None, **kwargs):
        FakeDisplay.calls.append((engine.state, custom_minutes))
        state = engine.state
        if not state.is_active:
            return TimerOutcome("quit", [])
        record = engine.session_store.record(state.type, state.original_seconds, True)
        engine.notifier.notify("Timer Complete!", "Your session has finished.")
        return TimerOutcome("completed", [record])


@pytest.fixture()
def fake_display():
    FakeDisplay.calls = []
    with patch("taskflow_cli.commands.timer.TimerDisplay", FakeDisplay):
        yield FakeDisplay


class TestStart:
    def test_completed_session_is_reported_after_display_closes(self, cli_env, fake_display):
        result = _invoke("timer", "start", "shortBreak")

        assert result.exit_code == 0, result.output
        assert "Timer Complete!" in result.output
        assert "Short Break Complete!" in result.output
        (state, _), = fake_display.calls
        assert state.time_left_seconds == 300

    def test_custom_minutes(self, cli_env, fake_display):
        result = _invoke("timer", "start", "custom", "--minutes", "45")
        assert result.exit_code == 0, result.output
        (state, minutes), = fake_display.calls
        assert state.original_seconds == 2700
        assert minutes == 45

    def test_minutes_alone_implies_custom(self, cli_env, fake_display):
        _invoke("timer", "start", "-m", "999")
        (state, _), = fake_display.calls
        assert state.original_seconds == 300 * 60

    def test_paused_start_saves_nothing(self, cli_env, fake_display):
        result = _invoke("timer", "start", "--paused")
        assert result.exit_code == 0, result.output
        assert "Nothing was saved" in result.output

    def test_unknown_preset(self, cli_env, fake_display):
        result = _invoke("timer", "start", "siesta")
        assert result.exit_code == 2
        assert "Unknown timer preset" in result.output
        assert fake_display.calls == []

    def test_notifications_disabled(self, cli_env, fake_display):
        _invoke("config", "set", "timer.notifications", "false")
        result = _invoke("timer", "start", "pomodoro")
        assert result.exit_code == 0, result.output
        assert "Timer Complete!" not in result.output
        assert "Pomodoro Complete!" in result.output

    def test_minutes_rejected_for_fixed_preset(self, cli_env, fake_display):
        result = _invoke("timer", "start", "pomodoro", "--minutes", "45")
        assert result.exit_code == 2
        assert "only applies to the custom preset" in result.output
        assert fake_display.calls == []

    def test_alerts_delivered_by_context_notifier(self, cli_env, fake_display):
        delivered = RecordingNotifier()
        with patch("taskflow_cli.commands.utils.create_notifier", return_value=delivered):
            result = _invoke("timer", "start", "shortBreak")

        assert result.exit_code == 0, result.output
        assert delivered.messages == [("Timer Complete!", "Your session has finished.")]
        assert "Timer Complete!" not in result.output

    def test_context_notifier_prints_on_shared_console(self, cli_env):
        with open_app_context() as ctx:
            assert isinstance(ctx.notifier, ConsoleNotifier)
            assert ctx.notifier.console is get_console()


class TestPresets:
    def test_lists_all_presets(self, cli_env):
        result = _invoke("timer", "presets")
        assert result.exit_code == 0
        for name in ("pomodoro", "deepWork", "shortBreak", "custom"):
            assert name in result.output
        assert "2:00:00" in result.output


class TestHistory:
    def test_empty(self, cli_env):
        result = _invoke("timer", "history")
        assert result.exit_code == 0
        assert "No timer sessions found" in result.output

    def test_json_newest_first(self, cli_env):
        _seed_history(("pomodoro", 1500, True), ("shortBreak", 300, False))
        result = _invoke("timer", "history", "--output", "json")
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert [d["type"] for d in data] == ["shortBreak", "pomodoro"]
        assert set(data[0]) == {"id", "type", "duration", "completed", "timestamp", "date"}

    def test_limit(self, cli_env):
        _seed_history(*[("pomodoro", 1500, True)] * 5)
        result = _invoke("timer", "history", "-n", "2", "-o", "json")
        assert len(json.loads(result.output)) == 2

    def test_pretty_table(self, cli_env):
        _seed_history(("longBreak", 900, True))
        result = _invoke("timer", "history")
        assert result.exit_code == 0
        assert "Long Break" in result.output
        assert "completed" in result.output


class TestStats:
    def test_stats(self, cli_env):
        _seed_history(
            ("pomodoro", 1500, True),
            ("pomodoro", 1500, True),
            ("focus60", 900, False),
        )
        result = _invoke("timer", "stats", "-o", "json")
        data = json.loads(result.output)
        assert data["total_sessions"] == 3
        assert data["completed_sessions"] == 2
        assert data["total_focus_seconds"] == 3000
        assert data["by_type"] == {"pomodoro": 2}

    def test_pretty(self, cli_env):
        _seed_history(("pomodoro", 1500, True))
        result = _invoke("timer", "stats")
        assert result.exit_code == 0
        assert "Total Sessions" in result.output
        assert "25 min" in result.output


class TestClearHistory:
    def test_clear_with_yes(self, cli_env):
        _seed_history(("pomodoro", 1500, True), ("pomodoro", 1500, True))
        result = _invoke("timer", "clear-history", "--yes")
        assert result.exit_code == 0
        assert "Cleared 2 session(s)" in result.output
        assert "No timer sessions found" in _invoke("timer", "history").output

    def test_declining_keeps_history(self, cli_env):
        _seed_history(("pomodoro", 1500, True))
        result = _invoke("timer", "clear-history", input="n\n")
        assert result.exit_code == 0
        assert "Cancelled" in result.output
        assert len(json.loads(_invoke("timer", "history", "-o", "json").output)) == 1
