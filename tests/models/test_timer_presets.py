"""Tests for timer presets and TimerConfig."""

import pytest

from taskflow_cli.models.timer.presets import (
    DEFAULT_CUSTOM_MINUTES,
    TIMER_PRESETS,
    PresetKind,
    TimerConfig,
    clamp_custom_minutes,
    get_preset,
)


class TestPresetKind:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("pomodoro", PresetKind.POMODORO),
            ("deepWork", PresetKind.DEEP_WORK),
            ("deep_work", PresetKind.DEEP_WORK),
            ("DEEPWORK", PresetKind.DEEP_WORK),
            ("shortBreak", PresetKind.SHORT_BREAK),
            ("  long_break ", PresetKind.LONG_BREAK),
            ("custom", PresetKind.CUSTOM),
        ],
    )
    def test_parse(self, text, expected):
        assert PresetKind.parse(text) is expected

    def test_parse_passes_through_members(self):
        assert PresetKind.parse(PresetKind.FOCUS60) is PresetKind.FOCUS60

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="Unknown timer preset"):
            PresetKind.parse("siesta")


class TestPresetTable:
    @pytest.mark.parametrize(
        "kind,minutes",
        [
            (PresetKind.POMODORO, 25),
            (PresetKind.FOCUS30, 30),
            (PresetKind.FOCUS60, 60),
            (PresetKind.DEEP_WORK, 120),
            (PresetKind.SHORT_BREAK, 5),
            (PresetKind.LONG_BREAK, 15),
            (PresetKind.CUSTOM, 10),
        ],
    )
    def test_durations(self, kind, minutes):
        assert TIMER_PRESETS[kind].duration_seconds == minutes * 60

    def test_every_kind_has_a_preset(self):
        assert set(TIMER_PRESETS) == set(PresetKind)

    def test_get_preset_falls_back_to_custom(self):
        assert get_preset("unheard-of") is TIMER_PRESETS[PresetKind.CUSTOM]
        assert get_preset("longBreak").name == "Long Break"


class TestClampCustomMinutes:
    @pytest.mark.parametrize(
        "value,expected",
        [(0, 1), (-20, 1), (1, 1), (45, 45), (300, 300), (301, 300), (10_000, 300),
         ("25", 25), (12.7, 12)],
    )
    def test_clamps_into_range(self, value, expected):
        assert clamp_custom_minutes(value) == expected

    @pytest.mark.parametrize("value", ["abc", "", None, float("nan"), float("inf")])
    def test_non_numeric_uses_default(self, value):
        assert clamp_custom_minutes(value) == DEFAULT_CUSTOM_MINUTES


class TestTimerConfig:
    def test_preset_ignores_custom_minutes(self):
        assert TimerConfig.from_preset("pomodoro", 99).duration_seconds == 1500

    def test_custom_uses_minutes(self):
        assert TimerConfig.from_preset("custom", 45) == TimerConfig(PresetKind.CUSTOM, 2700)

    def test_custom_default(self):
        assert TimerConfig.from_preset(PresetKind.CUSTOM).duration_seconds == 600

    def test_custom_bounds(self):
        assert TimerConfig.from_preset("custom", 0).duration_seconds == 60
        assert TimerConfig.from_preset("custom", 301).duration_seconds == 18000

    def test_is_immutable(self):
        config = TimerConfig.from_preset("pomodoro")
        with pytest.raises(AttributeError):
            config.duration_seconds = 1  # type: ignore[misc]
