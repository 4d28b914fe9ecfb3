"""Timer engine: the countdown state machine.

Phases: idle -> running <-> paused, running -> completed (natural finish),
any -> idle via ``stop`` (records partial credit) or ``reset`` (silent).

The engine owns the clock schedule. Every operation that changes whether
the countdown runs replaces or cancels the current ``TickHandle``; ticks
from a superseded schedule are dropped, so a paused or reconfigured timer
can never be decremented by a late tick.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from taskflow_cli.services.notification_service import Notifier, NullNotifier

from .clock import ClockSource, TickHandle
from .history import SessionRecord, SessionStore
from .presets import PresetKind, TimerConfig, get_preset
from .state import TimerPhase, TimerState

logger = logging.getLogger(__name__)

MIN_RECORDED_SECONDS = 60

StateListener = Callable[[TimerState], None]


class TimerEngine:
    """Single owner of the countdown state.

    All public operations are serialized by a re-entrant lock, so the engine
    may be driven by a background clock thread and a UI thread at once.

    Args:
        session_store: Ledger receiving completed and stopped sessions.
        notifier: Alerted once per natural completion.
        clock: Schedules ticks while running. Without one, the caller is
            responsible for calling ``tick()`` once per second.
        min_recorded_seconds: Stopped sessions shorter than this are
            discarded instead of recorded.
        initial: Configuration active before the first ``activate``.
    """

    def __init__(
        self,
        session_store: SessionStore,
        notifier: Notifier | None = None,
        clock: ClockSource | None = None,
        min_recorded_seconds: int = MIN_RECORDED_SECONDS,
        initial: TimerConfig | None = None,
    ):
        self.session_store = session_store
        self.notifier = notifier or NullNotifier()
        self.clock = clock
        self.min_recorded_seconds = min_recorded_seconds

        config = initial or TimerConfig.from_preset(PresetKind.POMODORO)
        self._config = config
        self._state = TimerState(
            type=config.type,
            time_left_seconds=config.duration_seconds,
            original_seconds=config.duration_seconds,
        )

        self._lock = threading.RLock()
        self._handle: TickHandle | None = None
        self._generation = 0
        self._listeners: list[StateListener] = []

    # ---- observation ----

    @property
    def state(self) -> TimerState:
        """Snapshot of the current countdown."""
        with self._lock:
            return self._state.copy()

    @property
    def config(self) -> TimerConfig:
        return self._config

    @property
    def phase(self) -> TimerPhase:
        with self._lock:
            return self._state.phase

    @property
    def ticking(self) -> bool:
        """Whether a clock schedule is currently live."""
        return self._handle is not None

    def add_listener(self, listener: StateListener) -> Callable[[], None]:
        """Call ``listener`` with a snapshot after every change. Returns an unsubscriber."""
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def _emit(self, snapshot: TimerState) -> None:
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Timer state listener failed")

    # ---- clock schedule ----

    def _cancel_ticks(self) -> None:
        self._generation += 1
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _schedule_ticks(self) -> None:
        self._cancel_ticks()
        if self.clock is None:
            return
        generation = self._generation
        self._handle = self.clock.schedule_repeating(
            lambda: self._on_clock_tick(generation)
        )

    def _on_clock_tick(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                logger.debug("Dropped stale tick from schedule %d", generation)
                return
            self.tick()

    # ---- commands ----

    def activate(
        self, kind: PresetKind | str, custom_minutes: int | float | str | None = None
    ) -> TimerConfig:
        """Switch to a preset (or a custom duration), leaving the timer idle.

        A running timer is stopped first, which may record a partial session.
        """
        config = TimerConfig.from_preset(kind, custom_minutes)
        with self._lock:
            if self._state.is_active:
                self._stop_locked()
            self._cancel_ticks()
            self._config = config
            self._state = TimerState(
                type=config.type,
                time_left_seconds=config.duration_seconds,
                original_seconds=config.duration_seconds,
            )
            snapshot = self._state.copy()
        logger.debug("Activated %s (%ds)", config.type.value, config.duration_seconds)
        self._emit(snapshot)
        return config

    def start(self) -> bool:
        """Begin or resume counting down. Returns ``False`` when nothing changed."""
        with self._lock:
            if self._state.is_active or self._state.time_left_seconds == 0:
                return False
            self._state.is_active = True
            self._schedule_ticks()
            snapshot = self._state.copy()
        logger.debug("Started %s at %ds left", snapshot.type.value, snapshot.time_left_seconds)
        self._emit(snapshot)
        return True

    def pause(self) -> bool:
        """Pause a running countdown. Returns ``False`` when nothing changed."""
        with self._lock:
            if not self._state.is_active:
                return False
            self._cancel_ticks()
            self._state.is_active = False
            snapshot = self._state.copy()
        logger.debug("Paused at %ds left", snapshot.time_left_seconds)
        self._emit(snapshot)
        return True

    def toggle(self) -> bool:
        """Start when stopped, pause when running. Returns the new ``is_active``."""
        with self._lock:
            if self._state.is_active:
                self.pause()
            else:
                self.start()
            return self._state.is_active

    def tick(self) -> SessionRecord | None:
        """Advance the countdown by one second.

        Ignored unless running. Returns the completed-session record when
        this tick finishes the countdown.
        """
        record = None
        with self._lock:
            if not self._state.is_active:
                return None
            self._state.time_left_seconds -= 1
            if self._state.time_left_seconds <= 0:
                self._state.time_left_seconds = 0
                self._state.is_active = False
                self._cancel_ticks()
                record = self.session_store.record(
                    self._state.type,
                    self._state.original_seconds,
                    completed=True,
                )
            snapshot = self._state.copy()

        self._emit(snapshot)
        if record is not None:
            logger.info(
                "Completed %s session (%ds)", record.type.value, record.duration_seconds
            )
            self._notify_completion(record)
        return record

    def _notify_completion(self, record: SessionRecord) -> None:
        preset = get_preset(record.type)
        try:
            self.notifier.notify(
                "Timer Complete!", f"Your {preset.name} session has finished."
            )
        except Exception:
            logger.exception("Completion notification failed")

    def stop(self) -> SessionRecord | None:
        """End the session, recording partial credit when enough time elapsed.

        The countdown always returns to its full duration.
        """
        with self._lock:
            record = self._stop_locked()
            snapshot = self._state.copy()
        self._emit(snapshot)
        return record

    def _stop_locked(self) -> SessionRecord | None:
        self._cancel_ticks()
        state = self._state
        record = None
        # A finished countdown was already recorded as completed.
        finished = not state.is_active and state.time_left_seconds == 0
        if not finished and (
            state.is_active or state.time_left_seconds != state.original_seconds
        ):
            elapsed = state.elapsed_seconds
            if elapsed >= self.min_recorded_seconds:
                record = self.session_store.record(state.type, elapsed, completed=False)
                logger.info("Stopped %s session after %ds", state.type.value, elapsed)
            else:
                logger.debug("Discarded %s session after %ds", state.type.value, elapsed)
        state.time_left_seconds = state.original_seconds
        state.is_active = False
        return record

    def reset(self) -> None:
        """Restore the full duration without touching history."""
        with self._lock:
            self._cancel_ticks()
            self._state.time_left_seconds = self._state.original_seconds
            self._state.is_active = False
            snapshot = self._state.copy()
        logger.debug("Reset %s", snapshot.type.value)
        self._emit(snapshot)

    def close(self) -> None:
        """Cancel any live clock schedule without changing state."""
        with self._lock:
            self._cancel_ticks()
