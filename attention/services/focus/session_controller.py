from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import TypeVar

from PyQt6.QtCore import QObject, pyqtSignal

from attention.domain.interfaces import IHistoryStore, IScheduler
from attention.domain.models import (
    Completed,
    CompletionChoice,
    Idle,
    Paused,
    Running,
    SessionConfiguration,
    SessionRecord,
    SessionState,
)
from attention.services.focus.scheduler import default_scheduler_factory
from attention.services.focus.start_orchestrator import (
    Dispatch,
    StartOrchestrator,
    post_to_event_loop,
)
from attention.services.focus.state_machine import (
    TICK_SECONDS,
    Dismiss,
    Effect,
    End,
    Pause,
    Resume,
    SessionEvent,
    Start,
    Tick,
    transition,
)
from attention.services.ui.ports.prompts import IPromptService

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


def _now() -> datetime:
    return datetime.now().astimezone()


class SessionController(QObject):
    """Own one focus session at a time: state, countdown, record, and start actions."""

    state_changed = pyqtSignal(object)  # SessionState
    tick = pyqtSignal(int, int)  # remaining_seconds, total_seconds
    session_finished = pyqtSignal(object)  # SessionRecord
    history_failed = pyqtSignal(str)
    break_requested = pyqtSignal()

    def __init__(
        self,
        *,
        history: IHistoryStore,
        orchestrator: StartOrchestrator,
        prompts: IPromptService | None = None,
        scheduler_factory: Callable[[], IScheduler] = default_scheduler_factory,
        clock: Callable[[], datetime] = _now,
        dispatch: Dispatch = post_to_event_loop,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._history = history
        self._orchestrator = orchestrator
        self._prompts = prompts
        self._scheduler_factory = scheduler_factory
        self._clock = clock
        self._dispatch = dispatch

        self._state: SessionState = Idle()
        self._config: SessionConfiguration | None = None
        self._record: SessionRecord | None = None
        self._scheduler: IScheduler | None = None

    # ---------- Read-only view ----------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def configuration(self) -> SessionConfiguration | None:
        return self._config

    @property
    def record(self) -> SessionRecord | None:
        return self._record

    @property
    def is_active(self) -> bool:
        return isinstance(self._state, (Running, Paused))

    @property
    def is_paused(self) -> bool:
        return isinstance(self._state, Paused)

    @property
    def remaining_seconds(self) -> int:
        if isinstance(self._state, (Running, Paused)):
            return self._state.remaining
        return 0

    # ---------- Commands ----------

    def start(self, config: SessionConfiguration) -> SessionRecord:
        # Raises before anything is touched if a session is active.
        result = transition(self._state, Start(config.duration))
        self._config = config
        self._commit(result.state, result.effects)
        return self._require(self._record, "record")

    def pause(self) -> bool:
        return self._handle(Pause())

    def resume(self) -> bool:
        return self._handle(Resume())

    def toggle_pause(self) -> bool:
        if isinstance(self._state, Running):
            return self.pause()
        return self.resume()

    def end(self) -> bool:
        return self._handle(End())

    def dismiss(self) -> bool:
        return self._handle(Dismiss())

    # ---------- Internals ----------

    def _on_tick(self) -> None:
        self._handle(Tick())

    def _handle(self, event: SessionEvent) -> bool:
        result = transition(self._state, event)
        if result.state == self._state and not result.effects:
            return False
        self._commit(result.state, result.effects)
        return True

    def _commit(self, state: SessionState, effects: tuple[Effect, ...]) -> None:
        self._state = state
        for effect in effects:
            if effect is not Effect.NOTIFY_COMPLETION:
                self._run_effect(effect)
        if isinstance(state, (Idle, Completed)):
            self._release_scheduler()
            self._config = None
        if isinstance(state, (Running, Paused)) and self._config is not None:
            self.tick.emit(state.remaining, self._config.duration)
        self.state_changed.emit(state)
        # The completion notice goes out only once the transition is fully committed.
        if Effect.NOTIFY_COMPLETION in effects:
            self._dispatch(self._notify_completion)

    def _run_effect(self, effect: Effect) -> None:
        if effect is Effect.OPEN_RECORD:
            config = self._require(self._config, "configuration")
            self._record = SessionRecord(
                start_time=self._clock(),
                planned_duration=float(config.duration),
            )
            logger.info("Focus session %s started (%ss)", self._record.id, config.duration)
        elif effect is Effect.RUN_START_ACTIONS:
            self._orchestrator.run_start(self._require(self._config, "configuration"))
        elif effect is Effect.START_TICKING:
            if self._scheduler is None:
                self._scheduler = self._scheduler_factory()
            self._scheduler.start_ticking(TICK_SECONDS, self._on_tick)
        elif effect is Effect.STOP_TICKING:
            if self._scheduler is not None:
                self._scheduler.stop_ticking()
        elif effect is Effect.FINALIZE_RECORD:
            self._finalize_record()
        elif effect is Effect.RUN_END_ACTIONS:
            if self._config is not None:
                self._orchestrator.run_end(self._config)

    def _finalize_record(self) -> None:
        record = self._record
        if record is None:
            return
        # Drop the reference first so no later path can hand it off twice.
        self._record = None
        record.finish(self._clock())
        try:
            self._history.save(record)
        except Exception as exc:
            logger.exception("Failed to save session %s to history", record.id)
            self.history_failed.emit(f"Failed to save session history: {exc}")
        logger.info("Focus session %s ended after %.0fs", record.id, record.actual_duration or 0)
        self.session_finished.emit(record)

    @staticmethod
    def _require(value: _T | None, what: str) -> _T:
        if value is None:
            raise RuntimeError(f"No session {what} is open.")
        return value

    def _release_scheduler(self) -> None:
        scheduler = self._scheduler
        self._scheduler = None
        if scheduler is not None:
            scheduler.stop_ticking()

    def _notify_completion(self) -> None:
        if self._prompts is None:
            return
        try:
            choice = self._prompts.notify_completion()
        except Exception:
            logger.exception("Completion notice failed")
            return
        if choice is CompletionChoice.START_BREAK and isinstance(self._state, Completed):
            self.dismiss()
            self.break_requested.emit()
