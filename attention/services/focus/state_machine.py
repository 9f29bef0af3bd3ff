from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from attention.domain.models import Completed, Idle, Paused, Running, SessionState

TICK_SECONDS = 1


class SessionAlreadyActiveError(RuntimeError):
    """Raised when a session is started while another one is running or paused."""


class Effect(Enum):
    OPEN_RECORD = auto()
    RUN_START_ACTIONS = auto()
    START_TICKING = auto()
    STOP_TICKING = auto()
    FINALIZE_RECORD = auto()
    RUN_END_ACTIONS = auto()
    NOTIFY_COMPLETION = auto()


# ---------- Events ----------


@dataclass(frozen=True)
class Start:
    duration: int


@dataclass(frozen=True)
class Tick:
    pass


@dataclass(frozen=True)
class Pause:
    pass


@dataclass(frozen=True)
class Resume:
    pass


@dataclass(frozen=True)
class End:
    pass


@dataclass(frozen=True)
class Dismiss:
    pass


SessionEvent = Start | Tick | Pause | Resume | End | Dismiss


@dataclass(frozen=True)
class Transition:
    state: SessionState
    effects: tuple[Effect, ...] = ()


_TERMINAL_EFFECTS = (Effect.STOP_TICKING, Effect.FINALIZE_RECORD, Effect.RUN_END_ACTIONS)


def transition(state: SessionState, event: SessionEvent) -> Transition:
    """
    Pure session lifecycle: (state, event) -> (next state, ordered effects).

    Unhandled pairs are no-ops. Only Start can raise, and it does so before
    any effect is produced.
    """
    if isinstance(event, Start):
        if isinstance(state, (Running, Paused)):
            raise SessionAlreadyActiveError("Cannot start a new focus session while another is active.")
        if event.duration <= 0:
            raise ValueError("Session duration must be positive")
        return Transition(
            Running(event.duration),
            (Effect.OPEN_RECORD, Effect.RUN_START_ACTIONS, Effect.START_TICKING),
        )

    if isinstance(event, Tick):
        if not isinstance(state, Running):
            return Transition(state)
        remaining = max(0, state.remaining - TICK_SECONDS)
        if remaining > 0:
            return Transition(Running(remaining))
        return Transition(Completed(), (*_TERMINAL_EFFECTS, Effect.NOTIFY_COMPLETION))

    if isinstance(event, Pause):
        if isinstance(state, Running):
            return Transition(Paused(state.remaining), (Effect.STOP_TICKING,))
        return Transition(state)

    if isinstance(event, Resume):
        if isinstance(state, Paused):
            return Transition(Running(state.remaining), (Effect.START_TICKING,))
        return Transition(state)

    if isinstance(event, End):
        if isinstance(state, (Running, Paused)):
            return Transition(Idle(), _TERMINAL_EFFECTS)
        return Transition(state)

    if isinstance(event, Dismiss):
        if isinstance(state, Completed):
            return Transition(Idle())
        return Transition(state)

    raise TypeError(f"Unknown session event: {event!r}")
