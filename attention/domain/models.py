from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from pathlib import Path
from uuid import UUID, uuid4

DEFAULT_STARTER_TASK_PROMPT = "What's the first small task you'll do?"


# ---------- Session state (tagged variant) ----------


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Running:
    remaining: int


@dataclass(frozen=True)
class Paused:
    remaining: int


@dataclass(frozen=True)
class Completed:
    pass


SessionState = Idle | Running | Paused | Completed


def status_text(state: SessionState) -> str:
    if isinstance(state, Running):
        return "Focus session in progress"
    if isinstance(state, Paused):
        return "Session paused"
    if isinstance(state, Completed):
        return "Session complete!"
    return "Ready to focus"


# ---------- Configuration ----------


class MusicSource(Enum):
    APPLE_MUSIC = 0
    SPOTIFY = 1
    OTHER = 2


class CompletionChoice(Enum):
    START_BREAK = auto()
    CLOSE = auto()


@dataclass(frozen=True)
class SessionConfiguration:
    """Immutable snapshot of the user's choices for one session."""

    duration: int  # seconds
    clear_desktop: bool = False
    app_to_open: str | None = None  # bundle identifier
    start_music: bool = False
    music_source: MusicSource = MusicSource.APPLE_MUSIC
    show_starter_task: bool = False
    starter_task_prompt: str = DEFAULT_STARTER_TASK_PROMPT
    restore_desktop_on_end: bool = False
    pause_music_on_end: bool = False

    def __post_init__(self) -> None:
        if self.duration <= 0:
            raise ValueError("Session duration must be positive")
        if self.app_to_open is not None and not self.app_to_open.strip():
            object.__setattr__(self, "app_to_open", None)

    @classmethod
    def default(cls) -> SessionConfiguration:
        return cls(
            duration=25 * 60,
            clear_desktop=True,
            app_to_open=None,
            start_music=False,
            music_source=MusicSource.APPLE_MUSIC,
            show_starter_task=True,
        )


# ---------- History ----------


@dataclass
class SessionRecord:
    start_time: datetime
    planned_duration: float  # seconds
    end_time: datetime | None = None
    id: UUID = field(default_factory=uuid4)

    @property
    def actual_duration(self) -> float | None:
        if self.end_time is None:
            return None
        return (self.end_time - self.start_time).total_seconds()

    @property
    def completed(self) -> bool:
        return self.end_time is not None

    def finish(self, at: datetime) -> None:
        if self.end_time is not None:
            raise RuntimeError(f"Session {self.id} has already ended.")
        self.end_time = at

    def to_dict(self) -> dict[str, object]:
        return {
            "id": str(self.id),
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "planned_duration": self.planned_duration,
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> SessionRecord:
        end_raw = data.get("end_time")
        return cls(
            id=UUID(str(data["id"])),
            start_time=datetime.fromisoformat(str(data["start_time"])),
            end_time=datetime.fromisoformat(str(end_raw)) if end_raw else None,
            planned_duration=float(data["planned_duration"]),  # type: ignore[arg-type]
        )


@dataclass(frozen=True)
class InstalledApp:
    name: str
    identifier: str
    path: Path
