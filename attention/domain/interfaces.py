from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Protocol

from attention.domain.models import InstalledApp, MusicSource, SessionRecord


class IFileService(Protocol):
    """Read/write text files. Writes should be atomic when possible."""

    def read_text(self, path: Path) -> str: ...
    def write_text_atomic(self, path: Path, text: str) -> None: ...


class IProcessRunner(Protocol):
    """Launch external programs (open, osascript, ...)."""

    def start_detached(self, program: str, args: Sequence[str]) -> bool: ...
    def run(self, program: str, args: Sequence[str], timeout_ms: int = 5000) -> tuple[int, str]: ...


class IScheduler(Protocol):
    """Periodic tick source owned by a single session."""

    @property
    def is_ticking(self) -> bool: ...
    def start_ticking(self, interval_seconds: float, on_tick: Callable[[], None]) -> None: ...
    def stop_ticking(self) -> None: ...


class IApplicationDirectory(Protocol):
    def list_applications(self) -> list[InstalledApp]: ...
    def open(self, identifier: str) -> None: ...
    def activate(self, identifier: str) -> None: ...


class IDesktopOrganizer(Protocol):
    def clear(self) -> str: ...
    def restore(self, folder_token: str) -> None: ...
    def list_items(self) -> list[Path]: ...


class IMusicPlayer(Protocol):
    def start(self, source: MusicSource) -> None: ...
    def pause(self) -> None: ...
    def is_running(self, source: MusicSource) -> bool: ...


class IHistoryStore(Protocol):
    """Persist and query finished focus sessions."""

    def save(self, record: SessionRecord) -> None: ...
    def load_all(self) -> list[SessionRecord]: ...
    def today(self) -> list[SessionRecord]: ...
    def this_week(self) -> list[SessionRecord]: ...
    def total_focus_time(self, records: Sequence[SessionRecord]) -> float: ...


class IConfigService(Protocol):
    """Read-only application configuration (INI sections and keys)."""

    def get(self, section: str, key: str, default: str | None = None) -> str | None: ...
    def get_int(self, section: str, key: str, default: int | None = None) -> int | None: ...
    def app_version(self) -> str: ...
