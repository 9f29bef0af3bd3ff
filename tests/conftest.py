from __future__ import annotations

import os
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Headless Qt for CI runs; must be set before QApplication is created.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtCore import QSettings  # noqa: E402
from PyQt6.QtWidgets import QApplication  # noqa: E402

from attention.domain.models import (  # noqa: E402
    CompletionChoice,
    InstalledApp,
    MusicSource,
    SessionRecord,
)
from attention.services.file_service import FileService  # noqa: E402
from attention.services.focus.session_controller import SessionController  # noqa: E402
from attention.services.focus.session_settings import SessionSettings  # noqa: E402
from attention.services.focus.start_orchestrator import StartOrchestrator  # noqa: E402


# --- Fallback QApplication fixture (works with or without pytest-qt) ---
@pytest.fixture(scope="session")
def qapp():
    """Provide a QApplication for tests that need Qt.
    Creates one if not present; reuses existing otherwise.
    """
    app = QApplication.instance()
    created = False
    if app is None:
        app = QApplication([])
        created = True
    try:
        yield app
    finally:
        if created:
            app.quit()


# ----------------------------
# Fakes
# ----------------------------


class ManualScheduler:
    """Scheduler stand-in: the test decides when a tick happens."""

    def __init__(self) -> None:
        self._on_tick: Callable[[], None] | None = None
        self.start_calls = 0
        self.stop_calls = 0
        self.interval: float | None = None

    @property
    def is_ticking(self) -> bool:
        return self._on_tick is not None

    def start_ticking(self, interval_seconds: float, on_tick: Callable[[], None]) -> None:
        self.start_calls += 1
        self.interval = interval_seconds
        self._on_tick = on_tick

    def stop_ticking(self) -> None:
        self.stop_calls += 1
        self._on_tick = None

    def fire(self, times: int = 1) -> None:
        for _ in range(times):
            if self._on_tick is None:
                return
            self._on_tick()


class FakeClock:
    """Frozen wall clock the test moves forward by hand."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 3, 2, 9, 0, 0, tzinfo=timezone.utc)

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)

    def __call__(self) -> datetime:
        return self.now


class FakeHistory:
    def __init__(self) -> None:
        self.saved: list[SessionRecord] = []
        self.fail_with: Exception | None = None

    def save(self, record: SessionRecord) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.saved.append(record)

    def load_all(self) -> list[SessionRecord]:
        return list(self.saved)

    def today(self) -> list[SessionRecord]:
        return list(self.saved)

    def this_week(self) -> list[SessionRecord]:
        return list(self.saved)

    def total_focus_time(self, records) -> float:
        return sum(r.actual_duration or 0 for r in records)


class RecordingCollaborators:
    """Desktop, app directory, music player and prompts in one call log."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, object]] = []
        self.failures: dict[str, Exception] = {}
        self.starter_answer: str | None = "Outline the intro"
        self.completion_choice = CompletionChoice.CLOSE
        self.warnings: list[tuple[str, str]] = []

    def _record(self, name: str, arg: object = None) -> None:
        self.calls.append((name, arg))
        if name in self.failures:
            raise self.failures[name]

    # desktop
    def clear(self) -> str:
        self._record("desktop.clear")
        return ".Desktop_Cleared_2026-03-02T09-00-00"

    def restore(self, folder_token: str) -> None:
        self._record("desktop.restore", folder_token)

    def list_items(self) -> list[Path]:
        return []

    # apps
    def list_applications(self) -> list[InstalledApp]:
        return [InstalledApp("Notes", "com.apple.Notes", Path("/Applications/Notes.app"))]

    def open(self, identifier: str) -> None:
        self._record("apps.open", identifier)

    def activate(self, identifier: str) -> None:
        self._record("apps.activate", identifier)

    # music
    def start(self, source: MusicSource) -> None:
        self._record("music.start", source)

    def pause(self) -> None:
        self._record("music.pause")

    def is_running(self, source: MusicSource) -> bool:
        return False

    # prompts
    def ask_starter_task(self, prompt_text: str) -> str | None:
        self._record("prompt.starter_task", prompt_text)
        return self.starter_answer

    def notify_completion(self) -> CompletionChoice:
        self._record("prompt.completion")
        return self.completion_choice

    def warning(self, title: str, text: str) -> None:
        self.warnings.append((title, text))

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]


def run_now(fn: Callable[[], None]) -> None:
    fn()


# --- Common fixtures ---


@pytest.fixture()
def qsettings(tmp_path: Path) -> QSettings:
    # Use an INI file so we don't touch system registry / platform stores
    s = QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)
    s.clear()
    return s


@pytest.fixture()
def session_settings(qsettings: QSettings) -> SessionSettings:
    return SessionSettings(qsettings)


@pytest.fixture()
def file_service() -> FileService:
    return FileService()


@pytest.fixture()
def collaborators() -> RecordingCollaborators:
    return RecordingCollaborators()


@pytest.fixture()
def history() -> FakeHistory:
    return FakeHistory()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def schedulers() -> list[ManualScheduler]:
    return []


@pytest.fixture()
def orchestrator(qapp, collaborators: RecordingCollaborators) -> StartOrchestrator:
    return StartOrchestrator(
        desktop=collaborators,
        apps=collaborators,
        music=collaborators,
        prompts=collaborators,
        dispatch=run_now,
    )


@pytest.fixture()
def controller(
    qapp,
    history: FakeHistory,
    orchestrator: StartOrchestrator,
    collaborators: RecordingCollaborators,
    clock: FakeClock,
    schedulers: list[ManualScheduler],
) -> SessionController:
    def factory() -> ManualScheduler:
        s = ManualScheduler()
        schedulers.append(s)
        return s

    return SessionController(
        history=history,
        orchestrator=orchestrator,
        prompts=collaborators,
        scheduler_factory=factory,
        clock=clock,
        dispatch=run_now,
    )
