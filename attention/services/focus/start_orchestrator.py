from __future__ import annotations

import logging
from collections.abc import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from attention.domain.interfaces import IApplicationDirectory, IDesktopOrganizer, IMusicPlayer
from attention.domain.models import SessionConfiguration
from attention.services.ui.ports.prompts import IPromptService

logger = logging.getLogger(__name__)

Dispatch = Callable[[Callable[[], None]], None]


def post_to_event_loop(fn: Callable[[], None]) -> None:
    """Run fn on the next event-loop iteration without waiting for it."""
    QTimer.singleShot(0, fn)


class StartOrchestrator(QObject):
    """Fire the one-shot session actions in a fixed order, fire-and-forget."""

    action_failed = pyqtSignal(str)
    starter_task_entered = pyqtSignal(str)

    def __init__(
        self,
        *,
        desktop: IDesktopOrganizer,
        apps: IApplicationDirectory,
        music: IMusicPlayer,
        prompts: IPromptService | None = None,
        dispatch: Dispatch = post_to_event_loop,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._desktop = desktop
        self._apps = apps
        self._music = music
        self._prompts = prompts
        self._dispatch = dispatch
        # Folders cleared by the current session only; replaced on every start.
        self._cleared_folders: list[str] = []

    @property
    def cleared_folder(self) -> str | None:
        return self._cleared_folders[-1] if self._cleared_folders else None

    def run_start(self, config: SessionConfiguration) -> None:
        self._cleared_folders = []
        # Order: desktop, app, music (may depend on the app launch), prompt.
        if config.clear_desktop:
            folders = self._cleared_folders
            self._submit("clear desktop", lambda: self._clear_desktop(folders))
        if config.app_to_open:
            identifier = config.app_to_open
            self._submit(f"open {identifier}", lambda: self._apps.open(identifier))
        if config.start_music:
            source = config.music_source
            self._submit("start music", lambda: self._music.start(source))
        if config.show_starter_task and self._prompts is not None:
            prompt = config.starter_task_prompt
            self._submit("starter task prompt", lambda: self._ask_starter_task(prompt))

    def run_end(self, config: SessionConfiguration) -> None:
        if config.clear_desktop and config.restore_desktop_on_end:
            # Resolved when the action runs, after this session's clear has run.
            folders = self._cleared_folders
            self._submit("restore desktop", lambda: self._restore_desktop(folders))
        if config.pause_music_on_end and config.start_music:
            self._submit("pause music", self._music.pause)

    def _submit(self, label: str, action: Callable[[], None]) -> None:
        self._dispatch(lambda: self._guarded(label, action))

    def _guarded(self, label: str, action: Callable[[], None]) -> None:
        try:
            action()
        except Exception as exc:
            logger.exception("Session action '%s' failed", label)
            message = f"Could not {label}: {exc}"
            self.action_failed.emit(message)
            if self._prompts is not None:
                try:
                    self._prompts.warning("Focus session", message)
                except Exception:
                    logger.exception("Failed to show notice for '%s'", label)

    def _clear_desktop(self, folders: list[str]) -> None:
        token = self._desktop.clear()
        folders.append(token)
        logger.info("Desktop cleared into %s", token)

    def _restore_desktop(self, folders: list[str]) -> None:
        if not folders:
            logger.info("Desktop was not cleared this session; nothing to restore")
            return
        self._desktop.restore(folders.pop())

    def _ask_starter_task(self, prompt: str) -> None:
        answer = self._prompts.ask_starter_task(prompt) if self._prompts else None
        if answer and answer.strip():
            logger.info("Starter task: %s", answer.strip())
            self.starter_task_entered.emit(answer.strip())
