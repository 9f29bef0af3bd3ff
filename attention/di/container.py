from __future__ import annotations

from PyQt6.QtCore import QSettings

from attention.domain.interfaces import (
    IApplicationDirectory,
    IDesktopOrganizer,
    IFileService,
    IHistoryStore,
    IMusicPlayer,
    IProcessRunner,
)
from attention.services.app_directory import ApplicationDirectory
from attention.services.config.app_config import AppConfig, build_app_config
from attention.services.desktop_organizer import DesktopOrganizer
from attention.services.file_service import FileService
from attention.services.focus.session_controller import SessionController
from attention.services.focus.session_settings import SessionSettings
from attention.services.focus.start_orchestrator import StartOrchestrator
from attention.services.history_store import JsonHistoryStore
from attention.services.music_player import MusicPlayer
from attention.services.process_runner import QtProcessRunner
from attention.services.ui.adapters.qt_prompts import QtPromptService
from attention.services.ui.main_window import MainWindow
from attention.services.ui.ports.prompts import IPromptService
from attention.utils.constants import APP_NAME, APP_ORG


class Container:
    """
    Lightweight DI container:
      - Wires default collaborators if not provided
      - Owns the session orchestrator and controller
      - Builds the main window on request
    """

    def __init__(
        self,
        *,
        config: AppConfig | None = None,
        qsettings: QSettings | None = None,
        files: IFileService | None = None,
        runner: IProcessRunner | None = None,
        apps: IApplicationDirectory | None = None,
        desktop: IDesktopOrganizer | None = None,
        music: IMusicPlayer | None = None,
        history: IHistoryStore | None = None,
        prompts: IPromptService | None = None,
    ) -> None:
        self.config: AppConfig = config or build_app_config()
        self.session_settings = SessionSettings(qsettings or QSettings(APP_ORG, APP_NAME))

        self.file_service: IFileService = files or FileService()
        self.runner: IProcessRunner = runner or QtProcessRunner()
        self.apps: IApplicationDirectory = apps or ApplicationDirectory(self.runner)
        self.desktop: IDesktopOrganizer = desktop or DesktopOrganizer(self.config.desktop_path())
        self.music: IMusicPlayer = music or MusicPlayer(
            apps=self.apps,
            runner=self.runner,
            play_delay_ms=self.config.music_play_delay_ms(),
        )
        self.history: IHistoryStore = history or JsonHistoryStore(
            self.file_service, self.config.history_path()
        )
        self.prompts: IPromptService = prompts or QtPromptService()

        self.orchestrator = StartOrchestrator(
            desktop=self.desktop,
            apps=self.apps,
            music=self.music,
            prompts=self.prompts,
        )
        self.controller = SessionController(
            history=self.history,
            orchestrator=self.orchestrator,
            prompts=self.prompts,
        )

    def build_main_window(self, *, app_title: str = APP_NAME) -> MainWindow:
        window = MainWindow(
            controller=self.controller,
            session_settings=self.session_settings,
            history=self.history,
            apps=self.apps,
            app_title=app_title,
        )
        # Prompts and notices are parented to the window once it exists.
        if isinstance(self.prompts, QtPromptService):
            self.prompts.set_parent(window)
        self.orchestrator.action_failed.connect(window.show_status)
        self.orchestrator.starter_task_entered.connect(window.show_starter_task)
        return window
