"""Concrete service implementations backing the session collaborators."""

from .app_directory import ApplicationDirectory
from .desktop_organizer import DesktopOrganizer
from .file_service import FileService
from .history_store import JsonHistoryStore
from .music_player import MusicPlayer
from .process_runner import QtProcessRunner

__all__ = [
    "ApplicationDirectory",
    "DesktopOrganizer",
    "FileService",
    "JsonHistoryStore",
    "MusicPlayer",
    "QtProcessRunner",
]
