"""Domain layer: interfaces and simple models (dataclasses)."""

from .interfaces import (
    IApplicationDirectory,
    IConfigService,
    IDesktopOrganizer,
    IFileService,
    IHistoryStore,
    IMusicPlayer,
    IProcessRunner,
    IScheduler,
)
from .models import (
    Completed,
    CompletionChoice,
    Idle,
    InstalledApp,
    MusicSource,
    Paused,
    Running,
    SessionConfiguration,
    SessionRecord,
    SessionState,
)

__all__ = [
    "IApplicationDirectory",
    "IConfigService",
    "IDesktopOrganizer",
    "IFileService",
    "IHistoryStore",
    "IMusicPlayer",
    "IProcessRunner",
    "IScheduler",
    "Completed",
    "CompletionChoice",
    "Idle",
    "InstalledApp",
    "MusicSource",
    "Paused",
    "Running",
    "SessionConfiguration",
    "SessionRecord",
    "SessionState",
]
