from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from PyQt6.QtCore import QStandardPaths

from attention.domain.interfaces import IDesktopOrganizer

logger = logging.getLogger(__name__)

CLEARED_FOLDER_PREFIX = ".Desktop_Cleared_"


def default_desktop_path() -> Path:
    location = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.DesktopLocation)
    return Path(location) if location else Path.home() / "Desktop"


class DesktopOrganizer(IDesktopOrganizer):
    """Move visible desktop items into a dated hidden folder and back."""

    def __init__(
        self,
        desktop_path: Path | None = None,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._desktop = desktop_path or default_desktop_path()
        self._clock = clock

    @property
    def desktop_path(self) -> Path:
        return self._desktop

    def list_items(self) -> list[Path]:
        try:
            return sorted(p for p in self._desktop.iterdir() if not p.name.startswith("."))
        except OSError:
            return []

    def clear(self) -> str:
        if not self._desktop.is_dir():
            raise FileNotFoundError(f"Desktop folder not found: {self._desktop}")
        folder_name = self._unique_folder_name()
        target = self._desktop / folder_name
        target.mkdir(parents=True)

        items = self.list_items()
        for item in items:
            shutil.move(str(item), str(target / item.name))
        logger.info("Moved %d desktop item(s) into %s", len(items), folder_name)
        return folder_name

    def restore(self, folder_token: str) -> None:
        if "/" in folder_token or not folder_token.startswith(CLEARED_FOLDER_PREFIX):
            raise ValueError(f"Not a cleared-desktop folder: {folder_token!r}")
        source = self._desktop / folder_token
        if not source.is_dir():
            raise FileNotFoundError(f"Cleared folder not found: {source}")

        for item in sorted(source.iterdir()):
            destination = self._desktop / item.name
            if destination.exists():
                raise FileExistsError(f"Refusing to overwrite {destination}")
            shutil.move(str(item), str(destination))
        source.rmdir()
        logger.info("Restored desktop items from %s", folder_token)

    def _unique_folder_name(self) -> str:
        stamp = self._clock().strftime("%Y-%m-%dT%H-%M-%S")
        name = f"{CLEARED_FOLDER_PREFIX}{stamp}"
        suffix = 1
        while (self._desktop / name).exists():
            name = f"{CLEARED_FOLDER_PREFIX}{stamp}-{suffix}"
            suffix += 1
        return name
