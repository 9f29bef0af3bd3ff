from __future__ import annotations

import logging
import plistlib
from collections.abc import Iterable
from pathlib import Path

from attention.domain.interfaces import IApplicationDirectory, IProcessRunner
from attention.domain.models import InstalledApp

logger = logging.getLogger(__name__)


def default_search_dirs() -> list[Path]:
    return [
        Path("/Applications"),
        Path("/System/Applications"),
        Path.home() / "Applications",
    ]


class ApplicationDirectory(IApplicationDirectory):
    """
    Lists installed .app bundles and launches them by bundle identifier.

    Launching goes through `open -b`; activation asks AppleScript whether the
    app is already running and only falls back to opening it if not.
    """

    def __init__(self, runner: IProcessRunner, search_dirs: Iterable[Path] | None = None) -> None:
        self._runner = runner
        self._search_dirs = list(search_dirs) if search_dirs is not None else default_search_dirs()

    def list_applications(self) -> list[InstalledApp]:
        apps: list[InstalledApp] = []
        for directory in self._search_dirs:
            try:
                entries = sorted(directory.iterdir())
            except OSError:
                continue
            for entry in entries:
                if entry.name.startswith(".") or entry.suffix != ".app":
                    continue
                app = self._read_bundle(entry)
                if app is not None:
                    apps.append(app)

        apps.sort(key=lambda a: a.name)
        seen: set[str] = set()
        unique: list[InstalledApp] = []
        for app in apps:
            if app.identifier in seen:
                continue
            seen.add(app.identifier)
            unique.append(app)
        return unique

    def open(self, identifier: str) -> None:
        if not self._runner.start_detached("open", ["-b", identifier]):
            raise OSError(f"Could not open application {identifier}")
        logger.info("Opened application %s", identifier)

    def activate(self, identifier: str) -> None:
        if self.is_running(identifier):
            script = f'tell application id "{identifier}" to activate'
            if self._runner.start_detached("osascript", ["-e", script]):
                return
        self.open(identifier)

    def is_running(self, identifier: str) -> bool:
        script = f'application id "{identifier}" is running'
        try:
            code, out = self._runner.run("osascript", ["-e", script])
        except (OSError, TimeoutError):
            logger.debug("Could not query running state of %s", identifier)
            return False
        return code == 0 and out.strip().lower() == "true"

    def _read_bundle(self, bundle: Path) -> InstalledApp | None:
        info = bundle / "Contents" / "Info.plist"
        try:
            with info.open("rb") as fh:
                data = plistlib.load(fh)
        except (OSError, plistlib.InvalidFileException, ValueError):
            return None
        name = data.get("CFBundleName") or data.get("CFBundleDisplayName")
        identifier = data.get("CFBundleIdentifier")
        if not isinstance(name, str) or not isinstance(identifier, str):
            return None
        return InstalledApp(name=name, identifier=identifier, path=bundle)
