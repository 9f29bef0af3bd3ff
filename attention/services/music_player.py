from __future__ import annotations

import logging
from collections.abc import Callable

from PyQt6.QtCore import QTimer

from attention.domain.interfaces import IApplicationDirectory, IMusicPlayer, IProcessRunner
from attention.domain.models import MusicSource

logger = logging.getLogger(__name__)

APPLE_MUSIC_BUNDLE = "com.apple.Music"
SPOTIFY_BUNDLE = "com.spotify.client"
DEFAULT_PLAY_DELAY_MS = 1000

Schedule = Callable[[int, Callable[[], None]], None]

_BUNDLES: dict[MusicSource, str] = {
    MusicSource.APPLE_MUSIC: APPLE_MUSIC_BUNDLE,
    MusicSource.SPOTIFY: SPOTIFY_BUNDLE,
}


def bundle_for(source: MusicSource) -> str:
    # No player is configurable for OTHER yet, so it falls back to Apple Music.
    return _BUNDLES.get(source, APPLE_MUSIC_BUNDLE)


class MusicPlayer(IMusicPlayer):
    """Launches a music app and sends it a play command once it had time to start."""

    def __init__(
        self,
        *,
        apps: IApplicationDirectory,
        runner: IProcessRunner,
        play_delay_ms: int = DEFAULT_PLAY_DELAY_MS,
        schedule: Schedule = QTimer.singleShot,
    ) -> None:
        self._apps = apps
        self._runner = runner
        self._play_delay_ms = max(0, int(play_delay_ms))
        self._schedule = schedule

    def start(self, source: MusicSource) -> None:
        bundle = bundle_for(source)
        self._apps.open(bundle)
        self._schedule(self._play_delay_ms, lambda: self._send(bundle, "play"))

    def pause(self) -> None:
        for source, bundle in _BUNDLES.items():
            if self.is_running(source):
                self._send(bundle, "pause")

    def is_running(self, source: MusicSource) -> bool:
        bundle = _BUNDLES.get(source)
        if bundle is None:
            return False
        try:
            code, out = self._runner.run("osascript", ["-e", f'application id "{bundle}" is running'])
        except (OSError, TimeoutError):
            return False
        return code == 0 and out.strip().lower() == "true"

    def _send(self, bundle: str, command: str) -> None:
        script = f'tell application id "{bundle}" to {command}'
        if not self._runner.start_detached("osascript", ["-e", script]):
            logger.warning("Could not send '%s' to %s", command, bundle)
