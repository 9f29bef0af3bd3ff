from __future__ import annotations

from attention.domain.models import MusicSource
from attention.services.music_player import (
    APPLE_MUSIC_BUNDLE,
    SPOTIFY_BUNDLE,
    MusicPlayer,
    bundle_for,
)


class FakeApps:
    def __init__(self) -> None:
        self.opened: list[str] = []

    def open(self, identifier: str) -> None:
        self.opened.append(identifier)


class FakeRunner:
    def __init__(self, running: set[str] | None = None, detached_ok: bool = True) -> None:
        self.running = running or set()
        self.detached_ok = detached_ok
        self.scripts: list[str] = []

    def start_detached(self, program, args):
        self.scripts.append(args[-1])
        return self.detached_ok

    def run(self, program, args, timeout_ms=5000):
        script = args[-1]
        hit = any(f'"{b}"' in script for b in self.running)
        return 0, "true" if hit else "false"


def test_bundle_for_other_falls_back_to_apple_music():
    assert bundle_for(MusicSource.SPOTIFY) == SPOTIFY_BUNDLE
    assert bundle_for(MusicSource.OTHER) == APPLE_MUSIC_BUNDLE


def test_start_opens_app_then_schedules_play():
    apps, runner = FakeApps(), FakeRunner()
    scheduled: list[int] = []

    def schedule(delay_ms, fn):
        scheduled.append(delay_ms)
        fn()

    MusicPlayer(apps=apps, runner=runner, play_delay_ms=250, schedule=schedule).start(
        MusicSource.SPOTIFY
    )

    assert apps.opened == [SPOTIFY_BUNDLE]
    assert scheduled == [250]
    assert runner.scripts == [f'tell application id "{SPOTIFY_BUNDLE}" to play']


def test_play_is_not_sent_before_delay_elapses():
    apps, runner = FakeApps(), FakeRunner()
    pending = []
    MusicPlayer(apps=apps, runner=runner, schedule=lambda d, fn: pending.append(fn)).start(
        MusicSource.APPLE_MUSIC
    )
    assert runner.scripts == []
    pending[0]()
    assert runner.scripts == [f'tell application id "{APPLE_MUSIC_BUNDLE}" to play']


def test_pause_only_targets_running_players():
    runner = FakeRunner(running={SPOTIFY_BUNDLE})
    player = MusicPlayer(apps=FakeApps(), runner=runner, schedule=lambda d, fn: fn())

    player.pause()

    assert runner.scripts == [f'tell application id "{SPOTIFY_BUNDLE}" to pause']
    assert player.is_running(MusicSource.SPOTIFY) is True
    assert player.is_running(MusicSource.APPLE_MUSIC) is False
    assert player.is_running(MusicSource.OTHER) is False


def test_failed_play_command_is_logged_not_raised(caplog):
    runner = FakeRunner(detached_ok=False)
    MusicPlayer(apps=FakeApps(), runner=runner, schedule=lambda d, fn: fn()).start(
        MusicSource.APPLE_MUSIC
    )
    assert "Could not send 'play'" in caplog.text
