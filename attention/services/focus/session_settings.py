from __future__ import annotations

from PyQt6.QtCore import QSettings

from attention.domain.models import DEFAULT_STARTER_TASK_PROMPT, MusicSource, SessionConfiguration


class SessionSettings:
    """Persistence wrapper for the user's default session choices."""

    KEY_DURATION_MIN = "session/default_duration_min"
    KEY_CLEAR_DESKTOP = "session/clear_desktop"
    KEY_APP_TO_OPEN = "session/app_to_open"
    KEY_START_MUSIC = "session/start_music"
    KEY_MUSIC_SOURCE = "session/music_source"
    KEY_SHOW_STARTER_TASK = "session/show_starter_task"
    KEY_STARTER_TASK_PROMPT = "session/starter_task_prompt"
    KEY_RESTORE_DESKTOP = "session/restore_desktop_on_end"
    KEY_PAUSE_MUSIC = "session/pause_music_on_end"

    def __init__(self, qsettings: QSettings) -> None:
        self._s = qsettings

    def get_duration_min(self) -> int:
        value = self._s.value(self.KEY_DURATION_MIN, 25)
        try:
            return max(1, int(value))
        except (TypeError, ValueError):
            return 25

    def set_duration_min(self, minutes: int) -> None:
        self._s.setValue(self.KEY_DURATION_MIN, max(1, int(minutes)))
        self._s.sync()

    def get_clear_desktop(self) -> bool:
        return self._get_bool(self.KEY_CLEAR_DESKTOP, True)

    def set_clear_desktop(self, enabled: bool) -> None:
        self._set_bool(self.KEY_CLEAR_DESKTOP, enabled)

    def get_app_to_open(self) -> str | None:
        value = self._s.value(self.KEY_APP_TO_OPEN, "")
        if not isinstance(value, str) or not value.strip():
            return None
        return value.strip()

    def set_app_to_open(self, identifier: str | None) -> None:
        self._s.setValue(self.KEY_APP_TO_OPEN, (identifier or "").strip())
        self._s.sync()

    def get_start_music(self) -> bool:
        return self._get_bool(self.KEY_START_MUSIC, False)

    def set_start_music(self, enabled: bool) -> None:
        self._set_bool(self.KEY_START_MUSIC, enabled)

    def get_music_source(self) -> MusicSource:
        value = self._s.value(self.KEY_MUSIC_SOURCE, MusicSource.APPLE_MUSIC.value)
        try:
            return MusicSource(int(value))
        except (TypeError, ValueError):
            return MusicSource.APPLE_MUSIC

    def set_music_source(self, source: MusicSource) -> None:
        self._s.setValue(self.KEY_MUSIC_SOURCE, source.value)
        self._s.sync()

    def get_show_starter_task(self) -> bool:
        return self._get_bool(self.KEY_SHOW_STARTER_TASK, True)

    def set_show_starter_task(self, enabled: bool) -> None:
        self._set_bool(self.KEY_SHOW_STARTER_TASK, enabled)

    def get_starter_task_prompt(self) -> str:
        value = self._s.value(self.KEY_STARTER_TASK_PROMPT, "")
        if not isinstance(value, str) or not value.strip():
            return DEFAULT_STARTER_TASK_PROMPT
        return value.strip()

    def set_starter_task_prompt(self, text: str) -> None:
        self._s.setValue(self.KEY_STARTER_TASK_PROMPT, text.strip())
        self._s.sync()

    def get_restore_desktop_on_end(self) -> bool:
        return self._get_bool(self.KEY_RESTORE_DESKTOP, False)

    def set_restore_desktop_on_end(self, enabled: bool) -> None:
        self._set_bool(self.KEY_RESTORE_DESKTOP, enabled)

    def get_pause_music_on_end(self) -> bool:
        return self._get_bool(self.KEY_PAUSE_MUSIC, False)

    def set_pause_music_on_end(self, enabled: bool) -> None:
        self._set_bool(self.KEY_PAUSE_MUSIC, enabled)

    def build_configuration(self) -> SessionConfiguration:
        """Snapshot the current defaults into an immutable session configuration."""
        return SessionConfiguration(
            duration=self.get_duration_min() * 60,
            clear_desktop=self.get_clear_desktop(),
            app_to_open=self.get_app_to_open(),
            start_music=self.get_start_music(),
            music_source=self.get_music_source(),
            show_starter_task=self.get_show_starter_task(),
            starter_task_prompt=self.get_starter_task_prompt(),
            restore_desktop_on_end=self.get_restore_desktop_on_end(),
            pause_music_on_end=self.get_pause_music_on_end(),
        )

    def save_configuration(self, config: SessionConfiguration) -> None:
        self.set_duration_min(max(1, config.duration // 60))
        self.set_clear_desktop(config.clear_desktop)
        self.set_app_to_open(config.app_to_open)
        self.set_start_music(config.start_music)
        self.set_music_source(config.music_source)
        self.set_show_starter_task(config.show_starter_task)
        self.set_starter_task_prompt(config.starter_task_prompt)
        self.set_restore_desktop_on_end(config.restore_desktop_on_end)
        self.set_pause_music_on_end(config.pause_music_on_end)

    def _get_bool(self, key: str, default: bool) -> bool:
        value = self._s.value(key, default)
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in {"1", "true", "yes", "on"}

    def _set_bool(self, key: str, enabled: bool) -> None:
        self._s.setValue(key, bool(enabled))
        self._s.sync()
