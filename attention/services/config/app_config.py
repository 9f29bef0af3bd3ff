from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from attention.services.config.ini_config_service import IniConfigService
from attention.services.music_player import DEFAULT_PLAY_DELAY_MS

_VERSION_RE = re.compile(r"^v?(\d+\.\d+\.\d+)(?:[-+].*)?$", re.IGNORECASE)


def _project_root_fallback() -> Path:
    # app_config.py -> attention/services/config/app_config.py
    return Path(__file__).resolve().parents[3]


def _read_version_file(version_path: Path) -> str | None:
    try:
        raw = version_path.read_text(encoding="utf-8").strip()
    except OSError:
        return None
    m = _VERSION_RE.match(raw)
    return m.group(1) if m else None


def _optional_path(raw: str | None) -> Path | None:
    if raw is None or not raw.strip():
        return None
    return Path(raw.strip()).expanduser()


@dataclass(frozen=True)
class AppConfig:
    """
    Typed view over IniConfigService.

    Version precedence:
      1) <project_root>/version file (e.g. v1.0.5)
      2) [app] version in the INI file
      3) "0.0.0"

    Recognised keys:
      [logging] level              DEBUG / INFO / WARNING / ...
      [history] path               sessions.json location
      [desktop] path               desktop folder to clear
      [music]   play_delay_ms      wait before sending play
    """

    ini: IniConfigService
    project_root: Path

    def get_version(self) -> str:
        v = _read_version_file(self.project_root / "version")
        if v:
            return v
        v2 = (self.ini.app_version() or "").strip()
        if v2:
            m = _VERSION_RE.match(v2)
            return m.group(1) if m else v2
        return "0.0.0"

    def log_level(self) -> int:
        name = (self.ini.get("logging", "level", "INFO") or "INFO").strip().upper()
        level = logging.getLevelName(name)
        return level if isinstance(level, int) else logging.INFO

    def history_path(self) -> Path | None:
        return _optional_path(self.ini.get("history", "path"))

    def desktop_path(self) -> Path | None:
        return _optional_path(self.ini.get("desktop", "path"))

    def music_play_delay_ms(self) -> int:
        value = self.ini.get_int("music", "play_delay_ms", DEFAULT_PLAY_DELAY_MS)
        return max(0, value if value is not None else DEFAULT_PLAY_DELAY_MS)

    @property
    def loaded_from(self) -> Path | None:
        return self.ini.loaded_from


def build_app_config(
    *, explicit_ini: Path | None = None, project_root: Path | None = None
) -> AppConfig:
    root = project_root or _project_root_fallback()
    ini = IniConfigService(explicit_path=explicit_ini, project_root=root)
    return AppConfig(ini=ini, project_root=root)
