from __future__ import annotations

import json
import logging
from collections.abc import Callable, Sequence
from datetime import datetime, timedelta
from pathlib import Path

from platformdirs import user_data_dir

from attention.domain.interfaces import IFileService, IHistoryStore
from attention.domain.models import SessionRecord
from attention.utils.constants import APP_DIR_NAME, HISTORY_FILE

logger = logging.getLogger(__name__)


def default_history_path() -> Path:
    return Path(user_data_dir(APP_DIR_NAME)) / HISTORY_FILE


class JsonHistoryStore(IHistoryStore):
    """
    Keeps finished sessions as a JSON list in a single file.

    Every save rewrites the whole list atomically. A file that cannot be parsed
    raises ValueError instead of being replaced, so existing history is never
    silently dropped.
    """

    def __init__(
        self,
        files: IFileService,
        path: Path | None = None,
        *,
        clock: Callable[[], datetime] = lambda: datetime.now().astimezone(),
    ) -> None:
        self._files = files
        self._path = path or default_history_path()
        self._clock = clock

    @property
    def path(self) -> Path:
        return self._path

    def save(self, record: SessionRecord) -> None:
        records = self.load_all()
        records.append(record)
        payload = json.dumps([r.to_dict() for r in records], indent=2, ensure_ascii=True)
        self._files.write_text_atomic(self._path, payload + "\n")
        logger.debug("Saved session %s to %s", record.id, self._path)

    def load_all(self) -> list[SessionRecord]:
        if not self._path.exists():
            return []
        raw = self._files.read_text(self._path)
        if not raw.strip():
            return []
        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError("expected a list of sessions")
            return [SessionRecord.from_dict(item) for item in data]
        except (ValueError, KeyError, TypeError) as exc:
            raise ValueError(f"Corrupt session history in {self._path}: {exc}") from exc

    def today(self) -> list[SessionRecord]:
        now = self._clock()
        start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
        return [r for r in self.load_all() if r.start_time >= start_of_day]

    def this_week(self) -> list[SessionRecord]:
        week_ago = self._clock() - timedelta(days=7)
        return [r for r in self.load_all() if r.start_time >= week_ago]

    def total_focus_time(self, records: Sequence[SessionRecord]) -> float:
        return sum(r.actual_duration for r in records if r.actual_duration is not None)
