from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from attention.domain.models import SessionRecord
from attention.services.history_store import JsonHistoryStore

NOW = datetime(2026, 3, 4, 15, 0, 0, tzinfo=timezone.utc)


def _finished(start: datetime, seconds: float) -> SessionRecord:
    r = SessionRecord(start_time=start, planned_duration=1500)
    r.finish(start + timedelta(seconds=seconds))
    return r


@pytest.fixture()
def store(tmp_path, file_service):
    return JsonHistoryStore(file_service, tmp_path / "data" / "sessions.json", clock=lambda: NOW)


def test_missing_file_means_empty_history(store):
    assert store.load_all() == []


def test_empty_file_means_empty_history(store):
    store.path.parent.mkdir(parents=True)
    store.path.write_text("", encoding="utf-8")
    assert store.load_all() == []


def test_save_appends_and_creates_parent_dir(store):
    a = _finished(NOW - timedelta(hours=2), 600)
    b = _finished(NOW - timedelta(hours=1), 300)
    store.save(a)
    store.save(b)

    loaded = store.load_all()
    assert [r.id for r in loaded] == [a.id, b.id]
    assert loaded[1].actual_duration == 300


def test_today_and_this_week_filter_by_start_time(store):
    today = _finished(NOW - timedelta(hours=3), 60)
    three_days = _finished(NOW - timedelta(days=3), 60)
    old = _finished(NOW - timedelta(days=10), 60)
    for r in (old, three_days, today):
        store.save(r)

    assert [r.id for r in store.today()] == [today.id]
    assert {r.id for r in store.this_week()} == {today.id, three_days.id}


def test_total_focus_time_skips_unfinished_records(store):
    records = [
        _finished(NOW, 600),
        _finished(NOW, 900),
        SessionRecord(start_time=NOW, planned_duration=1500),
    ]
    assert store.total_focus_time(records) == 1500
    assert store.total_focus_time([]) == 0


@pytest.mark.parametrize("raw", ["{not json", '{"id": "x"}', '[{"id": "nope"}]'])
def test_corrupt_history_raises_and_is_not_overwritten(store, raw):
    store.path.parent.mkdir(parents=True)
    store.path.write_text(raw, encoding="utf-8")

    with pytest.raises(ValueError, match="Corrupt session history"):
        store.load_all()
    with pytest.raises(ValueError):
        store.save(_finished(NOW, 10))
    assert store.path.read_text(encoding="utf-8") == raw
