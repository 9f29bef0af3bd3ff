from datetime import datetime, timedelta, timezone

import pytest

from attention.domain.models import (
    DEFAULT_STARTER_TASK_PROMPT,
    Completed,
    Idle,
    MusicSource,
    Paused,
    Running,
    SessionConfiguration,
    SessionRecord,
    status_text,
)

T0 = datetime(2026, 3, 2, 9, 0, 0, tzinfo=timezone.utc)


def test_configuration_defaults():
    c = SessionConfiguration(duration=60)
    assert c.clear_desktop is False
    assert c.app_to_open is None
    assert c.start_music is False
    assert c.music_source is MusicSource.APPLE_MUSIC
    assert c.show_starter_task is False
    assert c.starter_task_prompt == DEFAULT_STARTER_TASK_PROMPT


def test_default_configuration_is_a_25_minute_session():
    c = SessionConfiguration.default()
    assert c.duration == 25 * 60
    assert c.clear_desktop is True
    assert c.show_starter_task is True


@pytest.mark.parametrize("duration", [0, -5])
def test_configuration_rejects_non_positive_duration(duration):
    with pytest.raises(ValueError):
        SessionConfiguration(duration=duration)


def test_blank_app_to_open_means_none():
    assert SessionConfiguration(duration=60, app_to_open="   ").app_to_open is None


def test_record_durations():
    r = SessionRecord(start_time=T0, planned_duration=1500)
    assert r.actual_duration is None
    assert r.completed is False

    r.finish(T0 + timedelta(seconds=90))
    assert r.actual_duration == 90
    assert r.completed is True


def test_record_cannot_finish_twice():
    r = SessionRecord(start_time=T0, planned_duration=60)
    r.finish(T0)
    with pytest.raises(RuntimeError):
        r.finish(T0 + timedelta(seconds=1))


def test_record_dict_keeps_identity_and_timestamps():
    r = SessionRecord(start_time=T0, planned_duration=60)
    r.finish(T0 + timedelta(seconds=45))

    back = SessionRecord.from_dict(r.to_dict())
    assert back.id == r.id
    assert back.start_time == T0
    assert back.actual_duration == 45


def test_unfinished_record_serialises_null_end_time():
    d = SessionRecord(start_time=T0, planned_duration=60).to_dict()
    assert d["end_time"] is None
    assert SessionRecord.from_dict(d).end_time is None


@pytest.mark.parametrize(
    "state,text",
    [
        (Idle(), "Ready to focus"),
        (Running(5), "Focus session in progress"),
        (Paused(5), "Session paused"),
        (Completed(), "Session complete!"),
    ],
)
def test_status_text(state, text):
    assert status_text(state) == text
