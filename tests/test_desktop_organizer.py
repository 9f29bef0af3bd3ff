from __future__ import annotations

from datetime import datetime

import pytest

from attention.services.desktop_organizer import CLEARED_FOLDER_PREFIX, DesktopOrganizer


def _fixed_clock():
    return datetime(2026, 3, 2, 9, 30, 0)


@pytest.fixture()
def desktop(tmp_path):
    d = tmp_path / "Desktop"
    d.mkdir()
    (d / "notes.txt").write_text("n", encoding="utf-8")
    (d / "screenshot.png").write_bytes(b"\x89PNG")
    (d / "Projects").mkdir()
    (d / "Projects" / "a.txt").write_text("a", encoding="utf-8")
    (d / ".DS_Store").write_bytes(b"")
    return d


def test_clear_moves_visible_items_into_dated_hidden_folder(desktop):
    org = DesktopOrganizer(desktop, clock=_fixed_clock)

    token = org.clear()

    assert token == f"{CLEARED_FOLDER_PREFIX}2026-03-02T09-30-00"
    assert org.list_items() == []
    moved = sorted(p.name for p in (desktop / token).iterdir())
    assert moved == ["Projects", "notes.txt", "screenshot.png"]
    # hidden files stay put
    assert (desktop / ".DS_Store").exists()


def test_clear_twice_in_same_second_gets_unique_folder(desktop):
    org = DesktopOrganizer(desktop, clock=_fixed_clock)
    first = org.clear()
    (desktop / "later.txt").write_text("x", encoding="utf-8")
    second = org.clear()

    assert first != second
    assert second.endswith("-1")
    assert (desktop / second / "later.txt").exists()


def test_restore_puts_items_back_and_removes_folder(desktop):
    org = DesktopOrganizer(desktop, clock=_fixed_clock)
    token = org.clear()

    org.restore(token)

    assert [p.name for p in org.list_items()] == ["Projects", "notes.txt", "screenshot.png"]
    assert not (desktop / token).exists()
    assert (desktop / "Projects" / "a.txt").read_text(encoding="utf-8") == "a"


def test_restore_refuses_to_overwrite(desktop):
    org = DesktopOrganizer(desktop, clock=_fixed_clock)
    token = org.clear()
    (desktop / "notes.txt").write_text("new", encoding="utf-8")

    with pytest.raises(FileExistsError):
        org.restore(token)
    assert (desktop / "notes.txt").read_text(encoding="utf-8") == "new"


@pytest.mark.parametrize("token", ["Projects", "../elsewhere", f"{CLEARED_FOLDER_PREFIX}x/../y"])
def test_restore_rejects_foreign_tokens(desktop, token):
    with pytest.raises(ValueError):
        DesktopOrganizer(desktop).restore(token)


def test_restore_missing_folder(desktop):
    with pytest.raises(FileNotFoundError):
        DesktopOrganizer(desktop).restore(f"{CLEARED_FOLDER_PREFIX}2000-01-01T00-00-00")


def test_clear_without_desktop_folder_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        DesktopOrganizer(tmp_path / "nope").clear()
