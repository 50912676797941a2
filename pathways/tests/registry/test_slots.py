from __future__ import annotations

import logging
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from core.pathways.models import SaveFileInfo
from core.pathways.slots import next_auto_save_slot, parse_slot_number

_BASE_TIME = datetime(2024, 5, 1, 12, 0, 0)


def _save(name: str, minutes: int) -> SaveFileInfo:
    return SaveFileInfo(
        name=name,
        path=Path("/saves/run") / name,
        modified_at=_BASE_TIME + timedelta(minutes=minutes),
        size_bytes=0,
    )


@pytest.mark.parametrize(
    ("file_name", "expected"),
    [
        ("auto_save_1.sav", 1),
        ("auto_save_12.sav", 12),
        ("auto_save_x.sav", None),
        ("auto_save_.sav", None),
        ("checkpoint.sav", None),
        ("my_run_7.bak", 7),
    ],
)
def test_parse_slot_number(file_name: str, expected: int | None) -> None:
    assert parse_slot_number(file_name) == expected


def test_no_auto_saves_uses_first_slot() -> None:
    assert next_auto_save_slot([], 3) == 1


def test_no_auto_saves_with_zero_slots_still_first_slot() -> None:
    assert next_auto_save_slot([], 0) == 1


def test_lowest_free_slot_is_used() -> None:
    saves = [_save("auto_save_1.sav", 0), _save("auto_save_3.sav", 1)]
    assert next_auto_save_slot(saves, 4) == 2


def test_unparseable_names_do_not_occupy_slots() -> None:
    saves = [_save("auto_save_x.sav", 0), _save("auto_save_1.sav", 1)]
    assert next_auto_save_slot(saves, 3) == 2


def test_full_rotation_reuses_oldest_slot() -> None:
    saves = [
        _save("auto_save_1.sav", 10),
        _save("auto_save_2.sav", 2),
        _save("auto_save_3.sav", 5),
    ]
    assert next_auto_save_slot(saves, 3) == 2


def test_oldest_tie_resolved_by_slot_number() -> None:
    saves = [_save("auto_save_10.sav", 0), _save("auto_save_2.sav", 0)]
    assert next_auto_save_slot(saves, 2) == 2


def test_more_files_than_slots_reuses_oldest() -> None:
    saves = [
        _save("auto_save_1.sav", 3),
        _save("auto_save_2.sav", 4),
        _save("auto_save_5.sav", 1),
    ]
    assert next_auto_save_slot(saves, 2) == 5


def test_unparseable_oldest_falls_back_to_first_slot_with_warning(caplog: pytest.LogCaptureFixture) -> None:
    saves = [_save("auto_save_old.sav", 0), _save("auto_save_2.sav", 1)]

    with caplog.at_level(logging.WARNING, logger="pathways.slots"):
        slot = next_auto_save_slot(saves, 2)

    assert slot == 1
    assert "auto_save_old.sav" in caplog.text
