from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from core.pathways.models import SaveFileInfo

SLOT_SEPARATOR = "_"

_logger = logging.getLogger("pathways.slots")


def parse_slot_number(file_name: str) -> int | None:
    """Return the integer after the last ``_`` of the file stem, or ``None``."""
    token = Path(file_name).stem.split(SLOT_SEPARATOR)[-1]
    try:
        return int(token)
    except ValueError:
        return None


def next_auto_save_slot(
    auto_saves: Sequence[SaveFileInfo],
    slot_count: int,
    logger: logging.Logger | None = None,
) -> int:
    """Pick the slot the next auto-save should be written to.

    Free slots in ``[1, slot_count]`` are handed out lowest first. Once every
    slot is taken the slot of the least recently modified auto-save is reused.
    """
    log = logger or _logger
    if len(auto_saves) == 0:
        return 1

    if len(auto_saves) < slot_count:
        used_slots = {parse_slot_number(item.name) or 0 for item in auto_saves}
        for slot in range(1, slot_count + 1):
            if slot not in used_slots:
                return slot

    oldest = min(
        auto_saves,
        key=lambda item: (item.modified_at, parse_slot_number(item.name) or 0, item.name),
    )
    slot = parse_slot_number(oldest.name)
    if slot is None:
        log.warning(
            "Auto-save %s has no slot number; reusing slot 1, which may overwrite another auto-save",
            oldest.name,
        )
        return 1
    return slot
