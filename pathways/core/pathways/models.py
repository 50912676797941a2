from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path


@dataclass(slots=True, frozen=True)
class SaveFileInfo:
    name: str
    path: Path
    modified_at: datetime
    size_bytes: int
