from __future__ import annotations

import logging
import shutil
from datetime import datetime
from pathlib import Path

from core.config import PathwaysConfig
from core.pathways.models import SaveFileInfo
from core.pathways.slots import next_auto_save_slot

TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"


class Pathway:
    """A named directory under the storage root that holds save files.

    The pathway only hands out paths and reports on files that already exist.
    ``files`` is a snapshot taken by the last ``refresh()``; changes made on
    disk afterwards are not visible until the next refresh.
    """

    def __init__(
        self,
        pathway_id: str,
        config: PathwaysConfig,
        logger: logging.Logger | None = None,
    ) -> None:
        self._config = config
        self._logger = logger or logging.getLogger("pathways.pathway")
        self._pathway_id = pathway_id
        self._files: tuple[SaveFileInfo, ...] = ()
        self.refresh()

    @property
    def pathway_id(self) -> str:
        return self._pathway_id

    @pathway_id.setter
    def pathway_id(self, value: str) -> None:
        self._pathway_id = value
        self.refresh()

    @property
    def full_path(self) -> Path:
        return Path(self._config.storage_root) / self._pathway_id

    @property
    def files(self) -> tuple[SaveFileInfo, ...]:
        return self._files

    @property
    def file_count(self) -> int:
        return len(self._files)

    @property
    def recent_file(self) -> SaveFileInfo | None:
        if not self._files:
            return None
        return self._files[0]

    def get_save_path(self, file_name: str | None = None) -> Path:
        directory = self.ensure_directory()
        if not file_name:
            file_name = self._default_file_name()
        return directory / file_name

    def get_auto_save_path(self) -> Path:
        directory = self.ensure_directory()
        slot = next_auto_save_slot(self.get_auto_saves(), self._config.auto_save_slots, self._logger)
        return directory / self._auto_save_file_name(slot)

    def get_file_path(self, file_name: str) -> Path:
        return self.full_path / file_name

    def file_exists(self, file_name: str) -> bool:
        return self.get_file_path(file_name).is_file()

    def get_manual_saves(self) -> list[SaveFileInfo]:
        prefix = self._config.auto_save_prefix
        return [item for item in self._files if not item.name.startswith(prefix)]

    def get_auto_saves(self) -> list[SaveFileInfo]:
        prefix = self._config.auto_save_prefix
        return [item for item in self._files if item.name.startswith(prefix)]

    def get_recent_save_path(self) -> Path | None:
        recent = self.recent_file
        return recent.path if recent is not None else None

    def get_recent_manual_save_path(self) -> Path | None:
        manual_saves = self.get_manual_saves()
        return self.get_file_path(manual_saves[0].name) if manual_saves else None

    def get_recent_auto_save_path(self) -> Path | None:
        auto_saves = self.get_auto_saves()
        return self.get_file_path(auto_saves[0].name) if auto_saves else None

    def delete_file(self, file_name: str) -> bool:
        file_path = self.get_file_path(file_name)
        if not file_path.is_file():
            return False

        file_path.unlink()
        self._logger.info("Deleted %s from pathway %s", file_name, self._pathway_id)
        self.refresh()
        return True

    def delete_directory(self) -> bool:
        directory = self.full_path
        if not directory.is_dir():
            return False

        shutil.rmtree(directory)
        self._files = ()
        self._logger.info("Deleted pathway directory %s", directory)
        return True

    def refresh(self) -> None:
        self._files = self._scan_files()

    def ensure_directory(self) -> Path:
        directory = self.full_path
        directory.mkdir(parents=True, exist_ok=True)
        return directory

    def _scan_files(self) -> tuple[SaveFileInfo, ...]:
        if not self._pathway_id:
            return ()

        directory = self.full_path
        if not directory.is_dir():
            return ()

        suffix = f".{self._config.save_extension}"
        files: list[SaveFileInfo] = []
        for entry in directory.iterdir():
            if not entry.name.endswith(suffix) or not entry.is_file():
                continue
            try:
                stat_info = entry.stat()
            except OSError:
                self._logger.warning("Could not read file info for %s", entry)
                continue
            files.append(
                SaveFileInfo(
                    name=entry.name,
                    path=entry,
                    modified_at=datetime.fromtimestamp(stat_info.st_mtime),
                    size_bytes=int(stat_info.st_size),
                )
            )

        files.sort(key=lambda item: (item.modified_at, item.name), reverse=True)
        return tuple(files)

    def _default_file_name(self) -> str:
        timestamp = datetime.now().strftime(TIMESTAMP_FORMAT)
        return f"save_{timestamp}.{self._config.save_extension}"

    def _auto_save_file_name(self, slot: int) -> str:
        return f"{self._config.auto_save_prefix}{slot}.{self._config.save_extension}"

    def __str__(self) -> str:
        return f"Pathway: {self._pathway_id}, Files: {self.file_count}, Full Path: {self.full_path}"

    def __repr__(self) -> str:
        return f"Pathway(pathway_id={self._pathway_id!r}, files={self.file_count})"
