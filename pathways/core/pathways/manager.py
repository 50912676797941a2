from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import QObject, Signal

from core.config import PathwaysConfig
from core.pathways.models import SaveFileInfo
from core.pathways.pathway import Pathway


class PathwaysManager(QObject):
    """Registry of pathways under the storage root plus the auto-save timer.

    All signals are dispatched synchronously on the thread that owns the
    manager. ``auto_save_path_requested`` is emitted before the current
    pathway is refreshed, so a subscriber that writes the file while handling
    the signal is already visible to the next query.
    """

    auto_save_path_requested = Signal(str)
    current_pathway_changed = Signal(object)
    pathway_refreshed = Signal(object)
    pathways_reloaded = Signal()

    def __init__(self, config: PathwaysConfig, logger: logging.Logger | None = None) -> None:
        super().__init__()
        self._config = config
        self._logger = logger or logging.getLogger("pathways.manager")
        self._loaded_pathways: dict[str, Pathway] = {}
        self._current_pathway: Pathway | None = None

        self._can_auto_save = config.get_auto_save_enabled()
        self._auto_save_interval = config.get_auto_save_interval()
        self._use_unscaled_time = config.get_use_unscaled_time()
        self._auto_save_timer = 0.0

        self.refresh_all()

    @property
    def config(self) -> PathwaysConfig:
        return self._config

    @property
    def storage_location(self) -> str:
        return self._config.storage_root

    def set_storage_location(self, location: str | Path) -> None:
        self._config.set_storage_root(location)
        self._logger.info("Storage location set to %s", self._config.storage_root)
        self.refresh_all()

    @property
    def current_pathway(self) -> Pathway | None:
        return self._current_pathway

    @property
    def can_auto_save(self) -> bool:
        return self._can_auto_save

    @property
    def auto_save_slots(self) -> int:
        return self._config.auto_save_slots

    @property
    def auto_save_interval(self) -> float:
        return self._auto_save_interval

    @property
    def use_unscaled_time(self) -> bool:
        return self._use_unscaled_time

    @property
    def auto_save_timer(self) -> float:
        return self._auto_save_timer

    def toggle_auto_save(self, enabled: bool) -> None:
        self._can_auto_save = bool(enabled)

    def set_auto_save_slots(self, slots: int = 3) -> None:
        self._config.set_auto_save_slots(slots)

    def set_auto_save_interval(self, interval: float = 300.0) -> None:
        value = float(interval)
        if value < 0:
            raise ValueError("Auto-save interval cannot be negative.")
        self._auto_save_interval = value

    def set_use_unscaled_time(self, use_unscaled: bool) -> None:
        self._use_unscaled_time = bool(use_unscaled)

    def restart_auto_save_timer(self) -> None:
        self._auto_save_timer = 0.0

    def create_or_load_pathway(self, pathway_id: str, set_current: bool = True) -> Pathway:
        pathway = self._loaded_pathways.get(pathway_id)
        if pathway is None:
            pathway = Pathway(pathway_id, self._config, logger=self._logger.getChild("pathway"))
            self._loaded_pathways[pathway_id] = pathway
            self._logger.info("Loaded pathway %s (%s files)", pathway_id, pathway.file_count)

        if set_current:
            self._select(pathway)
        return pathway

    def set_current_pathway(self, pathway_id: str) -> Pathway:
        return self.create_or_load_pathway(pathway_id, set_current=True)

    def select_recent_pathway(self) -> Pathway | None:
        # max() keeps the first of equal timestamps, so ties follow registry order.
        candidates = [pathway for pathway in self._loaded_pathways.values() if pathway.recent_file is not None]
        if not candidates:
            return None

        recent = max(candidates, key=lambda pathway: pathway.recent_file.modified_at)
        return self._select(recent)

    def _select(self, pathway: Pathway) -> Pathway:
        self._current_pathway = pathway
        self._auto_save_timer = 0.0
        self._logger.info("Current pathway: %s", pathway.pathway_id)
        self.current_pathway_changed.emit(pathway)
        return pathway

    def get_all_pathway_ids(self) -> list[str]:
        storage_dir = Path(self._config.storage_root)
        if not storage_dir.is_dir():
            return []
        return sorted(entry.name for entry in storage_dir.iterdir() if entry.is_dir())

    def get_all_pathways(self) -> list[Pathway]:
        return list(self._loaded_pathways.values())

    def refresh_all(self) -> None:
        self._loaded_pathways.clear()
        self._current_pathway = None
        self._auto_save_timer = 0.0

        for pathway_id in self.get_all_pathway_ids():
            self.create_or_load_pathway(pathway_id, set_current=False)

        self._logger.info(
            "Scanned %s: pathways=%s",
            self._config.storage_root,
            len(self._loaded_pathways),
        )
        self.pathways_reloaded.emit()

    def refresh_current_pathway(self) -> None:
        if self._current_pathway is None:
            return
        self._current_pathway.refresh()
        self.pathway_refreshed.emit(self._current_pathway)

    def tick(self, elapsed: float, unscaled_elapsed: float | None = None) -> Path | None:
        if self._current_pathway is None:
            return None

        if self._use_unscaled_time and unscaled_elapsed is not None:
            self._auto_save_timer += unscaled_elapsed
        else:
            self._auto_save_timer += elapsed

        if not self._auto_save_due():
            return None

        self._auto_save_timer = 0.0
        return self.request_auto_save_path()

    def _auto_save_due(self) -> bool:
        return (
            self._can_auto_save
            and self._config.auto_save_slots > 0
            and self._auto_save_interval > 0
            and self._auto_save_timer >= self._auto_save_interval
        )

    def request_auto_save_path(self) -> Path | None:
        pathway = self._current_pathway
        if pathway is None:
            return None

        path = pathway.get_auto_save_path()
        self._logger.info("Auto-save requested: %s", path)
        try:
            self.auto_save_path_requested.emit(str(path))
        finally:
            self.refresh_current_pathway()
        return path

    def get_manual_save_path(self, file_name: str | None = None) -> Path | None:
        if self._current_pathway is None:
            return None
        return self._current_pathway.get_save_path(file_name)

    def get_auto_save_path(self) -> Path | None:
        if self._current_pathway is None:
            return None
        return self._current_pathway.get_auto_save_path()

    def get_or_create_recent_save_path(self) -> Path | None:
        if self._current_pathway is None:
            return None
        return self._current_pathway.get_recent_save_path() or self._current_pathway.get_save_path()

    def get_all_save_files(self) -> list[SaveFileInfo]:
        if self._current_pathway is None:
            return []
        return list(self._current_pathway.files)

    def get_manual_save_files(self) -> list[SaveFileInfo]:
        if self._current_pathway is None:
            return []
        return self._current_pathway.get_manual_saves()

    def get_auto_save_files(self) -> list[SaveFileInfo]:
        if self._current_pathway is None:
            return []
        return self._current_pathway.get_auto_saves()

    def get_recent_save_file(self) -> SaveFileInfo | None:
        if self._current_pathway is None:
            return None
        return self._current_pathway.recent_file

    def get_recent_manual_save_file(self) -> SaveFileInfo | None:
        manual_saves = self.get_manual_save_files()
        return manual_saves[0] if manual_saves else None

    def get_recent_auto_save_file(self) -> SaveFileInfo | None:
        auto_saves = self.get_auto_save_files()
        return auto_saves[0] if auto_saves else None

    def file_exists(self, file_name: str) -> bool:
        if self._current_pathway is None:
            return False
        return self._current_pathway.file_exists(file_name)

    def delete_current_pathway(self) -> bool:
        if self._current_pathway is None:
            return False

        pathway_id = self._current_pathway.pathway_id
        if not self._current_pathway.delete_directory():
            return False

        self._logger.info("Deleted pathway %s", pathway_id)
        self.refresh_all()
        return True

    def delete_file(self, file_name: str) -> bool:
        pathway = self._current_pathway
        if pathway is None:
            return False

        if not pathway.delete_file(file_name):
            return False

        self.pathway_refreshed.emit(pathway)
        return True
