from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.paths import get_config_path, get_default_storage_root


class PathwaysConfig:
    """Shared settings read by the manager and every pathway.

    Values are persisted to a JSON file on each change. Changing the storage
    root never moves files; callers go through
    ``PathwaysManager.set_storage_location`` so the registry is re-scanned.
    """

    _SUPPORTED_LANGUAGES = {"en", "de"}

    _DEFAULTS: dict[str, Any] = {
        "language": "en",
        "storage_root": str(get_default_storage_root()),
        "save_extension": "sav",
        "auto_save_prefix": "auto_save_",
        "auto_save_slots": 3,
        "auto_save_enabled": False,
        "auto_save_interval": 300.0,
        "use_unscaled_time": False,
    }

    def __init__(self, config_path: Path | None = None, storage_root: str | Path | None = None) -> None:
        self._config_path = config_path or get_config_path()
        self._data: dict[str, Any] = {}
        self._load_or_create()
        if storage_root is not None:
            self.set_storage_root(storage_root)

    @property
    def config_path(self) -> Path:
        return self._config_path

    def _load_or_create(self) -> None:
        if not self._config_path.exists():
            self._data = dict(self._DEFAULTS)
            self.save()
            return

        try:
            content = self._config_path.read_text(encoding="utf-8")
            loaded = json.loads(content)
            if not isinstance(loaded, dict):
                loaded = {}
        except (json.JSONDecodeError, OSError):
            loaded = {}

        self._data = dict(self._DEFAULTS)
        self._data.update(loaded)
        self._normalize()
        self.save()

    def _normalize(self) -> None:
        language = str(self._data.get("language", "")).strip().lower()
        if language not in self._SUPPORTED_LANGUAGES:
            language = self._DEFAULTS["language"]
        self._data["language"] = language

        if str(self._data.get("storage_root") or "").strip() == "":
            self._data["storage_root"] = self._DEFAULTS["storage_root"]

        extension = str(self._data.get("save_extension") or "").strip().lstrip(".")
        self._data["save_extension"] = extension or self._DEFAULTS["save_extension"]

        prefix = str(self._data.get("auto_save_prefix") or "")
        self._data["auto_save_prefix"] = prefix or self._DEFAULTS["auto_save_prefix"]

        try:
            slots = int(self._data.get("auto_save_slots"))
        except (TypeError, ValueError):
            slots = -1
        self._data["auto_save_slots"] = slots if slots >= 0 else self._DEFAULTS["auto_save_slots"]

        try:
            interval = float(self._data.get("auto_save_interval"))
        except (TypeError, ValueError):
            interval = -1.0
        self._data["auto_save_interval"] = (
            interval if interval >= 0 else self._DEFAULTS["auto_save_interval"]
        )

        self._data["auto_save_enabled"] = bool(self._data.get("auto_save_enabled"))
        self._data["use_unscaled_time"] = bool(self._data.get("use_unscaled_time"))

    def save(self) -> None:
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        self._config_path.write_text(
            json.dumps(self._data, indent=2, ensure_ascii=False),
            encoding="utf-8",
        )

    def get_language(self) -> str:
        return str(self._data.get("language", self._DEFAULTS["language"]))

    def set_language(self, language: str) -> None:
        value = str(language).strip().lower()
        if value not in self._SUPPORTED_LANGUAGES:
            raise ValueError(f"Unsupported language: {language!r}")
        self._data["language"] = value
        self.save()

    @property
    def storage_root(self) -> str:
        return str(self._data.get("storage_root", self._DEFAULTS["storage_root"]))

    def set_storage_root(self, root_path: str | Path) -> None:
        cleaned = str(root_path).strip() if root_path is not None else ""
        if cleaned == "":
            raise ValueError("Storage location cannot be empty.")
        self._data["storage_root"] = str(Path(cleaned).expanduser().resolve())
        self.save()

    @property
    def save_extension(self) -> str:
        return str(self._data.get("save_extension", self._DEFAULTS["save_extension"]))

    def set_save_extension(self, extension: str) -> None:
        cleaned = str(extension).strip().lstrip(".")
        if cleaned == "":
            raise ValueError("Save extension cannot be empty.")
        self._data["save_extension"] = cleaned
        self.save()

    @property
    def auto_save_prefix(self) -> str:
        return str(self._data.get("auto_save_prefix", self._DEFAULTS["auto_save_prefix"]))

    def set_auto_save_prefix(self, prefix: str) -> None:
        if not prefix:
            raise ValueError("Auto-save prefix cannot be empty.")
        self._data["auto_save_prefix"] = str(prefix)
        self.save()

    @property
    def auto_save_slots(self) -> int:
        return int(self._data.get("auto_save_slots", self._DEFAULTS["auto_save_slots"]))

    def set_auto_save_slots(self, slots: int) -> None:
        value = int(slots)
        if value < 0:
            raise ValueError("Auto-save slot count cannot be negative.")
        self._data["auto_save_slots"] = value
        self.save()

    def get_auto_save_enabled(self) -> bool:
        return bool(self._data.get("auto_save_enabled", self._DEFAULTS["auto_save_enabled"]))

    def set_auto_save_enabled(self, enabled: bool) -> None:
        self._data["auto_save_enabled"] = bool(enabled)
        self.save()

    def get_auto_save_interval(self) -> float:
        return float(self._data.get("auto_save_interval", self._DEFAULTS["auto_save_interval"]))

    def set_auto_save_interval(self, interval: float) -> None:
        value = float(interval)
        if value < 0:
            raise ValueError("Auto-save interval cannot be negative.")
        self._data["auto_save_interval"] = value
        self.save()

    def get_use_unscaled_time(self) -> bool:
        return bool(self._data.get("use_unscaled_time", self._DEFAULTS["use_unscaled_time"]))

    def set_use_unscaled_time(self, enabled: bool) -> None:
        self._data["use_unscaled_time"] = bool(enabled)
        self.save()
