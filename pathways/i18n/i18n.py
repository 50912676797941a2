from __future__ import annotations

import json
import logging
from pathlib import Path

from PySide6.QtCore import QObject, Signal

from core.paths import get_translations_dir

_logger = logging.getLogger("pathways.i18n")


class Translator(QObject):
    language_changed = Signal(str)

    def __init__(self, language: str = "en", fallback_language: str = "en") -> None:
        super().__init__()
        self._language = language
        self._fallback_language = fallback_language
        self._catalogs: dict[str, dict[str, str]] = {}

    @property
    def language(self) -> str:
        return self._language

    def load(self, translations_dir: Path | None = None) -> None:
        source_dir = translations_dir or get_translations_dir()
        self._catalogs.clear()

        if not source_dir.is_dir():
            _logger.warning("Translations directory missing: %s", source_dir)
            return

        for file_path in sorted(source_dir.glob("*.json")):
            try:
                payload = json.loads(file_path.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError):
                _logger.warning("Skipping unreadable catalog %s", file_path.name)
                continue
            if isinstance(payload, dict):
                self._catalogs[file_path.stem] = {str(key): str(value) for key, value in payload.items()}

        if self._language not in self._catalogs:
            self._language = self._fallback_language

    def set_language(self, language: str) -> None:
        if language not in self._catalogs:
            language = self._fallback_language
        if language == self._language:
            return
        self._language = language
        self.language_changed.emit(language)

    def translate(self, key: str, **kwargs: object) -> str:
        template = (
            self._catalogs.get(self._language, {}).get(key)
            or self._catalogs.get(self._fallback_language, {}).get(key)
            or key
        )
        try:
            return template.format(**kwargs)
        except (KeyError, IndexError, ValueError):
            return template


_translator = Translator()


def initialize_i18n(language: str, translations_dir: Path | None = None) -> None:
    _translator.load(translations_dir)
    _translator.set_language(language)


def get_translator() -> Translator:
    return _translator


def tr(key: str, **kwargs: object) -> str:
    return _translator.translate(key, **kwargs)
