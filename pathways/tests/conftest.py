from __future__ import annotations

import logging
from pathlib import Path

import pytest
from PySide6.QtCore import QCoreApplication

from core.config import PathwaysConfig


@pytest.fixture(scope="session")
def qapp() -> QCoreApplication:
    return QCoreApplication.instance() or QCoreApplication([])


@pytest.fixture(autouse=True)
def _reset_pathways_logger():
    yield
    logger = logging.getLogger("pathways")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def storage_root(tmp_path: Path) -> Path:
    return tmp_path / "saves"


@pytest.fixture
def config(tmp_path: Path, storage_root: Path) -> PathwaysConfig:
    return PathwaysConfig(tmp_path / "config.json", storage_root=storage_root)
