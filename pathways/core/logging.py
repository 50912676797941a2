from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from PySide6.QtCore import QObject, Signal

from core.paths import get_logs_dir

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class LogEmitter(QObject):
    """Re-publishes formatted log lines as a Qt signal for live log views."""

    log_message = Signal(str)


class QtSignalLogHandler(logging.Handler):
    def __init__(self, emitter: LogEmitter) -> None:
        super().__init__()
        self._emitter = emitter

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._emitter.log_message.emit(self.format(record))
        except Exception:
            self.handleError(record)


def setup_logging(
    level: int = logging.INFO,
    logs_dir: Path | None = None,
    console: bool = False,
) -> tuple[logging.Logger, LogEmitter]:
    """Configure the ``pathways`` logger tree.

    Records go to a rotating ``app.log`` and to the returned emitter. With
    ``console`` set they are mirrored to stderr as well. Calling this again
    replaces the handlers from the previous call.
    """
    target_dir = logs_dir or get_logs_dir()
    target_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger("pathways")
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    emitter = LogEmitter()

    handlers: list[logging.Handler] = [
        RotatingFileHandler(
            filename=target_dir / "app.log",
            maxBytes=1_000_000,
            backupCount=5,
            encoding="utf-8",
        ),
        QtSignalLogHandler(emitter),
    ]
    if console:
        handlers.append(logging.StreamHandler(sys.stderr))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
        logger.addHandler(handler)

    return logger, emitter
