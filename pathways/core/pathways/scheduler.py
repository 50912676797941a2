from __future__ import annotations

import time
from collections.abc import Callable

from PySide6.QtCore import QObject, QTimer, Signal

from core.pathways.manager import PathwaysManager


class AutoSaveScheduler(QObject):
    """Feeds ``PathwaysManager.tick`` from a QTimer.

    Each timeout passes the real elapsed time as the unscaled value and the
    real time multiplied by ``time_scale`` as the scaled value. Pausing sets
    the scale to zero, so only managers using unscaled time keep counting.
    """

    state_changed = Signal(bool)
    paused_changed = Signal(bool)

    def __init__(
        self,
        manager: PathwaysManager,
        interval_ms: int = 1000,
        clock: Callable[[], float] | None = None,
    ) -> None:
        super().__init__()
        self._manager = manager
        self._clock = clock or time.monotonic
        self._timer = QTimer(self)
        self._timer.setInterval(max(50, interval_ms))
        self._timer.timeout.connect(self.advance)
        self._last_time: float | None = None
        self._time_scale = 1.0
        self._paused_scale: float | None = None

    def start(self) -> None:
        if self._timer.isActive():
            return
        self._last_time = self._clock()
        self._timer.start()
        self.state_changed.emit(True)

    def stop(self) -> None:
        if not self._timer.isActive():
            return
        self._timer.stop()
        self._last_time = None
        self.state_changed.emit(False)

    def is_running(self) -> bool:
        return self._timer.isActive()

    @property
    def time_scale(self) -> float:
        return self._time_scale

    def set_time_scale(self, scale: float) -> None:
        value = float(scale)
        if value < 0:
            raise ValueError("Time scale cannot be negative.")
        if self._paused_scale is not None:
            self._paused_scale = value
            return
        self._time_scale = value

    def is_paused(self) -> bool:
        return self._paused_scale is not None

    def pause(self) -> None:
        if self._paused_scale is not None:
            return
        self._paused_scale = self._time_scale
        self._time_scale = 0.0
        self.paused_changed.emit(True)

    def resume(self) -> None:
        if self._paused_scale is None:
            return
        self._time_scale = self._paused_scale
        self._paused_scale = None
        self.paused_changed.emit(False)

    def advance(self) -> None:
        now = self._clock()
        if self._last_time is None:
            self._last_time = now
            return

        real_elapsed = max(0.0, now - self._last_time)
        self._last_time = now
        self._manager.tick(real_elapsed * self._time_scale, real_elapsed)
