"""Fixed-step clock driver for a controller."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from tempochess.game.interfaces import IGameController

_LOGGER = logging.getLogger(__name__)


class TickLoop(QObject):
    """Calls ``controller.tick(interval)`` every *interval_ms* of wall time.

    Every tick advances game time by exactly one interval regardless of
    timer jitter, so energy and cooldown arithmetic is reproducible.
    """

    ticked = pyqtSignal(int)

    def __init__(
        self,
        controller: IGameController,
        interval_ms: int = 100,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        if interval_ms <= 0:
            raise ValueError(f"Tick interval must be positive, got {interval_ms}")
        self._controller = controller
        self._interval_ms = interval_ms
        self._ticks = 0
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self.step)

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @property
    def ticks(self) -> int:
        return self._ticks

    def is_running(self) -> bool:
        return self._timer.isActive()

    def start(self) -> None:
        if not self._timer.isActive():
            _LOGGER.debug("Tick loop started (%d ms)", self._interval_ms)
            self._timer.start()

    def stop(self) -> None:
        if self._timer.isActive():
            _LOGGER.debug("Tick loop stopped after %d ticks", self._ticks)
            self._timer.stop()

    def step(self) -> None:
        """Advance the controller by one interval."""
        self._controller.tick(self._interval_ms)
        self._ticks += 1
        self.ticked.emit(self._ticks)
