"""Qt bridge to run AI decisions in a worker thread."""

from __future__ import annotations

import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from tempochess.engine.opponent import AIOpponent
from tempochess.game.state import GameState


class EngineWorker(QObject):
    """Thread-affine worker that computes AI moves on demand."""

    move_ready = pyqtSignal(int, object, int)
    search_cancelled = pyqtSignal(int)
    no_move = pyqtSignal(int, int)
    search_error = pyqtSignal(int, str)

    __slots__ = ("_cancel_event", "_opponent")

    def __init__(self, opponent: AIOpponent) -> None:
        super().__init__()
        self._opponent = opponent
        self._cancel_event = threading.Event()

    @pyqtSlot(object, int)
    def request_move(self, state_obj: object, request_id: int) -> None:
        """Pick a move for the snapshot *state_obj* and emit the result."""
        if not isinstance(state_obj, GameState):
            self.search_error.emit(request_id, "Engine received invalid state")
            return

        self._cancel_event.clear()
        try:
            result = self._opponent.search(
                state_obj, is_cancelled=self._cancel_event.is_set
            )
        except Exception as exc:
            self.search_error.emit(request_id, str(exc))
            return

        if result.cancelled or self._cancel_event.is_set():
            self.search_cancelled.emit(request_id)
            return

        if result.best_move is None:
            self.no_move.emit(request_id, result.candidates)
            return

        self.move_ready.emit(request_id, result.best_move, result.candidates)

    @pyqtSlot()
    def cancel(self) -> None:
        """Request cancellation of the current decision."""
        self._cancel_event.set()
