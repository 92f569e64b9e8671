"""AI thinking lifecycle for one side of a controller."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from PyQt6.QtCore import QObject, QThread, QTimer, pyqtSignal

from tempochess.core.enums import Color, GameStatus
from tempochess.engine.opponent import AIOpponent
from tempochess.engine.qt_bridge import EngineWorker
from tempochess.engine.search import CandidateMove
from tempochess.game.controller import GameController

_LOGGER = logging.getLogger(__name__)


class EngineRequestSignal(Protocol):
    """Minimal signal interface used by :class:`AISession`."""

    def connect(self, slot: Callable[..., object]) -> object: ...

    def emit(self, state_obj: object, request_id: int) -> object: ...


class _EngineCommandBus(QObject):
    """Signal bridge for issuing worker requests with queued delivery."""

    move_requested = pyqtSignal(object, int)


class AISession:
    """Owns reaction delay, worker-thread decision and move handoff.

    On every controller tick the session offers the AI a move when the
    opponent is idle and at least one of its pieces is ready.  The
    opponent's reaction time elapses first; then a snapshot of the state is
    sent to the worker.  A result is applied only if its request id and the
    controller generation still match and the game is still in progress,
    and even then it goes through :meth:`GameController.submit_move`, which
    re-checks readiness and energy against the live state.
    """

    __slots__ = (
        "__weakref__",
        "_controller",
        "_opponent",
        "_engine_request",
        "_command_bus",
        "_reaction_timer",
        "_engine_thread",
        "_engine_worker",
        "_ticket",
        "_request_id",
        "_pending_request",
        "_pending_generation",
        "_is_started",
        "_is_shutting_down",
    )

    def __init__(
        self,
        *,
        controller: GameController,
        opponent: AIOpponent,
        engine_request: EngineRequestSignal | None = None,
        parent: QObject | None = None,
    ) -> None:
        self._controller = controller
        self._opponent = opponent

        self._command_bus = _EngineCommandBus(parent)
        self._engine_request: EngineRequestSignal = (
            engine_request
            if engine_request is not None
            else self._command_bus.move_requested
        )

        self._reaction_timer = QTimer(parent)
        self._reaction_timer.setSingleShot(True)
        self._reaction_timer.timeout.connect(self._dispatch)

        self._engine_thread = QThread(parent)
        self._engine_worker = EngineWorker(opponent)

        self._ticket: int | None = None
        self._request_id = 0
        self._pending_request: int | None = None
        self._pending_generation: int | None = None
        self._is_started = False
        self._is_shutting_down = False

        events = controller.events
        events.on_tick.append(self._on_tick)
        events.on_reset.append(self._on_reset)
        events.on_game_over.append(self._on_game_over)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def color(self) -> Color:
        return self._opponent.color

    @property
    def opponent(self) -> AIOpponent:
        return self._opponent

    @property
    def is_started(self) -> bool:
        return self._is_started

    @property
    def is_pending(self) -> bool:
        """Whether a reaction delay or a worker request is outstanding."""
        return self._ticket is not None

    # ── Lifecycle ────────────────────────────────────────────────────────

    def setup(self) -> None:
        """Start the worker in a dedicated thread and connect callbacks."""
        if self._is_started:
            return
        self._is_shutting_down = False
        self._engine_worker.moveToThread(self._engine_thread)
        self._engine_request.connect(self._engine_worker.request_move)
        self._engine_worker.move_ready.connect(self._on_move_ready)
        self._engine_worker.no_move.connect(self._on_no_move)
        self._engine_worker.search_cancelled.connect(self._on_cancelled)
        self._engine_worker.search_error.connect(self._on_error)
        self._engine_thread.start()
        self._is_started = True

    def shutdown(self) -> None:
        """Stop any thinking and shut down the worker thread."""
        if not self._is_started:
            return
        self._is_shutting_down = True
        self.cancel()
        self._engine_thread.quit()
        self._engine_thread.wait(2000)
        self._is_started = False

    # ── Thinking ─────────────────────────────────────────────────────────

    def request_ai_move(self) -> bool:
        """Begin a thinking cycle; ``False`` if one is already running."""
        if not self._is_started or self._is_shutting_down:
            return False
        if not self._controller.state.is_in_progress:
            return False
        ticket = self._opponent.begin()
        if ticket is None:
            return False
        self._ticket = ticket
        self._reaction_timer.start(self._opponent.difficulty.reaction_delay_ms)
        return True

    def cancel(self) -> None:
        """Stop the reaction delay and invalidate any in-flight request."""
        self._reaction_timer.stop()
        self._clear_pending_request()
        if self._ticket is not None:
            self._ticket = None
            self._opponent.cancel()
        self._engine_worker.cancel()

    def _dispatch(self) -> None:
        if self._is_shutting_down or self._ticket is None:
            return
        if not self._opponent.is_current(self._ticket):
            self._ticket = None
            return

        snapshot, generation = self._controller.snapshot()
        if not snapshot.is_in_progress:
            self.cancel()
            return

        self._request_id += 1
        self._pending_request = self._request_id
        self._pending_generation = generation
        self._engine_request.emit(snapshot, self._request_id)

    # ── Worker results ───────────────────────────────────────────────────

    def _on_move_ready(
        self, request_id: int, move_obj: object, _candidates: int
    ) -> None:
        if self._is_shutting_down or request_id != self._pending_request:
            return
        if not isinstance(move_obj, CandidateMove):
            return

        generation = self._pending_generation
        ticket = self._ticket
        self._clear_pending_request()
        self._ticket = None
        if ticket is None:
            return

        state = self._controller.state
        if generation != self._controller.generation or not state.is_in_progress:
            _LOGGER.debug("Discarding stale AI move %s", move_obj.move)
            self._opponent.finish(ticket, None, state.clock.elapsed_ms)
            return

        outcome = self._controller.submit_move(
            move_obj.move, self.color, is_ai=True
        )
        if outcome.accepted:
            assert outcome.record is not None
            self._opponent.finish(ticket, move_obj, outcome.record.elapsed_ms)
        else:
            _LOGGER.debug("AI move %s rejected: %s", move_obj.move, outcome.message)
            self._opponent.finish(ticket, None, state.clock.elapsed_ms)

    def _on_no_move(self, request_id: int, _candidates: int) -> None:
        self._end_without_move(request_id)

    def _on_cancelled(self, request_id: int) -> None:
        self._end_without_move(request_id)

    def _on_error(self, request_id: int, message: str) -> None:
        if request_id == self._pending_request:
            _LOGGER.warning("%s AI failed: %s", self.color, message)
        self._end_without_move(request_id)

    def _end_without_move(self, request_id: int) -> None:
        if self._is_shutting_down or request_id != self._pending_request:
            return
        ticket = self._ticket
        self._clear_pending_request()
        self._ticket = None
        if ticket is not None:
            self._opponent.finish(
                ticket, None, self._controller.state.clock.elapsed_ms
            )

    def _clear_pending_request(self) -> None:
        self._pending_request = None
        self._pending_generation = None

    # ── Controller events ────────────────────────────────────────────────

    def _on_tick(self, _clock_ms: int) -> None:
        if self._ticket is not None or self._opponent.is_thinking:
            return
        if not self._controller.state.board.has_ready_piece(self.color):
            return
        self.request_ai_move()

    def _on_reset(self) -> None:
        self.cancel()
        self._opponent.reset()

    def _on_game_over(self, _status: GameStatus, _winner: Color | None) -> None:
        self.cancel()
