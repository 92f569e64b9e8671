"""GameController: the single authoritative entry point for a game session.

Coordinates: GameState, ResourceSystem, Rules.
Every driving context (local UI, AI session, network host) submits moves
through :meth:`GameController.submit_move`, so legality, readiness and
energy are always checked by the same code.  Emits events via simple
callbacks so the UI / tests / network layer can subscribe.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field

from tempochess.config import DEFAULT_SETTINGS, GameSettings
from tempochess.core.board import Board
from tempochess.core.enums import Color, GameStatus, Rejection
from tempochess.core.move import Move, MoveRequest
from tempochess.core.registry import DEFAULT_REGISTRY, PieceRegistry, build_registry
from tempochess.core.rules import Rules
from tempochess.core.types import Square, is_valid_square
from tempochess.game.interfaces import IGameController, MoveOutcome
from tempochess.game.resources import ResourceSystem
from tempochess.game.state import GameState, MoveRecord

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, GameState], None]
RejectedCallback = Callable[[Move | MoveRequest, MoveOutcome], None]
GameOverCallback = Callable[[GameStatus, Color | None], None]
TickCallback = Callable[[int], None]  # elapsed ms after the tick
ResetCallback = Callable[[], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_rejected: list[RejectedCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_tick: list[TickCallback] = field(default_factory=list)
    on_reset: list[ResetCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Validates and applies moves, advances time, notifies listeners.

    Thread-safety: every public mutator runs under one re-entrant lock, so a
    readiness/energy check and the move it allows are a single atomic step.
    Callbacks run on the calling thread while the lock is held.
    """

    __slots__ = (
        "_settings",
        "_registry",
        "_resources",
        "_state",
        "_lock",
        "_generation",
        "events",
    )

    def __init__(
        self,
        settings: GameSettings = DEFAULT_SETTINGS,
        registry: PieceRegistry | None = None,
    ) -> None:
        if registry is None:
            registry = (
                DEFAULT_REGISTRY
                if settings.effects == DEFAULT_SETTINGS.effects
                else build_registry(settings.effects)
            )
        self._settings = settings
        self._registry = registry
        self._resources = ResourceSystem(settings.energy, registry)
        self._state = GameState(registry, settings.energy)
        self._lock = threading.RLock()
        self._generation = 0
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def settings(self) -> GameSettings:
        return self._settings

    @property
    def registry(self) -> PieceRegistry:
        return self._registry

    @property
    def resources(self) -> ResourceSystem:
        return self._resources

    @property
    def generation(self) -> int:
        """Incremented on every new game / reset; stale work compares against it."""
        return self._generation

    def snapshot(self) -> tuple[GameState, int]:
        """Detached copy of the state together with the current generation."""
        with self._lock:
            return self._state.snapshot(), self._generation

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(self, layout: Board | None = None) -> None:
        with self._lock:
            self._generation += 1
            self._state.setup(layout)
            _LOGGER.info("New game (generation %d)", self._generation)
            self._emit_reset()

    def reset(self) -> None:
        with self._lock:
            self.new_game(self._state.start_layout)

    def submit_move(
        self,
        move: Move | MoveRequest,
        color: Color | None = None,
        *,
        is_ai: bool = False,
    ) -> MoveOutcome:
        with self._lock:
            outcome = self._try_move(move, color, is_ai)
            if not outcome.accepted:
                _LOGGER.debug("Rejected %s: %s", move, outcome.message)
                self._emit_rejected(move, outcome)
                return outcome

            assert outcome.record is not None
            _LOGGER.info(
                "%s plays %s at %ss",
                outcome.record.color,
                outcome.record.notation,
                outcome.record.time_label,
            )
            self._emit_move(outcome.record)
            if self._state.is_game_over:
                self._emit_game_over()
            return outcome

    def tick(self, delta_ms: int) -> None:
        with self._lock:
            if not self._state.is_in_progress:
                return
            clock_ms = self._state.clock.advance(delta_ms)
            self._resources.tick(self._state.board, self._state.pools, delta_ms, clock_ms)
            self._emit_tick(clock_ms)

    def legal_destinations(self, from_sq: Square) -> list[Square]:
        with self._lock:
            return Rules.candidate_moves(self._state.board, from_sq, self._registry)

    def resign(self, color: Color) -> None:
        with self._lock:
            if self._state.is_game_over:
                return
            self._state.resign(color)
            _LOGGER.info("%s resigned", color)
            self._emit_game_over()

    # ── Pause / resume ───────────────────────────────────────────────────

    def pause(self) -> None:
        """Freeze the game (e.g. a networked participant dropped)."""
        with self._lock:
            if self._state.status == GameStatus.IN_PROGRESS:
                self._state.status = GameStatus.PAUSED
                _LOGGER.info("Game paused")

    def resume(self) -> None:
        with self._lock:
            if self._state.status == GameStatus.PAUSED:
                self._state.status = GameStatus.IN_PROGRESS
                _LOGGER.info("Game resumed")

    # ── Internal helpers ─────────────────────────────────────────────────

    def _try_move(
        self, move: Move | MoveRequest, color: Color | None, is_ai: bool
    ) -> MoveOutcome:
        state = self._state
        if not state.is_in_progress:
            return MoveOutcome.rejected(Rejection.GAME_NOT_IN_PROGRESS)

        if isinstance(move, MoveRequest):
            if not move.is_on_board:
                return MoveOutcome.rejected(Rejection.OFF_BOARD)
            move = move.to_move()
        elif not (is_valid_square(move.from_sq) and is_valid_square(move.to_sq)):
            return MoveOutcome.rejected(Rejection.OFF_BOARD)

        piece = state.board[move.from_sq]
        if piece is None:
            return MoveOutcome.rejected(Rejection.EMPTY_ORIGIN)
        if color is not None and piece.color != color:
            return MoveOutcome.rejected(Rejection.NOT_YOUR_PIECE)

        if not Rules.is_legal(state.board, move.from_sq, move.to_sq, self._registry):
            return MoveOutcome.rejected(Rejection.ILLEGAL_MOVE)

        pool = state.pools[piece.color]
        reason = self._resources.check_affordable(piece, pool)
        if reason == Rejection.INSUFFICIENT_ENERGY:
            return MoveOutcome.rejected(
                reason,
                required=self._resources.energy_cost(piece),
                available=pool.current,
            )
        if reason is not None:
            return MoveOutcome.rejected(reason)

        return MoveOutcome.applied(state.apply_move(move, is_ai=is_ai))

    def _emit_move(self, record: MoveRecord) -> None:
        for cb in self.events.on_move:
            cb(record, self._state)

    def _emit_rejected(self, move: Move | MoveRequest, outcome: MoveOutcome) -> None:
        for cb in self.events.on_rejected:
            cb(move, outcome)

    def _emit_game_over(self) -> None:
        _LOGGER.info("Game over: %s", self._state.status.name)
        for cb in self.events.on_game_over:
            cb(self._state.status, self._state.winner)

    def _emit_tick(self, clock_ms: int) -> None:
        for cb in self.events.on_tick:
            cb(clock_ms)

    def _emit_reset(self) -> None:
        for cb in self.events.on_reset:
            cb()
