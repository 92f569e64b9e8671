"""Game state: board, energy pools, clock, status and move history."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from tempochess.config import DEFAULT_SETTINGS, EnergySettings
from tempochess.core.board import Board
from tempochess.core.enums import Color, GameStatus
from tempochess.core.move import Move
from tempochess.core.notation import move_notation
from tempochess.core.registry import DEFAULT_REGISTRY, PieceRegistry
from tempochess.core.rules import Rules
from tempochess.game.clock import GameClock
from tempochess.game.energy import EnergyPool

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    notation: str
    color: Color
    piece_type: str
    elapsed_ms: int
    energy_spent: int
    captured: str | None = None
    is_ai: bool = False

    @property
    def time_label(self) -> str:
        """Elapsed game time in seconds with one decimal, e.g. ``"12.3"``."""
        return f"{self.elapsed_ms / 1000:.1f}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "move": self.notation,
            "time": self.time_label,
            "player": str(self.color),
            "energySpent": self.energy_spent,
            "captured": self.captured,
            "isAI": self.is_ai,
        }


@dataclass
class GameState:
    """Authoritative data for one game session.

    This is a pure data/logic class without threads or timers.  Legality
    and affordability are the caller's responsibility (see
    :class:`~tempochess.game.controller.GameController`).
    """

    registry: PieceRegistry = DEFAULT_REGISTRY
    energy_settings: EnergySettings = DEFAULT_SETTINGS.energy

    board: Board = field(init=False)
    pools: dict[Color, EnergyPool] = field(init=False)
    clock: GameClock = field(default_factory=GameClock, init=False)
    status: GameStatus = field(default=GameStatus.IN_PROGRESS, init=False)
    winner: Color | None = field(default=None, init=False)
    move_history: list[MoveRecord] = field(default_factory=list, init=False)
    start_layout: Board = field(init=False)

    def __post_init__(self) -> None:
        self.setup()

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, layout: Board | None = None) -> None:
        """Initialise (or reset) everything from *layout* or the standard one."""
        self.start_layout = (
            layout.copy() if layout is not None else Board.initial(self.registry)
        )
        self.board = self.start_layout.copy()
        self.pools = {color: EnergyPool.starting(self.energy_settings) for color in Color}
        self.clock.reset()
        self.status = GameStatus.IN_PROGRESS
        self.winner = None
        self.move_history.clear()

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(self, move: Move, *, is_ai: bool = False) -> MoveRecord:
        """Apply a move already confirmed legal and affordable.

        Energy is paid and the record written before the board changes; the
        arrival effect runs against the board after the move.
        """
        piece = self.board[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on origin square of {move}")
        definition = self.registry.lookup(piece.piece_type)
        target = self.board[move.to_sq]

        self.pools[piece.color].spend(definition.energy_cost)

        record = MoveRecord(
            move=move,
            notation=move_notation(piece.piece_type, move, self.registry),
            color=piece.color,
            piece_type=str(piece.piece_type),
            elapsed_ms=self.clock.elapsed_ms,
            energy_spent=definition.energy_cost,
            captured=str(target.piece_type) if target is not None else None,
            is_ai=is_ai,
        )
        self.move_history.append(record)

        if Rules.captures_king(self.board, move.to_sq):
            self.status = GameStatus.win_for(piece.color)
            self.winner = piece.color
            _LOGGER.info("%s captured the king with %s", piece.color, record.notation)

        self.board[move.to_sq] = piece
        self.board[move.from_sq] = None
        piece.start_cooldown()

        if definition.on_arrival is not None:
            definition.on_arrival(self.board, move.to_sq, piece)

        return record

    # ── Resignation ──────────────────────────────────────────────────────

    def resign(self, color: Color) -> None:
        self.status = GameStatus.win_for(color.opposite)
        self.winner = color.opposite

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def is_game_over(self) -> bool:
        return self.status.is_finished

    @property
    def is_in_progress(self) -> bool:
        return self.status == GameStatus.IN_PROGRESS

    def energy(self, color: Color) -> float:
        return self.pools[color].current

    def snapshot(self) -> GameState:
        """Detached deep copy for background consumers (e.g. the AI worker)."""
        clone = GameState(self.registry, self.energy_settings)
        clone.start_layout = self.start_layout.copy()
        clone.board = self.board.copy()
        clone.pools = {
            color: EnergyPool(pool.current, pool.maximum)
            for color, pool in self.pools.items()
        }
        clone.clock.advance(self.clock.elapsed_ms)
        clone.status = self.status
        clone.winner = self.winner
        clone.move_history = list(self.move_history)
        return clone

    def to_dict(self) -> dict[str, Any]:
        """Wire form broadcast by an authoritative host."""
        return {
            "board": self.board.to_rows(),
            "energy": {str(c): round(p.current, 3) for c, p in self.pools.items()},
            "maxEnergy": self.energy_settings.max_energy,
            "gameTime": self.clock.elapsed_ms,
            "status": self.status.name.lower(),
            "winner": str(self.winner) if self.winner is not None else None,
            "moveHistory": [r.to_dict() for r in self.move_history],
        }
