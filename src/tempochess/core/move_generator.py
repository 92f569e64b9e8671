"""Move enumeration and attack/protection counting."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tempochess.core.enums import Color
from tempochess.core.move import Move
from tempochess.core.registry import DEFAULT_REGISTRY, PieceRegistry
from tempochess.core.rules import Rules
from tempochess.core.types import Square

if TYPE_CHECKING:
    from tempochess.core.board import Board
    from tempochess.core.piece import Piece


def _as_enemy(piece: Piece) -> Piece:
    """Copy of *piece* flipped to the other side, used to test protection."""
    phantom = piece.copy()
    phantom.color = piece.color.opposite
    return phantom


class MoveGenerator:
    """Enumerates moves for a given :class:`Board`.

    Readiness and energy are ignored unless a method says otherwise; every
    destination is produced by the 64-square scan in
    :meth:`Rules.candidate_moves`.
    """

    __slots__ = ("_board", "_registry")

    def __init__(
        self, board: Board, registry: PieceRegistry = DEFAULT_REGISTRY
    ) -> None:
        self._board = board
        self._registry = registry

    # ── Generation ───────────────────────────────────────────────────────

    def destinations(self, from_sq: Square) -> list[Square]:
        return Rules.candidate_moves(self._board, from_sq, self._registry)

    def moves_for(self, color: Color) -> list[Move]:
        """Every geometrically legal move of *color*."""
        return [
            Move(from_sq, to_sq)
            for from_sq in self._board.pieces(color)
            for to_sq in self.destinations(from_sq)
        ]

    def affordable_moves(self, color: Color, energy: float) -> list[Move]:
        """Legal moves of ready *color* pieces whose cost fits in *energy*."""
        moves: list[Move] = []
        for from_sq in self._board.pieces(color):
            piece = self._board[from_sq]
            assert piece is not None
            if not piece.is_ready:
                continue
            if self._registry.energy_cost(piece.piece_type) > energy:
                continue
            moves.extend(Move(from_sq, to_sq) for to_sq in self.destinations(from_sq))
        return moves

    # ── Attack detection ─────────────────────────────────────────────────

    def attackers_of(self, sq: Square) -> int:
        """Number of enemy pieces that could legally land on *sq*."""
        target = self._board[sq]
        if target is None:
            return 0
        return sum(
            1
            for from_sq in self._board.pieces(target.color.opposite)
            if Rules.is_legal(self._board, from_sq, sq, self._registry)
        )

    def count_threats(self, color: Color) -> int:
        """Total attacker count summed over every piece of *color*."""
        return sum(self.attackers_of(sq) for sq in self._board.pieces(color))

    def is_protected(self, sq: Square) -> bool:
        """Whether another friendly piece could recapture on *sq*.

        The defender's movement rule is evaluated as if *sq* held an enemy.
        """
        piece = self._board[sq]
        if piece is None:
            return False
        defenders = [s for s in self._board.pieces(piece.color) if s != sq]
        self._board[sq] = _as_enemy(piece)
        try:
            for from_sq in defenders:
                defender = self._board[from_sq]
                assert defender is not None
                definition = self._registry.lookup(defender.piece_type)
                if definition.is_valid_move(self._board, from_sq, sq, defender):
                    return True
        finally:
            self._board[sq] = piece
        return False

    def count_protected(self, color: Color) -> int:
        return sum(1 for sq in self._board.pieces(color) if self.is_protected(sq))

