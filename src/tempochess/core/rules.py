"""Move legality: generic checks plus per-type predicate dispatch."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tempochess.core.enums import PieceType
from tempochess.core.registry import DEFAULT_REGISTRY, PieceRegistry
from tempochess.core.types import Square

if TYPE_CHECKING:
    from tempochess.core.board import Board


class Rules:
    """Static rule-checker operating on a :class:`Board`.

    There is no check, checkmate, castling, en-passant or promotion:
    capturing the enemy king ends the game.
    """

    @staticmethod
    def is_legal(
        board: Board,
        from_sq: Square,
        to_sq: Square,
        registry: PieceRegistry = DEFAULT_REGISTRY,
    ) -> bool:
        if from_sq == to_sq:
            return False

        piece = board[from_sq]
        if piece is None:
            return False

        target = board[to_sq]
        if target is not None and target.color == piece.color:
            return False

        definition = registry.lookup(piece.piece_type)
        return definition.is_valid_move(board, from_sq, to_sq, piece)

    @staticmethod
    def candidate_moves(
        board: Board,
        from_sq: Square,
        registry: PieceRegistry = DEFAULT_REGISTRY,
    ) -> list[Square]:
        """All legal destinations for the piece on *from_sq* (64-square scan)."""
        if board[from_sq] is None:
            return []
        return [
            to_sq
            for to_sq in range(64)
            if Rules.is_legal(board, from_sq, to_sq, registry)
        ]

    @staticmethod
    def captures_king(board: Board, to_sq: Square) -> bool:
        target = board[to_sq]
        return target is not None and target.piece_type == PieceType.KING
