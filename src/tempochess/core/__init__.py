"""Core domain layer: pure board, piece and movement logic.

Quick start::

    from tempochess.core import Board, MoveGenerator, Rules, Color

    board = Board.initial()
    for move in MoveGenerator(board).moves_for(Color.WHITE):
        print(move)
"""

from tempochess.core.board import Board, validate_home_ranks
from tempochess.core.enums import CLASSICAL_TYPES, Color, GameStatus, PieceType, Rejection
from tempochess.core.move import Move, MoveRequest
from tempochess.core.move_generator import MoveGenerator
from tempochess.core.notation import move_notation, parse_notation
from tempochess.core.piece import Piece
from tempochess.core.registry import (
    DEFAULT_REGISTRY,
    PieceDefinition,
    PieceRegistry,
    UnregisteredPieceError,
    build_registry,
    lookup,
)
from tempochess.core.rules import Rules
from tempochess.core.types import (
    Square,
    col_of,
    make_square,
    neighbours,
    parse_square,
    row_of,
    square_name,
)

__all__ = [
    # Enums
    "CLASSICAL_TYPES",
    "Color",
    "GameStatus",
    "PieceType",
    "Rejection",
    # Types / helpers
    "Square",
    "col_of",
    "make_square",
    "neighbours",
    "parse_square",
    "row_of",
    "square_name",
    # Registry
    "DEFAULT_REGISTRY",
    "PieceDefinition",
    "PieceRegistry",
    "UnregisteredPieceError",
    "build_registry",
    "lookup",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "MoveRequest",
    "Piece",
    "Rules",
    "validate_home_ranks",
    # Notation
    "move_notation",
    "parse_notation",
]
