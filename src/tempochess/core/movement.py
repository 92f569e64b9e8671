"""Movement predicates and arrival effects used by the piece registry.

Every predicate has the signature ``(board, from_sq, to_sq, piece) -> bool``
and checks geometry plus path occupancy only.  The generic checks (same
square, empty origin, own piece on the destination) live in
:class:`~tempochess.core.rules.Rules`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from tempochess.core.types import Square, col_of, make_square, neighbours, row_of

if TYPE_CHECKING:
    from tempochess.core.board import Board
    from tempochess.core.piece import Piece

MovePredicate = Callable[["Board", Square, Square, "Piece"], bool]
ArrivalEffect = Callable[["Board", Square, "Piece"], None]


def _deltas(from_sq: Square, to_sq: Square) -> tuple[int, int]:
    return row_of(to_sq) - row_of(from_sq), col_of(to_sq) - col_of(from_sq)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def squares_between(from_sq: Square, to_sq: Square) -> list[Square]:
    """Squares strictly between two squares on a shared line or diagonal."""
    dr, dc = _deltas(from_sq, to_sq)
    if not (dr == 0 or dc == 0 or abs(dr) == abs(dc)):
        return []
    step_r, step_c = _sign(dr), _sign(dc)
    steps = max(abs(dr), abs(dc))
    row, col = row_of(from_sq), col_of(from_sq)
    return [make_square(row + i * step_r, col + i * step_c) for i in range(1, steps)]


def _blockers(board: Board, from_sq: Square, to_sq: Square) -> list[Square]:
    return [sq for sq in squares_between(from_sq, to_sq) if not board.is_empty(sq)]


def _is_enemy(board: Board, sq: Square, piece: Piece) -> bool:
    target = board[sq]
    return target is not None and target.color != piece.color


# -- Classical pieces ---------------------------------------------------------


def pawn_move(board: Board, from_sq: Square, to_sq: Square, piece: Piece) -> bool:
    dr, dc = _deltas(from_sq, to_sq)
    forward = piece.color.forward

    if dc == 0:
        if dr == forward:
            return board.is_empty(to_sq)
        if dr == 2 * forward and row_of(from_sq) == piece.color.pawn_row:
            return board.is_empty(from_sq + 8 * forward) and board.is_empty(to_sq)
        return False

    if abs(dc) == 1 and dr == forward:
        return _is_enemy(board, to_sq, piece)
    return False


def knight_move(board: Board, from_sq: Square, to_sq: Square, piece: Piece) -> bool:
    dr, dc = _deltas(from_sq, to_sq)
    return (abs(dr), abs(dc)) in ((1, 2), (2, 1))


def bishop_move(board: Board, from_sq: Square, to_sq: Square, piece: Piece) -> bool:
    dr, dc = _deltas(from_sq, to_sq)
    if dr == 0 or abs(dr) != abs(dc):
        return False
    return not _blockers(board, from_sq, to_sq)


def rook_move(board: Board, from_sq: Square, to_sq: Square, piece: Piece) -> bool:
    dr, dc = _deltas(from_sq, to_sq)
    if (dr == 0) == (dc == 0):
        return False
    return not _blockers(board, from_sq, to_sq)


def queen_move(board: Board, from_sq: Square, to_sq: Square, piece: Piece) -> bool:
    return bishop_move(board, from_sq, to_sq, piece) or rook_move(
        board, from_sq, to_sq, piece
    )


def king_move(board: Board, from_sq: Square, to_sq: Square, piece: Piece) -> bool:
    dr, dc = _deltas(from_sq, to_sq)
    return max(abs(dr), abs(dc)) == 1


# -- Variants -----------------------------------------------------------------


def twisted_pawn_move(
    board: Board, from_sq: Square, to_sq: Square, piece: Piece
) -> bool:
    """Steps diagonally forward onto empty squares, captures straight ahead."""
    dr, dc = _deltas(from_sq, to_sq)
    forward = piece.color.forward

    if abs(dc) == 1 and dr == forward:
        return board.is_empty(to_sq)
    if dc == 0 and dr == forward:
        return _is_enemy(board, to_sq, piece)
    if dc == 0 and dr == 2 * forward and row_of(from_sq) == piece.color.pawn_row:
        return board.is_empty(from_sq + 8 * forward) and board.is_empty(to_sq)
    return False


def flying_castle_move(
    board: Board, from_sq: Square, to_sq: Square, piece: Piece
) -> bool:
    """Rook that may leap one blocker sitting right before the destination."""
    dr, dc = _deltas(from_sq, to_sq)
    if (dr == 0) == (dc == 0):
        return False
    blockers = _blockers(board, from_sq, to_sq)
    if not blockers:
        return True
    if len(blockers) > 1:
        return False
    landing_step = _sign(dr) * 8 + _sign(dc)
    return blockers[0] == to_sq - landing_step


def shadow_knight_move(
    board: Board, from_sq: Square, to_sq: Square, piece: Piece
) -> bool:
    return knight_move(board, from_sq, to_sq, piece)


def ice_bishop_move(
    board: Board, from_sq: Square, to_sq: Square, piece: Piece
) -> bool:
    """Diagonal slide that passes through occupied squares."""
    dr, dc = _deltas(from_sq, to_sq)
    return dr != 0 and abs(dr) == abs(dc)


# -- Arrival effects ------------------------------------------------------------


def chill_adjacent_enemies(penalty_ms: int) -> ArrivalEffect:
    """Effect adding *penalty_ms* to the cooldown of every adjacent enemy."""

    def effect(board: Board, to_sq: Square, piece: Piece) -> None:
        for sq in neighbours(to_sq):
            other = board[sq]
            if other is not None and other.color != piece.color:
                other.adjust_cooldown(penalty_ms)

    return effect


def rally_adjacent_allies(bonus_ms: int) -> ArrivalEffect:
    """Effect removing *bonus_ms* from the cooldown of every adjacent ally."""

    def effect(board: Board, to_sq: Square, piece: Piece) -> None:
        for sq in neighbours(to_sq):
            other = board[sq]
            if other is not None and other.color == piece.color:
                other.adjust_cooldown(-bonus_ms)

    return effect
