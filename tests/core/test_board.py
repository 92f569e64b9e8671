"""Tests for Board, Piece and layout serialisation."""

from __future__ import annotations

import pytest

from tempochess.core.board import Board, validate_home_ranks
from tempochess.core.enums import Color, PieceType
from tempochess.core.piece import Piece
from tempochess.core.registry import UnregisteredPieceError
from tempochess.core.types import A1, D1, E1, E2, E8, H8


class TestInitialLayout:
    def test_piece_count(self) -> None:
        board = Board.initial()
        assert len(board.pieces(Color.WHITE)) == 16
        assert len(board.pieces(Color.BLACK)) == 16

    def test_kings_and_queens(self) -> None:
        board = Board.initial()
        assert board.find(Color.WHITE, PieceType.KING) == [E1]
        assert board.find(Color.BLACK, PieceType.KING) == [E8]
        assert board.find(Color.WHITE, PieceType.QUEEN) == [D1]

    def test_every_piece_ready_with_registry_duration(self) -> None:
        board = Board.initial()
        assert all(p.is_ready for _, p in board.occupied())
        king = board[E1]
        assert king is not None
        assert king.cooldown_duration == 11000
        pawn = board[E2]
        assert pawn is not None
        assert pawn.cooldown_duration == 4000

    def test_home_ranks_populated(self) -> None:
        board = Board.initial()
        assert validate_home_ranks(board, Color.WHITE)
        assert validate_home_ranks(board, Color.BLACK)
        board[A1] = None
        assert not validate_home_ranks(board, Color.WHITE)
        assert validate_home_ranks(board, Color.BLACK)


class TestCopy:
    def test_copy_is_deep(self) -> None:
        board = Board.initial()
        clone = board.copy()
        assert clone == board
        piece = clone[E2]
        assert piece is not None
        piece.start_cooldown()
        original = board[E2]
        assert original is not None and original.is_ready

    def test_has_ready_piece(self) -> None:
        board = Board()
        board[E1] = Piece(PieceType.KING, Color.WHITE, 11000, 500)
        assert not board.has_ready_piece(Color.WHITE)
        board[E1].decay(500)  # type: ignore[union-attr]
        assert board.has_ready_piece(Color.WHITE)
        assert not board.has_ready_piece(Color.BLACK)


class TestSerialisation:
    def test_rows_round_trip(self) -> None:
        board = Board.initial()
        board[E2].start_cooldown()  # type: ignore[union-attr]
        assert Board.from_rows(board.to_rows()) == board

    def test_wire_keys(self) -> None:
        rows = Board.initial().to_rows()
        assert rows[7][4] == {
            "type": "king",
            "color": "white",
            "cooldown": 0,
            "cooldownTime": 11000,
        }
        assert rows[4][4] is None

    def test_unknown_type_rejected(self) -> None:
        rows = Board().to_rows()
        rows[0][0] = {"type": "dragon", "color": "black", "cooldownTime": 1000}
        with pytest.raises(UnregisteredPieceError):
            Board.from_rows(rows)

    def test_bad_shape_rejected(self) -> None:
        with pytest.raises(ValueError):
            Board.from_rows([[None] * 8] * 7)

    @pytest.mark.parametrize(
        "rows",
        [
            None,
            "rows" * 2,
            [None] * 8,
            [[None] * 8] * 7 + [None],
            [[None] * 8] * 7 + ["abcdefgh"],
        ],
    )
    def test_non_sequence_rows_rejected(self, rows: object) -> None:
        with pytest.raises(ValueError):
            Board.from_rows(rows)  # type: ignore[arg-type]

    def test_bad_color_rejected(self) -> None:
        rows = Board().to_rows()
        rows[0][7] = {"type": "rook", "color": "green", "cooldownTime": 7000}
        with pytest.raises(ValueError):
            Board.from_rows(rows)

    def test_custom_layout_accepted_as_is(self) -> None:
        rows = Board().to_rows()
        rows[0][7] = {"type": "ice-bishop", "color": "black", "cooldownTime": 6500}
        board = Board.from_rows(rows)
        piece = board[H8]
        assert piece is not None and piece.piece_type == PieceType.ICE_BISHOP


class TestPiece:
    def test_cooldown_invariant_enforced(self) -> None:
        with pytest.raises(ValueError):
            Piece(PieceType.PAWN, Color.WHITE, 4000, 5000)
        with pytest.raises(ValueError):
            Piece(PieceType.PAWN, Color.WHITE, 0)

    def test_decay_floors_at_zero(self) -> None:
        piece = Piece(PieceType.PAWN, Color.WHITE, 4000, 50)
        piece.decay(100)
        assert piece.cooldown_remaining == 0

    def test_adjust_cooldown_clamped(self) -> None:
        piece = Piece(PieceType.PAWN, Color.WHITE, 4000, 3000)
        piece.adjust_cooldown(2000)
        assert piece.cooldown_remaining == 4000
        piece.adjust_cooldown(-9000)
        assert piece.cooldown_remaining == 0

    def test_from_dict_missing_key(self) -> None:
        with pytest.raises(ValueError):
            Piece.from_dict({"type": "pawn", "color": "white"})
