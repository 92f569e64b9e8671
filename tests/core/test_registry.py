"""Tests for the piece capability registry."""

from __future__ import annotations

import pytest

from tempochess.config import EffectSettings
from tempochess.core import movement
from tempochess.core.board import Board
from tempochess.core.enums import Color, PieceType
from tempochess.core.piece import Piece
from tempochess.core.registry import (
    DEFAULT_REGISTRY,
    PieceDefinition,
    UnregisteredPieceError,
    build_registry,
    lookup,
)
from tempochess.core.types import D4, D5, E4, E5, F5, F6


class TestCanonicalTable:
    @pytest.mark.parametrize(
        ("piece_type", "cost", "cooldown", "letter"),
        [
            (PieceType.PAWN, 2, 4000, ""),
            (PieceType.KNIGHT, 4, 5000, "N"),
            (PieceType.BISHOP, 5, 6000, "B"),
            (PieceType.ROOK, 6, 7000, "R"),
            (PieceType.QUEEN, 8, 9000, "Q"),
            (PieceType.KING, 10, 11000, "K"),
            (PieceType.TWISTED_PAWN, 3, 4500, "T"),
            (PieceType.FLYING_CASTLE, 7, 8000, "F"),
            (PieceType.SHADOW_KNIGHT, 5, 5500, "S"),
            (PieceType.ICE_BISHOP, 6, 6500, "I"),
            (PieceType.RALLY_PAWN, 3, 4500, "H"),
        ],
    )
    def test_entry(
        self, piece_type: PieceType, cost: int, cooldown: int, letter: str
    ) -> None:
        definition = lookup(piece_type)
        assert definition.energy_cost == cost
        assert definition.cooldown_ms == cooldown
        assert definition.letter == letter

    def test_lookup_by_plain_string(self) -> None:
        assert DEFAULT_REGISTRY.lookup("shadow-knight").name == "Shadow Knight"
        assert "ice-bishop" in DEFAULT_REGISTRY

    def test_custom_types(self) -> None:
        assert set(DEFAULT_REGISTRY.custom_piece_types()) == {
            "twisted-pawn",
            "flying-castle",
            "shadow-knight",
            "ice-bishop",
            "rally-pawn",
        }
        assert len(DEFAULT_REGISTRY) == 11

    def test_unknown_type_fails_loudly(self) -> None:
        with pytest.raises(UnregisteredPieceError) as info:
            DEFAULT_REGISTRY.lookup("dragon")
        assert info.value.piece_type == "dragon"

    def test_base_types(self) -> None:
        assert lookup(PieceType.FLYING_CASTLE).base_type == PieceType.ROOK
        assert lookup(PieceType.RALLY_PAWN).base_type == PieceType.PAWN
        assert lookup(PieceType.KING).is_classical
        assert not lookup(PieceType.ICE_BISHOP).is_classical


class TestExtension:
    def _dragon(self) -> PieceDefinition:
        return PieceDefinition(
            "dragon", "Dragon", "D", "Flies", "D", 9, 10000, movement.queen_move
        )

    def test_extended_returns_new_registry(self) -> None:
        extended = DEFAULT_REGISTRY.extended(self._dragon())
        assert "dragon" in extended
        assert "dragon" not in DEFAULT_REGISTRY

    def test_duplicate_rejected(self) -> None:
        with pytest.raises(ValueError):
            DEFAULT_REGISTRY.extended(self._dragon(), self._dragon())

    def test_non_positive_cost_rejected(self) -> None:
        with pytest.raises(ValueError):
            PieceDefinition("x", "X", "X", "", "X", 0, 1000, movement.king_move)


class TestArrivalEffects:
    def test_ice_bishop_chills_adjacent_enemies(self) -> None:
        board = Board()
        bishop = Piece(PieceType.ICE_BISHOP, Color.WHITE, 6500)
        enemy = Piece(PieceType.PAWN, Color.BLACK, 4000, 1000)
        friend = Piece(PieceType.PAWN, Color.WHITE, 4000, 1000)
        board[E4], board[E5], board[D4] = bishop, enemy, friend

        effect = lookup(PieceType.ICE_BISHOP).on_arrival
        assert effect is not None
        effect(board, E4, bishop)

        assert enemy.cooldown_remaining == 3000
        assert friend.cooldown_remaining == 1000

    def test_chill_clamped_to_duration(self) -> None:
        board = Board()
        bishop = Piece(PieceType.ICE_BISHOP, Color.WHITE, 6500)
        enemy = Piece(PieceType.PAWN, Color.BLACK, 4000, 3500)
        board[E4], board[F5] = bishop, enemy
        movement.chill_adjacent_enemies(2000)(board, E4, bishop)
        assert enemy.cooldown_remaining == 4000

    def test_rally_pawn_hastens_allies(self) -> None:
        board = Board()
        rally = Piece(PieceType.RALLY_PAWN, Color.WHITE, 4500)
        friend = Piece(PieceType.KNIGHT, Color.WHITE, 5000, 600)
        enemy = Piece(PieceType.KNIGHT, Color.BLACK, 5000, 3000)
        far = Piece(PieceType.KNIGHT, Color.WHITE, 5000, 3000)
        board[E4], board[D5], board[E5], board[F6] = rally, friend, enemy, far

        effect = lookup(PieceType.RALLY_PAWN).on_arrival
        assert effect is not None
        effect(board, E4, rally)

        assert friend.cooldown_remaining == 0
        assert enemy.cooldown_remaining == 3000
        assert far.cooldown_remaining == 3000

    def test_effect_amounts_configurable(self) -> None:
        registry = build_registry(EffectSettings(ice_penalty_ms=500))
        board = Board()
        bishop = Piece(PieceType.ICE_BISHOP, Color.BLACK, 6500)
        enemy = Piece(PieceType.ROOK, Color.WHITE, 7000)
        board[E4], board[E5] = bishop, enemy
        effect = registry.lookup(PieceType.ICE_BISHOP).on_arrival
        assert effect is not None
        effect(board, E4, bishop)
        assert enemy.cooldown_remaining == 500
