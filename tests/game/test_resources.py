"""Tests for the per-tick resource update and the affordability gate."""

from __future__ import annotations

import pytest

from tempochess.core.board import Board
from tempochess.core.enums import Color, PieceType, Rejection
from tempochess.core.piece import Piece
from tempochess.core.types import A1, E1
from tempochess.game.energy import EnergyPool
from tempochess.game.resources import ResourceSystem


def _pools(current: float = 6.0) -> dict[Color, EnergyPool]:
    return {color: EnergyPool(current, 25.0) for color in Color}


class TestTick:
    def test_decays_cooldowns(self) -> None:
        board = Board()
        board[E1] = Piece(PieceType.KING, Color.WHITE, 11000, 150)
        board[A1] = Piece(PieceType.ROOK, Color.WHITE, 7000, 0)
        ResourceSystem().tick(board, _pools(), 100, 100)
        assert board[E1].cooldown_remaining == 50  # type: ignore[union-attr]
        ResourceSystem().tick(board, _pools(), 100, 200)
        assert board[E1].cooldown_remaining == 0  # type: ignore[union-attr]
        assert board[A1].cooldown_remaining == 0  # type: ignore[union-attr]

    def test_regenerates_at_clock_rate(self) -> None:
        pools = _pools(6.0)
        ResourceSystem().tick(Board(), pools, 100, 15_000)
        assert pools[Color.WHITE].current == pytest.approx(6.1)
        assert pools[Color.BLACK].current == pytest.approx(6.1)

    def test_regeneration_clamped(self) -> None:
        pools = _pools(24.99)
        ResourceSystem().tick(Board(), pools, 100, 300_000)
        assert pools[Color.WHITE].current == 25.0

    def test_rejects_negative_delta(self) -> None:
        with pytest.raises(ValueError):
            ResourceSystem().tick(Board(), _pools(), -100, 0)


class TestAffordability:
    def test_cooling_piece(self) -> None:
        piece = Piece(PieceType.PAWN, Color.WHITE, 4000, 1)
        reason = ResourceSystem().check_affordable(piece, EnergyPool(25, 25))
        assert reason == Rejection.PIECE_ON_COOLDOWN

    def test_poor_pool(self) -> None:
        piece = Piece(PieceType.QUEEN, Color.WHITE, 9000)
        reason = ResourceSystem().check_affordable(piece, EnergyPool(7.9, 25))
        assert reason == Rejection.INSUFFICIENT_ENERGY

    def test_ready_and_affordable(self) -> None:
        piece = Piece(PieceType.QUEEN, Color.WHITE, 9000)
        assert ResourceSystem().check_affordable(piece, EnergyPool(8, 25)) is None
        assert ResourceSystem().energy_cost(piece) == 8
