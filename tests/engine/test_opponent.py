"""Tests for AIOpponent: thinking cycle, cancellation, history."""

from __future__ import annotations

import random

from tempochess.core.board import Board
from tempochess.core.enums import Color, PieceType
from tempochess.engine.opponent import AIOpponent, AIState


def _opponent(rating: int = 1200) -> AIOpponent:
    return AIOpponent(Color.BLACK, rating, rng=random.Random(8))


class TestChooseMove:
    def test_returns_affordable_move(self) -> None:
        opponent = _opponent()
        move = opponent.choose_move(Board.initial(), 0, 2)
        assert move is not None
        assert move.piece_type == PieceType.PAWN
        assert move.color == Color.BLACK
        assert opponent.state == AIState.IDLE

    def test_none_when_nothing_affordable(self) -> None:
        opponent = _opponent()
        assert opponent.choose_move(Board.initial(), 0, 1.9) is None
        assert opponent.move_history == []
        assert opponent.state == AIState.IDLE

    def test_records_history_and_time(self) -> None:
        opponent = _opponent()
        move = opponent.choose_move(Board.initial(), 4_200, 6)
        assert opponent.move_history == [move]
        assert opponent.last_move_ms == 4_200

    def test_refuses_while_thinking(self) -> None:
        opponent = _opponent()
        ticket = opponent.begin()
        assert ticket is not None
        assert opponent.is_thinking
        assert opponent.begin() is None
        assert opponent.choose_move(Board.initial(), 0, 25) is None
        assert opponent.finish(ticket, None, 0)
        assert opponent.state == AIState.IDLE


class TestCancel:
    def test_cancel_invalidates_ticket(self) -> None:
        opponent = _opponent()
        ticket = opponent.begin()
        assert ticket is not None
        opponent.cancel()
        assert opponent.state == AIState.IDLE
        assert not opponent.is_current(ticket)
        move = opponent.decide(Board.initial(), 0, 6)
        assert not opponent.finish(ticket, move, 100)
        assert opponent.move_history == []

    def test_reset_clears_history(self) -> None:
        opponent = _opponent()
        opponent.choose_move(Board.initial(), 3_000, 6)
        opponent.reset()
        assert opponent.move_history == []
        assert opponent.last_move_ms == 0
        assert opponent.state == AIState.IDLE


class TestRating:
    def test_default_rating(self) -> None:
        assert AIOpponent().rating == 1200

    def test_set_rating_clamps(self) -> None:
        opponent = _opponent()
        opponent.set_rating(3_500)
        assert opponent.rating == 2800
        assert opponent.difficulty.accuracy == 1.0

    def test_status(self) -> None:
        opponent = _opponent(1600)
        opponent.choose_move(Board.initial(), 0, 6)
        status = opponent.status()
        assert status["rating"] == 1600
        assert status["state"] == "idle"
        assert status["moves"] == 1
        assert status["color"] == "black"
        assert status["difficulty"]["search_depth"] == 4
