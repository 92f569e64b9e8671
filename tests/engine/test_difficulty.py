"""Tests for the rating → difficulty mapping."""

from __future__ import annotations

import pytest

from tempochess.engine.difficulty import DifficultySettings


class TestFromRating:
    def test_floor_rating(self) -> None:
        d = DifficultySettings.from_rating(400)
        assert d.reaction_ms == 2000
        assert d.search_depth == 1
        assert d.accuracy == 0.3
        assert d.aggressiveness == 0.2
        assert d.defensive_awareness == 0.3
        assert d.cooldown_management == 0.4

    def test_ceiling_rating(self) -> None:
        d = DifficultySettings.from_rating(2800)
        assert d.reaction_ms == pytest.approx(320)
        assert d.search_depth == 7
        assert d.accuracy == 1.0
        assert d.aggressiveness == 1.0
        assert d.defensive_awareness == 1.0
        assert d.cooldown_management == 1.0

    def test_intermediate_rating(self) -> None:
        d = DifficultySettings.from_rating(1200)
        assert d.reaction_ms == pytest.approx(1440)
        assert d.reaction_delay_ms == 1440
        assert d.search_depth == 3
        assert d.accuracy == pytest.approx(0.4)
        assert d.aggressiveness == pytest.approx(800 / 1500)
        assert d.defensive_awareness == pytest.approx(800 / 1800)
        assert d.cooldown_management == pytest.approx(0.5)

    def test_rating_clamped(self) -> None:
        assert DifficultySettings.from_rating(100) == DifficultySettings.from_rating(400)
        assert DifficultySettings.from_rating(9000).rating == 2800

    def test_reaction_never_below_floor(self) -> None:
        for rating in range(400, 2801, 100):
            assert DifficultySettings.from_rating(rating).reaction_ms >= 200

    def test_to_dict(self) -> None:
        data = DifficultySettings.from_rating(1600).to_dict()
        assert data["rating"] == 1600
        assert set(data) == {
            "rating",
            "reaction_ms",
            "search_depth",
            "accuracy",
            "aggressiveness",
            "defensive_awareness",
            "cooldown_management",
        }
