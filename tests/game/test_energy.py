"""Tests for energy pools and the regeneration schedule."""

from __future__ import annotations

import pytest

from tempochess.config import EnergySettings
from tempochess.core.enums import PieceType
from tempochess.game.energy import (
    EnergyPool,
    InsufficientEnergyError,
    affordable_piece_types,
    efficiency_rating,
    regeneration_progress,
    regeneration_rate,
)


class TestRegenerationRate:
    def test_starting_rate(self) -> None:
        assert regeneration_rate(0) == 0.5
        assert regeneration_rate(14_999) == 0.5

    def test_steps_every_interval(self) -> None:
        assert regeneration_rate(15_000) == 1.0
        assert regeneration_rate(45_000) == 2.0

    def test_cap_first_reached_at_285_seconds(self) -> None:
        assert regeneration_rate(284_999) == 9.5
        assert regeneration_rate(285_000) == 10.0
        assert regeneration_rate(10_000_000) == 10.0

    def test_non_decreasing_and_capped(self) -> None:
        previous = 0.0
        for elapsed in range(0, 400_000, 2_500):
            rate = regeneration_rate(elapsed)
            assert previous <= rate <= 10.0
            previous = rate

    def test_custom_settings(self) -> None:
        settings = EnergySettings(starting_rate=1.0, rate_step=1.0, max_rate=2.0)
        assert regeneration_rate(0, settings) == 1.0
        assert regeneration_rate(60_000, settings) == 2.0

    def test_progress(self) -> None:
        assert regeneration_progress(0) == 0.0
        assert regeneration_progress(285_000) == 1.0
        assert regeneration_progress(999_999) == 1.0
        assert 0.0 < regeneration_progress(150_000) < 1.0


class TestEnergyPool:
    def test_starting(self) -> None:
        pool = EnergyPool.starting()
        assert pool.current == 6.0
        assert pool.maximum == 25.0

    def test_gain_clamped(self) -> None:
        pool = EnergyPool(24.5, 25.0)
        pool.gain(3.0)
        assert pool.current == 25.0

    def test_spend(self) -> None:
        pool = EnergyPool(6.0, 25.0)
        pool.spend(6)
        assert pool.current == 0.0

    def test_overspend_raises_and_keeps_balance(self) -> None:
        pool = EnergyPool(1.0, 25.0)
        with pytest.raises(InsufficientEnergyError) as info:
            pool.spend(2)
        assert info.value.required == 2
        assert info.value.available == 1.0
        assert pool.current == 1.0

    def test_can_afford(self) -> None:
        pool = EnergyPool(3.0, 25.0)
        assert pool.can_afford(3)
        assert not pool.can_afford(3.01)


class TestHelpers:
    def test_affordable_piece_types(self) -> None:
        affordable = dict(affordable_piece_types(3))
        assert affordable == {
            "pawn": 2,
            "twisted-pawn": 3,
            "rally-pawn": 3,
        }

    def test_efficiency_rating(self) -> None:
        assert efficiency_rating(PieceType.PAWN) == 80
        assert efficiency_rating(PieceType.KING) == 0
