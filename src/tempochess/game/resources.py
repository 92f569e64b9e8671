"""Cooldown decay, energy regeneration and the affordability gate."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from tempochess.config import DEFAULT_SETTINGS, EnergySettings
from tempochess.core.enums import Color, Rejection
from tempochess.core.registry import DEFAULT_REGISTRY, PieceRegistry
from tempochess.game.energy import EnergyPool, regeneration_rate

if TYPE_CHECKING:
    from tempochess.core.board import Board
    from tempochess.core.piece import Piece

_LOGGER = logging.getLogger(__name__)


class ResourceSystem:
    """Owns the per-tick resource update and the move affordability check."""

    __slots__ = ("_settings", "_registry")

    def __init__(
        self,
        settings: EnergySettings = DEFAULT_SETTINGS.energy,
        registry: PieceRegistry = DEFAULT_REGISTRY,
    ) -> None:
        self._settings = settings
        self._registry = registry

    @property
    def settings(self) -> EnergySettings:
        return self._settings

    def rate(self, clock_ms: float) -> float:
        return regeneration_rate(clock_ms, self._settings)

    def tick(
        self,
        board: Board,
        pools: Mapping[Color, EnergyPool],
        delta_ms: int,
        clock_ms: int,
    ) -> None:
        """Decay every cooldown by *delta_ms*, then regenerate both pools.

        The rate is taken at *clock_ms*, the clock value after this tick.
        """
        if delta_ms < 0:
            raise ValueError(f"Tick delta must be >= 0, got {delta_ms}")

        for _, piece in board.occupied():
            piece.decay(delta_ms)

        gain = self.rate(clock_ms) * (delta_ms / 1000)
        for pool in pools.values():
            pool.gain(gain)

        _LOGGER.debug("tick +%dms at %dms: gain %.3f", delta_ms, clock_ms, gain)

    def energy_cost(self, piece: Piece) -> int:
        return self._registry.energy_cost(piece.piece_type)

    def check_affordable(self, piece: Piece, pool: EnergyPool) -> Rejection | None:
        """``None`` when *piece* may move now, else the reason it may not."""
        if not piece.is_ready:
            return Rejection.PIECE_ON_COOLDOWN
        if not pool.can_afford(self.energy_cost(piece)):
            return Rejection.INSUFFICIENT_ENERGY
        return None
