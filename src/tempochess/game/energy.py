"""Energy pools and the time-based regeneration schedule."""

from __future__ import annotations

import math
from dataclasses import dataclass

from tempochess.config import DEFAULT_SETTINGS, EnergySettings
from tempochess.core.registry import DEFAULT_REGISTRY, PieceRegistry


class InsufficientEnergyError(ValueError):
    """Raised when a pool is asked to spend more than it holds."""

    def __init__(self, required: float, available: float) -> None:
        super().__init__(
            f"Insufficient energy: {required:g} required, {available:.1f} available"
        )
        self.required = required
        self.available = available


def regeneration_rate(
    elapsed_ms: float, settings: EnergySettings = DEFAULT_SETTINGS.energy
) -> float:
    """Energy per second after *elapsed_ms* of game time.

    Stepwise non-decreasing, capped at ``settings.max_rate``.
    """
    steps = math.floor(elapsed_ms / settings.rate_interval_ms)
    return min(settings.starting_rate + steps * settings.rate_step, settings.max_rate)


def regeneration_progress(
    elapsed_ms: float, settings: EnergySettings = DEFAULT_SETTINGS.energy
) -> float:
    """Fraction (0–1) of the way from the starting rate to the cap."""
    if settings.rate_step <= 0:
        return 1.0
    steps = math.floor(elapsed_ms / settings.rate_interval_ms)
    max_steps = (settings.max_rate - settings.starting_rate) / settings.rate_step
    if max_steps <= 0:
        return 1.0
    return min(steps / max_steps, 1.0)


@dataclass(slots=True)
class EnergyPool:
    """One side's energy.  ``0 <= current <= maximum`` always holds."""

    current: float
    maximum: float

    @classmethod
    def starting(cls, settings: EnergySettings = DEFAULT_SETTINGS.energy) -> EnergyPool:
        return cls(settings.starting_energy, settings.max_energy)

    def can_afford(self, cost: float) -> bool:
        return self.current >= cost

    def gain(self, amount: float) -> None:
        self.current = min(self.current + amount, self.maximum)

    def spend(self, amount: float) -> None:
        if amount > self.current:
            raise InsufficientEnergyError(amount, self.current)
        self.current = max(0.0, self.current - amount)


def affordable_piece_types(
    energy: float, registry: PieceRegistry = DEFAULT_REGISTRY
) -> list[tuple[str, int]]:
    """``(type, cost)`` for every registered type payable with *energy*."""
    return [
        (str(d.piece_type), d.energy_cost)
        for d in registry
        if energy >= d.energy_cost
    ]


def efficiency_rating(piece_type: str, registry: PieceRegistry = DEFAULT_REGISTRY) -> int:
    """0–100 rating, cheaper pieces rate higher."""
    return max(0, 100 - registry.energy_cost(piece_type) * 10)
