"""Rating → difficulty parameter mapping for the AI opponent."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from tempochess.config import DEFAULT_SETTINGS, AISettings


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True, slots=True)
class DifficultySettings:
    """Parameters derived from a single rating.

    Each field is an independent clamped linear function of the rating.
    ``search_depth`` is reported for display only; evaluation always looks
    exactly one move ahead.
    """

    rating: int
    reaction_ms: float
    search_depth: int
    accuracy: float
    aggressiveness: float
    defensive_awareness: float
    cooldown_management: float

    @classmethod
    def from_rating(
        cls, rating: int, settings: AISettings = DEFAULT_SETTINGS.ai
    ) -> DifficultySettings:
        rating = int(_clamp(rating, settings.min_rating, settings.max_rating))
        n = rating - settings.min_rating
        return cls(
            rating=rating,
            reaction_ms=max(200.0, 2000.0 - n * 0.7),
            search_depth=max(1, n // 400 + 1),
            accuracy=_clamp(n / 2000, 0.3, 1.0),
            aggressiveness=_clamp(n / 1500, 0.2, 1.0),
            defensive_awareness=_clamp(n / 1800, 0.3, 1.0),
            cooldown_management=_clamp(n / 1600, 0.4, 1.0),
        )

    @property
    def reaction_delay_ms(self) -> int:
        """Reaction time rounded for timers."""
        return round(self.reaction_ms)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
