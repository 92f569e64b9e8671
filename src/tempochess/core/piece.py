"""Piece record: type, side and cooldown timer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from tempochess.core.enums import Color


@dataclass(slots=True)
class Piece:
    """Mutable piece state.

    Cooldowns are integer milliseconds.  The timer invariant
    ``0 <= cooldown_remaining <= cooldown_duration`` is enforced on
    construction and by every mutator.
    """

    piece_type: str
    color: Color
    cooldown_duration: int
    cooldown_remaining: int = 0

    def __post_init__(self) -> None:
        if self.cooldown_duration <= 0:
            raise ValueError(
                f"Cooldown duration must be positive, got {self.cooldown_duration}"
            )
        if not 0 <= self.cooldown_remaining <= self.cooldown_duration:
            raise ValueError(
                f"Cooldown remaining {self.cooldown_remaining} outside "
                f"[0, {self.cooldown_duration}]"
            )

    # ── Cooldown ─────────────────────────────────────────────────────────

    @property
    def is_ready(self) -> bool:
        return self.cooldown_remaining == 0

    def start_cooldown(self) -> None:
        """Reset the timer to its full duration (after the piece moved)."""
        self.cooldown_remaining = self.cooldown_duration

    def decay(self, delta_ms: int) -> None:
        if self.cooldown_remaining > 0:
            self.cooldown_remaining = max(0, self.cooldown_remaining - delta_ms)

    def adjust_cooldown(self, delta_ms: int) -> None:
        """Add *delta_ms* (may be negative), clamped to the valid range."""
        self.cooldown_remaining = min(
            self.cooldown_duration, max(0, self.cooldown_remaining + delta_ms)
        )

    def copy(self) -> Piece:
        return Piece(
            self.piece_type,
            self.color,
            self.cooldown_duration,
            self.cooldown_remaining,
        )

    # ── Serialisation ────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": str(self.piece_type),
            "color": str(self.color),
            "cooldown": self.cooldown_remaining,
            "cooldownTime": self.cooldown_duration,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Piece:
        """Build a piece from its wire form.

        The type name is not checked here; see ``Board.from_rows``.
        """
        try:
            return cls(
                piece_type=str(data["type"]),
                color=Color.parse(data["color"]),
                cooldown_duration=int(data["cooldownTime"]),
                cooldown_remaining=int(data.get("cooldown", 0)),
            )
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Invalid piece data: {data!r}") from exc

    def __str__(self) -> str:
        return f"{self.color} {self.piece_type}"
