"""Shared engine result models."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from tempochess.core.enums import Color, PieceType

if TYPE_CHECKING:
    from tempochess.core.move import Move

CancelCheck = Callable[[], bool]


@dataclass(slots=True, frozen=True)
class CandidateMove:
    """A ready, affordable, legal move together with what the AI knows about it."""

    move: Move
    piece_type: str
    color: Color
    energy_cost: int
    cooldown_ms: int
    captured: str | None = None
    score: float = 0.0

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def captures_king(self) -> bool:
        return self.captured == PieceType.KING


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by one AI decision."""

    best_move: CandidateMove | None
    candidates: int
    cancelled: bool = False

