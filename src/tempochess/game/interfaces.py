"""Abstract interfaces and result types for the game layer.

Follows Dependency Inversion: drivers (local UI, AI session, network host)
depend on these, not on the concrete controller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from tempochess.core.enums import Color, Rejection

if TYPE_CHECKING:
    from tempochess.core.board import Board
    from tempochess.core.move import Move, MoveRequest
    from tempochess.core.types import Square
    from tempochess.game.state import MoveRecord


# ── Submission result ────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    """Result of a move submission: either an applied record or a rejection."""

    record: MoveRecord | None = None
    reason: Rejection | None = None
    required: float | None = None
    available: float | None = None

    @property
    def accepted(self) -> bool:
        return self.record is not None

    def __bool__(self) -> bool:
        return self.accepted

    @property
    def message(self) -> str:
        if self.record is not None:
            return self.record.notation
        if self.reason == Rejection.INSUFFICIENT_ENERGY:
            return (
                f"Insufficient energy: {self.required:g} required, "
                f"{self.available:.1f} available"
            )
        assert self.reason is not None
        return self.reason.value.replace("-", " ").capitalize()

    @classmethod
    def applied(cls, record: MoveRecord) -> MoveOutcome:
        return cls(record=record)

    @classmethod
    def rejected(
        cls,
        reason: Rejection,
        *,
        required: float | None = None,
        available: float | None = None,
    ) -> MoveOutcome:
        return cls(reason=reason, required=required, available=available)


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IPlayer(ABC):
    """A seat bound to one side of a game."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...


class IGameController(ABC):
    """Interface for the authoritative game orchestrator."""

    @abstractmethod
    def new_game(self, layout: Board | None = None) -> None:
        """Set up a new game from *layout* or the standard position."""

    @abstractmethod
    def submit_move(
        self,
        move: Move | MoveRequest,
        color: Color | None = None,
        *,
        is_ai: bool = False,
    ) -> MoveOutcome:
        """Validate and, if legal and affordable, apply a move."""

    @abstractmethod
    def tick(self, delta_ms: int) -> None:
        """Advance simulated time: cooldown decay and energy regeneration."""

    @abstractmethod
    def legal_destinations(self, from_sq: Square) -> list[Square]:
        """Destinations to highlight for the piece on *from_sq*."""

    @abstractmethod
    def resign(self, color: Color) -> None:
        """Player of *color* resigns."""

    @abstractmethod
    def reset(self) -> None:
        """Restart from the current game's starting layout."""
