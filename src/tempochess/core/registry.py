"""Piece capability registry: cost, cooldown, movement and arrival effect per type.

The registry is a read-only table of :class:`PieceDefinition` records built
once at import time.  Unknown types are an error, never a silent fallback.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from types import MappingProxyType

from tempochess.config import DEFAULT_SETTINGS, EffectSettings
from tempochess.core import movement
from tempochess.core.enums import CLASSICAL_TYPES, PieceType
from tempochess.core.movement import ArrivalEffect, MovePredicate


class UnregisteredPieceError(ValueError):
    """Raised when a piece type has no registry entry."""

    def __init__(self, piece_type: object) -> None:
        super().__init__(f"Unregistered piece type: {piece_type!r}")
        self.piece_type = piece_type


@dataclass(frozen=True, slots=True)
class PieceDefinition:
    """Immutable capability record for one piece type."""

    piece_type: str
    name: str
    symbol: str
    description: str
    letter: str
    energy_cost: int
    cooldown_ms: int
    is_valid_move: MovePredicate
    on_arrival: ArrivalEffect | None = None
    base_type: str = PieceType.PAWN

    def __post_init__(self) -> None:
        if self.energy_cost <= 0:
            raise ValueError(f"{self.piece_type}: energy cost must be positive")
        if self.cooldown_ms <= 0:
            raise ValueError(f"{self.piece_type}: cooldown must be positive")

    @property
    def is_classical(self) -> bool:
        return str(self.piece_type) in CLASSICAL_TYPES


class PieceRegistry:
    """Read-only mapping of piece type name → :class:`PieceDefinition`."""

    __slots__ = ("_definitions",)

    def __init__(self, definitions: Iterable[PieceDefinition]) -> None:
        table: dict[str, PieceDefinition] = {}
        for definition in definitions:
            key = str(definition.piece_type)
            if key in table:
                raise ValueError(f"Duplicate piece definition: {key!r}")
            table[key] = definition
        self._definitions = MappingProxyType(table)

    def lookup(self, piece_type: str) -> PieceDefinition:
        try:
            return self._definitions[str(piece_type)]
        except KeyError:
            raise UnregisteredPieceError(piece_type) from None

    def energy_cost(self, piece_type: str) -> int:
        return self.lookup(piece_type).energy_cost

    def cooldown_ms(self, piece_type: str) -> int:
        return self.lookup(piece_type).cooldown_ms

    def all_piece_types(self) -> list[str]:
        return list(self._definitions)

    def custom_piece_types(self) -> list[str]:
        """Registered types that are not one of the six classical pieces."""
        return [key for key, d in self._definitions.items() if not d.is_classical]

    def extended(self, *definitions: PieceDefinition) -> PieceRegistry:
        """A new registry holding this one's entries plus *definitions*."""
        return PieceRegistry([*self._definitions.values(), *definitions])

    def __contains__(self, piece_type: object) -> bool:
        return str(piece_type) in self._definitions

    def __iter__(self) -> Iterator[PieceDefinition]:
        return iter(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)


def build_registry(effects: EffectSettings | None = None) -> PieceRegistry:
    """Build the canonical registry, with effect amounts from *effects*."""
    effects = effects or DEFAULT_SETTINGS.effects
    return PieceRegistry(
        [
            PieceDefinition(
                PieceType.PAWN, "Pawn", "♙", "Basic infantry unit",
                "", 2, 4000, movement.pawn_move,
            ),
            PieceDefinition(
                PieceType.KNIGHT, "Knight", "♘", "Cavalry unit with L-shaped movement",
                "N", 4, 5000, movement.knight_move, base_type=PieceType.KNIGHT,
            ),
            PieceDefinition(
                PieceType.BISHOP, "Bishop", "♗", "Diagonally moving unit",
                "B", 5, 6000, movement.bishop_move, base_type=PieceType.BISHOP,
            ),
            PieceDefinition(
                PieceType.ROOK, "Rook", "♖", "Horizontally and vertically moving unit",
                "R", 6, 7000, movement.rook_move, base_type=PieceType.ROOK,
            ),
            PieceDefinition(
                PieceType.QUEEN, "Queen", "♕", "Combines rook and bishop movement",
                "Q", 8, 9000, movement.queen_move, base_type=PieceType.QUEEN,
            ),
            PieceDefinition(
                PieceType.KING, "King", "♔", "Moves one square in any direction",
                "K", 10, 11000, movement.king_move, base_type=PieceType.KING,
            ),
            PieceDefinition(
                PieceType.TWISTED_PAWN, "Twisted Pawn", "♟",
                "Pawn that moves diagonally forward and captures straight",
                "T", 3, 4500, movement.twisted_pawn_move,
            ),
            PieceDefinition(
                PieceType.FLYING_CASTLE, "Flying Castle", "🏰",
                "Rook that can leap a piece standing next to its landing square",
                "F", 7, 8000, movement.flying_castle_move, base_type=PieceType.ROOK,
            ),
            PieceDefinition(
                PieceType.SHADOW_KNIGHT, "Shadow Knight", "♞",
                "Knight that moves through pieces",
                "S", 5, 5500, movement.shadow_knight_move, base_type=PieceType.KNIGHT,
            ),
            PieceDefinition(
                PieceType.ICE_BISHOP, "Ice Bishop", "❄",
                "Bishop that slides through pieces and chills adjacent enemies",
                "I", 6, 6500, movement.ice_bishop_move,
                on_arrival=movement.chill_adjacent_enemies(effects.ice_penalty_ms),
                base_type=PieceType.BISHOP,
            ),
            PieceDefinition(
                PieceType.RALLY_PAWN, "Rally Pawn", "⚑",
                "Pawn that hastens adjacent allies when it arrives",
                "H", 3, 4500, movement.pawn_move,
                on_arrival=movement.rally_adjacent_allies(effects.rally_bonus_ms),
            ),
        ]
    )


DEFAULT_REGISTRY: PieceRegistry = build_registry()


def lookup(piece_type: str) -> PieceDefinition:
    """Definition of *piece_type* in the default registry."""
    return DEFAULT_REGISTRY.lookup(piece_type)
