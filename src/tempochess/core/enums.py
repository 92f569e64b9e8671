"""Core enumerations for the tempo chess domain."""

from __future__ import annotations

from enum import Enum, IntEnum


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def forward(self) -> int:
        """Row step of a forward move (white moves towards row 0)."""
        return -1 if self == Color.WHITE else 1

    @property
    def pawn_row(self) -> int:
        """Row the side's pawns start on."""
        return 6 if self == Color.WHITE else 1

    @property
    def back_row(self) -> int:
        return 7 if self == Color.WHITE else 0

    def __str__(self) -> str:
        return self.name.lower()

    @classmethod
    def parse(cls, value: str) -> Color:
        """Color from its wire name, e.g. ``"white"``."""
        try:
            return cls[value.upper()]
        except (KeyError, AttributeError):
            raise ValueError(f"Invalid color: {value!r}") from None


class PieceType(str, Enum):
    """Built-in piece types.

    Values are the wire names.  The registry is keyed by these strings so
    that further variant types can be registered without touching this enum.
    """

    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"

    TWISTED_PAWN = "twisted-pawn"
    FLYING_CASTLE = "flying-castle"
    SHADOW_KNIGHT = "shadow-knight"
    ICE_BISHOP = "ice-bishop"
    RALLY_PAWN = "rally-pawn"

    def __str__(self) -> str:
        return self.value


CLASSICAL_TYPES: frozenset[str] = frozenset(
    t.value
    for t in (
        PieceType.PAWN,
        PieceType.KNIGHT,
        PieceType.BISHOP,
        PieceType.ROOK,
        PieceType.QUEEN,
        PieceType.KING,
    )
)


class GameStatus(IntEnum):
    """Lifecycle status of a game session."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    PAUSED = 3

    @classmethod
    def win_for(cls, color: Color) -> GameStatus:
        return cls.WHITE_WINS if color == Color.WHITE else cls.BLACK_WINS

    @property
    def is_finished(self) -> bool:
        return self in (GameStatus.WHITE_WINS, GameStatus.BLACK_WINS)


class Rejection(str, Enum):
    """Why a move request was refused.  Rejections never change state."""

    GAME_NOT_IN_PROGRESS = "game-not-in-progress"
    OFF_BOARD = "off-board"
    EMPTY_ORIGIN = "empty-origin"
    NOT_YOUR_PIECE = "not-your-piece"
    ILLEGAL_MOVE = "illegal-move"
    PIECE_ON_COOLDOWN = "piece-on-cooldown"
    INSUFFICIENT_ENERGY = "insufficient-energy"
