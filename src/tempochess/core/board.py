"""Board - piece placement on an 8x8 board."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING, Any

from tempochess.core.enums import Color, PieceType
from tempochess.core.piece import Piece
from tempochess.core.types import Square, make_square

if TYPE_CHECKING:
    from tempochess.core.registry import PieceRegistry

BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def _default_registry() -> PieceRegistry:
    from tempochess.core.registry import DEFAULT_REGISTRY

    return DEFAULT_REGISTRY


class Board:
    """Mutable 64-square board.  Cells hold a :class:`Piece` or ``None``."""

    __slots__ = ("_squares",)

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        self._squares[sq] = piece

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """Yield ``(square, piece)`` for every occupied square, a8 first."""
        for sq, piece in enumerate(self._squares):
            if piece is not None:
                yield sq, piece

    def pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*."""
        return [sq for sq, piece in self.occupied() if piece.color == color]

    def find(self, color: Color, piece_type: str) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*."""
        return [
            sq
            for sq, piece in self.occupied()
            if piece.color == color and piece.piece_type == piece_type
        ]

    def has_ready_piece(self, color: Color) -> bool:
        return any(
            piece.color == color and piece.is_ready for _, piece in self.occupied()
        )

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        """Deep copy: pieces are cloned so cooldown edits do not leak."""
        b = Board()
        b._squares = [p.copy() if p is not None else None for p in self._squares]
        return b

    def clear(self) -> None:
        self._squares = [None] * 64

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls, registry: PieceRegistry | None = None) -> Board:
        """Standard starting position with every piece ready."""
        registry = registry or _default_registry()
        b = cls()
        for color in Color:
            for col, piece_type in enumerate(BACK_RANK):
                b[make_square(color.back_row, col)] = Piece(
                    piece_type, color, registry.cooldown_ms(piece_type)
                )
                b[make_square(color.pawn_row, col)] = Piece(
                    PieceType.PAWN, color, registry.cooldown_ms(PieceType.PAWN)
                )
        return b

    # -- Serialisation ------------------------------------------------------

    def to_rows(self) -> list[list[dict[str, Any] | None]]:
        """8x8 row-major wire form (row 0 first)."""
        return [
            [
                piece.to_dict() if (piece := self._squares[make_square(r, c)]) else None
                for c in range(8)
            ]
            for r in range(8)
        ]

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Sequence[dict[str, Any] | None]],
        registry: PieceRegistry | None = None,
    ) -> Board:
        """Build a board from its 8x8 wire form.

        Raises:
            ValueError: malformed shape or cell.
            UnregisteredPieceError: a cell names an unknown piece type.
        """
        registry = registry or _default_registry()
        if not _is_row_sequence(rows) or len(rows) != 8 or any(
            not _is_row_sequence(row) or len(row) != 8 for row in rows
        ):
            raise ValueError("Board layout must be 8 rows of 8 cells")
        b = cls()
        for r, row in enumerate(rows):
            for c, cell in enumerate(row):
                if cell is None:
                    continue
                piece = Piece.from_dict(cell)
                registry.lookup(piece.piece_type)
                b[make_square(r, c)] = piece
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(8):
            cells = []
            for col in range(8):
                p = self[make_square(row, col)]
                if p is None:
                    cells.append(".")
                    continue
                glyph = str(p.piece_type)[0]
                if p.piece_type == PieceType.KNIGHT:
                    glyph = "n"
                cells.append(glyph.upper() if p.color == Color.WHITE else glyph)
            rows.append(f"{8 - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)


def _is_row_sequence(value: object) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def validate_home_ranks(board: Board, color: Color) -> bool:
    """Whether *color*'s two home ranks are fully populated by its own pieces.

    Board editors must satisfy this before handing a custom layout over;
    the engine itself accepts any layout.
    """
    for row in (color.back_row, color.pawn_row):
        for col in range(8):
            piece = board[make_square(row, col)]
            if piece is None or piece.color != color:
                return False
    return True
