"""Move value objects."""

from __future__ import annotations

from dataclasses import dataclass

from tempochess.core.types import Square, col_of, make_square, on_board, row_of, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable origin/destination pair."""

    from_sq: Square
    to_sq: Square

    def __str__(self) -> str:
        return f"{square_name(self.from_sq)}{square_name(self.to_sq)}"

    def to_request(self) -> MoveRequest:
        return MoveRequest(
            row_of(self.from_sq),
            col_of(self.from_sq),
            row_of(self.to_sq),
            col_of(self.to_sq),
        )


@dataclass(frozen=True, slots=True)
class MoveRequest:
    """Raw row/column move request as received from a driver or the network.

    Coordinates are unchecked; see :attr:`is_on_board`.
    """

    from_row: int
    from_col: int
    to_row: int
    to_col: int

    @property
    def is_on_board(self) -> bool:
        return on_board(self.from_row, self.from_col) and on_board(
            self.to_row, self.to_col
        )

    def to_move(self) -> Move:
        if not self.is_on_board:
            raise ValueError(f"Move request off the board: {self}")
        return Move(
            make_square(self.from_row, self.from_col),
            make_square(self.to_row, self.to_col),
        )
