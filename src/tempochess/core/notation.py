"""Move notation: ``<letter?><from>-<to>``, e.g. ``e2-e4`` or ``Ng1-f3``."""

from __future__ import annotations

import re

from tempochess.core.move import Move
from tempochess.core.registry import DEFAULT_REGISTRY, PieceRegistry
from tempochess.core.types import parse_square, square_name

_NOTATION_RE = re.compile(r"^([A-Z]?)([a-h][1-8])-([a-h][1-8])$")


def move_notation(
    piece_type: str,
    move: Move,
    registry: PieceRegistry = DEFAULT_REGISTRY,
) -> str:
    """Notation for *move* made by a piece of *piece_type*.

    Pawn-family pieces have an empty letter and so omit the prefix.
    """
    letter = registry.lookup(piece_type).letter
    return f"{letter}{square_name(move.from_sq)}-{square_name(move.to_sq)}"


def parse_notation(text: str) -> tuple[str, Move]:
    """Split notation into ``(letter, move)``.  Raises ``ValueError``."""
    match = _NOTATION_RE.match(text.strip())
    if match is None:
        raise ValueError(f"Invalid move notation: {text!r}")
    letter, from_name, to_name = match.groups()
    return letter, Move(parse_square(from_name), parse_square(to_name))
