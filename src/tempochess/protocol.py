"""JSON wire messages exchanged between a networked host and its players.

Messages are single JSON objects, one per line, with a ``type`` field:

* ``make-move``  (player → host): ``fromRow``, ``fromCol``, ``toRow``, ``toCol``
* ``game-state`` (host → all): full state snapshot
* ``move-made``  (host → all): the applied move and its history entry
* ``error``      (host → player): why a request was refused
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from tempochess.core.move import MoveRequest

if TYPE_CHECKING:
    from tempochess.game.interfaces import MoveOutcome
    from tempochess.game.state import GameState, MoveRecord

Message = dict[str, Any]
ENCODING = "utf-8"

MAKE_MOVE = "make-move"
GAME_STATE = "game-state"
MOVE_MADE = "move-made"
ERROR = "error"

_MOVE_KEYS = ("fromRow", "fromCol", "toRow", "toCol")


class ProtocolError(ValueError):
    pass


def encode(message: Message) -> bytes:
    """Serialize a message to bytes with a trailing newline."""
    return (json.dumps(message, separators=(",", ":")) + "\n").encode(ENCODING)


def decode(payload: bytes) -> Message:
    """Parse one line of bytes into a message dictionary."""
    try:
        message = json.loads(payload.decode(ENCODING))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ProtocolError("Malformed payload") from exc
    if not isinstance(message, dict):
        raise ProtocolError("Message must be a JSON object")
    return message


def parse_move_request(message: Message) -> MoveRequest:
    """Extract the four coordinates of a move request.

    Coordinates must be integers; range checking is left to the controller,
    which answers an off-board request with a rejection.
    """
    values: list[int] = []
    for key in _MOVE_KEYS:
        if key not in message:
            raise ProtocolError(f"Move request is missing {key!r}")
        value = message[key]
        if isinstance(value, bool) or not isinstance(value, int):
            raise ProtocolError(f"{key!r} must be an integer, got {value!r}")
        values.append(value)
    return MoveRequest(*values)


def state_message(state: GameState) -> Message:
    return {"type": GAME_STATE, "state": state.to_dict()}


def move_event_message(record: MoveRecord) -> Message:
    request = record.move.to_request()
    return {
        "type": MOVE_MADE,
        "fromRow": request.from_row,
        "fromCol": request.from_col,
        "toRow": request.to_row,
        "toCol": request.to_col,
        "record": record.to_dict(),
    }


def rejection_message(outcome: MoveOutcome) -> Message:
    if outcome.accepted:
        raise ValueError("Cannot build a rejection from an accepted outcome")
    message: Message = {
        "type": ERROR,
        "reason": outcome.reason.value if outcome.reason is not None else None,
        "message": outcome.message,
    }
    if outcome.required is not None:
        message["required"] = outcome.required
        message["available"] = round(outcome.available or 0.0, 3)
    return message
