"""Seat implementations: local human and remote participant."""

from __future__ import annotations

import logging

from tempochess.core.enums import Color, Rejection
from tempochess.game.interfaces import IGameController, IPlayer, MoveOutcome
from tempochess.protocol import Message, ProtocolError, parse_move_request

_LOGGER = logging.getLogger(__name__)


class HumanPlayer(IPlayer):
    """Local seat; moves are submitted by the UI straight to the controller."""

    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str = "") -> None:
        self._color = color
        self._name = name or f"Player ({color})"

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name


class RemotePlayer(HumanPlayer):
    """Networked seat bound to one color of an authoritative controller.

    Incoming ``make-move`` messages go through the same
    :meth:`IGameController.submit_move` as local and AI moves, with the
    seat color enforced.
    """

    __slots__ = ("_controller",)

    def __init__(
        self, color: Color, controller: IGameController, name: str = ""
    ) -> None:
        super().__init__(color, name or f"Remote ({color})")
        self._controller = controller

    def handle_move_message(self, message: Message) -> MoveOutcome:
        """Apply a decoded move request from this seat.

        Raises:
            ProtocolError: the message does not carry four integer coordinates.
        """
        try:
            request = parse_move_request(message)
        except ProtocolError:
            _LOGGER.warning("%s sent a malformed move request: %r", self.name, message)
            raise
        outcome = self._controller.submit_move(request, self._color)
        if not outcome.accepted:
            level = (
                logging.WARNING
                if outcome.reason == Rejection.NOT_YOUR_PIECE
                else logging.INFO
            )
            _LOGGER.log(level, "%s move refused: %s", self.name, outcome.message)
        return outcome
