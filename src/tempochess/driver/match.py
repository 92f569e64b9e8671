"""A running match: controller, tick loop and AI seats."""

from __future__ import annotations

import logging
import random

from PyQt6.QtCore import QObject

from tempochess.config import DEFAULT_SETTINGS, GameSettings
from tempochess.core.board import Board
from tempochess.core.enums import Color
from tempochess.driver.ai_session import AISession
from tempochess.driver.tick_loop import TickLoop
from tempochess.engine.opponent import AIOpponent
from tempochess.game.controller import GameController

_LOGGER = logging.getLogger(__name__)


class MatchSession:
    """Wires a :class:`GameController` to a :class:`TickLoop` and AI seats.

    Seats without an AI are left to humans or network participants, who
    submit moves to :attr:`controller` directly.

    Args:
        ai_ratings: Rating per AI-controlled color.
        settings: Game, AI and session settings.
        rng: Seeds one independent random source per AI seat.
    """

    __slots__ = ("_controller", "_tick_loop", "_ai_sessions", "_is_running")

    def __init__(
        self,
        ai_ratings: dict[Color, int] | None = None,
        *,
        settings: GameSettings = DEFAULT_SETTINGS,
        controller: GameController | None = None,
        rng: random.Random | None = None,
        parent: QObject | None = None,
    ) -> None:
        self._controller = controller or GameController(settings)
        self._tick_loop = TickLoop(
            self._controller, settings.session.tick_interval_ms, parent
        )
        self._ai_sessions: dict[Color, AISession] = {}
        for color, rating in sorted((ai_ratings or {}).items()):
            # Each seat searches on its own thread, so it draws from its own stream.
            seat_rng = random.Random(rng.getrandbits(64)) if rng is not None else None
            opponent = AIOpponent(
                color,
                rating,
                rng=seat_rng,
                registry=self._controller.registry,
                settings=settings.ai,
            )
            self._ai_sessions[color] = AISession(
                controller=self._controller, opponent=opponent, parent=parent
            )
        self._is_running = False

    @property
    def controller(self) -> GameController:
        return self._controller

    @property
    def tick_loop(self) -> TickLoop:
        return self._tick_loop

    @property
    def ai_sessions(self) -> dict[Color, AISession]:
        return dict(self._ai_sessions)

    def opponent(self, color: Color) -> AIOpponent | None:
        session = self._ai_sessions.get(color)
        return session.opponent if session is not None else None

    @property
    def is_running(self) -> bool:
        return self._is_running

    def start(self) -> None:
        if self._is_running:
            return
        for session in self._ai_sessions.values():
            session.setup()
        self._tick_loop.start()
        self._is_running = True
        _LOGGER.info(
            "Match started (AI: %s)",
            ", ".join(str(c) for c in self._ai_sessions) or "none",
        )

    def stop(self) -> None:
        if not self._is_running:
            return
        self._tick_loop.stop()
        for session in self._ai_sessions.values():
            session.shutdown()
        self._is_running = False
        _LOGGER.info("Match stopped")

    def reset(self, layout: Board | None = None) -> None:
        """Restart from *layout*, or from the current starting layout."""
        if layout is None:
            self._controller.reset()
        else:
            self._controller.new_game(layout)
