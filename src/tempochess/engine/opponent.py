"""AI opponent: rating, thinking state and move history."""

from __future__ import annotations

import logging
import random
import threading
from enum import IntEnum
from typing import TYPE_CHECKING, Any

from tempochess.config import DEFAULT_SETTINGS, AISettings
from tempochess.core.enums import Color
from tempochess.core.registry import DEFAULT_REGISTRY, PieceRegistry
from tempochess.engine.difficulty import DifficultySettings
from tempochess.engine.heuristic import HeuristicEngine
from tempochess.engine.search import CancelCheck, CandidateMove, SearchResult

if TYPE_CHECKING:
    from tempochess.core.board import Board
    from tempochess.game.state import GameState

_LOGGER = logging.getLogger(__name__)


class AIState(IntEnum):
    IDLE = 0
    THINKING = 1

    def __str__(self) -> str:
        return self.name.lower()


class AIOpponent:
    """One AI side.

    A decision is a *thinking cycle*: :meth:`begin` claims the opponent and
    hands out a ticket, :meth:`decide` picks a move (safe to call from a
    worker thread), :meth:`finish` records the result and returns to idle.
    A second request while thinking is refused, never queued.
    :meth:`cancel` invalidates the outstanding ticket so a late result is
    dropped.

    :meth:`choose_move` runs a whole cycle synchronously.
    """

    __slots__ = (
        "_color",
        "_settings",
        "_registry",
        "_engine",
        "_state",
        "_ticket",
        "_last_move_ms",
        "_history",
        "_lock",
    )

    def __init__(
        self,
        color: Color = Color.BLACK,
        rating: int | None = None,
        *,
        rng: random.Random | None = None,
        registry: PieceRegistry = DEFAULT_REGISTRY,
        settings: AISettings = DEFAULT_SETTINGS.ai,
    ) -> None:
        if rating is None:
            rating = settings.default_rating
        self._color = color
        self._settings = settings
        self._registry = registry
        self._engine = HeuristicEngine(
            DifficultySettings.from_rating(rating, settings), rng, registry, settings
        )
        self._state = AIState.IDLE
        self._ticket = 0
        self._last_move_ms = 0
        self._history: list[CandidateMove] = []
        self._lock = threading.Lock()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def color(self) -> Color:
        return self._color

    @property
    def rating(self) -> int:
        return self._engine.difficulty.rating

    @property
    def difficulty(self) -> DifficultySettings:
        return self._engine.difficulty

    @property
    def engine(self) -> HeuristicEngine:
        return self._engine

    @property
    def state(self) -> AIState:
        return self._state

    @property
    def is_thinking(self) -> bool:
        return self._state == AIState.THINKING

    @property
    def last_move_ms(self) -> int:
        return self._last_move_ms

    @property
    def move_history(self) -> list[CandidateMove]:
        return list(self._history)

    def set_rating(self, rating: int) -> None:
        self._engine.difficulty = DifficultySettings.from_rating(rating, self._settings)
        _LOGGER.info("%s AI rating set to %d", self._color, self.rating)

    # ── Thinking cycle ───────────────────────────────────────────────────

    def begin(self) -> int | None:
        """Claim the opponent for one decision; ``None`` if already thinking."""
        with self._lock:
            if self._state == AIState.THINKING:
                return None
            self._state = AIState.THINKING
            self._ticket += 1
            return self._ticket

    def is_current(self, ticket: int) -> bool:
        return self._state == AIState.THINKING and ticket == self._ticket

    def decide(
        self,
        board: Board,
        clock_ms: int,
        energy: float,
        is_cancelled: CancelCheck | None = None,
    ) -> CandidateMove | None:
        """Best affordable move of this side for *board*, without side effects."""
        candidates = self._engine.generate_candidates(board, self._color, energy)
        if not candidates:
            return None
        return self._engine.select_best_move(
            board, candidates, clock_ms, self._last_move_ms, is_cancelled
        )

    def search(
        self,
        state: GameState,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        """:meth:`decide` against a state snapshot (worker-thread entry point)."""
        return self._engine.search(
            state, self._color, is_cancelled, last_move_ms=self._last_move_ms
        )

    def finish(self, ticket: int, played: CandidateMove | None, clock_ms: int) -> bool:
        """End the cycle for *ticket*; records *played* when it was applied.

        Returns ``False`` when the ticket was cancelled or superseded.
        """
        with self._lock:
            if not self.is_current(ticket):
                return False
            self._state = AIState.IDLE
            if played is not None:
                self._history.append(played)
                self._last_move_ms = clock_ms
            return True

    def cancel(self) -> None:
        """Abort any thinking cycle in progress."""
        with self._lock:
            if self._state == AIState.THINKING:
                _LOGGER.debug("%s AI thinking cancelled", self._color)
            self._ticket += 1
            self._state = AIState.IDLE

    def reset(self) -> None:
        self.cancel()
        self._history.clear()
        self._last_move_ms = 0

    def choose_move(
        self, board: Board, clock_ms: int, energy: float
    ) -> CandidateMove | None:
        """Run one full thinking cycle synchronously.

        Returns ``None`` when already thinking or when no ready, affordable,
        legal move exists.
        """
        ticket = self.begin()
        if ticket is None:
            return None
        try:
            move = self.decide(board, clock_ms, energy)
        except Exception:
            self.finish(ticket, None, clock_ms)
            raise
        if not self.finish(ticket, move, clock_ms):
            return None
        return move

    # ── Reporting ────────────────────────────────────────────────────────

    def status(self) -> dict[str, Any]:
        return {
            "color": str(self._color),
            "rating": self.rating,
            "state": str(self._state),
            "difficulty": self.difficulty.to_dict(),
            "moves": len(self._history),
            "lastMoveTime": self._last_move_ms,
        }
