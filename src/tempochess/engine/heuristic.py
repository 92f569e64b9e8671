"""One-ply heuristic move selector.

Every candidate is scored by a weighted sum of material, position,
tactical threat change, cooldown timing, protection change, aggression and
a difficulty-scaled noise term.  The ranked list is then sampled: the top
move with probability ``accuracy``, otherwise a uniform pick among the best
fraction of moves.
"""

from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import TYPE_CHECKING

from tempochess.config import DEFAULT_SETTINGS, AISettings
from tempochess.core.enums import Color, PieceType
from tempochess.core.move_generator import MoveGenerator
from tempochess.core.registry import DEFAULT_REGISTRY, PieceRegistry
from tempochess.core.types import col_of, row_of
from tempochess.engine.difficulty import DifficultySettings
from tempochess.engine.search import CancelCheck, CandidateMove, SearchResult

if TYPE_CHECKING:
    from tempochess.core.board import Board
    from tempochess.core.move import Move
    from tempochess.game.state import GameState

_LOGGER = logging.getLogger(__name__)

# ── Evaluation constants ─────────────────────────────────────────────────────

MATERIAL_VALUES: dict[str, int] = {
    PieceType.PAWN.value: 100,
    PieceType.KNIGHT.value: 320,
    PieceType.BISHOP.value: 330,
    PieceType.ROOK.value: 500,
    PieceType.QUEEN.value: 900,
    PieceType.KING.value: 10_000,
}

_FIXED_POSITION_BONUS: dict[str, int] = {
    PieceType.BISHOP.value: 15,
    PieceType.ROOK.value: 10,
    PieceType.QUEEN.value: 25,
    PieceType.KING.value: 30,
}

CENTRE_BONUS = 20
PAWN_ADVANCE_BONUS = 5
KNIGHT_CENTRALITY_BONUS = 10
THREAT_WEIGHT = 40
PROTECTION_WEIGHT = 20
AGGRESSION_WEIGHT = 50
NOISE_SCALE = 100
_COOLDOWN_HORIZON_MS = 15_000
_CENTRE = frozenset({(3, 3), (3, 4), (4, 3), (4, 4)})


class HeuristicEngine:
    """Scores and selects among a color's affordable moves.

    Args:
        difficulty: Rating-derived weights.
        rng: Source of randomness for noise and sampling; inject a seeded
            :class:`random.Random` for reproducible play.
        registry: Piece definitions used for legality and base types.
        settings: Idle threshold and sampling fraction.
    """

    __slots__ = ("_difficulty", "_rng", "_registry", "_settings")

    def __init__(
        self,
        difficulty: DifficultySettings,
        rng: random.Random | None = None,
        registry: PieceRegistry = DEFAULT_REGISTRY,
        settings: AISettings = DEFAULT_SETTINGS.ai,
    ) -> None:
        self._difficulty = difficulty
        self._rng = rng if rng is not None else random.Random()
        self._registry = registry
        self._settings = settings

    @property
    def difficulty(self) -> DifficultySettings:
        return self._difficulty

    @difficulty.setter
    def difficulty(self, value: DifficultySettings) -> None:
        self._difficulty = value

    # ── Candidate generation ─────────────────────────────────────────────

    def generate_candidates(
        self, board: Board, color: Color, energy: float
    ) -> list[CandidateMove]:
        """Legal moves of ready *color* pieces whose cost fits in *energy*."""
        generator = MoveGenerator(board, self._registry)
        candidates: list[CandidateMove] = []
        for move in generator.affordable_moves(color, energy):
            piece = board[move.from_sq]
            assert piece is not None
            target = board[move.to_sq]
            candidates.append(
                CandidateMove(
                    move=move,
                    piece_type=str(piece.piece_type),
                    color=color,
                    energy_cost=self._registry.energy_cost(piece.piece_type),
                    cooldown_ms=piece.cooldown_duration,
                    captured=str(target.piece_type) if target is not None else None,
                )
            )
        return candidates

    # ── Selection ────────────────────────────────────────────────────────

    def search(
        self,
        state: GameState,
        color: Color,
        is_cancelled: CancelCheck | None = None,
        last_move_ms: int = 0,
    ) -> SearchResult:
        """Pick a move for *color* from a detached state snapshot."""
        candidates = self.generate_candidates(state.board, color, state.energy(color))
        if is_cancelled is not None and is_cancelled():
            return SearchResult(None, len(candidates), cancelled=True)
        best = self.select_best_move(
            state.board, candidates, state.clock.elapsed_ms, last_move_ms, is_cancelled
        )
        cancelled = is_cancelled is not None and is_cancelled()
        return SearchResult(None if cancelled else best, len(candidates), cancelled)

    def select_best_move(
        self,
        board: Board,
        candidates: list[CandidateMove],
        clock_ms: int,
        last_move_ms: int = 0,
        is_cancelled: CancelCheck | None = None,
    ) -> CandidateMove | None:
        if not candidates:
            return None

        for candidate in candidates:
            if candidate.captures_king:
                return candidate

        color = candidates[0].color
        before = MoveGenerator(board, self._registry)
        threats_before = before.count_threats(color)
        protected_before = before.count_protected(color)

        scored: list[CandidateMove] = []
        for candidate in candidates:
            if is_cancelled is not None and is_cancelled():
                return None
            score = self.evaluate_move(
                board,
                candidate,
                clock_ms,
                last_move_ms,
                threats_before=threats_before,
                protected_before=protected_before,
            )
            scored.append(replace(candidate, score=score))

        scored.sort(key=lambda c: c.score, reverse=True)
        choice = self._select_by_difficulty(scored)
        _LOGGER.debug(
            "Selected %s (score %.1f) from %d candidates",
            choice.move,
            choice.score,
            len(scored),
        )
        return choice

    def _select_by_difficulty(self, ranked: list[CandidateMove]) -> CandidateMove:
        if self._rng.random() < self._difficulty.accuracy:
            return ranked[0]
        top = ranked[: max(1, int(len(ranked) * self._settings.top_fraction))]
        return top[int(self._rng.random() * len(top))]

    # ── Evaluation ───────────────────────────────────────────────────────

    def evaluate_move(
        self,
        board: Board,
        candidate: CandidateMove,
        clock_ms: int,
        last_move_ms: int = 0,
        *,
        threats_before: int | None = None,
        protected_before: int | None = None,
    ) -> float:
        d = self._difficulty
        if threats_before is None or protected_before is None:
            before_gen = MoveGenerator(board, self._registry)
            if threats_before is None:
                threats_before = before_gen.count_threats(candidate.color)
            if protected_before is None:
                protected_before = before_gen.count_protected(candidate.color)
        after_gen = MoveGenerator(self.simulate(board, candidate.move), self._registry)

        score = float(self.material_value(candidate.captured))
        score += self.positional_value(candidate) * d.accuracy
        threat_change = threats_before - after_gen.count_threats(candidate.color)
        score += threat_change * THREAT_WEIGHT * d.defensive_awareness
        score += self.cooldown_value(candidate, clock_ms, last_move_ms)
        protection_change = after_gen.count_protected(candidate.color) - protected_before
        score += protection_change * PROTECTION_WEIGHT * d.defensive_awareness
        if candidate.is_capture:
            score += d.aggressiveness * AGGRESSION_WEIGHT
        score += (self._rng.random() - 0.5) * (1.0 - d.accuracy) * NOISE_SCALE
        return score

    def material_value(self, piece_type: str | None) -> int:
        if piece_type is None:
            return 0
        return MATERIAL_VALUES[str(self._registry.lookup(piece_type).base_type)]

    def positional_value(self, candidate: CandidateMove) -> float:
        """Unweighted position bonus for the destination square."""
        to_row, to_col = row_of(candidate.move.to_sq), col_of(candidate.move.to_sq)
        score = float(CENTRE_BONUS if (to_row, to_col) in _CENTRE else 0)

        base = str(self._registry.lookup(candidate.piece_type).base_type)
        if base == PieceType.PAWN:
            score += abs(to_row - candidate.color.back_row) * PAWN_ADVANCE_BONUS
        elif base == PieceType.KNIGHT:
            distance = abs(to_row - 3.5) + abs(to_col - 3.5)
            score += (7 - distance) * KNIGHT_CENTRALITY_BONUS
        else:
            score += _FIXED_POSITION_BONUS.get(base, 0)
        return score

    def cooldown_value(
        self, candidate: CandidateMove, clock_ms: int, last_move_ms: int
    ) -> float:
        """Favour long cooldowns after an idle spell, short ones for follow-ups."""
        weight = self._difficulty.cooldown_management
        if clock_ms - last_move_ms > self._settings.idle_threshold_ms:
            return candidate.cooldown_ms * 0.1 * weight
        return (_COOLDOWN_HORIZON_MS - candidate.cooldown_ms) * 0.05 * weight

    @staticmethod
    def simulate(board: Board, move: Move) -> Board:
        """Board copy with the move played and the mover's cooldown started.

        Arrival effects are not applied.
        """
        after = board.copy()
        piece = after[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on origin square of {move}")
        after[move.to_sq] = piece
        after[move.from_sq] = None
        piece.start_cooldown()
        return after
