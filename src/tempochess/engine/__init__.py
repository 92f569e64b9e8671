"""AI package: difficulty mapping, heuristic selector, opponent and Qt worker bridge."""

from tempochess.engine.difficulty import DifficultySettings
from tempochess.engine.heuristic import MATERIAL_VALUES, HeuristicEngine
from tempochess.engine.opponent import AIOpponent, AIState
from tempochess.engine.qt_bridge import EngineWorker
from tempochess.engine.search import CancelCheck, CandidateMove, SearchResult

__all__ = [
    "AIOpponent",
    "AIState",
    "CancelCheck",
    "CandidateMove",
    "DifficultySettings",
    "EngineWorker",
    "HeuristicEngine",
    "MATERIAL_VALUES",
    "SearchResult",
]
