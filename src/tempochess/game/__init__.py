"""Game management layer: state, resources, controller, players.

Quick start::

    from tempochess.game import GameController
    from tempochess.core import MoveRequest

    ctrl = GameController()
    ctrl.tick(100)
    outcome = ctrl.submit_move(MoveRequest(6, 4, 4, 4))  # e2-e4
"""

from tempochess.game.clock import GameClock
from tempochess.game.controller import GameController, GameEvents
from tempochess.game.energy import (
    EnergyPool,
    InsufficientEnergyError,
    affordable_piece_types,
    efficiency_rating,
    regeneration_progress,
    regeneration_rate,
)
from tempochess.game.interfaces import IGameController, IPlayer, MoveOutcome
from tempochess.game.player import HumanPlayer, RemotePlayer
from tempochess.game.resources import ResourceSystem
from tempochess.game.state import GameState, MoveRecord

__all__ = [
    # Interfaces
    "IGameController",
    "IPlayer",
    "MoveOutcome",
    # Resources
    "EnergyPool",
    "GameClock",
    "InsufficientEnergyError",
    "ResourceSystem",
    "affordable_piece_types",
    "efficiency_rating",
    "regeneration_progress",
    "regeneration_rate",
    # Concrete
    "GameController",
    "GameEvents",
    "GameState",
    "HumanPlayer",
    "MoveRecord",
    "RemotePlayer",
]
