"""Runner simulation engine."""

from .entities import (
    Coin,
    FallingCoin,
    Obstacle,
    ObstacleKind,
    Player,
    RunState,
    Viewport,
    World,
)
from .snapshot import GameSnapshot
from .simulation import GameSimulation

__all__ = [
    "Coin",
    "FallingCoin",
    "GameSimulation",
    "GameSnapshot",
    "Obstacle",
    "ObstacleKind",
    "Player",
    "RunState",
    "Viewport",
    "World",
]
