"""dinorun - endless-runner arcade simulation."""

from dinorun.config.settings import ConfigurationError, GameConfig
from dinorun.core.events import Event, GameEventType
from dinorun.core.random_source import SeededRandom
from dinorun.core.state import GamePhase
from dinorun.engine.entities import Viewport
from dinorun.engine.simulation import GameSimulation
from dinorun.engine.snapshot import GameSnapshot

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "Event",
    "GameConfig",
    "GameEventType",
    "GamePhase",
    "GameSimulation",
    "GameSnapshot",
    "SeededRandom",
    "Viewport",
]
