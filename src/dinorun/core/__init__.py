"""Core framework components for dinorun."""

from .state import GamePhase, PhaseMachine
from .events import EventBus, Event, GameEventType
from .clock import FrameClock
from .random_source import RandomSource, SeededRandom, ScriptedRandom

__all__ = [
    "GamePhase",
    "PhaseMachine",
    "EventBus",
    "Event",
    "GameEventType",
    "FrameClock",
    "RandomSource",
    "SeededRandom",
    "ScriptedRandom",
]
