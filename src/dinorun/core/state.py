"""
Phase machine for a dinorun session.

Phases:
    WAITING: Before the first run; only decorative scenery moves
    PLAYING: A run is in progress
    DYING: Collision happened; short falling-coin animation
    OVER: Run finished; final score on display until restart
"""

from enum import Enum, auto
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    """Session phases."""
    WAITING = auto()
    PLAYING = auto()
    DYING = auto()
    OVER = auto()


PhaseListener = Callable[[GamePhase, GamePhase], None]


class PhaseMachine:
    """
    Tracks the current phase and enforces legal transitions.

    Restart re-enters PLAYING straight from OVER; there is no way back
    to WAITING once the first run has started.
    """

    VALID_TRANSITIONS: list[tuple[GamePhase, GamePhase]] = [
        (GamePhase.WAITING, GamePhase.PLAYING),
        (GamePhase.PLAYING, GamePhase.DYING),
        (GamePhase.DYING, GamePhase.OVER),
        (GamePhase.OVER, GamePhase.PLAYING),  # Restart
    ]

    def __init__(self, initial_phase: GamePhase = GamePhase.WAITING) -> None:
        self._phase = initial_phase
        self._listeners: list[PhaseListener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.debug(f"PhaseMachine initialized with phase: {initial_phase.name}")

    @property
    def phase(self) -> GamePhase:
        """Get current phase."""
        return self._phase

    def can_transition(self, to_phase: GamePhase) -> bool:
        """Check if transition to given phase is valid."""
        return (self._phase, to_phase) in self._valid_transitions

    def transition(self, to_phase: GamePhase) -> bool:
        """
        Attempt to transition to a new phase.

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_phase):
            logger.warning(
                f"Invalid transition: {self._phase.name} -> {to_phase.name}"
            )
            return False

        old_phase = self._phase
        self._phase = to_phase
        logger.info(f"Phase transition: {old_phase.name} -> {to_phase.name}")

        for listener in self._listeners:
            try:
                listener(old_phase, to_phase)
            except Exception as e:
                logger.error(f"Error in phase listener: {e}")

        return True

    def add_listener(self, callback: PhaseListener) -> None:
        """Add a phase change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: PhaseListener) -> None:
        """Remove a phase change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)
