"""
Input adapter for the simulator.

Maps raw pygame keyboard, mouse and touch events onto the three game
intents: jump, duck level and restart.
"""

import logging
from typing import Protocol

import pygame

logger = logging.getLogger(__name__)


class IntentTarget(Protocol):
    """Anything that accepts game intents (normally a GameSimulation)."""

    def jump(self) -> None: ...

    def set_ducking(self, ducking: bool) -> None: ...

    def restart(self) -> None: ...


class KeyboardInputAdapter:
    """
    Translates pygame events into intents.

    Keyboard Mapping:
        SPACE / UP: Jump (starts and restarts runs too)
        DOWN: Duck while held
        R: Restart
    Mouse clicks and touches also jump.
    """

    JUMP_KEYS = (pygame.K_SPACE, pygame.K_UP)
    DUCK_KEYS = (pygame.K_DOWN,)
    RESTART_KEYS = (pygame.K_r,)

    def __init__(self, target: IntentTarget) -> None:
        self.target = target
        self._duck_held = False

    @property
    def duck_held(self) -> bool:
        return self._duck_held

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Process one pygame event.

        Returns:
            True if the event was turned into an intent
        """
        if event.type == pygame.KEYDOWN:
            return self._handle_keydown(event.key)

        if event.type == pygame.KEYUP:
            if event.key in self.DUCK_KEYS:
                self._duck_held = False
                self.target.set_ducking(False)
                return True
            return False

        if event.type in (pygame.MOUSEBUTTONDOWN, pygame.FINGERDOWN):
            self.target.jump()
            return True

        return False

    def _handle_keydown(self, key: int) -> bool:
        if key in self.JUMP_KEYS:
            self.target.jump()
            return True
        if key in self.DUCK_KEYS:
            self._duck_held = True
            self.target.set_ducking(True)
            return True
        if key in self.RESTART_KEYS:
            logger.debug("Restart requested from keyboard")
            self.target.restart()
            return True
        return False

    def sync(self) -> None:
        """Re-send a held duck, e.g. after a run restarts."""
        if self._duck_held:
            self.target.set_ducking(True)
