"""
Simulator window using pygame.

Hosts a GameSimulation in a desktop window: feeds it input intents, drives
it at a fixed tick rate and shows the frames produced by FrameRenderer.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

import numpy as np
import pygame

from dinorun.config.settings import Settings
from dinorun.core.clock import FrameClock
from dinorun.core.events import Event
from dinorun.core.random_source import SeededRandom
from dinorun.engine.simulation import GameSimulation
from dinorun.engine.snapshot import GameSnapshot
from dinorun.graphics.renderer import FrameRenderer
from dinorun.simulator.input import KeyboardInputAdapter
from dinorun.simulator.layout import fit_viewport

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Simulator window configuration."""
    width: int = 1240
    height: int = 480
    title: str = "DINORUN"
    fullscreen: bool = False
    fps: int = 60
    compact: bool = False

    bg_color: tuple[int, int, int] = (20, 20, 30)

    @classmethod
    def from_settings(cls, settings: Settings) -> "WindowConfig":
        return cls(
            width=settings.window_width,
            height=settings.window_height,
            title=settings.window_title,
            fullscreen=settings.fullscreen,
            fps=settings.fps,
            compact=settings.compact_layout,
        )


class SimulatorWindow:
    """
    Desktop host for a simulation.

    Keyboard Mapping:
        SPACE / UP: Jump
        DOWN: Duck
        R: Restart
        S: Screenshot
        ESC / Q: Quit
    """

    def __init__(
        self,
        config: WindowConfig | None = None,
        simulation: GameSimulation | None = None,
    ) -> None:
        self.config = config or WindowConfig()
        self.simulation = simulation or GameSimulation(rng=SeededRandom())
        self.input = KeyboardInputAdapter(self.simulation)
        self.renderer = FrameRenderer()
        self.clock = FrameClock(fps=self.config.fps)

        self._screen: pygame.Surface | None = None
        self._pg_clock: pygame.time.Clock | None = None
        self._running = False
        self._buffer: Optional[np.ndarray] = None
        self._snapshot: GameSnapshot = self.simulation.snapshot()

        self.simulation.on_game_over(self._on_game_over)

        logger.info("SimulatorWindow created")

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        flags = pygame.DOUBLEBUF
        if self.config.fullscreen:
            flags |= pygame.FULLSCREEN

        self._screen = pygame.display.set_mode(
            (self.config.width, self.config.height),
            flags
        )
        self._pg_clock = pygame.time.Clock()

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
            elif event.type == pygame.KEYDOWN and event.key in (pygame.K_ESCAPE, pygame.K_q):
                self._running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_s:
                self._capture_screenshot()
            else:
                self.input.handle_event(event)

    def _advance(self, delta_ms: float) -> None:
        """Run as many simulation ticks as the elapsed time allows."""
        width, height = self._screen.get_size() if self._screen else (self.config.width, self.config.height)
        viewport, scale = fit_viewport(width, height, compact=self.config.compact)

        for _ in range(self.clock.advance(delta_ms)):
            self.input.sync()
            self._snapshot = self.simulation.tick(viewport, scale)

    def _render(self) -> None:
        """Draw the latest snapshot centered in the window."""
        if not self._screen:
            return

        self._buffer = self.renderer.render(self._snapshot, self._buffer)
        surface = pygame.surfarray.make_surface(self._buffer.swapaxes(0, 1))

        self._screen.fill(self.config.bg_color)
        rect = surface.get_rect(center=self._screen.get_rect().center)
        self._screen.blit(surface, rect)

        snap = self._snapshot
        pygame.display.set_caption(
            f"{self.config.title} | {snap.phase.name} | "
            f"score {snap.score} | coins {snap.coin_count} | best {snap.high_score}"
        )
        pygame.display.flip()

    def _on_game_over(self, event: Event) -> None:
        if event.data.get("new_high_score"):
            logger.info(f"New high score: {event.data.get('high_score')}")

    def _capture_screenshot(self) -> None:
        if not self._screen:
            return
        path = Path(f"dinorun_{datetime.now().strftime('%Y%m%d_%H%M%S')}.png")
        pygame.image.save(self._screen, str(path))
        logger.info(f"Screenshot saved to {path}")

    async def run(self) -> None:
        """Main simulator loop."""
        self._init_pygame()
        self._running = True

        logger.info("Simulator started")

        while self._running:
            self._handle_events()

            if self._pg_clock:
                self._advance(self._pg_clock.get_time())

            self._render()

            if self._pg_clock:
                self._pg_clock.tick(self.config.fps)

            # Yield to other tasks
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        pygame.quit()
        logger.info(
            f"Simulator stopped (high score candidate: "
            f"{self.simulation.current_high_score_candidate()})"
        )
