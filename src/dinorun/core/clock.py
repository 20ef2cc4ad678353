"""Fixed-step frame clock.

Hosts hand in wall-clock deltas; the clock answers how many whole logical
ticks the simulation should advance. Leftover time carries over.
"""

import logging

logger = logging.getLogger(__name__)


class FrameClock:
    """Accumulates elapsed time and converts it into fixed logical ticks.

    Args:
        fps: Logical tick rate (ticks per second)
        max_steps: Upper bound on ticks returned by one ``advance`` call,
            so a long stall does not trigger a burst of catch-up ticks
    """

    def __init__(self, fps: int = 60, max_steps: int = 5):
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        if max_steps < 1:
            raise ValueError(f"max_steps must be at least 1, got {max_steps}")
        self.fps = fps
        self.max_steps = max_steps
        self._accumulator = 0.0
        self._total_ticks = 0

    @property
    def tick_ms(self) -> float:
        """Duration of a single logical tick in milliseconds."""
        return 1000.0 / self.fps

    @property
    def total_ticks(self) -> int:
        return self._total_ticks

    @property
    def pending_ms(self) -> float:
        """Time accumulated towards the next tick."""
        return self._accumulator

    def advance(self, delta_ms: float) -> int:
        """Add elapsed time and return the number of ticks to run."""
        if delta_ms <= 0:
            return 0

        self._accumulator += delta_ms
        steps = int(self._accumulator // self.tick_ms)

        if steps > self.max_steps:
            logger.debug(f"Frame clock dropping {steps - self.max_steps} ticks")
            steps = self.max_steps
            self._accumulator = 0.0
        else:
            self._accumulator -= steps * self.tick_ms

        self._total_ticks += steps
        return steps

    def reset(self) -> None:
        self._accumulator = 0.0
        self._total_ticks = 0
