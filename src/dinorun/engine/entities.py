"""Entity records for the runner simulation.

Plain mutable dataclasses owned by a single ``World``. Only the simulation
mutates them; collaborators read immutable snapshots instead
(see ``dinorun.engine.snapshot``).
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from dinorun.core.state import GamePhase


# Smallest viewport the simulation will run in. Anything smaller is clamped.
MIN_VIEWPORT_WIDTH = 120.0
MIN_VIEWPORT_HEIGHT = 40.0
MIN_SCALE = 0.1


class ObstacleKind(Enum):
    """Types of obstacles."""
    LOW_CACTUS = "low-cactus"
    TALL_CACTUS = "tall-cactus"
    FLYING = "flying"


@dataclass(frozen=True)
class Viewport:
    """Visible play area in pixels."""
    width: float
    height: float

    def clamped(self) -> "Viewport":
        """Return a viewport no smaller than the minimum safe size."""
        width = self.width if math.isfinite(self.width) else MIN_VIEWPORT_WIDTH
        height = self.height if math.isfinite(self.height) else MIN_VIEWPORT_HEIGHT
        return Viewport(
            width=max(MIN_VIEWPORT_WIDTH, float(width)),
            height=max(MIN_VIEWPORT_HEIGHT, float(height)),
        )


def clamp_scale(scale: float) -> float:
    """Clamp a scale factor to a finite, positive value."""
    if not math.isfinite(scale) or scale < MIN_SCALE:
        return MIN_SCALE
    return float(scale)


@dataclass
class Player:
    """The runner.

    ``y`` is the top of the standing box. The hitbox is anchored at the
    feet, so ducking lowers ``top`` while ``bottom`` stays put.
    """
    x: float
    y: float
    width: float
    height: float
    standing_height: float
    velocity_y: float = 0.0
    is_jumping: bool = False
    is_ducking: bool = False
    run_phase: int = 0

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.standing_height

    @property
    def top(self) -> float:
        return self.bottom - self.height


@dataclass
class Obstacle:
    """An obstacle scrolling towards the player."""
    kind: ObstacleKind
    x: float
    y: float
    width: float
    height: float
    passed: bool = False
    animation_phase: int = 0

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass
class Coin:
    """A collectible coin."""
    x: float
    y: float
    width: float
    height: float
    collected: bool = False
    animation_phase: int = 0

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass
class Cloud:
    """A background cloud."""
    x: float
    y: float
    width: float
    height: float
    speed: float


@dataclass
class GroundSegment:
    """A dash on the ground line, scrolled to suggest motion."""
    x: float
    y: float


@dataclass
class FallingCoin:
    """A coin tumbling out of the player during the death animation."""
    x: float
    y: float
    velocity_x: float
    velocity_y: float
    rotation: float = 0.0
    rotation_speed: float = 0.0
    size: float = 15.0


@dataclass
class RunState:
    """Counters for the current run."""
    phase: GamePhase = GamePhase.WAITING
    score: int = 0
    coin_count: int = 0
    frame_count: int = 0
    game_speed: float = 0.0
    speed_level: int = 0
    death_frame: int = 0


@dataclass
class World:
    """Every live entity of a session."""
    player: Player
    viewport: Viewport
    scale: float = 1.0
    obstacles: List[Obstacle] = field(default_factory=list)
    coins: List[Coin] = field(default_factory=list)
    clouds: List[Cloud] = field(default_factory=list)
    ground: List[GroundSegment] = field(default_factory=list)
    falling_coins: List[FallingCoin] = field(default_factory=list)
