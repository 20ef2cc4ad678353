"""Spawn policy for obstacles and coins.

Obstacles and coins run on independent cadences so they do not line up
into the same pattern every time. Each decision is O(1): a modulo on the
frame counter plus one or two Bernoulli draws, no history scan.
"""

import logging
from typing import Optional

from dinorun.config.settings import GameConfig
from dinorun.core.random_source import RandomSource, pick_index
from dinorun.engine.entities import Coin, Obstacle, ObstacleKind, Viewport
from dinorun.engine.physics import ground_line

logger = logging.getLogger(__name__)


OBSTACLE_KINDS = (ObstacleKind.LOW_CACTUS, ObstacleKind.TALL_CACTUS, ObstacleKind.FLYING)


class SpawnPolicy:
    """Decides, once per tick, whether new obstacles or coins appear.

    Random draws happen in a fixed order (obstacle gate, kind, flying band,
    then coin gate, coin band, coin phase) so a seeded source replays the
    same run.
    """

    def __init__(self, config: GameConfig, rng: RandomSource):
        self.config = config
        self.rng = rng

    def spawn_x(self, viewport: Viewport, scale: float) -> float:
        return viewport.width - self.config.spawn_inset * scale

    def maybe_spawn_obstacle(
        self, frame_count: int, viewport: Viewport, scale: float
    ) -> Optional[Obstacle]:
        """Roll for an obstacle on this frame."""
        cfg = self.config
        if frame_count % cfg.obstacle_spawn_interval != 0:
            return None
        if not self.rng.random() < cfg.obstacle_spawn_probability:
            return None

        kind = OBSTACLE_KINDS[pick_index(self.rng, len(OBSTACLE_KINDS))]
        line = ground_line(cfg, viewport, scale)

        if kind is ObstacleKind.FLYING:
            width, height = cfg.flying_size
            low, high = cfg.flying_altitudes
            altitude = low if self.rng.random() < 0.5 else high
            y = line - altitude * scale
        else:
            size = cfg.low_cactus_size if kind is ObstacleKind.LOW_CACTUS else cfg.tall_cactus_size
            width, height = size
            y = line - height * scale

        obstacle = Obstacle(
            kind=kind,
            x=self.spawn_x(viewport, scale),
            y=y,
            width=width * scale,
            height=height * scale,
        )
        logger.debug(f"Spawned {kind.value} at frame {frame_count}")
        return obstacle

    def maybe_spawn_coin(
        self, frame_count: int, viewport: Viewport, scale: float
    ) -> Optional[Coin]:
        """Roll for a coin on this frame."""
        cfg = self.config
        if frame_count % cfg.coin_spawn_interval != 0:
            return None
        if not self.rng.random() < cfg.coin_spawn_probability:
            return None

        low, high = cfg.coin_altitudes
        altitude = low if self.rng.random() < 0.5 else high
        width, height = cfg.coin_size
        phase = pick_index(self.rng, cfg.coin_animation_period)

        coin = Coin(
            x=self.spawn_x(viewport, scale),
            y=ground_line(cfg, viewport, scale) - altitude * scale,
            width=width * scale,
            height=height * scale,
            animation_phase=phase,
        )
        logger.debug(f"Spawned coin at frame {frame_count}")
        return coin
