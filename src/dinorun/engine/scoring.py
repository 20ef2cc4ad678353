"""Score, coin count and difficulty progression."""

import logging

from dinorun.config.settings import GameConfig
from dinorun.engine.entities import RunState

logger = logging.getLogger(__name__)


class ScoreKeeper:
    """Applies scoring rules to a ``RunState``.

    One point per obstacle passed, a fixed bonus per coin. Game speed only
    rises on pass events that land the score on a multiple of the
    threshold; coin bonuses never change speed.
    """

    def __init__(self, config: GameConfig):
        self.config = config

    def speed_for(self, speed_level: int, scale: float) -> float:
        cfg = self.config
        return (cfg.base_game_speed + speed_level * cfg.speed_increment) * scale

    def reset(self, state: RunState, scale: float) -> None:
        state.score = 0
        state.coin_count = 0
        state.frame_count = 0
        state.death_frame = 0
        state.speed_level = 0
        state.game_speed = self.speed_for(0, scale)

    def rescale(self, state: RunState, scale: float) -> None:
        """Recompute game speed after the scale factor changed."""
        state.game_speed = self.speed_for(state.speed_level, scale)

    def record_pass(self, state: RunState, scale: float) -> bool:
        """Award one point for a passed obstacle.

        Returns:
            True if this pass raised the game speed
        """
        state.score += 1
        if state.score % self.config.speed_increment_threshold == 0:
            state.speed_level += 1
            state.game_speed += self.config.speed_increment * scale
            logger.info(f"Speed up to level {state.speed_level} ({state.game_speed:.2f}px/tick)")
            return True
        return False

    def record_coin(self, state: RunState) -> None:
        state.coin_count += 1
        state.score += self.config.coin_bonus_score
