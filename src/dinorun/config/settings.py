"""
Game configuration and host settings using Pydantic.

``GameConfig`` holds every tunable constant of the simulation. It is frozen
and range-checked, so a simulation can never start with a degenerate spawn
interval or an upside-down jump.

``Settings`` is the host-level configuration, loaded from environment
variables (prefix ``DINORUN_``) with .env file support. Nested game
constants use a double underscore, e.g. ``DINORUN_GAME__GRAVITY=0.9``.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


Size = Tuple[float, float]


class ConfigurationError(ValueError):
    """Raised when the simulation is configured with out-of-range values."""


class GameConfig(BaseModel):
    """Simulation constants.

    Lengths, speeds and accelerations are expressed for a 1200px wide
    viewport and multiplied by the runtime ``scale`` factor.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Physics
    gravity: float = Field(default=0.8, gt=0)
    jump_impulse: float = Field(default=-15.0, lt=0)
    base_game_speed: float = Field(default=6.0, gt=0)

    # Spawning
    obstacle_spawn_interval: int = Field(default=100, ge=1)
    obstacle_spawn_probability: float = Field(default=0.6, ge=0.0, le=1.0)
    coin_spawn_interval: int = Field(default=80, ge=1)
    coin_spawn_probability: float = Field(default=0.4, ge=0.0, le=1.0)
    spawn_inset: float = Field(default=0.0, ge=0)

    # Scoring and difficulty
    speed_increment_threshold: int = Field(default=10, ge=1)
    speed_increment: float = Field(default=0.5, ge=0)
    coin_bonus_score: int = Field(default=5, ge=0)

    # Death animation
    death_animation_frames: int = Field(default=120, ge=1)
    falling_coin_gravity: float = Field(default=0.5, ge=0)
    falling_coin_size: float = Field(default=15.0, gt=0)

    # Player geometry
    player_x: float = Field(default=50.0, ge=0)
    player_width: float = Field(default=60.0, gt=0)
    player_height: float = Field(default=70.0, gt=0)
    duck_width: float = Field(default=70.0, gt=0)
    duck_height: float = Field(default=40.0, gt=0)
    ground_margin: float = Field(default=3.0, ge=0)

    # Entity geometry (width, height)
    low_cactus_size: Size = (25.0, 25.0)
    tall_cactus_size: Size = (25.0, 45.0)
    flying_size: Size = (50.0, 35.0)
    coin_size: Size = (20.0, 20.0)

    # Altitude bands: distance from the ground line up to the entity's top
    flying_altitudes: Size = (80.0, 140.0)
    coin_altitudes: Size = (80.0, 120.0)

    # Animation periods (ticks)
    run_animation_period: int = Field(default=20, ge=1)
    flying_animation_period: int = Field(default=30, ge=1)
    coin_animation_period: int = Field(default=20, ge=1)

    # Scenery
    cloud_count: int = Field(default=3, ge=0)
    ground_segment_count: int = Field(default=35, ge=0)
    ground_segment_spacing: float = Field(default=40.0, gt=0)

    @model_validator(mode="after")
    def _check_geometry(self) -> "GameConfig":
        for name in ("low_cactus_size", "tall_cactus_size", "flying_size", "coin_size"):
            width, height = getattr(self, name)
            if width <= 0 or height <= 0:
                raise ValueError(f"{name} must be positive, got {(width, height)}")
        for name in ("flying_altitudes", "coin_altitudes"):
            if min(getattr(self, name)) <= 0:
                raise ValueError(f"{name} must lie above the ground line")
        if self.duck_height >= self.player_height:
            raise ValueError("duck_height must be smaller than player_height")
        return self


def load_game_config(
    overrides: Optional[Mapping[str, Any]] = None,
    **kwargs: Any,
) -> GameConfig:
    """Build a GameConfig from a mapping and/or keyword overrides.

    Raises:
        ConfigurationError: If any value is missing its constraints
    """
    values = dict(overrides or {})
    values.update(kwargs)
    try:
        return GameConfig(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid game configuration: {e}") from e


class Settings(BaseSettings):
    """Host application settings."""

    model_config = SettingsConfigDict(
        env_prefix="DINORUN_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False
    log_file: Optional[Path] = None

    # Simulation
    fps: int = Field(default=60, ge=1)
    seed: Optional[int] = None
    initial_high_score: int = Field(default=0, ge=0)

    # Simulator window
    window_width: int = Field(default=1240, ge=1)
    window_height: int = Field(default=480, ge=1)
    window_title: str = "DINORUN"
    fullscreen: bool = False
    compact_layout: bool = False

    game: GameConfig = Field(default_factory=GameConfig)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
