"""Configuration for dinorun."""

from .settings import (
    ConfigurationError,
    GameConfig,
    Settings,
    get_settings,
    load_game_config,
)

__all__ = [
    "ConfigurationError",
    "GameConfig",
    "Settings",
    "get_settings",
    "load_game_config",
]
