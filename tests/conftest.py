"""Shared fixtures for the dinorun test suite."""

import pytest

from dinorun.config.settings import GameConfig
from dinorun.core.random_source import ScriptedRandom
from dinorun.engine import physics
from dinorun.engine.entities import Coin, Obstacle, ObstacleKind, Viewport, World
from dinorun.engine.simulation import GameSimulation


VIEWPORT = Viewport(1200, 400)
GROUND_LINE = 397.0
GROUND_Y = 327.0


@pytest.fixture
def config() -> GameConfig:
    return GameConfig()


@pytest.fixture
def viewport() -> Viewport:
    return VIEWPORT


@pytest.fixture
def world(config, viewport) -> World:
    return World(player=physics.new_player(config, viewport, 1.0), viewport=viewport)


@pytest.fixture
def make_sim():
    """Factory for simulations whose spawn stream never fires unless scripted."""

    def _make(values=(), **kwargs) -> GameSimulation:
        kwargs.setdefault("rng", ScriptedRandom(values))
        return GameSimulation(**kwargs)

    return _make


@pytest.fixture
def playing_sim(make_sim) -> GameSimulation:
    sim = make_sim()
    sim.jump()
    return sim


def cactus(x: float, kind: ObstacleKind = ObstacleKind.LOW_CACTUS) -> Obstacle:
    """Ground obstacle at ``x`` on the default viewport."""
    height = 25.0 if kind is ObstacleKind.LOW_CACTUS else 45.0
    return Obstacle(kind=kind, x=x, y=GROUND_LINE - height, width=25.0, height=height)


def bird(x: float, altitude: float = 80.0) -> Obstacle:
    return Obstacle(kind=ObstacleKind.FLYING, x=x, y=GROUND_LINE - altitude, width=50.0, height=35.0)


def coin(x: float, y: float = 340.0) -> Coin:
    return Coin(x=x, y=y, width=20.0, height=20.0)
