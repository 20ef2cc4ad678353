"""Tests for the obstacle and coin spawn policy."""

import pytest

from dinorun.config.settings import GameConfig
from dinorun.core.random_source import ScriptedRandom, SeededRandom
from dinorun.engine.entities import ObstacleKind, Viewport
from dinorun.engine.spawner import SpawnPolicy

from conftest import GROUND_LINE


def policy(*values, **overrides) -> SpawnPolicy:
    return SpawnPolicy(GameConfig(**overrides), ScriptedRandom(values))


class TestObstacleSpawn:

    def test_only_on_interval(self, viewport):
        spawner = policy(0.0, 0.0)
        assert spawner.maybe_spawn_obstacle(99, viewport, 1.0) is None
        assert spawner.rng.remaining == 2

        assert spawner.maybe_spawn_obstacle(100, viewport, 1.0) is not None

    def test_probability_gate(self, viewport):
        spawner = policy(0.6, 0.0)
        assert spawner.maybe_spawn_obstacle(100, viewport, 1.0) is None
        assert spawner.rng.remaining == 1

    def test_low_cactus(self, viewport):
        obstacle = policy(0.5, 0.0).maybe_spawn_obstacle(100, viewport, 1.0)
        assert obstacle.kind is ObstacleKind.LOW_CACTUS
        assert obstacle.x == 1200
        assert (obstacle.width, obstacle.height) == (25, 25)
        assert obstacle.bottom == GROUND_LINE
        assert not obstacle.passed

    def test_tall_cactus(self, viewport):
        obstacle = policy(0.5, 0.5).maybe_spawn_obstacle(200, viewport, 1.0)
        assert obstacle.kind is ObstacleKind.TALL_CACTUS
        assert obstacle.height == 45
        assert obstacle.bottom == GROUND_LINE

    @pytest.mark.parametrize("band_draw,altitude", [(0.2, 80.0), (0.7, 140.0)])
    def test_flying_bands(self, viewport, band_draw, altitude):
        obstacle = policy(0.5, 0.9, band_draw).maybe_spawn_obstacle(300, viewport, 1.0)
        assert obstacle.kind is ObstacleKind.FLYING
        assert obstacle.y == GROUND_LINE - altitude
        assert (obstacle.width, obstacle.height) == (50, 35)

    def test_scaled(self):
        obstacle = policy(0.5, 0.0).maybe_spawn_obstacle(100, Viewport(600, 200), 0.5)
        assert obstacle.x == 600
        assert obstacle.width == 12.5
        assert obstacle.bottom == pytest.approx(200 - 1.5)

    def test_spawn_inset(self, viewport):
        obstacle = policy(0.5, 0.0, spawn_inset=20).maybe_spawn_obstacle(100, viewport, 1.0)
        assert obstacle.x == 1180


class TestCoinSpawn:

    def test_only_on_interval(self, viewport):
        spawner = policy(0.0, 0.0, 0.0)
        assert spawner.maybe_spawn_coin(100, viewport, 1.0) is None
        assert spawner.rng.remaining == 3

    def test_coin(self, viewport):
        coin = policy(0.1, 0.2, 0.5).maybe_spawn_coin(80, viewport, 1.0)
        assert coin.x == 1200
        assert coin.y == GROUND_LINE - 80
        assert (coin.width, coin.height) == (20, 20)
        assert coin.animation_phase == 10
        assert not coin.collected

    def test_high_band(self, viewport):
        coin = policy(0.1, 0.9, 0.0).maybe_spawn_coin(160, viewport, 1.0)
        assert coin.y == GROUND_LINE - 120

    def test_probability_gate(self, viewport):
        assert policy(0.4).maybe_spawn_coin(80, viewport, 1.0) is None


def test_seeded_sources_replay_identically(viewport):
    config = GameConfig()
    first = SpawnPolicy(config, SeededRandom(5))
    second = SpawnPolicy(config, SeededRandom(5))

    def run(spawner):
        spawned = []
        for frame in range(1, 2001):
            for entity in (
                spawner.maybe_spawn_obstacle(frame, viewport, 1.0),
                spawner.maybe_spawn_coin(frame, viewport, 1.0),
            ):
                if entity is not None:
                    spawned.append((frame, type(entity).__name__, entity.y))
        return spawned

    result = run(first)
    assert result
    assert result == run(second)
