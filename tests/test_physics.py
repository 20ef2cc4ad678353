"""Tests for player physics, scrolling and scenery."""

import pytest

from dinorun.core.random_source import SeededRandom
from dinorun.engine import physics
from dinorun.engine.entities import ObstacleKind, Viewport

from conftest import GROUND_LINE, GROUND_Y, cactus, coin


class TestGeometry:

    def test_ground(self, config, viewport):
        assert physics.ground_line(config, viewport, 1.0) == GROUND_LINE
        assert physics.ground_y(config, viewport, 1.0) == GROUND_Y

    def test_scaled_player(self, config):
        player = physics.new_player(config, Viewport(600, 200), 0.5)
        assert player.x == 25.0
        assert player.width == 30.0
        assert player.height == 35.0
        assert player.bottom == pytest.approx(200 - 1.5)


class TestJump:

    def test_first_tick_of_jump(self, config, world):
        player = world.player
        assert physics.try_jump(player, config, 1.0)

        physics.step_player(player, False, config, world.viewport, 1.0)

        assert player.velocity_y == pytest.approx(-14.2)
        assert player.y == pytest.approx(GROUND_Y - 15)
        assert player.is_jumping

    def test_lands_back_on_ground(self, config, world):
        player = world.player
        physics.try_jump(player, config, 1.0)

        for _ in range(100):
            physics.step_player(player, False, config, world.viewport, 1.0)
            if not player.is_jumping:
                break

        assert player.y == GROUND_Y
        assert player.velocity_y == 0.0
        assert not player.is_jumping

    def test_jump_while_airborne_is_noop(self, config, world):
        player = world.player
        physics.try_jump(player, config, 1.0)
        physics.step_player(player, False, config, world.viewport, 1.0)
        velocity = player.velocity_y

        assert not physics.try_jump(player, config, 1.0)
        assert player.velocity_y == velocity
        assert player.is_jumping

    def test_jump_while_ducking_is_noop(self, config, world):
        player = world.player
        physics.apply_duck(player, True, config, 1.0)

        assert not physics.try_jump(player, config, 1.0)
        assert player.velocity_y == 0.0
        assert not player.is_jumping


class TestDuck:

    def test_duck_lowers_top_and_keeps_feet(self, config, world):
        player = world.player
        physics.apply_duck(player, True, config, 1.0)

        assert player.is_ducking
        assert player.width == 70.0
        assert player.height == 40.0
        assert player.bottom == GROUND_LINE
        assert player.top == GROUND_LINE - 40.0

    def test_duck_while_airborne_is_noop(self, config, world):
        player = world.player
        physics.try_jump(player, config, 1.0)
        physics.step_player(player, False, config, world.viewport, 1.0)

        physics.apply_duck(player, True, config, 1.0)
        assert not player.is_ducking
        assert player.height == 70.0

    def test_held_duck_applies_on_landing(self, config, world):
        player = world.player
        physics.try_jump(player, config, 1.0)
        while player.is_jumping:
            assert not player.is_ducking
            physics.step_player(player, True, config, world.viewport, 1.0)
        assert player.is_ducking

    def test_run_phase_only_advances_while_running(self, config, world):
        player = world.player
        physics.step_player(player, False, config, world.viewport, 1.0)
        assert player.run_phase == 1

        physics.step_player(player, True, config, world.viewport, 1.0)
        assert player.run_phase == 1

    def test_run_phase_wraps(self, config, world):
        player = world.player
        for _ in range(config.run_animation_period):
            physics.step_player(player, False, config, world.viewport, 1.0)
        assert player.run_phase == 0


class TestScrollWorld:

    def test_pass_on_tick_193(self, config, world):
        obstacle = cactus(1180)
        world.obstacles.append(obstacle)

        for tick in range(1, 193):
            assert physics.scroll_world(world, 6.0, config) == []
            assert not obstacle.passed, f"passed early on tick {tick}"

        assert physics.scroll_world(world, 6.0, config) == [obstacle]
        assert obstacle.passed

    def test_pass_reported_once(self, config, world):
        obstacle = cactus(20)
        world.obstacles.append(obstacle)

        assert physics.scroll_world(world, 6.0, config) == [obstacle]
        assert physics.scroll_world(world, 6.0, config) == []

    def test_everything_moves_by_speed(self, config, world):
        world.obstacles.append(cactus(900))
        world.obstacles.append(cactus(700, ObstacleKind.TALL_CACTUS))
        world.coins.append(coin(800))

        physics.scroll_world(world, 7.5, config)

        assert [o.x for o in world.obstacles] == [892.5, 692.5]
        assert world.coins[0].x == 792.5

    def test_prune(self, world):
        world.obstacles.extend([cactus(-25), cactus(-24)])
        collected = coin(500)
        collected.collected = True
        world.coins.extend([collected, coin(-20), coin(300)])

        physics.prune_world(world)

        assert [o.x for o in world.obstacles] == [-24]
        assert [c.x for c in world.coins] == [300]


class TestScenery:

    def test_build(self, config, world):
        physics.build_scenery(world, SeededRandom(1), config)
        assert len(world.clouds) == config.cloud_count
        assert len(world.ground) == config.ground_segment_count
        assert all(g.y == GROUND_LINE for g in world.ground)

    def test_ground_wraps(self, config, world):
        physics.build_scenery(world, SeededRandom(1), config)
        span = config.ground_segment_count * config.ground_segment_spacing

        for _ in range(100):
            physics.scroll_ground(world, 6.0, config)

        assert all(-config.ground_segment_spacing <= g.x < span for g in world.ground)

    def test_falling_coins(self, config, world):
        physics.spawn_falling_coins(world, 4, SeededRandom(3), config)
        assert len(world.falling_coins) == 4
        assert all(c.velocity_y < 0 for c in world.falling_coins)

        for _ in range(200):
            physics.step_falling_coins(world, config)
        assert world.falling_coins == []
