"""Per-tick motion: player physics, world scrolling and scenery.

All constants come from ``GameConfig`` and are multiplied by the runtime
``scale`` so gameplay feels the same at every viewport size.
"""

import logging
from typing import List

from dinorun.config.settings import GameConfig
from dinorun.core.random_source import RandomSource, uniform
from dinorun.engine.entities import (
    Cloud,
    FallingCoin,
    GroundSegment,
    Obstacle,
    ObstacleKind,
    Player,
    Viewport,
    World,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Geometry
# =============================================================================

def ground_line(config: GameConfig, viewport: Viewport, scale: float) -> float:
    """Y coordinate of the ground surface."""
    return viewport.height - config.ground_margin * scale


def ground_y(config: GameConfig, viewport: Viewport, scale: float) -> float:
    """Resting ``y`` of the player (top of the standing box)."""
    return ground_line(config, viewport, scale) - config.player_height * scale


# =============================================================================
# Player
# =============================================================================

def new_player(config: GameConfig, viewport: Viewport, scale: float) -> Player:
    """Create a player standing on the ground."""
    return Player(
        x=config.player_x * scale,
        y=ground_y(config, viewport, scale),
        width=config.player_width * scale,
        height=config.player_height * scale,
        standing_height=config.player_height * scale,
    )


def place_player(player: Player, config: GameConfig, viewport: Viewport, scale: float) -> None:
    """Put the player back on the ground with all motion and flags cleared."""
    player.x = config.player_x * scale
    player.y = ground_y(config, viewport, scale)
    player.width = config.player_width * scale
    player.height = config.player_height * scale
    player.standing_height = config.player_height * scale
    player.velocity_y = 0.0
    player.is_jumping = False
    player.is_ducking = False
    player.run_phase = 0


def try_jump(player: Player, config: GameConfig, scale: float) -> bool:
    """Start a jump if the player is on the ground and not ducking.

    Returns:
        True if the jump started
    """
    if player.is_jumping or player.is_ducking:
        return False
    player.velocity_y = config.jump_impulse * scale
    player.is_jumping = True
    return True


def apply_duck(player: Player, duck_held: bool, config: GameConfig, scale: float) -> None:
    """Sync the ducking flag and hitbox with the held duck level.

    Ducking is only honored on the ground; a held duck starts as soon as
    the player lands.
    """
    player.is_ducking = duck_held and not player.is_jumping
    if player.is_ducking:
        player.width = config.duck_width * scale
        player.height = config.duck_height * scale
    else:
        player.width = config.player_width * scale
        player.height = config.player_height * scale


def step_player(
    player: Player,
    duck_held: bool,
    config: GameConfig,
    viewport: Viewport,
    scale: float,
) -> None:
    """Advance the player by one tick."""
    if player.is_jumping:
        player.y += player.velocity_y
        player.velocity_y += config.gravity * scale

        rest = ground_y(config, viewport, scale)
        if player.y >= rest:
            player.y = rest
            player.velocity_y = 0.0
            player.is_jumping = False

    apply_duck(player, duck_held, config, scale)

    if not player.is_jumping and not player.is_ducking:
        player.run_phase = (player.run_phase + 1) % config.run_animation_period


# =============================================================================
# World scrolling
# =============================================================================

def scroll_world(world: World, speed: float, config: GameConfig) -> List[Obstacle]:
    """Scroll obstacles and coins left by ``speed`` and flag pass events.

    Every collidable entity moves by the same ``speed``. Score changes
    caused by the returned passes must not alter the distance scrolled
    on this tick.

    Returns:
        Obstacles whose ``passed`` flag flipped on this tick
    """
    passed: List[Obstacle] = []
    player_x = world.player.x

    for obstacle in world.obstacles:
        obstacle.x -= speed
        if obstacle.kind is ObstacleKind.FLYING:
            obstacle.animation_phase = (obstacle.animation_phase + 1) % config.flying_animation_period
        if not obstacle.passed and obstacle.right < player_x:
            obstacle.passed = True
            passed.append(obstacle)

    for coin in world.coins:
        coin.x -= speed
        coin.animation_phase = (coin.animation_phase + 1) % config.coin_animation_period

    return passed


def prune_world(world: World) -> None:
    """Drop entities fully off the left edge and coins already collected."""
    world.obstacles = [o for o in world.obstacles if o.right > 0]
    world.coins = [c for c in world.coins if not c.collected and c.right > 0]


# =============================================================================
# Scenery
# =============================================================================

def _cloud_y(rng: RandomSource, viewport: Viewport, scale: float) -> float:
    return uniform(rng, 0.0, viewport.height * 0.2) + 20 * scale


def build_scenery(world: World, rng: RandomSource, config: GameConfig) -> None:
    """Create clouds and ground dashes for the current viewport."""
    viewport, scale = world.viewport, world.scale

    world.clouds = [
        Cloud(
            x=uniform(rng, viewport.width * 0.2, viewport.width),
            y=_cloud_y(rng, viewport, scale),
            width=60 * scale,
            height=20 * scale,
            speed=uniform(rng, 0.2, 0.7) * scale,
        )
        for _ in range(config.cloud_count)
    ]

    line = ground_line(config, viewport, scale)
    world.ground = [
        GroundSegment(x=i * config.ground_segment_spacing * scale, y=line)
        for i in range(config.ground_segment_count)
    ]


def drift_clouds(world: World, rng: RandomSource) -> None:
    """Move clouds by their own speed, respawning them off the right edge."""
    viewport, scale = world.viewport, world.scale
    for cloud in world.clouds:
        cloud.x -= cloud.speed
        if cloud.x < -100 * scale:
            cloud.x = viewport.width + uniform(rng, 0.0, 200 * scale)
            cloud.y = _cloud_y(rng, viewport, scale)


def scroll_ground(world: World, speed: float, config: GameConfig) -> None:
    """Scroll ground dashes, wrapping them back past the right edge."""
    spacing = config.ground_segment_spacing * world.scale
    span = spacing * len(world.ground)
    for segment in world.ground:
        segment.x -= speed
        if segment.x < -spacing:
            segment.x += span


# =============================================================================
# Death animation
# =============================================================================

def spawn_falling_coins(world: World, count: int, rng: RandomSource, config: GameConfig) -> None:
    """Burst one falling coin per coin collected during the run."""
    player, scale = world.player, world.scale
    for _ in range(count):
        world.falling_coins.append(FallingCoin(
            x=player.x + uniform(rng, -20.0, 20.0) * scale,
            y=player.y + 35 * scale,
            velocity_x=uniform(rng, -2.0, 2.0) * scale,
            velocity_y=-uniform(rng, 4.0, 12.0) * scale,
            rotation=0.0,
            rotation_speed=uniform(rng, -0.15, 0.15),
            size=config.falling_coin_size * scale,
        ))


def step_falling_coins(world: World, config: GameConfig) -> None:
    """Advance falling coins and drop the ones below the viewport."""
    gravity = config.falling_coin_gravity * world.scale
    for coin in world.falling_coins:
        coin.velocity_y += gravity
        coin.x += coin.velocity_x
        coin.y += coin.velocity_y
        coin.rotation += coin.rotation_speed
    world.falling_coins = [c for c in world.falling_coins if c.y < world.viewport.height]
