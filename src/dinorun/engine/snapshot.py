"""Immutable views of the simulation for renderers and overlays.

A ``GameSnapshot`` is built after every tick. It copies values out of the
live world, so holding on to one never exposes state the simulation will
mutate later.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from dinorun.core.state import GamePhase
from dinorun.engine.entities import ObstacleKind, RunState, Viewport, World


@dataclass(frozen=True)
class PlayerView:
    x: float
    y: float
    width: float
    height: float
    top: float
    bottom: float
    velocity_y: float
    is_jumping: bool
    is_ducking: bool
    run_phase: int


@dataclass(frozen=True)
class ObstacleView:
    kind: ObstacleKind
    x: float
    y: float
    width: float
    height: float
    passed: bool
    animation_phase: int


@dataclass(frozen=True)
class CoinView:
    x: float
    y: float
    width: float
    height: float
    collected: bool
    animation_phase: int


@dataclass(frozen=True)
class CloudView:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class GroundView:
    x: float
    y: float


@dataclass(frozen=True)
class FallingCoinView:
    x: float
    y: float
    rotation: float
    size: float


@dataclass(frozen=True)
class GameSnapshot:
    """Everything a renderer needs for one frame."""
    phase: GamePhase
    score: int
    coin_count: int
    frame_count: int
    game_speed: float
    death_frame: int
    high_score: int
    high_score_candidate: Optional[int]
    viewport: Viewport
    scale: float
    ground_line: float
    player: PlayerView
    obstacles: Tuple[ObstacleView, ...]
    coins: Tuple[CoinView, ...]
    clouds: Tuple[CloudView, ...]
    ground: Tuple[GroundView, ...]
    falling_coins: Tuple[FallingCoinView, ...]

    @property
    def is_over(self) -> bool:
        return self.phase is GamePhase.OVER


def take_snapshot(
    state: RunState,
    world: World,
    ground_line: float,
    high_score: int,
    high_score_candidate: Optional[int],
) -> GameSnapshot:
    """Copy the live state into a frozen snapshot."""
    p = world.player
    return GameSnapshot(
        phase=state.phase,
        score=state.score,
        coin_count=state.coin_count,
        frame_count=state.frame_count,
        game_speed=state.game_speed,
        death_frame=state.death_frame,
        high_score=high_score,
        high_score_candidate=high_score_candidate,
        viewport=world.viewport,
        scale=world.scale,
        ground_line=ground_line,
        player=PlayerView(
            x=p.x, y=p.y, width=p.width, height=p.height,
            top=p.top, bottom=p.bottom, velocity_y=p.velocity_y,
            is_jumping=p.is_jumping, is_ducking=p.is_ducking, run_phase=p.run_phase,
        ),
        obstacles=tuple(
            ObstacleView(o.kind, o.x, o.y, o.width, o.height, o.passed, o.animation_phase)
            for o in world.obstacles
        ),
        coins=tuple(
            CoinView(c.x, c.y, c.width, c.height, c.collected, c.animation_phase)
            for c in world.coins
        ),
        clouds=tuple(CloudView(c.x, c.y, c.width, c.height) for c in world.clouds),
        ground=tuple(GroundView(g.x, g.y) for g in world.ground),
        falling_coins=tuple(
            FallingCoinView(f.x, f.y, f.rotation, f.size) for f in world.falling_coins
        ),
    )
