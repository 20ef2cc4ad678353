"""Game simulation - orchestrates one player session.

``GameSimulation`` owns the world, the run counters and the phase machine.
Hosts drive it with four entry points (``jump``, ``set_ducking``,
``restart`` and ``tick``) and read it back through immutable snapshots and
domain events.

Usage:
    sim = GameSimulation(rng=SeededRandom(42), initial_high_score=120)
    sim.subscribe(GameEventType.GAME_OVER, save_high_score)

    # In the frame loop:
    sim.jump()                      # on SPACE / tap
    sim.set_ducking(down_held)      # level of the duck key
    snapshot = sim.tick(Viewport(1200, 400), scale=1.0)
    renderer.render(snapshot)
"""

import logging
from typing import Any, Callable, Mapping, Optional, Tuple, Union

from dinorun.config.settings import ConfigurationError, GameConfig, load_game_config
from dinorun.core.events import Event, EventBus, GameEventType
from dinorun.core.random_source import RandomSource, SeededRandom
from dinorun.core.state import GamePhase, PhaseMachine
from dinorun.engine import physics
from dinorun.engine.collision import CollisionDetector
from dinorun.engine.entities import (
    Obstacle,
    Player,
    RunState,
    Viewport,
    World,
    clamp_scale,
)
from dinorun.engine.scoring import ScoreKeeper
from dinorun.engine.snapshot import GameSnapshot, take_snapshot
from dinorun.engine.spawner import SpawnPolicy

logger = logging.getLogger(__name__)


DEFAULT_VIEWPORT = Viewport(1200, 400)

ConfigLike = Union[GameConfig, Mapping[str, Any], None]
ViewportLike = Union[Viewport, Tuple[float, float]]


def _resolve_config(config: ConfigLike) -> GameConfig:
    if config is None:
        return GameConfig()
    if isinstance(config, GameConfig):
        return config
    if isinstance(config, Mapping):
        return load_game_config(config)
    raise ConfigurationError(f"Unsupported configuration object: {type(config).__name__}")


def _as_viewport(viewport: ViewportLike) -> Viewport:
    if isinstance(viewport, Viewport):
        return viewport
    width, height = viewport
    return Viewport(float(width), float(height))


class GameSimulation:
    """Endless-runner simulation for a single player.

    Args:
        config: GameConfig, or a mapping of overrides validated into one
        rng: Random source for spawn decisions
        scenery_rng: Random source for cosmetic effects (clouds, falling
            coins), kept apart so scenery never shifts the spawn stream
        initial_high_score: Best score from earlier sessions
        viewport: Initial play area
        scale: Initial scale factor
        event_bus: Bus to publish domain events on

    Raises:
        ConfigurationError: If configuration values are out of range
    """

    def __init__(
        self,
        config: ConfigLike = None,
        rng: Optional[RandomSource] = None,
        scenery_rng: Optional[RandomSource] = None,
        initial_high_score: int = 0,
        viewport: ViewportLike = DEFAULT_VIEWPORT,
        scale: float = 1.0,
        event_bus: Optional[EventBus] = None,
    ):
        self.config = _resolve_config(config)
        if isinstance(initial_high_score, bool) or not isinstance(initial_high_score, int):
            raise ConfigurationError(f"initial_high_score must be an int, got {initial_high_score!r}")
        if initial_high_score < 0:
            raise ConfigurationError(f"initial_high_score must be >= 0, got {initial_high_score}")

        self.rng = rng if rng is not None else SeededRandom()
        self.scenery_rng = scenery_rng if scenery_rng is not None else SeededRandom(0)
        self.events = event_bus if event_bus is not None else EventBus()

        self._phases = PhaseMachine()
        self._phases.add_listener(self._on_phase_changed)

        self._scores = ScoreKeeper(self.config)
        self._spawner = SpawnPolicy(self.config, self.rng)
        self._collisions = CollisionDetector()

        vp = _as_viewport(viewport).clamped()
        scale = clamp_scale(scale)
        self._world = World(
            player=physics.new_player(self.config, vp, scale),
            viewport=vp,
            scale=scale,
        )
        physics.build_scenery(self._world, self.scenery_rng, self.config)

        self._state = RunState()
        self._scores.reset(self._state, scale)

        self._high_score = initial_high_score
        self._high_score_candidate: Optional[int] = None
        self._duck_held = False

        logger.info(f"GameSimulation created ({vp.width:.0f}x{vp.height:.0f} @ {scale:.2f})")

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def phase(self) -> GamePhase:
        return self._phases.phase

    @property
    def score(self) -> int:
        return self._state.score

    @property
    def coin_count(self) -> int:
        return self._state.coin_count

    @property
    def frame_count(self) -> int:
        return self._state.frame_count

    @property
    def game_speed(self) -> float:
        return self._state.game_speed

    @property
    def high_score(self) -> int:
        """Best score seen so far, including finished runs of this session."""
        return self._high_score

    @property
    def player(self) -> Player:
        return self._world.player

    @property
    def world(self) -> World:
        """Live world. Owned by the simulation; renderers use ``snapshot()``."""
        return self._world

    @property
    def ground_y(self) -> float:
        """Resting ``y`` of the player for the current viewport."""
        return physics.ground_y(self.config, self._world.viewport, self._world.scale)

    def current_high_score_candidate(self) -> Optional[int]:
        """High score to persist once a run is over, else None."""
        if self.phase is GamePhase.OVER:
            return self._high_score_candidate
        return None

    def snapshot(self) -> GameSnapshot:
        """Immutable view of the current state."""
        world = self._world
        return take_snapshot(
            self._state,
            world,
            ground_line=physics.ground_line(self.config, world.viewport, world.scale),
            high_score=self._high_score,
            high_score_candidate=self.current_high_score_candidate(),
        )

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------

    def subscribe(self, event_type: GameEventType, handler: Callable[[Event], None]) -> Callable[[], None]:
        """Subscribe to a domain event. Returns an unsubscribe function."""
        return self.events.subscribe(event_type, handler)

    def on_obstacle_passed(self, handler: Callable[[Event], None]) -> Callable[[], None]:
        return self.subscribe(GameEventType.OBSTACLE_PASSED, handler)

    def on_coin_collected(self, handler: Callable[[Event], None]) -> Callable[[], None]:
        return self.subscribe(GameEventType.COIN_COLLECTED, handler)

    def on_death(self, handler: Callable[[Event], None]) -> Callable[[], None]:
        return self.subscribe(GameEventType.DEATH, handler)

    def on_game_over(self, handler: Callable[[Event], None]) -> Callable[[], None]:
        return self.subscribe(GameEventType.GAME_OVER, handler)

    def _emit(self, event_type: GameEventType, **data: Any) -> None:
        self.events.emit(Event(event_type, data=data))

    def _on_phase_changed(self, old: GamePhase, new: GamePhase) -> None:
        self._state.phase = new
        self._emit(GameEventType.PHASE_CHANGED, old=old, new=new)

    # -------------------------------------------------------------------------
    # Intents
    # -------------------------------------------------------------------------

    def jump(self) -> None:
        """Jump intent. Starts or restarts a run outside of PLAYING."""
        phase = self.phase
        if phase in (GamePhase.WAITING, GamePhase.OVER):
            self._start_run()
        elif phase is GamePhase.PLAYING:
            if not physics.try_jump(self._world.player, self.config, self._world.scale):
                logger.debug("Jump ignored: airborne or ducking")
        else:
            logger.debug(f"Jump ignored in {phase.name}")

    def set_ducking(self, ducking: bool) -> None:
        """Duck level intent. Held ducks take effect once on the ground."""
        if self.phase is not GamePhase.PLAYING:
            logger.debug(f"Duck ignored in {self.phase.name}")
            return
        self._duck_held = bool(ducking)
        physics.apply_duck(self._world.player, self._duck_held, self.config, self._world.scale)

    def restart(self) -> None:
        """Explicit restart request."""
        if self.phase in (GamePhase.WAITING, GamePhase.OVER):
            self._start_run()
        else:
            logger.debug(f"Restart ignored in {self.phase.name}")

    # -------------------------------------------------------------------------
    # Tick
    # -------------------------------------------------------------------------

    def tick(self, viewport: Optional[ViewportLike] = None, scale: Optional[float] = None) -> GameSnapshot:
        """Advance the simulation by one logical frame.

        Args:
            viewport: Current play area (defaults to the last one seen)
            scale: Current scale factor (defaults to the last one seen)

        Returns:
            Snapshot of the state after this tick
        """
        world = self._world
        vp = _as_viewport(viewport).clamped() if viewport is not None else world.viewport
        new_scale = clamp_scale(scale) if scale is not None else world.scale
        if vp != world.viewport or new_scale != world.scale:
            self._resize(vp, new_scale)

        phase = self.phase
        if phase is GamePhase.WAITING:
            physics.drift_clouds(world, self.scenery_rng)
        elif phase is GamePhase.PLAYING:
            self._tick_playing()
        elif phase is GamePhase.DYING:
            self._tick_dying()

        return self.snapshot()

    def _tick_playing(self) -> None:
        state, world, cfg = self._state, self._world, self.config
        viewport, scale = world.viewport, world.scale

        state.frame_count += 1
        physics.step_player(world.player, self._duck_held, cfg, viewport, scale)

        obstacle = self._spawner.maybe_spawn_obstacle(state.frame_count, viewport, scale)
        if obstacle is not None:
            world.obstacles.append(obstacle)
        coin = self._spawner.maybe_spawn_coin(state.frame_count, viewport, scale)
        if coin is not None:
            world.coins.append(coin)

        speed = state.game_speed
        for passed in physics.scroll_world(world, speed, cfg):
            sped_up = self._scores.record_pass(state, scale)
            self._emit(GameEventType.OBSTACLE_PASSED, kind=passed.kind, score=state.score)
            if sped_up:
                self._emit(
                    GameEventType.SPEED_INCREASED,
                    game_speed=state.game_speed,
                    speed_level=state.speed_level,
                )
        physics.prune_world(world)

        physics.drift_clouds(world, self.scenery_rng)
        physics.scroll_ground(world, speed, cfg)

        result = self._collisions.check(world.player, world.obstacles, world.coins)
        if result.hit:
            self._die(result.obstacle)
            return
        for _ in result.coins:
            self._scores.record_coin(state)
            self._emit(GameEventType.COIN_COLLECTED, coin_count=state.coin_count, score=state.score)

    def _tick_dying(self) -> None:
        self._state.death_frame += 1
        physics.step_falling_coins(self._world, self.config)
        if self._state.death_frame >= self.config.death_animation_frames:
            self._finish_run()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def _start_run(self) -> None:
        world = self._world
        self._scores.reset(self._state, world.scale)
        world.obstacles.clear()
        world.coins.clear()
        world.falling_coins.clear()
        physics.place_player(world.player, self.config, world.viewport, world.scale)
        self._duck_held = False
        self._high_score_candidate = None

        if self._phases.transition(GamePhase.PLAYING):
            logger.info(f"Run started (high score {self._high_score})")
            self._emit(GameEventType.RUN_STARTED, high_score=self._high_score)

    def _die(self, obstacle: Obstacle) -> None:
        state = self._state
        state.death_frame = 0
        physics.spawn_falling_coins(self._world, state.coin_count, self.scenery_rng, self.config)
        self._phases.transition(GamePhase.DYING)

        logger.info(f"Hit {obstacle.kind.value} at frame {state.frame_count}, score {state.score}")
        self._emit(
            GameEventType.DEATH,
            kind=obstacle.kind,
            score=state.score,
            coin_count=state.coin_count,
        )

    def _finish_run(self) -> None:
        state = self._state
        is_record = state.score > self._high_score
        if is_record:
            self._high_score = state.score
        self._high_score_candidate = self._high_score
        self._phases.transition(GamePhase.OVER)

        logger.info(
            f"Game over: score {state.score}, coins {state.coin_count}"
            + (" (new high score)" if is_record else "")
        )
        self._emit(
            GameEventType.GAME_OVER,
            score=state.score,
            coin_count=state.coin_count,
            high_score=self._high_score,
            new_high_score=is_record,
        )

    def _resize(self, viewport: Viewport, scale: float) -> None:
        """Absorb a viewport change by rebuilding the world around the player."""
        world = self._world
        logger.info(
            f"Viewport changed to {viewport.width:.0f}x{viewport.height:.0f} @ {scale:.2f}"
        )
        world.viewport = viewport
        world.scale = scale
        world.obstacles.clear()
        world.coins.clear()
        world.falling_coins.clear()
        physics.place_player(world.player, self.config, viewport, scale)
        if self.phase is GamePhase.PLAYING:
            physics.apply_duck(world.player, self._duck_held, self.config, scale)
        physics.build_scenery(world, self.scenery_rng, self.config)
        self._scores.rescale(self._state, scale)
