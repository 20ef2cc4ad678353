"""
Main entry point for dinorun.

Launches the pygame simulator window, or with ``--headless`` plays a run
with a simple autopilot and logs the result.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, Tuple

from dinorun.config.settings import Settings, get_settings
from dinorun.core.random_source import SeededRandom
from dinorun.core.state import GamePhase
from dinorun.engine.entities import ObstacleKind
from dinorun.engine.simulation import GameSimulation
from dinorun.engine.snapshot import GameSnapshot


def setup_logging(debug: bool = False, log_file: Optional[Path] = None) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        # Truncate on each run for fresh logs
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Spawn logging is per-tick; keep it out of normal debug sessions
    logging.getLogger("dinorun.engine.spawner").setLevel(logging.INFO)
    logging.getLogger("dinorun.core.events").setLevel(logging.INFO)


def autopilot(snapshot: GameSnapshot) -> Tuple[bool, bool]:
    """Decide (jump, duck) for the next tick from a snapshot."""
    player = snapshot.player
    lookahead = snapshot.game_speed * 14

    for obstacle in snapshot.obstacles:
        gap = obstacle.x - (player.x + player.width)
        if obstacle.passed or gap < 0 or gap > lookahead:
            continue
        if obstacle.kind is ObstacleKind.FLYING:
            # High birds clear a standing player; low ones need a duck
            low = obstacle.y + obstacle.height > player.y
            return False, low
        return True, False

    return False, False


def run_headless(settings: Settings, max_frames: int) -> GameSnapshot:
    """Play a single run without a window."""
    logger = logging.getLogger(__name__)

    sim = GameSimulation(
        config=settings.game,
        rng=SeededRandom(settings.seed),
        initial_high_score=settings.initial_high_score,
    )
    sim.jump()

    snapshot = sim.snapshot()
    for _ in range(max_frames):
        if snapshot.phase is GamePhase.OVER:
            break
        if snapshot.phase is GamePhase.PLAYING:
            jump, duck = autopilot(snapshot)
            sim.set_ducking(duck)
            if jump:
                sim.jump()
        snapshot = sim.tick()

    logger.info(
        f"Headless run finished in {snapshot.phase.name}: "
        f"score {snapshot.score}, coins {snapshot.coin_count}, "
        f"frames {snapshot.frame_count}, high score candidate "
        f"{sim.current_high_score_candidate()}"
    )
    return snapshot


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Endless runner simulation")
    parser.add_argument("--headless", action="store_true", help="Run without a window")
    parser.add_argument("--frames", type=int, default=3600, help="Tick limit for headless runs")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for spawns")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point."""
    args = parse_args(argv)

    settings = get_settings()
    updates = {}
    if args.seed is not None:
        updates["seed"] = args.seed
    if args.debug:
        updates["debug"] = True
    if updates:
        settings = settings.model_copy(update=updates)

    setup_logging(settings.debug, settings.log_file)
    logger = logging.getLogger(__name__)

    try:
        if args.headless:
            run_headless(settings, args.frames)
        else:
            from dinorun.simulator.window import SimulatorWindow, WindowConfig

            simulation = GameSimulation(
                config=settings.game,
                rng=SeededRandom(settings.seed),
                initial_high_score=settings.initial_high_score,
            )
            window = SimulatorWindow(WindowConfig.from_settings(settings), simulation)

            logger.info("Controls: SPACE/UP jump, DOWN duck, R restart, S screenshot, Q quit")
            asyncio.run(window.run())
    except KeyboardInterrupt:
        logger.info("Stopped by user")
    except Exception as e:
        logger.exception(f"dinorun error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
