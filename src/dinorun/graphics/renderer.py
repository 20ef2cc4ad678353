"""Frame renderer for dinorun.

Turns a ``GameSnapshot`` into an RGB numpy buffer of shape
(height, width, 3). Purely a reader: it never touches the live simulation.
"""

import math
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from dinorun.core.state import GamePhase
from dinorun.engine.entities import ObstacleKind
from dinorun.engine.snapshot import GameSnapshot, ObstacleView, PlayerView
from dinorun.graphics.primitives import dim, draw_circle, draw_hline, draw_rect, draw_rotated_rect, fill


# Palette
SKY = (247, 247, 247)
CLOUD = (222, 222, 226)
GROUND = (139, 115, 85)
GROUND_TEXTURE = (107, 90, 69)
GROUND_DASH = (92, 74, 58)
PLAYER = (83, 83, 83)
PLAYER_DEAD = (170, 60, 60)
EYE_WHITE = (255, 255, 255)
EYE_PUPIL = (0, 0, 0)
CACTUS = (45, 80, 22)
CACTUS_DARK = (26, 48, 16)
BIRD = (139, 69, 19)
BEAK = (255, 107, 53)
COIN_GOLD = (255, 215, 0)
COIN_SHINE = (255, 237, 78)


class FrameRenderer:
    """Draws snapshots into frame buffers.

    A buffer is allocated per call unless one of the right shape is passed
    in, so hosts can reuse a single surface-backed array.
    """

    def render(
        self,
        snapshot: GameSnapshot,
        buffer: Optional[NDArray[np.uint8]] = None,
    ) -> NDArray[np.uint8]:
        width = int(snapshot.viewport.width)
        height = int(snapshot.viewport.height)
        if buffer is None or buffer.shape != (height, width, 3):
            buffer = np.zeros((height, width, 3), dtype=np.uint8)

        fill(buffer, SKY)
        self._render_clouds(buffer, snapshot)
        self._render_ground(buffer, snapshot)

        for coin in snapshot.coins:
            if coin.collected:
                continue
            bounce = math.sin(coin.animation_phase * 0.3) * 2 * snapshot.scale
            cx = int(coin.x + coin.width / 2)
            cy = int(coin.y + coin.height / 2 + bounce)
            radius = max(1, int(coin.width / 2))
            draw_circle(buffer, cx, cy, radius, COIN_GOLD)
            draw_circle(buffer, cx, cy, max(1, radius // 2), COIN_SHINE)

        for obstacle in snapshot.obstacles:
            self._render_obstacle(buffer, obstacle, snapshot.scale)

        if snapshot.phase in (GamePhase.DYING, GamePhase.OVER):
            self._render_dead_player(buffer, snapshot.player, snapshot.death_frame)
        else:
            self._render_player(buffer, snapshot.player, snapshot.scale)

        for coin in snapshot.falling_coins:
            draw_rotated_rect(buffer, coin.x, coin.y, coin.size, coin.size, coin.rotation, COIN_GOLD)
            draw_rotated_rect(buffer, coin.x, coin.y, coin.size / 1.5, coin.size / 1.5, coin.rotation, COIN_SHINE)

        if snapshot.phase is GamePhase.OVER:
            dim(buffer, 0.5)

        return buffer

    def _render_clouds(self, buffer: NDArray[np.uint8], snapshot: GameSnapshot) -> None:
        s = snapshot.scale
        for cloud in snapshot.clouds:
            x, y = int(cloud.x), int(cloud.y)
            draw_rect(buffer, x, y, int(20 * s), int(15 * s), CLOUD)
            draw_rect(buffer, x + int(15 * s), y - int(5 * s), int(20 * s), int(15 * s), CLOUD)
            draw_rect(buffer, x + int(30 * s), y, int(20 * s), int(15 * s), CLOUD)
            draw_rect(buffer, x + int(10 * s), y + int(10 * s), int(30 * s), int(10 * s), CLOUD)

    def _render_ground(self, buffer: NDArray[np.uint8], snapshot: GameSnapshot) -> None:
        s = snapshot.scale
        line = int(snapshot.ground_line)
        width = buffer.shape[1]

        draw_rect(buffer, 0, line, width, buffer.shape[0] - line, GROUND)
        step = max(1, int(30 * s))
        for x in range(0, width, step):
            draw_rect(buffer, x, line - 2, int(20 * s), 2, GROUND_TEXTURE)
        for segment in snapshot.ground:
            draw_hline(buffer, int(segment.x), int(segment.y), int(20 * s), GROUND_DASH, thickness=2)

    def _render_obstacle(self, buffer: NDArray[np.uint8], obstacle: ObstacleView, s: float) -> None:
        x, y = int(obstacle.x), int(obstacle.y)
        w, h = int(obstacle.width), int(obstacle.height)

        if obstacle.kind is ObstacleKind.FLYING:
            wing = int(-5 * s) if obstacle.animation_phase < 15 else 0
            draw_rect(buffer, x, y, w, h, BIRD)
            draw_rect(buffer, x - int(8 * s), y + wing, int(8 * s), int(15 * s), BIRD)
            draw_rect(buffer, x + w, y - wing, int(8 * s), int(15 * s), BIRD)
            draw_rect(buffer, x + w - int(5 * s), y + int(8 * s), int(5 * s), int(3 * s), BEAK)
            return

        # Cactus: trunk plus two arms, scaled to the obstacle box
        trunk_w = max(1, w // 3)
        trunk_x = x + (w - trunk_w) // 2
        draw_rect(buffer, trunk_x, y, trunk_w, h, CACTUS)
        arm_h = max(1, h // 6)
        draw_rect(buffer, x, y + h // 3, trunk_x - x, arm_h, CACTUS)
        draw_rect(buffer, trunk_x + trunk_w, y + h // 2, x + w - trunk_x - trunk_w, arm_h, CACTUS)
        draw_rect(buffer, trunk_x + 1, y + h // 5, 1, 2, CACTUS_DARK)

    def _render_player(self, buffer: NDArray[np.uint8], player: PlayerView, s: float) -> None:
        x, top = int(player.x), int(player.top)
        w, h = int(player.width), int(player.height)
        draw_rect(buffer, x, top, w, h, PLAYER)

        # Legs alternate with the run phase while running
        if not player.is_jumping and not player.is_ducking:
            offset = 0 if player.run_phase < 10 else int(5 * s)
            leg_y = int(player.bottom) - int(15 * s)
            draw_rect(buffer, x + int(10 * s) + offset, leg_y, int(10 * s), int(15 * s), PLAYER)
            draw_rect(buffer, x + int(30 * s) + offset, leg_y, int(10 * s), int(15 * s), PLAYER)

        eye = max(1, int(6 * s))
        eye_x = x + w - int(20 * s)
        eye_y = top + int(8 * s)
        draw_rect(buffer, eye_x, eye_y, eye, eye, EYE_WHITE)
        draw_rect(buffer, eye_x + eye // 3, eye_y + eye // 3, max(1, eye // 2), max(1, eye // 2), EYE_PUPIL)

    def _render_dead_player(self, buffer: NDArray[np.uint8], player: PlayerView, death_frame: int) -> None:
        # Tips over backwards about the center of its box
        cx = player.x + player.width / 2
        cy = player.top + player.height / 2
        draw_rotated_rect(buffer, cx, cy, player.width, player.height, death_frame * 0.1, PLAYER_DEAD)
