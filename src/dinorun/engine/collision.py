"""Axis-aligned collision checks between the player and the world."""

from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from dinorun.engine.entities import Coin, Obstacle, Player


class Box(Protocol):
    """Anything with edges."""

    @property
    def left(self) -> float: ...

    @property
    def right(self) -> float: ...

    @property
    def top(self) -> float: ...

    @property
    def bottom(self) -> float: ...


def overlaps(a: Box, b: Box) -> bool:
    """Strict AABB overlap. Boxes that only touch do not collide."""
    return (
        a.left < b.right
        and a.right > b.left
        and a.top < b.bottom
        and a.bottom > b.top
    )


@dataclass
class CollisionResult:
    """What the player touched on one tick."""
    obstacle: Optional[Obstacle] = None
    coins: List[Coin] = field(default_factory=list)

    @property
    def hit(self) -> bool:
        return self.obstacle is not None


class CollisionDetector:
    """Tests the player against every active obstacle and coin."""

    def first_obstacle_hit(self, player: Player, obstacles: List[Obstacle]) -> Optional[Obstacle]:
        for obstacle in obstacles:
            if overlaps(player, obstacle):
                return obstacle
        return None

    def collect_coins(self, player: Player, coins: List[Coin]) -> List[Coin]:
        """Mark every uncollected coin under the player as collected."""
        collected = []
        for coin in coins:
            if not coin.collected and overlaps(player, coin):
                coin.collected = True
                collected.append(coin)
        return collected

    def check(self, player: Player, obstacles: List[Obstacle], coins: List[Coin]) -> CollisionResult:
        """Run both checks. A fatal obstacle hit skips coin collection."""
        obstacle = self.first_obstacle_hit(player, obstacles)
        if obstacle is not None:
            return CollisionResult(obstacle=obstacle)
        return CollisionResult(coins=self.collect_coins(player, coins))
