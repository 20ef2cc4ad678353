"""Random number sources for spawn decisions.

The simulation never calls the ``random`` module directly. It draws from an
injected source so that a seeded stream reproduces a run exactly.
"""

import random
from typing import Iterable, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class RandomSource(Protocol):
    """Anything that yields uniform floats in ``[0.0, 1.0)``."""

    def random(self) -> float:
        ...


class SeededRandom:
    """RandomSource backed by a private ``random.Random`` stream."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def random(self) -> float:
        return self._rng.random()

    def reseed(self, seed: Optional[int] = None) -> None:
        """Restart the stream from a new seed."""
        self.seed = seed
        self._rng.seed(seed)


class ScriptedRandom:
    """RandomSource that replays a fixed list of values.

    Once the script is exhausted the ``fallback`` value is returned forever.
    Handy for forcing a particular spawn sequence.
    """

    def __init__(self, values: Iterable[float] = (), fallback: float = 0.999):
        self._values: List[float] = list(values)
        self._index = 0
        self.fallback = fallback

    def random(self) -> float:
        if self._index < len(self._values):
            value = self._values[self._index]
            self._index += 1
            return value
        return self.fallback

    def extend(self, values: Iterable[float]) -> None:
        self._values.extend(values)

    @property
    def remaining(self) -> int:
        return len(self._values) - self._index


def uniform(source: RandomSource, low: float, high: float) -> float:
    """Draw a float uniformly from ``[low, high)``."""
    return low + (high - low) * source.random()


def pick_index(source: RandomSource, count: int) -> int:
    """Draw an index uniformly from ``range(count)``."""
    return min(int(source.random() * count), count - 1)
