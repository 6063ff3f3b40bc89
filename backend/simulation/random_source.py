"""Bounded random sources standing in for sensor input."""

import random
from typing import Protocol


class RandomSource(Protocol):
    """Source of bounded random draws.

    The tick loop only ever asks for values inside explicit bounds, so a
    deterministic implementation can replace the real one in tests.
    """

    def next_in_range(self, low: float, high: float) -> float:
        """Uniform float in ``[low, high]``."""
        ...

    def next_int(self, low: int, high: int) -> int:
        """Uniform integer in ``[low, high]`` inclusive."""
        ...


class SeededRandomSource:
    """``random.Random`` backed source, optionally seeded for replay."""

    def __init__(self, seed: int | None = None) -> None:
        self.rng = random.Random(seed)

    def next_in_range(self, low: float, high: float) -> float:
        return self.rng.uniform(low, high)

    def next_int(self, low: int, high: int) -> int:
        return self.rng.randint(low, high)


class FixedRandomSource:
    """Deterministic source: always the same point in every range.

    ``fraction`` picks the position inside float ranges (0.0 = low,
    1.0 = high); ``step`` is returned for integer draws, clamped to the
    requested bounds.
    """

    def __init__(self, fraction: float = 0.5, step: int = 0) -> None:
        self.fraction = fraction
        self.step = step

    def next_in_range(self, low: float, high: float) -> float:
        return low + (high - low) * self.fraction

    def next_int(self, low: int, high: int) -> int:
        return max(low, min(high, self.step))
