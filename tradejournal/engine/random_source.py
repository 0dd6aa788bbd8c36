"""Uniform random sources for the daily simulation.

The simulation only needs ``next_uniform()``; tests swap in a seeded or
fixed-sequence source to make projections reproducible.
"""

import random
from typing import Optional, Protocol, Sequence


class UniformSource(Protocol):
    """Source of floats uniformly distributed in [0, 1)."""

    def next_uniform(self) -> float:
        ...


class SystemRandomSource:
    """Non-deterministic source backed by the operating system."""

    def __init__(self) -> None:
        self._rng = random.SystemRandom()

    def next_uniform(self) -> float:
        return self._rng.random()


class SeededRandomSource:
    """Reproducible pseudo-random source."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def next_uniform(self) -> float:
        return self._rng.random()


class SequenceRandomSource:
    """Replays a fixed sequence of values, cycling when exhausted."""

    def __init__(self, values: Sequence[float]):
        if not values:
            raise ValueError("SequenceRandomSource needs at least one value")
        self._values = list(values)
        self._position = 0

    def next_uniform(self) -> float:
        value = self._values[self._position % len(self._values)]
        self._position += 1
        return value
