"""Immutable probability distributions sampled with an explicit random source.

Each sampler validates its parameters on construction and never stores a
generator; callers thread a ``random.Random`` through every ``sample`` call so
that seeded runs are reproducible.
"""
from __future__ import annotations

import math
import random
from dataclasses import dataclass

from .config import check_count, check_probability, check_rate

# exp(-rate) stays well clear of underflow below this chunk size.
_POISSON_CHUNK = 30.0


@dataclass(frozen=True)
class Bernoulli:
    p: float

    def __post_init__(self) -> None:
        check_probability("p", self.p)

    def sample(self, rng: random.Random) -> bool:
        return rng.random() < self.p


@dataclass(frozen=True)
class Binomial:
    trials: int
    p: float

    def __post_init__(self) -> None:
        check_count("trials", self.trials)
        check_probability("p", self.p)

    def sample(self, rng: random.Random) -> int:
        return sum(1 for _ in range(self.trials) if rng.random() < self.p)

    @property
    def mean(self) -> float:
        return self.trials * self.p


@dataclass(frozen=True)
class Poisson:
    rate: float

    def __post_init__(self) -> None:
        check_rate("rate", self.rate)

    def sample(self, rng: random.Random) -> int:
        remaining = self.rate
        total = 0
        while remaining > 0:
            lam = min(remaining, _POISSON_CHUNK)
            total += self._knuth(lam, rng)
            remaining -= lam
        return total

    @staticmethod
    def _knuth(lam: float, rng: random.Random) -> int:
        limit = math.exp(-lam)
        k = 0
        p = 1.0
        while p > limit:
            k += 1
            p *= rng.random()
        return k - 1


@dataclass(frozen=True)
class UniformFloor:
    """Uniform distribution over floor indices ``[0, num_floors)``."""

    num_floors: int

    def __post_init__(self) -> None:
        check_count("num_floors", self.num_floors, minimum=1)

    def sample(self, rng: random.Random) -> int:
        return rng.randrange(self.num_floors)
