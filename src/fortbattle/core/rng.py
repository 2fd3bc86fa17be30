"""Random source used by every battle formula."""
from __future__ import annotations

from random import Random
from typing import Protocol

import numpy as np


class RandomSource(Protocol):
    """Draws the battle formulas need; anything providing these can be injected."""

    def randint(self, a: int, b: int) -> int: ...

    def random(self) -> float: ...

    def uniform(self, a: float, b: float) -> float: ...

    def binomial(self, n: int, p: float) -> int: ...


class RNG:
    """Wrapper around random.Random plus a numpy generator for binomial sampling.

    The same seed drives both generators so seeded instances replay identically.
    ``RNG()`` without a seed draws its entropy from the OS.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._seed = seed
        self._random = Random(seed)
        self._generator = np.random.default_rng(seed)

    @property
    def seed(self) -> int | None:
        return self._seed

    def randint(self, a: int, b: int) -> int:
        """Return a random integer N such that a <= N <= b."""
        return self._random.randint(a, b)

    def random(self) -> float:
        """Return the next random floating point number in the range [0.0, 1.0)."""
        return self._random.random()

    def uniform(self, a: float, b: float) -> float:
        """Return a random floating point number N such that a <= N <= b."""
        return self._random.uniform(a, b)

    def binomial(self, n: int, p: float) -> int:
        """Return the number of successes out of ``n`` trials with probability ``p``."""
        if n < 0:
            raise ValueError("Binomial trial count must be non-negative.")
        if not 0.0 <= p <= 1.0:
            raise ValueError(f"Binomial probability {p} outside [0, 1].")
        return int(self._generator.binomial(n, p))


_default_rng: RNG | None = None


def default_rng() -> RNG:
    """Return the process-wide unseeded RNG."""
    global _default_rng
    if _default_rng is None:
        _default_rng = RNG()
    return _default_rng
