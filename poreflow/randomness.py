"""Small random helpers used when perturbing tube radii."""

from __future__ import annotations

import random
import time

RAND_MAX = 2**31 - 1


class RandomSource:
    """Integer and decimal-fraction draws from a seeded generator."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(int(time.time()) if seed is None else seed)

    def integer(self, *args: int) -> int:
        """``integer()`` in [0, RAND_MAX], ``integer(max)`` in [0, max),
        ``integer(min, max)`` in [min, max)."""
        if not args:
            return self._rng.randint(0, RAND_MAX)
        if len(args) == 1:
            (upper,) = args
            if upper <= 0:
                raise ValueError(f"upper bound must be positive, got {upper}")
            return self.integer() % upper
        if len(args) == 2:
            low, high = args
            return self.integer(high - low) + low
        raise TypeError(f"integer() takes at most 2 arguments, got {len(args)}")

    def fraction(self, decimal_shift: float) -> float:
        """A signed number d.dd with digits 1-9, divided by ``decimal_shift``."""
        value = sum(self.integer(1, 10) / 10**i for i in range(3))
        if self.integer(2):
            value = -value
        return value / decimal_shift