"""
Random number capability shared by the entities of one simulation.

A Randomizer is created by the Simulator (or injected by the caller) and
handed to every entity that needs a draw. There is no module-level instance.
"""
from __future__ import annotations

from typing import Optional
import random


class Randomizer:
    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.seed = seed
        self._rng.seed(self.seed)

    def next_double(self) -> float:
        return self._rng.random()

    def next_boolean(self) -> bool:
        return self._rng.random() < 0.5

    def next_int(self, bound: int) -> int:
        """Uniform integer in [0, bound)."""
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")
        return self._rng.randrange(bound)
