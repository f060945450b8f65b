"""
Providers deciding who starts a new game.

A turn seed is any zero-argument callable returning an int. Only its parity is used: even -> X starts, odd -> O starts.
"""

import random
import time
from typing import Callable, Optional

from src.core.shared_types import Mark

TurnSeed = Callable[[], int]


def clock_seed() -> int:
    """Coarse wall-clock reading (whole seconds)."""
    return int(time.time())


class RandomTurnSeed:
    """Pseudo-random seed. Pass a seeded Random for reproducible games."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def __call__(self) -> int:
        return self.rng.randint(0, 1)


def fixed_seed(value: int) -> TurnSeed:
    return lambda: value


def starting_mark(seed: TurnSeed) -> Mark:
    return Mark.X if seed() % 2 == 0 else Mark.O


def turn_seed_from_name(name: str) -> TurnSeed:
    """Map the configured provider name onto a provider."""
    if name == "clock":
        return clock_seed
    if name == "random":
        return RandomTurnSeed()
    raise ValueError(f"Unknown turn seed provider: {name!r}")
