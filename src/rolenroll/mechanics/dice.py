"""Random-die sources. The only place the engine touches randomness."""
from __future__ import annotations

import random
from collections.abc import Callable

DieRoller = Callable[[], int]

D6_SIDES = 6


def roll_d6() -> int:
    """Roll one six-sided die from the module-level RNG."""
    return random.randint(1, D6_SIDES)


def seeded_roller(seed: int | None = None) -> DieRoller:
    """Return a d6 source backed by its own RNG, reproducible for a given seed."""
    rng = random.Random(seed)

    def _roll() -> int:
        return rng.randint(1, D6_SIDES)

    return _roll
