"""Shared fixtures for the Role&Roll test suite."""
from __future__ import annotations

import random
from collections.abc import Iterable

import pytest

from rolenroll.models.dice import DieConfig, DieKind


class ScriptedRoller:
    """d6 source that plays back fixed values, then a fallback forever."""

    def __init__(self, values: Iterable[int], fallback: int = 2):
        self.values = list(values)
        self.fallback = fallback
        self.calls = 0

    def __call__(self) -> int:
        self.calls += 1
        if self.values:
            return self.values.pop(0)
        return self.fallback


@pytest.fixture
def scripted():
    return ScriptedRoller


@pytest.fixture
def normal_pool() -> list[DieConfig]:
    return [DieConfig() for _ in range(5)]


@pytest.fixture
def mixed_pool() -> list[DieConfig]:
    return [
        DieConfig(),
        DieConfig(kind=DieKind.ADVANTAGE, plus_count=2),
        DieConfig(kind=DieKind.NEGATIVE, minus_count=1),
    ]


@pytest.fixture
def seeded_rng():
    state = random.getstate()
    random.seed(42)
    yield
    random.setstate(state)
