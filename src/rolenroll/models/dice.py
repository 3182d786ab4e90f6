from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from rolenroll.utils import clamp

MIN_FACE_COUNT = 1
MAX_FACE_COUNT = 4

_KIND_ALIASES = {
    "adv": "advantage",
    "neg": "negative",
}


class DieKind(str, Enum):
    NORMAL = "normal"
    ADVANTAGE = "advantage"
    NEGATIVE = "negative"

    @classmethod
    def parse(cls, value: Any) -> DieKind:
        """Map any value onto a kind; unknown kinds are normal dice."""
        if isinstance(value, cls):
            return value
        key = str(value or "").strip().lower()
        key = _KIND_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            return cls.NORMAL


class Face(str, Enum):
    POINT = "point"
    REROLL = "reroll"
    PLUS = "plus"
    MINUS = "minus"
    BLANK = "blank"

    @property
    def label(self) -> str:
        """The mark printed on the physical die."""
        return _FACE_LABELS[self]

    @property
    def scores_point(self) -> bool:
        return self in (Face.POINT, Face.REROLL)


_FACE_LABELS = {
    Face.POINT: "1",
    Face.REROLL: "R",
    Face.PLUS: "+",
    Face.MINUS: "-",
    Face.BLANK: "",
}


class DieConfig(BaseModel):
    """One die of a pool: its kind and how many of its blank sides are marked."""

    model_config = ConfigDict(frozen=True)

    kind: DieKind = DieKind.NORMAL
    plus_count: int = MIN_FACE_COUNT
    minus_count: int = MIN_FACE_COUNT

    @field_validator("kind", mode="before")
    @classmethod
    def _coerce_kind(cls, value: Any) -> DieKind:
        return DieKind.parse(value)

    @field_validator("plus_count", "minus_count", mode="before")
    @classmethod
    def _coerce_count(cls, value: Any) -> int:
        return clamp(value, MIN_FACE_COUNT, MAX_FACE_COUNT, default=MIN_FACE_COUNT)

    @classmethod
    def coerce(cls, value: Any) -> DieConfig:
        """Build a config from a DieConfig, a mapping or anything else.

        Mappings may use the camelCase keys (plusCount, minusCount) a host
        macro sends. Values that are not mappings become a normal die.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, Mapping):
            return cls()
        return cls(
            kind=value.get("kind"),
            plus_count=value.get("plus_count", value.get("plusCount")),
            minus_count=value.get("minus_count", value.get("minusCount")),
        )

    @property
    def marked_faces(self) -> int:
        """Number of sides carrying a + or - mark (0 for a normal die)."""
        if self.kind is DieKind.ADVANTAGE:
            return self.plus_count
        if self.kind is DieKind.NEGATIVE:
            return self.minus_count
        return 0

    @property
    def token(self) -> str:
        """Command-line form of this die: d, aN or nN."""
        if self.kind is DieKind.ADVANTAGE:
            return f"a{self.plus_count}"
        if self.kind is DieKind.NEGATIVE:
            return f"n{self.minus_count}"
        return "d"

    def copy_for_reroll(self) -> DieConfig:
        return DieConfig(kind=self.kind, plus_count=self.plus_count, minus_count=self.minus_count)


@dataclass(frozen=True)
class RoundResult:
    config: DieConfig
    raw_value: int
    face: Face


@dataclass(frozen=True)
class PoolScore:
    base_points: int = 0
    plus_tokens: int = 0
    minus_tokens: int = 0
    reroll_count: int = 0
    dice_total: int = 0
    final_total: int = 0
    bonus_success: int = 0
    bonus_penalty: int = 0


@dataclass(frozen=True)
class PoolOutcome:
    rounds: list[list[RoundResult]] = field(default_factory=list)
    score: PoolScore = field(default_factory=PoolScore)
    finished_early: bool = False

    @property
    def results(self) -> list[RoundResult]:
        return [r for rnd in self.rounds for r in rnd]

    @property
    def faces(self) -> list[Face]:
        return [r.face for r in self.results]

    @property
    def dice_rolled(self) -> int:
        return len(self.results)
