"""Pool resolution: rounds, rerolls and scoring. Pure logic, no I/O.

A pool is rolled in rounds. Every die that lands on its reroll side scores a
point and queues another die of the same config for the next round. Rounds
keep coming until none shows a reroll face, the caller chooses to stop, or
the round cap is reached.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from enum import Enum
from typing import Any

from rolenroll.mechanics.dice import DieRoller, roll_d6
from rolenroll.mechanics.faces import face_for
from rolenroll.models.dice import DieConfig, Face, PoolOutcome, PoolScore, RoundResult
from rolenroll.utils import clamp, to_number

logger = logging.getLogger(__name__)

MAX_ROUNDS = 100

RollHook = Callable[[int, DieConfig], None]
ConfirmReroll = Callable[[list[DieConfig], list[list[RoundResult]]], bool]


class RerollPolicy(str, Enum):
    AUTOMATIC = "automatic"
    CONFIRMED = "confirmed"

    @classmethod
    def parse(cls, value: Any) -> RerollPolicy:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return cls.AUTOMATIC


def resolve_round(
    configs: Iterable[DieConfig | Any],
    roller: DieRoller = roll_d6,
    on_roll: RollHook | None = None,
) -> list[RoundResult]:
    """Roll every die once, in order, and map each value onto its face."""
    results: list[RoundResult] = []
    for conf in configs:
        config = DieConfig.coerce(conf)
        value = clamp(roller(), 1, 6)
        if on_roll is not None:
            _notify(on_roll, value, config)
        results.append(RoundResult(config=config, raw_value=value, face=face_for(config, value)))
    return results


def next_round_configs(results: Iterable[RoundResult]) -> list[DieConfig]:
    """Fresh copies of the configs whose die showed the reroll face."""
    return [r.config.copy_for_reroll() for r in results if r.face is Face.REROLL]


def score_faces(faces: Iterable[Face], bonus_success: Any = 0, bonus_penalty: Any = 0) -> PoolScore:
    """Score every face seen across all rounds.

    Point and reroll faces are worth one point each. Plus and minus tokens
    only adjust the total when at least one point was rolled, and the dice
    total never drops below zero. Bonuses are applied on top.
    """
    base_points = plus_tokens = minus_tokens = reroll_count = 0
    for face in faces:
        if face.scores_point:
            base_points += 1
        if face is Face.REROLL:
            reroll_count += 1
        elif face is Face.PLUS:
            plus_tokens += 1
        elif face is Face.MINUS:
            minus_tokens += 1

    dice_total = 0
    if base_points > 0:
        dice_total = max(0, base_points + plus_tokens - minus_tokens)

    success = max(0, to_number(bonus_success))
    penalty = max(0, to_number(bonus_penalty))
    return PoolScore(
        base_points=base_points,
        plus_tokens=plus_tokens,
        minus_tokens=minus_tokens,
        reroll_count=reroll_count,
        dice_total=dice_total,
        final_total=max(0, dice_total + success - penalty),
        bonus_success=success,
        bonus_penalty=penalty,
    )


class PoolSession:
    """A pool roll in progress.

    Round 0 is rolled when the session is created. From there the caller
    drives it with two transitions: reroll() rolls the pending reroll dice as
    a new round, finish() scores whatever rounds exist. Dice still showing
    a reroll face at finish() simply count as rolled.
    """

    def __init__(
        self,
        configs: Sequence[DieConfig | Any],
        *,
        roller: DieRoller = roll_d6,
        on_roll: RollHook | None = None,
        bonus_success: Any = 0,
        bonus_penalty: Any = 0,
        max_rounds: int = MAX_ROUNDS,
    ):
        self._roller = roller
        self._on_roll = on_roll
        self._bonus_success = bonus_success
        self._bonus_penalty = bonus_penalty
        self.max_rounds = max(1, to_number(max_rounds, MAX_ROUNDS))
        self._rounds: list[list[RoundResult]] = [resolve_round(configs, roller, on_roll)]
        self._outcome: PoolOutcome | None = None

    @property
    def rounds(self) -> list[list[RoundResult]]:
        return [list(rnd) for rnd in self._rounds]

    @property
    def pending(self) -> list[DieConfig]:
        """Configs that would be rolled by the next reroll()."""
        return next_round_configs(self._rounds[-1])

    @property
    def at_cap(self) -> bool:
        return len(self._rounds) >= self.max_rounds

    @property
    def can_reroll(self) -> bool:
        return self._outcome is None and not self.at_cap and bool(self.pending)

    @property
    def is_finished(self) -> bool:
        return self._outcome is not None

    def reroll(self) -> list[RoundResult]:
        if self._outcome is not None:
            raise RuntimeError("Cannot reroll a pool that has already been finished")
        if not self.can_reroll:
            return []
        rnd = resolve_round(self.pending, self._roller, self._on_roll)
        self._rounds.append(rnd)
        return list(rnd)

    def finish(self) -> PoolOutcome:
        if self._outcome is None:
            faces = [r.face for rnd in self._rounds for r in rnd]
            score = score_faces(faces, self._bonus_success, self._bonus_penalty)
            self._outcome = PoolOutcome(
                rounds=self.rounds,
                score=score,
                finished_early=bool(self.pending),
            )
            logger.info(
                "Pool resolved: %d dice over %d round(s), total %d",
                self._outcome.dice_rolled, len(self._rounds), score.final_total,
            )
        return self._outcome


def resolve_pool(
    configs: Sequence[DieConfig | Any],
    *,
    roller: DieRoller = roll_d6,
    policy: RerollPolicy | str = RerollPolicy.AUTOMATIC,
    confirm: ConfirmReroll | None = None,
    bonus_success: Any = 0,
    bonus_penalty: Any = 0,
    on_roll: RollHook | None = None,
    max_rounds: int = MAX_ROUNDS,
) -> PoolOutcome:
    """Roll a pool and resolve its rerolls under the given policy.

    AUTOMATIC rerolls until no reroll face is left. CONFIRMED asks
    confirm(pending, rounds) after each round with reroll faces; a falsy
    answer (or no confirm callback) finishes the pool as it stands.
    """
    policy = RerollPolicy.parse(policy)
    session = PoolSession(
        configs,
        roller=roller,
        on_roll=on_roll,
        bonus_success=bonus_success,
        bonus_penalty=bonus_penalty,
        max_rounds=max_rounds,
    )

    while session.pending:
        if session.at_cap:
            logger.warning(f"Reroll cap of {session.max_rounds} rounds reached, finishing pool")
            break
        if policy is RerollPolicy.CONFIRMED:
            if confirm is None or not confirm(session.pending, session.rounds):
                break
        session.reroll()

    return session.finish()


def _notify(hook: RollHook, value: int, config: DieConfig) -> None:
    try:
        hook(value, config)
    except Exception as e:
        logger.warning(f"Dice visualization hook failed: {e}")
