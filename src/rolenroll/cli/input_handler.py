"""Parses dice-tray and chat-command input into a pool of die configs."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from rolenroll.models.dice import MAX_FACE_COUNT, MIN_FACE_COUNT, DieConfig, DieKind

logger = logging.getLogger(__name__)

DEFAULT_DICE = 5
MAX_DICE = 50

# "/rr 5 a2 n1", "rr a3, a1", "5 a2"
_PREFIX = re.compile(r"^/?rr(?=\s|,|$)", re.I)
_SEPARATORS = re.compile(r"[\s,]+")

_COUNT = re.compile(r"^\d+$")
_SPECIAL = re.compile(r"^([an])(\d+)$", re.I)
_BONUS = re.compile(r"^([+-])(\d+)$")

_SPECIAL_KINDS = {"a": DieKind.ADVANTAGE, "n": DieKind.NEGATIVE}


class InvalidPoolError(ValueError):
    """The request cannot be rolled; nothing was rolled."""


@dataclass
class ParsedPool:
    dice: list[DieConfig] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    bonus_success: int = 0
    bonus_penalty: int = 0


def parse_pool_command(text: str, *, max_dice: int = MAX_DICE, default_dice: int = DEFAULT_DICE) -> ParsedPool:
    """Turn "/rr 5 a2 n1 +1" into dice configs.

    Bare numbers give the total pool size; aN / nN add an advantage or
    negative die with N marked faces, counting toward that total. With no
    total the specials are the whole pool, and with nothing at all the pool
    is default_dice normal dice.
    """
    parsed = ParsedPool()
    total: int | None = None
    specials: list[DieConfig] = []

    body = _PREFIX.sub("", (text or "").strip(), count=1)
    for token in _SEPARATORS.split(body):
        if not token:
            continue

        if _COUNT.match(token):
            total = (total or 0) + int(token)
            continue

        m = _SPECIAL.match(token)
        if m:
            specials.append(_special_die(m.group(1).lower(), int(m.group(2)), token, parsed))
            continue

        m = _BONUS.match(token)
        if m:
            if m.group(1) == "+":
                parsed.bonus_success += int(m.group(2))
            else:
                parsed.bonus_penalty += int(m.group(2))
            continue

        _warn(parsed, f"Ignoring unknown token '{token}'.")

    if total is None and not specials:
        total = default_dice

    requested = len(specials) if total is None else total
    # Checked before any die is built.
    if requested > max_dice:
        raise InvalidPoolError(f"Too many dice requested ({requested}, max {max_dice}).")

    if total is None:
        parsed.dice = specials
    else:
        if len(specials) > total:
            raise InvalidPoolError(
                f"{len(specials)} special dice requested but the pool only has {total} dice."
            )
        parsed.dice = specials + [DieConfig() for _ in range(total - len(specials))]

    if not parsed.dice:
        raise InvalidPoolError("No dice to roll.")

    return parsed


def _special_die(letter: str, count: int, token: str, parsed: ParsedPool) -> DieConfig:
    kind = _SPECIAL_KINDS[letter]
    clamped = max(MIN_FACE_COUNT, min(MAX_FACE_COUNT, count))
    if clamped != count:
        _warn(parsed, f"'{token}' is out of range ({MIN_FACE_COUNT}-{MAX_FACE_COUNT}), using {letter}{clamped}.")
    if kind is DieKind.ADVANTAGE:
        return DieConfig(kind=kind, plus_count=clamped)
    return DieConfig(kind=kind, minus_count=clamped)


def parse_die_token(token: str) -> DieConfig:
    """Parse a single die token: d (or d6, normal), aN or nN."""
    token = (token or "").strip()
    if token.lower() in ("d", "d6", "normal"):
        return DieConfig()
    m = _SPECIAL.match(token)
    if not m:
        raise InvalidPoolError(f"Unknown die '{token}'. Use d, aN or nN.")
    parsed = ParsedPool()
    return _special_die(m.group(1).lower(), int(m.group(2)), token, parsed)


def _warn(parsed: ParsedPool, message: str) -> None:
    logger.warning(message)
    parsed.warnings.append(message)
