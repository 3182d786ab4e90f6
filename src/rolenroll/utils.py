"""Shared utility functions for Role&Roll."""
from __future__ import annotations

import math


def to_number(value, default: int = 0) -> int:
    """Coerce a loosely-typed numeric field to an int, or return default.

    Handles the values a chat command, a host macro or a JSON payload may
    hand over: ints, floats, numeric strings, None and garbage. Booleans
    count as 1 and 0.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return int(number)


def clamp(value, lo: int, hi: int, default: int = 0) -> int:
    """Coerce value with to_number and keep it between lo and hi."""
    return max(lo, min(hi, to_number(value, default)))
