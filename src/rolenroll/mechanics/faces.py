"""Face mapping — pure math, no I/O.

Every Role&Roll die is a d6 printed as ["1", "", "", "", "", "R"]. An
advantage die overwrites its blank sides with "+" left to right, a negative
die with "-". Layouts are rebuilt from the config on every call.
"""
from __future__ import annotations

from typing import Any

from rolenroll.models.dice import DieConfig, DieKind, Face
from rolenroll.utils import clamp

_BASE_LAYOUT = (Face.POINT, Face.BLANK, Face.BLANK, Face.BLANK, Face.BLANK, Face.REROLL)


def layout(config: DieConfig | Any) -> tuple[Face, ...]:
    """Return the six faces of a die, indexed by pip count - 1."""
    config = DieConfig.coerce(config)
    faces = list(_BASE_LAYOUT)

    if config.kind is DieKind.ADVANTAGE:
        mark = Face.PLUS
    elif config.kind is DieKind.NEGATIVE:
        mark = Face.MINUS
    else:
        return tuple(faces)

    # Sides 2..5 only; side 1 and side 6 never change.
    for i in range(config.marked_faces):
        faces[1 + i] = mark
    return tuple(faces)


def face_for(config: DieConfig | Any, raw_value: Any) -> Face:
    """Map a raw d6 value onto the face it shows on this die."""
    return layout(config)[pip_index(raw_value)]


def pip_index(raw_value: Any) -> int:
    """0-based side index for a raw roll; garbage reads as 0 and clamps to side 1."""
    return clamp(raw_value, 1, 6) - 1


def labels(config: DieConfig | Any) -> list[str]:
    """Printed labels of each side, as shown in the face table."""
    return [face.label for face in layout(config)]
