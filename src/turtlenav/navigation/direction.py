# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Headings on the horizontal plane and the turning algebra between them.

Whatever heading the turtle has when its position is first created becomes
NORTH (+z). The remaining headings follow clockwise: EAST (+x), SOUTH (-z),
WEST (-x). A right turn from NORTH faces EAST.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any

from turtlenav.errors import InvalidDirection

# Threshold for two angles to be considered equal
ANGLE_TOLERANCE = 0.001


class Rotation(str, Enum):
    """Direction of a single quarter turn."""

    LEFT = "left"
    RIGHT = "right"


class Heading(str, Enum):
    """One of the four axis-aligned headings."""

    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"

    @classmethod
    def parse(cls, value: Any) -> Heading:
        """Parse a heading at the boundary.

        Accepts a Heading, its value or name in any case, or an axis label
        such as "+z" or "-x".

        Raises:
            InvalidDirection: If value names none of the four headings
        """
        if isinstance(value, Heading):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            if key in _AXIS_LABELS:
                return _AXIS_LABELS[key]
            try:
                return cls(key)
            except ValueError:
                pass
        raise InvalidDirection(f"Invalid direction: {value!r}")

    @property
    def vector(self) -> tuple[int, int]:
        """Unit vector (dx, dz) for this heading."""
        return _UNIT_VECTORS[self]

    def rotated(self, rotation: Rotation) -> Heading:
        """Heading after one quarter turn."""
        index = _CLOCKWISE.index(self)
        step = 1 if rotation == Rotation.RIGHT else -1
        return _CLOCKWISE[(index + step) % len(_CLOCKWISE)]


_CLOCKWISE = (Heading.NORTH, Heading.EAST, Heading.SOUTH, Heading.WEST)

_UNIT_VECTORS: dict[Heading, tuple[int, int]] = {
    Heading.NORTH: (0, 1),
    Heading.EAST: (1, 0),
    Heading.SOUTH: (0, -1),
    Heading.WEST: (-1, 0),
}

_AXIS_LABELS: dict[str, Heading] = {
    "+z": Heading.NORTH,
    "+x": Heading.EAST,
    "-z": Heading.SOUTH,
    "-x": Heading.WEST,
}


def plan_turn(current: Heading, target: Heading) -> tuple[Rotation, int]:
    """Plan the fewest quarter turns from current to target.

    The angle between the two unit vectors comes from their dot product and
    the turning direction from the sign of their determinant. Quarter turns
    are subtracted until the residual angle is within ANGLE_TOLERANCE.

    Returns:
        (rotation, quarter_turns), quarter_turns being 0, 1 or 2
    """
    cx, cz = current.vector
    tx, tz = target.vector

    dot = max(-1.0, min(1.0, float(cx * tx + cz * tz)))
    angle = math.acos(dot)
    determinant = cx * tz - cz * tx

    rotation = Rotation.LEFT if determinant > 0 else Rotation.RIGHT

    turns = 0
    while angle > ANGLE_TOLERANCE:
        turns += 1
        angle -= math.pi / 2

    return rotation, turns
