# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Position state: the live pose, the checkpoint pose and validation."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from turtlenav.errors import MalformedPosition
from turtlenav.navigation.direction import Heading

_POSE_FIELDS = ("current", "saved")
_AXES = ("x", "y", "z")


class Pose(BaseModel):
    """Coordinates and heading relative to the origin."""

    x: StrictInt = 0
    y: StrictInt = 0
    z: StrictInt = 0
    heading: Heading = Heading.NORTH

    model_config = ConfigDict(extra="ignore")

    def distance_from_origin(self) -> int:
        """Manhattan distance back to (0, 0, 0)."""
        return abs(self.x) + abs(self.y) + abs(self.z)

    def copy_from(self, other: Pose) -> None:
        """Overwrite this pose in place with another pose's values."""
        self.x = other.x
        self.y = other.y
        self.z = other.z
        self.heading = other.heading

    def summary(self) -> str:
        """One-line summary for logging."""
        return f"({self.x}, {self.y}, {self.z}) facing {self.heading.value}"


class Position(BaseModel):
    """Live position of the turtle.

    There is exactly one instance per running process. Every operation
    mutates it in place, so callers must never hold on to copies of
    `current` across calls.
    """

    current: Pose = Field(default_factory=Pose)
    saved: Pose = Field(default_factory=Pose)
    storage_key: str

    model_config = ConfigDict(extra="ignore")

    def checkpoint(self) -> None:
        """Copy the current pose into the saved pose."""
        self.saved.copy_from(self.current)

    def to_record(self) -> dict[str, Any]:
        """Serialize to the persisted record layout."""
        return self.model_dump(mode="json", include={"current", "saved"})

    @classmethod
    def from_record(cls, record: Any, storage_key: str) -> Position:
        """Build a Position from a persisted record.

        Raises:
            MalformedPosition: If a pose is missing or has ill-typed coordinates
            InvalidDirection: If a heading is not recognized
        """
        if not isinstance(record, Mapping):
            raise MalformedPosition(f"Malformed position: {record!r}")
        return check_position({**record, "storage_key": storage_key})


def _check_pose(name: str, pose: Any) -> Pose:
    if isinstance(pose, Pose):
        values = {axis: getattr(pose, axis, None) for axis in _AXES}
        heading = getattr(pose, "heading", None)
    elif isinstance(pose, Mapping):
        values = {axis: pose.get(axis) for axis in _AXES}
        heading = pose.get("heading")
    else:
        raise MalformedPosition(f"Malformed position: {name} is {pose!r}")

    for axis, value in values.items():
        # bool is an int subclass but never a coordinate
        if type(value) is not int:
            raise MalformedPosition(f"Malformed position: {name}.{axis} is {value!r}")
    if heading is None:
        raise MalformedPosition(f"Malformed position: {name}.heading is missing")

    return Pose(**values, heading=Heading.parse(heading))


def check_position(position: Any) -> Position:
    """Assert the structural invariants of a position.

    Accepts a live Position or a raw mapping. A live Position that passes is
    returned as-is so callers keep mutating the same instance.

    Raises:
        MalformedPosition: If a field is missing or a coordinate is not an int
        InvalidDirection: If either heading is not recognized
    """
    if isinstance(position, Position):
        fields = {name: getattr(position, name, None) for name in (*_POSE_FIELDS, "storage_key")}
        for name in _POSE_FIELDS:
            if not isinstance(fields[name], Pose):
                raise MalformedPosition(f"Malformed position: {name} is {fields[name]!r}")
    elif isinstance(position, Mapping):
        fields = {name: position.get(name) for name in (*_POSE_FIELDS, "storage_key")}
    else:
        raise MalformedPosition(f"Malformed position: {position!r}")

    poses = {name: _check_pose(name, fields[name]) for name in _POSE_FIELDS}
    if not isinstance(fields["storage_key"], str):
        raise MalformedPosition(f"Malformed position: storage_key is {fields['storage_key']!r}")

    if isinstance(position, Position):
        # Headings assigned as plain strings are normalized in place
        position.current.heading = poses["current"].heading
        position.saved.heading = poses["saved"].heading
        return position
    return Position(current=poses["current"], saved=poses["saved"], storage_key=fields["storage_key"])
