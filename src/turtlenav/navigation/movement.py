# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Movement engine: turning, single steps, axis travel and fuel math.

Every successful step and every quarter turn is persisted before the next
primitive is issued, so a restart resumes at worst one step behind the
turtle's physical location and never ahead of it.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

from turtlenav.errors import InvalidStepCount
from turtlenav.logging import get_logger
from turtlenav.navigation.direction import Heading, Rotation, plan_turn
from turtlenav.navigation.position import Pose, Position, check_position

if TYPE_CHECKING:
    from collections.abc import Callable

    from turtlenav.actuator.base import Actuator
    from turtlenav.config import NavigatorConfig
    from turtlenav.navigation.store import PositionStore
    from turtlenav.operator import OperatorGate

logger = get_logger(__name__)


class Motion(str, Enum):
    FORWARD = "forward"
    BACKWARD = "backward"
    UP = "up"
    DOWN = "down"


def check_steps(steps: Any) -> int:
    """Validate a step count.

    Raises:
        InvalidStepCount: If steps is not an int or is negative
    """
    if type(steps) is not int:
        raise InvalidStepCount(f"Non-numerical step value: {steps!r}")
    if steps < 0:
        raise InvalidStepCount(f"Invalid step value: {steps}")
    return steps


def displacement(heading: Heading, motion: Motion) -> tuple[int, int, int]:
    """(dx, dy, dz) of one step of motion while facing heading."""
    if motion == Motion.UP:
        return (0, 1, 0)
    if motion == Motion.DOWN:
        return (0, -1, 0)
    dx, dz = heading.vector
    sign = 1 if motion == Motion.FORWARD else -1
    return (sign * dx, 0, sign * dz)


def required_fuel(steps: int, start: Pose) -> int:
    """Fuel needed to take steps more moves from start and then return home.

    steps + |start| bounds the distance from the origin once the move ends,
    so doubling it covers finishing the move plus the worst-case trip back.
    """
    return 2 * (steps + start.distance_from_origin())


class MovementEngine:
    """Translates and turns the turtle, keeping its Position in sync."""

    def __init__(
        self,
        actuator: Actuator,
        store: PositionStore,
        gate: OperatorGate,
        config: NavigatorConfig,
    ) -> None:
        self.actuator = actuator
        self.store = store
        self.gate = gate
        self.config = config
        self._primitives: dict[Motion, Callable[[], bool]] = {
            Motion.FORWARD: actuator.forward,
            Motion.BACKWARD: actuator.back,
            Motion.UP: actuator.up,
            Motion.DOWN: actuator.down,
        }

    # Fuel

    def fuel_required(self, position: Position, steps: int) -> int:
        return required_fuel(steps, position.current)

    def has_fuel_for(self, position: Position, steps: int) -> bool:
        """Whether fuel covers the move plus the trip home from where it ends."""
        return self.fuel_required(position, steps) <= self.actuator.fuel_level()

    def return_fuel_required(self, position: Position, pending: int = 0) -> int:
        """Fuel needed at home to reach the saved pose and then spend pending there."""
        steps = position.saved.distance_from_origin()
        return max(required_fuel(steps, position.current), steps + pending)

    def has_fuel_for_return(self, position: Position, pending: int = 0) -> bool:
        """Whether fuel covers the trip back out to the saved pose."""
        return self.return_fuel_required(position, pending) <= self.actuator.fuel_level()

    # Turning

    def turn_to(self, position: Position, target: Any) -> None:
        """Turn in place to face target using the fewest quarter turns.

        Raises:
            MalformedPosition: If the position fails validation
            InvalidDirection: If target or a stored heading is not a heading
        """
        check_position(position)
        target = Heading.parse(target)

        rotation, turns = plan_turn(position.current.heading, target)
        if turns:
            logger.debug("turn_planned", start=position.current.heading.value, target=target.value, rotation=rotation.value, turns=turns)

        primitive = self.actuator.turn_left if rotation == Rotation.LEFT else self.actuator.turn_right
        for _ in range(turns):
            primitive()
            position.current.heading = position.current.heading.rotated(rotation)
            self.store.persist(position)

    # Translation

    def step(self, position: Position, motion: Motion) -> None:
        """Take one step, pausing for the operator until it succeeds."""
        primitive = self._primitives[motion]

        while not primitive():
            self.gate.pause("Movement")
            if self.actuator.fuel_level() == 0:
                self._attempt_refuel_from_inventory()

        dx, dy, dz = displacement(position.current.heading, motion)
        position.current.x += dx
        position.current.y += dy
        position.current.z += dz
        self.store.persist(position)
        logger.debug("step_completed", motion=motion.value, current=position.current.summary())

    def travel(self, position: Position, motion: Motion, steps: int) -> None:
        for _ in range(steps):
            self.step(position, motion)

    def move_to_x(self, position: Position, coordinate: int) -> None:
        delta = coordinate - position.current.x
        if delta > 0:
            self.turn_to(position, Heading.EAST)
        elif delta < 0:
            self.turn_to(position, Heading.WEST)
        self.travel(position, Motion.FORWARD, abs(delta))

    def move_to_y(self, position: Position, coordinate: int) -> None:
        delta = coordinate - position.current.y
        if delta > 0:
            self.travel(position, Motion.UP, delta)
        elif delta < 0:
            self.travel(position, Motion.DOWN, -delta)

    def move_to_z(self, position: Position, coordinate: int) -> None:
        delta = coordinate - position.current.z
        if delta > 0:
            self.turn_to(position, Heading.NORTH)
        elif delta < 0:
            self.turn_to(position, Heading.SOUTH)
        self.travel(position, Motion.FORWARD, abs(delta))

    def _attempt_refuel_from_inventory(self) -> None:
        self.actuator.select(self.config.first_disposable_slot)
        refueled = self.actuator.refuel()
        logger.info("refuel_in_place", refueled=refueled, fuel=self.actuator.fuel_level())
