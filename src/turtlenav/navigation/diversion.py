# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Resource diversion: checkpoint, go home, service, restore.

Homing always travels Y, then X, then Z. Restoring travels the mirror
order Z, then X, then Y, so the way back retraces the way home and never
cuts through blocks above or below the travel lane.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from turtlenav.actuator.base import Side
from turtlenav.logging import get_logger
from turtlenav.navigation.position import Position, check_position

if TYPE_CHECKING:
    from turtlenav.actuator.base import Actuator
    from turtlenav.config import NavigatorConfig
    from turtlenav.navigation.movement import MovementEngine
    from turtlenav.navigation.store import PositionStore
    from turtlenav.operator import OperatorGate

logger = get_logger(__name__)


class DiversionReason(str, Enum):
    FUEL = "fuel"
    INVENTORY = "inventory"


class DiversionProtocol:
    def __init__(
        self,
        engine: MovementEngine,
        actuator: Actuator,
        store: PositionStore,
        gate: OperatorGate,
        config: NavigatorConfig,
    ) -> None:
        self.engine = engine
        self.actuator = actuator
        self.store = store
        self.gate = gate
        self.config = config
        self.diversions = 0

    def is_inventory_full(self) -> bool:
        """The disposable range is full once its last slot holds anything."""
        return self.actuator.item_count(self.config.last_disposable_slot) > 0

    def checkpoint(self, position: Position) -> None:
        position.checkpoint()
        self.store.persist(position)

    def go_home(self, position: Position) -> None:
        """Move to (0, 0, 0): vertical axis first, then X, then Z."""
        check_position(position)

        self.engine.move_to_y(position, 0)
        self.engine.move_to_x(position, 0)
        self.engine.move_to_z(position, 0)

    def return_to_saved(self, position: Position) -> None:
        """Travel back out to the checkpoint and face its heading."""
        check_position(position)
        saved = position.saved

        self.engine.move_to_z(position, saved.z)
        self.engine.move_to_x(position, saved.x)
        self.engine.move_to_y(position, saved.y)

        self.engine.turn_to(position, saved.heading)

    def drop_disposable(self) -> None:
        """Drop every disposable slot into the inventory in front."""
        for slot in self.config.disposable_slots:
            self.actuator.select(slot)
            self.actuator.drop(Side.FRONT)

    def refuel(self, position: Position, pending: int = 0) -> None:
        """Draw fuel from the inventory in front until the return trip is covered.

        pending is fuel the interrupted task still needs once it is back at
        the saved pose.
        """
        check_position(position)

        while not self.engine.has_fuel_for_return(position, pending):
            self.actuator.select(self.config.first_disposable_slot)
            drawn = self.actuator.suck(Side.FRONT)
            if not (drawn and self.actuator.refuel()):
                self.gate.pause("Refuel")

        logger.info("refuel_completed", fuel=self.actuator.fuel_level())

    def divert(self, position: Position, reason: DiversionReason, pending: int = 0) -> None:
        """Interrupt the running task to drop off items and refuel at home.

        Args:
            position: Live position; its current pose becomes the checkpoint
            reason: What triggered the diversion
            pending: Fuel the task will spend after being restored
        """
        check_position(position)
        self.diversions += 1
        logger.info(
            "diversion_started",
            reason=reason.value,
            checkpoint=position.current.summary(),
            fuel=self.actuator.fuel_level(),
        )

        self.checkpoint(position)
        self.go_home(position)

        self.engine.turn_to(position, self.config.drop_heading)
        self.drop_disposable()

        if not self.engine.has_fuel_for_return(position, pending):
            self.engine.turn_to(position, self.config.refuel_heading)
            self.refuel(position, pending)

        self.return_to_saved(position)
        logger.info("diversion_completed", reason=reason.value, current=position.current.summary())
