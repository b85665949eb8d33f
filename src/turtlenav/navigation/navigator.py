# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Task-program boundary for turtle navigation.

Task programs (quarries, tree farms, ...) create one Position through the
navigator and pass that same instance to every call. Movement checks fuel
before the first step and digging/collecting checks inventory space before
acting; either shortfall sends the turtle home and back first.

Usage:
    navigator = Navigator.from_settings(actuator, settings)
    position = navigator.create_or_load("position")
    navigator.dig_forward(position)
    navigator.move_forward(position, 1)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from turtlenav.actuator.base import Side
from turtlenav.logging import bind_context, get_logger
from turtlenav.navigation.diversion import DiversionProtocol, DiversionReason
from turtlenav.navigation.movement import Motion, MovementEngine, check_steps
from turtlenav.navigation.position import Position, check_position
from turtlenav.navigation.store import PositionStore
from turtlenav.operator import OperatorConsole, OperatorGate, TerminalConsole

if TYPE_CHECKING:
    from collections.abc import Callable

    from turtlenav.actuator.base import Actuator
    from turtlenav.config import NavigatorConfig
    from turtlenav.settings import Settings

logger = get_logger(__name__)


class Navigator:
    def __init__(
        self,
        actuator: Actuator,
        store: PositionStore,
        console: OperatorConsole | None = None,
        config: NavigatorConfig | None = None,
    ) -> None:
        self.actuator = actuator
        self.store = store
        if config is None:
            from turtlenav.config import NavigatorConfig

            config = NavigatorConfig()
        self.config = config
        self.gate = OperatorGate(console or TerminalConsole())
        self.engine = MovementEngine(actuator, store, self.gate, self.config)
        self.diversion = DiversionProtocol(self.engine, actuator, store, self.gate, self.config)

    @classmethod
    def from_settings(
        cls,
        actuator: Actuator,
        settings: Settings,
        console: OperatorConsole | None = None,
    ) -> Navigator:
        from turtlenav.config import load_config

        return cls(
            actuator,
            PositionStore(settings.state_root),
            console=console,
            config=load_config(settings.config_path),
        )

    # Position state

    def create_or_load(self, storage_key: str) -> Position:
        bind_context(storage_key=storage_key)
        return self.store.create_or_load(storage_key)

    def save(self, position: Position) -> None:
        """Checkpoint the current pose as the saved pose."""
        check_position(position)
        self.diversion.checkpoint(position)

    # Operator

    def show_running_indicator(self) -> None:
        self.gate.show_running()

    def pause_for_operator(self, action_label: str) -> None:
        self.gate.pause(action_label)

    # Movement

    def move_forward(self, position: Position, steps: int) -> None:
        self._move(position, Motion.FORWARD, steps)

    def move_backward(self, position: Position, steps: int) -> None:
        self._move(position, Motion.BACKWARD, steps)

    def move_up(self, position: Position, steps: int) -> None:
        self._move(position, Motion.UP, steps)

    def move_down(self, position: Position, steps: int) -> None:
        self._move(position, Motion.DOWN, steps)

    def turn_to(self, position: Position, direction: Any) -> None:
        self.engine.turn_to(position, direction)

    def go_home(self, position: Position) -> None:
        self.diversion.go_home(position)

    def fuel_required(self, position: Position, steps: int) -> int:
        """Fuel a move of steps from the current pose needs before it may start."""
        check_position(position)
        return self.engine.fuel_required(position, check_steps(steps))

    def _move(self, position: Position, motion: Motion, steps: Any) -> None:
        """Move steps times, going home to refuel first if fuel would run short.

        Raises:
            MalformedPosition: If the position fails validation
            InvalidDirection: If a stored heading is not recognized
            InvalidStepCount: If steps is negative or not an int
        """
        check_position(position)
        steps = check_steps(steps)

        if not self.engine.has_fuel_for(position, steps):
            pending = self.engine.fuel_required(position, steps)
            self.diversion.divert(position, DiversionReason.FUEL, pending=pending)

        self.engine.travel(position, motion, steps)

    # Excavation and collection

    def dig_forward(self, position: Position, *, required: bool = True) -> bool:
        return self._gather(position, Side.FRONT, self.actuator.dig, "Dig", required)

    def dig_up(self, position: Position, *, required: bool = True) -> bool:
        return self._gather(position, Side.UP, self.actuator.dig, "Dig", required)

    def dig_down(self, position: Position, *, required: bool = True) -> bool:
        return self._gather(position, Side.DOWN, self.actuator.dig, "Dig", required)

    def collect_forward(self, position: Position, *, required: bool = True) -> bool:
        return self._gather(position, Side.FRONT, self.actuator.suck, "Collect", required)

    def collect_up(self, position: Position, *, required: bool = True) -> bool:
        return self._gather(position, Side.UP, self.actuator.suck, "Collect", required)

    def collect_down(self, position: Position, *, required: bool = True) -> bool:
        return self._gather(position, Side.DOWN, self.actuator.suck, "Collect", required)

    def is_inventory_full(self) -> bool:
        return self.diversion.is_inventory_full()

    def _gather(
        self,
        position: Position,
        side: Side,
        primitive: Callable[[Side], bool],
        action_label: str,
        required: bool,
    ) -> bool:
        """Dig or collect into the disposable slots, emptying them at home first if full.

        With required=False a failure is reported instead of paused on, for
        sweeps over cells that may legitimately be empty.
        """
        check_position(position)

        if self.is_inventory_full():
            self.diversion.divert(position, DiversionReason.INVENTORY)

        self.actuator.select(self.config.first_disposable_slot)
        if not required:
            return primitive(side)

        self.gate.retry_until(action_label, lambda: primitive(side))
        return True

    # Supplies

    def place_forward(self, position: Position, slot: int = 1) -> None:
        self._place(position, Side.FRONT, slot)

    def place_up(self, position: Position, slot: int = 1) -> None:
        self._place(position, Side.UP, slot)

    def place_down(self, position: Position, slot: int = 1) -> None:
        self._place(position, Side.DOWN, slot)

    def _place(self, position: Position, side: Side, slot: int) -> None:
        check_position(position)
        self.actuator.select(slot)
        self.gate.retry_until("Placement", lambda: self.actuator.place(side))

    def pick_up(self, position: Position) -> None:
        """Fill every slot ahead of the disposable range from the inventory in front."""
        check_position(position)

        for slot in self.config.reserved_slots:
            self.actuator.select(slot)
            self.actuator.suck(Side.FRONT)
            while self.actuator.item_count(slot) < 1:
                self.gate.pause("Pickup")
                self.actuator.suck(Side.FRONT)

        logger.info("pickup_completed", slots=list(self.config.reserved_slots))

    def refuel(self, position: Position) -> None:
        """Refuel from the inventory in front until the saved pose is reachable."""
        self.diversion.refuel(position)

    def drop_all_disposable(self, position: Position) -> None:
        """Drop every disposable slot into the inventory in front."""
        check_position(position)
        self.diversion.drop_disposable()
