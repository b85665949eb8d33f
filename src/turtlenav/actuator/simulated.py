# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-memory turtle actuator (deterministic).

This is used for tests and the `simulate` command. It models a small voxel
world: solid blocks that can be dug, loose items that can be collected and
adjacent containers for dropping items or drawing fuel. The simulated turtle
starts at (0, 0, 0) facing NORTH, which lines its frame up with a freshly
created Position.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from turtlenav.actuator.base import Actuator, ItemStack, Side
from turtlenav.navigation.direction import Heading, Rotation

Cell = tuple[int, int, int]

DEFAULT_FUEL_VALUES = {
    "minecraft:coal": 80,
    "minecraft:charcoal": 80,
    "minecraft:oak_log": 15,
    "minecraft:oak_planks": 15,
}


@dataclass
class Container:
    """An adjacent inventory (chest) occupying one cell."""

    items: list[ItemStack] = field(default_factory=list)
    accepts: bool = True

    def take(self) -> ItemStack | None:
        return self.items.pop(0) if self.items else None

    def put(self, stack: ItemStack) -> bool:
        if not self.accepts:
            return False
        self.items.append(stack)
        return True

    def count(self, name: str | None = None) -> int:
        return sum(s.count for s in self.items if name is None or s.name == name)


class SimulatedActuator(Actuator):
    def __init__(
        self,
        *,
        fuel: int = 0,
        inventory_size: int = 16,
        stack_limit: int = 64,
        fuel_values: dict[str, int] | None = None,
    ) -> None:
        self.location: Cell = (0, 0, 0)
        self.heading = Heading.NORTH
        self.fuel = int(fuel)
        self.stack_limit = stack_limit
        self.fuel_values = dict(DEFAULT_FUEL_VALUES if fuel_values is None else fuel_values)
        self.slots: list[ItemStack | None] = [None] * inventory_size
        self.selected = 1

        self.blocks: dict[Cell, str] = {}
        self.unbreakable: set[Cell] = set()
        self.loose_items: dict[Cell, list[ItemStack]] = {}
        self.containers: dict[Cell, Container] = {}

        self.actions: list[str] = []

    # World setup

    def add_block(self, cell: Cell, name: str = "minecraft:stone", *, breakable: bool = True) -> None:
        self.blocks[cell] = name
        if not breakable:
            self.unbreakable.add(cell)

    def clear(self, cell: Cell) -> None:
        self.blocks.pop(cell, None)
        self.unbreakable.discard(cell)

    def add_container(self, cell: Cell, container: Container | None = None) -> Container:
        container = container or Container()
        self.containers[cell] = container
        return container

    def scatter(self, cell: Cell, name: str, count: int = 1) -> None:
        self.loose_items.setdefault(cell, []).append(ItemStack(name=name, count=count))

    def give(self, slot: int, name: str, count: int) -> None:
        self.slots[slot - 1] = ItemStack(name=name, count=count)

    def adjacent(self, side: Side) -> Cell:
        x, y, z = self.location
        if side == Side.UP:
            return (x, y + 1, z)
        if side == Side.DOWN:
            return (x, y - 1, z)
        dx, dz = self.heading.vector
        return (x + dx, y, z + dz)

    def count_actions(self, action: str) -> int:
        return sum(1 for a in self.actions if a == action)

    # Movement

    def forward(self) -> bool:
        dx, dz = self.heading.vector
        return self._translate("forward", (dx, 0, dz))

    def back(self) -> bool:
        dx, dz = self.heading.vector
        return self._translate("back", (-dx, 0, -dz))

    def up(self) -> bool:
        return self._translate("up", (0, 1, 0))

    def down(self) -> bool:
        return self._translate("down", (0, -1, 0))

    def turn_left(self) -> None:
        self.heading = self.heading.rotated(Rotation.LEFT)
        self.actions.append("turn_left")

    def turn_right(self) -> None:
        self.heading = self.heading.rotated(Rotation.RIGHT)
        self.actions.append("turn_right")

    def _translate(self, action: str, delta: Cell) -> bool:
        x, y, z = self.location
        target = (x + delta[0], y + delta[1], z + delta[2])
        if self.fuel <= 0 or target in self.blocks or target in self.containers:
            self.actions.append(f"{action}:blocked")
            return False
        self.location = target
        self.fuel -= 1
        self.actions.append(action)
        return True

    # Interaction

    def dig(self, side: Side) -> bool:
        cell = self.adjacent(side)
        if cell not in self.blocks or cell in self.unbreakable:
            self.actions.append(f"dig_{side.value}:failed")
            return False
        name = self.blocks.pop(cell)
        leftover = self._insert(ItemStack(name=name, count=1))
        if leftover:
            self.scatter(cell, name, leftover)
        self.actions.append(f"dig_{side.value}")
        return True

    def suck(self, side: Side) -> bool:
        cell = self.adjacent(side)
        container = self.containers.get(cell)
        if container is not None:
            stack = container.take()
            source = container.items
        else:
            pile = self.loose_items.get(cell, [])
            stack = pile.pop(0) if pile else None
            source = pile
        if stack is None:
            self.actions.append(f"suck_{side.value}:failed")
            return False

        leftover = self._insert(stack)
        if leftover == stack.count:
            source.insert(0, stack)
            self.actions.append(f"suck_{side.value}:failed")
            return False
        if leftover:
            source.insert(0, ItemStack(name=stack.name, count=leftover))
        self.actions.append(f"suck_{side.value}")
        return True

    def place(self, side: Side) -> bool:
        cell = self.adjacent(side)
        stack = self.slots[self.selected - 1]
        if stack is None or cell in self.blocks or cell in self.containers or cell == self.location:
            self.actions.append(f"place_{side.value}:failed")
            return False
        self.blocks[cell] = stack.name
        self._take_from_selected(1)
        self.actions.append(f"place_{side.value}")
        return True

    def drop(self, side: Side) -> bool:
        stack = self.slots[self.selected - 1]
        if stack is None:
            return False
        cell = self.adjacent(side)
        container = self.containers.get(cell)
        if container is not None:
            if not container.put(stack):
                return False
        else:
            self.loose_items.setdefault(cell, []).append(stack)
        self.slots[self.selected - 1] = None
        self.actions.append(f"drop_{side.value}")
        return True

    def refuel(self) -> bool:
        stack = self.slots[self.selected - 1]
        if stack is None or stack.name not in self.fuel_values:
            self.actions.append("refuel:failed")
            return False
        self.fuel += self.fuel_values[stack.name] * stack.count
        self.slots[self.selected - 1] = None
        self.actions.append("refuel")
        return True

    # Inventory

    def select(self, slot: int) -> None:
        if not 1 <= slot <= len(self.slots):
            raise ValueError(f"Slot out of range: {slot}")
        self.selected = slot

    def fuel_level(self) -> int:
        return self.fuel

    def item_count(self, slot: int) -> int:
        stack = self.slots[slot - 1]
        return stack.count if stack else 0

    def item_detail(self, slot: int) -> ItemStack | None:
        stack = self.slots[slot - 1]
        return stack.model_copy() if stack else None

    def _take_from_selected(self, count: int) -> None:
        stack = self.slots[self.selected - 1]
        if stack is None:
            return
        stack.count -= count
        if stack.count <= 0:
            self.slots[self.selected - 1] = None

    def _insert(self, stack: ItemStack) -> int:
        """Insert a stack starting at the selected slot. Returns the leftover count."""
        remaining = stack.count
        size = len(self.slots)
        order = [(self.selected - 1 + i) % size for i in range(size)]

        for index in order:
            held = self.slots[index]
            if held is not None and held.name == stack.name and held.count < self.stack_limit:
                moved = min(self.stack_limit - held.count, remaining)
                held.count += moved
                remaining -= moved
                if not remaining:
                    return 0
        for index in order:
            if self.slots[index] is None:
                moved = min(self.stack_limit, remaining)
                self.slots[index] = ItemStack(name=stack.name, count=moved)
                remaining -= moved
                if not remaining:
                    return 0
        return remaining
