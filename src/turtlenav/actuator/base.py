# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Abstract base class for turtle actuators."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from pydantic import BaseModel, ConfigDict


class Side(str, Enum):
    """Which adjacent cell an interaction targets."""

    FRONT = "front"
    UP = "up"
    DOWN = "down"


class ItemStack(BaseModel):
    """Identity and count of the items held in one slot."""

    name: str
    count: int

    model_config = ConfigDict(extra="ignore")


class Actuator(ABC):
    """Single-step primitives of a turtle.

    Every primitive is synchronous. Movement, digging, collecting, placing,
    dropping and refueling report success as a bool; a failure is a normal
    outcome and never raises.
    """

    @abstractmethod
    def forward(self) -> bool:
        """Move one block in the facing direction."""

    @abstractmethod
    def back(self) -> bool:
        """Move one block opposite the facing direction."""

    @abstractmethod
    def up(self) -> bool:
        """Move one block up."""

    @abstractmethod
    def down(self) -> bool:
        """Move one block down."""

    @abstractmethod
    def turn_left(self) -> None:
        """Rotate 90 degrees counter-clockwise in place."""

    @abstractmethod
    def turn_right(self) -> None:
        """Rotate 90 degrees clockwise in place."""

    @abstractmethod
    def dig(self, side: Side) -> bool:
        """Mine the block on the given side into the selected slot."""

    @abstractmethod
    def suck(self, side: Side) -> bool:
        """Collect items from the given side into the selected slot."""

    @abstractmethod
    def place(self, side: Side) -> bool:
        """Place one item from the selected slot on the given side."""

    @abstractmethod
    def drop(self, side: Side) -> bool:
        """Deposit the selected slot into the given side."""

    @abstractmethod
    def refuel(self) -> bool:
        """Burn the selected slot as fuel."""

    @abstractmethod
    def select(self, slot: int) -> None:
        """Select an inventory slot (1-based)."""

    @abstractmethod
    def fuel_level(self) -> int:
        """Current fuel level."""

    @abstractmethod
    def item_count(self, slot: int) -> int:
        """Number of items in a slot."""

    @abstractmethod
    def item_detail(self, slot: int) -> ItemStack | None:
        """Identity and count of a slot, or None when empty."""
