# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Actuator adapters for turtle primitives."""

from __future__ import annotations

from turtlenav.actuator.base import Actuator, ItemStack, Side
from turtlenav.actuator.simulated import Container, SimulatedActuator

__all__ = ["Actuator", "Container", "ItemStack", "Side", "SimulatedActuator"]
