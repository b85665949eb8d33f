# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Navigation for fuel-limited turtles.

Four layers:
1. Direction - headings and the turning algebra
2. Position - live pose, checkpoint pose and their persisted record
3. Movement - steps, turns and axis travel with fuel math
4. Diversion - go home to drop off and refuel, then resume

Usage:
    navigator = Navigator(actuator, PositionStore(state_root))
    position = navigator.create_or_load("position")
"""

from __future__ import annotations

from .direction import ANGLE_TOLERANCE, Heading, Rotation, plan_turn
from .position import Pose, Position, check_position
from .store import PositionStore
from .movement import Motion, MovementEngine, check_steps, displacement, required_fuel
from .diversion import DiversionProtocol, DiversionReason
from .navigator import Navigator

__all__ = [
    # Direction model
    "ANGLE_TOLERANCE",
    "Heading",
    "Rotation",
    "plan_turn",
    # Position state
    "Pose",
    "Position",
    "PositionStore",
    "check_position",
    # Movement
    "Motion",
    "MovementEngine",
    "check_steps",
    "displacement",
    "required_fuel",
    # Diversion
    "DiversionProtocol",
    "DiversionReason",
    # Entry point
    "Navigator",
]
