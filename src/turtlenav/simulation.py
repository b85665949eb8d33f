# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tunnel-digging demo on the simulated actuator.

Home layout matches the default NavigatorConfig: the drop chest is SOUTH of
the origin, the fuel chest WEST and the supply chest EAST. The tunnel is
dug NORTH of the origin in serpentine lanes that shift EAST.
"""

from __future__ import annotations

from dataclasses import dataclass

from turtlenav.actuator.base import ItemStack
from turtlenav.actuator.simulated import Container, SimulatedActuator
from turtlenav.config import NavigatorConfig
from turtlenav.logging import get_logger
from turtlenav.navigation import Heading, Navigator, Position

logger = get_logger(__name__)

STONE = "minecraft:cobblestone"
COAL = "minecraft:coal"

_OFFSETS = {
    Heading.NORTH: (0, 0, 1),
    Heading.EAST: (1, 0, 0),
    Heading.SOUTH: (0, 0, -1),
    Heading.WEST: (-1, 0, 0),
}


@dataclass
class TunnelReport:
    current: str
    fuel: int
    diversions: int
    pauses: int
    dropped: int


def build_tunnel_world(
    *,
    length: int,
    width: int,
    fuel: int,
    coal_stacks: int = 4,
    stack_limit: int = 64,
    config: NavigatorConfig | None = None,
) -> tuple[SimulatedActuator, Container, Container]:
    """Create a simulated turtle at home with solid rock to tunnel through.

    Returns:
        (actuator, drop_chest, fuel_chest)
    """
    config = config or NavigatorConfig()
    actuator = SimulatedActuator(fuel=fuel, inventory_size=config.inventory_size, stack_limit=stack_limit)

    drop_chest = actuator.add_container(_OFFSETS[config.drop_heading])
    fuel_chest = actuator.add_container(
        _OFFSETS[config.refuel_heading],
        Container(items=[ItemStack(name=COAL, count=64) for _ in range(coal_stacks)]),
    )
    if config.pickup_heading not in (config.drop_heading, config.refuel_heading):
        actuator.add_container(_OFFSETS[config.pickup_heading])

    for x in range(width):
        for z in range(1, length + 1):
            actuator.add_block((x, 0, z), STONE)

    return actuator, drop_chest, fuel_chest


def run_tunnel(navigator: Navigator, position: Position, *, length: int, width: int) -> None:
    """Dig a width x length tunnel north of home, then unload at home."""
    navigator.show_running_indicator()
    navigator.go_home(position)

    for lane in range(width):
        if lane == 0:
            navigator.turn_to(position, Heading.NORTH)
            _dig_lane(navigator, position, length)
        else:
            navigator.turn_to(position, Heading.EAST)
            _dig_lane(navigator, position, 1)
            navigator.turn_to(position, Heading.SOUTH if lane % 2 else Heading.NORTH)
            _dig_lane(navigator, position, length - 1)
        logger.info("lane_completed", lane=lane, current=position.current.summary())

    navigator.go_home(position)
    navigator.turn_to(position, navigator.config.drop_heading)
    navigator.drop_all_disposable(position)


def _dig_lane(navigator: Navigator, position: Position, blocks: int) -> None:
    for _ in range(blocks):
        navigator.dig_forward(position, required=False)
        navigator.move_forward(position, 1)


def report(navigator: Navigator, position: Position, drop_chest: Container) -> TunnelReport:
    return TunnelReport(
        current=position.current.summary(),
        fuel=navigator.actuator.fuel_level(),
        diversions=navigator.diversion.diversions,
        pauses=navigator.gate.pause_count,
        dropped=drop_chest.count(STONE),
    )
