# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""End-to-end tunnel runs on the simulated actuator."""

from __future__ import annotations

from typing import TYPE_CHECKING

from turtlenav.actuator.base import ItemStack
from turtlenav.navigation import Heading, Navigator, Pose, PositionStore
from turtlenav.operator import AutoAcknowledgeConsole
from turtlenav.simulation import COAL, STONE, build_tunnel_world, report, run_tunnel

if TYPE_CHECKING:
    from pathlib import Path


def _run(state_root: Path, *, length: int, width: int, fuel: int, coal_stacks: int = 4):
    actuator, drop_chest, fuel_chest = build_tunnel_world(
        length=length, width=width, fuel=fuel, coal_stacks=coal_stacks
    )
    console = AutoAcknowledgeConsole(on_request=lambda label: fuel_chest.put(ItemStack(name=COAL, count=64)))
    navigator = Navigator(actuator, PositionStore(state_root), console=console)
    position = navigator.create_or_load("tunnel")

    run_tunnel(navigator, position, length=length, width=width)
    return navigator, position, drop_chest, console


def test_tunnel_is_dug_and_delivered(state_root: Path) -> None:
    navigator, position, drop_chest, console = _run(state_root, length=6, width=2, fuel=10)

    assert navigator.actuator.blocks == {}
    assert drop_chest.count(STONE) == 12
    assert position.current == Pose(heading=Heading.SOUTH)
    assert navigator.diversion.diversions >= 1
    assert console.requests == []


def test_report_summarizes_run(state_root: Path) -> None:
    navigator, position, drop_chest, _ = _run(state_root, length=3, width=3, fuel=200)

    result = report(navigator, position, drop_chest)

    assert result.current == position.current.summary()
    assert result.dropped == 9
    assert result.diversions == 0
    assert result.pauses == 0
    assert result.fuel == navigator.actuator.fuel_level()


def test_empty_fuel_chest_is_restocked_by_operator(state_root: Path) -> None:
    navigator, position, drop_chest, console = _run(state_root, length=5, width=1, fuel=4, coal_stacks=0)

    assert console.requests == ["Refuel"]
    assert drop_chest.count(STONE) == 5


def test_world_layout_follows_config() -> None:
    actuator, drop_chest, fuel_chest = build_tunnel_world(length=2, width=2, fuel=0)

    assert actuator.containers[(0, 0, -1)] is drop_chest
    assert actuator.containers[(-1, 0, 0)] is fuel_chest
    assert (1, 0, 0) in actuator.containers
    assert set(actuator.blocks) == {(0, 0, 1), (0, 0, 2), (1, 0, 1), (1, 0, 2)}
