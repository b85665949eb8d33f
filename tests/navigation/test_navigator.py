# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tests for the task-program surface of Navigator."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from turtlenav.actuator.base import ItemStack
from turtlenav.actuator.simulated import SimulatedActuator
from turtlenav.config import NavigatorConfig
from turtlenav.errors import InvalidStepCount
from turtlenav.navigation import Heading, Navigator, Pose, Position, PositionStore
from turtlenav.operator import AutoAcknowledgeConsole, OperatorState
from turtlenav.settings import Settings

if TYPE_CHECKING:
    from pathlib import Path

SAPLING = "minecraft:oak_sapling"
STONE = "minecraft:stone"


class TestDig:
    def test_optional_dig_reports_empty_cell(self, navigator: Navigator, position: Position, console) -> None:
        assert navigator.dig_forward(position, required=False) is False
        assert console.requests == []

    def test_required_dig_pauses_until_possible(self, navigator: Navigator, position: Position, console) -> None:
        console.on_request = lambda label: navigator.actuator.add_block((0, 0, 1))

        assert navigator.dig_forward(position) is True

        assert console.requests == ["Dig"]
        assert navigator.actuator.item_count(2) == 1

    def test_dig_up_and_down(self, navigator: Navigator, position: Position) -> None:
        navigator.actuator.add_block((0, 1, 0))
        navigator.actuator.add_block((0, -1, 0))

        assert navigator.dig_up(position)
        assert navigator.dig_down(position)

        assert navigator.actuator.item_detail(2) == ItemStack(name=STONE, count=2)
        assert navigator.actuator.blocks == {}

    def test_unbreakable_block_with_optional_dig(self, navigator: Navigator, position: Position) -> None:
        navigator.actuator.add_block((0, 0, 1), "minecraft:bedrock", breakable=False)

        assert navigator.dig_forward(position, required=False) is False
        assert navigator.actuator.blocks == {(0, 0, 1): "minecraft:bedrock"}


class TestCollect:
    def test_collect_forward_and_up(self, navigator: Navigator, position: Position) -> None:
        navigator.actuator.scatter((0, 0, 1), SAPLING, 3)
        navigator.actuator.scatter((0, 1, 0), "minecraft:apple", 1)

        assert navigator.collect_forward(position)
        assert navigator.collect_up(position)

        assert navigator.actuator.item_detail(2) == ItemStack(name=SAPLING, count=3)
        assert navigator.actuator.item_detail(3) == ItemStack(name="minecraft:apple", count=1)

    def test_optional_collect_with_nothing_there(self, navigator: Navigator, position: Position) -> None:
        assert navigator.collect_down(position, required=False) is False


class TestPlace:
    def test_place_forward_uses_slot(self, navigator: Navigator, position: Position) -> None:
        navigator.actuator.give(1, SAPLING, 2)

        navigator.place_forward(position)

        assert navigator.actuator.blocks[(0, 0, 1)] == SAPLING
        assert navigator.actuator.item_count(1) == 1

    def test_place_pauses_until_item_supplied(self, navigator: Navigator, position: Position, console) -> None:
        console.on_request = lambda label: navigator.actuator.give(1, SAPLING, 1)

        navigator.place_down(position)

        assert console.requests == ["Placement"]
        assert navigator.actuator.blocks[(0, -1, 0)] == SAPLING

    def test_place_up_from_other_slot(self, navigator: Navigator, position: Position) -> None:
        navigator.actuator.give(4, "minecraft:torch", 1)

        navigator.place_up(position, slot=4)

        assert navigator.actuator.blocks[(0, 1, 0)] == "minecraft:torch"


class TestPickUp:
    def test_fills_reserved_slots(self, actuator: SimulatedActuator, store: PositionStore) -> None:
        config = NavigatorConfig(first_disposable_slot=3)
        navigator = Navigator(actuator, store, console=AutoAcknowledgeConsole(), config=config)
        position = navigator.create_or_load("position")
        supply = actuator.add_container((1, 0, 0))
        supply.put(ItemStack(name=SAPLING, count=16))
        supply.put(ItemStack(name="minecraft:bone_meal", count=8))

        navigator.turn_to(position, config.pickup_heading)
        navigator.pick_up(position)

        assert actuator.item_detail(1) == ItemStack(name=SAPLING, count=16)
        assert actuator.item_detail(2) == ItemStack(name="minecraft:bone_meal", count=8)
        assert navigator.gate.pause_count == 0

    def test_pauses_while_supply_is_empty(self, navigator: Navigator, position: Position, console) -> None:
        supply = navigator.actuator.add_container((1, 0, 0))
        console.on_request = lambda label: supply.put(ItemStack(name=SAPLING, count=4))

        navigator.turn_to(position, Heading.EAST)
        navigator.pick_up(position)

        assert console.requests == ["Pickup"]
        assert navigator.actuator.item_count(1) == 4


class TestDropAndRefuel:
    def test_drop_all_disposable_keeps_reserved(self, navigator: Navigator, position: Position, drop_chest) -> None:
        actuator = navigator.actuator
        actuator.give(1, SAPLING, 5)
        actuator.give(2, STONE, 10)
        actuator.give(9, "minecraft:dirt", 3)

        navigator.turn_to(position, navigator.config.drop_heading)
        navigator.drop_all_disposable(position)

        assert drop_chest.count() == 13
        assert actuator.item_count(1) == 5
        assert all(actuator.item_count(slot) == 0 for slot in range(2, 17))

    def test_refuel_at_home(self, navigator: Navigator, position: Position, fuel_chest) -> None:
        navigator.actuator.fuel = 0
        position.saved.copy_from(Pose(z=10))

        navigator.turn_to(position, Heading.WEST)
        navigator.refuel(position)

        assert navigator.actuator.fuel_level() == 80


class TestStateAndOperator:
    def test_save_checkpoints_current(self, navigator: Navigator, position: Position) -> None:
        navigator.move_up(position, 2)
        navigator.save(position)

        record = json.loads(navigator.store.path_for("position").read_text(encoding="utf-8"))
        assert record["saved"] == {"x": 0, "y": 2, "z": 0, "heading": "north"}
        assert position.saved == position.current

    def test_reload_after_restart(self, navigator: Navigator, position: Position, store: PositionStore) -> None:
        navigator.turn_to(position, Heading.EAST)
        navigator.move_forward(position, 4)

        restarted = Navigator(SimulatedActuator(), PositionStore(store.state_root), console=AutoAcknowledgeConsole())
        reloaded = restarted.create_or_load("position")

        assert reloaded.current == Pose(x=4, heading=Heading.EAST)

    def test_pause_for_operator(self, navigator: Navigator, console) -> None:
        navigator.pause_for_operator("Sapling placement")

        assert console.requests == ["Sapling placement"]
        assert navigator.gate.state is OperatorState.RUNNING

    def test_show_running_indicator(self, navigator: Navigator, console) -> None:
        navigator.show_running_indicator()

        assert console.running_shown == 1

    def test_fuel_required(self, navigator: Navigator, position: Position) -> None:
        assert navigator.fuel_required(position, 3) == 6
        assert navigator.fuel_required(position, 0) == 0
        with pytest.raises(InvalidStepCount):
            navigator.fuel_required(position, -2)


def test_from_settings_reads_config_file(tmp_path: Path) -> None:
    config_path = tmp_path / "navigator.yaml"
    NavigatorConfig(drop_heading=Heading.EAST, pickup_heading=Heading.NORTH).to_yaml(config_path)
    settings = Settings(state_root=tmp_path / "state", config_path=config_path)

    navigator = Navigator.from_settings(SimulatedActuator(), settings, console=AutoAcknowledgeConsole())

    assert navigator.config.drop_heading is Heading.EAST
    assert navigator.config.pickup_heading is Heading.NORTH
    assert navigator.store.state_root == tmp_path / "state"
