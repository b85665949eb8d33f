# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Pytest configuration and fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from turtlenav.actuator.base import ItemStack
from turtlenav.actuator.simulated import Container, SimulatedActuator
from turtlenav.config import NavigatorConfig
from turtlenav.logging import configure_logging
from turtlenav.navigation import Navigator, Position, PositionStore
from turtlenav.operator import AutoAcknowledgeConsole
from turtlenav.settings import Settings

if TYPE_CHECKING:
    from pathlib import Path

COAL = "minecraft:coal"


@pytest.fixture(scope="session", autouse=True)
def _quiet_logging() -> None:
    configure_logging(Settings(log_level="WARNING"))


@pytest.fixture
def state_root(tmp_path: Path) -> Path:
    """Directory for position records."""
    return tmp_path / "state"


@pytest.fixture
def store(state_root: Path) -> PositionStore:
    return PositionStore(state_root)


@pytest.fixture
def config() -> NavigatorConfig:
    """Default home layout: drop SOUTH, refuel WEST, pickup EAST."""
    return NavigatorConfig()


@pytest.fixture
def actuator() -> SimulatedActuator:
    """Simulated turtle at home with plenty of fuel."""
    return SimulatedActuator(fuel=1000)


@pytest.fixture
def drop_chest(actuator: SimulatedActuator) -> Container:
    return actuator.add_container((0, 0, -1))


@pytest.fixture
def fuel_chest(actuator: SimulatedActuator) -> Container:
    return actuator.add_container(
        (-1, 0, 0),
        Container(items=[ItemStack(name=COAL, count=1) for _ in range(20)]),
    )


@pytest.fixture
def console() -> AutoAcknowledgeConsole:
    return AutoAcknowledgeConsole()


@pytest.fixture
def navigator(
    actuator: SimulatedActuator,
    store: PositionStore,
    console: AutoAcknowledgeConsole,
    config: NavigatorConfig,
) -> Navigator:
    return Navigator(actuator, store, console=console, config=config)


@pytest.fixture
def position(navigator: Navigator) -> Position:
    return navigator.create_or_load("position")
