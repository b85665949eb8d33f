# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Home layout and inventory configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from turtlenav.logging import get_logger
from turtlenav.navigation.direction import Heading

logger = get_logger(__name__)


class NavigatorConfig(BaseModel):
    """Immutable configuration built once at startup.

    The origin pose is (0, 0, 0) facing NORTH. Up to three inventories sit
    next to it; their headings are relative to that origin pose. Items
    collected into the disposable slot range are deposited into the drop
    inventory. Slots before the range hold materials the task program needs
    (e.g. saplings) and are never dropped.
    """

    drop_heading: Heading = Heading.SOUTH
    refuel_heading: Heading = Heading.WEST
    pickup_heading: Heading = Heading.EAST

    first_disposable_slot: int = Field(default=2, ge=1)
    last_disposable_slot: int = Field(default=16, ge=1)
    inventory_size: int = Field(default=16, ge=1)

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("drop_heading", "refuel_heading", "pickup_heading", mode="before")
    @classmethod
    def _parse_heading(cls, value: Any) -> Heading:
        return Heading.parse(value)

    @model_validator(mode="after")
    def _check_slots(self) -> NavigatorConfig:
        if not self.first_disposable_slot <= self.last_disposable_slot <= self.inventory_size:
            raise ValueError(
                "disposable slots must satisfy "
                "first_disposable_slot <= last_disposable_slot <= inventory_size"
            )
        return self

    @property
    def disposable_slots(self) -> range:
        return range(self.first_disposable_slot, self.last_disposable_slot + 1)

    @property
    def reserved_slots(self) -> range:
        """Slots ahead of the disposable range, filled by pick_up."""
        return range(1, self.first_disposable_slot)

    @classmethod
    def from_yaml(cls, path: Path | str) -> NavigatorConfig:
        path = Path(path)
        logger.info("config_loading", path=str(path))
        data = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(data)

    def to_yaml(self, path: Path | str) -> None:
        path = Path(path)
        logger.info("config_saving", path=str(path))
        data = self.model_dump(mode="json")
        path.write_text(yaml.dump(data, default_flow_style=False, sort_keys=False))


def load_config(path: Path | str | None = None) -> NavigatorConfig:
    if path is None:
        return NavigatorConfig()
    return NavigatorConfig.from_yaml(path)
