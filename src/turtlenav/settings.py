# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Application settings."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from turtlenav.paths import default_state_root


class Settings(BaseSettings):
    state_root: Path = Field(default_factory=default_state_root)
    log_level: str = "WARNING"
    log_format: Literal["console", "json"] = "console"
    config_path: Path | None = None

    model_config = SettingsConfigDict(
        env_prefix="TURTLENAV_",
        extra="ignore",
    )
