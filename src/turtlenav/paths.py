# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Filesystem paths and state-root helpers."""

from __future__ import annotations

import os
import re
from pathlib import Path

from platformdirs import user_data_dir

from turtlenav.errors import StorageUnavailable

ENV_STATE_ROOT = "TURTLENAV_STATE_ROOT"

_STORAGE_KEY_RE = re.compile(r"^[A-Za-z0-9_-][A-Za-z0-9_.-]*$")


def default_state_root() -> Path:
    """Get the default directory for persisted position records."""
    env_root = os.getenv(ENV_STATE_ROOT)
    if env_root:
        return Path(env_root)
    return Path(user_data_dir("turtlenav", "turtlenav"))


def record_path(state_root: Path, storage_key: str) -> Path:
    """Resolve a storage key to its record file inside the state root.

    Args:
        state_root: Directory holding position records
        storage_key: Opaque record name (e.g. "position")

    Returns:
        Resolved path of the JSON record

    Raises:
        StorageUnavailable: If the key is not a plain name or escapes the root
    """
    if not isinstance(storage_key, str) or not _STORAGE_KEY_RE.match(storage_key):
        raise StorageUnavailable(f"Invalid storage key: {storage_key!r}")

    root_resolved = state_root.resolve()
    resolved = (root_resolved / f"{storage_key}.json").resolve()
    if resolved.parent != root_resolved:
        raise StorageUnavailable(f"Storage key outside state root: {storage_key!r}")

    return resolved
