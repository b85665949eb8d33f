# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""File-backed persistence for position records.

One JSON record per storage key, always fully overwritten. Writes go to a
temporary file that atomically replaces the record, so a crash mid-write
leaves the previous record intact.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from turtlenav.errors import CorruptState, InvalidDirection, MalformedPosition, StorageUnavailable
from turtlenav.logging import get_logger
from turtlenav.navigation.position import Position, check_position
from turtlenav.paths import record_path

logger = get_logger(__name__)


class PositionStore:
    """Loads and persists Position records under a state root."""

    def __init__(self, state_root: str | Path) -> None:
        self.state_root = Path(state_root)

    def path_for(self, storage_key: str) -> Path:
        return record_path(self.state_root, storage_key)

    def exists(self, storage_key: str) -> bool:
        return self.path_for(storage_key).exists()

    def create_or_load(self, storage_key: str) -> Position:
        """Load the position saved under storage_key, or start at the origin.

        The origin is (0, 0, 0) facing NORTH for both the current and saved
        pose. The returned position is written out before returning.

        Raises:
            CorruptState: If an existing record cannot be parsed or validated
            StorageUnavailable: If the record cannot be written
        """
        path = self.path_for(storage_key)

        if path.exists():
            position = self._load(path, storage_key)
            logger.info("position_loaded", storage_key=storage_key, current=position.current.summary())
        else:
            position = Position(storage_key=storage_key)
            logger.info("position_created", storage_key=storage_key)

        self.persist(position)
        return position

    def discard(self, storage_key: str) -> None:
        """Remove the record for storage_key, if any."""
        path = self.path_for(storage_key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageUnavailable(f"Unable to remove file: {path}") from e
        logger.info("position_discarded", storage_key=storage_key)

    def persist(self, position: Position) -> None:
        """Overwrite the record for this position.

        Raises:
            StorageUnavailable: If the record cannot be written
        """
        path = self.path_for(position.storage_key)
        tmp = path.with_suffix(".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(position.to_record(), indent=2), encoding="utf-8")
            tmp.replace(path)
        except OSError as e:
            raise StorageUnavailable(f"Unable to open file: {path}") from e
        logger.debug("position_persisted", storage_key=position.storage_key, current=position.current.summary())

    def read_record(self, storage_key: str) -> dict[str, Any]:
        """Return the raw persisted record, validated.

        Raises:
            CorruptState: If the record cannot be parsed or validated
            StorageUnavailable: If no record exists or it cannot be read
        """
        path = self.path_for(storage_key)
        return self._load(path, storage_key).to_record()

    def _load(self, path: Path, storage_key: str) -> Position:
        try:
            raw = path.read_bytes()
        except OSError as e:
            raise StorageUnavailable(f"Unable to open file: {path}") from e

        try:
            record = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise CorruptState(f"Unable to deserialize position data: {path}") from e

        try:
            return Position.from_record(record, storage_key)
        except (MalformedPosition, InvalidDirection) as e:
            raise CorruptState(f"Invalid position data in {path}: {e}") from e
