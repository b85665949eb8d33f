# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Exception hierarchy for navigation operations.

Every exception here is a precondition failure: it is raised synchronously
and never retried. Physical failures (obstructions, empty inventories) are
not exceptions; they block on the operator gate instead.
"""


class NavigationError(Exception):
    """Base exception for navigation operations."""

    pass


class MalformedPosition(NavigationError, ValueError):
    """Position is missing a field or holds a wrongly typed coordinate."""

    pass


class InvalidDirection(NavigationError, ValueError):
    """Heading is not one of the four recognized headings."""

    pass


class InvalidStepCount(NavigationError, ValueError):
    """Step count is negative or not an integer."""

    pass


class CorruptState(NavigationError):
    """Persisted position record could not be parsed or validated."""

    pass


class StorageUnavailable(NavigationError):
    """Persisted position record cannot be opened for writing."""

    pass
