# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Operator gate for physical failures.

A blocked move, an empty fuel chest or a missing item cannot be fixed by
retrying on a timer; someone has to clear the obstruction or restock. The
gate parks the turtle in AWAITING_OPERATOR until the console reports an
acknowledgment, then goes back to RUNNING so the caller can retry the exact
same primitive.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING

import click

from turtlenav.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

logger = get_logger(__name__)


class OperatorState(str, Enum):
    RUNNING = "running"
    AWAITING_OPERATOR = "awaiting_operator"


class OperatorConsole(ABC):
    """Display/input collaborator used by the gate."""

    @abstractmethod
    def show_running(self) -> None:
        """Indicate that the program is running."""

    @abstractmethod
    def request_acknowledgment(self, action_label: str) -> None:
        """Report which action needs intervention and block until acknowledged."""


class TerminalConsole(OperatorConsole):
    """Interactive console: any key press acknowledges."""

    def show_running(self) -> None:
        click.clear()
        click.echo("Running...")

    def request_acknowledgment(self, action_label: str) -> None:
        click.echo(f"{action_label} unsuccessful. Press any key once resolved.")
        click.getchar()


class AutoAcknowledgeConsole(OperatorConsole):
    """Console that acknowledges immediately.

    Records every requested label. An optional callback runs before each
    acknowledgment, which lets tests and simulations play the operator
    (e.g. clear an obstruction or restock a chest).
    """

    def __init__(self, on_request: Callable[[str], None] | None = None) -> None:
        self.on_request = on_request
        self.requests: list[str] = []
        self.running_shown = 0

    def show_running(self) -> None:
        self.running_shown += 1

    def request_acknowledgment(self, action_label: str) -> None:
        self.requests.append(action_label)
        if self.on_request is not None:
            self.on_request(action_label)


class OperatorGate:
    """Running -> AwaitingOperator -> Running state machine."""

    def __init__(self, console: OperatorConsole) -> None:
        self.console = console
        self.state = OperatorState.RUNNING
        self.pause_count = 0

    def show_running(self) -> None:
        self.state = OperatorState.RUNNING
        self.console.show_running()

    def pause(self, action_label: str) -> None:
        """Block until the operator acknowledges the failed action."""
        self.pause_count += 1
        self.state = OperatorState.AWAITING_OPERATOR
        logger.warning("operator_pause", action=action_label, pauses=self.pause_count)

        self.console.request_acknowledgment(action_label)

        logger.info("operator_acknowledged", action=action_label)
        self.show_running()

    def retry_until(self, action_label: str, attempt: Callable[[], bool]) -> None:
        """Call attempt until it succeeds, pausing after every failure."""
        while not attempt():
            self.pause(action_label)
