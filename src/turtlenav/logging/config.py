# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""structlog setup shared by the library and the CLI.

Logs always go to stderr. stdout is reserved for the operator console
("Running...", "<action> unsuccessful. Press any key once resolved.") and
for command output such as `turtlenav status`.

Level and format come from Settings (TURTLENAV_LOG_LEVEL,
TURTLENAV_LOG_FORMAT); "json" emits one object per line for log shippers,
"console" renders for a terminal.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from turtlenav.settings import Settings

__all__ = ["bind_context", "configure_logging", "get_logger"]


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog once at startup.

    Args:
        settings: Settings instance (will be created if None)
    """
    if settings is None:
        from turtlenav.settings import Settings

        settings = Settings()

    log_level = getattr(logging, settings.log_level.upper(), logging.WARNING)
    if settings.log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        # Resolve sys.stderr per logger so redirected streams (CliRunner, capsys) are honored
        logger_factory=lambda *args: structlog.PrintLogger(file=sys.stderr),
    )


def bind_context(**values: object) -> None:
    """Attach key/value pairs (e.g. storage_key) to every following log event."""
    structlog.contextvars.bind_contextvars(**values)


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    return structlog.get_logger(name)
