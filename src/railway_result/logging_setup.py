"""
structlog configuration for applications using railway_result.

The library itself only calls structlog.get_logger(); how events are rendered
is decided once, at the application's composition root:

    from railway_result import RailwaySettings, configure_from_settings

    configure_from_settings(RailwaySettings())
"""

from __future__ import annotations

import logging
from typing import Literal

import structlog

from railway_result.config import RailwaySettings


def configure_structlog(
    log_level: str = "INFO",
    renderer: Literal["console", "json"] = "console",
    cache_logger_on_first_use: bool = True,
) -> None:
    """
    Configure structlog for structured logging.

    console: colored, human-readable output for development.
    json: one JSON object per line for machines.
    Unknown level names fall back to INFO.
    """
    processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if renderer == "json":
        # JSON cannot hold a traceback object
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=cache_logger_on_first_use,
    )


def configure_from_settings(settings: RailwaySettings) -> None:
    """Apply RailwaySettings to structlog."""
    configure_structlog(
        log_level=settings.log_level,
        renderer=settings.log_format,
        cache_logger_on_first_use=settings.cache_loggers,
    )
