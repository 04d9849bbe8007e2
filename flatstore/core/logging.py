"""
Structured logging setup.

Usage:
    from flatstore.core.logging import configure_logging

    configure_logging(level="DEBUG", fmt="text")

    logger = structlog.get_logger(__name__)
    logger.info("Collection loaded", collection="Bookmarks", count=3)
"""

from __future__ import annotations

import logging

import structlog


def configure_logging(level: str = "INFO", fmt: str = "json") -> None:
    """
    Configure structlog for the process.

    Args:
        level: Minimum log level name (DEBUG, INFO, WARNING, ...)
        fmt: "json" for machine-readable lines, "text" for console output
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: {level}")

    renderer = (
        structlog.processors.JSONRenderer()
        if fmt == "json"
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        cache_logger_on_first_use=False,
    )
