"""structlog configuration for the service process."""

from __future__ import annotations

import logging
import sys

import structlog

LOG_LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def parse_log_level(level: str) -> int | None:
    """Map a level name to a logging level, or None if unrecognized."""
    return LOG_LEVELS.get(level.strip().lower())


def configure_logging(level: str = "info", json_format: bool = False) -> None:
    """Configure structlog for the process.

    Args:
        level: trace, debug, info, warn or error (case-insensitive).
            Anything else falls back to info.
        json_format: Render one JSON object per line instead of the
            console format
    """
    parsed = parse_log_level(level)
    renderer = (
        structlog.processors.JSONRenderer() if json_format else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(parsed or logging.INFO),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    logger = structlog.get_logger()
    if parsed is None:
        logger.warning("invalid_log_level", level=level, using="info")
    logger.info("logging_configured", level=level if parsed else "info", json_format=json_format)


__all__ = ["configure_logging", "parse_log_level"]
