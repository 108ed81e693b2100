"""structlog setup shared by the API server and scripts."""

from __future__ import annotations

import logging
import os

import structlog


def configure_logging(level: str | None = None, *, json: bool = False) -> None:
    """Configure structlog processors and the minimum log level.

    Args:
        level: Level name (default: BEAMDEX_LOG_LEVEL or "INFO")
        json: Render JSON lines instead of the console renderer
    """
    level_name = (level or os.environ.get("BEAMDEX_LOG_LEVEL", "INFO")).upper()
    min_level = logging.getLevelNamesMapping().get(level_name, logging.INFO)

    renderer = structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
    )


__all__ = ["configure_logging"]
