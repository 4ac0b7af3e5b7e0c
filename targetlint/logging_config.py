"""Structured logging setup shared by the linter and its collaborators."""

import logging

import structlog

from targetlint.config import get_settings


def configure_logging() -> None:
    """Configure structlog from the current settings.

    DEBUG switches to the human-readable console renderer; otherwise events
    are emitted as JSON lines.
    """
    settings = get_settings()
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if settings.DEBUG else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )
