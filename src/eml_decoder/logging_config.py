"""
Structured logging configuration using structlog.

The decoder itself only emits debug events (dropped parts, recursion) and a
single summary per parsed message; the API and CLI call setup_logging() once
at startup.
"""

import logging
import sys
from typing import Optional

import structlog

from .config import settings


def setup_logging(log_level: Optional[str] = None, log_json: Optional[bool] = None) -> None:
    """
    Configure structlog for the process.

    Args:
        log_level: Level name overriding settings.log_level
        log_json: Render JSON lines instead of console output; defaults to settings.log_json
    """
    level = (log_level or settings.log_level).upper()
    render_json = settings.log_json if log_json is None else log_json

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            (
                structlog.processors.JSONRenderer()
                if render_json
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
