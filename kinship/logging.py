"""Structlog-based logging for the kinship graph.

Library code logs through ``get_logger``; nothing under ``kinship`` prints.
"""
from __future__ import annotations

from typing import Literal

import logging
import structlog

from kinship.config import settings

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def configure_logging(level: LogLevel = "INFO", json_output: bool = True) -> None:
    logging.basicConfig(format="%(message)s", level=getattr(logging, level))
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="ISO"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level)),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = "kinship"):
    return structlog.get_logger(name)


# Initialize default config
configure_logging(settings.logging.level.upper(), settings.logging.json_output)
