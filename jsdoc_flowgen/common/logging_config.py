"""
Structured logging setup (structlog).

Level comes from settings (JSDOC_FLOWGEN_LOG_LEVEL) with LOG_LEVEL as an override,
console rendering by default and JSON rendering for machine consumption.
"""

import logging
import os

import structlog
from structlog.processors import JSONRenderer


def get_log_level(default: str = "INFO") -> str:
    """Environment-based log level"""
    return os.getenv("LOG_LEVEL", default).upper()


def configure_logging(
    level: str | None = None,
    json_format: bool = False,
):
    """
    Configure structured logging.

    Args:
        level: Log level (uses environment if None)
        json_format: Render events as JSON
    """
    if level is None:
        level = get_log_level()

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_format:
        processors.append(JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # stdlib logging carries the rendered message
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level),
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger"""
    return structlog.get_logger(name)
