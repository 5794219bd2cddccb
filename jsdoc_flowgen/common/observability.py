"""
Observability entry point.

Loggers are initialised on first use from settings.
"""

from typing import Any

from jsdoc_flowgen.common import logging_config

# Logger cache
_LOGGER_CACHE: dict[str, Any] = {}
_INITIALIZED = False


def get_logger(name: str):
    """
    Get a logger (auto-configured on first call).

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured structlog logger
    """
    global _INITIALIZED

    if not _INITIALIZED:
        _initialize_logging()
        _INITIALIZED = True

    if name in _LOGGER_CACHE:
        return _LOGGER_CACHE[name]

    logger = logging_config.get_logger(name)
    _LOGGER_CACHE[name] = logger
    return logger


def _initialize_logging():
    """Configure logging from settings"""
    from jsdoc_flowgen.config import get_settings

    settings = get_settings()
    logging_config.configure_logging(
        level=logging_config.get_log_level(settings.log_level),
        json_format=settings.json_logs,
    )


def reset_logging():
    """Reset logging state (for tests)"""
    global _INITIALIZED
    _INITIALIZED = False
    _LOGGER_CACHE.clear()
