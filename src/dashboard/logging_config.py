"""Logging configuration for the agent dashboard.

This module provides:
- Namespace-based loggers for filtering (dash.<namespace>)
- Log level selection from the environment
- Runtime log level adjustment
"""

import logging
import os
import sys
from typing import Optional


# Log namespaces for filtering
NAMESPACES = {
    'ws': 'WebSocket',
    'api': 'API Routes',
    'ingest': 'Transcript Ingestion',
    'aggregate': 'Aggregation',
    'skills': 'Skill Catalog',
}

LOGGER_PREFIX = 'dash'


def _get_log_level_from_env() -> int:
    """Get log level from environment variable."""
    env_level = os.environ.get('DASH_LOG_LEVEL', 'INFO').upper()
    return getattr(logging, env_level, logging.INFO)


def setup_logging(
    level: Optional[int] = None,
    log_format: Optional[str] = None,
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Logging level (default: from DASH_LOG_LEVEL env var or INFO)
        log_format: Custom format string (default: timestamp - name - level - message)
    """
    log_level = level if level is not None else _get_log_level_from_env()

    if log_format is None:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(log_format))
    root_logger.addHandler(console_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    for namespace in NAMESPACES:
        logging.getLogger(f'{LOGGER_PREFIX}.{namespace}').setLevel(log_level)


def set_log_level(level: str | int) -> int:
    """
    Set log level at runtime.

    Args:
        level: Level name ('DEBUG', 'INFO', etc.) or logging constant

    Returns:
        The numeric level that was applied
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logging.getLogger().setLevel(level)

    for namespace in NAMESPACES:
        logging.getLogger(f'{LOGGER_PREFIX}.{namespace}').setLevel(level)

    for handler in logging.getLogger().handlers:
        handler.setLevel(level)

    return level


def get_log_level() -> str:
    """Return the root logger's level name."""
    return logging.getLevelName(logging.getLogger().getEffectiveLevel())


def get_logger(name: str, namespace: Optional[str] = None) -> logging.Logger:
    """
    Get a logger with the given name.

    Args:
        name: Logger name (typically __name__)
        namespace: Optional namespace (ws, api, ingest, ...)

    Returns:
        Configured logger instance
    """
    if namespace and namespace in NAMESPACES:
        return logging.getLogger(f'{LOGGER_PREFIX}.{namespace}')
    return logging.getLogger(name)
