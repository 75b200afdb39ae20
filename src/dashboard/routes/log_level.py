"""Runtime logging control routes."""

import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from ..logging_config import get_log_level, get_logger, set_log_level

logger = get_logger(__name__, namespace='api')

router = APIRouter(prefix="/api", tags=["logging"])

VALID_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class LogLevelRequest(BaseModel):
    level: str


@router.get("/logging")
def get_logging():
    """Get the current log level."""
    return {'level': get_log_level()}


@router.post("/logging")
def update_logging(request: LogLevelRequest):
    """Set the log level for all dashboard loggers.

    Args:
        request: Level name, one of DEBUG, INFO, WARNING, ERROR, CRITICAL
    """
    level = request.level.upper()
    if level not in VALID_LEVELS:
        raise HTTPException(400, f"Invalid log level: {request.level}")

    set_log_level(level)
    logger.info(f"Log level set to {level}")
    return {'level': logging.getLevelName(logging.getLogger().getEffectiveLevel())}
