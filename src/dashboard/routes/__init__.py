"""Route modules for the agent dashboard API."""

from .dashboard import router as dashboard_router
from .skills import router as skills_router
from .log_level import router as log_level_router

__all__ = [
    'dashboard_router',
    'skills_router',
    'log_level_router',
]
