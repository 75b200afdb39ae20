"""Dashboard data routes."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..aggregation.snapshot import build_snapshot
from ..logging_config import get_logger

logger = get_logger(__name__, namespace='api')

router = APIRouter(prefix="/api", tags=["dashboard"])


@router.get("/data")
def get_data():
    """Get a freshly computed dashboard snapshot.

    Returns:
        Snapshot with timestamp, system totals, agents and usage breakdowns,
        or a 500 response with an error message if the pass fails
    """
    try:
        return JSONResponse(content=build_snapshot())
    except Exception as e:
        logger.error(f"Failed to build snapshot: {e}")
        return JSONResponse(status_code=500, content={'error': str(e)})


@router.get("/health")
def health():
    return {'ok': True}
