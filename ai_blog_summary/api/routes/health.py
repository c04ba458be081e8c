"""
Health check route.
"""

import logging

from fastapi import APIRouter

from ..models import HealthResponse
from . import get_orchestrator, get_summary_manager
from ... import __version__

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health_check():
    """Report service status. Always 200 so load balancers can read the body."""
    orchestrator = get_orchestrator()
    database = "healthy"
    try:
        await get_summary_manager().get_global_stats()
    except Exception as e:
        logger.warning(f"Health check database probe failed: {e}")
        database = "unhealthy"

    return HealthResponse(
        status="healthy" if database == "healthy" else "degraded",
        version=__version__,
        api_key_set=bool(orchestrator and orchestrator.is_available()),
        database=database,
    )
