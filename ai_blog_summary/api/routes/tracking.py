"""
Click tracking and statistics routes.
"""

from fastapi import APIRouter

from ..models import ErrorResponse, StatsResponse, TrackRequest, TrackResponse
from . import get_post_or_raise, get_summary_manager

router = APIRouter()


@router.post(
    "/track",
    response_model=TrackResponse,
    summary="Track summary click",
    responses={400: {"model": ErrorResponse, "description": "Invalid post"}},
)
async def track_interaction(body: TrackRequest):
    """Increment the click counter of a post."""
    await get_post_or_raise(body.post_id)
    count = await get_summary_manager().increment_clicks(body.post_id)
    return TrackResponse(success=True, count=count)


@router.get("/stats", response_model=StatsResponse, summary="Global statistics")
async def get_stats():
    stats = await get_summary_manager().get_global_stats()
    return StatsResponse(**stats.to_dict())
