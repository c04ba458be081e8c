"""
Settings route.
"""

from fastapi import APIRouter

from ..models import SettingsResponse
from . import get_settings

router = APIRouter()


@router.get(
    "/settings",
    response_model=SettingsResponse,
    summary="Provider settings",
    description="Current provider configuration. The API key itself is never returned.",
)
async def read_settings():
    return SettingsResponse(**get_settings().public_view())
