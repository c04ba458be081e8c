"""
REST API route modules.
"""

import asyncio

from fastapi import HTTPException

from ...exceptions import PostNotFoundError

# Service references (set by router.py)
_settings = None
_orchestrator = None
_summary_manager = None
_post_repository = None
_auto_generator = None
_sleep = asyncio.sleep


def set_services(
    settings=None,
    orchestrator=None,
    summary_manager=None,
    post_repository=None,
    auto_generator=None,
    sleep=None,
):
    """Set service references for route handlers."""
    global _settings, _orchestrator, _summary_manager, _post_repository, _auto_generator, _sleep
    _settings = settings
    _orchestrator = orchestrator
    _summary_manager = summary_manager
    _post_repository = post_repository
    _auto_generator = auto_generator
    _sleep = sleep or asyncio.sleep


def get_settings():
    """Get plugin settings."""
    return _settings


def get_orchestrator():
    """Get the generation orchestrator."""
    return _orchestrator


def get_auto_generator():
    """Get the auto generator (None when not configured)."""
    return _auto_generator


def get_sleep():
    """Get the awaitable used for the inter-call delay."""
    return _sleep


def get_summary_manager():
    """Get the summary manager, or fail with 503 before startup completes."""
    if _summary_manager is None:
        raise HTTPException(
            status_code=503,
            detail={"code": "UNAVAILABLE", "message": "Storage not initialized"},
        )
    return _summary_manager


def get_post_repository():
    """Get the post repository, or fail with 503 before startup completes."""
    if _post_repository is None:
        raise HTTPException(
            status_code=503,
            detail={"code": "UNAVAILABLE", "message": "Storage not initialized"},
        )
    return _post_repository


async def get_post_or_raise(post_id: int):
    """Load a post.

    Raises:
        PostNotFoundError: If the post does not exist (rendered as HTTP 400)
    """
    post = await get_post_repository().get_post(post_id)
    if not post:
        raise PostNotFoundError(post_id)
    return post


# Import routers
from .summaries import router as summaries_router
from .tracking import router as tracking_router
from .settings import router as settings_router
from .health import router as health_router
from .feed import router as feed_router
from .posts import router as posts_router

__all__ = [
    "summaries_router",
    "tracking_router",
    "settings_router",
    "health_router",
    "feed_router",
    "posts_router",
    "set_services",
    "get_settings",
    "get_orchestrator",
    "get_summary_manager",
    "get_post_repository",
    "get_post_or_raise",
    "get_sleep",
    "get_auto_generator",
]
