"""
Main REST API router.
"""

import logging

from fastapi import APIRouter

from ..config.constants import API_NAMESPACE
from .routes import (
    feed_router,
    health_router,
    posts_router,
    settings_router,
    summaries_router,
    tracking_router,
)

logger = logging.getLogger(__name__)


def create_api_router(
    settings=None,
    orchestrator=None,
    summary_manager=None,
    post_repository=None,
    auto_generator=None,
    sleep=None,
) -> APIRouter:
    """Create the REST API router.

    Args:
        settings: Plugin settings
        orchestrator: Generation orchestrator for summaries
        summary_manager: Summary metadata manager
        post_repository: Post repository for post lookups
        auto_generator: Auto generator run when a post is saved
        sleep: Awaitable used for the inter-call delay

    Returns:
        FastAPI router with all endpoints under the API namespace
    """
    # Store service references for routes
    from . import routes
    routes.set_services(
        settings=settings,
        orchestrator=orchestrator,
        summary_manager=summary_manager,
        post_repository=post_repository,
        auto_generator=auto_generator,
        sleep=sleep,
    )

    router = APIRouter(prefix=API_NAMESPACE)

    router.include_router(summaries_router, tags=["Summaries"])
    router.include_router(posts_router, tags=["Posts"])
    router.include_router(tracking_router, tags=["Tracking"])
    router.include_router(settings_router, tags=["Settings"])
    router.include_router(health_router, tags=["Health"])
    router.include_router(feed_router, tags=["Feed"])

    logger.debug(f"REST API routes registered under {API_NAMESPACE}")
    return router
