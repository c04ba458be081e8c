"""
Summary generation and per-post summary routes.
"""

import logging

from fastapi import APIRouter, HTTPException, Path

from ..models import (
    ErrorResponse,
    GenerateRequest,
    GenerateResponse,
    PostSummaryResponse,
    ShowIconRequest,
    ShowIconResponse,
)
from . import get_orchestrator, get_post_or_raise, get_settings, get_sleep, get_summary_manager
from ...models.summary import GenerationOptions, SummaryResult
from ...summarization.provider import CompletionErrorKind

logger = logging.getLogger(__name__)

router = APIRouter()

GENERIC_FAILURE_MESSAGE = "Summary generation failed"

# Failures whose message carries no provider-side detail
PUBLIC_ERROR_CODES = {
    "CONFIGURATION_ERROR",
    CompletionErrorKind.CONFIGURATION.value,
    CompletionErrorKind.MAX_RETRIES.value,
    "TIMEOUT",
}


def public_error_message(result: SummaryResult) -> str:
    """Message safe to return to API clients for a failed result."""
    if result.error_code in PUBLIC_ERROR_CODES and result.error:
        return result.error
    return GENERIC_FAILURE_MESSAGE


@router.post(
    "/generate",
    response_model=GenerateResponse,
    summary="Generate summary",
    description="Generate and store an AI summary for a post.",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid post or API key not configured"},
        500: {"model": ErrorResponse, "description": "Generation failed"},
    },
)
async def generate_summary(body: GenerateRequest):
    """Generate a summary for a post and persist it."""
    post = await get_post_or_raise(body.post_id)
    settings = get_settings()
    orchestrator = get_orchestrator()

    if not orchestrator.is_available():
        raise HTTPException(
            status_code=400,
            detail={"code": "no_api_key", "message": "API key not configured"},
        )

    if settings.api_delay > 0:
        await get_sleep()(settings.api_delay_seconds)

    options = GenerationOptions.create(body.length, body.language, settings.output_style)
    result = await orchestrator.generate(post.summary_source(), options)

    if not result.success:
        logger.warning(f"Summary generation failed for post {post.id}: [{result.error_code}] {result.error}")
        raise HTTPException(
            status_code=500,
            detail={"code": "generation_failed", "message": public_error_message(result)},
        )

    summary_manager = get_summary_manager()
    await summary_manager.save_summary(post.id, result.summary or "")
    await summary_manager.save_language(post.id, options.language)
    await summary_manager.save_variant(post.id, result.summary or "")

    return GenerateResponse(success=True, summary=result.summary or "", model=result.model)


@router.get(
    "/posts/{post_id}/summary",
    response_model=PostSummaryResponse,
    summary="Get post summary",
    responses={400: {"model": ErrorResponse, "description": "Invalid post"}},
)
async def get_post_summary(post_id: int = Path(..., ge=1, description="Post ID")):
    """Return the stored summary and its metadata."""
    await get_post_or_raise(post_id)
    data = await get_summary_manager().describe(post_id)
    return PostSummaryResponse(**data)


@router.put(
    "/posts/{post_id}/show-icon",
    response_model=ShowIconResponse,
    summary="Toggle summary icon",
    responses={400: {"model": ErrorResponse, "description": "Invalid post"}},
)
async def set_show_icon(body: ShowIconRequest, post_id: int = Path(..., ge=1, description="Post ID")):
    """Show or hide the summary icon next to a post title."""
    await get_post_or_raise(post_id)
    summary_manager = get_summary_manager()
    await summary_manager.set_show_icon(post_id, body.show)
    return ShowIconResponse(post_id=post_id, show_icon=await summary_manager.should_show_icon(post_id))
