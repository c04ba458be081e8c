"""
Post save and backfill routes. Saving a published post triggers auto-generation.
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Path
from pydantic import BaseModel, Field

from . import get_auto_generator, get_post_repository
from ...models.post import Post, PostStatus

logger = logging.getLogger(__name__)

router = APIRouter()


class SavePostRequest(BaseModel):
    """Post fields as sent by the editor."""
    title: str
    content: str = ""
    status: PostStatus = PostStatus.DRAFT
    permalink: str = ""
    published_at: Optional[datetime] = None
    featured_image: Optional[str] = None
    category: Optional[str] = None


class SavePostResponse(BaseModel):
    post_id: int
    summary_generated: bool


@router.put("/posts/{post_id}", response_model=SavePostResponse, summary="Save post")
async def save_post(body: SavePostRequest, post_id: int = Path(..., ge=1, description="Post ID")):
    """Insert or replace a post, then run auto-generation for it."""
    post = Post(id=post_id, **body.model_dump())
    await get_post_repository().save_post(post)

    generated = False
    auto_generator = get_auto_generator()
    if auto_generator is not None:
        generated = await auto_generator.maybe_generate(post)

    return SavePostResponse(post_id=post_id, summary_generated=generated)


class BackfillRequest(BaseModel):
    """How many missing summaries to generate in one run."""
    limit: int = Field(50, ge=1, le=500)


class BackfillResponse(BaseModel):
    generated: int


@router.post("/backfill", response_model=BackfillResponse, summary="Summarize existing posts")
async def backfill(body: BackfillRequest):
    """Generate summaries for published posts that have none, one at a time."""
    auto_generator = get_auto_generator()
    if auto_generator is None:
        return BackfillResponse(generated=0)

    generated = await auto_generator.backfill(limit=body.limit)
    logger.info(f"Backfill requested (limit={body.limit}): {generated} generated")
    return BackfillResponse(generated=generated)
