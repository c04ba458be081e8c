"""
Rendered frontend routes: the Thunderbolt card feed and decorated post titles.
"""

from typing import Optional

from fastapi import APIRouter, Path, Query
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from ..models import ErrorResponse
from . import get_post_or_raise, get_post_repository, get_settings, get_summary_manager
from ...frontend.display import TitleDecorator
from ...frontend.thunderbolt import ThunderboltRenderer

router = APIRouter()


class DecoratedTitleResponse(BaseModel):
    post_id: int
    title: str


@router.get("/thunderbolt", response_class=HTMLResponse, summary="Thunderbolt card feed")
async def thunderbolt_feed(
    posts: Optional[int] = Query(None, ge=1, le=100, description="Number of cards"),
    orderby: str = Query("date", description="Sort field: date, title or id"),
    order: str = Query("DESC", description="ASC or DESC"),
):
    renderer = ThunderboltRenderer(get_settings(), get_summary_manager(), get_post_repository())
    return HTMLResponse(await renderer.render(limit=posts, order_by=orderby, order=order))


@router.get(
    "/posts/{post_id}/title",
    response_model=DecoratedTitleResponse,
    summary="Post title with summary icon",
    responses={400: {"model": ErrorResponse, "description": "Invalid post"}},
)
async def decorated_title(post_id: int = Path(..., ge=1, description="Post ID")):
    """Return the post title followed by the summary icon markup when it applies."""
    post = await get_post_or_raise(post_id)
    decorator = TitleDecorator(get_settings(), get_summary_manager(), get_post_repository())
    return DecoratedTitleResponse(post_id=post_id, title=await decorator.decorate(post.title, post_id))
