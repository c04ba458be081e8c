"""
Per-post summary metadata: stored summary, variants, clicks, language,
generation timestamp and icon visibility.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..data.base import PostMetaRepository
from ..models.base import BaseModel, utc_now

logger = logging.getLogger(__name__)

META_SUMMARY = "_ai_blog_summary_post_summary"
META_SUMMARY_VARIANTS = "_ai_blog_summary_post_summary_variants"
META_SUMMARY_CLICKS = "_ai_blog_summary_summary_clicks"
META_SUMMARY_LANGUAGE = "_ai_blog_summary_summary_language"
META_SUMMARY_GENERATED = "_ai_blog_summary_summary_generated_at"
META_SHOW_ICON = "_ai_blog_summary_show_summary_icon"

DEFAULT_SUMMARY_LANGUAGE = "en"


@dataclass
class GlobalStats(BaseModel):
    """Site-wide summary statistics."""
    total_posts_with_summary: int = 0
    total_clicks: int = 0


class SummaryManager:
    """Reads and writes summary metadata for posts."""

    def __init__(self, meta_repository: PostMetaRepository):
        self.meta = meta_repository

    async def get_summary(self, post_id: int) -> Optional[str]:
        summary = await self.meta.get_meta(post_id, META_SUMMARY)
        return summary or None

    async def save_summary(self, post_id: int, summary: str) -> None:
        """Store a summary and stamp its generation time."""
        await self.meta.set_meta(post_id, META_SUMMARY, summary)
        await self.meta.set_meta(post_id, META_SUMMARY_GENERATED, utc_now().isoformat())
        logger.debug(f"Saved summary for post {post_id} ({len(summary)} chars)")

    async def get_variants(self, post_id: int) -> List[str]:
        variants = await self.meta.get_meta(post_id, META_SUMMARY_VARIANTS)
        return variants if isinstance(variants, list) else []

    async def save_variant(self, post_id: int, variant: str) -> List[str]:
        """Append a variant to the post's variant list and return the list."""
        variants = await self.get_variants(post_id)
        variants.append(variant)
        await self.meta.set_meta(post_id, META_SUMMARY_VARIANTS, variants)
        return variants

    async def get_clicks(self, post_id: int) -> int:
        clicks = await self.meta.get_meta(post_id, META_SUMMARY_CLICKS, 0)
        try:
            return int(clicks)
        except (TypeError, ValueError):
            return 0

    async def increment_clicks(self, post_id: int) -> int:
        """Add one click and return the new count."""
        return await self.meta.increment_int(post_id, META_SUMMARY_CLICKS)

    async def get_language(self, post_id: int) -> str:
        language = await self.meta.get_meta(post_id, META_SUMMARY_LANGUAGE)
        return language or DEFAULT_SUMMARY_LANGUAGE

    async def save_language(self, post_id: int, language: str) -> None:
        await self.meta.set_meta(post_id, META_SUMMARY_LANGUAGE, language)

    async def get_generated_at(self, post_id: int) -> Optional[datetime]:
        value = await self.meta.get_meta(post_id, META_SUMMARY_GENERATED)
        if not value:
            return None
        try:
            return datetime.fromisoformat(value)
        except (TypeError, ValueError):
            logger.warning(f"Bad generated_at value for post {post_id}: {value!r}")
            return None

    async def has_summary(self, post_id: int) -> bool:
        return bool(await self.get_summary(post_id))

    async def should_show_icon(self, post_id: int) -> bool:
        """Icon visibility; posts that never set the flag show the icon."""
        show = await self.meta.get_meta(post_id, META_SHOW_ICON)
        if show is None or show == "":
            return True
        return bool(show)

    async def set_show_icon(self, post_id: int, show: bool) -> None:
        await self.meta.set_meta(post_id, META_SHOW_ICON, bool(show))

    async def get_global_stats(self) -> GlobalStats:
        return GlobalStats(
            total_posts_with_summary=await self.meta.count_non_empty(META_SUMMARY),
            total_clicks=await self.meta.sum_int(META_SUMMARY_CLICKS),
        )

    async def describe(self, post_id: int) -> Dict[str, Any]:
        """Everything stored for a post, in API shape."""
        generated_at = await self.get_generated_at(post_id)
        return {
            "post_id": post_id,
            "summary": await self.get_summary(post_id),
            "language": await self.get_language(post_id),
            "generated_at": generated_at.isoformat() if generated_at else None,
            "variants": await self.get_variants(post_id),
            "clicks": await self.get_clicks(post_id),
            "show_icon": await self.should_show_icon(post_id),
        }
