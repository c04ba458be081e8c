"""
Automatic summary generation for published posts.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from ..config.settings import PluginSettings
from ..data.base import PostRepository
from ..models.post import Post
from ..summarization.engine import GenerationOrchestrator
from .summary_manager import SummaryManager

logger = logging.getLogger(__name__)

BACKFILL_PAGE_SIZE = 20


class AutoGenerator:
    """Generates summaries for newly published posts, one call at a time.

    Calls are spaced by the configured ``api_delay`` so a burst of
    publications does not trip provider rate limits.
    """

    def __init__(self,
                 settings: PluginSettings,
                 orchestrator: GenerationOrchestrator,
                 summary_manager: SummaryManager,
                 post_repository: Optional[PostRepository] = None,
                 sleep: Optional[Callable[[float], Awaitable[None]]] = None):
        self.settings = settings
        self.orchestrator = orchestrator
        self.summary_manager = summary_manager
        self.post_repository = post_repository
        self._sleep = sleep or asyncio.sleep

    @property
    def enabled(self) -> bool:
        return self.settings.auto_generate

    async def maybe_generate(self, post: Post) -> bool:
        """Generate and store a summary for ``post`` when it needs one.

        Args:
            post: The post that was just saved

        Returns:
            True if a summary was generated and stored
        """
        if not self.enabled:
            return False

        if not post.is_published:
            return False

        if await self.summary_manager.has_summary(post.id):
            return False

        if not self.orchestrator.is_available():
            logger.debug(f"Skipping auto-generation for post {post.id}: no API key")
            return False

        if self.settings.api_delay > 0:
            await self._sleep(self.settings.api_delay_seconds)

        options = self.settings.default_options()
        result = await self.orchestrator.generate(post.summary_source(), options)

        if not result.success:
            logger.warning(f"Auto-generation failed for post {post.id}: {result.error}")
            return False

        await self.summary_manager.save_summary(post.id, result.summary or "")
        await self.summary_manager.save_language(post.id, options.language)
        logger.info(f"Auto-generated summary for post {post.id}")
        return True

    async def backfill(self, limit: int = 50) -> int:
        """Summarize published posts that have none yet, sequentially.

        Args:
            limit: Maximum number of summaries to generate

        Returns:
            Number of summaries generated
        """
        if not self.enabled or self.post_repository is None:
            return 0

        generated = 0
        offset = 0
        while generated < limit:
            posts = await self.post_repository.list_published(limit=BACKFILL_PAGE_SIZE, offset=offset)
            if not posts:
                break
            offset += len(posts)

            for post in posts:
                if generated >= limit:
                    break
                if await self.maybe_generate(post):
                    generated += 1

        logger.info(f"Backfill finished: {generated} summaries generated")
        return generated
