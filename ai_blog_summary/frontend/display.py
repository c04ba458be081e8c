"""
Summary icon shown next to post titles.
"""

import logging
from datetime import datetime
from typing import Optional, Set
from xml.etree.ElementTree import Element, tostring

from ..config.settings import PluginSettings
from ..data.base import PostRepository
from ..services.summary_manager import SummaryManager

logger = logging.getLogger(__name__)

ICON_SIZE_CLASSES = {
    "small": "ai-summary-icon-small",
    "medium": "ai-summary-icon-medium",
    "large": "ai-summary-icon-large",
}

ICON_GLYPH = "⚡"


def format_post_date(value: Optional[datetime]) -> str:
    """Short display date such as ``Mar 5, 2024``."""
    if not value:
        return ""
    return f"{value:%b} {value.day}, {value.year}"


class TitleDecorator:
    """Appends the summary icon to post titles.

    Rendering a post may render its title again (a theme that prints the
    title inside the popup data, for example). Post ids being decorated are
    tracked per instance and a nested call for one of them returns the
    title untouched.
    """

    def __init__(self,
                 settings: PluginSettings,
                 summary_manager: SummaryManager,
                 post_repository: PostRepository):
        self.settings = settings
        self.summary_manager = summary_manager
        self.post_repository = post_repository
        self._rendering: Set[int] = set()

    def is_rendering(self, post_id: int) -> bool:
        return post_id in self._rendering

    async def decorate(self, title: str, post_id: int) -> str:
        """Return ``title`` followed by the icon markup when the post has a visible summary.

        Args:
            title: Title as it would be displayed
            post_id: ID of the post the title belongs to

        Returns:
            The decorated title, or the original title
        """
        if not post_id or post_id in self._rendering:
            return title

        self._rendering.add(post_id)
        try:
            icon = await self._render_icon(post_id)
        finally:
            self._rendering.discard(post_id)

        if not icon:
            return title
        return f"{title} {icon}"

    async def _render_icon(self, post_id: int) -> str:
        if not await self.summary_manager.has_summary(post_id):
            return ""
        if not await self.summary_manager.should_show_icon(post_id):
            return ""

        post = await self.post_repository.get_post(post_id)
        if not post:
            logger.debug(f"Summary exists for missing post {post_id}")
            return ""

        summary = await self.summary_manager.get_summary(post_id) or ""
        size_class = ICON_SIZE_CLASSES.get(self.settings.icon_size, ICON_SIZE_CLASSES["medium"])

        # Raw post title, never the decorated one
        icon = Element("span", {
            "class": f"ai-summary-icon {size_class}",
            "data-post-id": str(post.id),
            "data-summary": summary,
            "data-title": post.title,
            "data-permalink": post.permalink,
            "data-date": format_post_date(post.published_at),
            "data-image": post.featured_image or "",
            "data-category": post.category or "",
            "style": f"color: {self.settings.icon_color};",
            "aria-label": "View summary",
            "role": "button",
            "tabindex": "0",
        })
        icon.text = ICON_GLYPH
        return tostring(icon, encoding="unicode")
