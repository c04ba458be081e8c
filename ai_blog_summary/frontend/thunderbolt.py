"""
Thunderbolt card feed: a full-page slider of summarized posts.
"""

import logging
from typing import List, Optional
from urllib.parse import quote
from xml.etree.ElementTree import Element, SubElement, tostring

from ..config.settings import PluginSettings
from ..data.base import PostRepository
from ..models.post import Post
from ..services.summary_manager import SummaryManager
from ..summarization.summary_formatter import summary_items
from .display import format_post_date

logger = logging.getLogger(__name__)

NO_POSTS_MESSAGE = "No thunderbolt news found."


def share_links(permalink: str, title: str) -> List[tuple]:
    """(network, url) pairs for the share sidebar."""
    url = quote(permalink, safe="")
    text = quote(title, safe="")
    return [
        ("facebook", f"https://www.facebook.com/sharer/sharer.php?u={url}"),
        ("twitter", f"https://twitter.com/intent/tweet?url={url}&text={text}"),
        ("whatsapp", f"https://wa.me/?text={url}"),
        ("reddit", f"https://www.reddit.com/submit?url={url}&title={text}"),
        ("email", f"mailto:?subject={text}&body={url}"),
    ]


class ThunderboltRenderer:
    """Renders published, summarized posts as swipeable cards."""

    def __init__(self,
                 settings: PluginSettings,
                 summary_manager: SummaryManager,
                 post_repository: PostRepository):
        self.settings = settings
        self.summary_manager = summary_manager
        self.post_repository = post_repository

    async def render(self,
                     limit: Optional[int] = None,
                     order_by: str = "date",
                     order: str = "DESC") -> str:
        """Render the card feed container.

        Args:
            limit: Maximum number of cards, defaults to ``posts_per_page``
            order_by: Sort field (``date``, ``title`` or ``id``)
            order: ``ASC`` or ``DESC``

        Returns:
            HTML markup of the slider
        """
        limit = limit or self.settings.thunderbolt.posts_per_page
        theme = self.settings.thunderbolt.theme

        cards = []
        offset = 0
        while len(cards) < limit:
            posts = await self.post_repository.list_published(
                limit=limit, offset=offset, order_by=order_by, order=order,
            )
            if not posts:
                break
            offset += len(posts)
            for post in posts:
                if len(cards) >= limit:
                    break
                card = await self.render_card(post)
                if card is not None:
                    cards.append(card)

        container = Element("div", {"class": f"slider-container thunderbolt-theme-{theme}"})
        if not cards:
            container.set("class", container.get("class") + " no-posts-found")
            SubElement(container, "p").text = NO_POSTS_MESSAGE
            return tostring(container, encoding="unicode", method="html")

        swiper = SubElement(container, "div", {"class": "swiper mySwiper"})
        wrapper = SubElement(swiper, "div", {"class": "swiper-wrapper"})
        for card in cards:
            wrapper.append(card)
        for name in ("swiper-button-next", "swiper-button-prev", "swiper-pagination"):
            SubElement(swiper, "div", {"class": name})

        logger.debug(f"Rendered thunderbolt feed with {len(cards)} cards")
        return tostring(container, encoding="unicode", method="html")

    async def render_card(self, post: Post) -> Optional[Element]:
        """Build one card, or None when the post has no summary."""
        summary = await self.summary_manager.get_summary(post.id)
        if not summary:
            return None

        tb = self.settings.thunderbolt
        slide = Element("div", {"class": "swiper-slide", "data-post-id": str(post.id)})
        content_attrs = {"class": "slide-content"}
        if tb.theme != "light":
            content_attrs["style"] = f"background-color: {tb.card_bg_color};"
        content = SubElement(slide, "div", content_attrs)

        if post.featured_image:
            SubElement(content, "img", {"class": "slide-image", "src": post.featured_image, "alt": post.title})

        text = SubElement(content, "div", {"class": "text-content"})
        SubElement(text, "h2", {"style": f"font-size: {tb.title_font_size}"}).text = post.title
        meta = " | ".join(part for part in (post.category or "", format_post_date(post.published_at)) if part)
        SubElement(text, "p", {"class": "meta"}).text = meta

        items = summary_items(summary)
        if len(items) > 1:
            bullets = SubElement(text, "ul", {
                "style": f"--bullet-color: {tb.bullet_color}; font-size: {tb.content_font_size};",
            })
            for item in items:
                SubElement(bullets, "li").text = item
        else:
            SubElement(text, "div", {"style": f"font-size: {tb.content_font_size};"}).text = items[0] if items else ""

        SubElement(text, "a", {
            "href": post.permalink,
            "class": "read-more",
            "target": "_blank",
            "rel": "noopener noreferrer",
            "style": f"background-color: {tb.readmore_bg_color}; color: {tb.readmore_text_color};",
        }).text = "Read more"

        if tb.show_share:
            share = SubElement(content, "div", {
                "class": "thunderbolt-card-share",
                "data-post-url": post.permalink,
                "data-post-title": post.title,
            })
            buttons = SubElement(share, "div", {"class": "thunderbolt-card-share-buttons"})
            for network, url in share_links(post.permalink, post.title):
                SubElement(buttons, "a", {
                    "href": url,
                    "class": f"thunderbolt-share-btn thunderbolt-share-{network}",
                    "target": "_blank",
                    "rel": "noopener noreferrer",
                }).text = network.capitalize()

        return slide
