"""
Post content cleaning ahead of summarization.
"""

import re

from bs4 import BeautifulSoup, Comment

# Media carriers removed before any other markup, in this order
MEDIA_TAGS = ["iframe", "video", "audio", "embed", "object", "picture", "img"]

# Elements whose text is never prose
NON_PROSE_TAGS = ["script", "style"]

_WHITESPACE = re.compile(r'\s+')


class ContentPreparer:
    """Turns raw post HTML into plain text for the model."""

    def clean(self, raw_html: str) -> str:
        """Strip media and markup, collapse whitespace.

        Returns an empty string when nothing but markup was supplied.
        """
        if not raw_html:
            return ""

        soup = BeautifulSoup(raw_html, "html.parser")
        for tag_name in MEDIA_TAGS + NON_PROSE_TAGS:
            for tag in soup.find_all(tag_name):
                tag.decompose()

        for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
            comment.extract()

        # Keep word boundaries between block elements
        text = soup.get_text(" ")
        return _WHITESPACE.sub(' ', text).strip()
