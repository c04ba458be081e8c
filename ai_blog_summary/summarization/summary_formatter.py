"""
Turns raw model text into the stored summary markup.
"""

import html
import logging
import re
from typing import List

from ..models.summary import OutputStyle

logger = logging.getLogger(__name__)

_LINE_SPLIT = re.compile(r'\r\n|\r|\n')
_BULLET_MARKER = re.compile(r'^(?:[-*•](?:\s+|$)|•)')
_ITEM_PATTERN = re.compile(r'<(li|p)\b[^>]*>(.*?)</\1>', re.IGNORECASE | re.DOTALL)
_TAGS = re.compile(r'<[^>]+>')


class SummaryFormatter:
    """Parses model output into a capped list of summary units."""

    def split_units(self, raw_text: str, target_count: int) -> List[str]:
        """Split model output into at most ``target_count`` cleaned lines.

        Bullet markers are stripped and blank lines dropped. When nothing is
        left the whole trimmed text becomes one unit. The list is truncated,
        never padded.
        """
        if not raw_text or not raw_text.strip():
            return []

        units = []
        for line in _LINE_SPLIT.split(raw_text):
            line = _BULLET_MARKER.sub('', line.lstrip()).strip()
            if line:
                units.append(line)

        if not units:
            units = [raw_text.strip()]

        if len(units) > target_count:
            logger.debug(f"Model returned {len(units)} units, keeping first {target_count}")

        return units[:max(target_count, 0)]

    def format(self,
               raw_text: str,
               target_count: int,
               style: OutputStyle = OutputStyle.BULLETS) -> str:
        """Format model output as ``<ul><li>..</li></ul>`` (or ``<p>`` paragraphs).

        Args:
            raw_text: Text returned by the model
            target_count: Maximum number of bullets/paragraphs to keep
            style: Output style

        Returns:
            HTML string, empty when the model returned only whitespace
        """
        units = self.split_units(raw_text, target_count)
        if not units:
            return ""

        escaped = [html.escape(unit) for unit in units]

        if OutputStyle.resolve(style) == OutputStyle.PARAGRAPHS:
            return "".join(f"<p>{unit}</p>" for unit in escaped)

        items = "".join(f"<li>{unit}</li>" for unit in escaped)
        return f"<ul>{items}</ul>"


def summary_items(summary_html: str) -> List[str]:
    """Recover the plain texts of a stored summary.

    Understands the list and paragraph markup written by SummaryFormatter and
    falls back to one unit per non-empty line for legacy plain-text summaries.
    """
    if not summary_html:
        return []

    items = [
        html.unescape(_TAGS.sub('', body)).strip()
        for _, body in _ITEM_PATTERN.findall(summary_html)
    ]
    items = [item for item in items if item]
    if items:
        return items

    plain = html.unescape(_TAGS.sub('', summary_html))
    return [line.strip() for line in _LINE_SPLIT.split(plain) if line.strip()]
