"""
Front-end rendering: title icon and the Thunderbolt card feed.
"""

from .display import TitleDecorator, format_post_date
from .thunderbolt import ThunderboltRenderer

__all__ = [
    'TitleDecorator',
    'ThunderboltRenderer',
    'format_post_date',
]
