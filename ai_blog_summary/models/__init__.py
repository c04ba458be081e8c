"""
Data models for AI Blog Summary.
"""

from .base import BaseModel, utc_now
from .post import Post, PostStatus
from .summary import (
    BULLET_COUNTS,
    DEFAULT_LANGUAGE,
    PARAGRAPH_WORDS,
    GenerationOptions,
    LengthPreset,
    OutputStyle,
    SummaryResult,
)

__all__ = [
    'BaseModel',
    'utc_now',
    'Post',
    'PostStatus',
    'LengthPreset',
    'OutputStyle',
    'GenerationOptions',
    'SummaryResult',
    'BULLET_COUNTS',
    'PARAGRAPH_WORDS',
    'DEFAULT_LANGUAGE',
]
