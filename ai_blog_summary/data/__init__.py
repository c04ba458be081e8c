"""
Data access layer for AI Blog Summary.

Example Usage:
    ```python
    from ai_blog_summary.data import RepositoryFactory

    factory = RepositoryFactory(db_path="data/ai_blog_summary.db")
    meta = await factory.get_post_meta_repository()
    await meta.set_meta(42, "_ai_blog_summary_language", "en")
    ```
"""

from .base import DatabaseConnection, PostMetaRepository, PostRepository
from .repositories import RepositoryFactory
from .sqlite import (
    SQLiteConnection,
    SQLitePostMetaRepository,
    SQLitePostRepository,
    initialize_schema,
)

__all__ = [
    'DatabaseConnection',
    'PostRepository',
    'PostMetaRepository',
    'SQLiteConnection',
    'SQLitePostRepository',
    'SQLitePostMetaRepository',
    'RepositoryFactory',
    'initialize_schema',
]
