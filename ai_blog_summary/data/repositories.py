"""
Repository factory: one SQLite pool shared by the post and post-meta stores.
"""

import logging
from typing import Optional

from .base import PostMetaRepository, PostRepository
from .sqlite import (
    SQLiteConnection,
    SQLitePostMetaRepository,
    SQLitePostRepository,
    initialize_schema,
)

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = "data/ai_blog_summary.db"


class RepositoryFactory:
    """Builds repositories over a lazily opened SQLite pool."""

    def __init__(self, db_path: str = DEFAULT_DB_PATH, pool_size: int = 5):
        """
        Args:
            db_path: SQLite database file, created with its directory when missing
            pool_size: Number of pooled connections
        """
        self.db_path = db_path
        self.pool_size = pool_size
        self._pool: Optional[SQLiteConnection] = None

    async def get_connection(self) -> SQLiteConnection:
        """Open the pool and create the schema on first call."""
        if self._pool is None:
            pool = SQLiteConnection(self.db_path, self.pool_size)
            await pool.connect()
            await initialize_schema(pool)
            self._pool = pool
            logger.info(f"Storage ready at {self.db_path}")
        return self._pool

    async def get_post_repository(self) -> PostRepository:
        return SQLitePostRepository(await self.get_connection())

    async def get_post_meta_repository(self) -> PostMetaRepository:
        return SQLitePostMetaRepository(await self.get_connection())

    async def close(self) -> None:
        """Close the pool; the next repository request reopens it."""
        if self._pool is None:
            return
        pool, self._pool = self._pool, None
        await pool.disconnect()
