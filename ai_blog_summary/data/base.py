"""
Abstract repository interfaces for the data access layer.

Posts and per-post metadata live behind these interfaces; the SQLite
implementations are in ``sqlite.py``.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..models.post import Post


class DatabaseConnection(ABC):
    """Abstract database connection interface."""

    @abstractmethod
    async def connect(self) -> None:
        """Establish the database connection."""
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the database connection."""
        pass

    @abstractmethod
    async def execute(self, query: str, params: Optional[tuple] = None) -> Any:
        """Execute a query that changes data."""
        pass

    @abstractmethod
    async def fetch_one(self, query: str, params: Optional[tuple] = None) -> Optional[Dict[str, Any]]:
        """Fetch a single row."""
        pass

    @abstractmethod
    async def fetch_all(self, query: str, params: Optional[tuple] = None) -> List[Dict[str, Any]]:
        """Fetch all rows."""
        pass


class PostRepository(ABC):
    """Abstract repository for blog posts."""

    @abstractmethod
    async def get_post(self, post_id: int) -> Optional[Post]:
        """
        Retrieve a post by its ID.

        Args:
            post_id: The post identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def save_post(self, post: Post) -> int:
        """
        Insert or replace a post.

        Args:
            post: The post to save

        Returns:
            The ID of the saved post
        """
        pass

    @abstractmethod
    async def list_published(self,
                             limit: int = 10,
                             offset: int = 0,
                             order_by: str = "date",
                             order: str = "DESC") -> List[Post]:
        """
        List published posts, newest first by default.

        Args:
            limit: Maximum number of posts
            offset: Number of posts to skip
            order_by: Sort field, one of ``date``, ``title`` or ``id``
            order: ``ASC`` or ``DESC``; anything else sorts descending

        Returns:
            Published posts
        """
        pass


class PostMetaRepository(ABC):
    """Abstract key-value store of per-post metadata."""

    @abstractmethod
    async def get_meta(self, post_id: int, key: str, default: Any = None) -> Any:
        """Return the value stored under ``key`` for a post, or ``default``."""
        pass

    @abstractmethod
    async def set_meta(self, post_id: int, key: str, value: Any) -> None:
        """Store ``value`` under ``key`` for a post."""
        pass

    @abstractmethod
    async def delete_meta(self, post_id: int, key: str) -> bool:
        """Remove a key. Returns True when something was deleted."""
        pass

    @abstractmethod
    async def increment_int(self, post_id: int, key: str, amount: int = 1) -> int:
        """Atomically add ``amount`` to an integer value and return the new value."""
        pass

    @abstractmethod
    async def count_non_empty(self, key: str) -> int:
        """Number of posts with a non-empty value for ``key``."""
        pass

    @abstractmethod
    async def sum_int(self, key: str) -> int:
        """Sum of the integer values stored under ``key`` across posts."""
        pass
