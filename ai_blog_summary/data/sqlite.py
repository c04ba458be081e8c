"""
SQLite implementation of data repositories using aiosqlite.

Meta values are stored JSON-encoded so booleans, integers and lists come
back with their types.
"""

import asyncio
import json
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Dict, List, Optional

import aiosqlite

from .base import DatabaseConnection, PostMetaRepository, PostRepository
from ..models.post import Post, PostStatus

logger = logging.getLogger(__name__)

# Sort fields accepted by list_published, mapped to columns
POST_ORDER_COLUMNS = {
    "date": "published_at",
    "title": "title",
    "id": "id",
}


def normalize_order(order: Optional[str]) -> str:
    """``ASC`` or ``DESC``; anything unrecognized sorts descending."""
    order = (order or "").strip().upper()
    return order if order in ("ASC", "DESC") else "DESC"

SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS posts (
        id INTEGER PRIMARY KEY,
        title TEXT NOT NULL DEFAULT '',
        content TEXT NOT NULL DEFAULT '',
        status TEXT NOT NULL DEFAULT 'draft',
        permalink TEXT NOT NULL DEFAULT '',
        published_at TEXT,
        featured_image TEXT,
        category TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS post_meta (
        post_id INTEGER NOT NULL,
        meta_key TEXT NOT NULL,
        meta_value TEXT,
        PRIMARY KEY (post_id, meta_key)
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_post_meta_key ON post_meta (meta_key)",
    "CREATE INDEX IF NOT EXISTS idx_posts_status ON posts (status, published_at)",
]


class SQLiteConnection(DatabaseConnection):
    """A fixed-size pool of aiosqlite connections to one database file.

    Connections are opened lazily on first use and handed out through
    ``acquire``; every statement run through ``execute`` is committed.
    """

    def __init__(self, db_path: str, pool_size: int = 5, busy_timeout_ms: int = 5000):
        self.db_path = db_path
        self.pool_size = max(1, pool_size)
        self.busy_timeout_ms = busy_timeout_ms
        self._open: List[aiosqlite.Connection] = []
        self._idle: Optional[asyncio.Queue] = None
        self._guard = asyncio.Lock()

    @property
    def is_open(self) -> bool:
        return self._idle is not None

    async def _open_one(self) -> aiosqlite.Connection:
        conn = await aiosqlite.connect(self.db_path)
        conn.row_factory = aiosqlite.Row
        # WAL lets the click counter write while the feed is being read
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute(f"PRAGMA busy_timeout={int(self.busy_timeout_ms)}")
        return conn

    async def connect(self) -> None:
        """Open the pool. Calling it again is a no-op."""
        async with self._guard:
            if self.is_open:
                return

            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

            idle: asyncio.Queue = asyncio.Queue(maxsize=self.pool_size)
            for _ in range(self.pool_size):
                conn = await self._open_one()
                self._open.append(conn)
                idle.put_nowait(conn)
            self._idle = idle

            logger.debug(f"SQLite pool of {self.pool_size} opened at {self.db_path}")

    async def disconnect(self) -> None:
        """Close every pooled connection."""
        async with self._guard:
            if not self.is_open:
                return

            while self._open:
                await self._open.pop().close()
            self._idle = None

    @asynccontextmanager
    async def acquire(self):
        """Borrow a connection for the duration of the block."""
        if not self.is_open:
            await self.connect()

        idle = self._idle
        conn = await idle.get()
        try:
            yield conn
        finally:
            idle.put_nowait(conn)

    async def execute(self, query: str, params: Optional[tuple] = None) -> Any:
        """Run a write statement and commit it. Returns the cursor."""
        async with self.acquire() as conn:
            cursor = await conn.execute(query, params or ())
            await conn.commit()
        return cursor

    async def fetch_one(self, query: str, params: Optional[tuple] = None) -> Optional[Dict[str, Any]]:
        async with self.acquire() as conn:
            async with conn.execute(query, params or ()) as cursor:
                row = await cursor.fetchone()
        return dict(row) if row is not None else None

    async def fetch_all(self, query: str, params: Optional[tuple] = None) -> List[Dict[str, Any]]:
        async with self.acquire() as conn:
            async with conn.execute(query, params or ()) as cursor:
                rows = await cursor.fetchall()
        return [dict(row) for row in rows]


async def initialize_schema(connection: SQLiteConnection) -> None:
    """Create tables and indexes when missing."""
    for statement in SCHEMA:
        await connection.execute(statement)


class SQLitePostRepository(PostRepository):
    """SQLite implementation of post repository."""

    def __init__(self, connection: SQLiteConnection):
        self.connection = connection

    async def get_post(self, post_id: int) -> Optional[Post]:
        """Retrieve a post by its ID."""
        row = await self.connection.fetch_one("SELECT * FROM posts WHERE id = ?", (post_id,))
        if not row:
            return None
        return Post.from_dict(row)

    async def save_post(self, post: Post) -> int:
        """Insert or replace a post."""
        query = """
        INSERT OR REPLACE INTO posts (
            id, title, content, status, permalink, published_at, featured_image, category
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """
        params = (
            post.id,
            post.title,
            post.content,
            post.status.value if isinstance(post.status, PostStatus) else post.status,
            post.permalink,
            post.published_at.isoformat() if post.published_at else None,
            post.featured_image,
            post.category,
        )
        await self.connection.execute(query, params)
        return post.id

    async def list_published(self,
                             limit: int = 10,
                             offset: int = 0,
                             order_by: str = "date",
                             order: str = "DESC") -> List[Post]:
        """List published posts; unknown sort fields fall back to date, unknown orders to DESC."""
        column = POST_ORDER_COLUMNS.get(str(order_by).lower(), POST_ORDER_COLUMNS["date"])
        direction = normalize_order(order)
        query = f"""
        SELECT * FROM posts
        WHERE status = ?
        ORDER BY {column} {direction}, id {direction}
        LIMIT ? OFFSET ?
        """
        rows = await self.connection.fetch_all(query, (PostStatus.PUBLISH.value, limit, offset))
        return [Post.from_dict(row) for row in rows]


class SQLitePostMetaRepository(PostMetaRepository):
    """SQLite implementation of the post meta store."""

    def __init__(self, connection: SQLiteConnection):
        self.connection = connection

    async def get_meta(self, post_id: int, key: str, default: Any = None) -> Any:
        query = "SELECT meta_value FROM post_meta WHERE post_id = ? AND meta_key = ?"
        row = await self.connection.fetch_one(query, (post_id, key))
        if not row or row["meta_value"] is None:
            return default
        try:
            return json.loads(row["meta_value"])
        except json.JSONDecodeError:
            logger.warning(f"Undecodable meta value for post {post_id} key {key}")
            return default

    async def set_meta(self, post_id: int, key: str, value: Any) -> None:
        query = """
        INSERT OR REPLACE INTO post_meta (post_id, meta_key, meta_value)
        VALUES (?, ?, ?)
        """
        await self.connection.execute(query, (post_id, key, json.dumps(value)))

    async def delete_meta(self, post_id: int, key: str) -> bool:
        query = "DELETE FROM post_meta WHERE post_id = ? AND meta_key = ?"
        cursor = await self.connection.execute(query, (post_id, key))
        return cursor.rowcount > 0

    async def increment_int(self, post_id: int, key: str, amount: int = 1) -> int:
        upsert = """
        INSERT INTO post_meta (post_id, meta_key, meta_value) VALUES (?, ?, ?)
        ON CONFLICT (post_id, meta_key)
        DO UPDATE SET meta_value = CAST(COALESCE(CAST(meta_value AS INTEGER), 0) + ? AS TEXT)
        """
        select = "SELECT meta_value FROM post_meta WHERE post_id = ? AND meta_key = ?"

        # Same connection for both statements so the read sees this write
        async with self.connection.acquire() as conn:
            await conn.execute(upsert, (post_id, key, json.dumps(amount), amount))
            await conn.commit()
            cursor = await conn.execute(select, (post_id, key))
            row = await cursor.fetchone()

        return int(row["meta_value"]) if row else amount

    async def count_non_empty(self, key: str) -> int:
        query = """
        SELECT COUNT(DISTINCT post_id) AS total FROM post_meta
        WHERE meta_key = ? AND meta_value IS NOT NULL AND meta_value NOT IN ('""', 'null')
        """
        row = await self.connection.fetch_one(query, (key,))
        return int(row["total"] or 0) if row else 0

    async def sum_int(self, key: str) -> int:
        query = "SELECT SUM(CAST(meta_value AS INTEGER)) AS total FROM post_meta WHERE meta_key = ?"
        row = await self.connection.fetch_one(query, (key,))
        return int(row["total"] or 0) if row else 0
