"""
Tests for the SQLite post and post-meta repositories.
"""

import asyncio

import pytest

from ai_blog_summary.models import PostStatus

from conftest import make_post, temp_repository_factory


class TestPostRepository:
    """Tests for SQLitePostRepository."""

    @pytest.mark.asyncio
    async def test_save_and_get(self):
        async with temp_repository_factory() as factory:
            posts = await factory.get_post_repository()
            original = make_post(7, category="Business", featured_image="https://img.example/7.jpg")

            assert await posts.save_post(original) == 7
            loaded = await posts.get_post(7)

            assert loaded.title == "Post 7"
            assert loaded.status == PostStatus.PUBLISH
            assert loaded.published_at == original.published_at
            assert loaded.category == "Business"
            assert loaded.featured_image == "https://img.example/7.jpg"

    @pytest.mark.asyncio
    async def test_missing_post(self):
        async with temp_repository_factory() as factory:
            posts = await factory.get_post_repository()
            assert await posts.get_post(404) is None

    @pytest.mark.asyncio
    async def test_save_replaces(self):
        async with temp_repository_factory() as factory:
            posts = await factory.get_post_repository()
            await posts.save_post(make_post(1, status=PostStatus.DRAFT))
            await posts.save_post(make_post(1, title="Renamed"))

            loaded = await posts.get_post(1)
            assert loaded.title == "Renamed"
            assert loaded.is_published

    @pytest.mark.asyncio
    async def test_list_published_newest_first(self):
        async with temp_repository_factory() as factory:
            posts = await factory.get_post_repository()
            await posts.save_post(make_post(1, day=1))
            await posts.save_post(make_post(2, day=3))
            await posts.save_post(make_post(3, status=PostStatus.DRAFT, day=4))
            await posts.save_post(make_post(4, day=2))

            listed = await posts.list_published(limit=10)
            assert [p.id for p in listed] == [2, 4, 1]

            page = await posts.list_published(limit=1, offset=1)
            assert [p.id for p in page] == [4]

    @pytest.mark.asyncio
    async def test_list_published_ordering(self):
        async with temp_repository_factory() as factory:
            posts = await factory.get_post_repository()
            await posts.save_post(make_post(1, day=1, title="Charlie"))
            await posts.save_post(make_post(2, day=3, title="Alpha"))
            await posts.save_post(make_post(3, day=2, title="Bravo"))

            oldest_first = await posts.list_published(order="asc")
            assert [p.id for p in oldest_first] == [1, 3, 2]

            by_title = await posts.list_published(order_by="title", order="ASC")
            assert [p.id for p in by_title] == [2, 3, 1]

            # Unknown field and direction fall back to newest first
            fallback = await posts.list_published(order_by="id; DROP TABLE posts", order="sideways")
            assert [p.id for p in fallback] == [2, 3, 1]


class TestPostMetaRepository:
    """Tests for SQLitePostMetaRepository."""

    @pytest.mark.asyncio
    async def test_values_keep_their_types(self):
        async with temp_repository_factory() as factory:
            meta = await factory.get_post_meta_repository()
            await meta.set_meta(1, "text", "<ul><li>A</li></ul>")
            await meta.set_meta(1, "flag", False)
            await meta.set_meta(1, "items", ["a", "b"])

            assert await meta.get_meta(1, "text") == "<ul><li>A</li></ul>"
            assert await meta.get_meta(1, "flag") is False
            assert await meta.get_meta(1, "items") == ["a", "b"]
            assert await meta.get_meta(1, "absent", "fallback") == "fallback"
            assert await meta.get_meta(2, "text") is None

    @pytest.mark.asyncio
    async def test_delete(self):
        async with temp_repository_factory() as factory:
            meta = await factory.get_post_meta_repository()
            await meta.set_meta(1, "key", "value")

            assert await meta.delete_meta(1, "key") is True
            assert await meta.delete_meta(1, "key") is False
            assert await meta.get_meta(1, "key") is None

    @pytest.mark.asyncio
    async def test_increment_int(self):
        async with temp_repository_factory() as factory:
            meta = await factory.get_post_meta_repository()

            assert await meta.increment_int(5, "clicks") == 1
            assert await meta.increment_int(5, "clicks") == 2
            assert await meta.increment_int(5, "clicks", amount=3) == 5
            assert await meta.get_meta(5, "clicks") == 5

    @pytest.mark.asyncio
    async def test_concurrent_increments_are_not_lost(self):
        async with temp_repository_factory() as factory:
            meta = await factory.get_post_meta_repository()

            await asyncio.gather(*(meta.increment_int(9, "clicks") for _ in range(10)))

            assert await meta.get_meta(9, "clicks") == 10

    @pytest.mark.asyncio
    async def test_aggregates(self):
        async with temp_repository_factory() as factory:
            meta = await factory.get_post_meta_repository()
            await meta.set_meta(1, "summary", "<ul><li>A</li></ul>")
            await meta.set_meta(2, "summary", "")
            await meta.set_meta(3, "summary", "<ul><li>C</li></ul>")
            await meta.set_meta(1, "clicks", 4)
            await meta.increment_int(3, "clicks")

            assert await meta.count_non_empty("summary") == 2
            assert await meta.sum_int("clicks") == 5
            assert await meta.sum_int("nothing") == 0
