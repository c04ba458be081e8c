"""
Tests for per-post summary metadata.
"""

from datetime import datetime

import pytest

from ai_blog_summary.services import SummaryManager

from conftest import temp_repository_factory


async def make_manager(factory) -> SummaryManager:
    return SummaryManager(await factory.get_post_meta_repository())


class TestSummaryManager:
    """Tests for SummaryManager."""

    @pytest.mark.asyncio
    async def test_save_summary_stamps_generation_time(self):
        async with temp_repository_factory() as factory:
            manager = await make_manager(factory)
            assert await manager.get_summary(1) is None
            assert await manager.get_generated_at(1) is None

            await manager.save_summary(1, "<ul><li>A</li></ul>")

            assert await manager.get_summary(1) == "<ul><li>A</li></ul>"
            assert await manager.has_summary(1)
            assert isinstance(await manager.get_generated_at(1), datetime)

    @pytest.mark.asyncio
    async def test_empty_summary_is_no_summary(self):
        async with temp_repository_factory() as factory:
            manager = await make_manager(factory)
            await manager.save_summary(1, "")
            assert not await manager.has_summary(1)

    @pytest.mark.asyncio
    async def test_variants_append(self):
        async with temp_repository_factory() as factory:
            manager = await make_manager(factory)
            assert await manager.get_variants(1) == []

            await manager.save_variant(1, "first")
            await manager.save_variant(1, "second")

            assert await manager.get_variants(1) == ["first", "second"]

    @pytest.mark.asyncio
    async def test_language_defaults_to_english(self):
        async with temp_repository_factory() as factory:
            manager = await make_manager(factory)
            assert await manager.get_language(1) == "en"

            await manager.save_language(1, "es")
            assert await manager.get_language(1) == "es"

    @pytest.mark.asyncio
    async def test_show_icon_defaults_to_true(self):
        async with temp_repository_factory() as factory:
            manager = await make_manager(factory)
            assert await manager.should_show_icon(1) is True

            await manager.set_show_icon(1, False)
            assert await manager.should_show_icon(1) is False

            await manager.set_show_icon(1, True)
            assert await manager.should_show_icon(1) is True

    @pytest.mark.asyncio
    async def test_clicks(self):
        async with temp_repository_factory() as factory:
            manager = await make_manager(factory)
            assert await manager.get_clicks(1) == 0
            assert await manager.increment_clicks(1) == 1
            assert await manager.increment_clicks(1) == 2
            assert await manager.get_clicks(1) == 2

    @pytest.mark.asyncio
    async def test_global_stats(self):
        async with temp_repository_factory() as factory:
            manager = await make_manager(factory)
            await manager.save_summary(1, "<ul><li>A</li></ul>")
            await manager.save_summary(2, "<ul><li>B</li></ul>")
            await manager.increment_clicks(1)
            await manager.increment_clicks(1)
            await manager.increment_clicks(3)

            stats = await manager.get_global_stats()

            assert stats.to_dict() == {"total_posts_with_summary": 2, "total_clicks": 3}

    @pytest.mark.asyncio
    async def test_describe(self):
        async with temp_repository_factory() as factory:
            manager = await make_manager(factory)
            await manager.save_summary(4, "<ul><li>D</li></ul>")
            await manager.save_language(4, "fr")

            described = await manager.describe(4)

            assert described["post_id"] == 4
            assert described["summary"] == "<ul><li>D</li></ul>"
            assert described["language"] == "fr"
            assert described["generated_at"] is not None
            assert described["clicks"] == 0
            assert described["show_icon"] is True
            assert described["variants"] == []
