"""
Tests for automatic summary generation.
"""

import pytest

from ai_blog_summary.config import PluginSettings
from ai_blog_summary.models import PostStatus
from ai_blog_summary.services import AutoGenerator, SummaryManager
from ai_blog_summary.summarization import CompletionClient, GenerationOrchestrator, summary_items

from conftest import (
    VALID_KEY,
    RecordingSleep,
    ScriptedTransport,
    chat_response,
    error_response,
    make_post,
    temp_repository_factory,
)


async def build_generator(factory, script, api_key=VALID_KEY, **settings_overrides):
    settings = PluginSettings.from_dict({"api_key": api_key, "api_delay": 500, **settings_overrides})
    scripted = ScriptedTransport(script)
    orchestrator = GenerationOrchestrator(
        api_key=settings.api_key,
        model=settings.model,
        timeout_seconds=settings.timeout,
        provider=CompletionClient(transport=scripted.transport(), sleep=RecordingSleep()),
    )
    manager = SummaryManager(await factory.get_post_meta_repository())
    sleep = RecordingSleep()
    generator = AutoGenerator(
        settings,
        orchestrator,
        manager,
        post_repository=await factory.get_post_repository(),
        sleep=sleep,
    )
    return generator, manager, scripted, sleep


class TestMaybeGenerate:
    """Tests for AutoGenerator.maybe_generate."""

    @pytest.mark.asyncio
    async def test_generates_for_published_post(self):
        async with temp_repository_factory() as factory:
            generator, manager, scripted, sleep = await build_generator(
                factory, [chat_response("- One\n- Two\n- Three")], default_language="it",
            )
            post = make_post(1, title="Quarterly results", content="<p>Sales grew.</p>")

            assert await generator.maybe_generate(post) is True

            assert summary_items(await manager.get_summary(1)) == ["One", "Two"]
            assert await manager.get_language(1) == "it"
            assert sleep.waits == [0.5]
            user_message = scripted.last_body()["messages"][1]["content"]
            assert user_message.endswith("Quarterly results Sales grew.")

    @pytest.mark.asyncio
    async def test_skips_unpublished_post(self):
        async with temp_repository_factory() as factory:
            generator, manager, scripted, _ = await build_generator(factory, [chat_response("- x")])

            assert await generator.maybe_generate(make_post(1, status=PostStatus.DRAFT)) is False
            assert scripted.calls == 0

    @pytest.mark.asyncio
    async def test_skips_post_with_summary(self):
        async with temp_repository_factory() as factory:
            generator, manager, scripted, _ = await build_generator(factory, [chat_response("- x")])
            await manager.save_summary(1, "<ul><li>Existing</li></ul>")

            assert await generator.maybe_generate(make_post(1)) is False
            assert scripted.calls == 0
            assert await manager.get_summary(1) == "<ul><li>Existing</li></ul>"

    @pytest.mark.asyncio
    async def test_skips_without_api_key(self):
        async with temp_repository_factory() as factory:
            generator, _, scripted, sleep = await build_generator(factory, [chat_response("- x")], api_key="")

            assert await generator.maybe_generate(make_post(1)) is False
            assert scripted.calls == 0
            assert sleep.waits == []

    @pytest.mark.asyncio
    async def test_disabled(self):
        async with temp_repository_factory() as factory:
            generator, _, scripted, _ = await build_generator(
                factory, [chat_response("- x")], auto_generate=False,
            )

            assert await generator.maybe_generate(make_post(1)) is False
            assert scripted.calls == 0

    @pytest.mark.asyncio
    async def test_failure_is_swallowed(self):
        async with temp_repository_factory() as factory:
            generator, manager, scripted, _ = await build_generator(factory, [error_response(401, "bad key")])

            assert await generator.maybe_generate(make_post(1)) is False
            assert not await manager.has_summary(1)

    @pytest.mark.asyncio
    async def test_no_delay_when_zero(self):
        async with temp_repository_factory() as factory:
            generator, _, _, sleep = await build_generator(factory, [chat_response("- x")], api_delay=0)

            assert await generator.maybe_generate(make_post(1)) is True
            assert sleep.waits == []


class TestBackfill:
    """Tests for AutoGenerator.backfill."""

    @pytest.mark.asyncio
    async def test_backfills_published_posts_without_summary(self):
        async with temp_repository_factory() as factory:
            generator, manager, scripted, sleep = await build_generator(factory, [chat_response("- Done")])
            posts = await factory.get_post_repository()
            for post_id in range(1, 5):
                await posts.save_post(make_post(post_id, day=post_id))
            await posts.save_post(make_post(5, status=PostStatus.DRAFT))
            await manager.save_summary(2, "<ul><li>Already</li></ul>")

            generated = await generator.backfill(limit=10)

            assert generated == 3
            assert scripted.calls == 3
            assert len(sleep.waits) == 3
            assert not await manager.has_summary(5)
            assert await manager.get_summary(2) == "<ul><li>Already</li></ul>"

    @pytest.mark.asyncio
    async def test_backfill_respects_limit(self):
        async with temp_repository_factory() as factory:
            generator, manager, scripted, _ = await build_generator(factory, [chat_response("- Done")])
            posts = await factory.get_post_repository()
            for post_id in range(1, 6):
                await posts.save_post(make_post(post_id, day=post_id))

            assert await generator.backfill(limit=2) == 2
            # Newest posts first
            assert await manager.has_summary(5)
            assert await manager.has_summary(4)
            assert not await manager.has_summary(3)
