"""
Tests for the generation orchestrator.
"""

import asyncio

import httpx
import pytest

from ai_blog_summary.models import GenerationOptions, LengthPreset, OutputStyle
from ai_blog_summary.summarization import (
    CompletionClient,
    CompletionErrorKind,
    CompletionOutcome,
    GenerationOrchestrator,
    SummaryProvider,
    summary_items,
)

from conftest import VALID_KEY, ScriptedTransport, chat_response, error_response

WIDGET_CONTENT = "Breaking: widget sales up 20% this quarter. Analysts cite strong demand."
WIDGET_RESPONSE = (
    "- Widget sales rose 20% this quarter.\n"
    "- Analysts cite strong consumer demand.\n"
    "- Outlook remains uncertain."
)


def make_orchestrator(script, sleep, api_key=VALID_KEY, timeout_seconds=30):
    scripted = ScriptedTransport(script)
    provider = CompletionClient(transport=scripted.transport(), sleep=sleep)
    orchestrator = GenerationOrchestrator(
        api_key=api_key,
        model="gpt-3.5-turbo",
        timeout_seconds=timeout_seconds,
        provider=provider,
    )
    return orchestrator, scripted


class StallingProvider(SummaryProvider):
    """Provider that never answers."""

    name = "Stalling"

    def get_models(self):
        return {}

    def validate_api_key(self, api_key):
        return True

    async def complete(self, prompt, api_key, model, timeout_seconds):
        await asyncio.sleep(10)
        return CompletionOutcome.success({}, attempts=1)


class TestGenerate:
    """Tests for GenerationOrchestrator.generate."""

    @pytest.mark.asyncio
    async def test_end_to_end_widget_scenario(self, recording_sleep):
        orchestrator, scripted = make_orchestrator([chat_response(WIDGET_RESPONSE)], recording_sleep)

        result = await orchestrator.generate(WIDGET_CONTENT, {"length": "medium", "language": "en"})

        assert result.success
        assert result.model == "gpt-3.5-turbo"
        assert result.error is None
        assert summary_items(result.summary) == [
            "Widget sales rose 20% this quarter.",
            "Analysts cite strong consumer demand.",
        ]
        assert result.summary.count("<li>") == 2
        assert WIDGET_CONTENT in scripted.last_body()["messages"][1]["content"]

    @pytest.mark.asyncio
    async def test_empty_content_skips_transport(self, recording_sleep):
        orchestrator, scripted = make_orchestrator([chat_response("- x")], recording_sleep)

        result = await orchestrator.generate("   <img src=x>   ", GenerationOptions())

        assert not result.success
        assert result.error == "empty content"
        assert scripted.calls == 0

    @pytest.mark.asyncio
    async def test_missing_api_key(self, recording_sleep):
        orchestrator, scripted = make_orchestrator([chat_response("- x")], recording_sleep, api_key="")

        result = await orchestrator.generate(WIDGET_CONTENT)

        assert not result.success
        assert result.error == "API key not configured"
        assert scripted.calls == 0
        assert not orchestrator.is_available()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("length", ["medium", "enormous", "", None, 42])
    async def test_length_resolves_to_medium(self, length, recording_sleep):
        orchestrator, scripted = make_orchestrator([chat_response("a\nb\nc\nd")], recording_sleep)

        result = await orchestrator.generate(WIDGET_CONTENT, {"length": length})

        assert result.success
        assert len(summary_items(result.summary)) == 2
        assert result.metadata["length"] == "medium"

    @pytest.mark.asyncio
    async def test_short_preset_keeps_one_bullet(self, recording_sleep):
        orchestrator, _ = make_orchestrator([chat_response(WIDGET_RESPONSE)], recording_sleep)

        result = await orchestrator.generate(WIDGET_CONTENT, GenerationOptions.create(LengthPreset.SHORT))

        assert summary_items(result.summary) == ["Widget sales rose 20% this quarter."]

    @pytest.mark.asyncio
    async def test_paragraph_style(self, recording_sleep):
        orchestrator, _ = make_orchestrator([chat_response("One.\nTwo.\nThree.\nFour.")], recording_sleep)

        options = GenerationOptions.create("large", "de", OutputStyle.PARAGRAPHS)
        result = await orchestrator.generate(WIDGET_CONTENT, options)

        assert result.summary == "<p>One.</p><p>Two.</p><p>Three.</p>"
        assert result.metadata["language"] == "de"

    @pytest.mark.asyncio
    async def test_provider_rejection_is_returned(self, recording_sleep):
        orchestrator, scripted = make_orchestrator([error_response(401, "Incorrect API key provided")], recording_sleep)

        result = await orchestrator.generate(WIDGET_CONTENT)

        assert not result.success
        assert result.error == "Incorrect API key provided"
        assert result.error_code == CompletionErrorKind.HTTP.value
        assert scripted.calls == 1

    @pytest.mark.asyncio
    async def test_exhausted_retries_are_returned(self, recording_sleep):
        orchestrator, scripted = make_orchestrator([error_response(429)], recording_sleep)

        result = await orchestrator.generate(WIDGET_CONTENT)

        assert not result.success
        assert result.error == "Maximum retries exceeded"
        assert result.error_code == CompletionErrorKind.MAX_RETRIES.value
        assert scripted.calls == 3

    @pytest.mark.asyncio
    async def test_malformed_response_is_empty_success(self, recording_sleep):
        orchestrator, _ = make_orchestrator([httpx.Response(200, json={"choices": []})], recording_sleep)

        result = await orchestrator.generate(WIDGET_CONTENT)

        assert result.success
        assert result.summary == ""

    @pytest.mark.asyncio
    async def test_latency_budget_bounds_the_call(self):
        orchestrator = GenerationOrchestrator(
            api_key=VALID_KEY,
            timeout_seconds=0.01,
            provider=StallingProvider(),
        )
        # One attempt, no backoff: the budget is the bare request timeout
        orchestrator.provider.max_attempts = 1

        result = await orchestrator.generate(WIDGET_CONTENT)

        assert not result.success
        assert result.error_code == "TIMEOUT"

    def test_latency_budget_includes_backoff(self):
        orchestrator = GenerationOrchestrator(api_key=VALID_KEY, timeout_seconds=30)
        assert orchestrator.latency_budget == 30 * 4 + 2 + 4

    @pytest.mark.asyncio
    async def test_slow_provider_exhausts_retries_before_budget(self):
        async def stall(request):
            await asyncio.sleep(5)
            return chat_response("- late")

        # Real backoff: the attempt deadlines and the 2s wait all run on the clock
        provider = CompletionClient(max_attempts=2, transport=httpx.MockTransport(stall))
        orchestrator = GenerationOrchestrator(api_key=VALID_KEY, timeout_seconds=0.5, provider=provider)

        result = await orchestrator.generate(WIDGET_CONTENT)

        assert not result.success
        assert result.error == "Maximum retries exceeded"
        assert result.error_code == CompletionErrorKind.MAX_RETRIES.value

    def test_to_response_shape(self):
        from ai_blog_summary.models import SummaryResult

        assert SummaryResult.failure("empty content", "CONFIGURATION_ERROR").to_response() == {
            "success": False,
            "error": "empty content",
        }
        assert SummaryResult.ok("<ul></ul>", "gpt-4").to_response() == {
            "success": True,
            "summary": "<ul></ul>",
            "model": "gpt-4",
        }


class TestProviderFactory:
    """Tests for provider registration and orchestrator construction."""

    def test_unknown_provider(self):
        from ai_blog_summary.exceptions import ConfigurationError
        from ai_blog_summary.summarization import create_provider

        with pytest.raises(ConfigurationError) as excinfo:
            create_provider("nope")
        assert "openai" in excinfo.value.context["available_providers"]

    def test_registered_provider_is_used(self):
        from ai_blog_summary.config import PluginSettings
        from ai_blog_summary.summarization import create_orchestrator, register_provider
        from ai_blog_summary.summarization.factory import PROVIDERS

        register_provider("Stalling", StallingProvider)
        try:
            orchestrator = create_orchestrator(PluginSettings(provider="stalling", api_key="key", model="m1"))
        finally:
            PROVIDERS.pop("stalling", None)

        assert isinstance(orchestrator.provider, StallingProvider)
        assert orchestrator.model == "m1"
        assert orchestrator.is_available()

    def test_default_provider_is_openai(self):
        from ai_blog_summary.config import PluginSettings
        from ai_blog_summary.summarization import create_orchestrator

        orchestrator = create_orchestrator(PluginSettings(api_key=VALID_KEY, timeout=12))

        assert isinstance(orchestrator.provider, CompletionClient)
        assert orchestrator.timeout_seconds == 12
