"""
Generation orchestrator: content cleaning, prompt, model call, formatting.
"""

import asyncio
import logging
from typing import Optional, Union

from ..config.constants import DEFAULT_MODEL, DEFAULT_TIMEOUT_SECONDS, MAX_ATTEMPTS
from ..exceptions import ConfigurationError
from ..models.summary import GenerationOptions, SummaryResult
from .completion_client import CompletionClient
from .content_preparer import ContentPreparer
from .prompt_builder import PromptBuilder
from .provider import SummaryProvider, first_choice_text
from .summary_formatter import SummaryFormatter

logger = logging.getLogger(__name__)

EMPTY_CONTENT_ERROR = "empty content"
MISSING_API_KEY_ERROR = "API key not configured"
TIMED_OUT_ERROR = "Summary generation timed out"


class GenerationOrchestrator:
    """Public entry point of the summary core.

    One ``generate`` call is independent of every other: the orchestrator
    holds only read-only configuration and stateless collaborators.
    """

    def __init__(self,
                 api_key: str,
                 model: str = DEFAULT_MODEL,
                 timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
                 provider: Optional[SummaryProvider] = None,
                 preparer: Optional[ContentPreparer] = None,
                 prompt_builder: Optional[PromptBuilder] = None,
                 formatter: Optional[SummaryFormatter] = None):
        """Initialize the orchestrator.

        Args:
            api_key: Provider API key (may be empty; generate then fails cleanly)
            model: Model identifier sent to the provider
            timeout_seconds: Per-attempt request deadline
            provider: Model provider, defaults to the OpenAI CompletionClient
            preparer: Content cleaner
            prompt_builder: Prompt builder
            formatter: Output formatter
        """
        self.api_key = api_key or ""
        self.model = model or DEFAULT_MODEL
        self.timeout_seconds = timeout_seconds
        self.provider = provider or CompletionClient()
        self.preparer = preparer or ContentPreparer()
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.formatter = formatter or SummaryFormatter()

    def is_available(self) -> bool:
        """Check if generation is possible (API key configured)."""
        return bool(self.api_key)

    @property
    def latency_budget(self) -> float:
        """Upper bound for one generate call.

        Every attempt plus the backoff waits, with one spare attempt timeout so
        the provider reports its own exhaustion before this deadline fires.
        """
        attempts = getattr(self.provider, "max_attempts", MAX_ATTEMPTS)
        backoff = sum(2 ** attempt for attempt in range(1, attempts))
        return self.timeout_seconds * (attempts + 1) + backoff

    async def generate(self,
                       content: str,
                       options: Union[GenerationOptions, dict, None] = None) -> SummaryResult:
        """Generate a summary for raw post content.

        Args:
            content: Raw post HTML or text
            options: Length preset, language and output style

        Returns:
            SummaryResult; expected failures are returned, not raised
        """
        options = self._coerce_options(options)

        try:
            return await asyncio.wait_for(
                self._generate(content, options),
                timeout=self.latency_budget,
            )
        except ConfigurationError as e:
            logger.info(f"Summary generation skipped: {e.message}")
            return SummaryResult.failure(e.message, e.error_code, model=self.model)
        except asyncio.TimeoutError:
            logger.error(f"Summary generation exceeded {self.latency_budget}s budget")
            return SummaryResult.failure(TIMED_OUT_ERROR, "TIMEOUT", model=self.model)

    async def _generate(self, content: str, options: GenerationOptions) -> SummaryResult:
        cleaned = self.preparer.clean(content)
        if not cleaned:
            raise ConfigurationError(EMPTY_CONTENT_ERROR)

        if not self.api_key:
            raise ConfigurationError(MISSING_API_KEY_ERROR)

        prompt = self.prompt_builder.build(cleaned, options.length, options.language, options.style)

        logger.info(
            f"Generating summary: length={options.length.value}, language={options.language}, "
            f"style={options.style.value}, model={self.model}, content_chars={len(cleaned)}"
        )

        outcome = await self.provider.complete(prompt, self.api_key, self.model, self.timeout_seconds)

        if not outcome.ok:
            error_code = outcome.kind.value if outcome.kind else "provider_error"
            return SummaryResult.failure(outcome.message or "Unknown error", error_code, model=self.model)

        raw_text = first_choice_text(outcome.payload)
        if not raw_text.strip():
            logger.warning(f"{self.provider.name} returned no summary text")

        summary = self.formatter.format(raw_text, prompt.target_count, prompt.style)

        return SummaryResult.ok(
            summary,
            self.model,
            attempts=outcome.attempts,
            length=options.length.value,
            language=options.language,
            style=options.style.value,
        )

    def _coerce_options(self, options: Union[GenerationOptions, dict, None]) -> GenerationOptions:
        if isinstance(options, GenerationOptions):
            return GenerationOptions.create(options.length, options.language, options.style)
        options = options or {}
        return GenerationOptions.create(
            length=options.get("length"),
            language=options.get("language"),
            style=options.get("style"),
        )
