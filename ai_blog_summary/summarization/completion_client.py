"""
OpenAI chat-completions client for summary generation.
"""

import asyncio
import logging
import re
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional

import httpx

from ..config.constants import MAX_ATTEMPTS, OPENAI_CHAT_COMPLETIONS_URL
from ..exceptions import (
    MaxRetriesExceededError,
    NetworkError,
    ProviderHttpError,
    ProviderServerError,
    RateLimitError,
)
from .prompt_builder import PromptSpec
from .provider import CompletionErrorKind, CompletionOutcome, RetryState, SummaryProvider

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


class CompletionClient(SummaryProvider):
    """Client for the OpenAI chat completions endpoint.

    Retries transport failures, HTTP 429 and HTTP 5xx up to ``max_attempts``
    total attempts, waiting ``2 ** attempt`` seconds between them. Any other
    non-200 answer fails at once.
    """

    API_NAME = "OpenAI"

    MODELS = {
        "gpt-4": "GPT-4",
        "gpt-4-turbo": "GPT-4 Turbo",
        "gpt-3.5-turbo": "GPT-3.5 Turbo",
    }

    _API_KEY_PATTERN = re.compile(r'^sk-[A-Za-z0-9_-]{32,}$')

    def __init__(self,
                 endpoint: str = OPENAI_CHAT_COMPLETIONS_URL,
                 max_attempts: int = MAX_ATTEMPTS,
                 transport: Optional[httpx.AsyncBaseTransport] = None,
                 sleep: Optional[SleepFunc] = None):
        """Initialize the client.

        Args:
            endpoint: Chat completions URL
            max_attempts: Total attempts per call, first one included
            transport: Optional httpx transport (tests pass a MockTransport)
            sleep: Awaitable used for backoff waits, defaults to asyncio.sleep
        """
        self.endpoint = endpoint
        self.max_attempts = max(1, max_attempts)
        self._transport = transport
        self._sleep = sleep or asyncio.sleep

    @property
    def name(self) -> str:
        return self.API_NAME

    def get_models(self) -> Dict[str, str]:
        return dict(self.MODELS)

    def validate_api_key(self, api_key: str) -> bool:
        if not api_key:
            return False
        return self._API_KEY_PATTERN.match(api_key) is not None

    async def complete(self,
                       prompt: PromptSpec,
                       api_key: str,
                       model: str,
                       timeout_seconds: float) -> CompletionOutcome:
        """Send the prompt and return the parsed JSON response or a tagged failure.

        Args:
            prompt: Prompt built by PromptBuilder
            api_key: Bearer token for the provider
            model: Model identifier
            timeout_seconds: Deadline for each attempt

        Returns:
            CompletionOutcome; never raises for network or provider errors
        """
        if not api_key:
            return CompletionOutcome.failure(
                CompletionErrorKind.CONFIGURATION, "API key not configured", attempts=0
            )

        body = self._build_request_body(prompt, model)
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        state = RetryState(max_attempts=self.max_attempts)

        async with httpx.AsyncClient(transport=self._transport, timeout=timeout_seconds) as client:
            while state.can_retry:
                state.attempt += 1
                try:
                    data = await self._make_request(client, body, headers, timeout_seconds)

                except (NetworkError, RateLimitError, ProviderServerError) as e:
                    state.last_error = e
                    logger.warning(
                        f"{self.API_NAME} attempt {state.attempt}/{state.max_attempts} failed: {e.message}"
                    )
                    if state.can_retry:
                        wait = self._backoff_seconds(state.attempt)
                        state.waits.append(wait)
                        await self._sleep(wait)
                    continue

                except ProviderHttpError as e:
                    logger.warning(f"{self.API_NAME} rejected request ({e.status_code}): {e.message}")
                    return CompletionOutcome.failure(
                        CompletionErrorKind.HTTP,
                        e.message,
                        attempts=state.attempt,
                        status_code=e.status_code,
                    )

                logger.info(f"{self.API_NAME} completion succeeded: model={model}, attempts={state.attempt}")
                return CompletionOutcome.success(data, attempts=state.attempt)

        exhausted = MaxRetriesExceededError(state.attempt, state.last_error)
        logger.error(f"{self.API_NAME} gave up after {state.attempt} attempts: {state.last_error}")
        return CompletionOutcome.failure(
            CompletionErrorKind.MAX_RETRIES,
            exhausted.message,
            attempts=state.attempt,
            status_code=getattr(state.last_error, "status_code", None),
        )

    def _build_request_body(self, prompt: PromptSpec, model: str) -> Dict[str, Any]:
        """Build the JSON request body."""
        return {
            "model": model,
            "messages": prompt.to_messages(),
            "temperature": prompt.temperature,
            "max_tokens": prompt.max_tokens,
        }

    async def _make_request(self,
                            client: httpx.AsyncClient,
                            body: Dict[str, Any],
                            headers: Dict[str, str],
                            timeout_seconds: float) -> Dict[str, Any]:
        """Run one attempt, raising a typed error for every non-200 outcome."""
        try:
            response = await asyncio.wait_for(
                client.post(self.endpoint, json=body, headers=headers),
                timeout=timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise NetworkError(self.API_NAME, f"request timed out after {timeout_seconds}s", cause=e)
        except httpx.HTTPError as e:
            raise NetworkError(self.API_NAME, str(e) or type(e).__name__, cause=e)

        data = self._safe_json(response)

        if response.status_code == 200:
            return data

        message = self._error_message(data)
        if response.status_code == 429:
            raise RateLimitError(self.API_NAME, message)
        if 500 <= response.status_code < 600:
            raise ProviderServerError(response.status_code, message)
        raise ProviderHttpError(response.status_code, message)

    def _safe_json(self, response: httpx.Response) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}

    def _error_message(self, data: Mapping[str, Any]) -> str:
        """Provider error message from the body, else a generic one."""
        error = data.get("error")
        if isinstance(error, Mapping):
            message = error.get("message")
            if isinstance(message, str) and message:
                return message
        return "Unknown error"

    def _backoff_seconds(self, attempt: int) -> float:
        """Exponential backoff, attempt counted from 1."""
        return float(2 ** attempt)
