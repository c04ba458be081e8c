"""
Provider capability interface and the result types every provider returns.

A provider turns a PromptSpec into raw model text. New model vendors plug in
by implementing SummaryProvider; the orchestrator only talks to this
interface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from ..config.constants import MAX_ATTEMPTS
from ..models.base import BaseModel
from .prompt_builder import PromptSpec


class CompletionErrorKind(Enum):
    """Failure classes a completion call can end with."""
    CONFIGURATION = "configuration_error"
    NETWORK = "network_error"
    HTTP = "http_error"
    RATE_LIMITED = "rate_limited"
    SERVER = "server_error"
    MAX_RETRIES = "max_retries_exceeded"


@dataclass
class RetryState:
    """Attempt bookkeeping for a single complete() call."""
    attempt: int = 0
    max_attempts: int = MAX_ATTEMPTS
    last_error: Optional[Exception] = None
    waits: List[float] = field(default_factory=list)

    @property
    def can_retry(self) -> bool:
        return self.attempt < self.max_attempts


@dataclass
class CompletionOutcome(BaseModel):
    """Tagged result of a completion call: ``ok`` with a payload or ``error``."""
    status: str
    payload: Dict[str, Any] = field(default_factory=dict)
    kind: Optional[CompletionErrorKind] = None
    message: Optional[str] = None
    status_code: Optional[int] = None
    attempts: int = 0

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @classmethod
    def success(cls, payload: Mapping[str, Any], attempts: int, status_code: int = 200) -> "CompletionOutcome":
        return cls(status="ok", payload=dict(payload), status_code=status_code, attempts=attempts)

    @classmethod
    def failure(cls,
                kind: CompletionErrorKind,
                message: str,
                attempts: int,
                status_code: Optional[int] = None) -> "CompletionOutcome":
        return cls(status="error", kind=kind, message=message, status_code=status_code, attempts=attempts)


def first_choice_text(payload: Any) -> str:
    """Return ``choices[0].message.content`` or an empty string when it is missing."""
    if not isinstance(payload, Mapping):
        return ""
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0]
    if not isinstance(first, Mapping):
        return ""
    message = first.get("message")
    if not isinstance(message, Mapping):
        return ""
    content = message.get("content")
    return content if isinstance(content, str) else ""


class SummaryProvider(ABC):
    """Interface implemented by language-model providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human readable provider name."""

    @abstractmethod
    def get_models(self) -> Dict[str, str]:
        """Model identifiers mapped to display labels."""

    @abstractmethod
    def validate_api_key(self, api_key: str) -> bool:
        """Cheap local format check of an API key."""

    @abstractmethod
    async def complete(self,
                       prompt: PromptSpec,
                       api_key: str,
                       model: str,
                       timeout_seconds: float) -> CompletionOutcome:
        """Run the model call and return a tagged outcome. Must not raise for
        expected failures (network, HTTP, rate limits)."""
