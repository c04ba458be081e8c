"""
Summary generation core for AI Blog Summary.

Pipeline: ContentPreparer -> PromptBuilder -> SummaryProvider (CompletionClient)
-> SummaryFormatter, composed by GenerationOrchestrator.
"""

from .completion_client import CompletionClient
from .content_preparer import ContentPreparer
from .engine import GenerationOrchestrator
from .factory import create_orchestrator, create_provider, register_provider
from .prompt_builder import PromptBuilder, PromptSpec
from .provider import (
    CompletionErrorKind,
    CompletionOutcome,
    RetryState,
    SummaryProvider,
    first_choice_text,
)
from .summary_formatter import SummaryFormatter, summary_items

__all__ = [
    'GenerationOrchestrator',
    'ContentPreparer',
    'PromptBuilder',
    'PromptSpec',
    'CompletionClient',
    'CompletionOutcome',
    'CompletionErrorKind',
    'RetryState',
    'SummaryProvider',
    'SummaryFormatter',
    'first_choice_text',
    'summary_items',
    'create_orchestrator',
    'create_provider',
    'register_provider',
]
