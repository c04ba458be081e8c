"""
AI Blog Summary: AI-generated post summaries and the Thunderbolt card feed.
"""

__version__ = "1.0.0"

from .exceptions import BlogSummaryError, ConfigurationError
from .models import GenerationOptions, LengthPreset, OutputStyle, SummaryResult
from .summarization import GenerationOrchestrator, create_orchestrator

__all__ = [
    '__version__',
    'GenerationOrchestrator',
    'create_orchestrator',
    'GenerationOptions',
    'LengthPreset',
    'OutputStyle',
    'SummaryResult',
    'BlogSummaryError',
    'ConfigurationError',
]
