"""
Services module for AI Blog Summary.

Summary metadata management and automatic generation on publish.
"""

from .auto_generator import AutoGenerator
from .summary_manager import GlobalStats, SummaryManager

__all__ = [
    'SummaryManager',
    'GlobalStats',
    'AutoGenerator',
]
