"""
Configuration management for AI Blog Summary.
"""

from .constants import DEFAULT_MODEL, MAX_ATTEMPTS, SUMMARY_TEMPERATURE
from .environment import EnvironmentLoader
from .settings import LogLevel, PluginSettings, ThunderboltSettings
from .validation import ConfigValidator

__all__ = [
    'PluginSettings',
    'ThunderboltSettings',
    'LogLevel',
    'EnvironmentLoader',
    'ConfigValidator',
    'DEFAULT_MODEL',
    'MAX_ATTEMPTS',
    'SUMMARY_TEMPERATURE',
]
