"""
Plugin settings.

Defaults mirror the option set the editors and front end expect; values
coming from storage or forms go through ``from_dict`` which sanitizes them.
"""

import logging
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict

from .constants import (
    DEFAULT_API_DELAY_MS,
    DEFAULT_MODEL,
    DEFAULT_PROVIDER,
    DEFAULT_TIMEOUT_SECONDS,
)
from ..models.base import BaseModel
from ..models.summary import GenerationOptions

logger = logging.getLogger(__name__)


class LogLevel(Enum):
    """Logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def _to_non_negative_int(value: Any, default: int) -> int:
    try:
        return abs(int(value))
    except (TypeError, ValueError):
        return default


def _sanitize(cls, data: Dict[str, Any]):
    """Coerce a raw mapping onto dataclass ``cls`` using its field defaults."""
    defaults = cls()
    kwargs = {}
    for f in fields(cls):
        if f.name not in data or data[f.name] is None:
            continue
        raw = data[f.name]
        default = getattr(defaults, f.name)
        if isinstance(default, bool):
            kwargs[f.name] = _to_bool(raw)
        elif isinstance(default, int):
            kwargs[f.name] = _to_non_negative_int(raw, default)
        elif isinstance(default, LogLevel):
            try:
                kwargs[f.name] = LogLevel(str(raw).strip().upper())
            except ValueError:
                logger.warning(f"Ignoring invalid log level {raw!r}")
        elif isinstance(default, str):
            kwargs[f.name] = str(raw).strip()
    return cls(**kwargs)


@dataclass
class ThunderboltSettings(BaseModel):
    """Card feed presentation settings."""
    theme: str = "dark"
    bullet_color: str = "#3b82f6"
    card_bg_color: str = "#252525"
    readmore_bg_color: str = "#dc2626"
    readmore_text_color: str = "#ffffff"
    title_font_size: str = "1rem"
    content_font_size: str = "0.75rem"
    show_share: bool = True
    posts_per_page: int = 10

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ThunderboltSettings":
        return _sanitize(cls, data or {})


@dataclass
class PluginSettings(BaseModel):
    """All plugin settings, provider configuration included."""
    provider: str = DEFAULT_PROVIDER
    api_key: str = ""
    model: str = DEFAULT_MODEL
    timeout: int = DEFAULT_TIMEOUT_SECONDS
    api_delay: int = DEFAULT_API_DELAY_MS  # milliseconds
    default_length: str = "medium"
    default_language: str = "en"
    output_style: str = "bullets"
    auto_generate: bool = True
    icon_size: str = "medium"
    icon_color: str = "#3b82f6"
    popup_theme: str = "auto"
    readmore_button_color: str = "#dc2626"
    list_bullet_color: str = "#3b82f6"
    thunderbolt: ThunderboltSettings = field(default_factory=ThunderboltSettings)

    # Service settings
    database_path: str = "data/ai_blog_summary.db"
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: LogLevel = LogLevel.INFO
    log_file: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PluginSettings":
        """Create sanitized settings; missing keys take their defaults."""
        data = data or {}
        settings = _sanitize(cls, data)
        if isinstance(data.get("thunderbolt"), dict):
            settings.thunderbolt = ThunderboltSettings.from_dict(data["thunderbolt"])
        return settings

    def merged(self, overrides: Dict[str, Any]) -> "PluginSettings":
        """Return a copy with ``overrides`` applied on top of the current values."""
        current = self.to_dict()
        current.update({k: v for k, v in (overrides or {}).items() if k != "thunderbolt"})
        if isinstance((overrides or {}).get("thunderbolt"), dict):
            current["thunderbolt"] = {**current["thunderbolt"], **overrides["thunderbolt"]}
        return PluginSettings.from_dict(current)

    @property
    def api_key_set(self) -> bool:
        return bool(self.api_key)

    @property
    def api_delay_seconds(self) -> float:
        return self.api_delay / 1000.0

    def default_options(self) -> GenerationOptions:
        """Generation options built from the configured defaults."""
        return GenerationOptions.create(
            length=self.default_length,
            language=self.default_language,
            style=self.output_style,
        )

    def public_view(self) -> Dict[str, Any]:
        """Settings safe to expose over the API (no secrets)."""
        return {
            "provider": self.provider,
            "api_key_set": self.api_key_set,
            "model": self.model,
            "timeout": self.timeout,
            "default_length": self.default_length,
            "default_language": self.default_language,
        }
