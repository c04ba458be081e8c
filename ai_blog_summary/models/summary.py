"""
Summary generation data models.

Every object here lives for a single generate call; nothing is cached.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union

from .base import BaseModel

logger = logging.getLogger(__name__)


class LengthPreset(Enum):
    """Coarse summary size presets."""
    SHORT = "short"
    MEDIUM = "medium"
    LARGE = "large"

    @classmethod
    def resolve(cls, value: Union["LengthPreset", str, None]) -> "LengthPreset":
        """Resolve a preset, falling back to MEDIUM for anything unrecognised."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                logger.debug(f"Unknown length preset {value!r}, using medium")
        return cls.MEDIUM


class OutputStyle(Enum):
    """Shape of the generated summary."""
    BULLETS = "bullets"
    PARAGRAPHS = "paragraphs"

    @classmethod
    def resolve(cls, value: Union["OutputStyle", str, None]) -> "OutputStyle":
        """Resolve a style, falling back to BULLETS."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                logger.debug(f"Unknown output style {value!r}, using bullets")
        return cls.BULLETS


# Bullet points per preset
BULLET_COUNTS = {
    LengthPreset.SHORT: 1,
    LengthPreset.MEDIUM: 2,
    LengthPreset.LARGE: 3,
}

# Target words per preset for the paragraph style
PARAGRAPH_WORDS = {
    LengthPreset.SHORT: 50,
    LengthPreset.MEDIUM: 100,
    LengthPreset.LARGE: 200,
}

DEFAULT_LANGUAGE = "en"


@dataclass
class GenerationOptions(BaseModel):
    """Per-call generation options.

    The language is passed to the model as-is; it is never checked against
    a whitelist.
    """
    length: LengthPreset = LengthPreset.MEDIUM
    language: str = DEFAULT_LANGUAGE
    style: OutputStyle = OutputStyle.BULLETS

    @classmethod
    def create(cls,
               length: Union[LengthPreset, str, None] = None,
               language: Optional[str] = None,
               style: Union[OutputStyle, str, None] = None) -> "GenerationOptions":
        """Build options from loosely typed input (REST params, settings)."""
        language = language.strip() if isinstance(language, str) else ""
        return cls(
            length=LengthPreset.resolve(length),
            language=language or DEFAULT_LANGUAGE,
            style=OutputStyle.resolve(style),
        )


@dataclass
class SummaryResult(BaseModel):
    """Outcome of one generate call. The only object crossing the core boundary."""
    success: bool
    summary: Optional[str] = None
    error: Optional[str] = None
    model: Optional[str] = None
    error_code: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, summary: str, model: str, **metadata) -> "SummaryResult":
        return cls(success=True, summary=summary, model=model, metadata=metadata)

    @classmethod
    def failure(cls, error: str, error_code: str, model: Optional[str] = None) -> "SummaryResult":
        return cls(success=False, error=error, error_code=error_code, model=model)

    def to_response(self) -> Dict[str, Any]:
        """Public shape: {success, summary?, error?, model?}."""
        payload: Dict[str, Any] = {"success": self.success}
        if self.summary is not None:
            payload["summary"] = self.summary
        if self.error is not None:
            payload["error"] = self.error
        if self.model is not None:
            payload["model"] = self.model
        return payload
