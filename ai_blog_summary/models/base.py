"""
Base model helpers shared by all data models.
"""

from dataclasses import asdict
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def _serialize(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: _serialize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize(item) for item in value]
    return value


class BaseModel:
    """Mixin giving dataclasses JSON-friendly serialization."""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {key: _serialize(value) for key, value in asdict(self).items()}
