"""
Request and response schemas for the REST API.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


# --- Errors ---

class ErrorDetail(BaseModel):
    """Error details."""
    code: str
    message: str


class ErrorResponse(BaseModel):
    """Error response."""
    detail: ErrorDetail


# --- Summaries ---

class GenerateRequest(BaseModel):
    """Request to generate a summary for a post."""
    post_id: int = Field(..., ge=1)
    length: str = "medium"
    language: str = "en"


class GenerateResponse(BaseModel):
    """Generated summary."""
    success: bool
    summary: str
    model: Optional[str] = None


class PostSummaryResponse(BaseModel):
    """Stored summary and metadata for a post."""
    post_id: int
    summary: Optional[str] = None
    language: str
    generated_at: Optional[datetime] = None
    variants: List[str] = Field(default_factory=list)
    clicks: int = 0
    show_icon: bool = True


class ShowIconRequest(BaseModel):
    """Toggle the summary icon for a post."""
    show: bool


class ShowIconResponse(BaseModel):
    post_id: int
    show_icon: bool


# --- Tracking ---

class TrackRequest(BaseModel):
    """Record a click on a post's summary icon."""
    post_id: int = Field(..., ge=1)


class TrackResponse(BaseModel):
    success: bool
    count: int


# --- Settings and stats ---

class SettingsResponse(BaseModel):
    """Provider settings, without the API key."""
    provider: str
    api_key_set: bool
    model: str
    timeout: int
    default_length: str
    default_language: str


class StatsResponse(BaseModel):
    """Global summary statistics."""
    total_posts_with_summary: int
    total_clicks: int


class HealthResponse(BaseModel):
    status: str
    version: str
    api_key_set: bool
    database: str
