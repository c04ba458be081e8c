"""
Exception hierarchy for AI Blog Summary.

Components raise these internally; the generation core converts them into
tagged results (CompletionOutcome, SummaryResult) before they reach callers.
"""

from typing import Any, Dict, Optional


def create_error_context(**kwargs) -> Dict[str, Any]:
    """Build an error context dict, dropping empty values."""
    return {key: value for key, value in kwargs.items() if value is not None}


class BlogSummaryError(Exception):
    """Base error for the plugin."""

    def __init__(self,
                 message: str,
                 error_code: str = "BLOG_SUMMARY_ERROR",
                 context: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON responses and logs."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
        }


class ConfigurationError(BlogSummaryError):
    """Missing API key, empty content or an unusable setting."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code="CONFIGURATION_ERROR", context=context)


class NetworkError(BlogSummaryError):
    """Transport failure talking to the provider (DNS, refused, timeout)."""

    def __init__(self, api_name: str, message: str, cause: Optional[Exception] = None):
        super().__init__(
            f"{api_name} network error: {message}",
            error_code="NETWORK_ERROR",
            context={"api_name": api_name},
            cause=cause,
        )
        self.api_name = api_name


class RateLimitError(BlogSummaryError):
    """Provider answered HTTP 429."""

    def __init__(self, api_name: str, message: str = "Rate limit exceeded"):
        super().__init__(
            f"{api_name}: {message}",
            error_code="RATE_LIMITED",
            context={"api_name": api_name, "status_code": 429},
        )
        self.api_name = api_name
        self.status_code = 429


class ProviderHttpError(BlogSummaryError):
    """Non-retryable provider response (4xx other than 429)."""

    def __init__(self, status_code: int, message: str):
        super().__init__(
            message,
            error_code="PROVIDER_HTTP_ERROR",
            context={"status_code": status_code},
        )
        self.status_code = status_code


class ProviderServerError(BlogSummaryError):
    """Provider answered with a 5xx status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(
            message,
            error_code="PROVIDER_SERVER_ERROR",
            context={"status_code": status_code},
        )
        self.status_code = status_code


class MaxRetriesExceededError(BlogSummaryError):
    """Every attempt failed with a retryable error."""

    def __init__(self, attempts: int, last_error: Optional[Exception] = None):
        super().__init__(
            "Maximum retries exceeded",
            error_code="MAX_RETRIES_EXCEEDED",
            context=create_error_context(
                attempts=attempts,
                last_error=str(last_error) if last_error else None,
            ),
            cause=last_error,
        )
        self.attempts = attempts


class PostNotFoundError(BlogSummaryError):
    """Referenced post does not exist."""

    def __init__(self, post_id: int):
        super().__init__(
            "Invalid post ID",
            error_code="INVALID_POST",
            context={"post_id": post_id},
        )
        self.post_id = post_id
