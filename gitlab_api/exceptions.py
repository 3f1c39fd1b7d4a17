"""
GitLab API Exceptions - Transport level error hierarchy.

Collectors translate these into core.exceptions.RetrievalError.
"""

from datetime import datetime, timezone
from typing import Any, Optional


class GitLabAPIError(Exception):
    """Base exception for all GitLab API errors."""
    
    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        request_url: Optional[str] = None,
        response_body: Optional[str] = None,
        original_error: Optional[Exception] = None,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.request_url = request_url
        self.response_body = response_body
        self.original_error = original_error
        self.context = context or {}
        self.timestamp = datetime.now(timezone.utc)
    
    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "status_code": self.status_code,
            "request_url": self.request_url,
            "response_body": self.response_body,
            "original_error": str(self.original_error) if self.original_error else None,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
        }
    
    def __str__(self) -> str:
        parts = [f"{self.__class__.__name__}: {self.message}"]
        if self.request_url:
            parts.append(f"[url={self.request_url}]")
        if self.original_error:
            parts.append(f"(caused by: {self.original_error})")
        return " ".join(parts)


class GitLabAuthError(GitLabAPIError):
    """Token missing, expired or lacking scope (HTTP 401/403)."""


class GitLabNotFoundError(GitLabAPIError):
    """Group does not exist or is not visible to the token (HTTP 404)."""


class PaginationHeaderError(GitLabAPIError):
    """Response lacks the pagination headers a count query relies on."""
