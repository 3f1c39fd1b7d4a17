"""
Core Module - Exceptions.

============================================================
RESPONSIBILITY
============================================================
Defines all custom exceptions for the scraper.

- Provides clear exception hierarchy
- Carries context for debugging
- Lets the CLI boundary decide the exit code

============================================================
EXCEPTION HIERARCHY
============================================================
GitLabStatsError (base)
├── ConfigurationError
│   └── MissingCredentialError
├── RetrievalError
├── PublishError
└── PipelineError

Every error is terminal: nothing below the CLI retries or
recovers, and nothing below the CLI exits the process.

============================================================
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


# ============================================================
# BASE EXCEPTION
# ============================================================

class GitLabStatsError(Exception):
    """
    Base exception for all scraper errors.

    All exceptions carry:
    - context: for debugging
    - cause: the underlying exception, if any
    - timestamp: when the error occurred
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)

        self.message = message
        self.context = context or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc)

        if cause:
            self.context["cause_type"] = type(cause).__name__
            self.context["cause_message"] = str(cause)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception for logging."""
        return {
            "type": type(self).__name__,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "cause": str(self.cause) if self.cause else None,
        }

    def to_log_format(self) -> str:
        """Format exception for structured logging."""
        ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
        base = f"{type(self).__name__}: {self.message}"
        return f"{base} | {ctx_str}" if ctx_str else base


# ============================================================
# CONFIGURATION ERRORS
# ============================================================

class ConfigurationError(GitLabStatsError):
    """Configuration file is unreadable, malformed or has the wrong shape."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        path: Optional[str] = None,
        **kwargs,
    ):
        context = kwargs.pop("context", {})

        if config_key:
            context["config_key"] = config_key
        if path:
            context["path"] = path

        super().__init__(message, context=context, **kwargs)


class MissingCredentialError(ConfigurationError):
    """Required access token or gateway URL is missing."""

    def __init__(
        self,
        key: str,
        flag: Optional[str] = None,
        env_var: Optional[str] = None,
    ):
        if flag and env_var:
            message = (
                f"Missing required value '{key}': "
                f"provide it using the {flag} flag or {env_var} environment variable"
            )
        else:
            message = f"Missing required value '{key}'"

        context = {}
        if flag:
            context["flag"] = flag
        if env_var:
            context["env_var"] = env_var

        super().__init__(message, config_key=key, context=context)
        self.key = key
        self.flag = flag
        self.env_var = env_var


# ============================================================
# RUNTIME ERRORS
# ============================================================

class RetrievalError(GitLabStatsError):
    """A collector's GitLab API call failed."""

    def __init__(
        self,
        message: str,
        group_id: Optional[str] = None,
        metric_kind: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs,
    ):
        context = kwargs.pop("context", {})

        if group_id is not None:
            context["group_id"] = group_id
        if metric_kind:
            context["metric_kind"] = metric_kind
        if status_code is not None:
            context["status_code"] = status_code

        super().__init__(message, context=context, **kwargs)
        self.group_id = group_id
        self.metric_kind = metric_kind
        self.status_code = status_code


class PublishError(GitLabStatsError):
    """Pushing the metric batch to the gateway failed."""

    def __init__(
        self,
        message: str,
        gateway_url: Optional[str] = None,
        job: Optional[str] = None,
        **kwargs,
    ):
        context = kwargs.pop("context", {})

        if gateway_url:
            context["gateway_url"] = gateway_url
        if job:
            context["job"] = job

        super().__init__(message, context=context, **kwargs)


class PipelineError(GitLabStatsError):
    """The scrape pipeline was driven incorrectly."""

    def __init__(
        self,
        message: str,
        run_id: Optional[str] = None,
        **kwargs,
    ):
        context = kwargs.pop("context", {})

        if run_id:
            context["run_id"] = run_id

        super().__init__(message, context=context, **kwargs)


# ============================================================
# EXPORTS
# ============================================================

__all__ = [
    "GitLabStatsError",
    "ConfigurationError",
    "MissingCredentialError",
    "RetrievalError",
    "PublishError",
    "PipelineError",
]
