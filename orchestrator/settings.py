"""
Orchestrator - Runtime Settings.

============================================================
RESPONSIBILITY
============================================================
Resolves credentials and endpoints for one run.

Precedence for each value:
    CLI flag > environment variable > config file key > default

The access token is always required. The Pushgateway URL is
required unless the run is a dry run.

============================================================
"""

import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from core.constants import (
    CONFIG_KEY_ACCESS_TOKEN,
    CONFIG_KEY_GITLAB_URL,
    CONFIG_KEY_PUSHGATEWAY_URL,
    DEFAULT_GITLAB_URL,
    DEFAULT_TIMEOUT_SECONDS,
    ENV_ACCESS_TOKEN,
    ENV_GITLAB_URL,
    ENV_PUSHGATEWAY_URL,
    PUSHGATEWAY_JOB,
)
from core.exceptions import ConfigurationError, MissingCredentialError


@dataclass(frozen=True)
class RuntimeSettings:
    """Resolved runtime settings."""
    
    access_token: str
    """GitLab access token."""
    
    pushgateway_url: Optional[str]
    """Pushgateway URL; None only for dry runs."""
    
    gitlab_url: str = DEFAULT_GITLAB_URL
    """GitLab instance base URL."""
    
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    """Per-request timeout for GitLab and the Pushgateway."""
    
    job: str = PUSHGATEWAY_JOB
    """Pushgateway job name."""
    
    dry_run: bool = False
    """Collect without pushing."""
    
    def __repr__(self) -> str:
        # Keep the token out of logs and tracebacks
        return (
            f"RuntimeSettings(pushgateway_url={self.pushgateway_url!r}, "
            f"gitlab_url={self.gitlab_url!r}, timeout_seconds={self.timeout_seconds}, "
            f"job={self.job!r}, dry_run={self.dry_run})"
        )


def _first_value(*candidates: Any) -> Optional[str]:
    """First non-blank string among candidates."""
    for candidate in candidates:
        if candidate is None:
            continue
        value = str(candidate).strip()
        if value:
            return value
    return None


def resolve_settings(
    raw_config: Optional[Mapping[str, Any]] = None,
    token: Optional[str] = None,
    pushgateway_url: Optional[str] = None,
    gitlab_url: Optional[str] = None,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    dry_run: bool = False,
    environ: Optional[Mapping[str, str]] = None,
) -> RuntimeSettings:
    """
    Resolve runtime settings from flags, environment and config file.
    
    Args:
        raw_config: Raw config file mapping
        token: --token flag value
        pushgateway_url: --pushgateway flag value
        gitlab_url: --gitlab-url flag value
        timeout_seconds: --timeout flag value
        dry_run: --dry-run flag value
        environ: Environment mapping (default: os.environ)
        
    Returns:
        RuntimeSettings instance
        
    Raises:
        MissingCredentialError: If the token or gateway URL is missing
        ConfigurationError: If a value is invalid
    """
    raw_config = raw_config or {}
    environ = os.environ if environ is None else environ
    
    resolved_token = _first_value(
        token,
        environ.get(ENV_ACCESS_TOKEN),
        raw_config.get(CONFIG_KEY_ACCESS_TOKEN),
    )
    if resolved_token is None:
        raise MissingCredentialError(
            CONFIG_KEY_ACCESS_TOKEN,
            flag="--token",
            env_var=ENV_ACCESS_TOKEN,
        )
    
    resolved_gateway = _first_value(
        pushgateway_url,
        environ.get(ENV_PUSHGATEWAY_URL),
        raw_config.get(CONFIG_KEY_PUSHGATEWAY_URL),
    )
    if resolved_gateway is None and not dry_run:
        raise MissingCredentialError(
            CONFIG_KEY_PUSHGATEWAY_URL,
            flag="--pushgateway",
            env_var=ENV_PUSHGATEWAY_URL,
        )
    
    resolved_gitlab = _first_value(
        gitlab_url,
        environ.get(ENV_GITLAB_URL),
        raw_config.get(CONFIG_KEY_GITLAB_URL),
    ) or DEFAULT_GITLAB_URL
    
    if timeout_seconds <= 0:
        raise ConfigurationError(
            f"Timeout must be positive, got {timeout_seconds}",
            config_key="timeout",
        )
    
    return RuntimeSettings(
        access_token=resolved_token,
        pushgateway_url=resolved_gateway,
        gitlab_url=resolved_gitlab,
        timeout_seconds=timeout_seconds,
        dry_run=dry_run,
    )


__all__ = [
    "RuntimeSettings",
    "resolve_settings",
]
