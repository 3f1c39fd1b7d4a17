"""
Core Module Package.

This package contains the core infrastructure components
that all other modules depend on.

Components:
- exceptions: Custom exception hierarchy
- constants: System-wide constants
- models: Configuration and metric sample structures
- labels: Label set merging
"""

from .exceptions import (
    GitLabStatsError,
    ConfigurationError,
    MissingCredentialError,
    RetrievalError,
    PublishError,
    PipelineError,
)
from .models import (
    MetricKind,
    ProjectCountSpec,
    MemberCountSpec,
    GroupConfig,
    ScrapeConfig,
    MetricSample,
)
from .labels import merge_labels


__all__ = [
    # Exceptions
    "GitLabStatsError",
    "ConfigurationError",
    "MissingCredentialError",
    "RetrievalError",
    "PublishError",
    "PipelineError",

    # Models
    "MetricKind",
    "ProjectCountSpec",
    "MemberCountSpec",
    "GroupConfig",
    "ScrapeConfig",
    "MetricSample",

    # Labels
    "merge_labels",
]
