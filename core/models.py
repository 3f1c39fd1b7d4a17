"""
Core Module - Domain Models.

============================================================
RESPONSIBILITY
============================================================
Defines the configuration and sample structures shared by the
collectors, the orchestrator and the publisher.

- Metric kinds and their fixed metric names
- Per-group collector specs
- Immutable scrape configuration
- Metric samples

============================================================
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from .constants import METRIC_HELP, MEMBER_COUNT_METRIC, PROJECT_COUNT_METRIC


# ============================================================
# METRIC KINDS
# ============================================================

class MetricKind(Enum):
    """
    Supported metric kinds.

    The value doubles as the group config key that enables the kind.
    """

    PROJECT_COUNT = "project_count"
    MEMBER_COUNT = "member_count"

    @property
    def config_key(self) -> str:
        """Group config key enabling this kind."""
        return self.value

    @property
    def metric_name(self) -> str:
        """Published metric name."""
        return _METRIC_NAMES[self]

    @property
    def help_text(self) -> str:
        """Published metric help text."""
        return METRIC_HELP[self.metric_name]


_METRIC_NAMES = {
    MetricKind.PROJECT_COUNT: PROJECT_COUNT_METRIC,
    MetricKind.MEMBER_COUNT: MEMBER_COUNT_METRIC,
}


# ============================================================
# COLLECTOR SPECS
# ============================================================

@dataclass(frozen=True)
class ProjectCountSpec:
    """Options for the project count collector."""

    include_subgroups: bool = False
    """Count projects of nested sub-groups too."""


@dataclass(frozen=True)
class MemberCountSpec:
    """Marker enabling the member count collector."""


MetricSpec = Union[ProjectCountSpec, MemberCountSpec]


# ============================================================
# CONFIGURATION
# ============================================================

@dataclass(frozen=True)
class GroupConfig:
    """One configured GitLab group and the metrics enabled for it."""

    id: str
    project_count: Optional[ProjectCountSpec] = None
    member_count: Optional[MemberCountSpec] = None

    def __post_init__(self):
        if not self.id:
            raise ValueError("Group id must be non-empty")

    def spec_for(self, kind: MetricKind) -> Optional[MetricSpec]:
        """Get the spec enabling a kind, or None when disabled."""
        return getattr(self, kind.config_key)

    def enabled_kinds(self) -> List[MetricKind]:
        """Kinds enabled for this group, in declaration order."""
        return [kind for kind in MetricKind if self.spec_for(kind) is not None]

    @property
    def is_noop(self) -> bool:
        """True when no collector is enabled."""
        return not self.enabled_kinds()


@dataclass(frozen=True)
class ScrapeConfig:
    """
    Complete configuration for one run.

    Built once at startup and passed explicitly; never mutated.
    """

    default_labels: Dict[str, str] = field(default_factory=dict)
    groups: Tuple[GroupConfig, ...] = ()

    @property
    def group_ids(self) -> List[str]:
        """Configured group ids in order."""
        return [group.id for group in self.groups]


# ============================================================
# METRIC SAMPLE
# ============================================================

@dataclass(frozen=True)
class MetricSample:
    """One (name, value, labels) triple ready for publication."""

    name: str
    value: int
    labels: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"Metric value must be an integer, got {self.value!r}")
        if self.value < 0:
            raise ValueError(f"Metric value must be non-negative, got {self.value}")

    @property
    def help_text(self) -> str:
        """Help text for the metric family."""
        return METRIC_HELP.get(self.name, self.name)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "name": self.name,
            "value": self.value,
            "labels": dict(self.labels),
        }


__all__ = [
    "MetricKind",
    "ProjectCountSpec",
    "MemberCountSpec",
    "MetricSpec",
    "GroupConfig",
    "ScrapeConfig",
    "MetricSample",
]
