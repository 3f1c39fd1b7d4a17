"""
Collector Registry - Maps metric kinds to collectors.

Provides:
- Collector registration and lookup by MetricKind
- Deterministic evaluation order (registration order)
"""

import logging
from typing import Dict, Iterator, List, Optional

from core.models import MetricKind
from gitlab_api import GitLabClient

from .base import BaseCollector
from .member_count import MemberCountCollector
from .project_count import ProjectCountCollector


logger = logging.getLogger(__name__)


class CollectorRegistry:
    """
    Registry of metric collectors.

    Usage:
        registry = CollectorRegistry()
        registry.register(ProjectCountCollector(client))
        registry.register(MemberCountCollector(client))

        for kind in registry.kinds():
            collector = registry.get(kind)
    """

    def __init__(self) -> None:
        # dict preserves insertion order, which is the evaluation order
        self._collectors: Dict[MetricKind, BaseCollector] = {}

    def register(self, collector: BaseCollector) -> None:
        """
        Register a collector under its kind.

        Re-registering a kind replaces the previous collector in place.
        """
        kind = collector.kind

        if kind in self._collectors:
            logger.warning(f"Collector for '{kind.value}' already registered, replacing")

        self._collectors[kind] = collector
        logger.debug(f"Registered collector '{kind.value}' -> {collector.metric_name}")

    def get(self, kind: MetricKind) -> Optional[BaseCollector]:
        """Get the collector for a kind."""
        return self._collectors.get(kind)

    def kinds(self) -> List[MetricKind]:
        """Registered kinds in evaluation order."""
        return list(self._collectors)

    def __contains__(self, kind: MetricKind) -> bool:
        return kind in self._collectors

    def __len__(self) -> int:
        return len(self._collectors)

    def __iter__(self) -> Iterator[BaseCollector]:
        return iter(self._collectors.values())


def create_default_registry(client: GitLabClient) -> CollectorRegistry:
    """
    Create a registry with every supported collector.

    Project count is evaluated before member count.
    """
    registry = CollectorRegistry()
    registry.register(ProjectCountCollector(client))
    registry.register(MemberCountCollector(client))
    return registry
