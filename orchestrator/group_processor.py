"""
Orchestrator - Group Processor.

Turns one GroupConfig into metric samples: every enabled metric kind
is collected through the registry, in registry order, and labeled
with the defaults overridden by the group id. Collector failures are
surfaced to the caller untouched.
"""

import logging
from typing import Dict, List, Mapping, Optional

from collectors import CollectorRegistry
from core.constants import GROUP_ID_LABEL
from core.labels import merge_labels
from core.models import GroupConfig, MetricSample


logger = logging.getLogger(__name__)


class GroupProcessor:
    """
    Collects the enabled metrics of a single group.
    """

    def __init__(
        self,
        registry: CollectorRegistry,
        default_labels: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize group processor.

        Args:
            registry: Collectors keyed by metric kind
            default_labels: Labels applied to every sample
        """
        self._registry = registry
        self._default_labels: Dict[str, str] = dict(default_labels or {})

    @property
    def registry(self) -> CollectorRegistry:
        """Collector registry."""
        return self._registry

    def labels_for(self, group: GroupConfig) -> Dict[str, str]:
        """Resolved label set for samples of a group."""
        return merge_labels(self._default_labels, {GROUP_ID_LABEL: group.id})

    async def process(self, group: GroupConfig) -> List[MetricSample]:
        """
        Collect all enabled metrics of a group.

        Returns:
            Zero or more samples, in registry order

        Raises:
            RetrievalError: If any collector fails
        """
        samples: List[MetricSample] = []

        for kind in self._registry.kinds():
            spec = group.spec_for(kind)
            if spec is None:
                continue

            collector = self._registry.get(kind)
            value = await collector.run(group.id, spec)

            samples.append(
                MetricSample(
                    name=collector.metric_name,
                    value=value,
                    labels=self.labels_for(group),
                )
            )

        unsupported = [k for k in group.enabled_kinds() if k not in self._registry]
        if unsupported:
            logger.warning(
                f"Group {group.id}: no collector registered for "
                f"{', '.join(k.value for k in unsupported)}"
            )

        logger.debug(f"Group {group.id}: {len(samples)} samples")
        return samples
