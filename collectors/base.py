"""
Collectors - Base.

============================================================
PURPOSE
============================================================
Uniform contract for metric collectors.

PRINCIPLES:
- A collector returns one non-negative integer for one group
- Collectors are READ-ONLY against GitLab
- Failures are never swallowed: every API error surfaces as
  RetrievalError
- No retries, no partial results

============================================================
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from core.exceptions import RetrievalError
from core.models import MetricKind, MetricSpec
from gitlab_api import GitLabAPIError, PaginationHeaderError, PagedResponse


logger = logging.getLogger(__name__)


# ============================================================
# BASE COLLECTOR
# ============================================================

class BaseCollector(ABC):
    """
    Base class for all metric collectors.

    Subclasses set ``kind`` and implement ``collect``.
    """

    kind: MetricKind

    def __init__(self):
        """Initialize collector."""
        self._collection_count = 0
        self._error_count = 0

    @property
    def name(self) -> str:
        """Collector name."""
        return self.kind.value

    @property
    def metric_name(self) -> str:
        """Name of the metric this collector feeds."""
        return self.kind.metric_name

    @property
    def help_text(self) -> str:
        """Help text of the metric this collector feeds."""
        return self.kind.help_text

    @property
    def collection_count(self) -> int:
        """Number of collections attempted."""
        return self._collection_count

    @property
    def error_count(self) -> int:
        """Number of failed collections."""
        return self._error_count

    @abstractmethod
    async def collect(self, group_id: str, spec: MetricSpec) -> int:
        """
        Collect the value for one group.

        MUST be read-only.
        MAY raise GitLabAPIError; run() converts it.
        """
        pass

    async def run(self, group_id: str, spec: MetricSpec) -> int:
        """
        Collect with validation and error conversion.

        Raises:
            RetrievalError: If the API call failed or returned an unusable value
        """
        self._collection_count += 1

        try:
            value = await self.collect(group_id, spec)
        except GitLabAPIError as e:
            self._error_count += 1
            logger.error(f"Collector {self.name} failed for group {group_id}: {e}")
            raise RetrievalError(
                message=f"Failed to collect {self.name} for group {group_id}: {e.message}",
                group_id=group_id,
                metric_kind=self.name,
                status_code=e.status_code,
                cause=e,
            ) from e

        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            self._error_count += 1
            raise RetrievalError(
                message=f"Collector {self.name} returned invalid value {value!r} for group {group_id}",
                group_id=group_id,
                metric_kind=self.name,
            )

        return value


# ============================================================
# HELPERS
# ============================================================

def total_from_page(page: PagedResponse, request_url: Optional[str] = None) -> int:
    """
    Read the total item count reported alongside a page.

    GitLab omits X-Total for very large collections; reporting 0 in
    that case would publish a wrong value, so it is an error instead.
    """
    if page.total_items is None:
        raise PaginationHeaderError(
            message="Response did not report a total item count (X-Total header missing)",
            request_url=request_url,
        )
    return page.total_items
