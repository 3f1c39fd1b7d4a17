"""
Collectors - Project Count.

Counts the projects owned by a group. Only a single-item page is
requested; the total comes from the pagination metadata, so request
cost does not grow with group size.
"""

import logging

from core.constants import COUNT_QUERY_PER_PAGE
from core.models import MetricKind, ProjectCountSpec
from gitlab_api import GitLabClient

from .base import BaseCollector, total_from_page


logger = logging.getLogger(__name__)


class ProjectCountCollector(BaseCollector):
    """
    Total projects in a group.

    Honors ``include_subgroups`` (default False).
    """

    kind = MetricKind.PROJECT_COUNT

    def __init__(self, client: GitLabClient):
        """Initialize project count collector."""
        super().__init__()
        self._client = client

    async def collect(self, group_id: str, spec: ProjectCountSpec) -> int:
        """Collect the project total for one group."""
        page = await self._client.list_group_projects(
            group_id,
            include_subgroups=spec.include_subgroups,
            page=1,
            per_page=COUNT_QUERY_PER_PAGE,
            simple=True,
        )
        count = total_from_page(page)

        logger.info(f"Project count in group {group_id}: {count}")
        return count
