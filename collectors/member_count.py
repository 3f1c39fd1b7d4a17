"""
Collectors - Member Count.

Counts the direct members of a group from a single-item page.
"""

import logging

from core.constants import COUNT_QUERY_PER_PAGE
from core.models import MemberCountSpec, MetricKind
from gitlab_api import GitLabClient

from .base import BaseCollector, total_from_page


logger = logging.getLogger(__name__)


class MemberCountCollector(BaseCollector):
    """Total direct members of a group."""

    kind = MetricKind.MEMBER_COUNT

    def __init__(self, client: GitLabClient):
        """Initialize member count collector."""
        super().__init__()
        self._client = client

    async def collect(self, group_id: str, spec: MemberCountSpec) -> int:
        """Collect the member total for one group."""
        page = await self._client.list_group_members(
            group_id,
            page=1,
            per_page=COUNT_QUERY_PER_PAGE,
        )
        count = total_from_page(page)

        logger.info(f"Group members count in group {group_id}: {count}")
        return count
