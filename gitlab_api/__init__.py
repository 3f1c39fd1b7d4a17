"""
GitLab API Package - Minimal async client for group statistics.

Only the list endpoints needed to read group totals are covered;
this is not a general purpose GitLab wrapper.

Quick Start:
    from gitlab_api import GitLabClient

    async with GitLabClient(token) as client:
        page = await client.list_group_projects("42", include_subgroups=True, per_page=1)
        print(page.total_items)
"""

from gitlab_api.client import GitLabClient, encode_group_id
from gitlab_api.exceptions import (
    GitLabAPIError,
    GitLabAuthError,
    GitLabNotFoundError,
    PaginationHeaderError,
)
from gitlab_api.models import PagedResponse


__all__ = [
    "GitLabClient",
    "encode_group_id",
    "PagedResponse",
    "GitLabAPIError",
    "GitLabAuthError",
    "GitLabNotFoundError",
    "PaginationHeaderError",
]
