"""
GitLab API Client - Minimal async REST adapter.

Implements the two group list endpoints the collectors need and
exposes GitLab's pagination metadata, so callers can read a total
count from a single-item page instead of walking every record.

Endpoints used:
- GET /groups/:id/projects
- GET /groups/:id/members
"""

import asyncio
import logging
import time
from typing import Any, Optional
from urllib.parse import quote

import aiohttp

from core.constants import (
    DEFAULT_GITLAB_URL,
    DEFAULT_TIMEOUT_SECONDS,
    GITLAB_API_PREFIX,
    SYSTEM_NAME,
    SYSTEM_VERSION,
)
from gitlab_api.exceptions import (
    GitLabAPIError,
    GitLabAuthError,
    GitLabNotFoundError,
)
from gitlab_api.models import PagedResponse


logger = logging.getLogger(__name__)


def encode_group_id(group_id: str) -> str:
    """Encode a numeric id or full path as a single URL path segment."""
    return quote(str(group_id), safe="")


def _query_bool(value: bool) -> str:
    return "true" if value else "false"


class GitLabClient:
    """
    Async GitLab REST API v4 client.

    Authentication uses a personal, group or project access token sent
    in the PRIVATE-TOKEN header. No retries: a failed request surfaces
    immediately as GitLabAPIError.

    Usage:
        async with GitLabClient(token, base_url="https://gitlab.example.com") as client:
            page = await client.list_group_members("my-group", per_page=1)
            print(page.total_items)
    """

    def __init__(
        self,
        access_token: str,
        base_url: str = DEFAULT_GITLAB_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        if not access_token:
            raise ValueError("access_token is required")

        self._access_token = access_token
        self._api_url = self._build_api_url(base_url)
        self._timeout = timeout
        self._session = session
        self._owns_session = session is None
        self._request_count = 0

    @staticmethod
    def _build_api_url(base_url: str) -> str:
        base = (base_url or DEFAULT_GITLAB_URL).rstrip("/")
        if base.endswith(GITLAB_API_PREFIX):
            return base
        return f"{base}{GITLAB_API_PREFIX}"

    @property
    def api_url(self) -> str:
        """Base URL of the REST API, including the /api/v4 prefix."""
        return self._api_url

    @property
    def request_count(self) -> int:
        """Number of requests issued by this client."""
        return self._request_count

    # --------------------------------------------------------
    # Endpoints
    # --------------------------------------------------------

    async def list_group_projects(
        self,
        group_id: str,
        include_subgroups: bool = False,
        page: int = 1,
        per_page: int = 20,
        simple: bool = True,
    ) -> PagedResponse:
        """
        List projects owned by a group.

        Args:
            group_id: Numeric id or full path of the group
            include_subgroups: Include projects of nested sub-groups
            page: Page number (1-based)
            per_page: Page size
            simple: Ask for the reduced project representation

        Returns:
            PagedResponse with the page items and pagination totals
        """
        params = {
            "include_subgroups": _query_bool(include_subgroups),
            "simple": _query_bool(simple),
            "page": str(page),
            "per_page": str(per_page),
        }
        return await self._get_paged(f"/groups/{encode_group_id(group_id)}/projects", params)

    async def list_group_members(
        self,
        group_id: str,
        page: int = 1,
        per_page: int = 20,
    ) -> PagedResponse:
        """
        List direct members of a group.

        Args:
            group_id: Numeric id or full path of the group
            page: Page number (1-based)
            per_page: Page size

        Returns:
            PagedResponse with the page items and pagination totals
        """
        params = {
            "page": str(page),
            "per_page": str(per_page),
        }
        return await self._get_paged(f"/groups/{encode_group_id(group_id)}/members", params)

    # --------------------------------------------------------
    # Transport
    # --------------------------------------------------------

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout),
            )
            self._owns_session = True
        return self._session

    def _get_default_headers(self) -> dict[str, str]:
        """Get default HTTP headers."""
        return {
            "Accept": "application/json",
            "User-Agent": f"{SYSTEM_NAME}/{SYSTEM_VERSION}",
            "PRIVATE-TOKEN": self._access_token,
        }

    async def _get_paged(
        self,
        path: str,
        params: dict[str, str],
    ) -> PagedResponse:
        """Issue a GET against a list endpoint."""
        url = f"{self._api_url}{path}"
        session = await self._get_session()

        self._request_count += 1
        start_time = time.monotonic()
        try:
            async with session.request(
                "GET",
                url,
                params=params,
                headers=self._get_default_headers(),
            ) as response:
                latency_ms = (time.monotonic() - start_time) * 1000

                if response.status >= 400:
                    body = await response.text()
                    raise self._error_for_status(response.status, url, body)

                try:
                    data: Any = await response.json()
                except ValueError as e:
                    raise GitLabAPIError(
                        message=f"Invalid JSON body: {e}",
                        status_code=response.status,
                        request_url=url,
                        original_error=e,
                    ) from e
                logger.debug(f"GET {path} completed in {latency_ms:.1f}ms")

                if not isinstance(data, list):
                    raise GitLabAPIError(
                        message=f"Expected a JSON list, got {type(data).__name__}",
                        status_code=response.status,
                        request_url=url,
                    )

                return PagedResponse.from_response(data, response.headers)

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise GitLabAPIError(
                message=f"Connection error: {e}",
                request_url=url,
                original_error=e,
            ) from e

    @staticmethod
    def _error_for_status(status: int, url: str, body: str) -> GitLabAPIError:
        """Map an HTTP error status onto the exception hierarchy."""
        if status in (401, 403):
            error_class = GitLabAuthError
        elif status == 404:
            error_class = GitLabNotFoundError
        else:
            error_class = GitLabAPIError

        return error_class(
            message=f"HTTP {status}",
            status_code=status,
            request_url=url,
            response_body=body[:1000],
        )

    # --------------------------------------------------------
    # Lifecycle
    # --------------------------------------------------------

    async def close(self) -> None:
        """Close resources."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "GitLabClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()
