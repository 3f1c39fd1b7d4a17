"""
GitLab API Models - Paginated response structures.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional


# GitLab pagination headers
HEADER_TOTAL = "X-Total"
HEADER_TOTAL_PAGES = "X-Total-Pages"
HEADER_PAGE = "X-Page"
HEADER_PER_PAGE = "X-Per-Page"
HEADER_NEXT_PAGE = "X-Next-Page"


def _parse_int_header(headers: Mapping[str, str], name: str) -> Optional[int]:
    """Read an integer header; blank or malformed values yield None."""
    raw = headers.get(name)
    if raw is None:
        return None
    raw = raw.strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


@dataclass
class PagedResponse:
    """
    One page of a GitLab list endpoint.
    
    total_items is None when GitLab omits X-Total, which it does for
    very large collections.
    """
    items: list[dict[str, Any]] = field(default_factory=list)
    total_items: Optional[int] = None
    total_pages: Optional[int] = None
    page: Optional[int] = None
    per_page: Optional[int] = None
    next_page: Optional[int] = None
    
    @classmethod
    def from_response(
        cls,
        items: list[dict[str, Any]],
        headers: Mapping[str, str],
    ) -> "PagedResponse":
        """Build from a decoded body and the response headers."""
        return cls(
            items=items,
            total_items=_parse_int_header(headers, HEADER_TOTAL),
            total_pages=_parse_int_header(headers, HEADER_TOTAL_PAGES),
            page=_parse_int_header(headers, HEADER_PAGE),
            per_page=_parse_int_header(headers, HEADER_PER_PAGE),
            next_page=_parse_int_header(headers, HEADER_NEXT_PAGE),
        )
    
    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (without items)."""
        return {
            "item_count": len(self.items),
            "total_items": self.total_items,
            "total_pages": self.total_pages,
            "page": self.page,
            "per_page": self.per_page,
            "next_page": self.next_page,
        }
