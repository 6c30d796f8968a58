"""
Story list queries.

Turns list-view parameters (filters + page/limit) into a StoryPredicate
and pagination window.
"""

import os
from dataclasses import dataclass
from typing import Optional

from newsdesk.db.story_storage import StoryPredicate

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20

# Only supported list ordering: most recently modified first, id breaks ties
LIST_SORT = (("updated_at", "DESC"), ("id", "DESC"))


def get_max_page_limit() -> int:
    """Upper bound on the per-page limit (STORIES_MAX_PAGE_LIMIT)."""
    return int(os.getenv("STORIES_MAX_PAGE_LIMIT", "100"))


def parse_positive_int(value, default: int) -> int:
    """Lenient query-string int: anything unparseable or < 1 means default."""
    if value is None:
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass
class StoryQuery:
    """List-view parameters after normalization."""

    status: Optional[str] = None
    priority: Optional[str] = None
    category: Optional[str] = None
    search: Optional[str] = None
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_params(
        cls,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
        page=None,
        limit=None,
        max_limit: Optional[int] = None,
    ) -> "StoryQuery":
        """
        Build a query from raw request parameters.

        Blank filters are dropped. page/limit fall back to their defaults
        when missing or invalid, and limit is capped at max_limit
        (STORIES_MAX_PAGE_LIMIT when not given).
        """
        if max_limit is None:
            max_limit = get_max_page_limit()
        return cls(
            status=_clean(status),
            priority=_clean(priority),
            category=_clean(category),
            search=_clean(search),
            page=parse_positive_int(page, DEFAULT_PAGE),
            limit=min(parse_positive_int(limit, DEFAULT_LIMIT), max_limit),
        )


def build_story_predicate(query: StoryQuery) -> StoryPredicate:
    return StoryPredicate(
        status=query.status,
        priority=query.priority,
        category=query.category,
        search=query.search,
    )
