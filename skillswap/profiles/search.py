"""
Profile Search

Glue between the profile store and the matching layer:
filter → order → paginate.

Pure given its inputs; the router does the loading.
"""

import math
import os
from typing import List, Optional, Sequence, Tuple

from pydantic import Field

from skillswap.matching.match import filter_candidates, sort_candidates
from skillswap.matching.models import (
    CamelModel,
    Profile,
    RankedProfile,
    RequesterProfile,
    SearchFilters,
    SortOrder,
)


MAX_PAGE_LIMIT = 100
DEFAULT_PAGE_LIMIT = min(MAX_PAGE_LIMIT, max(1, int(os.getenv("SEARCH_PAGE_LIMIT", "12"))))


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class SearchQuery(CamelModel):
    """Everything a search request can ask for."""
    filters: SearchFilters = Field(default_factory=SearchFilters)
    sort_by: SortOrder = SortOrder.COMPATIBILITY
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT)


class SearchResponse(CamelModel):
    profiles: List[RankedProfile]
    pagination: Pagination
    filters: SearchFilters
    sort_by: SortOrder


def parse_csv(value: Optional[str]) -> List[str]:
    """
    Split a comma-separated query value.

    "Guitar, ,Yoga," -> ["Guitar", "Yoga"]
    """
    if not value:
        return []
    return [token.strip() for token in value.split(",") if token.strip()]


def paginate(
    items: Sequence[RankedProfile],
    page: int,
    limit: int
) -> Tuple[List[RankedProfile], Pagination]:
    """
    Slice one page out of an ordered result list.

    A page past the end yields an empty slice with correct totals.
    """
    total = len(items)
    total_pages = math.ceil(total / limit) if limit else 0
    start = (page - 1) * limit

    return list(items[start:start + limit]), Pagination(
        page=page,
        limit=limit,
        total=total,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_prev=page > 1,
    )


def run_search(
    requester: RequesterProfile,
    candidates: Sequence[Profile],
    query: SearchQuery
) -> SearchResponse:
    """
    Filter, order and paginate candidates for one search request.

    Args:
        requester: The calling user's profile
        candidates: Every other user's profile
        query: Filters, ordering and page

    Returns:
        SearchResponse with the requested page
    """
    filtered = filter_candidates(candidates, query.filters)
    ordered = sort_candidates(requester, filtered, query.sort_by)
    page_items, pagination = paginate(ordered, query.page, query.limit)

    return SearchResponse(
        profiles=page_items,
        pagination=pagination,
        filters=query.filters,
        sort_by=query.sort_by,
    )
