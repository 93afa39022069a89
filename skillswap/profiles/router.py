"""
Profile Search Router

Endpoints:
- GET /api/v1/profiles/search - Filtered, ranked, paginated profile search

The caller's identity arrives in X-User-Email, set by the upstream
authentication layer. Query parameter names follow the frontend's
camelCase (skillsOffered, minRating, sortBy, ...).
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query

from skillswap.matching.models import SearchFilters, SortOrder
from skillswap.profiles import store
from skillswap.profiles.search import (
    DEFAULT_PAGE_LIMIT,
    MAX_PAGE_LIMIT,
    SearchQuery,
    SearchResponse,
    parse_csv,
    run_search,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/profiles", tags=["profiles"])


def require_user_email(x_user_email: Optional[str] = Header(None, alias="X-User-Email")) -> str:
    """
    Caller identity forwarded by the auth layer.

    Raises 401 if missing.
    """
    if not x_user_email or not x_user_email.strip():
        raise HTTPException(status_code=401, detail="Unauthorized")
    return x_user_email.strip()


@router.get("/search", response_model=SearchResponse)
def search_profiles(
    email: str = Depends(require_user_email),
    search: str = Query(default="", description="Matches name, bio or any skill"),
    location: str = Query(default=""),
    skills_offered: str = Query(default="", alias="skillsOffered", description="Comma-separated"),
    skills_wanted: str = Query(default="", alias="skillsWanted", description="Comma-separated"),
    min_rating: Optional[float] = Query(default=None, alias="minRating", ge=0),
    availability_days: str = Query(default="", alias="availabilityDays", description="weekdays,weekends"),
    availability_times: str = Query(
        default="",
        alias="availabilityTimes",
        description="mornings,afternoons,evenings,flexible",
    ),
    sort_by: SortOrder = Query(default=SortOrder.COMPATIBILITY, alias="sortBy"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
):
    """
    Search other users.

    1. Load the caller's profile (404 if none)
    2. Load every other profile
    3. Filter, order by sortBy, paginate
    """
    query = SearchQuery(
        filters=SearchFilters(
            search_term=search or None,
            location=location or None,
            skills_offered=parse_csv(skills_offered),
            skills_wanted=parse_csv(skills_wanted),
            min_rating=min_rating,
            availability_days=parse_csv(availability_days),
            availability_times=parse_csv(availability_times),
        ),
        sort_by=sort_by,
        page=page,
        limit=limit,
    )

    try:
        requester = store.load_requester(email)
        if requester is None:
            raise HTTPException(status_code=404, detail="Current user not found")

        candidates = store.load_candidates(email)
        response = run_search(requester, candidates, query)

        logger.info(
            f"Profile search by {email}: sort={sort_by.value} "
            f"candidates={len(candidates)} matched={response.pagination.total}"
        )
        return response

    except HTTPException:
        raise
    except store.ProfileStoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        logger.exception("Profile search failed")
        raise HTTPException(status_code=500, detail=f"Search error: {str(e)}")
