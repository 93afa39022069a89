"""
Matching Layer Endpoints

API endpoints for scoring and ranking profiles supplied in the request body.
Nothing here reads the database; use /api/v1/profiles/search for that.

POST /api/v1/matching/score     - Score one candidate against a requester
POST /api/v1/matching/rank      - Filter and order a candidate list
GET  /api/v1/matching/health    - Health check
GET  /api/v1/matching/test-match - Smoke test with mock profiles

Version: matching_layer_v1
"""

from datetime import datetime, timezone
from typing import Optional, List
from fastapi import APIRouter, HTTPException
from pydantic import Field

from .models import (
    CamelModel,
    AvailabilityFlags,
    MatchingHealthResponse,
    MatchScore,
    Profile,
    RankedProfile,
    RequesterProfile,
    SearchFilters,
    SortOrder,
)
from .match import (
    filter_candidates,
    score_overall,
    sort_candidates,
)


# Router
router = APIRouter(
    prefix="/api/v1/matching",
    tags=["matching"],
)


# Request models

class ScoreRequest(CamelModel):
    """Request to score one candidate."""
    requester: RequesterProfile
    candidate: Profile


class ScoreResponse(CamelModel):
    success: bool = True
    match_score: MatchScore
    generated_at: datetime = Field(default_factory=datetime.utcnow)


class RankRequest(CamelModel):
    """Request to filter and order candidates."""
    requester: RequesterProfile
    candidates: List[Profile] = Field(default_factory=list)
    filters: Optional[SearchFilters] = Field(
        default=None,
        description="Applied before ordering; omitted = no filtering"
    )
    sort_by: SortOrder = SortOrder.COMPATIBILITY


class RankResponse(CamelModel):
    success: bool = True
    total_candidates: int
    filtered_count: int
    profiles: List[RankedProfile]
    generated_at: datetime = Field(default_factory=datetime.utcnow)


# Endpoints

@router.get("/health", response_model=MatchingHealthResponse)
async def matching_health():
    """
    Health check for matching module.

    Does not require authentication.
    """
    return MatchingHealthResponse(
        status="ok",
        module="matching_layer",
        version="matching_layer_v1",
        timestamp=datetime.utcnow().isoformat(),
    )


@router.post("/score", response_model=ScoreResponse)
async def score_endpoint(request: ScoreRequest):
    """Compute the full MatchScore for one requester / candidate pair."""
    try:
        return ScoreResponse(
            match_score=score_overall(request.requester, request.candidate),
        )
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Matching error: {str(e)}")


@router.post("/rank", response_model=RankResponse)
async def rank_endpoint(request: RankRequest):
    """
    Filter then order the supplied candidates.

    match_score is only populated for sort_by=compatibility.
    """
    try:
        filtered = filter_candidates(request.candidates, request.filters)
        ordered = sort_candidates(request.requester, filtered, request.sort_by)

        return RankResponse(
            total_candidates=len(request.candidates),
            filtered_count=len(filtered),
            profiles=ordered,
        )
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Matching error: {str(e)}")


@router.get("/test-match")
async def test_match(
    offered: str = "Guitar",
    wanted: str = "French",
):
    """
    Test endpoint to verify matching logic.

    Ranks three mock candidates against a requester offering `offered`
    and wanting `wanted`.
    """
    now = datetime.now(timezone.utc)

    requester = RequesterProfile(
        skills_offered=[offered],
        skills_wanted=[wanted],
        location="New York, NY",
        availability=AvailabilityFlags(weekdays=True, evenings=True),
    )

    mock_candidates = [
        Profile(
            id="TEST-USER-001",
            name="Full Match",
            location="new york",
            skills_offered=[wanted, "Spanish"],
            skills_wanted=[offered],
            availability=AvailabilityFlags(weekdays=True, evenings=True),
            created_at=now,
        ),
        Profile(
            id="TEST-USER-002",
            name="Teach Only",
            location="Boston, MA",
            skills_offered=["Pottery"],
            skills_wanted=[offered],
            availability=AvailabilityFlags(weekends=True, flexible=True),
            created_at=now,
        ),
        Profile(
            id="TEST-USER-003",
            name="No Overlap",
            skills_offered=["Baking"],
            skills_wanted=["Knitting"],
            created_at=now,
        ),
    ]

    ranked = sort_candidates(requester, mock_candidates, SortOrder.COMPATIBILITY)

    return {
        "testParams": {
            "offered": offered,
            "wanted": wanted,
        },
        "result": [
            {
                "userId": p.id,
                "name": p.name,
                "matchScore": p.match_score.model_dump(by_alias=True),
            }
            for p in ranked
        ],
    }
