"""
SkillSwap Matching Layer

Profile → Profile Compatibility (Skill Swap Matching)

This module answers: "Given who I am, which of these people should I swap with first?"

It:
- Detects which skills each side can teach and learn
- Scores availability overlap and a same-area location heuristic
- Combines them into one overall score (skills 60%, availability 30%, location 10%)
- Filters candidate lists by search criteria
- Orders results by compatibility, rating or recency

PRINCIPLE: Pure functions over in-memory profiles. Storage, auth and
pagination belong to the caller.

Version: matching_layer_v1
"""

from .models import (
    AvailabilityFlags,
    Profile,
    RequesterProfile,
    SkillSet,
    SkillMatches,
    MatchScore,
    SearchFilters,
    RankedProfile,
    SortOrder,
)
from .match import (
    score_skills,
    score_availability,
    score_location,
    combine_scores,
    score_overall,
    filter_candidates,
    rank_by_compatibility,
    sort_by_rating,
    sort_by_recent,
    sort_candidates,
)

__all__ = [
    # Models
    "AvailabilityFlags",
    "Profile",
    "RequesterProfile",
    "SkillSet",
    "SkillMatches",
    "MatchScore",
    "SearchFilters",
    "RankedProfile",
    "SortOrder",
    # Functions
    "score_skills",
    "score_availability",
    "score_location",
    "combine_scores",
    "score_overall",
    "filter_candidates",
    "rank_by_compatibility",
    "sort_by_rating",
    "sort_by_recent",
    "sort_candidates",
]

__version__ = "matching_layer_v1"
