"""
Matching Layer Core Logic

Profile → Profile compatibility (Skill Swap Matching)

This module implements the pure matching functions that:
1. Detect which skills each side can teach / learn
2. Score availability overlap
3. Apply the same-area location heuristic
4. Combine the three into one ranking value
5. Filter and order candidate lists for search

Every function is total: missing optional fields are valid input and
produce a zero / False sub-score, never an exception. Nothing here does
I/O or mutates its arguments.

Version: matching_layer_v1
"""

import math
from typing import Iterable, List, Optional, Sequence, Union

from .models import (
    AvailabilityFlags,
    MatchScore,
    Profile,
    RankedProfile,
    RequesterProfile,
    SearchFilters,
    SkillMatches,
    SkillSet,
    SortOrder,
)


# Points per matched skill, per direction. 5 matches saturate a direction.
SKILL_POINTS_PER_MATCH = 20
MAX_SCORE = 100

# Overall score weights
SKILL_WEIGHT = 0.6
AVAILABILITY_WEIGHT = 0.3
LOCATION_WEIGHT = 0.1

DAY_FLAGS = ("weekdays", "weekends")
TIME_FLAGS = ("mornings", "afternoons", "evenings")

# Filter tokens → availability flag
DAY_FILTER_FLAGS = {
    "weekdays": "weekdays",
    "weekends": "weekends",
}
TIME_FILTER_FLAGS = {
    "mornings": "mornings",
    "afternoons": "afternoons",
    "evenings": "evenings",
    "flexible": "flexible",
}


def _unique(skills: Optional[Iterable[str]]) -> List[str]:
    """Collapse duplicates, keeping first-seen order. None → []."""
    return list(dict.fromkeys(skills or []))


def score_skills(
    requester_skills: SkillSet,
    candidate: Profile
) -> MatchScore:
    """
    Score how well the requester's skills line up with a candidate's.

    Skill equality here is exact and case-sensitive.

    Args:
        requester_skills: Requester's offered / wanted skills
        candidate: Candidate profile

    Returns:
        MatchScore with skill fields populated; availability 0, no location
        match and overall_score equal to the rounded compatibility score
    """
    candidate_wanted = set(candidate.skills_wanted or [])
    candidate_offered = set(candidate.skills_offered or [])

    can_teach = [s for s in _unique(requester_skills.offered) if s in candidate_wanted]
    can_learn = [s for s in _unique(requester_skills.wanted) if s in candidate_offered]

    teach_points = len(can_teach) * SKILL_POINTS_PER_MATCH
    learn_points = len(can_learn) * SKILL_POINTS_PER_MATCH
    compatibility_score = min(MAX_SCORE, (teach_points + learn_points) / 2)

    return MatchScore(
        user_id=candidate.id,
        compatibility_score=compatibility_score,
        skill_matches=SkillMatches(can_teach=can_teach, can_learn=can_learn),
        availability_match=0.0,
        location_match=False,
        overall_score=_round_half_up(compatibility_score),
    )


def score_availability(
    requester_availability: Optional[AvailabilityFlags],
    candidate_availability: Optional[AvailabilityFlags]
) -> float:
    """
    Percentage of day/time preferences both users share.

    Days (weekdays, weekends) are worth 2 possible matches, times
    (mornings, afternoons, evenings) 3. If either user is flexible, one
    extra match and one extra possible point are added.

    Returns:
        Float in [0, 100]; 0 when either side has no availability
    """
    if requester_availability is None or candidate_availability is None:
        return 0.0

    matches = 0
    total = 0

    for flag in DAY_FLAGS + TIME_FLAGS:
        if getattr(requester_availability, flag) and getattr(candidate_availability, flag):
            matches += 1
    total += len(DAY_FLAGS) + len(TIME_FLAGS)

    if requester_availability.flexible or candidate_availability.flexible:
        matches += 1
        total += 1

    if total == 0:
        return 0.0

    return matches / total * 100


def score_location(
    requester_location: Optional[str],
    candidate_location: Optional[str]
) -> bool:
    """
    Same-area heuristic: case-insensitive equality or containment.

    "New York, NY" and "new york" match. This is plain string comparison,
    not geocoding.
    """
    if not requester_location or not candidate_location:
        return False

    a = requester_location.lower().strip()
    b = candidate_location.lower().strip()

    if not a or not b:
        return False

    return a == b or b in a or a in b


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def combine_scores(
    skill_score: float,
    availability_score: float,
    location_match: bool
) -> int:
    """
    Weighted sum of the three sub-scores.

    skill * 0.6 + availability * 0.3 + (100 * 0.1 if same area)

    Returns:
        Integer in [0, 100]
    """
    location_bonus = MAX_SCORE * LOCATION_WEIGHT if location_match else 0

    overall = (
        skill_score * SKILL_WEIGHT +
        availability_score * AVAILABILITY_WEIGHT +
        location_bonus
    )

    return max(0, min(MAX_SCORE, _round_half_up(overall)))


def score_overall(
    requester: RequesterProfile,
    candidate: Profile
) -> MatchScore:
    """
    Full compatibility of a candidate with the requester.

    Args:
        requester: Current user's skills, location and availability
        candidate: Candidate profile

    Returns:
        Fully populated MatchScore
    """
    skill_match = score_skills(requester.skill_set(), candidate)

    availability_match = score_availability(
        requester.availability,
        candidate.availability
    )

    location_match = score_location(
        requester.location,
        candidate.location
    )

    return skill_match.model_copy(update={
        "availability_match": availability_match,
        "location_match": location_match,
        "overall_score": combine_scores(
            skill_match.compatibility_score,
            availability_match,
            location_match,
        ),
    })


# ============================================================================
# Filtering
# ============================================================================

def _contains(haystack: Optional[str], needle: str) -> bool:
    return bool(haystack) and needle in haystack.lower()


def _matches_search_term(candidate: Profile, term: str) -> bool:
    term = term.lower()

    if _contains(candidate.name, term) or _contains(candidate.bio, term):
        return True

    return any(
        _contains(skill, term)
        for skill in list(candidate.skills_offered) + list(candidate.skills_wanted)
    )


def _matches_any_skill(candidate_skills: Sequence[str], wanted: Sequence[str]) -> bool:
    """True if any filter skill is a case-insensitive substring of any candidate skill."""
    return any(
        _contains(candidate_skill, skill.lower())
        for skill in wanted
        for candidate_skill in candidate_skills
    )


def _matches_availability(
    availability: Optional[AvailabilityFlags],
    tokens: Sequence[str],
    flag_map: dict
) -> bool:
    if availability is None:
        return False

    return any(
        token in flag_map and getattr(availability, flag_map[token])
        for token in tokens
    )


def candidate_matches(candidate: Profile, filters: SearchFilters) -> bool:
    """
    Check a single candidate against every filter predicate (AND).
    """
    if filters.search_term and not _matches_search_term(candidate, filters.search_term):
        return False

    if filters.location and not _contains(candidate.location, filters.location.lower()):
        return False

    if filters.skills_offered and not _matches_any_skill(
        candidate.skills_offered, filters.skills_offered
    ):
        return False

    if filters.skills_wanted and not _matches_any_skill(
        candidate.skills_wanted, filters.skills_wanted
    ):
        return False

    if filters.min_rating is not None and candidate.average_rating < filters.min_rating:
        return False

    if filters.availability_days and not _matches_availability(
        candidate.availability, filters.availability_days, DAY_FILTER_FLAGS
    ):
        return False

    if filters.availability_times and not _matches_availability(
        candidate.availability, filters.availability_times, TIME_FILTER_FLAGS
    ):
        return False

    return True


def filter_candidates(
    candidates: Sequence[Profile],
    filters: Optional[SearchFilters] = None
) -> List[Profile]:
    """
    Narrow a candidate list with SearchFilters, keeping input order.

    An empty SearchFilters returns every candidate.
    """
    if filters is None:
        return list(candidates)

    return [c for c in candidates if candidate_matches(c, filters)]


# ============================================================================
# Ranking
# ============================================================================

def _annotate(candidate: Profile, match_score: Optional[MatchScore]) -> RankedProfile:
    data = candidate.model_dump()
    data["match_score"] = match_score
    return RankedProfile.model_validate(data)


def rank_by_compatibility(
    requester: RequesterProfile,
    candidates: Sequence[Profile]
) -> List[RankedProfile]:
    """
    Score every candidate and order by overall_score, highest first.

    The sort is stable: equal scores keep their input order.
    """
    ranked = [_annotate(c, score_overall(requester, c)) for c in candidates]
    ranked.sort(key=lambda p: p.match_score.overall_score, reverse=True)
    return ranked


def sort_by_rating(candidates: Sequence[Profile]) -> List[RankedProfile]:
    """Highest average rating first (stable, unscored)."""
    ranked = [_annotate(c, None) for c in candidates]
    ranked.sort(key=lambda p: p.average_rating, reverse=True)
    return ranked


def sort_by_recent(candidates: Sequence[Profile]) -> List[RankedProfile]:
    """Newest profiles first (stable, unscored)."""
    ranked = [_annotate(c, None) for c in candidates]
    ranked.sort(key=lambda p: p.created_at, reverse=True)
    return ranked


def sort_candidates(
    requester: RequesterProfile,
    candidates: Sequence[Profile],
    sort_by: Union[SortOrder, str] = SortOrder.COMPATIBILITY
) -> List[RankedProfile]:
    """
    Order candidates for a search response.

    Args:
        requester: Current user (only used for compatibility ordering)
        candidates: Already-filtered candidates
        sort_by: compatibility, rating or recent

    Returns:
        Ordered RankedProfile list
    """
    sort_by = SortOrder(sort_by)

    if sort_by == SortOrder.RATING:
        return sort_by_rating(candidates)
    if sort_by == SortOrder.RECENT:
        return sort_by_recent(candidates)
    return rank_by_compatibility(requester, candidates)
