"""
Matching Layer Models

Pydantic models for profile compatibility scoring, search filters and
ranked results.

Profiles are read-only inputs. MatchScore values are created fresh for
every (requester, candidate) pair and never persisted.

Version: matching_layer_v1
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Serializes with the frontend's camelCase keys (matchScore, totalPages, ...).

    Snake_case field names are still accepted on input.
    """

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class SortOrder(str, Enum):
    """Orderings the search endpoint supports."""
    COMPATIBILITY = "compatibility"
    RATING = "rating"
    RECENT = "recent"


class AvailabilityFlags(CamelModel):
    """
    Six independent day/time preferences.

    Nothing forces the flags to be mutually exclusive; a profile may set all six.
    """
    weekdays: bool = False
    weekends: bool = False
    mornings: bool = False
    afternoons: bool = False
    evenings: bool = False
    flexible: bool = False

    class Config:
        extra = "ignore"


class SkillSet(CamelModel):
    """Offered / wanted skills of the requesting user."""
    offered: List[str] = Field(default_factory=list)
    wanted: List[str] = Field(default_factory=list)

    @field_validator("offered", "wanted", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return v or []


class RequesterProfile(CamelModel):
    """
    The part of the current user's profile the matcher needs.

    A full Profile carries the same fields and can be passed anywhere a
    RequesterProfile is expected.
    """
    skills_offered: List[str] = Field(default_factory=list)
    skills_wanted: List[str] = Field(default_factory=list)
    location: Optional[str] = None
    availability: Optional[AvailabilityFlags] = None

    @field_validator("skills_offered", "skills_wanted", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return v or []

    def skill_set(self) -> SkillSet:
        return SkillSet(offered=self.skills_offered, wanted=self.skills_wanted)


class Profile(RequesterProfile):
    """A user profile as loaded from storage."""
    id: str
    name: str
    image: Optional[str] = None
    bio: Optional[str] = None
    timezone: Optional[str] = None
    average_rating: float = Field(default=0.0, ge=0.0)
    review_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    class Config:
        extra = "ignore"

    @field_validator("name", mode="before")
    @classmethod
    def default_name(cls, v):
        return v or "Unknown User"

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        # Naive timestamps from storage are UTC; keep them comparable.
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class SkillMatches(CamelModel):
    """Skills that line up in each direction of a swap."""
    can_teach: List[str] = Field(
        default_factory=list,
        description="Requester-offered skills the candidate wants"
    )
    can_learn: List[str] = Field(
        default_factory=list,
        description="Requester-wanted skills the candidate offers"
    )


class MatchScore(CamelModel):
    """
    Compatibility of one candidate with the requester.

    compatibility_score is skill overlap only; overall_score is the weighted
    ranking value combining skills, availability and location.
    """
    user_id: str
    compatibility_score: float = Field(ge=0.0, le=100.0)
    skill_matches: SkillMatches = Field(default_factory=SkillMatches)
    availability_match: float = Field(default=0.0, ge=0.0, le=100.0)
    location_match: bool = False
    overall_score: int = Field(ge=0, le=100)

    class Config:
        extra = "forbid"


class SearchFilters(CamelModel):
    """
    Optional predicates applied to candidates before ranking.

    Every field passes everything when absent or empty.
    """
    search_term: Optional[str] = None
    location: Optional[str] = None
    skills_offered: List[str] = Field(default_factory=list)
    skills_wanted: List[str] = Field(default_factory=list)
    min_rating: Optional[float] = None
    availability_days: List[str] = Field(
        default_factory=list,
        description="weekdays, weekends"
    )
    availability_times: List[str] = Field(
        default_factory=list,
        description="mornings, afternoons, evenings, flexible"
    )

    @field_validator(
        "skills_offered",
        "skills_wanted",
        "availability_days",
        "availability_times",
        mode="before",
    )
    @classmethod
    def none_as_empty(cls, v):
        return v or []

    class Config:
        extra = "forbid"


class RankedProfile(Profile):
    """A candidate profile annotated with its match score (None unless ranked by compatibility)."""
    match_score: Optional[MatchScore] = None


class MatchingHealthResponse(BaseModel):
    """Health check response for matching module."""
    status: str = "ok"
    module: str = "matching_layer"
    version: str = "matching_layer_v1"
    timestamp: str = Field(default_factory=lambda: datetime.utcnow().isoformat())
