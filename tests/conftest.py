"""
Shared fixtures for SkillSwap tests.
"""

import pytest
from datetime import datetime, timezone
from typing import List, Optional

from skillswap.matching.models import AvailabilityFlags, Profile, RequesterProfile


def make_profile(
    user_id: str,
    name: str = "Test User",
    offered: Optional[List[str]] = None,
    wanted: Optional[List[str]] = None,
    location: Optional[str] = None,
    availability: Optional[AvailabilityFlags] = None,
    rating: float = 0.0,
    created_at: Optional[datetime] = None,
    bio: Optional[str] = None,
) -> Profile:
    """Helper to create test profiles."""
    return Profile(
        id=user_id,
        name=name,
        bio=bio,
        location=location,
        skills_offered=offered or [],
        skills_wanted=wanted or [],
        availability=availability,
        average_rating=rating,
        review_count=1 if rating else 0,
        created_at=created_at or datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def alice() -> Profile:
    return make_profile(
        "u-alice",
        name="Alice Smith",
        bio="Loves jazz and late-night jam sessions",
        location="Brooklyn, New York",
        offered=["Guitar", "Music Theory"],
        wanted=["French"],
        availability=AvailabilityFlags(weekdays=True, evenings=True),
        rating=4.5,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def bob() -> Profile:
    return make_profile(
        "u-bob",
        name="Bob Jones",
        location="Boston, MA",
        offered=["French", "Spanish"],
        wanted=["Guitar"],
        availability=AvailabilityFlags(weekends=True, mornings=True, flexible=True),
        rating=4.0,
        created_at=datetime(2024, 3, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def carol() -> Profile:
    """No location, no availability record."""
    return make_profile(
        "u-carol",
        name="Carol White",
        offered=["Yoga"],
        wanted=["Web Development"],
        rating=3.9,
        created_at=datetime(2024, 2, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def candidates(alice, bob, carol) -> List[Profile]:
    return [alice, bob, carol]


@pytest.fixture
def dana() -> Profile:
    """Requester used by search tests."""
    return make_profile(
        "u-dana",
        name="Dana Lee",
        location="Boston",
        offered=["Guitar"],
        wanted=["French"],
        availability=AvailabilityFlags(weekends=True, mornings=True),
    )


@pytest.fixture
def guitar_requester() -> RequesterProfile:
    return RequesterProfile(
        skills_offered=["Guitar", "Yoga"],
        skills_wanted=["French"],
        location="New York, NY",
        availability=AvailabilityFlags(weekdays=True, mornings=True),
    )
