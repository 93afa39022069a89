"""
Profile Store

Loads the requester and candidate profiles the search endpoint ranks.

Reads the "User" table (skills stored as text arrays, availability as a JSON
string in "availabilityData") and aggregates ratings from "Review".
Schema management lives elsewhere; this module only reads.
"""

import os
import json
import logging
from typing import Any, Dict, List, Optional

import psycopg2
from psycopg2.extras import RealDictCursor
from pydantic import ValidationError

from skillswap.matching.models import AvailabilityFlags, Profile

logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL")


class ProfileStoreError(Exception):
    """Raised when profiles cannot be read. Results in 503 Service Unavailable."""
    pass


PROFILE_SELECT_SQL = """
    SELECT
        u.id,
        u.name,
        u.email,
        u.image,
        u.location,
        u.bio,
        u.timezone,
        u."skillsOffered" AS skills_offered,
        u."skillsWanted" AS skills_wanted,
        u."availabilityData" AS availability_data,
        u."createdAt" AS created_at,
        COALESCE(AVG(r.rating), 0) AS average_rating,
        COUNT(r.id) AS review_count
    FROM "User" u
    LEFT JOIN "Review" r ON r."receiverId" = u.id
"""

PROFILE_GROUP_BY_SQL = """
    GROUP BY u.id
"""


def get_db():
    """Get database connection."""
    try:
        return psycopg2.connect(DATABASE_URL, cursor_factory=RealDictCursor)
    except psycopg2.Error as e:
        logger.error(f"Database connection error: {e}")
        raise ProfileStoreError(
            f"PROFILE_DB_ERROR: Cannot connect to profile database. Error: {str(e)}"
        )


def parse_availability(raw: Any, user_id: Optional[str] = None) -> Optional[AvailabilityFlags]:
    """
    Parse the availabilityData column.

    Accepts a JSON string or an already-decoded dict. Missing or malformed
    data means "no availability", never an error.
    """
    if raw is None or raw == "":
        return None

    try:
        data = json.loads(raw) if isinstance(raw, str) else raw
        if not isinstance(data, dict):
            raise ValueError(f"expected object, got {type(data).__name__}")
        return AvailabilityFlags(**data)
    except (ValueError, TypeError, ValidationError) as e:
        logger.warning(f"Ignoring malformed availability for user {user_id}: {e}")
        return None


def profile_from_row(row: Dict[str, Any], fill_availability: bool = False) -> Profile:
    """
    Convert a "User" row (plus rating aggregates) into a Profile.

    With fill_availability, a missing or malformed availabilityData becomes an
    all-false AvailabilityFlags instead of None. Candidates are loaded this way
    so a flexible requester still earns its bonus slot against them.
    """
    user_id = str(row["id"])
    availability = parse_availability(row.get("availability_data"), user_id)
    if availability is None and fill_availability:
        availability = AvailabilityFlags()

    return Profile(
        id=user_id,
        name=row.get("name") or "Unknown User",
        image=row.get("image"),
        location=row.get("location"),
        bio=row.get("bio"),
        timezone=row.get("timezone"),
        skills_offered=row.get("skills_offered") or [],
        skills_wanted=row.get("skills_wanted") or [],
        availability=availability,
        average_rating=float(row.get("average_rating") or 0),
        review_count=int(row.get("review_count") or 0),
        created_at=row["created_at"],
    )


def _fetch_profiles(
    where_sql: str,
    params: tuple,
    order_sql: str = "",
    fill_availability: bool = False
) -> List[Profile]:
    conn = get_db()

    try:
        cur = conn.cursor()
        cur.execute(
            PROFILE_SELECT_SQL + where_sql + PROFILE_GROUP_BY_SQL + order_sql,
            params,
        )
        rows = cur.fetchall()
        cur.close()
    except psycopg2.Error as e:
        logger.error(f"Profile query failed: {e}")
        raise ProfileStoreError(f"PROFILE_QUERY_ERROR: {str(e)}")
    finally:
        conn.close()

    profiles = []
    for row in rows:
        try:
            profiles.append(profile_from_row(row, fill_availability))
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            logger.warning(f"Skipping unreadable profile row {row.get('id')}: {e}")
    return profiles


def load_requester(email: str) -> Optional[Profile]:
    """
    Load the calling user's own profile.

    Returns:
        Profile, or None if no user has this email
    """
    profiles = _fetch_profiles("WHERE u.email = %s", (email,))
    return profiles[0] if profiles else None


def load_candidates(exclude_email: str) -> List[Profile]:
    """
    Load every other user's profile, newest first.
    """
    profiles = _fetch_profiles(
        "WHERE u.email <> %s",
        (exclude_email,),
        'ORDER BY u."createdAt" DESC',
        fill_availability=True,
    )
    logger.debug(f"Loaded {len(profiles)} candidate profiles")
    return profiles


def check_connection() -> bool:
    """Run SELECT 1; used by the deployment health check."""
    conn = get_db()
    try:
        cur = conn.cursor()
        cur.execute("SELECT 1")
        cur.close()
        return True
    finally:
        conn.close()
