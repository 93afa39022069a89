"""
Deployment Health Check Endpoint
================================
Returns component status of the deployed SkillSwap API.
"""

from fastapi import APIRouter
from datetime import datetime, timezone
import os

from skillswap import __version__

router = APIRouter(prefix="/api/v1/health", tags=["Health"])


@router.get("/deployment")
def deployment_health():
    """
    Deployment health check.
    Verifies the matching engine and database are operational.
    """
    status = {
        "timestamp": datetime.utcnow().isoformat() + "Z",
        "api_version": __version__,
        "environment": os.environ.get("APP_ENVIRONMENT", "unknown"),
        "components": {}
    }

    # Check Matching Engine with a known pair
    try:
        from skillswap.matching import (
            __version__ as matching_version,
            Profile,
            RequesterProfile,
            score_overall,
        )

        check = score_overall(
            RequesterProfile(skills_offered=["Guitar"], skills_wanted=["French"]),
            Profile(
                id="health-check",
                name="Health Probe",
                skills_offered=["French"],
                skills_wanted=["Guitar"],
                created_at=datetime.now(timezone.utc),
            ),
        )

        status["components"]["matching_engine"] = {
            "status": "healthy" if check.compatibility_score == 20 else "error",
            "version": matching_version,
            "check_overall_score": check.overall_score,
        }
    except Exception as e:
        status["components"]["matching_engine"] = {
            "status": "error",
            "error": str(e)
        }

    # Check Database Connection
    try:
        from skillswap.profiles.store import check_connection

        check_connection()
        status["components"]["database"] = {"status": "healthy"}
    except Exception as e:
        status["components"]["database"] = {"status": "error", "error": str(e)}

    # Overall status
    all_healthy = all(
        c.get("status") == "healthy"
        for c in status["components"].values()
    )
    status["overall_status"] = "healthy" if all_healthy else "degraded"

    return status


@router.get("/quick")
def quick_health():
    """Quick health check for load balancers."""
    return {"status": "ok", "timestamp": datetime.utcnow().isoformat() + "Z"}
