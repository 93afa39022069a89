"""
SkillSwap API Server
Skill-bartering profile matching and search

Routers:
- /api/v1/profiles  - Profile search (filter → rank → paginate)
- /api/v1/matching  - Stateless scoring / ranking over posted profiles
- /api/v1/health    - Deployment health
"""

import os
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from skillswap import __version__

# ============================================
# Logging
# ============================================
logging.basicConfig(
    level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# ============================================
# App Configuration
# ============================================
app = FastAPI(
    title="SkillSwap API",
    description="Skill-bartering profile matching and search",
    version=__version__
)

# ============================================
# CORS Configuration
# ============================================
CORS_ALLOW_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
    if origin.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["*"],
)

# ============================================
# Routers
# ============================================
from skillswap.profiles.router import router as profiles_router  # noqa: E402
from skillswap.matching.admin import router as matching_router  # noqa: E402
from skillswap.health.router import router as health_router  # noqa: E402

app.include_router(profiles_router)
app.include_router(matching_router)
app.include_router(health_router)
logger.info("SkillSwap routers registered: profiles, matching, health")


# ============================================
# Health & Version Endpoints
# ============================================
@app.get("/health")
async def health():
    return {"status": "healthy"}


@app.get("/version")
async def version():
    return {"api_version": __version__, "matching_layer": "matching_layer_v1"}
