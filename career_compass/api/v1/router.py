"""API v1 router aggregator.

All v1 endpoint routers are included here, mounted at /api/v1.
"""

from fastapi import APIRouter

from career_compass.api.v1 import careers, wizard

router = APIRouter()

# =============================================================================
# Profile wizard
# =============================================================================

router.include_router(wizard.router, prefix="/wizard", tags=["wizard"])

# =============================================================================
# Career exploration
# =============================================================================

router.include_router(careers.router, prefix="/careers", tags=["careers"])
