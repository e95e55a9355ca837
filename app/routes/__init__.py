"""
Routes module initialization.
"""

from fastapi import APIRouter

from app.routes.oauth import router as oauth
from app.routes.platform_tokens import router as platform_tokens
from app.routes.profile import router as profile
from app.routes.repositories import router as repositories
from app.routes.webhooks import router as webhooks

# Create main router
router = APIRouter()

# Include sub-routers
router.include_router(repositories, prefix="/repositories", tags=["Repositories"])
router.include_router(platform_tokens, prefix="/platform_tokens", tags=["PlatformTokens"])
router.include_router(oauth, prefix="/oauth", tags=["OAuth"])
router.include_router(profile, prefix="/profile", tags=["Profile"])
router.include_router(webhooks, prefix="/webhooks", tags=["Webhooks"])
