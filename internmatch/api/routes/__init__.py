"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from internmatch.api.routes.auth_routes import router as auth_router
from internmatch.api.routes.profile_routes import router as profile_router
from internmatch.api.routes.catalog_routes import router as catalog_router
from internmatch.api.routes.match_routes import router as match_router
from internmatch.api.routes.translate_routes import router as translate_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(profile_router)
api_router.include_router(catalog_router)
api_router.include_router(match_router)
api_router.include_router(translate_router)
