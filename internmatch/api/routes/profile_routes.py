"""
Profile Routes

GET /profile - Current user's matching profile (languages, skills, preferences)
"""

from fastapi import APIRouter, Depends, HTTPException

from internmatch.api.dependencies import get_catalog_service
from internmatch.core.auth import get_current_user
from internmatch.db.repository import ProfileNotFoundError
from internmatch.schemas.schemas import UserProfile
from internmatch.services.catalog_service import CatalogService

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("", response_model=UserProfile)
async def get_my_profile(
    user: dict = Depends(get_current_user),
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Profile of the authenticated user, as used for matching."""
    try:
        return await catalog.get_profile(user["user_id"])
    except ProfileNotFoundError:
        raise HTTPException(status_code=404, detail="Profile not found")
