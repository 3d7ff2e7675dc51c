"""
Match Routes

POST /match - Ranked job matches for a profile (defaults to the caller)

The AI ranking is used when it works, the local scorer otherwise; the
response looks the same either way.
"""

from fastapi import APIRouter, Body, Depends, HTTPException
from typing import List, Optional

from internmatch.api.dependencies import get_match_orchestrator
from internmatch.core.auth import get_current_user
from internmatch.schemas.schemas import MatchRequest, MatchResult
from internmatch.services.matching_service import MatchOrchestrator

router = APIRouter(prefix="/match", tags=["Matching"])


@router.post("", response_model=List[MatchResult])
async def find_matches(
    request: Optional[MatchRequest] = Body(None),
    user: dict = Depends(get_current_user),
    orchestrator: MatchOrchestrator = Depends(get_match_orchestrator),
):
    """
    Match a profile against all open jobs.

    Never fails because of the completion service: an unknown profile or
    unreadable catalog gives an empty list.

    Students can only match their own profile; business accounts may
    match any profile.
    """
    profile_id = (request.profile_id if request else None) or user["user_id"]
    if profile_id != user["user_id"] and user.get("type") != "business":
        raise HTTPException(status_code=403, detail="Only business accounts can match other profiles")
    return await orchestrator.find_matches(profile_id)
