"""
Translation Routes

POST /translate - Translate a chat message, falling back to the original text
"""

from fastapi import APIRouter, Depends

from internmatch.api.dependencies import get_translation_orchestrator
from internmatch.schemas.schemas import TranslationRequest, TranslationResult
from internmatch.services.translation_service import TranslationOrchestrator

router = APIRouter(prefix="/translate", tags=["Translation"])


@router.post("", response_model=TranslationResult, response_model_exclude_none=True)
async def translate(
    request: TranslationRequest,
    orchestrator: TranslationOrchestrator = Depends(get_translation_orchestrator),
):
    """
    Translate text to the target language.

    Always 200 for a valid request: on failure `success` is false and
    `translatedText` holds the original text.
    """
    return await orchestrator.translate(
        request.text,
        request.target_language,
        request.source_language,
    )
