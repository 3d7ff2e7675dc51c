"""
Shared service instances for the routes.

Each getter builds its service once per process. Tests replace them with
app.dependency_overrides.
"""
from functools import lru_cache

from internmatch.core.config import get_settings
from internmatch.db.repository import SqlMatchRepository
from internmatch.services.ai_ranking_service import AIRanker
from internmatch.services.catalog_service import CatalogService
from internmatch.services.completion_client import get_completion_client
from internmatch.services.matching_service import MatchOrchestrator
from internmatch.services.mongo_service import get_translation_cache
from internmatch.services.translation_service import TranslationOrchestrator


@lru_cache()
def get_catalog_service() -> CatalogService:
    settings = get_settings()
    return CatalogService(SqlMatchRepository(), cache_ttl=settings.catalog_cache_ttl_seconds)


@lru_cache()
def get_match_orchestrator() -> MatchOrchestrator:
    settings = get_settings()
    ranker = None
    if settings.ai_matching_enabled:
        ranker = AIRanker(
            get_completion_client(),
            top_n=settings.ai_top_n,
            timeout=settings.ai_timeout_seconds,
        )
    return MatchOrchestrator(get_catalog_service(), ranker=ranker)


@lru_cache()
def get_translation_orchestrator() -> TranslationOrchestrator:
    settings = get_settings()
    cache = get_translation_cache() if settings.translation_cache_enabled else None
    return TranslationOrchestrator(
        get_completion_client(),
        cache=cache,
        timeout=settings.ai_timeout_seconds,
    )
