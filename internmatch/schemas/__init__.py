"""
Schemas module - Request/Response schemas for API endpoints and the
value objects passed between the matching and translation services.
"""

from internmatch.schemas.schemas import (
    JobFilter,
    JobListing,
    LanguageSkill,
    MatchResult,
    RankedMatch,
    TranslationResult,
    TranslationSettings,
    UserProfile,
)

__all__ = [
    "JobFilter",
    "JobListing",
    "LanguageSkill",
    "MatchResult",
    "RankedMatch",
    "TranslationResult",
    "TranslationSettings",
    "UserProfile",
]
