"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.

Python attributes are snake_case; JSON uses camelCase aliases
(matchPercentage, workArrangement, translatedText, ...).
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import datetime
from enum import Enum


class CamelModel(BaseModel):
    """Base model serialised with camelCase keys, accepts both forms on input."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _coerce_id(value):
    if value is None:
        return value
    return str(value)


def _coerce_str_list(value):
    # None / scalars degrade to an empty list
    if not isinstance(value, (list, tuple, set)):
        return []
    return [str(v) for v in value if v is not None and str(v).strip()]


# ============================================================
# ENUMS
# ============================================================

class UserType(str, Enum):
    student = "student"
    business = "business"


# ============================================================
# AUTH SCHEMAS
# ============================================================

class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8)
    type: UserType = UserType.student

class LoginRequest(CamelModel):
    email: EmailStr
    password: str

class TokenResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    type: str

class UserResponse(CamelModel):
    user_id: str
    name: str
    email: str
    type: str
    created_at: Optional[datetime] = None


# ============================================================
# REFERENCE DATA
# ============================================================

class Language(CamelModel):
    id: str
    name: str
    code: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, value):
        return _coerce_id(value)

class Skill(CamelModel):
    id: str
    name: str
    category: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, value):
        return _coerce_id(value)


# ============================================================
# PROFILE & JOB SCHEMAS
# ============================================================

class LanguageSkill(CamelModel):
    language: str
    proficiency: int = Field(0, ge=0, le=100)
    want_to_learn: bool = False


class UserProfile(CamelModel):
    id: str
    name: str = ""
    type: Optional[str] = None
    location: str = ""
    bio: str = ""
    languages: List[LanguageSkill] = []
    skills: List[str] = []
    field: Optional[str] = None
    availability: Optional[str] = None
    duration: Optional[str] = None
    work_arrangement: Optional[str] = None
    compensation: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, value):
        return _coerce_id(value)

    @field_validator("skills", mode="before")
    @classmethod
    def normalize_skills(cls, value):
        return _coerce_str_list(value)

    @field_validator("languages", mode="before")
    @classmethod
    def normalize_languages(cls, value):
        if not isinstance(value, (list, tuple)):
            return []
        return [v for v in value if v]

    @property
    def language_names(self) -> List[str]:
        return [lang.language for lang in self.languages]


class JobListing(CamelModel):
    id: str
    name: str = ""
    role: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    bio: str = ""
    languages: List[str] = []
    skills: List[str] = []
    field: Optional[str] = None
    availability: Optional[str] = None
    work_arrangement: Optional[str] = None
    compensation: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, value):
        return _coerce_id(value)

    @field_validator("languages", "skills", mode="before")
    @classmethod
    def normalize_lists(cls, value):
        return _coerce_str_list(value)

    @property
    def location(self) -> str:
        """'City, Country' from whichever parts are set, else 'Remote'."""
        parts = [p.strip() for p in (self.city, self.country) if p and p.strip()]
        return ", ".join(parts) if parts else "Remote"


class JobFilter(CamelModel):
    query: Optional[str] = None
    skills: List[str] = []
    languages: List[str] = []


# ============================================================
# MATCHING SCHEMAS
# ============================================================

class MatchRequest(CamelModel):
    profile_id: Optional[str] = None

    @field_validator("profile_id", mode="before")
    @classmethod
    def normalize_profile_id(cls, value):
        return _coerce_id(value)


class RankedMatch(CamelModel):
    """One entry of the completion service's ranking, already clamped."""
    job_id: str
    score: int = Field(..., ge=0, le=100)
    reason: str = ""


class MatchResult(CamelModel):
    profile_id: str
    name: str
    role: str
    location: str
    languages: List[str] = []
    skills: List[str] = []
    duration: str
    work_arrangement: str
    compensation: Optional[str] = None
    match_percentage: int = Field(..., ge=0, le=100)
    match_reasons: List[str] = []


# ============================================================
# TRANSLATION SCHEMAS
# ============================================================

class TranslationRequest(CamelModel):
    text: str
    target_language: str = Field(..., min_length=1)
    source_language: Optional[str] = None


class TranslationResult(CamelModel):
    translated_text: str
    success: bool
    detected_language: Optional[str] = None
    error: Optional[str] = None


class TranslationSettings(CamelModel):
    """Per-call translation preferences (replaces UI-held toggles)."""
    enabled: bool = True
    source_language: Optional[str] = None
    target_language: str
    auto_detect: bool = True


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True

class ErrorResponse(BaseModel):
    detail: str
