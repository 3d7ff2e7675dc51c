"""
Deterministic Match Scoring

PURPOSE:
Score a profile against one job listing using only local data.
This is the path used whenever the AI ranking is unavailable, so it
must never raise and must always produce at least one reason.

HOW IT WORKS:
1. Count job skills that overlap a profile skill (substring match)
2. Count job languages that overlap a profile language
3. Each half is worth 50 points, scaled by the larger of the two list sizes
4. Clamp to 0-100 and attach human-readable reasons
"""

import math
from fractions import Fraction
from dataclasses import dataclass, field
from typing import Iterable, List

from internmatch.schemas.schemas import JobListing, MatchResult, UserProfile


DEFAULT_DURATION = "3 months"
DEFAULT_WORK_ARRANGEMENT = "Remote"
DEFAULT_ROLE = "Internship"


@dataclass(frozen=True)
class MatchScore:
    match_percentage: int
    match_reasons: List[str]
    matched_skills: List[str] = field(default_factory=list)
    matched_languages: List[str] = field(default_factory=list)


def clamp_percentage(value) -> int:
    """Clamp any numeric value into the 0-100 integer range."""
    if isinstance(value, int) and not isinstance(value, bool):
        return max(0, min(100, value))
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    except OverflowError:
        # e.g. Fraction or Decimal beyond float range
        return 100 if value > 0 else 0
    if math.isnan(number):
        return 0
    return int(round(max(0.0, min(100.0, number))))


def _normalize_terms(values) -> List[str]:
    if not isinstance(values, (list, tuple, set)):
        return []
    return [str(v).strip().lower() for v in values if v is not None and str(v).strip()]


def terms_match(job_term: str, profile_term: str) -> bool:
    """
    Case-insensitive substring containment in either direction.

    "Python Development" matches "Python", and "Digital Marketing"
    matches "Marketing".
    """
    a = job_term.strip().lower()
    b = profile_term.strip().lower()
    if not a or not b:
        return False
    return b in a or a in b


def overlapping_terms(job_terms: Iterable, profile_terms: Iterable) -> List[str]:
    """Job terms (original spelling, job order) that match any profile term."""
    if not isinstance(job_terms, (list, tuple, set)):
        return []
    profile_normalized = _normalize_terms(profile_terms)
    matched = []
    for term in job_terms:
        if term is None or not str(term).strip():
            continue
        if any(terms_match(str(term), p) for p in profile_normalized):
            matched.append(str(term))
    return matched


def _half_score(overlap: int, total: int) -> Fraction:
    if total <= 0:
        return Fraction(0)
    return Fraction(overlap, total) * 50


def score_match(profile: UserProfile, job: JobListing) -> MatchScore:
    """
    Compute match percentage and reasons for one (profile, job) pair.

    Pure function: identical inputs always yield identical output.
    """
    profile_skills = list(getattr(profile, "skills", None) or [])
    profile_languages = [
        lang.language for lang in (getattr(profile, "languages", None) or [])
        if getattr(lang, "language", None)
    ]
    job_skills = list(getattr(job, "skills", None) or [])
    job_languages = list(getattr(job, "languages", None) or [])

    matched_skills = overlapping_terms(job_skills, profile_skills)
    matched_languages = overlapping_terms(job_languages, profile_languages)

    total_skills = max(len(job_skills), len(profile_skills))
    total_languages = max(len(job_languages), len(profile_languages))

    raw = _half_score(len(matched_skills), total_skills) + _half_score(
        len(matched_languages), total_languages
    )
    percentage = clamp_percentage(math.floor(raw))

    reasons = []
    if matched_skills:
        reasons.append(f"Matches {len(matched_skills)} of your skills")
    if matched_languages:
        reasons.append(f"Matches {len(matched_languages)} of your languages")
    if job.city and job.city.strip():
        reasons.append(f"Located in {job.city.strip()}")
    elif job.location != "Remote":
        reasons.append(f"Located in {job.location}")
    else:
        reasons.append("Remote opportunity")

    return MatchScore(
        match_percentage=percentage,
        match_reasons=reasons,
        matched_skills=matched_skills,
        matched_languages=matched_languages,
    )


def to_match_result(
    job: JobListing,
    score: MatchScore,
    match_percentage: int = None,
    match_reasons: List[str] = None,
) -> MatchResult:
    """
    Build the display record for a job.

    Percentage and reasons default to the local score; the AI path
    passes its own.
    """
    percentage = score.match_percentage if match_percentage is None else match_percentage
    return MatchResult(
        profile_id=job.id,
        name=job.name or "Unknown Company",
        role=job.role or job.field or DEFAULT_ROLE,
        location=job.location,
        languages=score.matched_languages,
        skills=score.matched_skills,
        duration=job.availability or DEFAULT_DURATION,
        work_arrangement=job.work_arrangement or DEFAULT_WORK_ARRANGEMENT,
        compensation=job.compensation,
        match_percentage=clamp_percentage(percentage),
        match_reasons=list(match_reasons) if match_reasons else list(score.match_reasons),
    )


def build_fallback_result(profile: UserProfile, job: JobListing) -> MatchResult:
    """Score a job locally and wrap it as a MatchResult."""
    return to_match_result(job, score_match(profile, job))
