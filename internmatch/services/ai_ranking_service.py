"""
AI Ranking Service - rank the job catalog against a profile using the
completion service.

PURPOSE:
Ask the completion service for the top N jobs for a profile, with a
0-100 score and a short reason for each.

HOW IT WORKS:
1. Serialise profile languages/skills and the job catalog into a prompt
2. Call the completion service (bounded by a timeout)
3. Extract the first bracketed JSON array from the free-text reply
4. Parse and validate it into RankedMatch entries (scores clamped 0-100)

The reply is untrusted text. Extraction and parsing return explicit
ExtractionFailure values instead of raising, and any failure makes the
whole ranking unusable: there is no partial success.
"""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from internmatch.schemas.schemas import JobListing, RankedMatch, UserProfile
from internmatch.services.completion_client import CompletionClient, CompletionError
from internmatch.services.scoring import clamp_percentage

logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 5
JOB_ID_KEYS = ("id", "jobId", "job_id")


# ============================================================
# RESULT TYPES
# ============================================================

class FailureReason(str, Enum):
    TRANSPORT = "transport"
    NOT_FOUND = "not_found"
    PARSE_ERROR = "parse_error"
    INVALID_SHAPE = "invalid_shape"
    EMPTY = "empty"


@dataclass(frozen=True)
class ExtractionFailure:
    reason: FailureReason
    detail: str = ""

    def __str__(self) -> str:
        return f"{self.reason.value}: {self.detail}" if self.detail else self.reason.value


@dataclass
class RankingOutcome:
    matches: List[RankedMatch] = field(default_factory=list)
    failure: Optional[ExtractionFailure] = None
    raw_text: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


# ============================================================
# PROMPT
# ============================================================

def _profile_payload(profile: UserProfile) -> dict:
    return {
        "languages": [
            {
                "name": lang.language,
                "proficiency": lang.proficiency,
                "wantToLearn": lang.want_to_learn,
            }
            for lang in profile.languages
        ],
        "skills": list(profile.skills),
        "field": profile.field,
        "location": profile.location,
        "availability": profile.availability,
        "workArrangement": profile.work_arrangement,
    }


def _job_payload(job: JobListing) -> dict:
    return {
        "id": job.id,
        "company": job.name,
        "role": job.role,
        "field": job.field,
        "city": job.city,
        "country": job.country,
        "languages": list(job.languages),
        "skills": list(job.skills),
        "availability": job.availability,
        "workArrangement": job.work_arrangement,
        "compensation": job.compensation,
    }


def build_ranking_prompt(
    profile: UserProfile,
    jobs: List[JobListing],
    top_n: int = DEFAULT_TOP_N,
) -> str:
    """Build the natural-language ranking instruction."""
    profile_data = _profile_payload(profile)
    languages = json.dumps(profile_data.pop("languages"), ensure_ascii=False)
    skills = json.dumps(profile_data.pop("skills"), ensure_ascii=False)
    preferences = json.dumps({k: v for k, v in profile_data.items() if v}, ensure_ascii=False)
    jobs_data = json.dumps([_job_payload(job) for job in jobs], ensure_ascii=False)

    return f"""I need to match a user with the most suitable internship jobs based on their language skills and other skills.

User Profile:
Languages: {languages}
Skills: {skills}
Preferences: {preferences}

Available Jobs:
{jobs_data}

Please analyze the jobs and rank the top {top_n} most suitable matches for this user based on:
1. Language match (most important)
2. Skill match
3. Job type and location compatibility

Return ONLY a JSON array with the job IDs, a match score (0-100) and a brief reason, like:
[
  {{"id": "3", "score": 95, "reason": "Perfect language match (native Japanese) and has required skills"}},
  {{"id": "1", "score": 80, "reason": "Good language match but missing some skills"}}
]"""


# ============================================================
# EXTRACTION + PARSING
# ============================================================

def extract_json_array(text: str) -> Union[str, ExtractionFailure]:
    """
    Stage 1: find the first bracketed array in free text.

    Scans from the first '[' and returns the balanced substring,
    ignoring brackets inside JSON string literals. If the brackets never
    balance, the greedy span up to the last ']' is returned instead.
    """
    if not text:
        return ExtractionFailure(FailureReason.NOT_FOUND, "empty reply")

    start = text.find("[")
    if start == -1:
        return ExtractionFailure(FailureReason.NOT_FOUND, "no '[' in reply")

    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
            if depth == 0:
                return text[start:index + 1]

    end = text.rfind("]")
    if end > start:
        return text[start:end + 1]
    return ExtractionFailure(FailureReason.NOT_FOUND, "unterminated array")


def _entry_job_id(entry: dict) -> Optional[str]:
    for key in JOB_ID_KEYS:
        value = entry.get(key)
        if isinstance(value, bool) or value is None:
            continue
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def _entry_score(entry: dict) -> int:
    value = entry.get("score", entry.get("matchScore"))
    if isinstance(value, bool):
        return 0
    if isinstance(value, str):
        value = value.strip().rstrip("%")
    return clamp_percentage(value)


def _entry_reason(entry: dict) -> str:
    value = entry.get("reason", entry.get("reasons"))
    if value is None:
        return ""
    if isinstance(value, list):
        return "; ".join(str(v).strip() for v in value if v is not None and str(v).strip())
    return str(value).strip()


def parse_ranked_matches(candidate: str) -> Union[List[RankedMatch], ExtractionFailure]:
    """
    Stage 2: strict parse of the extracted substring.

    Every entry must carry a job identifier; a single bad entry fails the
    whole response. Duplicate ids keep their first occurrence.
    """
    try:
        data = json.loads(candidate)
    except (json.JSONDecodeError, ValueError) as e:
        return ExtractionFailure(FailureReason.PARSE_ERROR, str(e))

    if not isinstance(data, list):
        return ExtractionFailure(FailureReason.INVALID_SHAPE, f"expected array, got {type(data).__name__}")
    if not data:
        return ExtractionFailure(FailureReason.EMPTY, "ranking array is empty")

    matches = []
    seen = set()
    for position, entry in enumerate(data):
        if not isinstance(entry, dict):
            return ExtractionFailure(FailureReason.INVALID_SHAPE, f"entry {position} is not an object")
        job_id = _entry_job_id(entry)
        if job_id is None:
            return ExtractionFailure(FailureReason.INVALID_SHAPE, f"entry {position} has no job id")
        if job_id in seen:
            continue
        seen.add(job_id)
        matches.append(
            RankedMatch(job_id=job_id, score=_entry_score(entry), reason=_entry_reason(entry))
        )
    return matches


def parse_ranking_response(text: str) -> Union[List[RankedMatch], ExtractionFailure]:
    """Extract then parse; the first failure wins."""
    candidate = extract_json_array(text)
    if isinstance(candidate, ExtractionFailure):
        return candidate
    return parse_ranked_matches(candidate)


# ============================================================
# RANKER
# ============================================================

class AIRanker:
    """
    Delegates ranking of a job catalog to the completion service.

    rank() never raises for expected failures (transport, timeout,
    malformed reply): they come back as RankingOutcome.failure.
    """

    def __init__(
        self,
        client: CompletionClient,
        top_n: int = DEFAULT_TOP_N,
        timeout: Optional[float] = None,
    ):
        self.client = client
        self.top_n = top_n
        self.timeout = timeout

    async def _complete(self, prompt: str) -> str:
        call = self.client.complete(prompt, timeout=self.timeout)
        if self.timeout is None:
            return await call
        return await asyncio.wait_for(call, timeout=self.timeout)

    async def rank(self, profile: UserProfile, jobs: List[JobListing]) -> RankingOutcome:
        if not jobs:
            return RankingOutcome()

        prompt = build_ranking_prompt(profile, jobs, self.top_n)
        try:
            raw = await self._complete(prompt)
        except asyncio.TimeoutError:
            return RankingOutcome(
                failure=ExtractionFailure(FailureReason.TRANSPORT, f"timed out after {self.timeout}s")
            )
        except CompletionError as e:
            return RankingOutcome(failure=ExtractionFailure(FailureReason.TRANSPORT, str(e)))

        result = parse_ranking_response(raw)
        if isinstance(result, ExtractionFailure):
            return RankingOutcome(failure=result, raw_text=raw)

        logger.debug("AI ranking returned %d entries for profile %s", len(result), profile.id)
        return RankingOutcome(matches=result, raw_text=raw)
