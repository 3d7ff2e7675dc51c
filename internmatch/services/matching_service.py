"""
Matching Service - the single place that decides how matches are produced.

PURPOSE:
Return a ranked list of MatchResult for a profile. The AI ranking is
preferred; whenever it fails the deterministic scorer takes over, and
the caller cannot tell the difference.

HOW IT WORKS:
1. Load the profile and the open job catalog
2. Ask the AI ranker (one attempt, bounded by a timeout)
3a. AI ok      -> join ranked ids back to catalog jobs, sort by score
3b. AI failed  -> score every catalog job locally, catalog order
4. Any data error -> log it and return an empty list

RULES:
- find_matches() never raises
- match_percentage is always clamped to 0-100, whatever the source
- unknown job ids from the AI are dropped silently
- the fallback never retries the AI path
"""

import logging
from typing import Callable, Dict, List, Optional

from internmatch.schemas.schemas import JobListing, MatchResult, UserProfile
from internmatch.services.ai_ranking_service import AIRanker, RankingOutcome
from internmatch.services.catalog_service import CatalogService
from internmatch.services.scoring import (
    build_fallback_result,
    clamp_percentage,
    score_match,
    to_match_result,
)

logger = logging.getLogger(__name__)


class MatchOrchestrator:
    """
    Produces the final ranked match list for a profile.

    Args:
        catalog: async catalog accessor (profiles + jobs)
        ranker: AI ranker, or None to always use the local scorer
        fallback: per-job scorer used when the AI path is unusable
    """

    def __init__(
        self,
        catalog: CatalogService,
        ranker: Optional[AIRanker] = None,
        fallback: Callable[[UserProfile, JobListing], MatchResult] = build_fallback_result,
    ):
        self.catalog = catalog
        self.ranker = ranker
        self.fallback = fallback

    async def find_matches(self, profile_id: str) -> List[MatchResult]:
        """
        Load profile + catalog and match them.

        Returns [] if either cannot be read.
        """
        try:
            profile = await self.catalog.get_profile(profile_id)
            jobs = await self.catalog.list_jobs()
        except Exception:
            logger.exception("Could not load matching data for profile %s", profile_id)
            return []

        return await self.match_profile(profile, jobs)

    async def match_profile(self, profile: UserProfile, jobs: List[JobListing]) -> List[MatchResult]:
        outcome = await self._try_ai(profile, jobs)
        if outcome is not None and outcome.ok:
            return self._join_ranking(profile, jobs, outcome)

        try:
            return [self.fallback(profile, job) for job in jobs]
        except Exception:
            logger.exception("Fallback scoring failed for profile %s", profile.id)
            return []

    async def _try_ai(self, profile: UserProfile, jobs: List[JobListing]) -> Optional[RankingOutcome]:
        if self.ranker is None:
            return None
        try:
            outcome = await self.ranker.rank(profile, jobs)
        except Exception:
            logger.exception("AI ranking raised for profile %s, using fallback scorer", profile.id)
            return None

        if not outcome.ok:
            logger.warning(
                "AI ranking unusable for profile %s (%s), using fallback scorer",
                profile.id,
                outcome.failure,
            )
        return outcome

    def _join_ranking(
        self,
        profile: UserProfile,
        jobs: List[JobListing],
        outcome: RankingOutcome,
    ) -> List[MatchResult]:
        jobs_by_id: Dict[str, JobListing] = {}
        for job in jobs:
            jobs_by_id.setdefault(str(job.id), job)

        results = []
        for ranked in outcome.matches:
            job = jobs_by_id.get(str(ranked.job_id))
            if job is None:
                logger.debug("Dropping AI-ranked job %s: not in catalog", ranked.job_id)
                continue
            local = score_match(profile, job)
            results.append(
                to_match_result(
                    job,
                    local,
                    match_percentage=clamp_percentage(ranked.score),
                    match_reasons=[ranked.reason] if ranked.reason else None,
                )
            )

        # list.sort is stable: ties keep the ranker's order
        results.sort(key=lambda r: r.match_percentage, reverse=True)
        return results
