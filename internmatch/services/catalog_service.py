"""
Catalog Service - async access to profiles, jobs and reference data.

The repository is synchronous (SQLAlchemy), so every call runs in the
Starlette thread pool and is a suspension point for the event loop.

The unfiltered job catalog and the language/skill catalogs are cached
process-wide in a TTLCache. Profiles are always read fresh.
"""
import logging
from typing import List, Optional

from cachetools import TTLCache
from starlette.concurrency import run_in_threadpool

from internmatch.db.repository import SqlMatchRepository
from internmatch.schemas.schemas import JobFilter, JobListing, Language, Skill, UserProfile
from internmatch.services.scoring import overlapping_terms

logger = logging.getLogger(__name__)

_JOBS_KEY = "jobs"
_LANGUAGES_KEY = "languages"
_SKILLS_KEY = "skills"


def _filter_by_terms(jobs: List[JobListing], job_filter: JobFilter) -> List[JobListing]:
    """Keep jobs sharing at least one requested skill and one requested language."""
    selected = jobs
    if job_filter.skills:
        selected = [j for j in selected if overlapping_terms(j.skills, job_filter.skills)]
    if job_filter.languages:
        selected = [j for j in selected if overlapping_terms(j.languages, job_filter.languages)]
    return selected


class CatalogService:
    """
    Read-only catalog accessor used by the matching pipeline and the API.

    Args:
        repository: storage accessor (SqlMatchRepository or compatible)
        cache_ttl: seconds to keep catalogs in memory, 0 disables caching
    """

    def __init__(self, repository: SqlMatchRepository, cache_ttl: int = 300, cache_size: int = 16):
        self.repository = repository
        self._cache: Optional[TTLCache] = TTLCache(maxsize=cache_size, ttl=cache_ttl) if cache_ttl > 0 else None

    def invalidate(self) -> None:
        """Drop all cached catalogs; the next read goes to storage."""
        if self._cache is not None:
            self._cache.clear()

    async def _cached(self, key: str, loader):
        if self._cache is not None:
            cached = self._cache.get(key)
            if cached is not None:
                return cached
        logger.debug("Catalog cache miss: %s", key)
        value = await run_in_threadpool(loader)
        if self._cache is not None:
            self._cache[key] = value
        return value

    async def get_profile(self, profile_id: str) -> UserProfile:
        """Raises ProfileNotFoundError when the profile does not exist."""
        return await run_in_threadpool(self.repository.get_profile, profile_id)

    async def list_jobs(self, job_filter: Optional[JobFilter] = None) -> List[JobListing]:
        if job_filter is not None and job_filter.query and job_filter.query.strip():
            jobs = await run_in_threadpool(self.repository.list_jobs, job_filter)
        else:
            jobs = await self._cached(_JOBS_KEY, self.repository.list_jobs)

        if job_filter is not None:
            jobs = _filter_by_terms(jobs, job_filter)
        return list(jobs)

    async def get_reference_languages(self) -> List[Language]:
        return list(await self._cached(_LANGUAGES_KEY, self.repository.get_reference_languages))

    async def get_reference_skills(self) -> List[Skill]:
        return list(await self._cached(_SKILLS_KEY, self.repository.get_reference_skills))
