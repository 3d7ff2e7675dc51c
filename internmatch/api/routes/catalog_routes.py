"""
Catalog Routes

GET /languages - Reference languages
GET /skills - Reference skills
GET /jobs - Open jobs with optional filters (manual job search)
"""

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from internmatch.api.dependencies import get_catalog_service
from internmatch.schemas.schemas import JobFilter, JobListing, Language, Skill
from internmatch.services.catalog_service import CatalogService

router = APIRouter(tags=["Catalog"])


def _split_terms(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [term.strip() for term in value.split(",") if term.strip()]


@router.get("/languages", response_model=List[Language])
async def list_languages(catalog: CatalogService = Depends(get_catalog_service)):
    return await catalog.get_reference_languages()


@router.get("/skills", response_model=List[Skill])
async def list_skills(catalog: CatalogService = Depends(get_catalog_service)):
    return await catalog.get_reference_skills()


@router.get("/jobs", response_model=List[JobListing])
async def list_jobs(
    query: Optional[str] = Query(None, description="Search title, description, city or country"),
    skills: Optional[str] = Query(None, description="Comma-separated skill names"),
    languages: Optional[str] = Query(None, description="Comma-separated language names"),
    catalog: CatalogService = Depends(get_catalog_service),
):
    """
    List open jobs.

    A job passes the skills (languages) filter when it shares at least one
    term with it; matching is case-insensitive substring matching.
    """
    job_filter = JobFilter(query=query, skills=_split_terms(skills), languages=_split_terms(languages))
    return await catalog.list_jobs(job_filter)
