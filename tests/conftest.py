"""
Pytest Configuration and Shared Fixtures

Fakes stand in for the two external collaborators:
- FakeRepository: the SQL storage accessor (profiles, jobs, reference data)
- FakeCompletionClient: the completion service (fixed reply, error or delay)
- FakeCache: the MongoDB translation cache

Fixtures:
---------
- marketing_profile / marketing_job: the profile/job pair used across tests
- repository: FakeRepository preloaded with the pair and a second job
- catalog: CatalogService over the repository, caching disabled
"""

import asyncio
import os
import sys
from pathlib import Path

# Keep the app off real MongoDB during tests
os.environ.setdefault("TRANSLATION_CACHE_ENABLED", "false")

project_root = Path(__file__).parent.parent
sys.path.append(str(project_root))

import pytest

from internmatch.db.repository import ProfileNotFoundError
from internmatch.schemas.schemas import JobListing, Language, LanguageSkill, Skill, UserProfile
from internmatch.services.catalog_service import CatalogService
from internmatch.services.completion_client import CompletionError


class FakeRepository:
    def __init__(self, profiles=None, jobs=None, languages=None, skills=None):
        self.profiles = {p.id: p for p in (profiles or [])}
        self.jobs = list(jobs or [])
        self.languages = list(languages or [])
        self.skills = list(skills or [])
        self.calls = []

    def get_profile(self, profile_id):
        self.calls.append(("get_profile", profile_id))
        if str(profile_id) not in self.profiles:
            raise ProfileNotFoundError(profile_id)
        return self.profiles[str(profile_id)]

    def list_jobs(self, job_filter=None):
        self.calls.append(("list_jobs", job_filter))
        if job_filter is None or not job_filter.query:
            return list(self.jobs)
        query = job_filter.query.lower()
        return [
            job for job in self.jobs
            if any(query in (value or "").lower() for value in (job.role, job.bio, job.city, job.country))
        ]

    def get_reference_languages(self):
        self.calls.append(("get_reference_languages", None))
        return list(self.languages)

    def get_reference_skills(self):
        self.calls.append(("get_reference_skills", None))
        return list(self.skills)

    def count(self, name):
        return sum(1 for call, _ in self.calls if call == name)


class FakeCompletionClient:
    """Returns `reply`, or raises `error`, after an optional `delay`."""

    def __init__(self, reply=None, error=None, delay=0.0):
        self.reply = reply
        self.error = error
        self.delay = delay
        self.prompts = []

    async def complete(self, prompt, timeout=None, **kwargs):
        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if self.reply is None:
            raise CompletionError("no reply configured")
        return self.reply


class FakeCache:
    def __init__(self):
        self.docs = {}
        self.stored = []

    def get(self, cache_key):
        return self.docs.get(cache_key)

    def store(self, cache_key, translated_text, target_language, source_language=None):
        self.stored.append(cache_key)
        self.docs[cache_key] = {
            "cache_key": cache_key,
            "translated_text": translated_text,
            "target_language": target_language,
            "source_language": source_language,
        }


@pytest.fixture
def marketing_profile():
    return UserProfile(
        id="7",
        name="Aiko",
        type="student",
        location="Tokyo, Japan",
        skills=["Digital Marketing", "Social Media"],
        languages=[
            LanguageSkill(language="English", proficiency=100),
            LanguageSkill(language="Japanese", proficiency=30, want_to_learn=True),
        ],
    )


@pytest.fixture
def marketing_job():
    return JobListing(
        id=3,
        name="Sakura Digital",
        role="Marketing Intern",
        city="Osaka",
        country="Japan",
        bio="Help run our social campaigns",
        skills=["Marketing", "SEO"],
        languages=["Japanese", "English"],
        availability="6 months",
        work_arrangement="Hybrid",
        compensation="¥150,000/month",
    )


@pytest.fixture
def engineering_job():
    return JobListing(
        id=1,
        name="Nordic Code",
        field="Software Engineering",
        skills=["Python", "SQL"],
        languages=["Swedish"],
    )


@pytest.fixture
def repository(marketing_profile, marketing_job, engineering_job):
    return FakeRepository(
        profiles=[marketing_profile],
        jobs=[engineering_job, marketing_job],
        languages=[Language(id=1, name="English", code="en"), Language(id=2, name="Japanese", code="ja")],
        skills=[Skill(id=1, name="Marketing"), Skill(id=2, name="Python")],
    )


@pytest.fixture
def catalog(repository):
    return CatalogService(repository, cache_ttl=0)
