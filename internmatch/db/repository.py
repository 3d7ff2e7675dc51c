"""
Read accessors over the relational store.

Tables used:
- users (+ user_languages, user_skills)   -> UserProfile
- jobs, companies (+ job_languages, job_skills) -> JobListing
- languages, skills                       -> reference catalogs

Everything here is read-only and synchronous; callers in async code run
these methods in a thread pool.
"""
import logging
from collections import defaultdict
from typing import Callable, Dict, List, Optional

from internmatch.db.postgres import execute_raw_sql
from internmatch.schemas.schemas import (
    JobFilter,
    JobListing,
    Language,
    LanguageSkill,
    Skill,
    UserProfile,
)

logger = logging.getLogger(__name__)

# Word-level proficiency labels stored by older profile forms
PROFICIENCY_LEVELS = {
    "native": 100,
    "fluent": 90,
    "advanced": 80,
    "intermediate": 60,
    "conversational": 50,
    "basic": 30,
    "beginner": 20,
}


class ProfileNotFoundError(LookupError):
    """No user row for the requested profile id."""

    def __init__(self, profile_id):
        super().__init__(f"Profile {profile_id} not found")
        self.profile_id = profile_id


def parse_proficiency(value) -> int:
    """Map a stored proficiency (0-100 number or label) onto 0-100."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, str):
        label = value.strip().lower()
        if label in PROFICIENCY_LEVELS:
            return PROFICIENCY_LEVELS[label]
        try:
            value = float(label)
        except ValueError:
            return 0
    try:
        return int(max(0, min(100, round(float(value)))))
    except (TypeError, ValueError, OverflowError):
        return 0


class SqlMatchRepository:
    """
    Storage accessor for profiles, open jobs and reference data.

    `execute` is any callable with the execute_raw_sql signature
    (sql, params) -> list of row dicts.
    """

    def __init__(self, execute: Optional[Callable[..., List[dict]]] = None):
        self.execute = execute or execute_raw_sql

    # --------------------------------------------------------
    # Profiles
    # --------------------------------------------------------

    def get_profile(self, profile_id: str) -> UserProfile:
        rows = self.execute(
            """
            SELECT id, name, type, location, bio, field, availability,
                   duration, work_arrangement, compensation
            FROM users
            WHERE id = :id
            """,
            {"id": profile_id},
        )
        if not rows:
            raise ProfileNotFoundError(profile_id)
        user = rows[0]

        language_rows = self.execute(
            """
            SELECT l.name AS language, ul.proficiency_level, ul.want_to_learn
            FROM user_languages ul
            JOIN languages l ON ul.language_id = l.id
            WHERE ul.user_id = :id
            ORDER BY l.name
            """,
            {"id": user["id"]},
        )
        skill_rows = self.execute(
            """
            SELECT s.name
            FROM user_skills us
            JOIN skills s ON us.skill_id = s.id
            WHERE us.user_id = :id
            ORDER BY s.name
            """,
            {"id": user["id"]},
        )

        languages = []
        seen = set()
        for row in language_rows:
            name = (row.get("language") or "").strip()
            if not name or name.lower() in seen:
                continue
            seen.add(name.lower())
            languages.append(
                LanguageSkill(
                    language=name,
                    proficiency=parse_proficiency(row.get("proficiency_level")),
                    want_to_learn=bool(row.get("want_to_learn")),
                )
            )

        return UserProfile(
            id=user["id"],
            name=user.get("name") or "",
            type=user.get("type") or None,
            location=user.get("location") or "",
            bio=user.get("bio") or "",
            languages=languages,
            skills=[row["name"] for row in skill_rows if row.get("name")],
            field=user.get("field"),
            availability=user.get("availability"),
            duration=user.get("duration"),
            work_arrangement=user.get("work_arrangement"),
            compensation=user.get("compensation"),
        )

    # --------------------------------------------------------
    # Jobs
    # --------------------------------------------------------

    def list_jobs(self, job_filter: Optional[JobFilter] = None) -> List[JobListing]:
        """
        All open jobs, in id order. Only the free-text `query` part of the
        filter is applied here.
        """
        sql = """
            SELECT j.id, c.name AS company_name, j.title, j.field, j.city, j.country,
                   COALESCE(j.description, c.bio) AS bio, j.availability,
                   j.work_arrangement, j.compensation
            FROM jobs j
            LEFT JOIN companies c ON j.company_id = c.id
            WHERE COALESCE(j.status, 'open') = 'open'
        """
        params = {}
        if job_filter and job_filter.query and job_filter.query.strip():
            sql += """
              AND (j.title ILIKE :q OR j.description ILIKE :q
                   OR j.city ILIKE :q OR j.country ILIKE :q)
            """
            params["q"] = f"%{job_filter.query.strip()}%"
        sql += " ORDER BY j.id"

        job_rows = self.execute(sql, params)
        if not job_rows:
            return []

        logger.debug("Loaded %d open jobs", len(job_rows))
        job_ids = [row["id"] for row in job_rows]
        languages = self._grouped_names(
            """
            SELECT jl.job_id, l.name
            FROM job_languages jl
            JOIN languages l ON jl.language_id = l.id
            WHERE jl.job_id = ANY(:ids)
            ORDER BY jl.job_id, l.name
            """,
            job_ids,
        )
        skills = self._grouped_names(
            """
            SELECT js.job_id, s.name
            FROM job_skills js
            JOIN skills s ON js.skill_id = s.id
            WHERE js.job_id = ANY(:ids)
            ORDER BY js.job_id, s.name
            """,
            job_ids,
        )

        return [
            JobListing(
                id=row["id"],
                name=row.get("company_name") or "",
                role=row.get("title"),
                city=row.get("city"),
                country=row.get("country"),
                bio=row.get("bio") or "",
                languages=languages.get(str(row["id"]), []),
                skills=skills.get(str(row["id"]), []),
                field=row.get("field"),
                availability=row.get("availability"),
                work_arrangement=row.get("work_arrangement"),
                compensation=row.get("compensation"),
            )
            for row in job_rows
        ]

    def _grouped_names(self, sql: str, job_ids: list) -> Dict[str, List[str]]:
        grouped = defaultdict(list)
        for row in self.execute(sql, {"ids": job_ids}):
            if row.get("name"):
                grouped[str(row["job_id"])].append(row["name"])
        return grouped

    # --------------------------------------------------------
    # Reference data
    # --------------------------------------------------------

    def get_reference_languages(self) -> List[Language]:
        rows = self.execute("SELECT id, name, code FROM languages ORDER BY name", {})
        return [Language(id=r["id"], name=r["name"], code=r.get("code")) for r in rows]

    def get_reference_skills(self) -> List[Skill]:
        rows = self.execute("SELECT id, name FROM skills ORDER BY name", {})
        return [Skill(id=r["id"], name=r["name"]) for r in rows]
