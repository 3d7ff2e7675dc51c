"""
Unit Tests for the SQL repository, with a scripted execute function
"""

import pytest

from internmatch.db.repository import ProfileNotFoundError, SqlMatchRepository, parse_proficiency
from internmatch.schemas.schemas import JobFilter


class ScriptedExecute:
    """Answers each query by the first table name it mentions."""

    def __init__(self, responses):
        self.responses = responses
        self.queries = []

    def __call__(self, sql, params=None):
        self.queries.append((" ".join(sql.split()), params or {}))
        for marker, rows in self.responses.items():
            if marker in sql:
                return rows
        return []


def test_get_profile_assembles_languages_and_skills():
    execute = ScriptedExecute({
        "FROM user_languages": [
            {"language": "English", "proficiency_level": "native", "want_to_learn": False},
            {"language": "english", "proficiency_level": 40, "want_to_learn": False},
            {"language": "Japanese", "proficiency_level": "35", "want_to_learn": True},
        ],
        "FROM user_skills": [{"name": "SEO"}, {"name": None}],
        "FROM users": [{"id": 7, "name": "Aiko", "type": "student", "location": "Tokyo"}],
    })

    profile = SqlMatchRepository(execute).get_profile("7")

    assert profile.id == "7"
    assert profile.language_names == ["English", "Japanese"]
    assert [l.proficiency for l in profile.languages] == [100, 35]
    assert profile.languages[1].want_to_learn is True
    assert profile.skills == ["SEO"]


def test_get_profile_missing_raises():
    repository = SqlMatchRepository(ScriptedExecute({}))

    with pytest.raises(ProfileNotFoundError) as exc:
        repository.get_profile("404")
    assert exc.value.profile_id == "404"


def test_list_jobs_groups_languages_and_skills_by_job():
    execute = ScriptedExecute({
        "FROM job_languages": [
            {"job_id": 1, "name": "English"},
            {"job_id": 2, "name": "Japanese"},
            {"job_id": 2, "name": "English"},
        ],
        "FROM job_skills": [{"job_id": 2, "name": "Marketing"}],
        "FROM jobs": [
            {"id": 1, "company_name": "Nordic Code", "title": "Backend Intern", "city": None},
            {"id": 2, "company_name": None, "title": None, "field": "Marketing", "city": "Osaka", "country": "Japan"},
        ],
    })

    jobs = SqlMatchRepository(execute).list_jobs()

    assert [j.id for j in jobs] == ["1", "2"]
    assert jobs[0].languages == ["English"]
    assert jobs[0].skills == []
    assert jobs[1].languages == ["Japanese", "English"]
    assert jobs[1].skills == ["Marketing"]
    assert jobs[1].location == "Osaka, Japan"
    assert jobs[0].location == "Remote"


def test_list_jobs_query_is_parameterised():
    execute = ScriptedExecute({})

    assert SqlMatchRepository(execute).list_jobs(JobFilter(query=" tokyo ")) == []
    sql, params = execute.queries[0]
    assert "ILIKE :q" in sql
    assert params == {"q": "%tokyo%"}


def test_list_jobs_without_rows_skips_detail_queries():
    execute = ScriptedExecute({})

    SqlMatchRepository(execute).list_jobs()

    assert len(execute.queries) == 1


def test_reference_catalogs():
    execute = ScriptedExecute({
        "FROM languages": [{"id": 1, "name": "English", "code": "en"}],
        "FROM skills": [{"id": 4, "name": "SEO"}],
    })
    repository = SqlMatchRepository(execute)

    assert repository.get_reference_languages()[0].id == "1"
    assert repository.get_reference_skills()[0].name == "SEO"


@pytest.mark.parametrize(
    "value, expected",
    [(None, 0), ("Fluent", 90), ("72", 72), (120, 100), (-5, 0), ("somewhat", 0), (True, 0)],
)
def test_parse_proficiency(value, expected):
    assert parse_proficiency(value) == expected
