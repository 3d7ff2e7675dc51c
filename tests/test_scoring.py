"""
Unit Tests for the deterministic scorer
"""

import math

import pytest

from internmatch.schemas.schemas import JobListing, LanguageSkill, UserProfile
from internmatch.services.scoring import (
    build_fallback_result,
    clamp_percentage,
    overlapping_terms,
    score_match,
    terms_match,
)


def test_marketing_scenario_scores_75(marketing_profile, marketing_job):
    score = score_match(marketing_profile, marketing_job)

    assert score.match_percentage == 75
    assert score.matched_skills == ["Marketing"]
    assert score.matched_languages == ["Japanese", "English"]
    assert "Matches 1 of your skills" in score.match_reasons
    assert "Matches 2 of your languages" in score.match_reasons
    assert "Located in Osaka" in score.match_reasons


def test_score_is_deterministic(marketing_profile, marketing_job):
    first = build_fallback_result(marketing_profile, marketing_job)
    second = build_fallback_result(marketing_profile, marketing_job)
    assert first == second


def test_no_overlap_scores_zero_with_a_reason(marketing_profile, engineering_job):
    score = score_match(marketing_profile, engineering_job)

    assert score.match_percentage == 0
    assert score.match_reasons == ["Remote opportunity"]


def test_empty_profile_and_job():
    profile = UserProfile(id="1")
    job = JobListing(id="2")

    score = score_match(profile, job)

    assert score.match_percentage == 0
    assert score.match_reasons


def test_malformed_lists_are_treated_as_empty():
    profile = UserProfile(id="1", skills=None, languages="English")
    job = JobListing(id="2", skills="Python", languages=None, country="Spain")

    score = score_match(profile, job)

    assert score.match_percentage == 0
    assert score.match_reasons == ["Located in Spain"]


def test_full_overlap_is_capped_at_100():
    profile = UserProfile(
        id="1",
        skills=["Python"],
        languages=[LanguageSkill(language="English", proficiency=90)],
    )
    job = JobListing(id="2", skills=["python"], languages=["ENGLISH"])

    assert score_match(profile, job).match_percentage == 100


def test_partial_halves_are_floored():
    profile = UserProfile(id="1", skills=["Python"])
    job = JobListing(id="2", skills=["Python", "SQL", "Docker"])

    # 1/3 of 50 points
    assert score_match(profile, job).match_percentage == 16


def test_larger_side_sets_the_denominator():
    profile = UserProfile(id="1", skills=["Python", "SQL", "Go", "Rust"])
    job = JobListing(id="2", skills=["Python"])

    assert score_match(profile, job).match_percentage == 12


@pytest.mark.parametrize(
    "job_term, profile_term, expected",
    [
        ("Python Development", "Python", True),
        ("Marketing", "Digital Marketing", True),
        ("SEO", "Social Media", False),
        ("", "Python", False),
        ("Python", "  ", False),
    ],
)
def test_terms_match(job_term, profile_term, expected):
    assert terms_match(job_term, profile_term) is expected


def test_overlapping_terms_keeps_job_order_and_spelling():
    assert overlapping_terms(["SQL", "Python", "Excel"], ["python", "sql"]) == ["SQL", "Python"]
    assert overlapping_terms(None, ["python"]) == []


@pytest.mark.parametrize(
    "value, expected",
    [(150, 100), (-10, 0), (72.6, 73), ("88", 88), (None, 0), ("n/a", 0), (math.inf, 100), (math.nan, 0)],
)
def test_clamp_percentage(value, expected):
    assert clamp_percentage(value) == expected


def test_fallback_result_defaults(marketing_profile, engineering_job):
    result = build_fallback_result(marketing_profile, engineering_job)

    assert result.profile_id == "1"
    assert result.name == "Nordic Code"
    assert result.role == "Software Engineering"
    assert result.location == "Remote"
    assert result.duration == "3 months"
    assert result.work_arrangement == "Remote"
    assert 0 <= result.match_percentage <= 100


def test_fallback_result_uses_job_details(marketing_profile, marketing_job):
    result = build_fallback_result(marketing_profile, marketing_job)

    assert result.profile_id == "3"
    assert result.role == "Marketing Intern"
    assert result.location == "Osaka, Japan"
    assert result.duration == "6 months"
    assert result.work_arrangement == "Hybrid"
    assert result.skills == ["Marketing"]
    assert result.match_percentage == 75


def test_clamp_percentage_handles_integers_beyond_float_range():
    assert clamp_percentage(10 ** 400) == 100
    assert clamp_percentage(-(10 ** 400)) == 0
    assert clamp_percentage(True) == 1
