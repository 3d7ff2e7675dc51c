"""
API Tests - routes wired to fake services through dependency_overrides
"""

import pytest
from fastapi.testclient import TestClient

from internmatch.api.dependencies import (
    get_catalog_service,
    get_match_orchestrator,
    get_translation_orchestrator,
)
from internmatch.core.auth import get_current_user
from internmatch.main import app
from internmatch.services.ai_ranking_service import AIRanker
from internmatch.services.completion_client import CompletionError
from internmatch.services.matching_service import MatchOrchestrator
from internmatch.services.translation_service import FAILURE_MESSAGE, TranslationOrchestrator
from tests.conftest import FakeCompletionClient


@pytest.fixture
def client_for(catalog):
    """Build a TestClient whose completion service gives `reply` / `error`."""

    def build(user_id="7", user_type="student", reply=None, error=None):
        completion = FakeCompletionClient(reply=reply, error=error)

        async def fake_user():
            return {"user_id": user_id, "name": "Aiko", "email": "aiko@example.com", "type": user_type}

        app.dependency_overrides[get_current_user] = fake_user
        app.dependency_overrides[get_catalog_service] = lambda: catalog
        app.dependency_overrides[get_match_orchestrator] = lambda: MatchOrchestrator(
            catalog, ranker=AIRanker(completion)
        )
        app.dependency_overrides[get_translation_orchestrator] = lambda: TranslationOrchestrator(completion)
        return TestClient(app)

    yield build
    app.dependency_overrides.clear()


def test_match_returns_camel_case_results(client_for):
    client = client_for(reply='[{"id": 3, "score": 150, "reason": "great fit"}]')

    response = client.post("/api/match", json={"profileId": "7"})

    assert response.status_code == 200
    body = response.json()
    assert len(body) == 1
    assert body[0]["profileId"] == "3"
    assert body[0]["matchPercentage"] == 100
    assert body[0]["matchReasons"] == ["great fit"]
    assert body[0]["workArrangement"] == "Hybrid"


def test_match_defaults_to_caller_and_falls_back(client_for):
    client = client_for(error=CompletionError("down"))

    response = client.post("/api/match")

    assert response.status_code == 200
    assert [m["matchPercentage"] for m in response.json()] == [0, 75]


def test_match_unknown_profile_is_empty_list(client_for):
    client = client_for(user_id="50", user_type="business", reply="[]")

    response = client.post("/api/match", json={"profileId": 404})

    assert response.status_code == 200
    assert response.json() == []


def test_student_cannot_match_another_profile(client_for):
    client = client_for(user_id="8", reply='[{"id": 3, "score": 90}]')

    response = client.post("/api/match", json={"profileId": "7"})

    assert response.status_code == 403


def test_business_can_match_a_student_profile(client_for):
    client = client_for(user_id="50", user_type="business", reply='[{"id": 3, "score": 90}]')

    response = client.post("/api/match", json={"profileId": "7"})

    assert response.status_code == 200
    assert [m["profileId"] for m in response.json()] == ["3"]


def test_translate_failure_keeps_original(client_for):
    client = client_for(error=CompletionError("down"))

    response = client.post("/api/translate", json={"text": "Hello", "targetLanguage": "Japanese"})

    assert response.status_code == 200
    assert response.json() == {"translatedText": "Hello", "success": False, "error": FAILURE_MESSAGE}


def test_translate_success(client_for):
    client = client_for(reply="Hola")

    response = client.post(
        "/api/translate",
        json={"text": "Hello", "targetLanguage": "es", "sourceLanguage": "English"},
    )

    assert response.json() == {"translatedText": "Hola", "success": True, "detectedLanguage": "English"}


@pytest.mark.parametrize("payload", [{"text": "Hello"}, {"text": "Hello", "targetLanguage": ""}])
def test_translate_requires_target_language(client_for, payload):
    client = client_for(reply="unused")

    assert client.post("/api/translate", json=payload).status_code == 422


def test_jobs_filters(client_for):
    client = client_for()

    everything = client.get("/api/jobs")
    by_language = client.get("/api/jobs", params={"languages": "Japanese, Korean"})

    assert [j["id"] for j in everything.json()] == ["1", "3"]
    assert [j["id"] for j in by_language.json()] == ["3"]
    assert by_language.json()[0]["workArrangement"] == "Hybrid"


def test_reference_catalogs(client_for):
    client = client_for()

    assert [l["name"] for l in client.get("/api/languages").json()] == ["English", "Japanese"]
    assert [s["name"] for s in client.get("/api/skills").json()] == ["Marketing", "Python"]


def test_profile_of_current_user(client_for):
    response = client_for().get("/api/profile")

    assert response.status_code == 200
    assert response.json()["skills"] == ["Digital Marketing", "Social Media"]
    assert response.json()["languages"][1]["wantToLearn"] is True


def test_profile_missing_is_404(client_for):
    response = client_for(user_id="404").get("/api/profile")

    assert response.status_code == 404
