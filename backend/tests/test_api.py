import uuid

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_section_generators, get_session_store, get_user_context_repository
from api.router import limiter
from config import settings
from conftest import SAMPLE_JD, SAMPLE_RESUME, RecordingGenerators
from main import app
from models.schemas.preferences import DEFAULT_PREFERENCES, UserContext
from services.errors import LLMTimeoutError
from services.suggestions.session_store import InMemorySessionStore
from services.suggestions.user_context import InMemoryUserContextRepository

client = TestClient(app)

SESSION_ID = str(uuid.UUID("12345678-1234-5678-1234-567812345678"))


@pytest.fixture(autouse=True)
def _reset_app_state():
    limiter.reset()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def store() -> InMemorySessionStore:
    fresh = InMemorySessionStore()
    app.dependency_overrides[get_session_store] = lambda: fresh
    return fresh


def _use_generators(generators: RecordingGenerators) -> RecordingGenerators:
    app.dependency_overrides[get_section_generators] = generators.table
    return generators


def _suggestion_body(**overrides) -> dict:
    body = {
        "session_id": SESSION_ID,
        "resume_content": SAMPLE_RESUME,
        "job_description": SAMPLE_JD,
        "summary": "Backend engineer with 6 years of experience",
        "skills": "Python, FastAPI, Django",
        "experience": "- Built a FastAPI gateway",
    }
    body.update(overrides)
    return body


# ---------------------------------------------------------------------------
# Health, keywords, score, gaps, preferences
# ---------------------------------------------------------------------------

def test_health(monkeypatch):
    monkeypatch.setattr(settings, "gemini_api_key", "")
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["llm_configured"] is False
    assert data["score_version"] == settings.score_version


def test_keywords_match(jd_keywords):
    response = client.post(
        "/keywords/match",
        json={"keywords": [k.model_dump() for k in jd_keywords], "resume_text": SAMPLE_RESUME},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["match_rate"] == 67
    assert [k["keyword"] for k in data["missing"]] == ["Kafka", "GraphQL"]


def test_keywords_match_missing_field():
    response = client.post("/keywords/match", json={"keywords": []})
    assert response.status_code == 422


def test_score_default_version(jd_keywords):
    response = client.post(
        "/score",
        json={
            "resume_text": SAMPLE_RESUME,
            "job_description": SAMPLE_JD,
            "keywords": [k.model_dump() for k in jd_keywords],
        },
    )
    assert response.status_code == 200
    data = response.json()
    score = data["score"]
    assert 0 <= score["overall"] <= 100
    assert score["breakdown"]["version"] == "v2.1"
    assert score["weight_table"] == "senior_executive"
    assert sum(score["weights"].values()) == pytest.approx(1.0)
    assert data["match_rate"] == 67
    assert data["signals"]["qualification"]["experience_required"] == {"min_years": 5.0, "required": True}


def test_score_v1(jd_keywords):
    response = client.post(
        "/score",
        json={
            "resume_text": SAMPLE_RESUME,
            "job_description": SAMPLE_JD,
            "keywords": [k.model_dump() for k in jd_keywords],
            "version": "v1",
        },
    )
    assert response.status_code == 200
    score = response.json()["score"]
    assert score["breakdown"]["version"] == "v1"
    assert len(score["action_items"]) <= 5


def test_score_unknown_version_rejected():
    response = client.post(
        "/score",
        json={"resume_text": SAMPLE_RESUME, "job_description": SAMPLE_JD, "version": "v9"},
    )
    assert response.status_code == 422


def test_gaps():
    missing = [
        {"keyword": "Docker", "category": "tools", "importance": "high"},
        {"keyword": "Rust", "category": "technologies", "importance": "low"},
        {"keyword": "Go", "category": "technologies", "importance": "medium"},
    ]
    response = client.post("/gaps", json={"missing": missing})
    assert response.status_code == 200
    data = response.json()
    assert [k["keyword"] for k in data["quick_wins"]] == ["Docker", "Go", "Rust"]
    assert data["counts"] == {"high": 1, "medium": 1, "low": 1}
    assert list(data["by_category"]) == ["tools", "technologies"]


def test_preferences_prompt():
    response = client.post(
        "/preferences/prompt",
        json={
            "preferences": {**DEFAULT_PREFERENCES.model_dump(), "job_type": "coop"},
            "user_context": {"target_industries": ["Fintech"]},
        },
    )
    assert response.status_code == 200
    prompt = response.json()["prompt"]
    assert "co-op/internship" in prompt
    assert "Fintech" in prompt


def test_preferences_prompt_empty():
    response = client.post("/preferences/prompt", json={})
    assert response.status_code == 200
    assert response.json()["prompt"] == ""


# ---------------------------------------------------------------------------
# Suggestions
# ---------------------------------------------------------------------------

class TestSuggestions:
    @pytest.mark.asyncio
    async def test_all_sections(self, store):
        generators = _use_generators(RecordingGenerators())

        response = client.post("/suggestions", json=_suggestion_body())

        assert response.status_code == 200
        data = response.json()
        assert data["summary"]["section"] == "summary"
        assert data["skills"]["section"] == "skills"
        assert data["experience"]["section"] == "experience"
        assert data["errors"] == {}
        assert set(generators.calls) == {"summary", "skills", "experience"}

        session = await store.get_session(SESSION_ID)
        assert session.summary_suggestion is not None
        assert session.experience_suggestion is not None

    def test_timeout_maps_to_504(self, store):
        _use_generators(RecordingGenerators({"skills": LLMTimeoutError()}))

        response = client.post("/suggestions", json=_suggestion_body())

        assert response.status_code == 504
        data = response.json()
        assert data["code"] == "LLM_TIMEOUT"
        assert data["section"] == "skills"
        assert data["failed_sections"] == {"skills": "LLM_TIMEOUT"}

    def test_rate_limited_llm_maps_to_429(self, store):
        _use_generators(RecordingGenerators({"summary": RuntimeError("429 resource exhausted")}))

        response = client.post("/suggestions", json=_suggestion_body())

        assert response.status_code == 429
        assert response.json()["code"] == "RATE_LIMITED"

    def test_invalid_session_id(self, store):
        generators = _use_generators(RecordingGenerators())

        response = client.post("/suggestions", json=_suggestion_body(session_id="not-a-uuid"))

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"
        assert generators.calls == {}

    @pytest.mark.asyncio
    async def test_allow_partial(self, store):
        _use_generators(RecordingGenerators({"experience": LLMTimeoutError()}))

        response = client.post("/suggestions?allow_partial=true", json=_suggestion_body())

        assert response.status_code == 200
        data = response.json()
        assert data["experience"] is None
        assert data["errors"]["experience"]["code"] == "LLM_TIMEOUT"
        assert data["summary"] is not None

        session = await store.get_session(SESSION_ID)
        assert session.summary_suggestion is not None
        assert session.experience_suggestion is None

    def test_user_context_from_repository(self, store):
        generators = _use_generators(RecordingGenerators())
        repository = InMemoryUserContextRepository()
        repository.save("user-1", UserContext(career_goal="switching-careers", target_industries=("fintech",)))
        app.dependency_overrides[get_user_context_repository] = lambda: repository

        response = client.post("/suggestions", json=_suggestion_body(user_id="user-1"))

        assert response.status_code == 200
        expected = UserContext(career_goal="switching-careers", target_industries=("fintech",))
        assert generators.calls["summary"]["user_context"] == expected
        assert generators.calls["experience"]["user_context"] == expected

    def test_unknown_user_gets_empty_context(self, store):
        generators = _use_generators(RecordingGenerators())
        app.dependency_overrides[get_user_context_repository] = InMemoryUserContextRepository

        response = client.post("/suggestions", json=_suggestion_body(user_id="nobody"))

        assert response.status_code == 200
        assert generators.calls["skills"]["user_context"] == UserContext()

    def test_missing_resume_content(self, store):
        body = _suggestion_body()
        del body["resume_content"]
        response = client.post("/suggestions", json=body)
        assert response.status_code == 422

    def test_endpoint_rate_limit(self, store):
        _use_generators(RecordingGenerators())
        limit = int(settings.rate_limit.split("/")[0])

        statuses = [client.post("/suggestions", json=_suggestion_body()).status_code for _ in range(limit + 1)]

        assert statuses[:limit] == [200] * limit
        assert statuses[-1] == 429


class TestRegenerate:
    @pytest.mark.asyncio
    async def test_regenerate_summary(self, store):
        generators = _use_generators(RecordingGenerators())

        response = client.post(
            "/suggestions/regenerate",
            json={
                "session_id": SESSION_ID,
                "section": "summary",
                "current_content": "Backend engineer",
                "job_description": SAMPLE_JD,
            },
        )

        assert response.status_code == 200
        assert response.json()["section"] == "summary"
        assert list(generators.calls) == ["summary"]
        session = await store.get_session(SESSION_ID)
        assert session.summary_suggestion is not None
        assert session.skills_suggestion is None

    def test_experience_requires_resume_content(self, store):
        _use_generators(RecordingGenerators())

        response = client.post(
            "/suggestions/regenerate",
            json={
                "session_id": SESSION_ID,
                "section": "experience",
                "current_content": "- Built APIs",
                "job_description": SAMPLE_JD,
            },
        )

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_unknown_section(self, store):
        response = client.post(
            "/suggestions/regenerate",
            json={
                "session_id": SESSION_ID,
                "section": "cover_letter",
                "current_content": "Dear hiring manager",
                "job_description": SAMPLE_JD,
            },
        )
        assert response.status_code == 422
