import pytest

from conftest import make_skills, make_summary
from models.schemas.preferences import UserContext
from services.suggestions.session_store import InMemorySessionStore
from services.suggestions.user_context import (
    InMemoryUserContextRepository,
    normalize_user_context,
    resolve_user_context,
)


# ---------------------------------------------------------------------------
# User context
# ---------------------------------------------------------------------------

def test_normalize_camel_case_keys():
    context = normalize_user_context({"careerGoal": "advancing", "targetIndustries": ["fintech", " "]})
    assert context == UserContext(career_goal="advancing", target_industries=("fintech",))


def test_normalize_snake_case_and_single_industry():
    context = normalize_user_context({"career_goal": "returning", "target_industries": "healthcare"})
    assert context.career_goal == "returning"
    assert context.target_industries == ("healthcare",)


def test_normalize_drops_unknown_goal():
    assert normalize_user_context({"careerGoal": "world-domination"}).career_goal is None


def test_normalize_non_mapping():
    assert normalize_user_context(None) == UserContext()
    assert normalize_user_context("first-job") == UserContext()
    existing = UserContext(career_goal="promotion")
    assert normalize_user_context(existing) is existing


class TestResolveUserContext:
    @pytest.mark.asyncio
    async def test_no_lookup_or_user(self):
        assert await resolve_user_context(None, "user-1") == UserContext()
        assert await resolve_user_context(lambda user_id: {"careerGoal": "advancing"}, None) == UserContext()

    @pytest.mark.asyncio
    async def test_sync_lookup(self):
        context = await resolve_user_context(lambda user_id: {"careerGoal": "advancing"}, "user-1")
        assert context.career_goal == "advancing"

    @pytest.mark.asyncio
    async def test_async_repository(self):
        repo = InMemoryUserContextRepository()
        repo.save("user-1", UserContext(career_goal="first-job", target_industries=("tech",)))

        context = await resolve_user_context(repo.get, "user-1")
        assert context.career_goal == "first-job"
        assert await resolve_user_context(repo.get, "someone-else") == UserContext()

    @pytest.mark.asyncio
    async def test_failure_is_logged_and_empty(self, caplog):
        async def failing(user_id):
            raise TimeoutError("profile service slow")

        assert await resolve_user_context(failing, "user-1") == UserContext()
        assert "User context lookup failed" in caplog.text


# ---------------------------------------------------------------------------
# Session store
# ---------------------------------------------------------------------------

class TestInMemorySessionStore:
    @pytest.mark.asyncio
    async def test_update_creates_and_merges(self):
        store = InMemorySessionStore()
        summary = make_summary()
        skills = make_skills()

        await store.update_session("s1", {"summary_suggestion": summary})
        first = await store.get_session("s1")
        await store.update_session("s1", {"skills_suggestion": skills})
        second = await store.get_session("s1")

        assert second.summary_suggestion == summary
        assert second.skills_suggestion == skills
        assert second.updated_at >= first.updated_at

    @pytest.mark.asyncio
    async def test_unknown_field_rejected(self):
        store = InMemorySessionStore()
        with pytest.raises(KeyError):
            await store.update_session("s1", {"cover_letter": "..."})
        assert await store.get_session("s1") is None

    @pytest.mark.asyncio
    async def test_missing_session(self):
        assert await InMemorySessionStore().get_session("nope") is None
