"""Optimization session records and the store the orchestrator persists to."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Protocol

from pydantic import BaseModel, Field

from models.schemas.keywords import KeywordAnalysisResult
from models.schemas.scores import ATSScore
from models.schemas.suggestions import ExperienceSuggestion, SkillsSuggestion, SummarySuggestion

logger = logging.getLogger(__name__)


class OptimizationSession(BaseModel):
    session_id: str
    user_id: str | None = None
    keyword_analysis: KeywordAnalysisResult | None = None
    ats_score: ATSScore | None = None
    summary_suggestion: SummarySuggestion | None = None
    skills_suggestion: SkillsSuggestion | None = None
    experience_suggestion: ExperienceSuggestion | None = None
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


SESSION_FIELDS = frozenset(OptimizationSession.model_fields) - {"session_id", "updated_at"}


class SessionStore(Protocol):
    async def update_session(self, session_id: str, fields: dict) -> None: ...

    async def get_session(self, session_id: str) -> OptimizationSession | None: ...


class InMemorySessionStore:
    """Process-local SessionStore. Each update replaces the named fields."""

    def __init__(self):
        self._sessions: dict[str, OptimizationSession] = {}
        self._lock = asyncio.Lock()

    async def update_session(self, session_id: str, fields: dict) -> None:
        unknown = set(fields) - SESSION_FIELDS
        if unknown:
            raise KeyError(f"Unknown session fields: {sorted(unknown)}")

        async with self._lock:
            current = self._sessions.get(session_id) or OptimizationSession(session_id=session_id)
            self._sessions[session_id] = current.model_copy(
                update={**fields, "updated_at": datetime.now(timezone.utc)}
            )
        logger.debug("Session %s updated: %s", session_id, ", ".join(sorted(fields)))

    async def get_session(self, session_id: str) -> OptimizationSession | None:
        return self._sessions.get(session_id)
