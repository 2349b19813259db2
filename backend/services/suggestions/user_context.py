"""Onboarding-derived user context: normalization and fail-soft lookup."""

import inspect
import logging
from typing import Any, Awaitable, Callable, Union

from models.schemas.preferences import CAREER_GOALS, UserContext

logger = logging.getLogger(__name__)

UserContextLookup = Callable[[str], Union[Awaitable[Any], Any]]


def normalize_user_context(raw: Any) -> UserContext:
    """Coerce a lookup result into a UserContext.

    Accepts a UserContext, a mapping with snake_case or camelCase keys, or
    nothing. Unknown career goals and blank industries are dropped.
    """
    if isinstance(raw, UserContext):
        return raw
    if not isinstance(raw, dict):
        return UserContext()

    goal = raw.get("career_goal", raw.get("careerGoal"))
    industries = raw.get("target_industries", raw.get("targetIndustries")) or []
    if isinstance(industries, str):
        industries = [industries]

    return UserContext(
        career_goal=goal if goal in CAREER_GOALS else None,
        target_industries=tuple(str(i).strip() for i in industries if str(i).strip()),
    )


async def resolve_user_context(lookup: UserContextLookup | None, user_id: str | None) -> UserContext:
    """Look up a user's context; any failure yields an empty context."""
    if lookup is None or not user_id:
        return UserContext()
    try:
        result = lookup(user_id)
        if inspect.isawaitable(result):
            result = await result
    except Exception as e:
        logger.warning("User context lookup failed for %s: %s", user_id, e)
        return UserContext()
    return normalize_user_context(result)


class InMemoryUserContextRepository:
    """Onboarding answers keyed by user id."""

    def __init__(self):
        self._contexts: dict[str, UserContext] = {}

    def save(self, user_id: str, context: UserContext) -> None:
        self._contexts[user_id] = context

    async def get(self, user_id: str) -> UserContext:
        return self._contexts.get(user_id, UserContext())
