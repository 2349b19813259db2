"""Shared dependencies for API routes.

Tests swap these out through ``app.dependency_overrides``.
"""

from fastapi import Depends

from services.suggestions.generators import DEFAULT_GENERATORS
from services.suggestions.session_store import InMemorySessionStore, SessionStore
from services.suggestions.user_context import InMemoryUserContextRepository, UserContextLookup

_session_store = InMemorySessionStore()
_user_contexts = InMemoryUserContextRepository()


def get_session_store() -> SessionStore:
    return _session_store


def get_user_context_repository() -> InMemoryUserContextRepository:
    return _user_contexts


def get_user_context_lookup(
    repository: InMemoryUserContextRepository = Depends(get_user_context_repository),
) -> UserContextLookup:
    return repository.get


def get_section_generators() -> dict:
    return dict(DEFAULT_GENERATORS)
