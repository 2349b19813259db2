"""Fan out the three section generators and join their results.

Each generator gets its own copy of one shared context bundle, runs under a
bounded timeout, and fails independently. Failures are classified and
reported per section; nothing is persisted unless the caller accepts
partial results.
"""

import asyncio
import copy
import logging
import uuid
from typing import Any, Awaitable, Callable, Mapping

from config import settings
from models.requests import RegenerateRequest, SuggestionRequest
from models.schemas.preferences import UserContext
from models.schemas.suggestions import (
    SECTIONS,
    ErrorInfo,
    ExperienceSuggestion,
    SkillsSuggestion,
    SuggestionBundle,
    SummarySuggestion,
)
from services.errors import (
    LLMError,
    LLMTimeoutError,
    OptimizerError,
    SectionGenerationError,
    ValidationError,
    to_optimizer_error,
)
from services.preference_prompt import derive_candidate_type
from services.suggestions.session_store import SessionStore
from services.suggestions.user_context import UserContextLookup, resolve_user_context

logger = logging.getLogger(__name__)

SectionGenerator = Callable[..., Awaitable[Any]]

RESULT_TYPES = {
    "summary": SummarySuggestion,
    "skills": SkillsSuggestion,
    "experience": ExperienceSuggestion,
}


def session_field(section: str) -> str:
    return f"{section}_suggestion"


def _validate_session_id(session_id: str) -> None:
    try:
        uuid.UUID(str(session_id))
    except ValueError as e:
        raise ValidationError("Invalid session ID") from e


def _require_text(value: str | None, name: str) -> None:
    if not value or not value.strip():
        raise ValidationError(f"{name} is required")


def build_shared_context(request, user_context: UserContext) -> dict[str, Any]:
    """Keyword arguments every generator receives.

    ``preferences`` is included only when the caller set it, so an absent
    value stays absent and an explicit None is forwarded as None.
    """
    context: dict[str, Any] = {
        "job_description": request.job_description,
        "resume_content": request.resume_content,
        "keywords": request.keywords,
        "user_context": user_context,
        "education": request.education,
        "ats_context": request.ats_context,
        "candidate_type": derive_candidate_type(request.preferences),
    }
    if "preferences" in request.model_fields_set:
        context["preferences"] = request.preferences
    return context


async def _run_section(
    section: str,
    generator: SectionGenerator,
    section_text: str,
    context: dict[str, Any],
    timeout: float,
):
    try:
        result = await asyncio.wait_for(generator(section_text, **context), timeout=timeout)
    except asyncio.TimeoutError as e:
        raise LLMTimeoutError(section=section) from e
    except OptimizerError as e:
        raise to_optimizer_error(e, section)
    except Exception as e:
        raise to_optimizer_error(e, section) from e

    if not isinstance(result, RESULT_TYPES[section]):
        raise LLMError(f"Generator returned {type(result).__name__} for {section}", section=section)
    return result


async def _persist(session_store: SessionStore | None, session_id: str, fields: dict) -> None:
    if session_store is None or not fields:
        return
    try:
        await session_store.update_session(session_id, fields)
    except Exception as e:
        logger.warning("Failed to persist suggestions for session %s: %s", session_id, e)


async def generate_all_suggestions(
    request: SuggestionRequest,
    generators: Mapping[str, SectionGenerator],
    user_context_lookup: UserContextLookup | None = None,
    session_store: SessionStore | None = None,
    *,
    timeout: float | None = None,
    allow_partial: bool = False,
) -> SuggestionBundle:
    """Generate summary, skills and experience suggestions concurrently.

    Raises SectionGenerationError naming the first failing section (in
    summary → skills → experience order) when any section fails, unless
    ``allow_partial`` is set and at least one section succeeded.
    """
    _validate_session_id(request.session_id)
    _require_text(request.resume_content, "Resume content")
    _require_text(request.job_description, "Job description")

    user_context = await resolve_user_context(user_context_lookup, request.user_id)
    shared = build_shared_context(request, user_context)
    timeout = settings.llm_timeout_seconds if timeout is None else timeout

    # an empty section falls back to the full resume
    texts = {
        name: getattr(request, name) if getattr(request, name).strip() else request.resume_content
        for name in SECTIONS
    }

    outcomes = await asyncio.gather(
        *(
            _run_section(name, generators[name], texts[name], copy.deepcopy(shared), timeout)
            for name in SECTIONS
        ),
        return_exceptions=True,
    )

    results: dict[str, Any] = {}
    failures: dict[str, OptimizerError] = {}
    for name, outcome in zip(SECTIONS, outcomes):
        if isinstance(outcome, OptimizerError):
            failures[name] = outcome
        elif isinstance(outcome, BaseException):
            raise outcome
        else:
            results[name] = outcome

    logger.info(
        "Suggestions for session %s: %d succeeded, %d failed%s",
        request.session_id,
        len(results),
        len(failures),
        f" ({', '.join(f'{n}={e.code.value}' for n, e in failures.items())})" if failures else "",
    )

    if failures and (not allow_partial or not results):
        first = next(name for name in SECTIONS if name in failures)
        raise SectionGenerationError(first, failures)

    await _persist(
        session_store,
        request.session_id,
        {session_field(name): result for name, result in results.items()},
    )
    return SuggestionBundle(
        **results,
        errors={name: ErrorInfo(code=err.code.value, message=err.message) for name, err in failures.items()},
    )


async def regenerate_suggestion(
    request: RegenerateRequest,
    generators: Mapping[str, SectionGenerator],
    user_context_lookup: UserContextLookup | None = None,
    session_store: SessionStore | None = None,
    *,
    timeout: float | None = None,
):
    """Regenerate one section from edited content. Other sections are untouched."""
    _validate_session_id(request.session_id)
    _require_text(request.current_content, "Current content")
    _require_text(request.job_description, "Job description")
    if request.section == "experience":
        _require_text(request.resume_content, "Resume content")

    user_context = await resolve_user_context(user_context_lookup, request.user_id)
    context = build_shared_context(request, user_context)
    timeout = settings.llm_timeout_seconds if timeout is None else timeout

    result = await _run_section(
        request.section, generators[request.section], request.current_content, context, timeout
    )
    await _persist(session_store, request.session_id, {session_field(request.section): result})
    return result
