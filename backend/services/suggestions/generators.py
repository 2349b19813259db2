"""LLM-backed generators for the summary, skills and experience sections.

Every generator has the shape ``await generator(section_text, **context)``
and returns one suggestion variant. ``llm`` defaults to the Gemini client;
tests pass a fake.
"""

import logging
from typing import Awaitable, Callable

from pydantic import ValidationError as PydanticValidationError

from models.schemas.preferences import OptimizationPreferences, UserContext
from models.schemas.suggestions import (
    BulletSuggestion,
    ExperienceEntry,
    ExperienceSuggestion,
    SkillItem,
    SkillsSuggestion,
    SummarySuggestion,
)
from services import gemini_client
from services.errors import LLMError, ValidationError
from services.prompt_builder import build_experience_prompt, build_skills_prompt, build_summary_prompt
from services.suggestions.ai_tell import detect_ai_tell_phrases

logger = logging.getLogger(__name__)

LLMCall = Callable[[str], Awaitable[dict]]


def _require(value: str | None, name: str) -> None:
    if not value or not value.strip():
        raise ValidationError(f"{name} is required")


def _require_list(data: dict, key: str) -> list:
    value = data.get(key)
    if not isinstance(value, list):
        logger.error("LLM reply has invalid %r: %r", key, type(value).__name__)
        raise LLMError(f"Invalid {key} structure from LLM")
    return value


def _require_str(data: dict, key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        logger.error("LLM reply has invalid %r", key)
        raise LLMError(f"Invalid {key} structure from LLM")
    return value


def _skill_items(raw) -> list[SkillItem]:
    # the model sometimes returns bare strings instead of {skill, reason}
    items = []
    for item in raw if isinstance(raw, list) else []:
        if isinstance(item, str):
            items.append(SkillItem(skill=item))
        elif isinstance(item, dict) and item.get("skill"):
            items.append(SkillItem(skill=str(item["skill"]), reason=item.get("reason") or None))
    return items


async def generate_summary_suggestion(
    section_text: str,
    *,
    job_description: str,
    keywords: list[str] | None = None,
    preferences: OptimizationPreferences | None = None,
    user_context: UserContext | None = None,
    candidate_type: str = "fulltime",
    ats_context: str | None = None,
    llm: LLMCall | None = None,
    **_ignored,
) -> SummarySuggestion:
    _require(section_text, "Resume summary")
    _require(job_description, "Job description")

    prompt = build_summary_prompt(
        section_text, job_description, keywords, preferences, user_context, candidate_type, ats_context
    )
    data = await (llm or gemini_client.generate_json)(prompt)

    suggested = _require_str(data, "suggested")
    keywords_added = _require_list(data, "keywords_added")
    return SummarySuggestion(
        original=section_text,
        suggested=suggested,
        ats_keywords_added=[str(k) for k in keywords_added],
        ai_tell_phrases_rewritten=detect_ai_tell_phrases(section_text) + detect_ai_tell_phrases(suggested),
        explanation=data.get("explanation") or None,
    )


async def generate_skills_suggestion(
    section_text: str,
    *,
    job_description: str,
    resume_content: str | None = None,
    keywords: list[str] | None = None,
    preferences: OptimizationPreferences | None = None,
    user_context: UserContext | None = None,
    candidate_type: str = "fulltime",
    ats_context: str | None = None,
    llm: LLMCall | None = None,
    **_ignored,
) -> SkillsSuggestion:
    _require(section_text, "Resume skills")
    _require(job_description, "Job description")

    prompt = build_skills_prompt(
        section_text,
        job_description,
        keywords,
        preferences,
        user_context,
        candidate_type,
        ats_context,
        resume_content,
    )
    data = await (llm or gemini_client.generate_json)(prompt)

    return SkillsSuggestion(
        original=section_text,
        existing_skills=[str(s) for s in _require_list(data, "existing_skills")],
        matched_keywords=[str(s) for s in _require_list(data, "matched_keywords")],
        missing_but_relevant=_skill_items(data.get("missing_but_relevant")),
        skill_additions=[str(s) for s in _require_list(data, "skill_additions")],
        skill_removals=_skill_items(data.get("skill_removals")),
        summary=_require_str(data, "summary"),
        explanation=data.get("explanation") or None,
    )


async def generate_experience_suggestion(
    section_text: str,
    *,
    job_description: str,
    resume_content: str | None = None,
    keywords: list[str] | None = None,
    preferences: OptimizationPreferences | None = None,
    user_context: UserContext | None = None,
    candidate_type: str = "fulltime",
    ats_context: str | None = None,
    education: str | None = None,
    llm: LLMCall | None = None,
    **_ignored,
) -> ExperienceSuggestion:
    _require(section_text, "Resume experience")
    _require(job_description, "Job description")
    _require(resume_content, "Resume content")

    prompt = build_experience_prompt(
        section_text,
        job_description,
        resume_content,
        keywords,
        preferences,
        user_context,
        candidate_type,
        ats_context,
        education,
    )
    data = await (llm or gemini_client.generate_json)(prompt)

    raw_entries = _require_list(data, "experience_entries")
    summary = _require_str(data, "summary")
    entries = []
    for raw in raw_entries:
        if not isinstance(raw, dict) or not (raw.get("company") and raw.get("role")):
            raise LLMError("Invalid experience entry structure from LLM")
        try:
            entries.append(ExperienceEntry(
                company=str(raw["company"]),
                role=str(raw["role"]),
                dates=str(raw.get("dates") or ""),
                original_bullets=[str(b) for b in raw.get("original_bullets") or []],
                suggested_bullets=[
                    BulletSuggestion.model_validate(b) for b in raw.get("suggested_bullets") or []
                ],
            ))
        except PydanticValidationError as e:
            logger.error("Invalid bullet structure in LLM reply: %s", e)
            raise LLMError("Invalid bullets structure from LLM") from e

    return ExperienceSuggestion(original=section_text, experience_entries=entries, summary=summary)


DEFAULT_GENERATORS = {
    "summary": generate_summary_suggestion,
    "skills": generate_skills_suggestion,
    "experience": generate_experience_suggestion,
}
