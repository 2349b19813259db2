"""Suggestion shapes returned by the section generators.

The three variants form a closed set tagged on ``section``; consumers
dispatch on that tag rather than probing for fields.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

SectionName = Literal["summary", "skills", "experience"]
SECTIONS: tuple[str, ...] = ("summary", "skills", "experience")


class AITellRewrite(BaseModel):
    detected: str
    rewritten: str


class SummarySuggestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    section: Literal["summary"] = "summary"
    original: str
    suggested: str
    ats_keywords_added: list[str] = []
    ai_tell_phrases_rewritten: list[AITellRewrite] = []
    explanation: str | None = None


class SkillItem(BaseModel):
    skill: str
    reason: str | None = None


class SkillsSuggestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    section: Literal["skills"] = "skills"
    original: str
    existing_skills: list[str] = []
    matched_keywords: list[str] = []
    missing_but_relevant: list[SkillItem] = []
    skill_additions: list[str] = []
    skill_removals: list[SkillItem] = []
    summary: str = ""
    explanation: str | None = None


class BulletSuggestion(BaseModel):
    original: str
    suggested: str
    metrics_added: list[str] = []
    keywords_incorporated: list[str] = []
    explanation: str | None = None


class ExperienceEntry(BaseModel):
    company: str = ""
    role: str = ""
    dates: str = ""
    original_bullets: list[str] = []
    suggested_bullets: list[BulletSuggestion] = []


class ExperienceSuggestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    section: Literal["experience"] = "experience"
    original: str
    experience_entries: list[ExperienceEntry] = []
    summary: str = ""


Suggestion = Annotated[
    Union[SummarySuggestion, SkillsSuggestion, ExperienceSuggestion],
    Field(discriminator="section"),
]


class ErrorInfo(BaseModel):
    code: str
    message: str


class SuggestionBundle(BaseModel):
    summary: SummarySuggestion | None = None
    skills: SkillsSuggestion | None = None
    experience: ExperienceSuggestion | None = None
    errors: dict[str, ErrorInfo] = {}

    def succeeded(self) -> dict[str, BaseModel]:
        return {
            name: result
            for name in SECTIONS
            if (result := getattr(self, name)) is not None
        }
