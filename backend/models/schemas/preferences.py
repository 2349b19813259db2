"""Optimization preferences and onboarding-derived user context."""

from typing import Literal

from pydantic import BaseModel, ConfigDict

Tone = Literal["professional", "casual", "technical"]
Verbosity = Literal["concise", "detailed", "comprehensive"]
Emphasis = Literal["keywords", "skills", "impact"]
Industry = Literal[
    "tech",
    "finance",
    "healthcare",
    "education",
    "retail",
    "manufacturing",
    "consulting",
    "government",
    "generic",
]
ExperienceLevel = Literal["entry", "mid", "senior"]
JobType = Literal["coop", "fulltime"]
ModificationLevel = Literal["conservative", "moderate", "aggressive"]
CareerGoal = Literal["first-job", "switching-careers", "advancing", "promotion", "returning"]

CAREER_GOALS: frozenset[str] = frozenset(
    {"first-job", "switching-careers", "advancing", "promotion", "returning"}
)


class OptimizationPreferences(BaseModel):
    """Seven independent preference dimensions. None of them constrains another."""
    model_config = ConfigDict(frozen=True)

    tone: Tone
    verbosity: Verbosity
    emphasis: Emphasis
    industry: Industry
    experience_level: ExperienceLevel
    job_type: JobType
    modification_level: ModificationLevel


DEFAULT_PREFERENCES = OptimizationPreferences(
    tone="professional",
    verbosity="detailed",
    emphasis="impact",
    industry="generic",
    experience_level="mid",
    job_type="fulltime",
    modification_level="moderate",
)


class UserContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    career_goal: CareerGoal | None = None
    target_industries: tuple[str, ...] = ()

    def is_empty(self) -> bool:
        return self.career_goal is None and not self.target_industries
