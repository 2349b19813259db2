"""Keyword matcher contracts: extracted keywords and match results."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

KeywordCategory = Literal[
    "technologies",
    "skills",
    "soft_skills",
    "certifications",
    "qualifications",
    "experience",
    "education",
    "tools",
    "methodologies",
    "other",
]
Importance = Literal["high", "medium", "low"]
Requirement = Literal["required", "preferred"]
MatchType = Literal["exact", "fuzzy", "semantic"]
KeywordPlacement = Literal[
    "skills_section",
    "summary",
    "experience_bullet",
    "experience_paragraph",
    "education",
    "projects",
    "other",
]


class ExtractedKeyword(BaseModel):
    """A job-description keyword, optionally annotated with how it matched.

    Instances are frozen; the matcher returns annotated copies rather than
    patching the caller's keywords.
    """
    model_config = ConfigDict(frozen=True)

    keyword: str = Field(..., min_length=1)
    category: KeywordCategory = "other"
    importance: Importance = "medium"
    requirement: Requirement = "preferred"
    match_type: MatchType | None = None
    context: str | None = None
    placement: KeywordPlacement | None = None


class CountPair(BaseModel):
    matched: int = 0
    total: int = 0


class KeywordAnalysisResult(BaseModel):
    matched: list[ExtractedKeyword] = []
    missing: list[ExtractedKeyword] = []
    match_rate: int = Field(0, ge=0, le=100)
    keyword_score: int | None = None
    required_count: CountPair | None = None
    preferred_count: CountPair | None = None

    @property
    def total(self) -> int:
        return len(self.matched) + len(self.missing)

    def keyword_strings(self) -> list[str]:
        return [k.keyword for k in self.matched] + [k.keyword for k in self.missing]


class GapCounts(BaseModel):
    high: int = 0
    medium: int = 0
    low: int = 0


class GapAnalysis(BaseModel):
    counts: GapCounts = GapCounts()
    quick_wins: list[ExtractedKeyword] = []
