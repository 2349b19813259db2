"""Score calculator contracts: input signals, component results, ATSScore."""

from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from models.schemas.keywords import ExtractedKeyword

ScoreVersion = Literal["v1", "v2", "v2.1"]
CandidateType = Literal["coop", "fulltime", "career_changer"]
SeniorityLevel = Literal["entry", "mid", "senior", "lead", "executive"]
DegreeLevel = Literal["high_school", "associate", "bachelor", "master", "phd"]
ScoreTier = Literal["excellent", "strong", "moderate", "weak"]
ActionPriority = Literal["critical", "high", "medium", "low"]


# ---------------------------------------------------------------------------
# Input signals
# ---------------------------------------------------------------------------

class SectionSignals(BaseModel):
    """Resume sections as the section scorer sees them."""
    summary: str = ""
    skills: list[str] = []
    experience_text: str = ""
    experience_bullets: list[str] = []
    education: str = ""
    projects: list[str] = []
    certifications: list[str] = []

    def is_empty(self) -> bool:
        return not (
            self.summary.strip()
            or self.skills
            or self.experience_text.strip()
            or self.experience_bullets
            or self.education.strip()
            or self.projects
            or self.certifications
        )


class FormatSignals(BaseModel):
    has_email: bool = False
    has_phone: bool = False
    has_linkedin: bool = False
    has_github: bool = False
    date_count: int = 0
    header_count: int = 0
    bullet_count: int = 0
    word_count: int = 0
    has_experience: bool = False
    has_summary: bool = False
    has_objective: bool = False
    has_references: bool = False
    has_complex_formatting: bool = False


class ContentQualitySignals(BaseModel):
    bullets: list[str] = []
    bullet_sources: dict[str, int] = {}  # experience / projects / education
    job_type: CandidateType = "fulltime"


class DegreeRequirement(BaseModel):
    level: DegreeLevel
    fields_of_study: list[str] = []
    required: bool = True


class ExperienceRequirement(BaseModel):
    min_years: float
    required: bool = True


class ResumeDegree(BaseModel):
    level: DegreeLevel
    field: str = ""


class QualificationSignals(BaseModel):
    degree_required: DegreeRequirement | None = None
    experience_required: ExperienceRequirement | None = None
    certifications_required: list[str] = []
    degree: ResumeDegree | None = None
    total_experience_years: float = 0.0
    certifications: list[str] = []


class RoleContext(BaseModel):
    candidate_type: CandidateType = "fulltime"
    seniority: SeniorityLevel = "mid"
    job_role: str = "general"


class ScoringSignals(BaseModel):
    """Everything the calculator needs besides the keyword analysis."""
    sections: SectionSignals = SectionSignals()
    format: FormatSignals = FormatSignals()
    content_quality: ContentQualitySignals = ContentQualitySignals()
    qualification: QualificationSignals = QualificationSignals()
    role: RoleContext = RoleContext()


# ---------------------------------------------------------------------------
# Component results
# ---------------------------------------------------------------------------

class KeywordScoreResult(BaseModel):
    score: int = 0
    match_rate: int = 0
    weighted_score: float = 0.0
    penalty_multiplier: float = 1.0
    missing_high_count: int = 0


class KeywordScoreResultV21(BaseModel):
    score: int = 0
    required_score: float = 0.0
    penalty_multiplier: float = 1.0
    preferred_bonus: float = 0.0
    matched_required: list[ExtractedKeyword] = []
    missing_required: list[str] = []
    matched_preferred: list[str] = []
    missing_preferred: list[str] = []


class ContentQualityResult(BaseModel):
    score: int = 0
    quantification_score: int = 0
    action_verb_score: int = 0
    keyword_density_score: int = 0
    total_bullets: int = 0
    bullets_with_metrics: int = 0
    high_tier_metrics: int = 0
    medium_tier_metrics: int = 0
    low_tier_metrics: int = 0
    strong_verb_count: int = 0
    moderate_verb_count: int = 0
    weak_verb_count: int = 0
    keywords_found: list[str] = []
    keywords_missing: list[str] = []


class SectionScoreResult(BaseModel):
    score: int = 0
    summary_score: int = 0
    skills_score: int = 0
    experience_score: int = 0
    summary_word_count: int = 0
    skills_item_count: int = 0
    experience_bullet_count: int = 0


class SectionDetail(BaseModel):
    present: bool = False
    meets_threshold: bool = False
    points: float = 0.0
    max_points: int = 0
    quality_score: int | None = None
    issues: list[str] = []


class EducationQualityResult(BaseModel):
    score: int = 0
    has_relevant_coursework: bool = False
    coursework_match_score: float = 0.0
    has_gpa: bool = False
    gpa_strong: bool = False
    has_projects: bool = False
    has_honors: bool = False
    has_proper_date_format: bool = False
    suggestions: list[str] = []


class SectionScoreResultV21(BaseModel):
    score: int = 0
    breakdown: dict[str, SectionDetail] = {}
    education_quality: EducationQualityResult | None = None


class FormatScoreResult(BaseModel):
    score: int = 0
    contact_score: int = 0
    structure_score: int = 0
    has_email: bool = False
    has_phone: bool = False
    has_dates: bool = False
    has_section_headers: bool = False
    has_bullet_structure: bool = False


class FormatScoreResultV21(BaseModel):
    score: int = 0
    issues: list[str] = []
    warnings: list[str] = []


class QualificationFitResult(BaseModel):
    score: int = 0
    degree_score: int = 0
    experience_score: int = 0
    certification_score: int = 0
    degree_met: bool = False
    degree_note: str | None = None
    experience_met: bool = False
    experience_note: str | None = None
    certifications_met: list[str] = []
    certifications_missing: list[str] = []


# ---------------------------------------------------------------------------
# Versioned breakdowns (tagged on ``version``)
# ---------------------------------------------------------------------------

class ScoreBreakdownV1(BaseModel):
    version: Literal["v1"] = "v1"
    keywords: KeywordScoreResult = KeywordScoreResult()
    skills: SectionScoreResult = SectionScoreResult()
    experience: ContentQualityResult = ContentQualityResult()
    format: FormatScoreResult = FormatScoreResult()

    def component_scores(self) -> dict[str, int]:
        return {
            "keywords": self.keywords.score,
            "skills": self.skills.score,
            "experience": self.experience.score,
            "format": self.format.score,
        }


class ScoreBreakdownV2(BaseModel):
    version: Literal["v2"] = "v2"
    keywords: KeywordScoreResult = KeywordScoreResult()
    content_quality: ContentQualityResult = ContentQualityResult()
    sections: SectionScoreResult = SectionScoreResult()
    format: FormatScoreResult = FormatScoreResult()

    def component_scores(self) -> dict[str, int]:
        return {
            "keywords": self.keywords.score,
            "content_quality": self.content_quality.score,
            "sections": self.sections.score,
            "format": self.format.score,
        }


class ScoreBreakdownV21(BaseModel):
    version: Literal["v2.1"] = "v2.1"
    keywords: KeywordScoreResultV21 = KeywordScoreResultV21()
    qualification_fit: QualificationFitResult = QualificationFitResult()
    content_quality: ContentQualityResult = ContentQualityResult()
    sections: SectionScoreResultV21 = SectionScoreResultV21()
    format: FormatScoreResultV21 = FormatScoreResultV21()

    def component_scores(self) -> dict[str, int]:
        return {
            "keywords": self.keywords.score,
            "qualification_fit": self.qualification_fit.score,
            "content_quality": self.content_quality.score,
            "sections": self.sections.score,
            "format": self.format.score,
        }


ScoreBreakdown = Annotated[
    Union[ScoreBreakdownV1, ScoreBreakdownV2, ScoreBreakdownV21],
    Field(discriminator="version"),
]


class ActionItem(BaseModel):
    priority: ActionPriority
    category: str
    message: str
    potential_impact: int = 0


class ATSScore(BaseModel):
    """Top-level score for one analysis run. Re-analysis builds a new one."""
    overall: int = Field(..., ge=0, le=100)
    breakdown: ScoreBreakdown
    weights: dict[str, float]
    weight_table: str
    tier: ScoreTier
    action_items: list[ActionItem] = []
    algorithm_version: str
    calculated_at: datetime

    @property
    def version(self) -> ScoreVersion:
        return self.breakdown.version
