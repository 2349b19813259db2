from pydantic import BaseModel, Field

from models.schemas.keywords import ExtractedKeyword
from models.schemas.preferences import OptimizationPreferences, UserContext
from models.schemas.scores import CandidateType, ScoreVersion
from models.schemas.suggestions import SectionName


class KeywordMatchRequest(BaseModel):
    keywords: list[ExtractedKeyword] = Field(..., max_length=200)
    resume_text: str = Field(..., max_length=50000, description="Plain text resume content")


class ScoreRequest(BaseModel):
    resume_text: str = Field(..., max_length=50000, description="Plain text resume content")
    job_description: str = Field(..., max_length=10000, description="Job description text")
    keywords: list[ExtractedKeyword] = Field(default_factory=list, max_length=200)
    version: ScoreVersion | None = None
    candidate_type: CandidateType = "fulltime"


class GapRequest(BaseModel):
    missing: list[ExtractedKeyword]


class PreferencePromptRequest(BaseModel):
    preferences: OptimizationPreferences | None = None
    user_context: UserContext | None = None


class SuggestionRequest(BaseModel):
    """Inputs for generating all three section suggestions.

    ``preferences`` left out of the payload is distinct from an explicit
    ``null``; the orchestrator checks ``model_fields_set`` to tell them apart.
    """
    session_id: str
    user_id: str | None = None
    resume_content: str = Field(..., max_length=50000)
    job_description: str = Field(..., max_length=10000)
    summary: str = ""
    skills: str = ""
    experience: str = ""
    education: str | None = None
    keywords: list[str] | None = None
    preferences: OptimizationPreferences | None = None
    ats_context: str | None = None


class RegenerateRequest(BaseModel):
    session_id: str
    user_id: str | None = None
    section: SectionName
    current_content: str = Field(..., max_length=20000)
    job_description: str = Field(..., max_length=10000)
    resume_content: str | None = Field(None, max_length=50000)
    education: str | None = None
    keywords: list[str] | None = None
    preferences: OptimizationPreferences | None = None
    ats_context: str | None = None
