from pydantic import BaseModel

from models.schemas.keywords import ExtractedKeyword, GapAnalysis
from models.schemas.scores import ATSScore, ScoringSignals


class HealthResponse(BaseModel):
    status: str = "ok"
    llm_configured: bool = False
    score_version: str = "v2.1"


class ScoreResponse(BaseModel):
    score: ATSScore
    signals: ScoringSignals
    match_rate: int = 0


class GapResponse(GapAnalysis):
    by_category: dict[str, list[ExtractedKeyword]] = {}


class PreferencePromptResponse(BaseModel):
    prompt: str


class ErrorResponse(BaseModel):
    code: str
    message: str
    section: str | None = None
    failed_sections: dict[str, str] | None = None
