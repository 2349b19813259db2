"""Pydantic contracts shared by the scoring core and the suggestion pipeline."""

from models.schemas.keywords import CountPair, ExtractedKeyword, GapAnalysis, KeywordAnalysisResult
from models.schemas.preferences import DEFAULT_PREFERENCES, OptimizationPreferences, UserContext
from models.schemas.scores import (
    ATSScore,
    ScoreBreakdownV1,
    ScoreBreakdownV2,
    ScoreBreakdownV21,
    ScoringSignals,
)
from models.schemas.suggestions import (
    ExperienceSuggestion,
    SkillsSuggestion,
    SuggestionBundle,
    SummarySuggestion,
)

__all__ = [
    "CountPair",
    "ExtractedKeyword",
    "GapAnalysis",
    "KeywordAnalysisResult",
    "DEFAULT_PREFERENCES",
    "OptimizationPreferences",
    "UserContext",
    "ATSScore",
    "ScoreBreakdownV1",
    "ScoreBreakdownV2",
    "ScoreBreakdownV21",
    "ScoringSignals",
    "ExperienceSuggestion",
    "SkillsSuggestion",
    "SuggestionBundle",
    "SummarySuggestion",
]
