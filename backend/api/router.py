from fastapi import APIRouter, Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_section_generators, get_session_store, get_user_context_lookup
from config import settings
from models.requests import (
    GapRequest,
    KeywordMatchRequest,
    PreferencePromptRequest,
    RegenerateRequest,
    ScoreRequest,
    SuggestionRequest,
)
from models.responses import (
    ErrorResponse,
    GapResponse,
    HealthResponse,
    PreferencePromptResponse,
    ScoreResponse,
)
from models.schemas.keywords import KeywordAnalysisResult
from models.schemas.suggestions import Suggestion, SuggestionBundle
from services import gemini_client
from services.gap_prioritizer import group_by_category, prioritize
from services.keyword_matcher import match_keywords
from services.preference_prompt import build_preference_prompt
from services.scoring.ats_score import compute_score
from services.scoring.signals import extract_signals
from services.suggestions.orchestrator import generate_all_suggestions, regenerate_suggestion

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)

ERROR_RESPONSES = {status: {"model": ErrorResponse} for status in (400, 429, 502, 504)}


@router.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(
        status="ok",
        llm_configured=gemini_client.is_configured(),
        score_version=settings.score_version,
    )


@router.post("/keywords/match", response_model=KeywordAnalysisResult)
async def keywords_match(body: KeywordMatchRequest):
    return match_keywords(body.keywords, body.resume_text)


@router.post("/score", response_model=ScoreResponse)
async def score(body: ScoreRequest):
    analysis = match_keywords(body.keywords, body.resume_text)
    signals = extract_signals(body.resume_text, body.job_description, analysis, body.candidate_type)
    result = compute_score(
        analysis,
        signals.sections,
        signals.format,
        signals.content_quality,
        version=body.version or settings.score_version,
        qualification_signals=signals.qualification,
        role_context=signals.role,
    )
    return ScoreResponse(score=result, signals=signals, match_rate=analysis.match_rate)


@router.post("/gaps", response_model=GapResponse)
async def gaps(body: GapRequest):
    analysis = prioritize(body.missing)
    return GapResponse(
        counts=analysis.counts,
        quick_wins=analysis.quick_wins,
        by_category=group_by_category(body.missing),
    )


@router.post("/preferences/prompt", response_model=PreferencePromptResponse)
async def preferences_prompt(body: PreferencePromptRequest):
    return PreferencePromptResponse(prompt=build_preference_prompt(body.preferences, body.user_context))


@router.post("/suggestions", response_model=SuggestionBundle, responses=ERROR_RESPONSES)
@limiter.limit(settings.rate_limit)
async def suggestions(
    request: Request,
    body: SuggestionRequest,
    allow_partial: bool = False,
    generators: dict = Depends(get_section_generators),
    user_context_lookup=Depends(get_user_context_lookup),
    session_store=Depends(get_session_store),
):
    return await generate_all_suggestions(
        body,
        generators,
        user_context_lookup,
        session_store,
        allow_partial=allow_partial,
    )


@router.post("/suggestions/regenerate", response_model=Suggestion, responses=ERROR_RESPONSES)
@limiter.limit(settings.rate_limit)
async def suggestions_regenerate(
    request: Request,
    body: RegenerateRequest,
    generators: dict = Depends(get_section_generators),
    user_context_lookup=Depends(get_user_context_lookup),
    session_store=Depends(get_session_store),
):
    return await regenerate_suggestion(body, generators, user_context_lookup, session_store)
