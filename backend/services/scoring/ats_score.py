"""Versioned ATS score: run each component, weight it, rank action items.

V1, V2 and V2.1 each read their own pinned weight tables and component
calculators, so a stored score stays reproducible under its version.
"""

import logging
from datetime import datetime, timezone
from typing import Callable

from models.schemas.keywords import KeywordAnalysisResult
from models.schemas.scores import (
    ActionItem,
    ATSScore,
    ContentQualityResult,
    ContentQualitySignals,
    FormatScoreResult,
    FormatScoreResultV21,
    FormatSignals,
    KeywordScoreResult,
    KeywordScoreResultV21,
    QualificationFitResult,
    QualificationSignals,
    RoleContext,
    ScoreBreakdownV1,
    ScoreBreakdownV2,
    ScoreBreakdownV21,
    SectionScoreResult,
    SectionScoreResultV21,
    SectionSignals,
)
from services.errors import InvalidInputError
from services.scoring.constants import (
    ALGORITHM_VERSIONS,
    MAX_ACTION_ITEMS,
    PRIORITY_ORDER,
    SCORE_TIERS,
    WEIGHT_TABLES_V21,
    WEIGHTS_V1,
    WEIGHTS_V2,
)
from services.scoring.content_quality import (
    calculate_content_quality,
    calculate_experience_quality,
    content_quality_action_items,
)
from services.scoring.format_score import (
    calculate_format_score,
    calculate_format_score_v21,
    format_action_items,
    format_action_items_v21,
)
from services.scoring.keyword_score import (
    calculate_keyword_score,
    calculate_keyword_score_v21,
    keyword_action_items,
    keyword_action_items_v21,
)
from services.scoring.qualification_fit import calculate_qualification_fit, qualification_action_items
from services.scoring.rounding import round_half_up
from services.scoring.section_score import (
    calculate_section_score,
    calculate_section_score_v21,
    section_action_items,
    section_action_items_v21,
)

logger = logging.getLogger(__name__)


def get_score_tier(overall: int) -> str:
    for threshold, tier in SCORE_TIERS:
        if overall >= threshold:
            return tier
    return "weak"


def select_weight_table(role_context: RoleContext | None) -> str:
    """Name of the V2.1 weight table for a role context."""
    if role_context is None:
        return "default"
    if role_context.candidate_type == "coop" or role_context.seniority == "entry":
        return "coop_entry"
    if role_context.candidate_type == "career_changer":
        return "career_changer"
    if role_context.seniority in ("senior", "lead", "executive"):
        return "senior_executive"
    return "default"


def _safe(name: str, compute: Callable, fallback):
    """Run one component; a failure degrades it to its zero result."""
    try:
        return compute()
    except Exception:
        logger.warning("Score component %r failed; scoring it as 0", name, exc_info=True)
        return fallback


def _rank(items: list[ActionItem], limit: int) -> list[ActionItem]:
    ranked = sorted(items, key=lambda i: (PRIORITY_ORDER[i.priority], -i.potential_impact))
    return ranked[:limit]


def _overall(components: dict[str, int], weights: dict[str, float]) -> int:
    total = sum(components[name] * weight for name, weight in weights.items())
    return max(0, min(100, round_half_up(total)))


def compute_score(
    keyword_analysis: KeywordAnalysisResult,
    section_signals: SectionSignals,
    format_signals: FormatSignals,
    content_quality_signals: ContentQualitySignals,
    version: str = "v2.1",
    qualification_signals: QualificationSignals | None = None,
    role_context: RoleContext | None = None,
) -> ATSScore:
    """Compute an ATSScore under the requested algorithm version."""
    if version not in ALGORITHM_VERSIONS:
        raise InvalidInputError(f"Unknown score version: {version!r}")

    jd_keywords = keyword_analysis.keyword_strings()
    bullets = content_quality_signals.bullets
    items: list[ActionItem] = []

    if version == "v2.1":
        job_type = role_context.candidate_type if role_context else content_quality_signals.job_type

        keywords = _safe("keywords", lambda: calculate_keyword_score_v21(keyword_analysis), KeywordScoreResultV21())
        if qualification_signals is None:
            qualification = QualificationFitResult()
        else:
            qualification = _safe(
                "qualification_fit",
                lambda: calculate_qualification_fit(qualification_signals),
                QualificationFitResult(),
            )
        content = _safe(
            "content_quality",
            lambda: calculate_content_quality(bullets, jd_keywords, content_quality_signals.job_type),
            ContentQualityResult(),
        )
        sections = _safe(
            "sections",
            lambda: calculate_section_score_v21(section_signals, jd_keywords, job_type),
            SectionScoreResultV21(),
        )
        fmt = _safe("format", lambda: calculate_format_score_v21(format_signals), FormatScoreResultV21())

        breakdown = ScoreBreakdownV21(
            keywords=keywords,
            qualification_fit=qualification,
            content_quality=content,
            sections=sections,
            format=fmt,
        )
        table = select_weight_table(role_context)
        weights = WEIGHT_TABLES_V21[table]

        items += keyword_action_items_v21(keywords)
        if qualification_signals is not None:
            items += qualification_action_items(qualification)
        items += content_quality_action_items(content)
        items += section_action_items_v21(sections)
        items += format_action_items_v21(fmt)

    elif version == "v2":
        keywords = _safe("keywords", lambda: calculate_keyword_score(keyword_analysis), KeywordScoreResult())
        content = _safe(
            "content_quality",
            lambda: calculate_experience_quality(section_signals.experience_bullets, jd_keywords),
            ContentQualityResult(),
        )
        sections = _safe("sections", lambda: calculate_section_score(section_signals), SectionScoreResult())
        fmt = _safe("format", lambda: calculate_format_score(format_signals), FormatScoreResult())

        breakdown = ScoreBreakdownV2(keywords=keywords, content_quality=content, sections=sections, format=fmt)
        table, weights = "v2", WEIGHTS_V2

        items += keyword_action_items(keyword_analysis)
        items += content_quality_action_items(content)
        items += section_action_items(sections)
        items += format_action_items(fmt)

    else:
        keywords = _safe("keywords", lambda: calculate_keyword_score(keyword_analysis), KeywordScoreResult())
        skills = _safe("skills", lambda: calculate_section_score(section_signals), SectionScoreResult())
        experience = _safe(
            "experience",
            lambda: calculate_experience_quality(section_signals.experience_bullets, jd_keywords),
            ContentQualityResult(),
        )
        fmt = _safe("format", lambda: calculate_format_score(format_signals), FormatScoreResult())

        breakdown = ScoreBreakdownV1(keywords=keywords, skills=skills, experience=experience, format=fmt)
        table, weights = "v1", WEIGHTS_V1

        items += keyword_action_items(keyword_analysis)
        items += content_quality_action_items(experience)
        items += section_action_items(skills)
        items += format_action_items(fmt)

    overall = _overall(breakdown.component_scores(), weights)
    if version == "v2.1":
        action_items = _rank(items, MAX_ACTION_ITEMS[version])
    else:
        # V1/V2 keep generation order (keywords first) and take the first five
        action_items = items[: MAX_ACTION_ITEMS[version]]

    return ATSScore(
        overall=overall,
        breakdown=breakdown,
        weights=dict(weights),
        weight_table=table,
        tier=get_score_tier(overall),
        action_items=action_items,
        algorithm_version=ALGORITHM_VERSIONS[version],
        calculated_at=datetime.now(timezone.utc),
    )
