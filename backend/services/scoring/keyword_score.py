"""Weighted keyword scoring.

V1/V2 weight each keyword by importance and by how it matched; V2.1 splits
required from preferred keywords and also weights where a match appears.
"""

from models.schemas.keywords import KeywordAnalysisResult
from models.schemas.scores import ActionItem, KeywordScoreResult, KeywordScoreResultV21
from services.scoring.constants import (
    IMPORTANCE_WEIGHTS,
    MATCH_TYPE_WEIGHTS,
    MIN_PENALTY_MULTIPLIER,
    MISSING_HIGH_PENALTY,
    MISSING_REQUIRED_PENALTY,
    PLACEMENT_WEIGHTS,
    PREFERRED_BONUS_CAP,
)
from services.scoring.rounding import round_half_up


def _clamp_score(value: float) -> int:
    return max(0, min(100, round_half_up(value)))


def calculate_keyword_score(analysis: KeywordAnalysisResult) -> KeywordScoreResult:
    """Importance × match-type weighted score with a missing-high penalty.

    weighted = Σ(importance · match_type) / Σ(importance) over all keywords,
    then multiplied by max(1 − 0.15 · missing_high, 0.30).
    """
    if analysis.total == 0:
        return KeywordScoreResult(score=0, match_rate=0)

    achieved = sum(
        IMPORTANCE_WEIGHTS[k.importance] * MATCH_TYPE_WEIGHTS[k.match_type or "exact"]
        for k in analysis.matched
    )
    possible = sum(IMPORTANCE_WEIGHTS[k.importance] for k in analysis.matched)
    possible += sum(IMPORTANCE_WEIGHTS[k.importance] for k in analysis.missing)
    weighted = achieved / possible * 100 if possible else 0.0

    missing_high = sum(1 for k in analysis.missing if k.importance == "high")
    multiplier = max(1 - MISSING_HIGH_PENALTY * missing_high, MIN_PENALTY_MULTIPLIER)

    return KeywordScoreResult(
        score=_clamp_score(weighted * multiplier),
        match_rate=analysis.match_rate,
        weighted_score=round(weighted, 2),
        penalty_multiplier=round(multiplier, 2),
        missing_high_count=missing_high,
    )


def calculate_keyword_score_v21(analysis: KeywordAnalysisResult) -> KeywordScoreResultV21:
    """Required keywords drive the score; preferred ones add a capped bonus."""
    if analysis.total == 0:
        return KeywordScoreResultV21(score=0)

    matched_required = [k for k in analysis.matched if k.requirement == "required"]
    missing_required = [k for k in analysis.missing if k.requirement == "required"]
    matched_preferred = [k for k in analysis.matched if k.requirement == "preferred"]
    missing_preferred = [k for k in analysis.missing if k.requirement == "preferred"]

    # --- Required keywords: importance × match type × placement ---
    required_total = sum(
        IMPORTANCE_WEIGHTS[k.importance] for k in matched_required + missing_required
    )
    if required_total > 0:
        required_achieved = sum(
            IMPORTANCE_WEIGHTS[k.importance]
            * MATCH_TYPE_WEIGHTS[k.match_type or "exact"]
            * PLACEMENT_WEIGHTS[k.placement or "other"]
            for k in matched_required
        )
        required_score = required_achieved / required_total
    else:
        required_score = 1.0

    penalty = max(MIN_PENALTY_MULTIPLIER, 1 - MISSING_REQUIRED_PENALTY * len(missing_required))

    # --- Preferred keywords: capped bonus ---
    preferred_count = len(matched_preferred) + len(missing_preferred)
    preferred_ratio = len(matched_preferred) / preferred_count if preferred_count else 0.0
    bonus = preferred_ratio * PREFERRED_BONUS_CAP

    final = min(1.0, required_score * penalty + bonus)

    return KeywordScoreResultV21(
        score=_clamp_score(final * 100),
        required_score=round(required_score, 3),
        penalty_multiplier=round(penalty, 2),
        preferred_bonus=round(bonus, 3),
        matched_required=matched_required,
        missing_required=[k.keyword for k in missing_required],
        matched_preferred=[k.keyword for k in matched_preferred],
        missing_preferred=[k.keyword for k in missing_preferred],
    )


def keyword_action_items(analysis: KeywordAnalysisResult) -> list[ActionItem]:
    items = []

    missing_high = [k.keyword for k in analysis.missing if k.importance == "high"]
    if missing_high:
        items.append(ActionItem(
            priority="high",
            category="Keywords",
            message=f"Add critical keywords: {', '.join(missing_high[:3])}",
            potential_impact=10,
        ))

    missing_medium = [k.keyword for k in analysis.missing if k.importance == "medium"]
    if missing_medium:
        items.append(ActionItem(
            priority="medium",
            category="Keywords",
            message=f"Consider adding: {', '.join(missing_medium[:3])}",
            potential_impact=5,
        ))

    semantic = [k.keyword for k in analysis.matched if k.match_type == "semantic"]
    if semantic:
        items.append(ActionItem(
            priority="medium",
            category="Keywords",
            message=f"Use exact terminology for: {', '.join(semantic[:2])}",
            potential_impact=5,
        ))
    return items


def keyword_action_items_v21(result: KeywordScoreResultV21) -> list[ActionItem]:
    items = []

    if result.missing_required:
        items.append(ActionItem(
            priority="critical",
            category="Keywords",
            message=f"Add missing REQUIRED keywords: {', '.join(result.missing_required[:4])}",
            potential_impact=15,
        ))

    semantic_required = [k.keyword for k in result.matched_required if k.match_type == "semantic"]
    if semantic_required:
        items.append(ActionItem(
            priority="high",
            category="Keywords",
            message=f"Use exact terminology for required skills: {', '.join(semantic_required[:2])}",
            potential_impact=10,
        ))

    if len(result.missing_preferred) > 3:
        items.append(ActionItem(
            priority="medium",
            category="Keywords",
            message=f"Consider adding preferred keywords: {', '.join(result.missing_preferred[:3])}",
            potential_impact=5,
        ))
    return items
