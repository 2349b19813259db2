"""Content quality of resume bullets: quantification, verbs, keyword density."""

from models.schemas.scores import ActionItem, ContentQualityResult
from services.bullet_extractor import first_word, has_metric, keywords_in
from services.scoring.constants import (
    CONTENT_QUALITY_WEIGHTS,
    MODERATE_ACTION_VERBS,
    QUANTIFICATION_PATTERNS,
    QUANTIFICATION_TIER_POINTS,
    STRONG_ACTION_VERBS,
    WEAK_ACTION_VERBS,
    WEAK_ACTION_VERBS_V21,
    WEAK_VERB_PHRASES,
)
from services.scoring.rounding import round_half_up

_TIER_RANK = {"high": 3, "medium": 2, "low": 1}


def _weighted(quantification: float, verbs: float, density: float) -> int:
    return round_half_up(
        quantification * CONTENT_QUALITY_WEIGHTS["quantification"]
        + verbs * CONTENT_QUALITY_WEIGHTS["action_verbs"]
        + density * CONTENT_QUALITY_WEIGHTS["keyword_density"]
    )


# ---------------------------------------------------------------------------
# V1 / V2: banded rates over experience bullets
# ---------------------------------------------------------------------------

def _band(rate: float, full: float, half: float) -> float:
    """0-100 score: 100 at ``full``, 50 at ``half``, linear in between and below."""
    if rate >= full:
        return 100.0
    if rate >= half:
        return 50 + (rate - half) / (full - half) * 50
    return rate / half * 50


def calculate_experience_quality(
    bullets: list[str], jd_keywords: list[str]
) -> ContentQualityResult:
    """V1/V2 bullet quality. Empty bullet list scores 0."""
    if not bullets:
        return ContentQualityResult(keywords_missing=list(jd_keywords))

    n = len(bullets)
    with_metrics = sum(1 for b in bullets if has_metric(b))
    quantification = _band(with_metrics / n, 0.5, 0.25)

    strong = sum(1 for b in bullets if first_word(b) in STRONG_ACTION_VERBS)
    weak = sum(1 for b in bullets if first_word(b) in WEAK_ACTION_VERBS)
    verbs = _band(strong / n, 0.7, 0.4)
    verbs = max(0.0, verbs - min(weak / n * 40, 20))

    per_bullet = sum(len(keywords_in(b, jd_keywords)) for b in bullets) / n
    if per_bullet >= 2:
        density = 100.0
    elif per_bullet >= 1:
        density = 50 + (per_bullet - 1) * 50
    else:
        density = per_bullet * 50

    found = [kw for kw in jd_keywords if any(kw.lower() in b.lower() for b in bullets)]
    return ContentQualityResult(
        score=_weighted(quantification, verbs, density),
        quantification_score=round_half_up(quantification),
        action_verb_score=round_half_up(verbs),
        keyword_density_score=round_half_up(density),
        total_bullets=n,
        bullets_with_metrics=with_metrics,
        strong_verb_count=strong,
        weak_verb_count=weak,
        keywords_found=found,
        keywords_missing=[kw for kw in jd_keywords if kw not in found],
    )


# ---------------------------------------------------------------------------
# V2.1: tiered quantification and job-type-aware verbs over all bullets
# ---------------------------------------------------------------------------

def best_quantification_tier(bullet: str) -> str | None:
    best = None
    for pattern, tier in QUANTIFICATION_PATTERNS:
        if pattern.search(bullet) and (best is None or _TIER_RANK[tier] > _TIER_RANK[best]):
            best = tier
    return best


def classify_action_verb(bullet: str) -> str:
    """Return 'strong', 'moderate', 'weak' or 'unknown' for a bullet's opening."""
    trimmed = bullet.strip().lower()
    if any(trimmed.startswith(phrase) for phrase in WEAK_VERB_PHRASES):
        return "weak"
    word = first_word(trimmed)
    if not word:
        return "unknown"
    if word in STRONG_ACTION_VERBS:
        return "strong"
    if word in MODERATE_ACTION_VERBS:
        return "moderate"
    if word in WEAK_ACTION_VERBS_V21:
        return "weak"
    return "unknown"


def calculate_content_quality(
    bullets: list[str], jd_keywords: list[str], job_type: str = "fulltime"
) -> ContentQualityResult:
    """V2.1 content quality. Empty bullet list scores 0."""
    if not bullets:
        return ContentQualityResult(keywords_missing=list(jd_keywords))

    n = len(bullets)

    # --- Quantification: coverage and tier quality ---
    tiers = {"high": 0, "medium": 0, "low": 0}
    points = 0.0
    for bullet in bullets:
        tier = best_quantification_tier(bullet)
        if tier:
            tiers[tier] += 1
            points += QUANTIFICATION_TIER_POINTS[tier]
    with_metrics = sum(tiers.values())
    coverage = with_metrics / n
    quality = points / with_metrics if with_metrics else 0.0
    quantification = (coverage * 0.6 + quality * 0.4) * 100

    # --- Action verbs ---
    strengths = [classify_action_verb(b) for b in bullets]
    strong = strengths.count("strong")
    moderate = strengths.count("moderate")
    weak = strengths.count("weak")
    if job_type == "coop":
        verb_ratio = (strong + moderate) / n - weak * 0.05
    else:
        verb_ratio = (strong + moderate * 0.6 - weak * 0.2) / n
    verbs = max(0.0, min(1.0, verb_ratio)) * 100

    # --- Keyword density: ~50% of JD keywords present earns full marks ---
    all_text = " ".join(bullets).lower()
    found = [kw for kw in jd_keywords if kw.lower() in all_text]
    if jd_keywords:
        density = min(1.0, len(found) / len(jd_keywords) / 0.5) * 100
    else:
        density = 50.0

    return ContentQualityResult(
        score=_weighted(
            round_half_up(quantification), round_half_up(verbs), round_half_up(density)
        ),
        quantification_score=round_half_up(quantification),
        action_verb_score=round_half_up(verbs),
        keyword_density_score=round_half_up(density),
        total_bullets=n,
        bullets_with_metrics=with_metrics,
        high_tier_metrics=tiers["high"],
        medium_tier_metrics=tiers["medium"],
        low_tier_metrics=tiers["low"],
        strong_verb_count=strong,
        moderate_verb_count=moderate,
        weak_verb_count=weak,
        keywords_found=found,
        keywords_missing=[kw for kw in jd_keywords if kw not in found],
    )


def content_quality_action_items(result: ContentQualityResult) -> list[ActionItem]:
    items = []
    if result.total_bullets == 0:
        items.append(ActionItem(
            priority="high",
            category="Content",
            message="Use bullet points to describe your experience and projects",
            potential_impact=10,
        ))
        return items

    if result.quantification_score < 40:
        items.append(ActionItem(
            priority="high",
            category="Content",
            message=(
                f"Add metrics to bullets (only {result.bullets_with_metrics}/"
                f"{result.total_bullets} have quantification)"
            ),
            potential_impact=10,
        ))
    if result.weak_verb_count > result.strong_verb_count:
        items.append(ActionItem(
            priority="high",
            category="Content",
            message='Replace weak verbs ("Helped", "Worked on") with strong verbs ("Led", "Developed", "Built")',
            potential_impact=10,
        ))
    if result.bullets_with_metrics > 0 and result.low_tier_metrics > result.high_tier_metrics:
        items.append(ActionItem(
            priority="medium",
            category="Content",
            message="Upgrade metrics to higher-impact numbers ($, %, large scale)",
            potential_impact=5,
        ))
    if result.keyword_density_score < 50:
        items.append(ActionItem(
            priority="low",
            category="Content",
            message="Incorporate more JD keywords into your experience bullets",
            potential_impact=5,
        ))
    return items
