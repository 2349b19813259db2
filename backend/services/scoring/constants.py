"""Pinned scoring constants. Each score version reads its own tables."""

import re

ALGORITHM_VERSIONS: dict[str, str] = {
    "v1": "v1.0.0-2023.10",
    "v2": "v2.0.0-2024.01",
    "v2.1": "v2.1.0-2026.01",
}

# ---------------------------------------------------------------------------
# Component weight tables (each sums to 1.0)
# ---------------------------------------------------------------------------
WEIGHTS_V1: dict[str, float] = {
    "keywords": 0.40,
    "skills": 0.30,
    "experience": 0.20,
    "format": 0.10,
}

WEIGHTS_V2: dict[str, float] = {
    "keywords": 0.50,
    "content_quality": 0.20,
    "sections": 0.15,
    "format": 0.15,
}

# V2.1 tables are selected by candidate type / seniority, never blended
WEIGHT_TABLES_V21: dict[str, dict[str, float]] = {
    "default": {
        "keywords": 0.40,
        "qualification_fit": 0.15,
        "content_quality": 0.20,
        "sections": 0.15,
        "format": 0.10,
    },
    "coop_entry": {
        "keywords": 0.42,
        "qualification_fit": 0.10,
        "content_quality": 0.18,
        "sections": 0.20,
        "format": 0.10,
    },
    "senior_executive": {
        "keywords": 0.35,
        "qualification_fit": 0.20,
        "content_quality": 0.25,
        "sections": 0.10,
        "format": 0.10,
    },
    "career_changer": {
        "keywords": 0.40,
        "qualification_fit": 0.14,
        "content_quality": 0.18,
        "sections": 0.18,
        "format": 0.10,
    },
}

# ---------------------------------------------------------------------------
# Keyword scoring
# ---------------------------------------------------------------------------
IMPORTANCE_WEIGHTS: dict[str, float] = {"high": 1.0, "medium": 0.6, "low": 0.3}
MATCH_TYPE_WEIGHTS: dict[str, float] = {"exact": 1.0, "fuzzy": 0.85, "semantic": 0.65}
MISSING_HIGH_PENALTY = 0.15
MIN_PENALTY_MULTIPLIER = 0.30

PLACEMENT_WEIGHTS: dict[str, float] = {
    "skills_section": 1.0,
    "summary": 0.90,
    "experience_bullet": 0.85,
    "experience_paragraph": 0.70,
    "education": 0.80,
    "projects": 0.85,
    "other": 0.65,
}
MISSING_REQUIRED_PENALTY = 0.12
PREFERRED_BONUS_CAP = 0.25

# ---------------------------------------------------------------------------
# Content quality
# ---------------------------------------------------------------------------
CONTENT_QUALITY_WEIGHTS: dict[str, float] = {
    "quantification": 0.35,
    "action_verbs": 0.30,
    "keyword_density": 0.35,
}

STRONG_ACTION_VERBS: frozenset[str] = frozenset({
    # Leadership
    "led", "directed", "managed", "supervised", "headed", "oversaw",
    "coordinated", "orchestrated", "spearheaded", "championed",
    # Achievement
    "achieved", "accomplished", "delivered", "exceeded", "surpassed",
    "attained", "earned", "won", "secured",
    # Growth
    "grew", "increased", "expanded", "scaled", "accelerated",
    "boosted", "elevated", "enhanced", "maximized", "optimized",
    # Creation
    "built", "created", "developed", "designed", "established",
    "founded", "launched", "initiated", "pioneered", "introduced",
    # Improvement
    "improved", "streamlined", "transformed", "revamped", "modernized",
    "upgraded", "refined", "restructured", "reengineered",
    # Problem-solving
    "solved", "resolved", "fixed", "addressed", "eliminated",
    "reduced", "minimized", "prevented", "mitigated",
    # Impact
    "drove", "generated", "produced", "saved", "cut",
    "recovered", "captured", "negotiated", "influenced",
    # Technical
    "implemented", "architected", "engineered", "automated",
    "integrated", "deployed", "migrated", "configured",
})

WEAK_ACTION_VERBS: frozenset[str] = frozenset({
    "helped", "assisted", "supported", "participated", "contributed",
    "worked", "was", "had", "did", "made",
    "handled", "dealt", "used", "involved", "responsible",
})

WEAK_ACTION_VERBS_V21: frozenset[str] = WEAK_ACTION_VERBS | frozenset({
    "tried", "attempted", "learned", "studied", "observed",
    "watched", "saw", "knew", "understood", "familiarized",
})

WEAK_VERB_PHRASES: tuple[str, ...] = (
    "was responsible for",
    "was involved in",
    "dealt with",
    "tasked with",
    "in charge of",
    "looked after",
)

# Acceptable for junior / co-op candidates
MODERATE_ACTION_VERBS: frozenset[str] = frozenset({
    "contributed", "collaborated", "partnered", "coordinated", "facilitated",
    "supported", "assisted", "participated", "engaged",
    "managed", "maintained", "handled", "processed", "performed",
    "conducted", "completed", "prepared", "organized", "documented",
    "wrote", "tested", "reviewed", "updated", "modified",
})

# (pattern, tier), checked per bullet; the best tier found wins
QUANTIFICATION_PATTERNS: list[tuple[re.Pattern, str]] = [
    # High: business impact, large scale
    (re.compile(r"\$[\d,]+(?:\.\d+)?[MBT]", re.IGNORECASE), "high"),
    (re.compile(r"\b9\d(?:\.\d+)?%"), "high"),
    (re.compile(r"\b\d{2,}x\b", re.IGNORECASE), "high"),
    (re.compile(r"\b\d{1,3}(?:,\d{3}){2,}\+?\b"), "high"),
    (re.compile(r"team\s+of\s+\d{2,}", re.IGNORECASE), "high"),
    (re.compile(r"\b\d+\s*(?:countries|regions|markets)\b", re.IGNORECASE), "high"),
    # Medium
    (re.compile(r"\$[\d,]+(?:\.\d+)?K", re.IGNORECASE), "medium"),
    (re.compile(r"\b[5-8]\d%"), "medium"),
    (re.compile(r"\b[2-9]x\b", re.IGNORECASE), "medium"),
    (re.compile(r"\b\d{1,3}(?:,\d{3})\+?\s*(?:users?|customers?|requests?)", re.IGNORECASE), "medium"),
    (re.compile(r"team\s+of\s+\d", re.IGNORECASE), "medium"),
    # Low: basic quantification
    (re.compile(r"\$[\d,]+(?:\.\d+)?(?!\d)"), "low"),
    (re.compile(r"\b[1-4]?\d%"), "low"),
    (re.compile(r"\b\d+\+?\s*(?:users?|customers?|clients?)", re.IGNORECASE), "low"),
]
QUANTIFICATION_TIER_POINTS: dict[str, float] = {"high": 1.0, "medium": 0.7, "low": 0.4}

# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------
SECTION_THRESHOLDS: dict[str, int] = {
    "summary_min_words": 30,
    "skills_min_items": 6,
    "experience_min_bullets": 8,
}

# Per candidate type: required flag, minimum depth, max points
SECTION_CONFIG_V21: dict[str, dict[str, dict]] = {
    "coop": {
        "summary": {"required": False, "min_length": 50, "max_points": 15},
        "skills": {"required": True, "min_items": 8, "max_points": 25},
        "experience": {"required": False, "min_bullets": 3, "max_points": 20},
        "education": {"required": True, "min_length": 30, "max_points": 25},
        "projects": {"required": True, "min_bullets": 2, "max_points": 20},
        "certifications": {"required": False, "min_items": 1, "max_points": 10},
    },
    "fulltime": {
        "summary": {"required": True, "min_length": 50, "max_points": 15},
        "skills": {"required": True, "min_items": 8, "max_points": 25},
        "experience": {"required": True, "min_bullets": 6, "max_points": 30},
        "education": {"required": True, "min_length": 30, "max_points": 15},
        "projects": {"required": False, "min_bullets": 2, "max_points": 10},
        "certifications": {"required": False, "min_items": 1, "max_points": 10},
    },
    "career_changer": {
        "summary": {"required": True, "min_length": 80, "max_points": 20},
        "skills": {"required": True, "min_items": 8, "max_points": 25},
        "experience": {"required": True, "min_bullets": 4, "max_points": 20},
        "education": {"required": True, "min_length": 30, "max_points": 20},
        "projects": {"required": True, "min_bullets": 2, "max_points": 15},
        "certifications": {"required": False, "min_items": 1, "max_points": 10},
    },
}

# ---------------------------------------------------------------------------
# Format penalty table (V2.1): deductions from a perfect 1.0
# ---------------------------------------------------------------------------
FORMAT_ADJUSTMENTS: dict[str, float] = {
    "no_email": -0.10,
    "no_phone": -0.05,
    "linkedin": 0.03,
    "github": 0.02,
    "few_dates": -0.10,
    "few_headers": -0.08,
    "no_bullets": -0.07,
    "too_short": -0.12,
    "too_long": -0.05,
    "objective": -0.10,
    "references": -0.05,
    "complex_formatting": -0.05,
}
MIN_WORD_COUNT = 200
MAX_WORD_COUNT = 1000

# ---------------------------------------------------------------------------
# Qualifications
# ---------------------------------------------------------------------------
DEGREE_LEVELS: dict[str, int] = {
    "high_school": 1,
    "associate": 2,
    "bachelor": 3,
    "master": 4,
    "phd": 5,
}

DEGREE_FIELD_MATCHES: dict[str, list[str]] = {
    "computer_science": ["computer science", "cs", "computing", "computational"],
    "software_engineering": ["software engineering", "software development"],
    "information_technology": ["information technology", "it", "information systems", "mis"],
    "engineering": ["engineering", "electrical engineering", "computer engineering"],
    "related": ["mathematics", "math", "physics", "data science", "statistics"],
}

QUALIFICATION_WEIGHTS: dict[str, float] = {
    "degree": 0.4,
    "experience": 0.4,
    "certifications": 0.2,
}

# ---------------------------------------------------------------------------
# Tiers and action items
# ---------------------------------------------------------------------------
SCORE_TIERS: list[tuple[int, str]] = [
    (85, "excellent"),
    (70, "strong"),
    (55, "moderate"),
]

PRIORITY_ORDER: dict[str, int] = {"critical": 0, "high": 1, "medium": 2, "low": 3}
MAX_ACTION_ITEMS = {"v1": 5, "v2": 5, "v2.1": 8}
