"""Section coverage scoring.

V1/V2 look at summary length, skill count and experience bullets.
V2.1 awards points per section from a candidate-type table and folds in an
education quality evaluation.
"""

import re

from models.schemas.scores import (
    ActionItem,
    EducationQualityResult,
    SectionDetail,
    SectionScoreResult,
    SectionScoreResultV21,
    SectionSignals,
)
from services.bullet_extractor import extract_experience_bullets
from services.scoring.constants import SECTION_CONFIG_V21, SECTION_THRESHOLDS
from services.scoring.rounding import round_half_up


def _ratio_score(count: int, target: int) -> int:
    if count <= 0:
        return 0
    return round_half_up(min(100, count / target * 100))


def _experience_bullets(sections: SectionSignals) -> list[str]:
    if sections.experience_bullets:
        return sections.experience_bullets
    return extract_experience_bullets(sections.experience_text)


# ---------------------------------------------------------------------------
# V1 / V2
# ---------------------------------------------------------------------------

def calculate_section_score(sections: SectionSignals) -> SectionScoreResult:
    summary_words = len(sections.summary.split())
    skill_items = len(sections.skills)
    bullet_count = len(_experience_bullets(sections))

    summary_score = _ratio_score(summary_words, SECTION_THRESHOLDS["summary_min_words"])
    skills_score = _ratio_score(skill_items, SECTION_THRESHOLDS["skills_min_items"])
    experience_score = _ratio_score(bullet_count, SECTION_THRESHOLDS["experience_min_bullets"])

    return SectionScoreResult(
        score=round_half_up((summary_score + skills_score + experience_score) / 3),
        summary_score=summary_score,
        skills_score=skills_score,
        experience_score=experience_score,
        summary_word_count=summary_words,
        skills_item_count=skill_items,
        experience_bullet_count=bullet_count,
    )


def section_action_items(result: SectionScoreResult) -> list[ActionItem]:
    messages = []
    if result.summary_score < 100:
        if result.summary_word_count == 0:
            messages.append(("high", "Add a professional summary (30+ words recommended)"))
        else:
            needed = SECTION_THRESHOLDS["summary_min_words"] - result.summary_word_count
            messages.append(("medium", f"Expand your summary by {needed} more words"))
    if result.skills_score < 100:
        if result.skills_item_count == 0:
            messages.append(("high", "Add a skills section with 6+ relevant skills"))
        else:
            needed = SECTION_THRESHOLDS["skills_min_items"] - result.skills_item_count
            messages.append(("medium", f"Add {needed} more skills to your skills section"))
    if result.experience_score < 100:
        if result.experience_bullet_count == 0:
            messages.append(("high", "Add bullet points to your experience section"))
        else:
            needed = SECTION_THRESHOLDS["experience_min_bullets"] - result.experience_bullet_count
            messages.append(("medium", f"Add {needed} more bullet points to your experience"))

    return [
        ActionItem(priority=p, category="Sections", message=m, potential_impact=5)
        for p, m in messages
    ]


# ---------------------------------------------------------------------------
# V2.1: education quality
# ---------------------------------------------------------------------------

_COURSEWORK_RE = re.compile(r"(?:relevant\s+)?coursework[:\s]+([^.\n]+)", re.IGNORECASE)
_GPA_RE = re.compile(r"gpa[:\s]*(\d+\.?\d*)", re.IGNORECASE)
_EDU_PROJECTS_RE = re.compile(r"capstone|project|thesis|research", re.IGNORECASE)
_HONORS_RE = re.compile(
    r"dean'?s?\s*list|honou?rs?|cum\s*laude|magna|summa|distinction", re.IGNORECASE
)
_EDU_DATE_RE = re.compile(
    r"(?:(?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\.?\s+)?\d{4}|expected|graduated",
    re.IGNORECASE,
)


def evaluate_education_quality(
    education_text: str, jd_keywords: list[str], job_type: str = "fulltime"
) -> EducationQualityResult:
    """Score an education section 0-100.

    Co-op candidates are judged mostly on coursework, GPA and academic
    projects; other candidates get base credit for having the section.
    """
    if not education_text or not education_text.strip():
        return EducationQualityResult(suggestions=["Add education section"])

    coursework = _COURSEWORK_RE.search(education_text)
    coursework_match = 0.0
    if coursework and jd_keywords:
        course_text = coursework.group(1).lower()
        hits = [kw for kw in jd_keywords if kw.lower() in course_text]
        coursework_match = min(1.0, len(hits) / min(len(jd_keywords), 10))

    gpa = _GPA_RE.search(education_text)
    has_gpa = gpa is not None
    gpa_strong = has_gpa and float(gpa.group(1)) >= 3.5
    has_projects = bool(_EDU_PROJECTS_RE.search(education_text))
    has_honors = bool(_HONORS_RE.search(education_text))
    has_dates = bool(_EDU_DATE_RE.search(education_text))

    suggestions = []
    if job_type == "coop":
        score = (
            (0.30 if coursework else 0)
            + coursework_match * 0.25
            + ((0.15 if gpa_strong else 0.08) if has_gpa else 0)
            + (0.15 if has_projects else 0)
            + (0.10 if has_honors else 0)
            + (0.05 if has_dates else 0)
        )
        if not coursework:
            suggestions.append("Add relevant coursework matching JD requirements")
        if not has_gpa:
            suggestions.append("Add GPA if 3.0+ (critical for co-op applications)")
        if not has_projects:
            suggestions.append("Add capstone project or academic projects")
        if not has_honors and gpa_strong:
            suggestions.append("Add Dean's List or honors if applicable")
    else:
        score = (
            (0.20 if coursework else 0)
            + coursework_match * 0.15
            + (0.15 if gpa_strong else 0)
            + (0.15 if has_projects else 0)
            + (0.10 if has_honors else 0)
            + (0.10 if has_dates else 0)
            + 0.15
        )

    return EducationQualityResult(
        score=round_half_up(min(1.0, score) * 100),
        has_relevant_coursework=coursework is not None,
        coursework_match_score=round(coursework_match, 2),
        has_gpa=has_gpa,
        gpa_strong=gpa_strong,
        has_projects=has_projects,
        has_honors=has_honors,
        has_proper_date_format=has_dates,
        suggestions=suggestions,
    )


# ---------------------------------------------------------------------------
# V2.1: points per section
# ---------------------------------------------------------------------------

def _count_detail(count: int, minimum: int, max_points: int, short_msg: str, absent_msg: str) -> SectionDetail:
    if count >= minimum:
        return SectionDetail(present=True, meets_threshold=True, points=max_points, max_points=max_points)
    if count > 0:
        partial = max_points * count / minimum
        return SectionDetail(
            present=True,
            points=round(partial, 1),
            max_points=max_points,
            issues=[short_msg],
        )
    return SectionDetail(max_points=max_points, issues=[absent_msg])


def calculate_section_score_v21(
    sections: SectionSignals, jd_keywords: list[str], job_type: str = "fulltime"
) -> SectionScoreResultV21:
    config = SECTION_CONFIG_V21.get(job_type, SECTION_CONFIG_V21["fulltime"])
    breakdown: dict[str, SectionDetail] = {}

    # --- Summary: partial credit by character length ---
    cfg = config["summary"]
    summary_len = len(sections.summary.strip())
    if summary_len >= cfg["min_length"]:
        breakdown["summary"] = SectionDetail(
            present=True, meets_threshold=True, points=cfg["max_points"], max_points=cfg["max_points"]
        )
    elif summary_len > 0:
        breakdown["summary"] = SectionDetail(
            present=True,
            points=round(cfg["max_points"] * summary_len / cfg["min_length"], 1),
            max_points=cfg["max_points"],
            issues=[f"Summary too short ({summary_len}/{cfg['min_length']} chars)"],
        )
    elif cfg["required"]:
        breakdown["summary"] = SectionDetail(
            max_points=cfg["max_points"], issues=["No professional summary section"]
        )

    # --- Skills ---
    cfg = config["skills"]
    skill_count = len(sections.skills)
    breakdown["skills"] = _count_detail(
        skill_count,
        cfg["min_items"],
        cfg["max_points"],
        f"Only {skill_count} skills listed (recommend {cfg['min_items']}+)",
        "No skills section",
    )

    # --- Experience: optional for co-op unless present ---
    cfg = config["experience"]
    bullet_count = len(_experience_bullets(sections))
    if cfg["required"] or bullet_count > 0:
        breakdown["experience"] = _count_detail(
            bullet_count,
            cfg["min_bullets"],
            cfg["max_points"],
            f"Only {bullet_count} experience bullets (recommend {cfg['min_bullets']}+)",
            "No experience section",
        )

    # --- Education: presence plus quality ---
    cfg = config["education"]
    education = sections.education.strip()
    education_quality = None
    if len(education) >= cfg["min_length"]:
        education_quality = evaluate_education_quality(education, jd_keywords, job_type)
        points = cfg["max_points"] * (0.4 + education_quality.score / 100 * 0.6)
        breakdown["education"] = SectionDetail(
            present=True,
            meets_threshold=education_quality.score >= 50,
            points=round(points, 1),
            max_points=cfg["max_points"],
            quality_score=education_quality.score,
            issues=education_quality.suggestions,
        )
    elif education:
        breakdown["education"] = SectionDetail(
            present=True,
            points=round(cfg["max_points"] * 0.3, 1),
            max_points=cfg["max_points"],
            issues=["Education section is sparse - add coursework, GPA, or projects"],
        )
    else:
        breakdown["education"] = SectionDetail(
            max_points=cfg["max_points"], issues=["No education section"]
        )

    # --- Projects ---
    cfg = config["projects"]
    project_count = len(sections.projects)
    if cfg["required"] or project_count > 0:
        breakdown["projects"] = _count_detail(
            project_count,
            cfg["min_bullets"],
            cfg["max_points"],
            f"Only {project_count} project entries (recommend {cfg['min_bullets']}+)",
            "No projects section (important for co-op)",
        )

    # --- Certifications: bonus only ---
    cfg = config["certifications"]
    if len(sections.certifications) >= cfg["min_items"]:
        breakdown["certifications"] = SectionDetail(
            present=True, meets_threshold=True, points=cfg["max_points"], max_points=cfg["max_points"]
        )

    possible = sum(d.max_points for d in breakdown.values())
    achieved = sum(d.points for d in breakdown.values())
    score = round_half_up(achieved / possible * 100) if possible else 0

    return SectionScoreResultV21(
        score=max(0, min(100, score)),
        breakdown=breakdown,
        education_quality=education_quality,
    )


def section_action_items_v21(result: SectionScoreResultV21) -> list[ActionItem]:
    items = []
    for detail in result.breakdown.values():
        if detail.issues and not detail.meets_threshold:
            items.append(ActionItem(
                priority="medium" if detail.present else "high",
                category="Sections",
                message=detail.issues[0],
                potential_impact=5 if detail.present else 8,
            ))
    return items
