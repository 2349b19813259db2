"""Build scoring signals from raw resume and job description text.

This is the only scoring module that reads the wall clock (date ranges
ending in "Present").
"""

import logging
import re

from models.schemas.keywords import KeywordAnalysisResult
from models.schemas.scores import (
    ContentQualitySignals,
    DegreeRequirement,
    ExperienceRequirement,
    FormatSignals,
    QualificationSignals,
    ResumeDegree,
    RoleContext,
    ScoringSignals,
    SectionSignals,
)
from services.bullet_extractor import count_bullet_lines, extract_bullets, extract_experience_bullets
from services.section_parser import (
    COMPLEX_FORMATTING_RE,
    REFERENCES_RE,
    count_dates,
    extract_certification_requirements,
    extract_contact_info,
    extract_degree_field,
    extract_degree_requirement,
    extract_education_level,
    extract_experience_years,
    extract_required_years,
    find_section_headers,
    has_objective_header,
    parse_sections,
    split_certifications,
    split_skill_items,
)

logger = logging.getLogger(__name__)

_STANDARD_HEADERS = ("experience", "education", "skills", "summary")

_SUMMARY_HEADER_RE = re.compile(
    r"^\s*(?:(?:professional|executive|career)\s+)?(?:summary|profile)\s*:?\s*$|^\s*about\s+me\s*:?\s*$",
    re.IGNORECASE | re.MULTILINE,
)

# ---------------------------------------------------------------------------
# Role detection
# ---------------------------------------------------------------------------

JOB_ROLE_PATTERNS: dict[str, re.Pattern] = {
    "software_engineer": re.compile(
        r"software\s+(?:engineer|developer)|full[\s-]?stack|front[\s-]?end|back[\s-]?end|"
        r"devops|\bsre\b|platform\s+engineer|programmer",
        re.IGNORECASE,
    ),
    "data_scientist": re.compile(
        r"data\s+scien|machine\s+learning|\bml\s+engineer|data\s+analyst|ai\s+engineer|deep\s+learning",
        re.IGNORECASE,
    ),
    "product_manager": re.compile(r"product\s+(?:manager|owner|lead)|program\s+manager", re.IGNORECASE),
    "designer": re.compile(r"\b(?:ux|ui)\b|designer|user\s+experience|visual\s+design", re.IGNORECASE),
    "marketing": re.compile(r"marketing|\bseo\b|brand\s+manager|growth\s+manager", re.IGNORECASE),
    "sales": re.compile(r"\bsales\b|account\s+executive|business\s+development|\b[bs]dr\b", re.IGNORECASE),
}

SENIORITY_PATTERNS: list[tuple[str, re.Pattern]] = [
    ("executive", re.compile(r"\b(?:director|vp|vice\s+president|head\s+of|chief|principal|c[te]o)\b", re.IGNORECASE)),
    ("lead", re.compile(r"\b(?:lead|staff|team\s+lead|tech\s+lead)\b", re.IGNORECASE)),
    ("senior", re.compile(r"\b(?:senior|sr\.?)\b", re.IGNORECASE)),
    ("entry", re.compile(r"\b(?:junior|jr\.?|entry[\s-]level|new\s+grad|graduate|intern(?:ship)?|co-?op)\b", re.IGNORECASE)),
]


def detect_job_role(job_description: str) -> str:
    """Role family with the most pattern hits in the JD, 'general' if none."""
    best, best_hits = "general", 0
    for role, pattern in JOB_ROLE_PATTERNS.items():
        hits = len(pattern.findall(job_description))
        if hits > best_hits:
            best, best_hits = role, hits
    return best


def detect_seniority(job_description: str) -> str:
    """Seniority from the JD title line, then the body, then years required."""
    lines = [line.strip() for line in job_description.split("\n") if line.strip()]
    title = lines[0] if lines else ""
    for in_title, text in ((True, title), (False, job_description)):
        for level, pattern in SENIORITY_PATTERNS:
            # "lead" is a common verb in JD bodies; trust it only in the title
            if level == "lead" and not in_title:
                continue
            if pattern.search(text):
                return level

    years, _ = extract_required_years(job_description)
    if years >= 8:
        return "senior"
    if 0 < years <= 2:
        return "entry"
    return "mid"


def detect_role_context(job_description: str, candidate_type: str = "fulltime") -> RoleContext:
    # co-op and career changers are scored by candidate type, not JD seniority
    if candidate_type in ("coop", "career_changer"):
        seniority = "mid"
    else:
        seniority = detect_seniority(job_description)
    return RoleContext(
        candidate_type=candidate_type,
        seniority=seniority,
        job_role=detect_job_role(job_description),
    )


# ---------------------------------------------------------------------------
# Signal builders
# ---------------------------------------------------------------------------

def _entries(section_text: str) -> list[str]:
    """Bullets of a section, or its non-empty lines when it has none."""
    bullets = extract_bullets(section_text)
    if bullets:
        return bullets
    return [line.strip() for line in section_text.split("\n") if len(line.strip()) > 3]


def build_section_signals(sections: dict[str, str]) -> SectionSignals:
    experience = sections.get("experience", "")
    return SectionSignals(
        summary=sections.get("summary", ""),
        skills=split_skill_items(sections.get("skills", "")),
        experience_text=experience,
        experience_bullets=extract_experience_bullets(experience),
        education=sections.get("education", ""),
        projects=_entries(sections.get("projects", "")),
        certifications=split_certifications(sections.get("certifications", "")),
    )


def build_format_signals(resume_text: str, sections: dict[str, str]) -> FormatSignals:
    contact = extract_contact_info(resume_text)
    headers = find_section_headers(resume_text)
    return FormatSignals(
        has_email=contact["email"] is not None,
        has_phone=contact["phone"] is not None,
        has_linkedin=contact["linkedin"] is not None,
        has_github=contact["github"] is not None,
        date_count=count_dates(resume_text),
        header_count=sum(1 for h in headers if h in _STANDARD_HEADERS),
        bullet_count=count_bullet_lines(resume_text),
        word_count=len(resume_text.split()),
        has_experience=bool(sections.get("experience", "").strip()),
        has_summary=bool(_SUMMARY_HEADER_RE.search(resume_text)),
        has_objective=has_objective_header(resume_text),
        has_references=bool(REFERENCES_RE.search(resume_text)) or "references" in headers,
        has_complex_formatting=bool(COMPLEX_FORMATTING_RE.search(resume_text)),
    )


def build_content_quality_signals(section_signals: SectionSignals, job_type: str) -> ContentQualitySignals:
    experience = list(section_signals.experience_bullets)
    projects = list(section_signals.projects)
    education = extract_bullets(section_signals.education)
    return ContentQualitySignals(
        bullets=experience + projects + education,
        bullet_sources={
            "experience": len(experience),
            "projects": len(projects),
            "education": len(education),
        },
        job_type=job_type,
    )


def build_qualification_signals(
    resume_text: str, job_description: str, sections: dict[str, str], certifications: list[str]
) -> QualificationSignals:
    degree_required = extract_degree_requirement(job_description)
    years_required, years_hard = extract_required_years(job_description)

    education = sections.get("education") or resume_text
    level = extract_education_level(education)
    degree = ResumeDegree(level=level, field=extract_degree_field(education)) if level else None

    return QualificationSignals(
        degree_required=DegreeRequirement(**degree_required) if degree_required else None,
        experience_required=(
            ExperienceRequirement(min_years=years_required, required=years_hard)
            if years_required > 0
            else None
        ),
        certifications_required=extract_certification_requirements(job_description),
        degree=degree,
        total_experience_years=extract_experience_years(sections.get("experience") or resume_text),
        certifications=certifications,
    )


def extract_signals(
    resume_text: str,
    job_description: str,
    keyword_analysis: KeywordAnalysisResult | None = None,
    job_type: str = "fulltime",
) -> ScoringSignals:
    """Derive every signal the score calculator consumes."""
    sections = parse_sections(resume_text or "")
    section_signals = build_section_signals(sections)

    if keyword_analysis is not None and keyword_analysis.total == 0:
        logger.warning("Scoring with an empty keyword list; keyword component will be 0")

    signals = ScoringSignals(
        sections=section_signals,
        format=build_format_signals(resume_text or "", sections),
        content_quality=build_content_quality_signals(section_signals, job_type),
        qualification=build_qualification_signals(
            resume_text or "", job_description or "", sections, section_signals.certifications
        ),
        role=detect_role_context(job_description or "", job_type),
    )
    logger.debug(
        "Signals: %d sections, %d bullets, role=%s/%s",
        len(sections),
        len(signals.content_quality.bullets),
        signals.role.job_role,
        signals.role.seniority,
    )
    return signals
