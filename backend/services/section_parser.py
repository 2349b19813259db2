"""Resume section segmentation, contact detection and qualification extraction."""

import re
from datetime import datetime

# Section header patterns and their canonical names
SECTION_PATTERNS: dict[str, list[str]] = {
    "experience": [
        r"(?:work|professional|employment|relevant)\s*(?:experience|history)",
        r"experience",
        r"career\s*(?:history|path)",
        r"(?:positions?\s*held|roles)",
    ],
    "education": [
        r"education(?:al)?\s*(?:background|qualifications|history)?",
        r"academic\s*(?:background|qualifications)",
    ],
    "skills": [
        r"(?:technical|core|key|professional)?\s*skills",
        r"(?:technical|core)?\s*(?:competencies|proficiencies|expertise)",
        r"technologies",
        r"(?:technical\s+)?(?:stack|toolkit|tooling)",
    ],
    "summary": [
        r"(?:professional|executive|career)?\s*summary",
        r"(?:career|professional)?\s*objective",
        r"profile",
        r"about\s*me",
    ],
    "projects": [
        r"(?:key|notable|selected|personal|academic)?\s*projects",
        r"portfolio",
    ],
    "certifications": [
        r"certific(?:ations?|ates?)",
        r"licen[sc]es?\s*(?:&|and)?\s*certific(?:ations?|ates?)",
    ],
    "achievements": [
        r"(?:key\s+)?achievements?",
        r"(?:awards?|honors?|accomplishments)",
    ],
    "references": [
        r"references",
    ],
}

# Compile all patterns into a single regex per section
_COMPILED: dict[str, re.Pattern] = {}
for section, patterns in SECTION_PATTERNS.items():
    combined = "|".join(patterns)
    _COMPILED[section] = re.compile(
        rf"^\s*(?:{combined})\s*:?\s*$", re.IGNORECASE | re.MULTILINE
    )

OBJECTIVE_HEADER_RE = re.compile(
    r"^\s*(?:career\s+|professional\s+)?objective\s*:?\s*$", re.IGNORECASE | re.MULTILINE
)
REFERENCES_RE = re.compile(r"references\s+(?:available\s+)?(?:up)?on\s+request", re.IGNORECASE)
COMPLEX_FORMATTING_RE = re.compile(r"\t{2,}|\|.*\|.*\|")

# Contact info patterns
EMAIL_RE = re.compile(r"[\w.+-]+@[\w-]+\.[\w.-]+")
PHONE_RE = re.compile(r"\+?\(?\d[\d\s\-().]{6,14}\d")
LINKEDIN_RE = re.compile(r"linkedin\.com/in/[\w-]+", re.IGNORECASE)
GITHUB_RE = re.compile(r"github\.com/[\w-]+", re.IGNORECASE)


def parse_sections(text: str) -> dict[str, str]:
    """Split resume text into named sections.

    Returns a dict mapping section name -> section text content.
    Unmatched text at the top goes into 'header'.
    """
    lines = text.split("\n")
    sections: dict[str, str] = {}
    current_section = "header"
    current_lines: list[str] = []

    for line in lines:
        matched_section = None
        stripped = line.strip()

        # Skip empty lines for header detection, but keep them in content
        if stripped:
            for section_name, pattern in _COMPILED.items():
                if pattern.match(stripped):
                    matched_section = section_name
                    break

        if matched_section:
            if current_lines:
                sections[current_section] = "\n".join(current_lines).strip()
            current_section = matched_section
            current_lines = []
        else:
            current_lines.append(line)

    if current_lines:
        sections[current_section] = "\n".join(current_lines).strip()

    return sections


def find_section_headers(text: str) -> list[str]:
    """Canonical names of the section headers present, in document order."""
    found: list[str] = []
    for line in text.split("\n"):
        stripped = line.strip()
        if not stripped:
            continue
        for section_name, pattern in _COMPILED.items():
            if pattern.match(stripped) and section_name not in found:
                found.append(section_name)
                break
    return found


def has_objective_header(text: str) -> bool:
    return bool(OBJECTIVE_HEADER_RE.search(text))


def extract_contact_info(text: str) -> dict[str, str | None]:
    """Extract contact information from resume text."""
    email_match = EMAIL_RE.search(text)
    phone_match = PHONE_RE.search(text)
    linkedin_match = LINKEDIN_RE.search(text)
    github_match = GITHUB_RE.search(text)

    return {
        "email": email_match.group() if email_match else None,
        "phone": phone_match.group().strip() if phone_match else None,
        "linkedin": linkedin_match.group() if linkedin_match else None,
        "github": github_match.group() if github_match else None,
    }


# ---------------------------------------------------------------------------
# Skills and certifications lists
# ---------------------------------------------------------------------------

_SKILL_SPLIT_RE = re.compile(r"[,•●○◦\n|;]")
_SKILL_GROUP_LABEL_RE = re.compile(
    r"^(?:languages?|frameworks?|tools?|technologies|databases?|platforms?|other)\s*:\s*",
    re.IGNORECASE,
)


def split_skill_items(skills_text: str) -> list[str]:
    """Split a skills section into individual items.

    Handles comma, bullet, pipe and newline separated lists as well as
    grouped lines such as "Languages: Python, Go".
    """
    items: list[str] = []
    for raw in _SKILL_SPLIT_RE.split(skills_text or ""):
        item = _SKILL_GROUP_LABEL_RE.sub("", raw.strip()).strip(" -*")
        if len(item) >= 2:
            items.append(item)
    return items


def split_certifications(certifications_text: str) -> list[str]:
    items = []
    for line in (certifications_text or "").split("\n"):
        cleaned = line.strip().lstrip("•-*▪►").strip()
        if len(cleaned) >= 2:
            items.append(cleaned)
    return items


# ---------------------------------------------------------------------------
# Dates and experience duration
# ---------------------------------------------------------------------------

# "5+ years of experience" or "3 years experience in Python"
EXP_YEARS_RE = re.compile(
    r"(\d+)\+?\s*(?:years?|yrs?)\s*(?:of\s+)?(?:[\w-]+\s+){0,3}?(?:experience|exp\b)",
    re.IGNORECASE,
)

# Date ranges: "Jan 2019 - Present", "2020 - 2023", "March 2018 – Nov 2022"
_MONTHS = (
    r"(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|Jun(?:e)?|"
    r"Jul(?:y)?|Aug(?:ust)?|Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)"
)
DATE_RANGE_RE = re.compile(
    rf"({_MONTHS}\.?\s*\d{{4}}|\d{{4}})"
    r"\s*(?:-|–|—|to)\s*"
    rf"({_MONTHS}\.?\s*\d{{4}}|\d{{4}}|[Pp]resent|[Cc]urrent|[Nn]ow)",
    re.IGNORECASE,
)
# Single parseable dates: "Jan 2020", "03/2021", "2019"
DATE_RE = re.compile(
    rf"\b{_MONTHS}\.?\s+\d{{4}}\b|\b(?:0?[1-9]|1[0-2])/\d{{4}}\b|\b(?:19|20)\d{{2}}\b",
    re.IGNORECASE,
)

_MONTH_MAP = {
    "jan": 1, "january": 1, "feb": 2, "february": 2, "mar": 3, "march": 3,
    "apr": 4, "april": 4, "may": 5, "jun": 6, "june": 6,
    "jul": 7, "july": 7, "aug": 8, "august": 8, "sep": 9, "sept": 9,
    "september": 9, "oct": 10, "october": 10, "nov": 11, "november": 11,
    "dec": 12, "december": 12,
}


def count_dates(text: str) -> int:
    return len(DATE_RE.findall(text))


def _parse_date(date_str: str) -> tuple[int, int]:
    """Parse a date string into (year, month). Returns (year, 1) if month not found."""
    date_str = date_str.strip().rstrip(".")
    if date_str.lower() in ("present", "current", "now"):
        now = datetime.now()
        return now.year, now.month

    parts = date_str.split()
    if len(parts) == 2:
        month_str = parts[0].lower().rstrip(".")
        if month_str in _MONTH_MAP:
            try:
                return int(parts[1]), _MONTH_MAP[month_str]
            except ValueError:
                pass

    try:
        year = int(date_str)
        if 1970 <= year <= 2100:
            return year, 1
    except ValueError:
        pass

    return 0, 0


def extract_experience_years(text: str) -> float:
    """Extract total years of experience from resume text.

    Takes the higher of explicit claims ("5+ years of experience") and
    the sum of all role date ranges.
    """
    explicit_years = 0.0
    for match in EXP_YEARS_RE.finditer(text):
        years = int(match.group(1))
        if years > explicit_years and years < 60:
            explicit_years = float(years)

    total_months = 0
    for match in DATE_RANGE_RE.finditer(text):
        start_year, start_month = _parse_date(match.group(1))
        end_year, end_month = _parse_date(match.group(2))
        if start_year > 0 and end_year > 0:
            months = (end_year - start_year) * 12 + (end_month - start_month)
            if 0 < months < 600:  # Sanity: < 50 years
                total_months += months

    date_years = round(total_months / 12, 1) if total_months > 0 else 0.0
    return max(explicit_years, date_years)


def _is_preferred_clause(text: str, start: int, end: int) -> bool:
    """True when the sentence around a match marks it as nice-to-have."""
    sentence_start = max(text.rfind("\n", 0, start), text.rfind(".", 0, start)) + 1
    sentence_end = text.find("\n", end)
    clause = text[sentence_start: sentence_end if sentence_end != -1 else len(text)].lower()
    heading = text[:start].lower()
    preferred_idx = max(heading.rfind("preferred"), heading.rfind("nice to have"), heading.rfind("bonus"))
    required_idx = max(heading.rfind("requirements"), heading.rfind("required"), heading.rfind("qualifications"))
    return (
        "preferred" in clause
        or "nice to have" in clause
        or "a plus" in clause
        or preferred_idx > required_idx
    )


def extract_required_years(job_description: str) -> tuple[float, bool]:
    """Required years of experience from a JD as (years, is_hard_requirement)."""
    best = 0.0
    required = True
    for match in EXP_YEARS_RE.finditer(job_description):
        years = float(match.group(1))
        if years > best:
            best = years
            required = not _is_preferred_clause(job_description, match.start(), match.end())
    return best, required


# ---------------------------------------------------------------------------
# Education level detection
# ---------------------------------------------------------------------------

DEGREE_PATTERNS: dict[str, list[str]] = {
    "phd": [
        r"ph\.?d", r"doctorate", r"doctoral", r"doctor of philosophy",
    ],
    "master": [
        r"m\.s\.?", r"m\.?sc\.?", r"m\.?tech", r"mba", r"m\.eng",
        r"(?<!scrum )master(?:'?s)?",
    ],
    "bachelor": [
        r"b\.s\.?", r"b\.?sc\.?", r"b\.?tech", r"b\.a\.?", r"bachelor(?:'?s)?", r"b\.?eng",
    ],
    "associate": [
        r"a\.s\.", r"a\.a\.", r"associate(?:'?s)?\s+(?:degree|of)",
    ],
    "high_school": [
        r"high\s+school", r"secondary\s+school", r"ged",
    ],
}

_DEGREE_COMPILED: dict[str, re.Pattern] = {}
for _level, _patterns in DEGREE_PATTERNS.items():
    _combined = "|".join(_patterns)
    _DEGREE_COMPILED[_level] = re.compile(
        rf"(?<![\w.])(?:{_combined})(?![\w])", re.IGNORECASE
    )

# Order matters: check highest first
_DEGREE_PRIORITY = ["phd", "master", "bachelor", "associate", "high_school"]

_FIELD_IN_RE = re.compile(r"\bin\s+([A-Za-z][A-Za-z &/]*)", re.IGNORECASE)
_FIELD_AFTER_DEGREE_RE = re.compile(r"^[\s,]*(?:of\s+|in\s+)?([A-Za-z][A-Za-z &/]*)")


def extract_education_level(text: str) -> str:
    """Detect the highest education level mentioned in text.

    Returns one of: 'phd', 'master', 'bachelor', 'associate', 'high_school',
    or '' if none found.
    """
    for level in _DEGREE_PRIORITY:
        if _DEGREE_COMPILED[level].search(text):
            return level
    return ""


def extract_degree_field(text: str) -> str:
    """Field of study on the highest degree line ('' when absent).

    "Bachelor of Science in Computer Science" and "B.S. Computer Science |
    State University" both yield "Computer Science".
    """
    level = extract_education_level(text)
    if not level:
        return ""
    for line in text.split("\n"):
        degree = _DEGREE_COMPILED[level].search(line)
        if not degree:
            continue
        match = _FIELD_IN_RE.search(line, degree.end()) or _FIELD_AFTER_DEGREE_RE.search(
            line[degree.end():]
        )
        if match:
            return match.group(1).strip()
    return ""


_JD_DEGREE_RE = re.compile(
    r"[^\n.]*(?:degree|bachelor|master|ph\.?d|doctorate|b\.s\.|m\.s\.)[^\n.]*",
    re.IGNORECASE,
)


def extract_degree_requirement(job_description: str) -> dict | None:
    """Degree requirement stated in a JD: level, fields of study and hardness."""
    for match in _JD_DEGREE_RE.finditer(job_description):
        line = match.group()
        level = extract_education_level(line)
        if not level and re.search(r"\bdegree\b", line, re.IGNORECASE):
            level = "bachelor"
        if not level:
            continue
        fields = [f.strip() for f in re.split(r",|\bor\b|/", _field_text(line)) if f.strip()]
        if re.search(r"related\s+field", line, re.IGNORECASE):
            fields.append("related field")
        return {
            "level": level,
            "fields_of_study": fields,
            "required": not _is_preferred_clause(job_description, match.start(), match.end()),
        }
    return None


def _field_text(line: str) -> str:
    match = re.search(r"\bin\s+(.+)", line, re.IGNORECASE)
    if not match:
        return ""
    return re.sub(r"\brelated\s+field\b|\bequivalent\b.*$", "", match.group(1), flags=re.IGNORECASE)


# ---------------------------------------------------------------------------
# Certifications named in a JD
# ---------------------------------------------------------------------------

_JD_CERTIFICATION_RE = re.compile(
    r"\b(AWS\s+Certified[\w\s-]*?(?=[,.;)\n]|$)|PMP|CISSP|CISA|CISM|CPA|CFA|"
    r"Security\+|CCNA|CCNP|CKA|CKAD|Scrum\s+Master|CSM|PMI-ACP|ITIL|"
    r"Google\s+Cloud\s+Certified[\w\s-]*?(?=[,.;)\n]|$)|Azure\s+[\w-]+\s+Certified|"
    r"Certified\s+[A-Z][\w\s-]*?(?=[,.;)\n]|$))",
)


def extract_certification_requirements(job_description: str) -> list[str]:
    found: list[str] = []
    for match in _JD_CERTIFICATION_RE.finditer(job_description):
        cert = match.group(1).strip()
        if cert and cert not in found:
            found.append(cert)
    return found
