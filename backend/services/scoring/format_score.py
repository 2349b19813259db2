"""ATS parseability of the resume layout, computed from FormatSignals."""

from models.schemas.scores import ActionItem, FormatScoreResult, FormatScoreResultV21, FormatSignals
from services.scoring.constants import FORMAT_ADJUSTMENTS, MAX_WORD_COUNT, MIN_WORD_COUNT
from services.scoring.rounding import round_half_up


def calculate_format_score(signals: FormatSignals) -> FormatScoreResult:
    """V1/V2: contact completeness averaged with structure."""
    contact = (60 if signals.has_email else 0) + (40 if signals.has_phone else 0)

    has_dates = signals.date_count >= 2
    has_headers = signals.header_count >= 2
    has_bullets = signals.bullet_count >= 4
    structure = (30 if has_dates else 0) + (35 if has_headers else 0) + (35 if has_bullets else 0)

    return FormatScoreResult(
        score=round_half_up((contact + structure) / 2),
        contact_score=contact,
        structure_score=structure,
        has_email=signals.has_email,
        has_phone=signals.has_phone,
        has_dates=has_dates,
        has_section_headers=has_headers,
        has_bullet_structure=has_bullets,
    )


def format_action_items(result: FormatScoreResult) -> list[ActionItem]:
    checks = [
        (result.has_email, "high", "Add a professional email address to your contact information"),
        (result.has_phone, "medium", "Add a phone number to your contact information"),
        (result.has_dates, "medium", 'Add dates to your work experience (e.g., "Jan 2020 - Present")'),
        (result.has_section_headers, "medium", "Add clear section headers (Summary, Skills, Experience, Education)"),
        (result.has_bullet_structure, "low", "Use bullet points to organize your experience and achievements"),
    ]
    return [
        ActionItem(priority=priority, category="Format", message=message, potential_impact=3)
        for ok, priority, message in checks
        if not ok
    ]


def calculate_format_score_v21(signals: FormatSignals) -> FormatScoreResultV21:
    """V2.1: start from 1.0 and apply the fixed adjustment table."""
    score = 1.0
    issues: list[str] = []
    warnings: list[str] = []

    if not signals.has_email:
        score += FORMAT_ADJUSTMENTS["no_email"]
        issues.append("No email address detected")
    if not signals.has_phone:
        score += FORMAT_ADJUSTMENTS["no_phone"]
        warnings.append("No phone number detected")
    if signals.has_linkedin:
        score += FORMAT_ADJUSTMENTS["linkedin"]
    if signals.has_github:
        score += FORMAT_ADJUSTMENTS["github"]

    if signals.date_count < 2 and signals.has_experience:
        score += FORMAT_ADJUSTMENTS["few_dates"]
        issues.append("Few or no parseable date formats found")

    if signals.header_count < 3:
        score += FORMAT_ADJUSTMENTS["few_headers"]
        warnings.append(f"Only {signals.header_count} standard section headers detected")

    if signals.bullet_count == 0 and signals.has_experience:
        score += FORMAT_ADJUSTMENTS["no_bullets"]
        warnings.append("No clear bullet point structure detected")

    if signals.word_count < MIN_WORD_COUNT:
        score += FORMAT_ADJUSTMENTS["too_short"]
        issues.append(f"Resume too sparse ({signals.word_count} words, recommend 300+)")
    elif signals.word_count > MAX_WORD_COUNT:
        score += FORMAT_ADJUSTMENTS["too_long"]
        warnings.append(f"Resume may be too long ({signals.word_count} words, recommend under 800)")

    if signals.has_objective and not signals.has_summary:
        score += FORMAT_ADJUSTMENTS["objective"]
        issues.append('"Objective" section is outdated - use "Professional Summary" instead')
    if signals.has_references:
        score += FORMAT_ADJUSTMENTS["references"]
        warnings.append('"References available upon request" is outdated - remove this line')
    if signals.has_complex_formatting:
        score += FORMAT_ADJUSTMENTS["complex_formatting"]
        warnings.append("Complex formatting detected (tables/columns may cause parsing issues)")

    return FormatScoreResultV21(
        score=round_half_up(max(0.0, min(1.0, score)) * 100),
        issues=issues,
        warnings=warnings,
    )


def format_action_items_v21(result: FormatScoreResultV21) -> list[ActionItem]:
    items = [
        ActionItem(priority="high", category="Format", message=issue, potential_impact=5)
        for issue in result.issues
    ]
    items.extend(
        ActionItem(priority="low", category="Format", message=warning, potential_impact=2)
        for warning in result.warnings
    )
    return items
