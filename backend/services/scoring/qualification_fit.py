"""How well the resume's degree, experience and certifications meet the JD's."""

from models.schemas.scores import ActionItem, QualificationFitResult, QualificationSignals
from services.scoring.constants import DEGREE_FIELD_MATCHES, DEGREE_LEVELS, QUALIFICATION_WEIGHTS
from services.scoring.rounding import round_half_up


def _mentions(text: str, alias: str) -> bool:
    # short aliases ("cs", "it") only count as whole words
    if len(alias) <= 3:
        return alias in text.replace(",", " ").replace("/", " ").split()
    return alias in text


def check_field_match(resume_field: str, required_fields: list[str]) -> str:
    """Return 'exact', 'related' or 'none'."""
    if not resume_field or not required_fields:
        return "none"

    field = resume_field.lower()
    required = [r.lower() for r in required_fields]

    for category, aliases in DEGREE_FIELD_MATCHES.items():
        if not any(_mentions(field, a) for a in aliases):
            continue
        # "related" is a bucket name, not a field a JD would list
        names = list(aliases) if category == "related" else [category.replace("_", " "), *aliases]
        if any(_mentions(r, name) for r in required for name in names):
            return "exact"

    if any("related" in r for r in required):
        for aliases in DEGREE_FIELD_MATCHES.values():
            if any(_mentions(field, a) for a in aliases):
                return "related"
    return "none"


def _degree_fit(signals: QualificationSignals) -> tuple[int, bool, str | None]:
    requirement = signals.degree_required
    if requirement is None:
        return 100, True, None

    required_level = DEGREE_LEVELS[requirement.level]
    has_level = DEGREE_LEVELS[signals.degree.level] if signals.degree else 0

    if has_level >= required_level:
        match = check_field_match(signals.degree.field, requirement.fields_of_study)
        if match == "exact" or not requirement.fields_of_study:
            return 100, True, "Degree fully matches requirements"
        if match == "related":
            return 85, True, "Degree in related field"
        return 70, True, "Degree level met but field differs"
    if has_level == required_level - 1:
        return (50 if requirement.required else 75), False, "Degree level below requirement"

    note = "Degree level significantly below requirement" if signals.degree else "No degree listed"
    return (20 if requirement.required else 50), False, note


def _experience_fit(signals: QualificationSignals) -> tuple[int, bool, str | None]:
    requirement = signals.experience_required
    if requirement is None:
        return 100, True, None

    needed = requirement.min_years
    has = signals.total_experience_years
    if has >= needed:
        return 100, True, f"{has:g} years meets {needed:g}+ requirement"
    if has >= needed * 0.75:
        return 75, False, f"{has:g} years slightly below {needed:g}+ requirement"
    if has >= needed * 0.5:
        return (40 if requirement.required else 60), False, f"{has:g} years below {needed:g}+ requirement"
    return (15 if requirement.required else 40), False, f"{has:g} years significantly below {needed:g}+ requirement"


def calculate_qualification_fit(signals: QualificationSignals) -> QualificationFitResult:
    degree_score, degree_met, degree_note = _degree_fit(signals)
    experience_score, experience_met, experience_note = _experience_fit(signals)

    met: list[str] = []
    missing: list[str] = []
    held = [c.lower() for c in signals.certifications]
    for cert in signals.certifications_required:
        wanted = cert.lower()
        if any(wanted in c or c in wanted for c in held):
            met.append(cert)
        else:
            missing.append(cert)
    required_count = len(signals.certifications_required)
    certification_score = round_half_up(len(met) / required_count * 100) if required_count else 100

    score = round_half_up(
        degree_score * QUALIFICATION_WEIGHTS["degree"]
        + experience_score * QUALIFICATION_WEIGHTS["experience"]
        + certification_score * QUALIFICATION_WEIGHTS["certifications"]
    )
    return QualificationFitResult(
        score=score,
        degree_score=degree_score,
        experience_score=experience_score,
        certification_score=certification_score,
        degree_met=degree_met,
        degree_note=degree_note,
        experience_met=experience_met,
        experience_note=experience_note,
        certifications_met=met,
        certifications_missing=missing,
    )


def qualification_action_items(result: QualificationFitResult) -> list[ActionItem]:
    items = []
    if not result.experience_met and result.experience_note:
        items.append(ActionItem(
            priority="high", category="Qualifications", message=result.experience_note, potential_impact=8
        ))
    if not result.degree_met and result.degree_note:
        items.append(ActionItem(
            priority="high", category="Qualifications", message=result.degree_note, potential_impact=8
        ))
    if result.certifications_missing:
        items.append(ActionItem(
            priority="medium",
            category="Qualifications",
            message=f"Missing certifications: {', '.join(result.certifications_missing[:2])}",
            potential_impact=5,
        ))
    return items
