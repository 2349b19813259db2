from services.scoring.signals import (
    detect_job_role,
    detect_role_context,
    detect_seniority,
    extract_signals,
)


def test_detect_seniority_from_title(sample_jd):
    assert detect_seniority(sample_jd) == "senior"
    assert detect_seniority("Staff Engineer\nWe build payments infrastructure") == "lead"
    assert detect_seniority("VP of Engineering\nOwn the org") == "executive"
    assert detect_seniority("Software Engineer Intern\nSummer 2026") == "entry"


def test_lead_in_body_is_not_seniority():
    assert detect_seniority("Backend Engineer\nYou will lead design reviews") == "mid"


def test_detect_seniority_from_years():
    assert detect_seniority("Backend Engineer\nRequirements: 10+ years of experience") == "senior"
    assert detect_seniority("Backend Engineer\n1+ years of experience with Python") == "entry"
    assert detect_seniority("Backend Engineer") == "mid"


def test_detect_job_role():
    assert detect_job_role("Full-stack software engineer working on front-end and back-end") == "software_engineer"
    assert detect_job_role("Data scientist with machine learning background") == "data_scientist"
    assert detect_job_role("Barista") == "general"


def test_role_context_candidate_type_overrides_seniority(sample_jd):
    context = detect_role_context(sample_jd, "coop")
    assert context.candidate_type == "coop"
    assert context.seniority == "mid"
    assert detect_role_context(sample_jd).seniority == "senior"


def test_extract_signals_sample(sample_resume, sample_jd):
    signals = extract_signals(sample_resume, sample_jd)

    assert len(signals.sections.skills) == 10
    assert len(signals.sections.experience_bullets) == 8
    assert signals.sections.certifications == ["AWS Certified Solutions Architect"]

    fmt = signals.format
    assert fmt.has_email and fmt.has_phone and fmt.has_linkedin and fmt.has_github
    assert fmt.header_count == 4
    assert fmt.bullet_count == 8
    assert fmt.has_experience
    assert fmt.has_summary
    assert not fmt.has_objective

    assert signals.content_quality.bullet_sources == {"experience": 8, "projects": 0, "education": 0}

    qualification = signals.qualification
    assert qualification.degree.level == "bachelor"
    assert qualification.degree.field == "Computer Science"
    assert qualification.degree_required.level == "bachelor"
    assert qualification.experience_required.min_years == 5
    assert qualification.total_experience_years >= 5
    assert qualification.certifications_required == ["AWS Certified Solutions Architect"]

    assert signals.role.seniority == "senior"


def test_extract_signals_empty_resume(sample_jd):
    signals = extract_signals("", sample_jd)
    assert signals.sections.is_empty()
    assert signals.content_quality.bullets == []
    assert signals.qualification.degree is None
    assert signals.format.word_count == 0
