from models.schemas.scores import (
    DegreeRequirement,
    ExperienceRequirement,
    FormatSignals,
    QualificationSignals,
    ResumeDegree,
    SectionSignals,
)
from services.scoring.content_quality import (
    best_quantification_tier,
    calculate_content_quality,
    calculate_experience_quality,
    classify_action_verb,
    content_quality_action_items,
)
from services.scoring.format_score import (
    calculate_format_score,
    calculate_format_score_v21,
    format_action_items,
    format_action_items_v21,
)
from services.scoring.qualification_fit import (
    calculate_qualification_fit,
    check_field_match,
    qualification_action_items,
)
from services.scoring.rounding import round_half_up
from services.scoring.section_score import (
    calculate_section_score,
    calculate_section_score_v21,
    evaluate_education_quality,
    section_action_items,
)

MIXED_BULLETS = [
    "Led migration of 12 services to Kubernetes, cutting deploy time by 60%",
    "Helped with on-call rotation",
]

FULL_FORMAT = FormatSignals(
    has_email=True,
    has_phone=True,
    has_linkedin=True,
    has_github=True,
    date_count=4,
    header_count=4,
    bullet_count=8,
    word_count=400,
    has_experience=True,
    has_summary=True,
)


# ---------------------------------------------------------------------------
# Content quality
# ---------------------------------------------------------------------------

def test_quantification_tiers():
    assert best_quantification_tier("Saved $2M in annual spend") == "high"
    assert best_quantification_tier("Made checkout 3x faster") == "medium"
    assert best_quantification_tier("Grew revenue by 25%") == "low"
    assert best_quantification_tier("Improved onboarding docs") is None


def test_classify_action_verb():
    assert classify_action_verb("Architected the event pipeline") == "strong"
    assert classify_action_verb("Collaborated with design") == "moderate"
    assert classify_action_verb("Was responsible for deployments") == "weak"
    assert classify_action_verb("Helped the team") == "weak"
    assert classify_action_verb("Xyzzy plugh") == "unknown"
    assert classify_action_verb("") == "unknown"


def test_content_quality_fulltime():
    result = calculate_content_quality(MIXED_BULLETS, ["Kubernetes", "Kafka"])
    assert result.quantification_score == 58
    assert result.action_verb_score == 40
    assert result.keyword_density_score == 100
    assert result.score == 67
    assert result.medium_tier_metrics == 1
    assert result.keywords_found == ["Kubernetes"]
    assert result.keywords_missing == ["Kafka"]


def test_content_quality_coop_is_lenient_on_verbs():
    result = calculate_content_quality(MIXED_BULLETS, ["Kubernetes", "Kafka"], job_type="coop")
    assert result.action_verb_score == 45
    assert result.score == 69


def test_content_quality_no_bullets():
    result = calculate_content_quality([], ["Python"])
    assert result.score == 0
    assert result.keywords_missing == ["Python"]
    items = content_quality_action_items(result)
    assert [i.message for i in items] == ["Use bullet points to describe your experience and projects"]


def test_content_quality_action_items_flag_weak_content():
    result = calculate_content_quality(["Helped with support tickets", "Worked on reports"], ["SQL"])
    messages = [i.message for i in content_quality_action_items(result)]
    assert "Add metrics to bullets (only 0/2 have quantification)" in messages
    assert any(m.startswith("Replace weak verbs") for m in messages)
    assert "Incorporate more JD keywords into your experience bullets" in messages


def test_experience_quality_strong_bullets():
    bullets = ["Built Python APIs on AWS serving 500 users", "Reduced AWS costs by 30% using Python"]
    result = calculate_experience_quality(bullets, ["Python", "AWS"])
    assert result.score == 100
    assert result.strong_verb_count == 2
    assert result.bullets_with_metrics == 2


def test_experience_quality_empty():
    assert calculate_experience_quality([], ["Python"]).score == 0


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------

def test_section_score_complete():
    signals = SectionSignals(
        summary=" ".join(["word"] * 30),
        skills=[f"skill{i}" for i in range(6)],
        experience_bullets=[f"Built system number {i} end to end" for i in range(8)],
    )
    assert calculate_section_score(signals).score == 100
    assert section_action_items(calculate_section_score(signals)) == []


def test_section_score_partial():
    signals = SectionSignals(summary=" ".join(["word"] * 15), skills=["Python", "Go", "SQL"])
    result = calculate_section_score(signals)
    assert (result.summary_score, result.skills_score, result.experience_score) == (50, 50, 0)
    assert result.score == 33
    assert [i.message for i in section_action_items(result)] == [
        "Expand your summary by 15 more words",
        "Add 3 more skills to your skills section",
        "Add bullet points to your experience section",
    ]


def test_section_score_v21_fulltime():
    signals = SectionSignals(
        summary="Backend engineer with six years of Python and distributed systems work.",
        skills=[f"skill{i}" for i in range(8)],
        experience_bullets=[f"Built system number {i} end to end" for i in range(6)],
    )
    result = calculate_section_score_v21(signals, ["Python"])
    assert set(result.breakdown) == {"summary", "skills", "experience", "education"}
    assert result.breakdown["education"].issues == ["No education section"]
    # 70 of 85 points
    assert result.score == 82


def test_section_score_v21_coop_skips_optional_summary():
    signals = SectionSignals(skills=[f"skill{i}" for i in range(8)])
    result = calculate_section_score_v21(signals, [], job_type="coop")
    assert "summary" not in result.breakdown
    assert "experience" not in result.breakdown
    assert result.breakdown["projects"].issues == ["No projects section (important for co-op)"]
    assert result.score == 36


def test_education_quality_fulltime():
    education = "Bachelor of Science in Computer Science\nState University, 2018\nGPA: 3.7"
    result = evaluate_education_quality(education, ["Python"])
    assert result.gpa_strong
    assert result.has_proper_date_format
    assert not result.has_relevant_coursework
    assert result.score == 40


def test_education_quality_coop_full_marks():
    education = (
        "Relevant Coursework: Data Structures, Databases, Python\n"
        "GPA: 3.8\n"
        "Capstone project: scheduling app\n"
        "Dean's List, May 2025"
    )
    result = evaluate_education_quality(education, ["Python", "Databases"], job_type="coop")
    assert result.score == 100
    assert result.coursework_match_score == 1.0
    assert result.suggestions == []


def test_education_quality_empty():
    result = evaluate_education_quality("", ["Python"])
    assert result.score == 0
    assert result.suggestions == ["Add education section"]


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------

def test_format_score_v1():
    assert calculate_format_score(FULL_FORMAT).score == 100

    email_only = calculate_format_score(FormatSignals(has_email=True))
    assert email_only.contact_score == 60
    assert email_only.structure_score == 0
    assert email_only.score == 30
    assert len(format_action_items(email_only)) == 4


def test_format_score_v21_clean():
    result = calculate_format_score_v21(FULL_FORMAT)
    assert result.score == 100
    assert result.issues == []
    assert result.warnings == []


def test_format_score_v21_sparse():
    result = calculate_format_score_v21(FormatSignals())
    assert result.score == 65
    assert result.issues == ["No email address detected", "Resume too sparse (0 words, recommend 300+)"]
    assert result.warnings == ["No phone number detected", "Only 0 standard section headers detected"]

    items = format_action_items_v21(result)
    assert [i.priority for i in items] == ["high", "high", "low", "low"]


def test_format_score_v21_outdated_conventions():
    signals = FULL_FORMAT.model_copy(update={"has_summary": False, "has_objective": True, "has_references": True})
    result = calculate_format_score_v21(signals)
    assert '"Objective" section is outdated - use "Professional Summary" instead' in result.issues
    assert '"References available upon request" is outdated - remove this line' in result.warnings
    assert result.score == 90


# ---------------------------------------------------------------------------
# Qualification fit
# ---------------------------------------------------------------------------

REQUIREMENTS = dict(
    degree_required=DegreeRequirement(level="bachelor", fields_of_study=["Computer Science", "related field"]),
    experience_required=ExperienceRequirement(min_years=5),
    certifications_required=["AWS Certified Solutions Architect"],
)


def test_check_field_match():
    assert check_field_match("Computer Science", ["Computer Science"]) == "exact"
    assert check_field_match("Mathematics", ["Computer Science", "related field"]) == "related"
    assert check_field_match("Computer Engineering", ["Computer Science", "related field"]) == "related"
    assert check_field_match("History", ["Computer Science", "related field"]) == "none"
    assert check_field_match("", ["Computer Science"]) == "none"


def test_qualification_fit_all_met():
    signals = QualificationSignals(
        **REQUIREMENTS,
        degree=ResumeDegree(level="bachelor", field="Computer Science"),
        total_experience_years=6,
        certifications=["AWS Certified Solutions Architect"],
    )
    result = calculate_qualification_fit(signals)
    assert result.score == 100
    assert result.experience_note == "6 years meets 5+ requirement"
    assert qualification_action_items(result) == []


def test_qualification_fit_gaps():
    signals = QualificationSignals(**REQUIREMENTS, total_experience_years=4)
    result = calculate_qualification_fit(signals)
    assert result.degree_score == 20
    assert result.degree_note == "No degree listed"
    assert result.experience_score == 75
    assert result.certification_score == 0
    assert result.score == 38
    assert [i.message for i in qualification_action_items(result)] == [
        "4 years slightly below 5+ requirement",
        "No degree listed",
        "Missing certifications: AWS Certified Solutions Architect",
    ]


def test_qualification_fit_degree_level_met_without_fields():
    signals = QualificationSignals(
        degree_required=DegreeRequirement(level="bachelor"),
        degree=ResumeDegree(level="master", field="History"),
    )
    result = calculate_qualification_fit(signals)
    assert result.degree_score == 100
    assert result.score == 100


def test_qualification_fit_preferred_degree_is_softer():
    signals = QualificationSignals(
        degree_required=DegreeRequirement(level="master", required=False),
        degree=ResumeDegree(level="bachelor"),
    )
    assert calculate_qualification_fit(signals).degree_score == 75


# ---------------------------------------------------------------------------
# Rounding
# ---------------------------------------------------------------------------

def test_round_half_up():
    assert round_half_up(12.5) == 13
    assert round_half_up(66.5) == 67
    assert round_half_up(2.5) == 3
    assert round_half_up(0.49) == 0
    assert round_half_up(82.35) == 82


def test_section_ratio_rounds_half_up():
    # 5 of 8 bullets is 62.5
    signals = SectionSignals(
        summary=" ".join(["word"] * 30),
        skills=["Python", "Go", "SQL"],
        experience_bullets=[f"Built system number {i} end to end" for i in range(5)],
    )
    result = calculate_section_score(signals)
    assert (result.summary_score, result.skills_score, result.experience_score) == (100, 50, 63)
    assert result.score == 71
