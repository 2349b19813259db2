from models.schemas.preferences import DEFAULT_PREFERENCES, UserContext
from services.prompt_builder import (
    MAX_SECTION_LENGTH,
    build_experience_prompt,
    build_skills_prompt,
    build_summary_prompt,
)

JD = "Senior Python Engineer. Requirements: FastAPI, PostgreSQL, Kubernetes."


def test_summary_prompt_wraps_user_content():
    prompt = build_summary_prompt("Backend engineer with 6 years of Python.", JD)
    assert "<user_content>\nBackend engineer with 6 years of Python.\n</user_content>" in prompt
    assert f"<job_description>\n{JD}\n</job_description>" in prompt
    assert '"suggested"' in prompt
    assert "User Preferences" not in prompt
    assert "**Candidate Guidance (fulltime):**" in prompt


def test_summary_prompt_includes_preferences_keywords_and_ats_context():
    prompt = build_summary_prompt(
        "Backend engineer",
        JD,
        keywords=["FastAPI", "Kubernetes"],
        preferences=DEFAULT_PREFERENCES.model_copy(update={"modification_level": "aggressive"}),
        user_context=UserContext(career_goal="promotion"),
        ats_context="Current ATS score: 62 (moderate)",
    )
    assert "**User Preferences:**" in prompt
    assert "60-75%" in prompt
    assert "**Career Goal:**" in prompt
    assert "<extracted_keywords>\nFastAPI, Kubernetes\n</extracted_keywords>" in prompt
    assert "<ats_context>\nCurrent ATS score: 62 (moderate)\n</ats_context>" in prompt


def test_long_sections_are_truncated():
    prompt = build_summary_prompt("x" * 5000, JD)
    assert "x" * MAX_SECTION_LENGTH in prompt
    assert "x" * (MAX_SECTION_LENGTH + 1) not in prompt


def test_coop_candidate_guidance():
    prompt = build_summary_prompt("Student", JD, candidate_type="coop")
    assert "**Candidate Guidance (coop):**" in prompt
    assert "skip the summary" in prompt


def test_skills_prompt_resume_block_optional():
    without = build_skills_prompt("Python, Docker", JD)
    assert "<resume_content>" not in without
    assert '"missing_but_relevant"' in without

    with_resume = build_skills_prompt("Python, Docker", JD, resume_content="Jane Smith, Kafka pipelines")
    assert "<resume_content>\nJane Smith, Kafka pipelines\n</resume_content>" in with_resume


def test_experience_prompt_verb_guidance_follows_candidate_type():
    fulltime = build_experience_prompt("- Built APIs", JD, "Jane Smith")
    assert '"Drove"' in fulltime
    assert '"Learned"' not in fulltime

    coop = build_experience_prompt("- Built APIs", JD, "Jane Smith", candidate_type="coop")
    assert '"Learned"' in coop


def test_experience_prompt_education_block():
    prompt = build_experience_prompt("- Built APIs", JD, "Jane Smith", education="B.S. Computer Science")
    assert "<education>\nB.S. Computer Science\n</education>" in prompt
    assert "<education>" not in build_experience_prompt("- Built APIs", JD, "Jane Smith")
