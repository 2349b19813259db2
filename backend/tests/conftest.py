"""Shared test configuration, pytest markers and sample data."""

import pytest

from models.schemas.keywords import ExtractedKeyword
from models.schemas.suggestions import (
    BulletSuggestion,
    ExperienceEntry,
    ExperienceSuggestion,
    SkillsSuggestion,
    SummarySuggestion,
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: calls the real Gemini API (needs GEMINI_API_KEY)"
    )


SAMPLE_RESUME = """Jane Smith
jane.smith@email.com | (555) 123-4567 | linkedin.com/in/janesmith | github.com/janesmith

Professional Summary
Backend engineer with 6 years of experience building Python services and data pipelines
for fintech products. Comfortable owning systems from design through on-call.

Skills
Python, FastAPI, Django, PostgreSQL, Redis, Docker, Kubernetes, AWS, Terraform, Git

Experience
Senior Software Engineer, Acme Payments
Jan 2021 - Present
- Led migration of 12 services to Kubernetes, cutting deploy time by 60%
- Built a FastAPI gateway serving 2,000,000 requests per day
- Reduced PostgreSQL query latency by 45% through indexing and caching with Redis
- Mentored a team of 4 engineers on testing and code review practices

Software Engineer, DataCo
Jun 2018 - Dec 2020
- Developed ETL pipelines in Python processing $3M in monthly transactions
- Implemented CI/CD pipelines with GitHub Actions for 8 repositories
- Helped with on-call rotation and incident reviews
- Automated infrastructure provisioning with Terraform on AWS

Education
Bachelor of Science in Computer Science
State University, 2018
GPA: 3.7

Certifications
AWS Certified Solutions Architect
"""

SAMPLE_JD = """Senior Python Engineer

Requirements:
- 5+ years of experience with Python
- Strong knowledge of FastAPI or Django
- Experience with PostgreSQL and Redis
- Familiarity with Docker and Kubernetes
- Bachelor's degree in Computer Science or related field

Preferred:
- AWS Certified Solutions Architect
- Experience with Kafka
"""


@pytest.fixture
def sample_resume() -> str:
    return SAMPLE_RESUME


@pytest.fixture
def sample_jd() -> str:
    return SAMPLE_JD


@pytest.fixture
def jd_keywords() -> list[ExtractedKeyword]:
    return [
        ExtractedKeyword(keyword="Python", category="technologies", importance="high", requirement="required"),
        ExtractedKeyword(keyword="FastAPI", category="technologies", importance="high", requirement="required"),
        ExtractedKeyword(keyword="PostgreSQL", category="technologies", importance="high", requirement="required"),
        ExtractedKeyword(keyword="Kubernetes", category="tools", importance="medium", requirement="required"),
        ExtractedKeyword(keyword="Kafka", category="technologies", importance="medium", requirement="preferred"),
        ExtractedKeyword(keyword="GraphQL", category="technologies", importance="low", requirement="preferred"),
    ]


def make_summary(text: str = "Original summary") -> SummarySuggestion:
    return SummarySuggestion(original=text, suggested="Backend engineer building FastAPI services.")


def make_skills(text: str = "Python, Docker") -> SkillsSuggestion:
    return SkillsSuggestion(original=text, existing_skills=["Python", "Docker"], summary="2/4 key skills")


def make_experience(text: str = "- Built things") -> ExperienceSuggestion:
    return ExperienceSuggestion(
        original=text,
        experience_entries=[
            ExperienceEntry(
                company="Acme",
                role="Engineer",
                dates="2020 - 2023",
                original_bullets=["Built things"],
                suggested_bullets=[BulletSuggestion(original="Built things", suggested="Built 3 services")],
            )
        ],
        summary="Reframed 1 bullet",
    )


class RecordingGenerators:
    """Fake section generators that record every call's arguments."""

    def __init__(self, failures: dict | None = None):
        self.calls: dict[str, dict] = {}
        self.failures = failures or {}

    def _make(self, section: str, factory):
        async def generator(section_text, **context):
            self.calls[section] = {"section_text": section_text, **context}
            failure = self.failures.get(section)
            if failure is not None:
                if callable(failure):
                    return await failure()
                raise failure
            return factory(section_text)

        return generator

    def table(self) -> dict:
        return {
            "summary": self._make("summary", make_summary),
            "skills": self._make("skills", make_skills),
            "experience": self._make("experience", make_experience),
        }


@pytest.fixture
def recording_generators() -> RecordingGenerators:
    return RecordingGenerators()
