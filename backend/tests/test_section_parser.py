from services.section_parser import (
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


def test_parse_sections_detects_all(sample_resume):
    sections = parse_sections(sample_resume)
    for name in ("header", "summary", "skills", "experience", "education", "certifications"):
        assert name in sections


def test_parse_sections_content(sample_resume):
    sections = parse_sections(sample_resume)
    assert sections["summary"].startswith("Backend engineer with 6 years")
    assert "Acme Payments" in sections["experience"]
    assert "Bachelor of Science" in sections["education"]
    assert "jane.smith@email.com" in sections["header"]


def test_parse_sections_empty():
    sections = parse_sections("")
    assert len(sections) <= 1  # At most 'header' with empty content
    assert not any(sections.values())


def test_objective_lands_under_summary():
    sections = parse_sections("Career Objective\nSeeking a backend internship\n\nSkills\nPython")
    assert sections["summary"] == "Seeking a backend internship"
    assert has_objective_header("Career Objective\nSeeking a backend internship")
    assert not has_objective_header("Summary\nBackend engineer")


def test_find_section_headers_in_order(sample_resume):
    assert find_section_headers(sample_resume) == [
        "summary", "skills", "experience", "education", "certifications",
    ]


def test_extract_contact_info(sample_resume):
    info = extract_contact_info(sample_resume)
    assert info["email"] == "jane.smith@email.com"
    assert info["phone"] == "(555) 123-4567"
    assert info["linkedin"] == "linkedin.com/in/janesmith"
    assert info["github"] == "github.com/janesmith"


def test_extract_contact_info_missing():
    info = extract_contact_info("Jane Smith\nBackend engineer")
    assert info == {"email": None, "phone": None, "linkedin": None, "github": None}


def test_split_skill_items_grouped_lines():
    assert split_skill_items("Languages: Python, Go\nDocker | AWS") == ["Python", "Go", "Docker", "AWS"]


def test_split_certifications():
    assert split_certifications("- AWS Certified Developer\n• CKA\n") == ["AWS Certified Developer", "CKA"]


def test_count_dates():
    assert count_dates("Jan 2021 - Present\nJun 2018 - Dec 2020") == 3


def test_extract_experience_years_explicit():
    assert extract_experience_years("Engineer with 7 years of experience in Python") == 7.0


def test_extract_experience_years_date_ranges():
    text = "Engineer | 2019 - 2021\nAnalyst | Jan 2016 - Jan 2018"
    assert extract_experience_years(text) == 4.0


def test_extract_required_years(sample_jd):
    assert extract_required_years(sample_jd) == (5.0, True)


def test_extract_required_years_preferred():
    years, required = extract_required_years("Nice to have: 3+ years of experience with Go")
    assert years == 3.0
    assert required is False


def test_extract_required_years_none():
    assert extract_required_years("Looking for a curious engineer") == (0.0, True)


def test_extract_education_level_bachelors(sample_resume):
    assert extract_education_level(sample_resume) == "bachelor"


def test_extract_education_level_masters():
    assert extract_education_level("M.S. in Data Science") == "master"


def test_extract_education_level_phd():
    assert extract_education_level("Ph.D. in Physics") == "phd"


def test_extract_education_level_none():
    assert extract_education_level("Self-taught developer") == ""


def test_extract_education_level_highest():
    assert extract_education_level("B.S. Computer Science\nMaster of Science in AI") == "master"


def test_scrum_master_is_not_a_degree():
    assert extract_education_level("Certified Scrum Master") == ""


def test_extract_degree_field(sample_resume):
    assert extract_degree_field(sample_resume) == "Computer Science"
    assert extract_degree_field("Self-taught developer") == ""


def test_extract_degree_requirement(sample_jd):
    assert extract_degree_requirement(sample_jd) == {
        "level": "bachelor",
        "fields_of_study": ["Computer Science", "related field"],
        "required": True,
    }


def test_extract_degree_requirement_absent():
    assert extract_degree_requirement("Python engineer, remote") is None


def test_extract_certification_requirements(sample_jd):
    assert extract_certification_requirements(sample_jd) == ["AWS Certified Solutions Architect"]
