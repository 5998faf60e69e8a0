"""Unit tests for resume and cover-letter data structures."""

import pytest

from folio.contexts.templating.exceptions import InvalidResumeDataError
from folio.contexts.templating.resume_data_structure import (
    CoverLetterData,
    ResumeData,
    coerce_document,
    to_snake_case,
)


@pytest.mark.unit
def test_to_snake_case():
    """Test camelCase key conversion."""
    assert to_snake_case("fullName") == "full_name"
    assert to_snake_case("linkedinUrl") == "linkedin_url"
    assert to_snake_case("already_snake") == "already_snake"


@pytest.mark.unit
def test_from_dict_accepts_camel_case():
    """Test building a resume from a client payload."""
    resume = ResumeData.from_dict(
        {
            "fullName": "Jane Doe",
            "targetJobTitle": "Data Engineer",
            "workExperience": [
                {"position": "Engineer", "company": "Acme", "startDate": "2020-01", "current": True}
            ],
            "technicalSkills": ["Python"],
        }
    )

    assert resume.full_name == "Jane Doe"
    assert resume.work_experience[0].start_date == "2020-01"
    assert resume.work_experience[0].current is True
    assert resume.technical_skills == ["Python"]


@pytest.mark.unit
def test_from_dict_ignores_unknown_keys_and_nulls():
    """Test that unknown keys are dropped and None becomes empty."""
    resume = ResumeData.from_dict({"fullName": "Jane", "email": None, "favoriteColor": "green"})

    assert resume.email == ""
    assert not hasattr(resume, "favorite_color")


@pytest.mark.unit
def test_skills_from_comma_separated_string():
    """Test that a comma-separated skills string becomes a list."""
    resume = ResumeData.from_dict({"skills": "Python, SQL , , Docker"})

    assert resume.skills == ["Python", "SQL", "Docker"]


@pytest.mark.unit
@pytest.mark.parametrize(
    "payload",
    [
        ["not", "a", "mapping"],
        {"workExperience": "Acme"},
        {"education": ["MIT"]},
        {"skills": 42},
    ],
)
def test_from_dict_rejects_malformed_data(payload):
    """Test InvalidResumeDataError for data that is not resume-shaped."""
    with pytest.raises(InvalidResumeDataError):
        ResumeData.from_dict(payload)


@pytest.mark.unit
def test_from_file(sample_resume):
    """Test loading the YAML fixture."""
    assert sample_resume.full_name == "Jane Doe"
    assert len(sample_resume.work_experience) == 2
    assert sample_resume.work_experience[0].current is True
    assert sample_resume.education[0].field_of_study == "Computer Science"
    assert sample_resume.projects[0].technologies == ["Python", "PostgreSQL"]


@pytest.mark.unit
def test_from_file_missing(tmp_path):
    """Test error for a data file that does not exist."""
    with pytest.raises(FileNotFoundError):
        ResumeData.from_file(tmp_path / "missing.yaml")


@pytest.mark.unit
def test_all_skills_order(sample_resume):
    """Test general, technical then soft skills."""
    sample_resume.skills = ["Agile"]

    assert sample_resume.all_skills[0] == "Agile"
    assert sample_resume.all_skills[-1] == "Communication"


@pytest.mark.unit
def test_grouped_skills_default_groups():
    """Test technical/soft/other skill grouping."""
    resume = ResumeData(technical_skills=["Python"], soft_skills=["Mentoring"], skills=["Agile"])

    assert resume.grouped_skills == {
        "Technical Skills": ["Python"],
        "Soft Skills": ["Mentoring"],
        "Other Skills": ["Agile"],
    }
    assert ResumeData(skills=["Agile"]).grouped_skills == {"Skills": ["Agile"]}


@pytest.mark.unit
def test_grouped_skills_user_categories():
    """Test that user-defined skill categories win when enabled."""
    resume = ResumeData(
        skills=["Agile"],
        use_skill_categories=True,
        skill_categories={"Languages": ["Python", "Go"], "Empty": []},
    )

    assert resume.grouped_skills == {"Languages": ["Python", "Go"]}


@pytest.mark.unit
def test_display_location():
    """Test free-form location wins over city/state."""
    assert ResumeData(city="Denver", state="CO").display_location == "Denver, CO"
    assert ResumeData(city="Lyon", country="France").display_location == "Lyon, France"
    assert ResumeData(location="Remote", city="Denver").display_location == "Remote"


@pytest.mark.unit
def test_ordered_sections_skips_empty(sample_resume):
    """Test that empty sections are dropped from the render order."""
    order = sample_resume.ordered_sections(
        ["summary", "work_experience", "education", "skills", "projects", "publications"]
    )

    assert order == ["summary", "work_experience", "education", "skills", "projects"]


@pytest.mark.unit
def test_ordered_sections_custom_order(sample_resume):
    """Test that the resume's own section order wins (camelCase accepted)."""
    sample_resume.section_order = ["skills", "workExperience", "bogus"]

    assert sample_resume.ordered_sections(["summary", "work_experience", "skills"]) == [
        "skills",
        "work_experience",
    ]


@pytest.mark.unit
def test_cover_letter_placeholders():
    """Test that missing cover-letter fields are filled for display."""
    letter = CoverLetterData(full_name="Jane Doe", date="2025-03-14").with_placeholders()

    assert letter.full_name == "Jane Doe"
    assert letter.recipient_name == "Hiring Manager"
    assert letter.company_name == "Company Name"
    assert letter.date == "March 14, 2025"


@pytest.mark.unit
def test_coerce_document():
    """Test that mappings become the right dataclass for their kind."""
    assert isinstance(coerce_document({"fullName": "Jane"}), ResumeData)
    assert isinstance(coerce_document({"fullName": "Jane"}, kind="cover_letter"), CoverLetterData)

    resume = ResumeData(full_name="Jane")
    assert coerce_document(resume, kind="cover_letter") is resume
