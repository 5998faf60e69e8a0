"""Unit tests for heuristic ATS scoring."""

from datetime import date

import pytest

from folio.contexts.scoring.ats_scorer import (
    BASE_WEIGHTS,
    NO_JOB_DESCRIPTION,
    SCORING_ERROR,
    SHORT_JOB_DESCRIPTION,
    adaptive_weights,
    calculate_ats_score,
    completeness_score,
    content_quality_score,
    count_duplicate_achievements,
    count_duplicate_experiences,
    experience_relevance_score,
    formatting_score,
    is_resume_empty,
    keyword_match_score,
    skills_match_score,
)
from folio.contexts.scoring.feedback import generate_suggestions
from folio.contexts.scoring.keyword_extractor import KeywordExtractor
from folio.contexts.scoring.models import KeywordCategoryFeedback, KeywordsFeedback
from folio.contexts.templating.exceptions import InvalidResumeDataError
from folio.contexts.templating.resume_data_structure import ResumeData, WorkExperience

JOB_DESCRIPTION = (
    "We are hiring a Senior Data Engineer to build reliable pipelines with Python, "
    "SQL and AWS. Experience with Docker, Kubernetes and Airflow is expected."
)


@pytest.fixture
def basic_extractor():
    return KeywordExtractor(mode="basic")


def _keywords(**categories):
    """KeywordsFeedback from category=(found, missing) pairs."""
    feedback = KeywordsFeedback()
    for name, (found, missing) in categories.items():
        feedback.categories[name] = KeywordCategoryFeedback(
            found=list(found), missing=list(missing), all=[*found, *missing]
        )
        feedback.found.extend(found)
        feedback.missing.extend(missing)
        feedback.all.extend([*found, *missing])
    return feedback


def _job(position, company="Acme", **kwargs):
    return WorkExperience(position=position, company=company, start_date="2020-01", **kwargs)


# Early exits


@pytest.mark.unit
def test_missing_job_description(basic_extractor):
    """Test that scoring needs a target title and job description."""
    result = calculate_ats_score(ResumeData(full_name="Jane Doe"), extractor=basic_extractor)

    assert result.general_score == 0
    assert result.job_specific_score is None
    assert result.feedback.overall_suggestions == [NO_JOB_DESCRIPTION]


@pytest.mark.unit
def test_short_job_description(basic_extractor):
    """Test that a job description under 50 characters is rejected."""
    resume = ResumeData(
        full_name="Jane Doe", target_job_title="Engineer", job_description="Python dev"
    )
    result = calculate_ats_score(resume, extractor=basic_extractor)

    assert result.general_score == 0
    assert result.feedback.overall_suggestions == [SHORT_JOB_DESCRIPTION]


@pytest.mark.unit
def test_empty_resume(basic_extractor):
    """Test the fixed low score for a resume without content."""
    resume = ResumeData(target_job_title="Data Engineer", job_description=JOB_DESCRIPTION)
    result = calculate_ats_score(resume, extractor=basic_extractor)

    assert result.general_score == 15
    assert result.job_specific_score == 0
    assert result.feedback.keywords_feedback.found == []
    assert "Kubernetes" in result.feedback.keywords_feedback.missing
    assert result.feedback.general_feedback[0].category == "Content"
    assert len(result.feedback.overall_suggestions) == 4


@pytest.mark.unit
def test_is_resume_empty():
    """Test that contact info alone or content alone is not enough."""
    assert is_resume_empty(ResumeData(full_name="Jane Doe"))
    assert is_resume_empty(ResumeData(skills=["Python"]))
    assert not is_resume_empty(ResumeData(full_name="Jane Doe", skills=["Python"]))


@pytest.mark.unit
def test_extractor_failure_returns_error_result(sample_resume):
    """Test that unexpected scoring failures produce an error result."""

    class ExplodingExtractor:
        def extract(self, job_description):
            raise RuntimeError("boom")

    result = calculate_ats_score(sample_resume, extractor=ExplodingExtractor())

    assert result.general_score == 0
    assert result.feedback.overall_suggestions == [SCORING_ERROR]


@pytest.mark.unit
def test_invalid_resume_data_raises(basic_extractor):
    """Test that non-resume input is a caller error."""
    with pytest.raises(InvalidResumeDataError):
        calculate_ats_score(["not", "a", "resume"], extractor=basic_extractor)


# Sub-scores


@pytest.mark.unit
def test_keyword_match_score():
    """Test match share plus category coverage bonus."""
    keywords = _keywords(technical_skills=(["Python"], ["Go"]))

    assert keyword_match_score(keywords) == 60
    assert keyword_match_score(KeywordsFeedback()) == 0


@pytest.mark.unit
def test_keyword_match_score_critical_penalty():
    """Test the penalty for more than five missing critical keywords."""
    keywords = _keywords(
        technical_skills=(["Python", "SQL", "AWS"], ["Go", "Rust", "C#", "Java", "Scala", "R", "PHP"])
    )

    # 30% found + 10 coverage - min(15, 7 * 2)
    assert keyword_match_score(keywords) == 26


@pytest.mark.unit
def test_formatting_score(sample_resume):
    """Test formatting deductions."""
    assert formatting_score(sample_resume) == 100
    assert formatting_score(ResumeData()) == 10

    sample_resume.work_experience.append(WorkExperience(position="Analyst"))
    assert formatting_score(sample_resume) == 75


@pytest.mark.unit
def test_completeness_score(sample_resume):
    """Test completeness deductions."""
    assert completeness_score(sample_resume) == 100
    assert completeness_score(ResumeData()) == 0

    sample_resume.summary = "Data engineer."
    sample_resume.phone = ""
    assert completeness_score(sample_resume) == 80


@pytest.mark.unit
def test_experience_relevance_score(sample_resume):
    """Test relevance of positions to the target title."""
    assert experience_relevance_score(sample_resume) == 100
    assert experience_relevance_score(ResumeData()) == 0

    sample_resume.target_job_title = ""
    assert experience_relevance_score(sample_resume) == 50

    sample_resume.target_job_title = "Pastry Chef"
    assert experience_relevance_score(sample_resume) == 20


@pytest.mark.unit
def test_experience_relevance_recency():
    """Test the bonus for a recent relevant position."""
    old_year = date.today().year - 10
    resume = ResumeData(
        target_job_title="Data Engineer",
        work_experience=[
            _job("Data Engineer", end_date=f"{old_year}-06"),
            _job("Barista", end_date=f"{old_year}-01"),
        ],
    )

    assert experience_relevance_score(resume) == 65

    resume.work_experience[0].current = True
    assert experience_relevance_score(resume) == 75


@pytest.mark.unit
def test_skills_match_score(sample_resume):
    """Test skill count, categorization and job overlap."""
    assert skills_match_score(sample_resume) == 80
    assert skills_match_score(ResumeData()) == 0

    keywords = _keywords(technical_skills=(["Python", "SQL"], []))
    assert skills_match_score(sample_resume, keywords) == 100


@pytest.mark.unit
def test_content_quality_score(sample_resume):
    """Test content quality deductions."""
    assert content_quality_score(sample_resume) == 100

    thin = ResumeData(
        summary="Short summary",
        work_experience=[_job("Engineer", description="Did work", achievements=["Shipped"])],
    )
    # -15 short summary, -10 thin entry, -20 no numbers
    assert content_quality_score(thin) == 55


@pytest.mark.unit
def test_duplicate_detection():
    """Test duplicate experience and achievement counting."""
    resume = ResumeData(
        work_experience=[
            _job("Engineer", achievements=["Shipped the billing platform"]),
            _job("Engineer", achievements=["Shipped the billing platform"]),
            _job("Manager", company="Globex", achievements=["Hired four engineers"]),
        ]
    )

    assert count_duplicate_experiences(resume) == 1
    assert count_duplicate_achievements(resume) == 1
    assert content_quality_score(resume) == 100 - 30 - 25 - 15 - 20


@pytest.mark.unit
def test_promotion_at_same_company_not_duplicate():
    """Test that consecutive roles at one employer are not counted as duplicates."""
    resume = ResumeData(
        work_experience=[
            _job("Software Engineer II", company="Acme Corporation"),
            _job("Software Engineer I", company="Acme Corporation"),
        ]
    )

    assert count_duplicate_experiences(resume) == 0


@pytest.mark.unit
@pytest.mark.parametrize(
    "count,experience_text,achievement_text",
    [
        (1, "Remove 1 duplicate work experience - ", "Rewrite 1 duplicate achievement to"),
        (2, "Remove 2 duplicate work experiences - ", "Rewrite 2 duplicate achievements to"),
    ],
)
def test_duplicate_suggestions_pluralized(count, experience_text, achievement_text):
    """Test that duplicate suggestions agree with their counts."""
    scores = {name: 100 for name in BASE_WEIGHTS}
    suggestions = generate_suggestions(
        ResumeData(),
        scores,
        KeywordsFeedback(),
        duplicate_experiences=count,
        duplicate_achievements=count,
    )

    assert suggestions[0].startswith(experience_text)
    assert suggestions[1].startswith(achievement_text)


# Weights


@pytest.mark.unit
def test_base_weights_sum_to_one():
    """Test that base weights are a proper weighting."""
    assert sum(BASE_WEIGHTS.values()) == pytest.approx(1.0)


@pytest.mark.unit
def test_adaptive_weights():
    """Test weight shifts for weak sections and entry-level titles."""
    scores = dict.fromkeys(BASE_WEIGHTS, 80)
    assert adaptive_weights(scores, "Senior Engineer") == BASE_WEIGHTS

    weights = adaptive_weights({**scores, "completeness": 40, "keyword_match": 20}, "Engineer")
    assert weights["completeness"] == pytest.approx(0.25)
    assert weights["keyword_match"] == pytest.approx(0.40)
    assert weights["experience_relevance"] == pytest.approx(0.15)
    assert weights["content_quality"] == pytest.approx(0.0)

    junior = adaptive_weights(scores, "Junior Data Analyst")
    assert junior["experience_relevance"] == pytest.approx(0.15)
    assert junior["skills_match"] == pytest.approx(0.15)
    assert sum(junior.values()) == pytest.approx(1.0)


# End to end


@pytest.mark.unit
def test_calculate_ats_score(sample_resume, basic_extractor):
    """Test a full score for a well-matched resume."""
    result = calculate_ats_score(sample_resume, extractor=basic_extractor)

    assert result.general_score == 91
    assert result.job_specific_score == 81
    assert [item.category for item in result.feedback.general_feedback] == [
        "Keyword Match",
        "Formatting",
        "Completeness",
        "Experience Relevance",
        "Skills Match",
        "Content Quality",
    ]
    assert result.feedback.keywords_feedback.missing == ["Kubernetes", "Leadership"]
    suggestions = result.feedback.overall_suggestions
    assert suggestions[0] == "Incorporate these job keywords naturally: Kubernetes, Leadership"
    assert len(suggestions) == len(set(suggestions)) <= 8


@pytest.mark.unit
def test_calculate_ats_score_from_mapping(sample_resume, basic_extractor):
    """Test that camelCase mappings score like ResumeData."""
    data = {
        "fullName": sample_resume.full_name,
        "email": sample_resume.email,
        "targetJobTitle": "Data Engineer",
        "jobDescription": JOB_DESCRIPTION,
        "technicalSkills": ["Python", "SQL"],
    }
    result = calculate_ats_score(data, extractor=basic_extractor)

    assert 0 < result.general_score < 100
    assert "Python" in result.feedback.keywords_feedback.found
    assert result.to_dict()["feedback"]["keywords_feedback"]["found"]
