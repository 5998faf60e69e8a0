"""
Heuristic ATS (Applicant Tracking System) compatibility scoring.

Scores a resume against its target job in six dimensions and combines them
with weights that adapt to the resume's weak spots and the seniority of the
target title:

    keyword_match          job description keywords found in the resume
    formatting             contact details, core sections, complete entries
    completeness           summary, contact, experience detail, education, skills
    experience_relevance   past positions aligned with the target title
    skills_match           skill count and overlap with the job's skills/tools
    content_quality        detail, quantified results, no duplicated content

Examples:
    >>> result = calculate_ats_score(ResumeData.from_file("resume.yaml"))
    >>> result.general_score
    72
"""

import re
from datetime import date
from itertools import combinations
from typing import Any, Dict, List, Optional

from folio.contexts.scoring.feedback import build_general_feedback, generate_suggestions
from folio.contexts.scoring.keyword_extractor import (
    KeywordData,
    KeywordExtractor,
    basic_keyword_data,
    get_keyword_extractor,
)
from folio.contexts.scoring.keyword_matcher import build_resume_text, match_keywords
from folio.contexts.scoring.logger import (
    _log_debug,
    _log_error,
    _log_info,
    log_score_result,
    log_sub_scores,
)
from folio.contexts.scoring.models import (
    ATSFeedback,
    ATSScoreResult,
    CategoryFeedback,
    KeywordCategoryFeedback,
    KeywordsFeedback,
    clamp_score,
)
from folio.contexts.templating.resume_data_structure import (
    ResumeData,
    WorkExperience,
    coerce_document,
)
from folio.utils.text_processing import similarity, word_count
from folio.utils.timestamp import extract_year

MIN_JOB_DESCRIPTION_LENGTH = 50
EMPTY_RESUME_SCORE = 15

BASE_WEIGHTS = {
    "keyword_match": 0.35,
    "formatting": 0.10,
    "completeness": 0.15,
    "experience_relevance": 0.25,
    "skills_match": 0.10,
    "content_quality": 0.05,
}

ENTRY_LEVEL_TERMS = ("entry", "junior", "intern")

# Keyword categories whose gaps recruiters screen on first
CRITICAL_CATEGORIES = ("technical_skills", "tools", "certifications")
JOB_SKILL_CATEGORIES = ("technical_skills", "soft_skills", "tools")

DUPLICATE_EXPERIENCE_SIMILARITY = 0.8
DUPLICATE_ACHIEVEMENT_SIMILARITY = 0.85
SKILL_SIMILARITY = 0.8
RECENT_YEARS = 3

NO_JOB_DESCRIPTION = "Please add a job description to calculate ATS score"
SHORT_JOB_DESCRIPTION = "Job description is too short for accurate ATS analysis"
SCORING_ERROR = "Error calculating ATS score. Please try again."

EMPTY_RESUME_SUGGESTIONS = [
    "Add content to your resume sections to improve your ATS score",
    "Include a professional summary",
    "Add relevant work experience",
    "List your skills and qualifications",
]


# =============================================================================
# EARLY EXITS
# =============================================================================


def empty_score_result(message: str) -> ATSScoreResult:
    """Zero score carrying a single explanatory suggestion."""
    return ATSScoreResult(general_score=0, feedback=ATSFeedback(overall_suggestions=[message]))


def is_resume_empty(resume: ResumeData) -> bool:
    """True when the resume lacks contact basics or any substantive content."""
    has_basic_info = bool(resume.full_name or resume.email or resume.phone)
    has_content = bool(
        len(resume.summary.strip()) > 20
        or resume.work_experience
        or resume.education
        or resume.skills
        or resume.technical_skills
    )
    return not has_basic_info or not has_content


def _empty_resume_result(keywords: KeywordData) -> ATSScoreResult:
    categories = {
        name: KeywordCategoryFeedback(found=[], missing=list(terms), all=list(terms))
        for name, terms in keywords.categories.items()
    }
    keywords_feedback = KeywordsFeedback(
        found=[],
        missing=list(keywords.keywords),
        all=list(keywords.keywords),
        categories=categories,
    )
    return ATSScoreResult(
        general_score=EMPTY_RESUME_SCORE,
        job_specific_score=0,
        feedback=ATSFeedback(
            general_feedback=[
                CategoryFeedback(
                    category="Content",
                    score=0,
                    feedback="Resume content is incomplete",
                    priority="high",
                )
            ],
            keywords_feedback=keywords_feedback,
            overall_suggestions=list(EMPTY_RESUME_SUGGESTIONS),
        ),
    )


# =============================================================================
# SUB-SCORES
# =============================================================================


def keyword_match_score(keywords: KeywordsFeedback) -> int:
    """Share of keywords found, a bonus for category coverage, a penalty for critical gaps."""
    if not keywords.all:
        return 0

    score = len(keywords.found) / len(keywords.all) * 100

    if keywords.categories:
        with_matches = sum(1 for matches in keywords.categories.values() if matches.found)
        score += with_matches / len(keywords.categories) * 10

    critical_missing = sum(
        len(keywords.categories[name].missing)
        for name in CRITICAL_CATEGORIES
        if name in keywords.categories
    )
    if critical_missing > 5:
        score -= min(15, critical_missing * 2)

    return clamp_score(score)


def formatting_score(resume: ResumeData) -> int:
    """Contact basics, core sections and complete work entries."""
    score = 100

    if not resume.full_name:
        score -= 15
    if not resume.email:
        score -= 15
    if not resume.phone:
        score -= 10

    if not resume.work_experience:
        score -= 20
    if not resume.education:
        score -= 15
    if not resume.skills and not resume.technical_skills:
        score -= 15

    if resume.work_experience:
        if any(
            not job.start_date or (not job.end_date and not job.current)
            for job in resume.work_experience
        ):
            score -= 10
        if any(not job.position or not job.company for job in resume.work_experience):
            score -= 15

    return max(0, score)


def completeness_score(resume: ResumeData) -> int:
    """Presence and depth of each section a recruiter expects."""
    score = 100

    if not resume.email:
        score -= 10
    if not resume.phone:
        score -= 10
    if not resume.location and not resume.city and not resume.state:
        score -= 10

    summary = resume.summary.strip()
    if not summary:
        score -= 20
    elif len(summary) < 100:
        score -= 10

    if not resume.work_experience:
        score -= 25
    else:
        for job in resume.work_experience:
            if not job.position or not job.company or not job.start_date:
                score -= 5
            if not job.description and not job.achievements:
                score -= 3

    if not resume.education:
        score -= 15
    if not resume.all_skills:
        score -= 10

    return max(0, score)


def _is_relevant(job: WorkExperience, title_words: List[str]) -> bool:
    position_words = job.position.lower().split()
    details = f"{job.description} {' '.join(job.achievements)}".lower()
    return any(word in position_words or word in details for word in title_words)


def _is_recent(job: WorkExperience, current_year: int) -> bool:
    if job.current:
        return True
    end_year = extract_year(job.end_date)
    return end_year is not None and current_year - end_year <= RECENT_YEARS


def experience_relevance_score(resume: ResumeData) -> int:
    """How many positions relate to the target title, with a bonus for recent ones."""
    if not resume.work_experience:
        return 0

    title = resume.target_job_title.lower().strip()
    if not title:
        return 50

    title_words = [word for word in title.split() if len(word) > 3]
    relevant = [job for job in resume.work_experience if _is_relevant(job, title_words)]
    if not relevant:
        return 20

    score = 30 + len(relevant) / len(resume.work_experience) * 70

    current_year = date.today().year
    if any(_is_recent(job, current_year) for job in relevant):
        score += 10

    return clamp_score(score)


def skills_match_score(resume: ResumeData, keywords: Optional[KeywordsFeedback] = None) -> int:
    """Skill count, categorization and overlap with the job's skill and tool keywords."""
    user_skills = [skill.lower() for skill in resume.all_skills]
    if not user_skills:
        return 0

    score = 30

    if 5 <= len(user_skills) <= 20:
        score += 20
    elif len(user_skills) < 5:
        score += 10
    elif len(user_skills) > 30:
        score += 15

    if resume.technical_skills or resume.soft_skills:
        score += 10

    job_skills = []
    if keywords is not None:
        for name in JOB_SKILL_CATEGORIES:
            if name in keywords.categories:
                job_skills.extend(term.lower() for term in keywords.categories[name].all)

    if job_skills:
        matched = [
            skill
            for skill in user_skills
            if any(
                job_skill in skill
                or skill in job_skill
                or similarity(skill, job_skill) > SKILL_SIMILARITY
                for job_skill in job_skills
            )
        ]
        overlap = len(matched) / len(job_skills) * 100
        if overlap >= 80:
            score += 40
        elif overlap >= 60:
            score += 30
        elif overlap >= 40:
            score += 20
        elif overlap >= 20:
            score += 10
    else:
        score += 20

    return clamp_score(score)


def _experience_text(job: WorkExperience) -> str:
    return f"{job.description} {' '.join(job.achievements)}"


def count_duplicate_experiences(resume: ResumeData) -> int:
    """Pairs of work entries that repeat the same role or near-identical text."""
    duplicates = 0
    for first, second in combinations(resume.work_experience, 2):
        same_role = (
            bool(first.position or first.company)
            and first.position == second.position
            and first.company == second.company
        )
        text_similarity = similarity(_experience_text(first), _experience_text(second))
        if same_role or text_similarity > DUPLICATE_EXPERIENCE_SIMILARITY:
            duplicates += 1
    return duplicates


def count_duplicate_achievements(resume: ResumeData) -> int:
    """Achievements that repeat an earlier one, across all work entries."""
    seen: List[str] = []
    duplicates = 0
    for job in resume.work_experience:
        for achievement in job.achievements:
            normalized = achievement.lower().strip()
            if not normalized:
                continue
            if any(
                normalized == earlier
                or similarity(normalized, earlier) > DUPLICATE_ACHIEVEMENT_SIMILARITY
                for earlier in seen
            ):
                duplicates += 1
            seen.append(normalized)
    return duplicates


def content_quality_score(resume: ResumeData) -> int:
    """Summary length, detail per entry, quantified results and absence of duplicates."""
    score = 100

    if resume.summary:
        words = word_count(resume.summary)
        if words < 20:
            score -= 15
        elif words > 100:
            score -= 10

    for job in resume.work_experience:
        if len(_experience_text(job).strip()) < 50:
            score -= 10

    score -= 25 * count_duplicate_experiences(resume)
    score -= 15 * count_duplicate_achievements(resume)

    achievements = [a for job in resume.work_experience for a in job.achievements]
    if not any(re.search(r"\d", achievement) for achievement in achievements):
        score -= 20

    return max(0, score)


def adaptive_weights(scores: Dict[str, int], target_job_title: str) -> Dict[str, float]:
    """
    Shift weight toward the resume's weakest areas and away from experience
    for entry-level titles.
    """
    weights = dict(BASE_WEIGHTS)

    if scores["completeness"] < 50:
        weights["completeness"] += 0.1
        weights["keyword_match"] -= 0.05
        weights["experience_relevance"] -= 0.05

    if scores["keyword_match"] < 30:
        weights["keyword_match"] += 0.1
        weights["experience_relevance"] -= 0.05
        weights["content_quality"] -= 0.05

    title = target_job_title.lower()
    if any(term in title for term in ENTRY_LEVEL_TERMS):
        weights["experience_relevance"] -= 0.1
        weights["skills_match"] += 0.05
        weights["content_quality"] += 0.05

    return weights


# =============================================================================
# ENTRY POINT
# =============================================================================


def _score(resume: ResumeData, extractor: KeywordExtractor) -> ATSScoreResult:
    job_description = resume.job_description
    if not resume.target_job_title or not job_description:
        return empty_score_result(NO_JOB_DESCRIPTION)
    if len(job_description.strip()) < MIN_JOB_DESCRIPTION_LENGTH:
        return empty_score_result(SHORT_JOB_DESCRIPTION)

    keyword_data = extractor.extract(job_description)
    if not keyword_data.keywords:
        keyword_data = basic_keyword_data(job_description)
    _log_debug(f"{len(keyword_data.keywords)} keywords ({keyword_data.source})")

    if is_resume_empty(resume):
        _log_info("Resume has no substantive content")
        return _empty_resume_result(keyword_data)

    keywords = match_keywords(keyword_data.categories, build_resume_text(resume))

    scores = {
        "keyword_match": keyword_match_score(keywords),
        "formatting": formatting_score(resume),
        "completeness": completeness_score(resume),
        "experience_relevance": experience_relevance_score(resume),
        "skills_match": skills_match_score(resume, keywords),
        "content_quality": content_quality_score(resume),
    }
    weights = adaptive_weights(scores, resume.target_job_title)
    log_sub_scores(scores, weights)

    general_score = clamp_score(sum(scores[name] * weights[name] for name in scores))

    suggestions = generate_suggestions(
        resume,
        scores,
        keywords,
        duplicate_experiences=count_duplicate_experiences(resume),
        duplicate_achievements=count_duplicate_achievements(resume),
    )

    return ATSScoreResult(
        general_score=general_score,
        job_specific_score=scores["keyword_match"],
        feedback=ATSFeedback(
            general_feedback=build_general_feedback(scores, keywords),
            keywords_feedback=keywords,
            overall_suggestions=suggestions,
        ),
    )


def calculate_ats_score(
    resume: Any, extractor: Optional[KeywordExtractor] = None
) -> ATSScoreResult:
    """
    Score a resume against its target job title and job description.

    Args:
        resume: ResumeData or resume mapping (camelCase or snake_case keys)
        extractor: Keyword extractor (default: get_keyword_extractor())

    Returns:
        ATSScoreResult. Missing or too-short job descriptions and unexpected
        scoring failures yield a zero score with an explanatory suggestion.

    Raises:
        InvalidResumeDataError: If resume is not resume-shaped data
    """
    resume = coerce_document(resume, kind="resume")
    extractor = extractor or get_keyword_extractor()

    try:
        result = _score(resume, extractor)
    except Exception as e:
        _log_error(f"ATS scoring failed: {e}")
        return empty_score_result(SCORING_ERROR)

    log_score_result(result)
    return result
