"""
Keyword matching against resume text.

A keyword counts as present if any of its variations (synonyms, acronyms,
hyphen/space/concatenated forms) occurs in the resume as a whole word, if every
part of a compound variation occurs, or if it is a short uppercase acronym
contained anywhere in the text.
"""

import re
from typing import Dict, List

from folio.contexts.scoring.models import KeywordCategoryFeedback, KeywordsFeedback
from folio.contexts.templating.resume_data_structure import ResumeData

# Lowercase keyword -> alternative spellings
KEYWORD_VARIATIONS: Dict[str, List[str]] = {
    "javascript": ["js", "javascript", "java script"],
    "typescript": ["ts", "typescript", "type script"],
    "node.js": ["node", "nodejs", "node js"],
    "react": ["reactjs", "react.js"],
    "vue.js": ["vue", "vuejs"],
    "angular": ["angularjs", "angular.js"],
    "c++": ["cpp", "c plus plus"],
    "c#": ["csharp", "c sharp"],
    "machine learning": ["ml", "machine-learning"],
    "artificial intelligence": ["ai", "artificial-intelligence"],
    "user experience": ["ux", "user-experience"],
    "user interface": ["ui", "user-interface"],
    "search engine optimization": ["seo"],
    "customer relationship management": ["crm"],
}

MAX_ACRONYM_LENGTH = 5
MIN_COMPOUND_PART_LENGTH = 3


def _unique(items: List[str]) -> List[str]:
    return list(dict.fromkeys(items))


def keyword_variations(keyword: str) -> List[str]:
    """
    Lowercase spellings under which a keyword may appear.

    Examples:
        >>> keyword_variations("Machine Learning")
        ['machine learning', 'ml', 'machine-learning', 'machinelearning']
    """
    lower = keyword.lower()
    variations = [lower, *KEYWORD_VARIATIONS.get(lower, [])]

    if " " in lower:
        variations.append(lower.replace(" ", "-"))
        variations.append(lower.replace(" ", ""))
    if "-" in lower:
        variations.append(lower.replace("-", " "))
        variations.append(lower.replace("-", ""))

    return _unique(variations)


def _whole_word(term: str, text: str) -> bool:
    return re.search(rf"(?<!\w){re.escape(term)}(?!\w)", text) is not None


def is_keyword_match(keyword: str, resume_text: str) -> bool:
    """
    Check whether a keyword appears in lowercase resume text.

    Args:
        keyword: Keyword as extracted (case matters for the acronym rule)
        resume_text: Output of build_resume_text()
    """
    for variation in keyword_variations(keyword):
        if _whole_word(variation, resume_text):
            return True

        if re.search(r"[\s\-.]", variation):
            parts = [part for part in re.split(r"[\s\-.]+", variation) if part]
            if all(
                len(part) >= MIN_COMPOUND_PART_LENGTH and _whole_word(part, resume_text)
                for part in parts
            ):
                return True
            continue

        if (
            len(keyword) <= MAX_ACRONYM_LENGTH
            and keyword.isupper()
            and keyword.lower() in resume_text
        ):
            return True

    return False


def build_resume_text(resume: ResumeData) -> str:
    """All searchable resume content as one lowercase string."""
    parts = [resume.summary, resume.target_job_title]

    for job in resume.work_experience:
        parts.append(
            f"{job.position} {job.company} {job.description} {' '.join(job.achievements)}"
        )
    for degree in resume.education:
        parts.append(
            f"{degree.degree} {degree.institution} {degree.field_of_study} {degree.description}"
        )

    parts.extend(resume.skills)
    parts.extend(resume.technical_skills)
    parts.extend(resume.soft_skills)

    for cert in resume.certifications:
        parts.append(f"{cert.name} {cert.issuer} {cert.description}")
    for project in resume.projects:
        parts.append(f"{project.name} {project.description} {' '.join(project.technologies)}")
    for publication in resume.publications:
        parts.append(f"{publication.title} {publication.publisher} {publication.description}")

    return " ".join(part for part in parts if part).lower()


def match_keywords(categories: Dict[str, List[str]], resume_text: str) -> KeywordsFeedback:
    """
    Match categorized keywords against resume text.

    Args:
        categories: Category name -> keywords, as produced by the extractor
        resume_text: Output of build_resume_text()

    Returns:
        KeywordsFeedback with per-category and overall found/missing lists
    """
    feedback = KeywordsFeedback()
    found, missing, everything = [], [], []

    for category, keywords in categories.items():
        category_feedback = KeywordCategoryFeedback(all=list(keywords))
        for keyword in keywords:
            if is_keyword_match(keyword, resume_text):
                category_feedback.found.append(keyword)
                found.append(keyword)
            else:
                category_feedback.missing.append(keyword)
                missing.append(keyword)
            everything.append(keyword)
        feedback.categories[category] = category_feedback

    feedback.found = _unique(found)
    feedback.missing = _unique(missing)
    feedback.all = _unique(everything)
    return feedback
