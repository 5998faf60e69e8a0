"""
Human-readable feedback for ATS sub-scores.

Each scoring dimension maps its score onto a fixed verdict and a priority;
generate_suggestions() turns low scores and missing keywords into at most
eight concrete, de-duplicated suggestions.
"""

import re
from typing import Dict, List

from folio.contexts.scoring.models import CategoryFeedback, KeywordsFeedback, round_score
from folio.contexts.templating.resume_data_structure import ResumeData

MAX_SUGGESTIONS = 8

# Category key -> label used in "Your ... section needs strengthening"
_CATEGORY_LABELS = {
    "technical_skills": "technical skills",
    "soft_skills": "soft skills",
    "industry_terms": "industry knowledge",
}


def priority_for(score: int) -> str:
    if score >= 80:
        return "low"
    if score >= 60:
        return "medium"
    return "high"


def _tiered(score: int, tiers: List[tuple], fallback: str) -> str:
    for threshold, message in tiers:
        if score >= threshold:
            return message
    return fallback


def keyword_feedback(keywords: KeywordsFeedback) -> str:
    total = len(keywords.all)
    percent = round_score(len(keywords.found) / total * 100) if total else 0
    return f"Found {len(keywords.found)} out of {total} keywords ({percent}%)"


def formatting_feedback(score: int) -> str:
    return _tiered(
        score,
        [
            (90, "Excellent formatting and structure"),
            (70, "Good formatting with minor improvements needed"),
            (50, "Formatting needs improvement"),
        ],
        "Significant formatting issues detected",
    )


def completeness_feedback(score: int) -> str:
    return _tiered(
        score,
        [
            (90, "Resume is comprehensive and complete"),
            (70, "Resume is mostly complete with minor gaps"),
            (50, "Several important sections are missing"),
        ],
        "Resume lacks essential information",
    )


def experience_feedback(score: int) -> str:
    return _tiered(
        score,
        [
            (80, "Experience is highly relevant to target position"),
            (60, "Experience is moderately relevant"),
            (40, "Some transferable experience identified"),
        ],
        "Experience alignment needs significant improvement",
    )


def skills_feedback(score: int) -> str:
    return _tiered(
        score,
        [
            (90, "Excellent skills match - nearly all job requirements covered"),
            (75, "Strong skills alignment with most job requirements met"),
            (60, "Good skills foundation with some gaps in job requirements"),
            (45, "Basic skills present but missing several key requirements"),
            (30, "Limited skills coverage - significant gaps in job requirements"),
        ],
        "Skills section needs major improvement to match job requirements",
    )


def content_feedback(score: int) -> str:
    return _tiered(
        score,
        [
            (90, "Content is detailed and well-written"),
            (70, "Content quality is good with room for improvement"),
            (50, "Content needs more detail and quantification"),
        ],
        "Content quality requires significant improvement",
    )


def build_general_feedback(
    scores: Dict[str, int], keywords: KeywordsFeedback
) -> List[CategoryFeedback]:
    """
    One CategoryFeedback per scoring dimension, in display order.

    Args:
        scores: Sub-scores keyed as in ats_scorer.BASE_WEIGHTS
        keywords: Keyword match results
    """
    entries = [
        ("Keyword Match", scores["keyword_match"], keyword_feedback(keywords)),
        ("Formatting", scores["formatting"], formatting_feedback(scores["formatting"])),
        ("Completeness", scores["completeness"], completeness_feedback(scores["completeness"])),
        (
            "Experience Relevance",
            scores["experience_relevance"],
            experience_feedback(scores["experience_relevance"]),
        ),
        ("Skills Match", scores["skills_match"], skills_feedback(scores["skills_match"])),
        (
            "Content Quality",
            scores["content_quality"],
            content_feedback(scores["content_quality"]),
        ),
    ]
    return [
        CategoryFeedback(category=name, score=score, feedback=text, priority=priority_for(score))
        for name, score, text in entries
    ]


def _has_number(text: str) -> bool:
    return re.search(r"\d", text) is not None


def _plural(noun: str, count: int) -> str:
    return noun if count == 1 else f"{noun}s"


def generate_suggestions(
    resume: ResumeData,
    scores: Dict[str, int],
    keywords: KeywordsFeedback,
    duplicate_experiences: int = 0,
    duplicate_achievements: int = 0,
) -> List[str]:
    """
    Concrete improvements, most impactful first, at most eight.

    Args:
        resume: Scored resume
        scores: Sub-scores keyed as in ats_scorer.BASE_WEIGHTS
        keywords: Keyword match results
        duplicate_experiences: Near-identical work experience pairs
        duplicate_achievements: Near-identical achievements
    """
    suggestions = []

    if duplicate_experiences:
        suggestions.append(
            f"Remove {duplicate_experiences} duplicate "
            f"{_plural('work experience', duplicate_experiences)} - "
            "they hurt your ATS score"
        )
    if duplicate_achievements:
        suggestions.append(
            f"Rewrite {duplicate_achievements} duplicate "
            f"{_plural('achievement', duplicate_achievements)} to be unique and specific"
        )

    if scores["skills_match"] < 70:
        skill_count = len(resume.all_skills)
        if skill_count == 0:
            suggestions.append("Add a skills section with relevant technical and soft skills")
        elif skill_count < 5:
            suggestions.append("Add more relevant skills - aim for 8-15 skills total")

        technical = keywords.categories.get("technical_skills")
        if technical and technical.missing:
            suggestions.append(
                "Add these technical skills if you have them: "
                f"{', '.join(technical.missing[:3])}"
            )
        tools = keywords.categories.get("tools")
        if tools and tools.missing:
            suggestions.append(
                f"Add these tools/technologies if you've used them: {', '.join(tools.missing[:3])}"
            )
        suggestions.append(
            "Organize skills into technical and soft skill categories for better ATS parsing"
        )

    if keywords.missing:
        suggestions.append(
            f"Incorporate these job keywords naturally: {', '.join(keywords.missing[:5])}"
        )
        for category, matches in keywords.categories.items():
            if matches.missing and len(matches.missing) >= len(matches.all) * 0.7:
                label = _CATEGORY_LABELS.get(category, category.replace("_", " "))
                suggestions.append(
                    f"Your {label} section needs strengthening - add: "
                    f"{', '.join(matches.missing[:2])}"
                )

    if scores["content_quality"] < 70:
        suggestions.append(
            "Add quantified achievements with specific numbers and results "
            "(e.g., 'Increased sales by 25%')"
        )
        suggestions.append(
            "Use strong action verbs to describe your accomplishments "
            "(achieved, implemented, optimized)"
        )
        unquantified = [
            job
            for job in resume.work_experience
            if not _has_number(f"{job.description} {' '.join(job.achievements)}")
        ]
        if unquantified:
            suggestions.append(
                f"Add measurable results to {len(unquantified)} "
                f"{_plural('work experience', len(unquantified))}"
            )

    if scores["completeness"] < 70:
        if len(resume.summary.strip()) < 50:
            suggestions.append(
                "Add a compelling professional summary (3-5 sentences highlighting your key value)"
            )
        if not resume.work_experience:
            suggestions.append(
                "Add your work experience with detailed descriptions and achievements"
            )
        if not resume.email or not resume.phone:
            suggestions.append("Complete your contact information (email, phone, location)")

    if scores["experience_relevance"] < 60:
        suggestions.append(
            "Tailor your job descriptions to emphasize responsibilities relevant to the target role"
        )
        suggestions.append("Highlight transferable skills that apply to your target position")
        if resume.projects:
            suggestions.append(
                "Include relevant projects that demonstrate skills for your target role"
            )
        else:
            suggestions.append("Add a projects section to showcase relevant work and skills")

    if scores["formatting"] < 80:
        suggestions.append("Ensure all work experience entries have consistent date formatting")
        suggestions.append(
            "Verify all job titles, company names, and dates are complete and accurate"
        )

    if len(suggestions) < 6:
        suggestions.append(
            "Use keywords naturally throughout your experience descriptions, "
            "not just in a skills list"
        )
        suggestions.append(
            "Proofread for consistency in formatting and ensure all information is up-to-date"
        )

    return list(dict.fromkeys(suggestions))[:MAX_SUGGESTIONS]
