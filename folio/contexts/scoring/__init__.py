"""
Scoring Context

Responsibilities:
- Extracts keywords from job descriptions (regex families or an LLM provider)
- Matches keywords against resume content, including common variations
- Scores resumes for ATS compatibility and explains the score

Owns: Keyword extraction, keyword matching, ATS sub-scores and suggestions
Never: Modifies resume data or renders documents
"""

from folio.contexts.scoring.ats_scorer import calculate_ats_score
from folio.contexts.scoring.keyword_extractor import (
    KeywordExtractor,
    extract_basic_keywords,
    get_keyword_extractor,
)
from folio.contexts.scoring.models import ATSScoreResult

__all__ = [
    "ATSScoreResult",
    "KeywordExtractor",
    "calculate_ats_score",
    "extract_basic_keywords",
    "get_keyword_extractor",
]
