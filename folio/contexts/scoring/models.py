"""
ATS score result types.

Plain dataclasses so results can be logged, compared in tests and dumped to
JSON/YAML with to_dict().
"""

import math
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class KeywordCategoryFeedback:
    """Keyword matches within one extractor category (e.g. "technical_skills")."""

    found: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)
    all: List[str] = field(default_factory=list)


@dataclass
class KeywordsFeedback:
    """
    Keyword matches across the whole job description.

    Attributes:
        found: Keywords present in the resume, first occurrence order, unique
        missing: Keywords absent from the resume, unique
        all: Every extracted keyword, unique
        categories: Per-category breakdown
    """

    found: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)
    all: List[str] = field(default_factory=list)
    categories: Dict[str, KeywordCategoryFeedback] = field(default_factory=dict)

    @property
    def match_ratio(self) -> float:
        return len(self.found) / len(self.all) if self.all else 0.0


@dataclass
class CategoryFeedback:
    """Score and one-line verdict for a scoring dimension."""

    category: str
    score: int
    feedback: str
    priority: str = "medium"


@dataclass
class ATSFeedback:
    general_feedback: List[CategoryFeedback] = field(default_factory=list)
    keywords_feedback: KeywordsFeedback = field(default_factory=KeywordsFeedback)
    overall_suggestions: List[str] = field(default_factory=list)


@dataclass
class ATSScoreResult:
    """
    Result of calculate_ats_score().

    Attributes:
        general_score: Weighted overall score, 0-100
        job_specific_score: Keyword match score, None when no scoring ran
        feedback: Per-dimension feedback, keyword breakdown and suggestions
    """

    general_score: int
    job_specific_score: Optional[int] = None
    feedback: ATSFeedback = field(default_factory=ATSFeedback)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def round_score(value: float) -> int:
    """Round half up (2.5 -> 3), unlike round()'s banker's rounding."""
    return int(math.floor(value + 0.5))


def clamp_score(value: float, low: int = 0, high: int = 100) -> int:
    return max(low, min(high, round_score(value)))
