"""
Job description keyword extraction.

Two strategies:
- basic: regex families for common languages, frameworks, platforms, tools,
  methods and soft skills. No network, always available.
- llm: asks an LLM provider for categorized keywords and falls back to basic
  extraction when the provider fails or returns too little.

KEYWORD_EXTRACTION (basic|llm) selects the strategy for get_keyword_extractor().
"""

import hashlib
import os
import re
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from dotenv import load_dotenv

from folio.contexts.scoring.logger import _log_debug, _log_info, _log_warning
from folio.utils.llm import LLMProvider, get_provider, parse_dict_response

load_dotenv()

KEYWORD_EXTRACTION = os.getenv("KEYWORD_EXTRACTION", "basic").lower()
EXTRACTION_MODES = ("basic", "llm")

# Categories requested from the LLM, in display order
KEYWORD_CATEGORIES = [
    "technical_skills",
    "soft_skills",
    "education",
    "responsibilities",
    "industry_terms",
    "tools",
    "certifications",
]

MAX_BASIC_KEYWORDS = 15
MIN_DESCRIPTION_LENGTH = 20
MIN_LLM_KEYWORDS = 3
CACHE_TTL_S = 300
CACHE_KEY_CHARS = 500
PROMPT_DESCRIPTION_CHARS = 2000

# =============================================================================
# BASIC EXTRACTION
# =============================================================================

_KEYWORD_FAMILIES = [
    # Programming languages
    r"javascript|typescript|python|java|c\+\+|c#|php|ruby|go|swift|kotlin|rust|scala|r|matlab|sql",
    # Frameworks and libraries
    r"react|angular|vue|node\.?js|express|django|spring|laravel|flask|rails|\.net|bootstrap|jquery",
    # Databases
    r"mysql|postgresql|mongodb|redis|elasticsearch|oracle|sql\s+server|dynamodb|firebase",
    # Cloud and DevOps
    r"aws|azure|google\s+cloud|gcp|docker|kubernetes|terraform|jenkins|github|gitlab|ci/cd",
    # Tools
    r"jira|confluence|slack|teams|figma|sketch|photoshop|illustrator|excel|powerpoint|salesforce",
    # Methods
    r"agile|scrum|kanban|waterfall|lean|devops|machine\s+learning|artificial\s+intelligence"
    r"|data\s+science",
    # Soft skills
    r"leadership|management|communication|collaboration|problem\s+solving|critical\s+thinking"
    r"|project\s+management|time\s+management",
]

# (?<!\w)/(?!\w) instead of \b so "c++", "c#" and ".net" can match
_KEYWORD_PATTERNS = [
    re.compile(rf"(?<!\w)(?:{family})(?!\w)", re.IGNORECASE) for family in _KEYWORD_FAMILIES
]

_SPECIAL_CASES = {
    "nodejs": "Node.js",
    "node.js": "Node.js",
    "javascript": "JavaScript",
    "typescript": "TypeScript",
    "postgresql": "PostgreSQL",
    "mysql": "MySQL",
    "mongodb": "MongoDB",
    "dynamodb": "DynamoDB",
    "github": "GitHub",
    "gitlab": "GitLab",
    "jquery": "jQuery",
    "devops": "DevOps",
    "powerpoint": "PowerPoint",
    "matlab": "MATLAB",
    "c++": "C++",
    "c#": "C#",
    ".net": ".NET",
    "sql server": "SQL Server",
    "google cloud": "Google Cloud Platform",
}

_ACRONYMS = {"aws", "gcp", "php", "sql", "ci/cd"}


def normalize_keyword(keyword: str) -> str:
    """
    Canonical display form of a matched keyword.

    Examples:
        >>> normalize_keyword("nodejs")
        'Node.js'
        >>> normalize_keyword("machine  learning")
        'Machine Learning'
    """
    lower = re.sub(r"\s+", " ", keyword.strip().lower())
    if lower in _SPECIAL_CASES:
        return _SPECIAL_CASES[lower]
    if lower in _ACRONYMS:
        return lower.upper()
    return " ".join(word[:1].upper() + word[1:] for word in lower.split(" "))


def extract_basic_keywords(text: str) -> List[str]:
    """
    Extract well-known technology and skill keywords with regexes.

    Args:
        text: Job description

    Returns:
        Up to 15 normalized, unique keywords in order of first appearance per
        family. Empty for text shorter than 20 characters.
    """
    if not text or len(text.strip()) < MIN_DESCRIPTION_LENGTH:
        return []

    keywords = []
    seen = set()
    for pattern in _KEYWORD_PATTERNS:
        for match in pattern.finditer(text):
            keyword = normalize_keyword(match.group(0))
            if len(keyword) <= 1 or keyword.lower() in seen:
                continue
            seen.add(keyword.lower())
            keywords.append(keyword)

    return keywords[:MAX_BASIC_KEYWORDS]


# =============================================================================
# PROMPT TEMPLATES
# =============================================================================

_SYSTEM_PROMPT = """\
You are a recruiting assistant that extracts ATS keywords from job descriptions.
Return ONLY a JSON object whose values are arrays of strings."""

_USER_PROMPT_TEMPLATE = """\
Analyze this job description and extract keywords into the following categories:

1. technical_skills: Technical abilities, programming languages, hard skills relevant to the job
   Examples: JavaScript, Python, DevOps, API development, software architecture, data analysis

2. soft_skills: Interpersonal abilities, character traits and professional attributes
   Examples: communication, leadership, teamwork, problem-solving, attention to detail

3. education: Required degrees, educational qualifications or academic background
   Examples: Bachelor's degree, MBA, Computer Science, Engineering

4. responsibilities: Key duties, tasks and job functions for the role
   Examples: develop software, manage projects, create reports, lead teams

5. industry_terms: Industry-specific terminology and domain knowledge
   Examples: agile methodology, software development lifecycle, healthcare compliance

6. tools: Software, technologies, platforms, frameworks or specific tools mentioned
   Examples: React, AWS, Docker, Kubernetes, Tableau, SAP, Jira, Git

7. certifications: Professional certifications, licenses or qualifications
   Examples: AWS Certified, PMP, CISSP, CPA, Scrum Master

For each category, extract 5-15 keywords or phrases that appear DIRECTLY in the job description.
If a category has no relevant terms, return an empty array.

IMPORTANT:
- Keep keywords CONCISE (1-4 words each)
- Use the EXACT wording of the job description
- Do not put technical skills in the soft skills category or vice versa
- For responsibilities, prefer action verb + object ("develop applications")
- Prefer specific, technical and industry-specific terms over generic ones

Return a JSON object with these exact keys:
{categories}

---
Job Description:
{content}"""


def build_keyword_prompt(job_description: str) -> str:
    """Build the user prompt for categorized keyword extraction."""
    return _USER_PROMPT_TEMPLATE.format(
        categories=", ".join(KEYWORD_CATEGORIES),
        content=job_description[:PROMPT_DESCRIPTION_CHARS],
    )


# =============================================================================
# EXTRACTOR
# =============================================================================


@dataclass
class KeywordData:
    """
    Extracted keywords.

    Attributes:
        keywords: All keywords, unique, category order
        categories: Category name -> keywords ("general" for basic extraction)
        source: "basic" or "llm"
    """

    keywords: List[str] = field(default_factory=list)
    categories: Dict[str, List[str]] = field(default_factory=dict)
    source: str = "basic"


def basic_keyword_data(job_description: str) -> KeywordData:
    keywords = extract_basic_keywords(job_description)
    return KeywordData(keywords=keywords, categories={"general": keywords}, source="basic")


class KeywordExtractor:
    """
    Extracts keywords from job descriptions, optionally through an LLM.

    LLM results are cached per job description (keyed on its first 500
    characters) for five minutes. Fallback results are cached too, so a failing
    provider is not retried on every call.

    Args:
        mode: "basic" or "llm" (default: KEYWORD_EXTRACTION env var)
        provider: LLM provider; created with get_provider() on first use if None
        ttl_seconds: Cache lifetime
    """

    def __init__(
        self,
        mode: Optional[str] = None,
        provider: Optional[LLMProvider] = None,
        ttl_seconds: float = CACHE_TTL_S,
    ):
        self.mode = (mode or KEYWORD_EXTRACTION).lower()
        if self.mode not in EXTRACTION_MODES:
            raise ValueError(
                f"Unknown keyword extraction mode '{self.mode}'. Use one of: {EXTRACTION_MODES}"
            )
        self._provider = provider
        self.ttl_seconds = ttl_seconds
        self._cache: Dict[str, tuple] = {}

    @staticmethod
    def cache_key(job_description: str) -> str:
        return hashlib.sha256(job_description[:CACHE_KEY_CHARS].encode("utf-8")).hexdigest()

    def clear_cache(self) -> None:
        self._cache.clear()

    def _evict_expired(self) -> None:
        now = time.monotonic()
        stale = [k for k, (stored, _) in self._cache.items() if now - stored >= self.ttl_seconds]
        for k in stale:
            del self._cache[k]

    def extract(self, job_description: str) -> KeywordData:
        """
        Extract keywords from a job description.

        Never raises for provider problems; those fall back to basic extraction.
        """
        if self.mode == "basic":
            return basic_keyword_data(job_description)

        key = self.cache_key(job_description)
        self._evict_expired()
        cached = self._cache.get(key)
        if cached is not None:
            _log_debug("Keyword cache hit")
            return cached[1]

        data = self._extract_with_llm(job_description)
        self._cache[key] = (time.monotonic(), data)
        return data

    def _extract_with_llm(self, job_description: str) -> KeywordData:
        try:
            if self._provider is None:
                self._provider = get_provider()
            response = self._provider.generate(
                system_prompt=_SYSTEM_PROMPT, user_prompt=build_keyword_prompt(job_description)
            )
        except Exception as e:
            _log_warning(f"LLM keyword extraction failed, using basic extraction: {e}")
            return basic_keyword_data(job_description)

        parsed = parse_dict_response(response.content)
        categories = {}
        keywords = []
        for category in KEYWORD_CATEGORIES:
            terms = [term.strip() for term in parsed.get(category, []) if term.strip()]
            categories[category] = terms
            keywords.extend(term for term in terms if term not in keywords)

        if len(keywords) < MIN_LLM_KEYWORDS:
            _log_warning(f"LLM returned {len(keywords)} keywords, using basic extraction")
            return basic_keyword_data(job_description)

        _log_info(f"Extracted {len(keywords)} keywords with {self._provider.name}")
        return KeywordData(keywords=keywords, categories=categories, source="llm")


_default_extractor: KeywordExtractor = None


def get_keyword_extractor() -> KeywordExtractor:
    """Process-wide extractor configured from KEYWORD_EXTRACTION."""
    global _default_extractor
    if _default_extractor is None:
        _default_extractor = KeywordExtractor()
    return _default_extractor
