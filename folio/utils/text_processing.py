"""
Text processing utilities for formatting, escaping and comparison.
"""

import re
from typing import List, Set

# Character -> LaTeX escape sequence
LATEX_SPECIAL_CHARS = [
    ("\\", r"\textbackslash{}"),
    ("&", r"\&"),
    ("%", r"\%"),
    ("$", r"\$"),
    ("#", r"\#"),
    ("_", r"\_"),
    ("{", r"\{"),
    ("}", r"\}"),
    ("~", r"\textasciitilde{}"),
    ("^", r"\textasciicircum{}"),
    ("<", r"\textless{}"),
    (">", r"\textgreater{}"),
]

_LATEX_ESCAPE_PATTERN = re.compile("|".join(re.escape(char) for char, _ in LATEX_SPECIAL_CHARS))
_LATEX_ESCAPE_MAP = dict(LATEX_SPECIAL_CHARS)


def escape_latex(text) -> str:
    """
    Escape LaTeX special characters in plain text.

    None becomes an empty string. All replacements happen in a single pass so
    inserted escapes are never escaped again.

    Example:
        >>> escape_latex("R&D at 100%")
        'R\\&D at 100\\%'
    """
    if text is None:
        return ""
    return _LATEX_ESCAPE_PATTERN.sub(lambda m: _LATEX_ESCAPE_MAP[m.group(0)], str(text))


def set_max_consecutive_blank_lines(content: str, max_consecutive: int = 1) -> str:
    """
    Normalize consecutive blank lines to a maximum number.

    Args:
        content: The text content to normalize
        max_consecutive: Maximum number of consecutive blank lines to allow.
                        Use 0 to remove all blank lines (default: 1)

    Returns:
        Content with normalized blank lines

    Example:
        >>> set_max_consecutive_blank_lines("text\\n\\n\\n\\nmore", max_consecutive=1)
        'text\\n\\nmore'
    """
    if max_consecutive == 0:
        pattern = r"\n\s*\n(\s*\n)*"
    else:
        pattern = r"\n\s*\n(\s*\n)+"

    # max_consecutive=1 means "\n\n", i.e. one blank line
    replacement = "\n" * (max_consecutive + 1)

    return re.sub(pattern, replacement, content)


def significant_words(text: str, min_length: int = 4) -> Set[str]:
    """Lowercase words of at least min_length characters."""
    return {word for word in re.split(r"\s+", (text or "").lower()) if len(word) >= min_length}


def similarity(text1: str, text2: str) -> float:
    """
    Jaccard similarity of the significant (4+ character) words of two texts.

    Returns:
        Value in [0, 1]; 0 when either text has no significant words

    Example:
        >>> similarity("Built data pipelines", "Built data pipelines")
        1.0
    """
    words1 = significant_words(text1)
    words2 = significant_words(text2)

    if not words1 or not words2:
        return 0.0

    return len(words1 & words2) / len(words1 | words2)


def word_count(text: str) -> int:
    """Number of whitespace-separated words."""
    return len((text or "").split())


def split_paragraphs(text: str) -> List[str]:
    """Split text on blank lines, dropping empty paragraphs."""
    return [p.strip() for p in re.split(r"\n\s*\n", text or "") if p.strip()]


def safe_filename(name: str, default: str = "resume") -> str:
    """
    Turn a display name into a filesystem-safe stem.

    Example:
        >>> safe_filename("Jane Q. Doe")
        'Jane_Q_Doe'
    """
    stem = re.sub(r"[^\w\s-]", "", name or "").strip()
    stem = re.sub(r"[\s-]+", "_", stem)
    return stem or default
