"""
PDF processing utilities for page counting and text extraction.

Helper functions:
    page_count: Quick page count without full extraction.
    extract_lines: Text lines of every page, in reading order.
    normalize_for_matching: Text normalization for fuzzy matching.
    find_section_header: Find header text in a list of lines.
"""

import io
from pathlib import Path
from typing import List, Optional, Union

import pdfplumber
from PyPDF2 import PdfReader
from PyPDF2.errors import PdfReadError

PDFSource = Union[bytes, str, Path]


def _open_source(source: PDFSource):
    """Accept raw PDF bytes or a path."""
    if isinstance(source, (bytes, bytearray)):
        return io.BytesIO(source)
    return str(source)


def page_count(source: PDFSource) -> Optional[int]:
    """Get page count from PDF bytes or path, or None if unreadable."""
    try:
        reader = PdfReader(_open_source(source))
        return len(reader.pages)
    except (PdfReadError, OSError, ValueError):
        return None


def extract_lines(source: PDFSource, max_pages: int = 20) -> List[str]:
    """
    Extract non-empty text lines from a PDF, page by page.

    Args:
        source: PDF bytes or path
        max_pages: Stop after this many pages

    Returns:
        Lines of text in top-to-bottom order across pages
    """
    lines = []
    with pdfplumber.open(_open_source(source)) as pdf:
        for page in pdf.pages[:max_pages]:
            text = page.extract_text() or ""
            lines.extend(line.strip() for line in text.splitlines() if line.strip())
    return lines


def normalize_for_matching(text: str) -> str:
    """Keep only lowercase alphanumeric characters for fuzzy text matching."""
    return "".join(c for c in text.lower() if c.isalnum())


def find_section_header(section_name: str, lines: List[str]) -> Optional[int]:
    """Find index of section header in lines using normalized exact match, or None."""
    section_norm = normalize_for_matching(section_name)

    for i, text in enumerate(lines):
        # Exact match so "Experience" does not match "Relevant Experience Summary"
        if section_norm == normalize_for_matching(text):
            return i

    return None
