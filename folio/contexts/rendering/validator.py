"""
PDF parseability check.

Applicant tracking systems read the text layer of a PDF. This module extracts
that text the way a parser would and confirms the essentials survived: the
candidate's name, email and every section heading.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from folio.contexts.rendering.logger import _log_debug, _log_warning
from folio.contexts.templating.base_template import BaseTemplate, ResumeTemplate
from folio.contexts.templating.defaults import SECTION_HEADINGS
from folio.contexts.templating.resume_data_structure import ResumeData, coerce_document
from folio.utils.pdf_processing import (
    PDFSource,
    extract_lines,
    find_section_header,
    normalize_for_matching,
    page_count,
)


@dataclass
class ParseabilityResult:
    """
    Result of checking a PDF's text layer.

    Attributes:
        is_parseable: Text was extracted and no expected field is missing
        page_count: Number of pages (None if the PDF could not be read)
        missing_fields: Expected values not found (e.g. "email", "heading:Experience")
        text: Extracted text, one line per text line
    """

    is_parseable: bool
    page_count: Optional[int] = None
    missing_fields: List[str] = field(default_factory=list)
    text: str = ""


def _expected_headings(data: ResumeData, template: Optional[BaseTemplate]) -> List[str]:
    if isinstance(template, ResumeTemplate):
        return [section.heading for section in template.outline(data).sections]
    return [SECTION_HEADINGS[key] for key in data.ordered_sections(list(SECTION_HEADINGS))]


def _heading_found(heading: str, lines: List[str]) -> bool:
    if find_section_header(heading, lines) is not None:
        return True
    # Two-column pages extract the sidebar and main column onto shared lines
    target = normalize_for_matching(heading)
    normalized_lines = [normalize_for_matching(line) for line in lines]
    return any(line.startswith(target) or line.endswith(target) for line in normalized_lines)


def check_pdf_parseability(
    pdf_bytes: PDFSource, data: Any, template: Optional[BaseTemplate] = None
) -> ParseabilityResult:
    """
    Check that a PDF's extractable text contains the document's key content.

    Args:
        pdf_bytes: PDF content or path
        data: ResumeData, CoverLetterData or mapping the PDF was built from
        template: Template used for the export; supplies its section headings

    Returns:
        ParseabilityResult
    """
    kind = template.kind if template is not None else None
    document = coerce_document(data, kind=kind)

    pages = page_count(pdf_bytes)
    if pages is None:
        _log_warning("PDF could not be read")
        return ParseabilityResult(is_parseable=False, missing_fields=["text"])

    lines = extract_lines(pdf_bytes)
    text = "\n".join(lines)
    normalized = normalize_for_matching(text)

    expected = {"full_name": document.full_name, "email": document.email}
    if isinstance(document, ResumeData):
        expected.update(
            {f"heading:{heading}": heading for heading in _expected_headings(document, template)}
        )
    else:
        expected["company_name"] = document.company_name

    missing = []
    for name, value in expected.items():
        if not value:
            continue
        if name.startswith("heading:"):
            found = _heading_found(value, lines)
        else:
            found = normalize_for_matching(value) in normalized
        if not found:
            missing.append(name)

    if missing:
        _log_warning(f"PDF text is missing: {', '.join(missing)}")
    else:
        _log_debug(f"PDF text layer OK ({pages} pages, {len(lines)} lines)")

    return ParseabilityResult(
        is_parseable=bool(lines) and not missing,
        page_count=pages,
        missing_fields=missing,
        text=text,
    )
