"""Unit tests for shared text, date, PDF-matching and LLM-parsing utilities."""

import pytest

from folio.utils.llm import get_provider, parse_dict_response
from folio.utils.pdf_processing import find_section_header, normalize_for_matching
from folio.utils.text_processing import (
    escape_latex,
    safe_filename,
    set_max_consecutive_blank_lines,
    similarity,
    split_paragraphs,
    word_count,
)
from folio.utils.timestamp import (
    extract_year,
    format_date_range,
    format_long_date,
    format_resume_date,
    parse_resume_date,
)

# Text processing


@pytest.mark.unit
def test_escape_latex_special_characters():
    """Test that every LaTeX special character is escaped exactly once."""
    assert escape_latex("R&D at 100% for $5 #1") == r"R\&D at 100\% for \$5 \#1"
    assert escape_latex("a_b {c}") == r"a\_b \{c\}"
    assert escape_latex("back\\slash") == r"back\textbackslash{}slash"
    assert escape_latex(None) == ""


@pytest.mark.unit
def test_set_max_consecutive_blank_lines():
    """Test blank line normalization."""
    assert set_max_consecutive_blank_lines("a\n\n\n\nb", 1) == "a\n\nb"
    assert set_max_consecutive_blank_lines("a\n\n\nb", 0) == "a\nb"
    assert set_max_consecutive_blank_lines("a\n\nb", 1) == "a\n\nb"


@pytest.mark.unit
def test_similarity():
    """Test Jaccard similarity over 4+ character words."""
    assert similarity("Built data pipelines", "built data pipelines") == 1.0
    assert similarity("Built data pipelines", "Designed mobile apps") == 0.0
    assert similarity("a an the", "a an the") == 0.0
    assert similarity("built data pipelines daily", "built data pipelines weekly") == 0.6


@pytest.mark.unit
def test_word_count_and_paragraphs():
    """Test word counting and paragraph splitting."""
    assert word_count("  one two\nthree ") == 3
    assert word_count("") == 0
    assert split_paragraphs("First.\n\n  \nSecond\nline.\n\n") == ["First.", "Second\nline."]


@pytest.mark.unit
def test_safe_filename():
    """Test filesystem-safe stems from display names."""
    assert safe_filename("Jane Q. Doe") == "Jane_Q_Doe"
    assert safe_filename("Ana-María  López") == "Ana_María_López"
    assert safe_filename("", default="cover_letter") == "cover_letter"


# Dates


@pytest.mark.unit
@pytest.mark.parametrize(
    "value, expected",
    [
        ("2021-05", "May 2021"),
        ("2021-05-17", "May 2021"),
        ("05/2021", "May 2021"),
        ("May 2021", "May 2021"),
        ("2019", "2019"),
        ("Summer 2019", "Summer 2019"),
        ("", "Present"),
    ],
)
def test_format_resume_date(value, expected):
    """Test display formatting of loosely formatted resume dates."""
    assert format_resume_date(value) == expected


@pytest.mark.unit
def test_format_date_range():
    """Test date ranges with end dates, current roles and missing dates."""
    assert format_date_range("2019-01", "2021-06") == "Jan 2019 - Jun 2021"
    assert format_date_range("2019-01", "", current=True) == "Jan 2019 - Present"
    assert format_date_range("2019-01", "2021-06", current=True) == "Jan 2019 - Present"
    assert format_date_range("", "") == ""


@pytest.mark.unit
def test_parse_and_extract_year():
    """Test date parsing and leading-year extraction."""
    assert parse_resume_date("2021-05").year == 2021
    assert parse_resume_date("not a date") is None
    assert extract_year("May 2021") == 2021
    assert extract_year("2018-03") == 2018
    assert extract_year("recently") is None
    assert extract_year("") is None


@pytest.mark.unit
def test_format_long_date():
    """Test long letter-style dates."""
    assert format_long_date("2025-03-04") == "March 4, 2025"
    assert format_long_date("next week") == "next week"


# PDF text matching


@pytest.mark.unit
def test_normalize_and_find_section_header():
    """Test normalized exact header matching."""
    lines = ["JANE DOE", "Relevant Experience Summary", "EXPERIENCE", "Education"]

    assert normalize_for_matching("Work-Experience!") == "workexperience"
    assert find_section_header("Experience", lines) == 2
    assert find_section_header("Projects", lines) is None


# LLM response parsing


@pytest.mark.unit
def test_parse_dict_response_variants():
    """Test bare JSON, fenced JSON and JSON embedded in prose."""
    expected = {"tools": ["Docker"], "soft_skills": []}

    assert parse_dict_response('{"tools": ["Docker"], "soft_skills": []}') == expected
    assert parse_dict_response('```json\n{"tools": ["Docker"], "soft_skills": []}\n```') == expected
    assert parse_dict_response('Here you go: {"tools": ["Docker"], "soft_skills": "n/a"}') == expected


@pytest.mark.unit
def test_parse_dict_response_fallback():
    """Test fallback when no JSON object can be parsed."""
    assert parse_dict_response("no json here") == {}
    assert parse_dict_response("[1, 2]", fallback_dict={"general": []}) == {"general": []}


@pytest.mark.unit
def test_get_provider_unknown():
    """Test error for an unknown provider name."""
    with pytest.raises(ValueError, match="Unknown provider"):
        get_provider("mystery")
