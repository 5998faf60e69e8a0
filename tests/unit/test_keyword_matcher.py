"""Unit tests for keyword variations and matching."""

import pytest

from folio.contexts.scoring.keyword_matcher import (
    build_resume_text,
    is_keyword_match,
    keyword_variations,
    match_keywords,
)


@pytest.mark.unit
def test_keyword_variations_for_phrase():
    """Test table synonyms plus hyphenated and concatenated forms."""
    assert keyword_variations("Machine Learning") == [
        "machine learning",
        "ml",
        "machine-learning",
        "machinelearning",
    ]


@pytest.mark.unit
def test_keyword_variations_for_hyphenated():
    """Test that hyphens expand to spaced and concatenated forms."""
    assert keyword_variations("front-end") == ["front-end", "front end", "frontend"]


@pytest.mark.unit
@pytest.mark.parametrize(
    "keyword,text",
    [
        ("JavaScript", "built dashboards in js and react"),
        ("C++", "wrote c++ services for trading"),
        ("Machine Learning", "applied machine-learning to churn"),
        ("Node.js", "apis written in nodejs"),
        ("Python", "python, sql and bash"),
    ],
)
def test_keyword_matches(keyword, text):
    """Test keywords found under one of their spellings."""
    assert is_keyword_match(keyword, text)


@pytest.mark.unit
def test_whole_word_required():
    """Test that Java does not match inside JavaScript."""
    assert not is_keyword_match("Java", "senior javascript developer")


@pytest.mark.unit
def test_compound_parts_match_separately():
    """Test that every part of a compound keyword counts when present."""
    assert is_keyword_match("project management", "led management of each project")


@pytest.mark.unit
def test_short_compound_parts_do_not_match():
    """Test that compound parts shorter than three characters are not matched alone."""
    assert not is_keyword_match("UI design", "designed the ui layout")


@pytest.mark.unit
def test_uppercase_acronym_substring():
    """Test that short uppercase acronyms match as substrings."""
    assert is_keyword_match("AWS", "automated deploys with awscli")
    assert not is_keyword_match("aws", "automated deploys with awscli")


@pytest.mark.unit
def test_build_resume_text(sample_resume):
    """Test that resume text is lowercase and covers every section."""
    text = build_resume_text(sample_resume)

    assert text == text.lower()
    assert "riverbend health" in text
    assert "university of colorado boulder" in text
    assert "postgresql" in text
    assert "aws certified data analytics" in text
    assert "mentoring" in text


@pytest.mark.unit
def test_match_keywords(sample_resume):
    """Test per-category and de-duplicated overall results."""
    text = build_resume_text(sample_resume)
    feedback = match_keywords(
        {"technical_skills": ["Python", "Kubernetes"], "tools": ["Python", "Docker"]}, text
    )

    assert feedback.found == ["Python", "Docker"]
    assert feedback.missing == ["Kubernetes"]
    assert feedback.all == ["Python", "Kubernetes", "Docker"]
    assert feedback.categories["technical_skills"].missing == ["Kubernetes"]
    assert feedback.categories["tools"].found == ["Python", "Docker"]
    assert feedback.match_ratio == pytest.approx(2 / 3)


@pytest.mark.unit
def test_match_keywords_empty():
    """Test matching with no keywords."""
    feedback = match_keywords({}, "anything")

    assert feedback.all == []
    assert feedback.match_ratio == 0.0
