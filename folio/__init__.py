"""
FOLIO - Formatted Output Layouts for Interviews and Openings

A resume and cover-letter template engine with multi-format export and a
heuristic ATS (Applicant Tracking System) compatibility scorer.

Architecture:
- Templating Context: Structured resume data, customization, template registry and factory
- Rendering Context: Export to HTML, LaTeX, DOCX and PDF
- Scoring Context: Keyword extraction, keyword matching and ATS scoring
"""

__version__ = "0.1.0"
