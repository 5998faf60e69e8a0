"""
Shared utilities for FOLIO.

Common functionality used across contexts:
- Text processing and LaTeX escaping
- Resume date formatting
- PDF inspection
- LLM provider access
"""

from folio.utils.timestamp import format_date_range, format_resume_date, now

__all__ = ["format_date_range", "format_resume_date", "now"]
