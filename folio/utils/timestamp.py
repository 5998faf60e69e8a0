"""Timestamp and resume date formatting utilities."""

import re
from datetime import date, datetime
from typing import Optional

# Accepted input layouts for resume dates, tried in order
RESUME_DATE_FORMATS = ["%Y-%m-%d", "%Y-%m", "%m/%Y", "%m/%d/%Y", "%b %Y", "%B %Y", "%Y"]

PRESENT_LABEL = "Present"


def now() -> str:
    """Current local time as a filesystem-safe stamp (e.g., 20251114_123456)."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def parse_resume_date(value: str) -> Optional[datetime]:
    """
    Parse a loosely formatted resume date.

    Accepts ISO dates and datetimes, "YYYY-MM", "MM/YYYY", "May 2021" and bare years.

    Returns:
        Parsed datetime, or None if the value matches no known layout
    """
    if not value:
        return None

    text = str(value).strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        pass

    for fmt in RESUME_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue

    return None


def format_resume_date(value: Optional[str]) -> str:
    """
    Format a resume date for display as "Mon YYYY".

    Empty values mean an ongoing position and render as "Present". Bare years stay
    bare years. Values that cannot be parsed are returned unchanged.

    Examples:
        >>> format_resume_date("2021-05")
        'May 2021'
        >>> format_resume_date("")
        'Present'
        >>> format_resume_date("Summer 2019")
        'Summer 2019'
    """
    if not value:
        return PRESENT_LABEL

    text = str(value).strip()
    if re.fullmatch(r"\d{4}", text):
        return text

    parsed = parse_resume_date(text)
    if parsed is None:
        return text
    return parsed.strftime("%b %Y")


def format_date_range(start: Optional[str], end: Optional[str], current: bool = False) -> str:
    """
    Format a start/end pair as "Mon YYYY - Mon YYYY" (or "- Present").

    Returns an empty string when there is no start date and no end date.
    """
    if not start and not end and not current:
        return ""

    end_label = PRESENT_LABEL if current else format_resume_date(end)
    if not start:
        return end_label
    return f"{format_resume_date(start)} - {end_label}"


def extract_year(value: Optional[str]) -> Optional[int]:
    """
    Return the leading four-digit year of a date string, or None.

    Examples:
        >>> extract_year("2021-05")
        2021
        >>> extract_year("May 2021")
        2021
    """
    if not value:
        return None
    match = re.search(r"\b(\d{4})\b", str(value))
    return int(match.group(1)) if match else None


def format_long_date(value: Optional[str] = None) -> str:
    """
    Format a date in long letter style (e.g., "October 17, 2026").

    Defaults to today when no value is given; unparseable values pass through.
    """
    if not value:
        return _long(date.today())

    parsed = parse_resume_date(value)
    if parsed is None:
        return str(value)
    return _long(parsed.date())


def _long(d: date) -> str:
    return f"{d.strftime('%B')} {d.day}, {d.year}"
