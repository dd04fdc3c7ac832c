"""Calendar date helpers shared by the storage and summary layers."""

import re
from datetime import date, datetime
from typing import Any, Optional


DATE_FORMAT = "%Y-%m-%d"
_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def normalize_date(value: Any) -> Optional[str]:
    """
    Normalize a date-like value into a "YYYY-MM-DD" string.

    Accepts date and datetime objects, date-only strings, and ISO 8601
    datetime strings. Returns None instead of raising for anything else.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    if _DATE_ONLY.match(text):
        try:
            datetime.strptime(text, DATE_FORMAT)
        except ValueError:
            return None
        return text

    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        return None


def parse_date(value: Any) -> Optional[date]:
    """Parse date from string or date object."""
    normalized = normalize_date(value)
    if normalized is None:
        return None
    return datetime.strptime(normalized, DATE_FORMAT).date()


def date_key(value: str) -> str:
    """Key used to align rows by calendar day: the first 10 characters."""
    return value[:10]
