"""Shared utilities."""

from .dates import normalize_date, parse_date, date_key
from .log_sanitizer import install_log_sanitizer, sanitize_string

__all__ = [
    "normalize_date",
    "parse_date",
    "date_key",
    "install_log_sanitizer",
    "sanitize_string",
]
