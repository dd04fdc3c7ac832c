"""Signals derived from free-text notes."""

from .text import (
    NEGATIVE_WORDS,
    POSITIVE_WORDS,
    TAG_KEYWORDS,
    analyze_notes,
    count_keywords,
    score_sentiment,
)

__all__ = [
    "NEGATIVE_WORDS",
    "POSITIVE_WORDS",
    "TAG_KEYWORDS",
    "analyze_notes",
    "count_keywords",
    "score_sentiment",
]
