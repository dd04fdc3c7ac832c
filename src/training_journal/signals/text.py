"""
Keyword-based signals from free-text daily notes.

Notes are scanned for a fixed vocabulary: two polarity lists feed a bounded
sentiment score, and six category lists feed tag counts. Matching is plain
substring containment on the lower-cased text, and each keyword counts at
most once per note.
"""

from typing import Dict, Optional, Tuple

from ..models.journal import NoteSignals, TAG_CATEGORIES


NEGATIVE_WORDS: Tuple[str, ...] = (
    "tired", "flat", "sore", "ache", "pain", "can't sleep", "cant sleep",
    "stressed", "anxious", "overwhelmed", "heavy", "ill", "sick", "injury",
    "tight", "cramp", "exhausted", "fatigue", "burnout",
)

POSITIVE_WORDS: Tuple[str, ...] = (
    "good", "great", "strong", "happy", "fresh", "energized", "excited",
    "confident", "sharp", "better", "proud", "motivated", "ready",
)

TAG_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "fatigue": ("tired", "fatigue", "exhausted", "flat", "heavy", "burnout"),
    "stress": ("stress", "stressed", "anxious", "overwhelmed", "pressure"),
    "pain": ("sore", "pain", "ache", "injury", "tight", "cramp"),
    "confidence": ("confident", "confidence", "ready", "strong", "sharp"),
    "sleep": ("sleep", "can't sleep", "cant sleep", "insomnia", "restless"),
    "nutrition": ("hungry", "ate", "food", "nutrition", "fuel", "hydrated", "dehydrated"),
}

# Net polarity at which sentiment saturates at +/-1
SENTIMENT_SATURATION = 5


def count_keywords(text: str, keywords: Tuple[str, ...]) -> int:
    """Number of distinct keywords contained in ``text``."""
    return sum(1 for word in keywords if word in text)


def score_sentiment(positive_hits: int, negative_hits: int) -> float:
    """
    Map net polarity hits onto [-1, 1].

    Linear in (positive - negative), clipped once the difference reaches
    SENTIMENT_SATURATION in either direction.
    """
    raw = positive_hits - negative_hits
    scaled = (raw + SENTIMENT_SATURATION) / (2 * SENTIMENT_SATURATION)
    return max(0.0, min(1.0, scaled)) * 2 - 1


def analyze_notes(notes: Optional[str]) -> NoteSignals:
    """
    Extract sentiment and tag counts from a day's notes.

    Args:
        notes: Free text as entered by the user (may be None or empty)

    Returns:
        NoteSignals with sentiment in [-1, 1] and a count for every
        category in TAG_CATEGORIES
    """
    text = (notes or "").lower()
    if not text.strip():
        return NoteSignals()

    sentiment = score_sentiment(
        count_keywords(text, POSITIVE_WORDS),
        count_keywords(text, NEGATIVE_WORDS),
    )
    tags = {category: count_keywords(text, TAG_KEYWORDS[category]) for category in TAG_CATEGORIES}

    return NoteSignals(sentiment=sentiment, tags=tags)
