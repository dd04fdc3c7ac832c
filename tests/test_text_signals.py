"""Tests for keyword-based note signal extraction."""

import pytest

from training_journal.models.journal import TAG_CATEGORIES
from training_journal.signals.text import (
    analyze_notes,
    count_keywords,
    score_sentiment,
)


class TestAnalyzeNotes:
    """Tests for analyze_notes."""

    def test_school_stress_note(self):
        """Tired, sore and stressed note is negative with matching tags."""
        signals = analyze_notes("Felt tired and sore, stressed about school")

        assert signals.tag("fatigue") >= 1
        assert signals.tag("pain") >= 1
        assert signals.tag("stress") >= 1
        assert signals.tag("confidence") == 0
        assert signals.sentiment <= 0
        assert signals.sentiment == pytest.approx(-0.6)

    def test_stress_counts_distinct_keywords(self):
        """'stressed' contains 'stress', so both keywords count."""
        signals = analyze_notes("stressed")
        assert signals.tag("stress") == 2

    def test_empty_notes(self):
        """Empty and None notes give neutral sentiment and zero tags."""
        for notes in ("", "   ", None):
            signals = analyze_notes(notes)
            assert signals.sentiment == 0.0
            assert all(signals.tag(c) == 0 for c in TAG_CATEGORIES)

    def test_case_insensitive(self):
        signals = analyze_notes("TIRED and HEAVY legs")
        assert signals.tag("fatigue") == 2

    def test_every_category_reported(self):
        signals = analyze_notes("great run")
        assert set(signals.tags) == set(TAG_CATEGORIES)

    def test_positive_note(self):
        signals = analyze_notes("Felt strong and confident, ready to race")
        assert signals.sentiment > 0
        assert signals.tag("confidence") == 3

    def test_deterministic(self):
        text = "sore calves but happy with the session"
        assert analyze_notes(text) == analyze_notes(text)


class TestSentimentScore:
    """Tests for the bounded sentiment mapping."""

    def test_neutral(self):
        assert score_sentiment(2, 2) == 0.0

    def test_saturates(self):
        assert score_sentiment(5, 0) == 1.0
        assert score_sentiment(9, 0) == 1.0
        assert score_sentiment(0, 5) == -1.0
        assert score_sentiment(0, 12) == -1.0

    def test_monotonic_in_net_polarity(self):
        scores = [score_sentiment(p, 0) for p in range(0, 7)]
        assert scores == sorted(scores)

    def test_bounds(self):
        for pos in range(10):
            for neg in range(10):
                assert -1.0 <= score_sentiment(pos, neg) <= 1.0


class TestCountKeywords:

    def test_each_keyword_counts_once(self):
        assert count_keywords("tired tired tired", ("tired",)) == 1

    def test_substring_match(self):
        assert count_keywords("painful", ("pain",)) == 1
