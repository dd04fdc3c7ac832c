"""Tests for weekly journal summaries."""

from datetime import date

import pytest

from training_journal.analysis.weekly import (
    get_week_range,
    summarize_week,
    weekly_average_heart_rate,
    weekly_mood_trend,
    weekly_training_averages,
    weekly_training_volume,
)
from training_journal.models.entries import DailyEntry
from training_journal.models.journal import RiskResult


WEDNESDAY = date(2024, 3, 13)


def entry(day: str, **fields) -> DailyEntry:
    return DailyEntry(user_id="u1", date=day, **fields)


@pytest.fixture
def week_entries():
    """Entries around the week of Sun 2024-03-10 .. Sat 2024-03-16."""
    return [
        entry("2024-03-09", mood=1, training_volume=50, heart_rate=90),  # previous Saturday
        entry("2024-03-10", mood=5, training_volume=10, heart_rate=60),
        entry("2024-03-12", mood=4, training_volume=6.5, heart_rate=65),
        entry("2024-03-13", mood=0, heart_rate=62),
        entry("2024-03-16", mood=5, training_volume=3.5),
        entry("2024-03-17", mood=1, training_volume=40),  # next Sunday
    ]


class TestWeekRange:

    def test_sunday_start(self):
        assert get_week_range(WEDNESDAY) == (date(2024, 3, 10), date(2024, 3, 16))

    def test_sunday_is_its_own_start(self):
        assert get_week_range(date(2024, 3, 10))[0] == date(2024, 3, 10)

    def test_saturday_ends_week(self):
        assert get_week_range(date(2024, 3, 16)) == (date(2024, 3, 10), date(2024, 3, 16))


class TestWeeklyTotals:

    def test_volume(self, week_entries):
        volume = weekly_training_volume(week_entries, WEDNESDAY)
        assert volume.total == 20.0
        assert volume.entry_count == 4
        assert volume.average == 5.0

    def test_volume_empty_week(self):
        volume = weekly_training_volume([], WEDNESDAY)
        assert (volume.total, volume.average, volume.entry_count) == (0.0, 0.0, 0)

    def test_average_heart_rate(self, week_entries):
        assert weekly_average_heart_rate(week_entries, WEDNESDAY) == pytest.approx(62.3)

    def test_average_heart_rate_none_logged(self):
        assert weekly_average_heart_rate([entry("2024-03-12", mood=3)], WEDNESDAY) == 0.0

    def test_accepts_plain_dict_rows(self):
        rows = [{"date": "2024-03-11", "training_volume": 4}, {"date": "2024-03-12"}]
        assert weekly_training_volume(rows, WEDNESDAY).total == 4.0


class TestMoodTrend:

    def test_great_week(self, week_entries):
        # Logged moods 5, 4, 5 -> 4.67; mood 0 is ignored
        assert weekly_mood_trend(week_entries, WEDNESDAY) == "Great week!"

    @pytest.mark.parametrize("moods,label", [
        ([4, 3], "Good week!"),
        ([3, 2], "Okay week."),
        ([2, 2], "Tough week."),
    ])
    def test_labels(self, moods, label):
        entries = [entry(f"2024-03-1{i}", mood=m) for i, m in enumerate(moods)]
        assert weekly_mood_trend(entries, WEDNESDAY) == label

    def test_no_mood_data(self):
        assert weekly_mood_trend([entry("2024-03-12", mood=0)], WEDNESDAY) == "No mood data"


class TestTrainingAverages:

    def test_oldest_first_with_iso_week_labels(self, week_entries):
        averages = weekly_training_averages(week_entries, 3, today=WEDNESDAY)

        assert [a.label for a in averages] == ["Week 8", "Week 9", "Week 10"]
        assert [a.week_start for a in averages] == [
            date(2024, 2, 25), date(2024, 3, 3), date(2024, 3, 10),
        ]
        assert averages[1].average == 50.0
        assert averages[2].average == 5.0
        assert averages[0].average == 0.0

    def test_rounded_to_two_decimals(self):
        entries = [entry("2024-03-11", training_volume=1), entry("2024-03-12", training_volume=1),
                   entry("2024-03-13", training_volume=0)]
        assert weekly_training_averages(entries, 1, today=WEDNESDAY)[0].average == 0.67


class TestSummarizeWeek:

    def test_summary_dict(self, week_entries):
        risk = RiskResult(
            user_id="u1", date="2024-03-13",
            overtrain_risk=0.8, motivation_risk=0.1, performance_risk=0.51,
            drivers=["ACWR high (1.60)"],
        )

        summary = summarize_week(week_entries, WEDNESDAY, risk=risk).to_dict()

        assert summary["week_start"] == "2024-03-10"
        assert summary["week_end"] == "2024-03-16"
        assert summary["volume"]["total"] == 20.0
        assert summary["mood_trend"] == "Great week!"
        assert summary["risk"]["drivers"] == ["ACWR high (1.60)"]
        assert "Top risk driver: ACWR high (1.60)" in summary["insights"]

    def test_empty_week(self):
        summary = summarize_week([], WEDNESDAY)
        assert summary.risk is None
        assert summary.insights == ["Nothing logged this week yet."]
