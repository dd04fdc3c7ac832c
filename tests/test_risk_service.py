"""Tests for RiskService: saving journal data keeps risk scores current."""

import logging
from datetime import date, timedelta
from unittest.mock import Mock

import pytest

from training_journal.config import Settings
from training_journal.exceptions import InvalidDateError
from training_journal.models.entries import DailyMetricsRecord
from training_journal.services.risk_service import RiskService, prior_signals_from_metrics


USER = "athlete-1"
NEGATIVE_NOTES = "Felt tired and sore, stressed about school"


def log_days(service, start, volumes, rpes, moods):
    """Save one entry plus metrics per day through the service."""
    for i, (volume, rpe, mood) in enumerate(zip(volumes, rpes, moods)):
        day = start + timedelta(days=i)
        service.save_entry(USER, day, training_volume=volume, mood=mood)
        service.save_metrics(USER, day, rpe=rpe)
    return (start + timedelta(days=len(volumes) - 1)).isoformat()


class TestRecompute:
    """Tests for recompute and the save hooks."""

    def test_save_entry_stores_risk(self, service):
        service.save_entry(USER, "2024-03-01", mood=4, training_volume=5)

        result = service.get_risk(USER, "2024-03-01")

        assert result is not None
        assert result.date == "2024-03-01"
        assert result.model_version == "A-2"

    def test_load_jump_is_scored_from_stored_history(self, service, start_date):
        last = log_days(
            service,
            start_date,
            volumes=[5] * 30 + [15] * 3,
            rpes=[5] * 30 + [7] * 3,
            moods=[4] * 29 + [2] * 4,
        )

        result = service.get_risk(USER, last)

        assert result.drivers[:3] == [
            "ACWR > 1.3 for 3 days",
            "ACWR high (1.77)",
            "Load spike +213% vs 4w avg",
        ]
        assert result.performance_risk == pytest.approx(0.66)

    def test_recompute_matches_stored(self, service):
        service.save_entry(USER, "2024-03-01", mood=2, notes=NEGATIVE_NOTES)

        recomputed = service.recompute(USER, "2024-03-01")

        assert recomputed == service.get_risk(USER, "2024-03-01")

    def test_recompute_without_data(self, service):
        assert service.recompute(USER, "2024-03-01") is None
        assert service.get_risk(USER, "2024-03-01") is None

    def test_recompute_invalid_date(self, service):
        with pytest.raises(InvalidDateError):
            service.recompute(USER, "03/01/2024")

    def test_window_excludes_older_days(self, service, settings):
        old_day = date(2024, 1, 1)
        service.save_entry(USER, old_day, notes=NEGATIVE_NOTES)
        target = old_day + timedelta(days=settings.risk_window_days)

        service.save_metrics(USER, target, resting_hr=50)

        result = service.get_risk(USER, target)
        assert result.motivation_risk == pytest.approx(0.0)
        assert result.drivers == []

    def test_save_survives_engine_failure(self, entry_repo, metrics_repo, risk_repo, settings, caplog):
        engine = Mock()
        engine.compute_and_save.side_effect = RuntimeError("boom")
        service = RiskService(entry_repo, metrics_repo, risk_repo, engine=engine, settings=settings)

        with caplog.at_level(logging.WARNING):
            entry = service.save_entry(USER, "2024-03-01", mood=3)

        assert entry.mood == 3
        assert entry_repo.get(USER, "2024-03-01").mood == 3
        assert "Risk recomputation failed" in caplog.text

    def test_save_survives_sink_failure(self, entry_repo, metrics_repo, settings, caplog):
        risk_store = Mock()
        risk_store.save.side_effect = RuntimeError("store offline")
        service = RiskService(entry_repo, metrics_repo, risk_store, settings=settings)

        with caplog.at_level(logging.WARNING):
            service.save_entry(USER, "2024-03-01", mood=3)

        risk_store.save.assert_called_once()
        assert "Failed to persist risk" in caplog.text


class TestNoteSignals:
    """Note sentiment and tags are stored alongside the day's metrics."""

    def test_notes_are_persisted(self, service, metrics_repo):
        service.save_entry(USER, "2024-03-01", notes=NEGATIVE_NOTES)

        record = metrics_repo.get(USER, "2024-03-01")

        assert record.note_sentiment < 0
        assert record.fatigue_tag >= 1
        assert record.stress_tag >= 1
        assert service.get_risk(USER, "2024-03-01").drivers == ["Notes sentiment negative"]

    def test_blank_notes_clear_signals(self, service, metrics_repo):
        service.save_entry(USER, "2024-03-01", notes=NEGATIVE_NOTES)
        service.save_entry(USER, "2024-03-01", notes="")

        record = metrics_repo.get(USER, "2024-03-01")

        assert record.note_sentiment is None
        assert record.fatigue_tag is None

    def test_saving_without_notes_keeps_signals(self, service, metrics_repo):
        service.save_entry(USER, "2024-03-01", notes=NEGATIVE_NOTES)
        service.save_entry(USER, "2024-03-01", mood=2)

        assert metrics_repo.get(USER, "2024-03-01").note_sentiment is not None

    def test_persistence_can_be_disabled(self, entry_repo, metrics_repo, risk_repo, db_path):
        settings = Settings(db_path=db_path, persist_note_signals=False, _env_file=None)
        service = RiskService(entry_repo, metrics_repo, risk_repo, settings=settings)

        service.save_entry(USER, "2024-03-01", notes=NEGATIVE_NOTES)

        assert metrics_repo.get(USER, "2024-03-01") is None
        assert service.get_risk(USER, "2024-03-01").drivers == ["Notes sentiment negative"]

    def test_prior_signals_from_metrics(self):
        records = [
            DailyMetricsRecord(user_id=USER, date="2024-03-01", note_sentiment=-0.5, pain_tag=2),
            DailyMetricsRecord(user_id=USER, date="2024-03-02", rpe=6),
        ]

        prior = prior_signals_from_metrics(records)

        assert list(prior) == ["2024-03-01"]
        assert prior["2024-03-01"].sentiment == -0.5
        assert prior["2024-03-01"].tags == {"pain": 2}


class TestSummaries:
    """Weekly summary and training history reads."""

    def test_week_summary(self, service):
        service.save_entry(USER, "2024-03-10", mood=5, training_volume=10, heart_rate=60)
        service.save_entry(USER, "2024-03-13", mood=4, training_volume=6, heart_rate=64)
        service.save_entry(USER, "2024-03-17", mood=1, training_volume=40)

        summary = service.get_week_summary(USER, "2024-03-13")

        assert summary.week_start == date(2024, 3, 10)
        assert summary.volume.total == 16.0
        assert summary.volume.entry_count == 2
        assert summary.average_heart_rate == 62.0
        assert summary.mood_trend == "Great week!"
        assert summary.risk is not None

    def test_week_summary_invalid_date(self, service):
        with pytest.raises(InvalidDateError):
            service.get_week_summary(USER, "someday")

    def test_training_history(self, service):
        service.save_entry(USER, "2024-03-05", training_volume=8)
        service.save_entry(USER, "2024-03-07", training_volume=4)
        service.save_entry(USER, "2024-03-12", training_volume=10)

        weeks = service.get_training_history(USER, 3, today=date(2024, 3, 13))

        assert [w.week_start for w in weeks] == [date(2024, 2, 25), date(2024, 3, 3), date(2024, 3, 10)]
        assert [w.average for w in weeks] == [0.0, 6.0, 10.0]

    def test_training_history_requires_weeks(self, service):
        assert service.get_training_history(USER, 0) == []


class TestJournalReads:
    """Recent-days and notes-archive reads."""

    def test_recent_days_fill_gaps(self, service):
        service.save_entry(USER, "2024-03-02", mood=4, training_volume=6)

        days = service.get_recent_days(USER, 3, end="2024-03-03")

        assert [d.date for d in days] == ["2024-03-01", "2024-03-02", "2024-03-03"]
        assert [d.mood for d in days] == [0, 4, 0]

    def test_recent_days_requires_days(self, service):
        assert service.get_recent_days(USER, 0) == []

    def test_notes_archive_newest_first(self, service):
        service.save_entry(USER, "2024-03-01", notes="hill repeats")
        service.save_entry(USER, "2024-03-02", mood=3)
        service.save_entry(USER, "2024-03-03", notes="easy shakeout")
        service.save_entry("someone-else", "2024-03-04", notes="not mine")

        archive = service.get_notes_archive(USER)

        assert [(e.date, e.notes) for e in archive] == [
            ("2024-03-03", "easy shakeout"),
            ("2024-03-01", "hill repeats"),
        ]
