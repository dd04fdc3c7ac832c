"""Pytest configuration and fixtures."""

from datetime import date, timedelta

import pytest

from training_journal.config import Settings
from training_journal.db.repositories import (
    DailyEntryRepository,
    DailyMetricsRepository,
    RiskScoreRepository,
)
from training_journal.services.risk_service import RiskService


@pytest.fixture
def db_path(tmp_path):
    """Path to a fresh SQLite database file."""
    return tmp_path / "journal.db"


@pytest.fixture
def settings(db_path):
    """Settings pointing at the temporary database, ignoring any .env file."""
    return Settings(db_path=db_path, _env_file=None)


@pytest.fixture
def entry_repo(db_path):
    return DailyEntryRepository(db_path)


@pytest.fixture
def metrics_repo(db_path):
    return DailyMetricsRepository(db_path)


@pytest.fixture
def risk_repo(db_path):
    return RiskScoreRepository(db_path)


@pytest.fixture
def service(entry_repo, metrics_repo, risk_repo, settings):
    """RiskService wired to the temporary database."""
    return RiskService(
        entries=entry_repo,
        metrics=metrics_repo,
        risk_store=risk_repo,
        settings=settings,
    )


@pytest.fixture
def start_date():
    """First day of generated histories."""
    return date(2024, 3, 1)


@pytest.fixture
def history(start_date):
    """
    Factory for raw entry/metric rows over consecutive days.

    Returns (entries, metrics, last_date) where each list holds camelCase
    rows as an external store would hand them over.
    """
    def _build(volumes=None, rpes=None, moods=None, resting_hrs=None, notes=None):
        lengths = [len(s) for s in (volumes, rpes, moods, resting_hrs, notes) if s is not None]
        n = max(lengths) if lengths else 0

        entries, metrics = [], []
        for i in range(n):
            day = (start_date + timedelta(days=i)).isoformat()
            entry = {"date": day}
            if volumes is not None:
                entry["trainingVolume"] = volumes[i]
            if moods is not None:
                entry["mood"] = moods[i]
            if notes is not None:
                entry["notes"] = notes[i]
            entries.append(entry)

            metric = {"date": day}
            if rpes is not None:
                metric["rpe"] = rpes[i]
            if resting_hrs is not None:
                metric["restingHeartRate"] = resting_hrs[i]
            if len(metric) > 1:
                metrics.append(metric)

        last = (start_date + timedelta(days=n - 1)).isoformat() if n else start_date.isoformat()
        return entries, metrics, last

    return _build
