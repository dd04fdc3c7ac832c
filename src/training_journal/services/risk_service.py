"""
Risk Service.

Wires the repositories to the risk engine:

- ``recompute``: fetch the trailing window for a user, score the target
  day, persist the result (fail-soft at the sink)
- ``save_entry`` / ``save_metrics``: store a day, then recompute its risk.
  A failed recomputation never fails the save.
- Weekly summary and training history reads for the CLI and API
"""

from datetime import date as date_type, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional

from ..analysis.weekly import (
    WeeklyAverage,
    WeeklySummary,
    get_week_range,
    summarize_week,
    weekly_training_averages,
)
from ..config import Settings, get_settings
from ..db.repositories import (
    DailyEntryRepository,
    DailyMetricsRepository,
    RiskScoreRepository,
)
from ..exceptions import InvalidDateError
from ..models.entries import DailyEntry, DailyMetricsRecord
from ..models.journal import NoteSignals, RiskResult, TAG_CATEGORIES
from ..risk.engine import RiskEngine, load_window
from ..signals.text import analyze_notes
from ..utils.dates import parse_date
from .base import BaseService


def prior_signals_from_metrics(
    records: Iterable[DailyMetricsRecord],
) -> Dict[str, NoteSignals]:
    """
    Previously computed note signals keyed by date.

    Only days whose sentiment was persisted are included; tag categories
    that were never stored are left out so the engine re-extracts them.
    """
    prior: Dict[str, NoteSignals] = {}
    for record in records:
        if record.note_sentiment is None:
            continue
        tags = {
            category: getattr(record, f"{category}_tag")
            for category in TAG_CATEGORIES
            if getattr(record, f"{category}_tag") is not None
        }
        prior[record.date] = NoteSignals(sentiment=record.note_sentiment, tags=tags)
    return prior


class RiskService(BaseService):
    """Service for saving journal data and keeping its risk scores current."""

    def __init__(
        self,
        entries: DailyEntryRepository,
        metrics: DailyMetricsRepository,
        risk_store: RiskScoreRepository,
        engine: Optional[RiskEngine] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        super().__init__()
        self.settings = settings or get_settings()
        self.entries = entries
        self.metrics = metrics
        self.risk_store = risk_store
        self.engine = engine or RiskEngine(
            sink=risk_store,
            model_version=self.settings.model_version,
        )

    @staticmethod
    def _to_day(value: Any) -> date_type:
        day = parse_date(value)
        if day is None:
            raise InvalidDateError(value)
        return day

    def recompute(self, user_id: str, target_date: Any) -> Optional[RiskResult]:
        """
        Recompute and persist risk for one user and day.

        Fetch errors propagate to the caller; sink errors do not.

        Returns:
            The computed result, or None when the window holds no data
        """
        day = self._to_day(target_date)
        start = day - timedelta(days=self.settings.risk_window_days - 1)

        entries, metrics = load_window(self.entries, self.metrics, user_id, start, day)

        result = self.engine.compute_and_save(
            user_id,
            day.isoformat(),
            entries,
            metrics,
            prior_signals=prior_signals_from_metrics(metrics),
        )

        if result is None:
            self.logger.debug(f"No data in window for user {user_id} ending {day}")
        else:
            self.logger.info(
                f"Risk for user {user_id} on {day}: "
                f"overtrain={result.overtrain_risk:.2f} "
                f"motivation={result.motivation_risk:.2f} "
                f"performance={result.performance_risk:.2f}"
            )
        return result

    def _recompute_quietly(self, user_id: str, day: str) -> None:
        try:
            self.recompute(user_id, day)
        except Exception as e:
            self.logger.warning(f"Risk recomputation failed for user {user_id} on {day}: {e}")

    def save_entry(self, user_id: str, date: Any, **fields) -> DailyEntry:
        """
        Store a daily entry, then refresh that day's risk.

        When notes are part of the save (and note signal persistence is
        enabled), the extracted sentiment and tags are stored on the
        day's metrics row.
        """
        entry = self.entries.upsert(user_id, date, **fields)

        if "notes" in fields and self.settings.persist_note_signals:
            signals = analyze_notes(entry.notes) if entry.notes.strip() else None
            try:
                self.metrics.save_note_signals(user_id, entry.date, signals)
            except Exception as e:
                self.logger.warning(f"Failed to store note signals for user {user_id} on {entry.date}: {e}")

        self._recompute_quietly(user_id, entry.date)
        return entry

    def save_metrics(self, user_id: str, date: Any, **patch) -> DailyMetricsRecord:
        """Patch a day's metrics row, then refresh that day's risk."""
        record = self.metrics.upsert(user_id, date, **patch)
        self._recompute_quietly(user_id, record.date)
        return record

    def get_risk(self, user_id: str, date: Any) -> Optional[RiskResult]:
        """Persisted risk for ``user_id`` on ``date``, if any."""
        return self.risk_store.get(user_id, date)

    def get_recent_days(
        self,
        user_id: str,
        days: int,
        end: Optional[Any] = None,
    ) -> List[DailyEntry]:
        """One entry per day for the ``days`` days ending at ``end``, gaps filled."""
        if days < 1:
            return []
        return self.entries.get_last_n_days(user_id, days, end)

    def get_notes_archive(self, user_id: str) -> List[DailyEntry]:
        """Every entry with notes, newest first."""
        return [e for e in reversed(self.entries.get_all(user_id)) if e.notes.strip()]

    def get_week_summary(self, user_id: str, date: Any) -> WeeklySummary:
        """Summary of the Sunday-start week containing ``date``."""
        day = self._to_day(date)
        start, end = get_week_range(day)
        entries = self.entries.get_range(user_id, start, end)
        return summarize_week(entries, day, risk=self.get_risk(user_id, day))

    def get_training_history(
        self,
        user_id: str,
        num_weeks: int,
        today: Optional[date_type] = None,
    ) -> List[WeeklyAverage]:
        """Average training volume per week, oldest first."""
        if num_weeks < 1:
            return []
        today = today or datetime.now().date()
        start, _ = get_week_range(today - timedelta(days=7 * (num_weeks - 1)))
        _, end = get_week_range(today)
        entries = self.entries.get_range(user_id, start, end)
        return weekly_training_averages(entries, num_weeks, today)


# Singleton instance
_risk_service: Optional[RiskService] = None


def get_risk_service() -> RiskService:
    """Get or create the risk service backed by the configured database."""
    global _risk_service
    if _risk_service is None:
        settings = get_settings()
        _risk_service = RiskService(
            entries=DailyEntryRepository(settings.db_path),
            metrics=DailyMetricsRepository(settings.db_path),
            risk_store=RiskScoreRepository(settings.db_path),
            settings=settings,
        )
    return _risk_service
