"""SQLite-backed repository for per-day metrics (RPE, resting HR, note signals)."""

import logging
import sqlite3
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from .base import SQLiteRepository, UserDayRepository, to_validation_error
from ...exceptions import MetricsValidationError
from ...models.entries import DailyMetricsRecord
from ...models.journal import NoteSignals, TAG_CATEGORIES


logger = logging.getLogger(__name__)

METRIC_FIELDS = (
    "rpe",
    "resting_hr",
    "sleep_hours",
    "note_sentiment",
    *(f"{category}_tag" for category in TAG_CATEGORIES),
)


class DailyMetricsRepository(SQLiteRepository, UserDayRepository[DailyMetricsRecord]):
    """
    SQLite-backed repository for DailyMetricsRecord rows.

    ``upsert`` is a patch: only the fields passed are written, everything
    else keeps its stored value.
    """

    def _row_to_record(self, row: sqlite3.Row) -> DailyMetricsRecord:
        return DailyMetricsRecord(
            user_id=row["user_id"],
            date=row["date"],
            updated_at=row["updated_at"],
            **{name: row[name] for name in METRIC_FIELDS},
        )

    def upsert(self, user_id: str, date: Any, **patch) -> DailyMetricsRecord:
        """
        Merge ``patch`` into the metrics row for ``user_id`` on ``date``.

        Raises:
            InvalidDateError: If ``date`` cannot be normalized
            MetricsValidationError: If a field is unknown or out of range
        """
        day = self._require_date(date)

        unknown = set(patch) - set(METRIC_FIELDS)
        if unknown:
            raise MetricsValidationError(
                f"Unknown metrics fields: {', '.join(sorted(unknown))}",
                field=sorted(unknown)[0],
            )

        existing = self.get(user_id, day)
        merged = existing.model_dump() if existing else {}
        merged.update(patch)
        merged.update(user_id=user_id, date=day, updated_at=datetime.now())

        try:
            record = DailyMetricsRecord(**merged)
        except PydanticValidationError as e:
            raise to_validation_error(e, MetricsValidationError) from e

        columns = ("user_id", "date", *METRIC_FIELDS, "updated_at")
        values = [getattr(record, name) for name in columns[:-1]]
        values.append(record.updated_at.isoformat())

        with self._get_connection() as conn:
            conn.execute(
                f"INSERT OR REPLACE INTO daily_metrics ({', '.join(columns)}) "
                f"VALUES ({', '.join('?' for _ in columns)})",
                values,
            )

        logger.debug(f"Saved metrics for user {user_id} on {day}: {sorted(patch)}")
        return record

    def save_note_signals(
        self,
        user_id: str,
        date: Any,
        signals: Optional[NoteSignals],
    ) -> DailyMetricsRecord:
        """
        Persist extracted note sentiment and tag counts for a day.

        Passing None clears them, so the day falls back to its notes again.
        """
        patch: Dict[str, Any] = {
            "note_sentiment": signals.sentiment if signals is not None else None,
        }
        for category in TAG_CATEGORIES:
            patch[f"{category}_tag"] = signals.tag(category) if signals is not None else None
        return self.upsert(user_id, date, **patch)

    def get(self, user_id: str, date: Any) -> Optional[DailyMetricsRecord]:
        day = self._require_date(date)
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM daily_metrics WHERE user_id = ? AND date = ?",
                (user_id, day),
            ).fetchone()

            if row:
                return self._row_to_record(row)
            return None

    def get_range(self, user_id: str, start: Any, end: Any) -> List[DailyMetricsRecord]:
        start_day = self._require_date(start)
        end_day = self._require_date(end)
        with self._get_connection() as conn:
            rows = conn.execute("""
                SELECT * FROM daily_metrics
                WHERE user_id = ? AND date >= ? AND date <= ?
                ORDER BY date ASC
            """, (user_id, start_day, end_day)).fetchall()

            return [self._row_to_record(row) for row in rows]

    def delete(self, user_id: str, date: Any) -> bool:
        day = self._require_date(date)
        with self._get_connection() as conn:
            cursor = conn.execute(
                "DELETE FROM daily_metrics WHERE user_id = ? AND date = ?",
                (user_id, day),
            )
            return cursor.rowcount > 0
