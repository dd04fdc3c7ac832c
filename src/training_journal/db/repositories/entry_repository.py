"""SQLite-backed repository for daily journal entries.

This is the entries source of the risk engine: one row per user and day
holding mood, heart rate, training volume and free-text notes.
"""

import logging
import sqlite3
from datetime import date as date_type, datetime, timedelta
from typing import Any, List, Optional

from pydantic import ValidationError as PydanticValidationError

from .base import SQLiteRepository, UserDayRepository, to_validation_error
from ...exceptions import EntryValidationError
from ...models.entries import DailyEntry


logger = logging.getLogger(__name__)

ENTRY_FIELDS = ("mood", "heart_rate", "training_volume", "notes", "period_symptoms")


class DailyEntryRepository(SQLiteRepository, UserDayRepository[DailyEntry]):
    """
    SQLite-backed repository for DailyEntry rows.

    Saving merges with the stored row: fields not passed to ``upsert``
    keep their previous value.
    """

    def _row_to_entry(self, row: sqlite3.Row) -> DailyEntry:
        return DailyEntry(
            user_id=row["user_id"],
            date=row["date"],
            mood=row["mood"] or 0,
            heart_rate=row["heart_rate"],
            training_volume=row["training_volume"],
            notes=row["notes"] or "",
            period_symptoms=row["period_symptoms"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def upsert(self, user_id: str, date: Any, **fields) -> DailyEntry:
        """
        Create or update the entry for ``user_id`` on ``date``.

        Args:
            user_id: Owner of the entry
            date: Day of the entry (date, datetime or ISO string)
            **fields: Any of mood, heart_rate, training_volume, notes,
                period_symptoms

        Returns:
            The entry as stored

        Raises:
            InvalidDateError: If ``date`` cannot be normalized
            EntryValidationError: If a field is unknown or out of range
        """
        day = self._require_date(date)

        unknown = set(fields) - set(ENTRY_FIELDS)
        if unknown:
            raise EntryValidationError(
                f"Unknown entry fields: {', '.join(sorted(unknown))}",
                field=sorted(unknown)[0],
            )

        existing = self.get(user_id, day)
        now = datetime.now()
        merged = existing.model_dump() if existing else {"created_at": now}
        merged.update(fields)
        merged.update(user_id=user_id, date=day, updated_at=now)

        try:
            entry = DailyEntry(**merged)
        except PydanticValidationError as e:
            raise to_validation_error(e, EntryValidationError) from e

        with self._get_connection() as conn:
            conn.execute("""
                INSERT OR REPLACE INTO daily_entries
                (user_id, date, mood, heart_rate, training_volume, notes,
                 period_symptoms, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """, (
                entry.user_id,
                entry.date,
                entry.mood,
                entry.heart_rate,
                entry.training_volume,
                entry.notes,
                entry.period_symptoms,
                entry.created_at.isoformat() if entry.created_at else now.isoformat(),
                entry.updated_at.isoformat(),
            ))

        logger.debug(f"Saved entry for user {user_id} on {day}")
        return entry

    def get(self, user_id: str, date: Any) -> Optional[DailyEntry]:
        day = self._require_date(date)
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM daily_entries WHERE user_id = ? AND date = ?",
                (user_id, day),
            ).fetchone()

            if row:
                return self._row_to_entry(row)
            return None

    def get_range(self, user_id: str, start: Any, end: Any) -> List[DailyEntry]:
        start_day = self._require_date(start)
        end_day = self._require_date(end)
        with self._get_connection() as conn:
            rows = conn.execute("""
                SELECT * FROM daily_entries
                WHERE user_id = ? AND date >= ? AND date <= ?
                ORDER BY date ASC
            """, (user_id, start_day, end_day)).fetchall()

            return [self._row_to_entry(row) for row in rows]

    def get_all(self, user_id: str) -> List[DailyEntry]:
        """All entries for ``user_id``, oldest first."""
        with self._get_connection() as conn:
            rows = conn.execute(
                "SELECT * FROM daily_entries WHERE user_id = ? ORDER BY date ASC",
                (user_id,),
            ).fetchall()

            return [self._row_to_entry(row) for row in rows]

    def get_last_n_days(
        self,
        user_id: str,
        n: int,
        end: Optional[Any] = None,
    ) -> List[DailyEntry]:
        """
        One entry per calendar day for the ``n`` days ending at ``end``.

        Days with no stored row are filled with placeholder entries
        (mood 0, no volume, empty notes).
        """
        end_day = datetime.strptime(
            self._require_date(end or date_type.today()), "%Y-%m-%d"
        ).date()
        start_day = end_day - timedelta(days=n - 1)

        stored = {
            entry.date: entry
            for entry in self.get_range(user_id, start_day, end_day)
        }

        days = []
        for i in range(n):
            key = (start_day + timedelta(days=i)).isoformat()
            days.append(stored.get(key) or DailyEntry.placeholder(user_id, key))
        return days

    def delete(self, user_id: str, date: Any) -> bool:
        day = self._require_date(date)
        with self._get_connection() as conn:
            cursor = conn.execute(
                "DELETE FROM daily_entries WHERE user_id = ? AND date = ?",
                (user_id, day),
            )
            return cursor.rowcount > 0
