"""SQLite-backed risk score store: the engine's sink and the UI's risk reader."""

import json
import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional, Union

from .base import SQLiteRepository
from ...exceptions import DatabaseError, RiskPersistenceError
from ...models.journal import MAX_DRIVERS, RiskResult


logger = logging.getLogger(__name__)


class RiskScoreRepository(SQLiteRepository):
    """
    Stores one RiskResult per user and day (last write wins).

    By default a failed write is logged and reported as False. With
    ``strict=True`` it raises RiskPersistenceError instead; the risk
    engine treats both the same way.
    """

    def __init__(self, db_path: Optional[Union[str, Path]] = None, strict: bool = False):
        self.strict = strict
        super().__init__(db_path)

    def _row_to_result(self, row: sqlite3.Row) -> RiskResult:
        return RiskResult(
            user_id=row["user_id"],
            date=row["date"],
            overtrain_risk=row["overtrain_risk"],
            motivation_risk=row["motivation_risk"],
            performance_risk=row["performance_risk"],
            drivers=json.loads(row["drivers_json"] or "[]")[:MAX_DRIVERS],
            model_version=row["model_version"],
        )

    def save(self, result: RiskResult) -> bool:
        """
        Upsert ``result`` keyed by (user_id, date).

        Returns:
            True if stored, False on a database failure (non-strict mode)
        """
        try:
            with self._get_connection() as conn:
                conn.execute("""
                    INSERT OR REPLACE INTO risk_scores
                    (user_id, date, overtrain_risk, motivation_risk,
                     performance_risk, drivers_json, model_version, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """, (
                    result.user_id,
                    result.date,
                    result.overtrain_risk,
                    result.motivation_risk,
                    result.performance_risk,
                    json.dumps(list(result.drivers)[:MAX_DRIVERS]),
                    result.model_version,
                    datetime.now().isoformat(),
                ))
        except DatabaseError as e:
            if self.strict:
                raise RiskPersistenceError(
                    e.message, user_id=result.user_id, date=result.date
                ) from e
            logger.error(f"Failed to save risk for user {result.user_id} on {result.date}: {e}")
            return False

        logger.debug(f"Saved risk for user {result.user_id} on {result.date}")
        return True

    def get(self, user_id: str, date: Any) -> Optional[RiskResult]:
        """Latest stored risk for ``user_id`` on ``date``, or None."""
        day = self._require_date(date)
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM risk_scores WHERE user_id = ? AND date = ?",
                (user_id, day),
            ).fetchone()

            if row:
                return self._row_to_result(row)
            return None

    def get_range(self, user_id: str, start: Any, end: Any) -> List[RiskResult]:
        start_day = self._require_date(start)
        end_day = self._require_date(end)
        with self._get_connection() as conn:
            rows = conn.execute("""
                SELECT * FROM risk_scores
                WHERE user_id = ? AND date >= ? AND date <= ?
                ORDER BY date ASC
            """, (user_id, start_day, end_day)).fetchall()

            return [self._row_to_result(row) for row in rows]
