"""Repository pattern implementations for journal storage."""

from .base import UserDayRepository, SQLiteRepository, to_validation_error
from .entry_repository import DailyEntryRepository
from .metrics_repository import DailyMetricsRepository
from .risk_repository import RiskScoreRepository

__all__ = [
    "UserDayRepository",
    "SQLiteRepository",
    "to_validation_error",
    "DailyEntryRepository",
    "DailyMetricsRepository",
    "RiskScoreRepository",
]
