"""SQLite storage for journal entries, metrics and risk scores."""

from .schema import SCHEMA
from .repositories import (
    DailyEntryRepository,
    DailyMetricsRepository,
    RiskScoreRepository,
)

__all__ = [
    "SCHEMA",
    "DailyEntryRepository",
    "DailyMetricsRepository",
    "RiskScoreRepository",
]
