"""Data models for the training journal."""

from .journal import (
    TAG_CATEGORIES,
    DEFAULT_MODEL_VERSION,
    MAX_DRIVERS,
    NoteSignals,
    DailyObservation,
    DailyBioMetric,
    TimelineDay,
    RiskResult,
)
from .entries import DailyEntry, DailyMetricsRecord

__all__ = [
    "TAG_CATEGORIES",
    "DEFAULT_MODEL_VERSION",
    "MAX_DRIVERS",
    "NoteSignals",
    "DailyObservation",
    "DailyBioMetric",
    "TimelineDay",
    "RiskResult",
    "DailyEntry",
    "DailyMetricsRecord",
]
