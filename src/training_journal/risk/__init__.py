"""Readiness-risk scoring: timeline merge, threshold rules and the engine."""

from .timeline import Timeline, build_timeline, to_observation, to_bio_metric
from .rules import (
    CombineMode,
    RuleOutcome,
    RiskSignals,
    OVERTRAIN_RULES,
    MOTIVATION_RULES,
    DRIVER_ORDER,
    collect_drivers,
    fold_rules,
    clamp01,
)
from .engine import (
    EntrySource,
    MetricsSource,
    RiskSink,
    RiskEngine,
    build_signals,
    compute_risk,
    get_risk_engine,
    load_window,
)

__all__ = [
    "Timeline",
    "build_timeline",
    "to_observation",
    "to_bio_metric",
    "CombineMode",
    "RuleOutcome",
    "RiskSignals",
    "OVERTRAIN_RULES",
    "MOTIVATION_RULES",
    "DRIVER_ORDER",
    "collect_drivers",
    "fold_rules",
    "clamp01",
    "EntrySource",
    "MetricsSource",
    "RiskSink",
    "RiskEngine",
    "build_signals",
    "compute_risk",
    "get_risk_engine",
    "load_window",
]
