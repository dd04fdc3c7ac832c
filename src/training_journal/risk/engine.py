"""
Readiness-risk engine.

Turns a window of recent daily entries and metrics for one user into three
bounded risk scores (overtraining, motivation, performance dip) plus up to
four human-readable drivers explaining them.

Pipeline:
    1. Merge entries and metrics into a date-aligned timeline
    2. Session load -> ATL (7) / CTL (28) / ACWR, and today's load spike
    3. Personal baselines (median of the 21 entries before the target)
    4. 7-day note signals (persisted values preferred over re-extraction)
    5. Fold the overtraining and motivation rules
    6. Combine into performance risk, clamp, truncate drivers
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Protocol, Tuple

from ..metrics.baselines import (
    mood_baseline,
    population_stddev,
    resting_hr_baseline,
    is_logged_mood,
)
from ..metrics.load import compute_rolling_series, load_spike_pct
from ..models.journal import (
    DEFAULT_MODEL_VERSION,
    MAX_DRIVERS,
    TAG_CATEGORIES,
    NoteSignals,
    RiskResult,
    TimelineDay,
)
from ..signals.text import analyze_notes
from ..utils.dates import date_key, normalize_date
from .rules import (
    DRIVER_ORDER,
    MOOD_WINDOW_DAYS,
    MOTIVATION_RULES,
    OVERTRAIN_RULES,
    RiskSignals,
    clamp01,
    collect_drivers,
    fold_rules,
)
from .timeline import EntryLike, MetricLike, Timeline, build_timeline


logger = logging.getLogger(__name__)


NOTES_WINDOW_DAYS = 7
PERFORMANCE_OVERTRAIN_WEIGHT = 0.6
PERFORMANCE_MOTIVATION_WEIGHT = 0.3
PERFORMANCE_PAIN_MIN = 3
PERFORMANCE_PAIN_BUMP = 0.1
PERFORMANCE_HIGH = 0.7
PERFORMANCE_DRIVER = "Performance risk high (combined signals)"


class EntrySource(Protocol):
    """Provider of daily entries for one user."""

    def get_range(self, user_id: str, start, end) -> List[EntryLike]:
        """Entries with ``start <= date <= end``, oldest first."""
        ...


class MetricsSource(Protocol):
    """Provider of daily metrics for one user."""

    def get_range(self, user_id: str, start, end) -> List[MetricLike]:
        """Metrics rows with ``start <= date <= end``, oldest first."""
        ...


class RiskSink(Protocol):
    """Destination for computed risk results."""

    def save(self, result: RiskResult) -> bool:
        """Persist ``result``. Returns False (or raises) on failure."""
        ...


class _DaySignals:
    """Note signals for one timeline day, resolved from the best source."""

    def __init__(self, day: TimelineDay, prior: Optional[NoteSignals]):
        self.day = day
        self.prior = prior
        self._extracted: Optional[NoteSignals] = None

    @property
    def extracted(self) -> NoteSignals:
        if self._extracted is None:
            self._extracted = analyze_notes(self.day.notes)
        return self._extracted

    def tag(self, category: str) -> int:
        if self.day.metric is not None:
            stored = self.day.metric.persisted_tag(category)
            if stored is not None:
                return stored
        if self.prior is not None and category in self.prior.tags:
            return self.prior.tags[category]
        return self.extracted.tag(category)

    def sentiment(self) -> Optional[float]:
        if self.day.metric is not None and self.day.metric.note_sentiment is not None:
            return self.day.metric.note_sentiment
        if self.prior is not None:
            return self.prior.sentiment
        if self.day.notes.strip():
            return self.extracted.sentiment
        return None


def note_window_signals(
    days: Iterable[TimelineDay],
    prior_signals: Optional[Mapping[str, NoteSignals]] = None,
) -> Tuple[Dict[str, int], float]:
    """
    Tag totals and average sentiment over ``days``.

    Days with no persisted sentiment and no notes are left out of the
    sentiment average; an empty average is 0.
    """
    prior_signals = prior_signals or {}
    totals = {category: 0 for category in TAG_CATEGORIES}
    sentiments: List[float] = []

    for day in days:
        resolved = _DaySignals(day, prior_signals.get(day.date))
        for category in TAG_CATEGORIES:
            totals[category] += resolved.tag(category)
        sentiment = resolved.sentiment()
        if sentiment is not None:
            sentiments.append(sentiment)

    avg = sum(sentiments) / len(sentiments) if sentiments else 0.0
    return totals, avg


def build_signals(
    timeline: Timeline,
    index: int,
    prior_signals: Optional[Mapping[str, NoteSignals]] = None,
) -> RiskSignals:
    """Compute the rule inputs for the day at ``index``."""
    loads = timeline.loads()
    moods = timeline.moods()
    resting_hrs = timeline.resting_hrs()
    rolling = compute_rolling_series(loads)

    recent_moods = moods[max(0, index - MOOD_WINDOW_DAYS + 1):index + 1]
    tag_totals, avg_sentiment = note_window_signals(
        timeline.window(index, NOTES_WINDOW_DAYS), prior_signals
    )

    return RiskSignals(
        index=index,
        acwr=rolling.acwr,
        spike_pct=load_spike_pct(loads, index),
        resting_hrs=resting_hrs,
        hr_baseline=resting_hr_baseline(resting_hrs, index),
        moods=moods,
        mood_baseline=mood_baseline(moods, index),
        mood_stddev=population_stddev([m for m in recent_moods if is_logged_mood(m)]),
        tag_totals=tag_totals,
        avg_sentiment=avg_sentiment,
    )


def load_window(
    entries: EntrySource,
    metrics: MetricsSource,
    user_id: str,
    start,
    end,
) -> Tuple[List[EntryLike], List[MetricLike]]:
    """Read both sources for ``start..end``. Source errors propagate."""
    return entries.get_range(user_id, start, end), metrics.get_range(user_id, start, end)


def _target_key(target_date) -> str:
    return normalize_date(target_date) or date_key(str(target_date))


def compute_risk(
    user_id: str,
    target_date,
    recent_entries: Iterable[EntryLike],
    recent_metrics: Iterable[MetricLike],
    prior_signals: Optional[Mapping[str, NoteSignals]] = None,
    model_version: str = DEFAULT_MODEL_VERSION,
) -> Optional[RiskResult]:
    """
    Compute risk scores for ``user_id`` on ``target_date``.

    Pure function: same inputs always give the same result, nothing is
    persisted.

    Args:
        user_id: Owner of the data
        target_date: Day to score (YYYY-MM-DD, date or datetime)
        recent_entries: Daily entries (dataclasses or raw rows), any order
        recent_metrics: Daily metrics (dataclasses or raw rows), any order
        prior_signals: Previously computed note signals keyed by date
        model_version: Tag stored with the result

    Returns:
        RiskResult, or None when there are no entries and no metrics at all
    """
    entries = list(recent_entries)
    metrics = list(recent_metrics)
    if not entries and not metrics:
        logger.debug(f"No entries or metrics for user {user_id}, skipping risk computation")
        return None

    target = _target_key(target_date)
    timeline = build_timeline(entries, metrics, target)
    index = timeline.index_of(target)
    signals = build_signals(timeline, index, prior_signals)

    overtrain, _ = fold_rules(OVERTRAIN_RULES, signals)
    motivation, _ = fold_rules(MOTIVATION_RULES, signals)
    overtrain = clamp01(overtrain)
    motivation = clamp01(motivation)

    pain_bump = PERFORMANCE_PAIN_BUMP if signals.tag_total("pain") >= PERFORMANCE_PAIN_MIN else 0.0
    performance = clamp01(
        PERFORMANCE_OVERTRAIN_WEIGHT * overtrain
        + PERFORMANCE_MOTIVATION_WEIGHT * motivation
        + pain_bump
    )

    drivers = collect_drivers(DRIVER_ORDER, signals)
    if performance >= PERFORMANCE_HIGH:
        drivers.append(PERFORMANCE_DRIVER)

    logger.debug(
        f"Risk for user {user_id} on {target}: overtrain={overtrain:.2f} "
        f"motivation={motivation:.2f} performance={performance:.2f} "
        f"({len(timeline)} days, acwr={signals.latest_acwr:.2f})"
    )

    return RiskResult(
        user_id=user_id,
        date=target,
        overtrain_risk=overtrain,
        motivation_risk=motivation,
        performance_risk=performance,
        drivers=drivers[:MAX_DRIVERS],
        model_version=model_version,
    )


class RiskEngine:
    """
    Risk computation with optional persistence.

    Persistence is fail-soft: a sink that returns False or raises is
    logged and ignored, and the computed result is still returned.
    """

    def __init__(
        self,
        sink: Optional[RiskSink] = None,
        model_version: str = DEFAULT_MODEL_VERSION,
    ):
        self.sink = sink
        self.model_version = model_version

    def compute(
        self,
        user_id: str,
        target_date,
        recent_entries: Iterable[EntryLike],
        recent_metrics: Iterable[MetricLike],
        prior_signals: Optional[Mapping[str, NoteSignals]] = None,
    ) -> Optional[RiskResult]:
        return compute_risk(
            user_id,
            target_date,
            recent_entries,
            recent_metrics,
            prior_signals=prior_signals,
            model_version=self.model_version,
        )

    def compute_and_save(
        self,
        user_id: str,
        target_date,
        recent_entries: Iterable[EntryLike],
        recent_metrics: Iterable[MetricLike],
        prior_signals: Optional[Mapping[str, NoteSignals]] = None,
    ) -> Optional[RiskResult]:
        """Compute, then hand the result to the sink if one is configured."""
        result = self.compute(user_id, target_date, recent_entries, recent_metrics, prior_signals)
        if result is None or self.sink is None:
            return result

        try:
            saved = self.sink.save(result)
        except Exception as e:
            logger.warning(f"Failed to persist risk for user {user_id} on {result.date}: {e}")
            return result

        if not saved:
            logger.warning(f"Risk sink rejected result for user {user_id} on {result.date}")
        return result


# Singleton instance
_risk_engine: Optional[RiskEngine] = None


def get_risk_engine() -> RiskEngine:
    """Get or create the shared sink-less risk engine."""
    global _risk_engine
    if _risk_engine is None:
        _risk_engine = RiskEngine()
    return _risk_engine
