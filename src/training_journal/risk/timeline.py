"""Merge daily entries and metrics into one date-aligned timeline."""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from ..models.journal import DailyBioMetric, DailyObservation, TimelineDay
from ..utils.dates import date_key


EntryLike = Union[DailyObservation, Mapping[str, Any]]
MetricLike = Union[DailyBioMetric, Mapping[str, Any]]


def to_observation(item: EntryLike) -> DailyObservation:
    """Adapt an entries-source row to DailyObservation (no-op if already one)."""
    if isinstance(item, DailyObservation):
        return item
    if hasattr(item, "to_observation"):
        return item.to_observation()
    return DailyObservation.from_row(item)


def to_bio_metric(item: MetricLike) -> DailyBioMetric:
    """Adapt a metrics-source row to DailyBioMetric (no-op if already one)."""
    if isinstance(item, DailyBioMetric):
        return item
    if hasattr(item, "to_bio_metric"):
        return item.to_bio_metric()
    return DailyBioMetric.from_row(item)


@dataclass
class Timeline:
    """
    Ordered, date-unique sequence of days.

    Dates are strictly increasing. Missing calendar days are simply absent;
    every day present carries whatever entry and/or metrics exist for it.
    """
    days: List[TimelineDay] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.days)

    def __iter__(self):
        return iter(self.days)

    @property
    def dates(self) -> List[str]:
        return [d.date for d in self.days]

    def index_of(self, date: str) -> int:
        """Position of ``date`` or -1 when it is not on the timeline."""
        for i, day in enumerate(self.days):
            if day.date == date:
                return i
        return -1

    def loads(self) -> List[float]:
        return [d.session_load for d in self.days]

    def moods(self) -> List[int]:
        return [d.mood for d in self.days]

    def resting_hrs(self) -> List[Optional[float]]:
        return [d.resting_hr for d in self.days]

    def window(self, index: int, size: int) -> List[TimelineDay]:
        """The ``size`` days ending at ``index`` (inclusive)."""
        return self.days[max(0, index - size + 1):index + 1]


def build_timeline(
    entries: Iterable[EntryLike],
    metrics: Iterable[MetricLike],
    target_date: Optional[str] = None,
) -> Timeline:
    """
    Build the merged timeline.

    Rows sharing a date collapse to one day; for duplicate rows of the same
    kind the last one wins. ``target_date``, when given, is inserted as an
    empty day if no row covers it.

    Args:
        entries: Daily observations or raw entries-source rows
        metrics: Daily bio-metrics or raw metrics-source rows
        target_date: Date (YYYY-MM-DD) that must be present

    Returns:
        Timeline sorted ascending by date
    """
    by_date: Dict[str, TimelineDay] = {}

    for item in entries:
        observation = to_observation(item)
        key = date_key(observation.date)
        by_date.setdefault(key, TimelineDay(date=key)).observation = observation

    for item in metrics:
        metric = to_bio_metric(item)
        key = date_key(metric.date)
        by_date.setdefault(key, TimelineDay(date=key)).metric = metric

    if target_date is not None:
        key = date_key(target_date)
        by_date.setdefault(key, TimelineDay(date=key))

    return Timeline(days=[by_date[k] for k in sorted(by_date)])
