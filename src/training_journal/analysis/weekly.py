"""
Weekly Journal Summaries

Per-week training volume, heart rate and mood roll-ups over logged entries.
Weeks start on Sunday.
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..models.journal import RiskResult
from ..utils.dates import parse_date


MOOD_TRENDS = (
    (4.5, "Great week!"),
    (3.5, "Good week!"),
    (2.5, "Okay week."),
)
TOUGH_WEEK = "Tough week."
NO_MOOD_DATA = "No mood data"


@dataclass
class WeeklyVolume:
    """Training volume totals for one week."""
    total: float
    average: float
    entry_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": round(self.total, 2),
            "average": round(self.average, 2),
            "entry_count": self.entry_count,
        }


@dataclass
class WeeklyAverage:
    """One bar of the N-week training averages chart."""
    week_start: date
    label: str
    average: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "week_start": self.week_start.isoformat(),
            "label": self.label,
            "average": self.average,
        }


@dataclass
class WeeklySummary:
    """Everything shown for one week of the journal."""

    week_start: date
    week_end: date
    volume: WeeklyVolume
    average_heart_rate: float
    mood_trend: str
    risk: Optional[RiskResult] = None
    insights: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "week_start": self.week_start.isoformat(),
            "week_end": self.week_end.isoformat(),
            "volume": self.volume.to_dict(),
            "average_heart_rate": self.average_heart_rate,
            "mood_trend": self.mood_trend,
            "risk": self.risk.to_dict() if self.risk else None,
            "insights": self.insights,
        }


def _field(entry: Any, name: str) -> Any:
    """Read ``name`` from an entry object or a plain dict row."""
    if isinstance(entry, dict):
        return entry.get(name)
    return getattr(entry, name, None)


def get_week_range(day: date) -> Tuple[date, date]:
    """Sunday-to-Saturday week containing ``day``."""
    # date.weekday(): Monday=0 .. Sunday=6
    start = day - timedelta(days=(day.weekday() + 1) % 7)
    return start, start + timedelta(days=6)


def entries_in_week(entries: Iterable[Any], day: date) -> List[Any]:
    """Entries whose date falls in the week containing ``day``."""
    start, end = get_week_range(day)
    selected = []
    for entry in entries:
        d = parse_date(_field(entry, "date"))
        if d is not None and start <= d <= end:
            selected.append(entry)
    return selected


def weekly_training_volume(entries: Iterable[Any], day: date) -> WeeklyVolume:
    """Total and per-entry average volume for the week containing ``day``."""
    week = entries_in_week(entries, day)
    total = sum(_field(e, "training_volume") or 0 for e in week)
    average = total / len(week) if week else 0.0
    return WeeklyVolume(total=float(total), average=average, entry_count=len(week))


def weekly_average_heart_rate(entries: Iterable[Any], day: date) -> float:
    """Mean logged heart rate for the week, 1 decimal. 0 when none logged."""
    rates = [
        _field(e, "heart_rate") for e in entries_in_week(entries, day)
        if _field(e, "heart_rate") is not None
    ]
    if not rates:
        return 0.0
    return round(sum(rates) / len(rates), 1)


def weekly_mood_trend(entries: Iterable[Any], day: date) -> str:
    """Label the week's average logged mood (mood 0 means not logged)."""
    moods = [
        _field(e, "mood") for e in entries_in_week(entries, day)
        if (_field(e, "mood") or 0) > 0
    ]
    if not moods:
        return NO_MOOD_DATA

    average = sum(moods) / len(moods)
    for threshold, label in MOOD_TRENDS:
        if average >= threshold:
            return label
    return TOUGH_WEEK


def weekly_training_averages(
    entries: Iterable[Any],
    num_weeks: int,
    today: Optional[date] = None,
) -> List[WeeklyAverage]:
    """
    Average training volume per week for the last ``num_weeks`` weeks.

    Args:
        entries: All entries for the user
        num_weeks: Number of weeks, counting the current one
        today: Reference day (defaults to today)

    Returns:
        One WeeklyAverage per week, oldest first
    """
    today = today or date.today()
    entries = list(entries)
    averages: List[WeeklyAverage] = []

    for i in range(num_weeks):
        ref = today - timedelta(days=7 * i)
        start, _ = get_week_range(ref)
        volume = weekly_training_volume(entries, ref)
        averages.insert(0, WeeklyAverage(
            week_start=start,
            label=f"Week {start.isocalendar()[1]}",
            average=round(volume.average, 2),
        ))

    return averages


def generate_weekly_insights(summary: WeeklySummary) -> List[str]:
    """Short plain-language observations for the week."""
    insights = []

    if summary.volume.entry_count == 0:
        insights.append("Nothing logged this week yet.")
        return insights

    if summary.mood_trend == TOUGH_WEEK:
        insights.append("Mood has been low this week. Consider an easier day.")
    elif summary.mood_trend == MOOD_TRENDS[0][1]:
        insights.append("Mood has been great this week.")

    if summary.risk is not None and summary.risk.drivers:
        insights.append(f"Top risk driver: {summary.risk.drivers[0]}")

    return insights


def summarize_week(
    entries: Iterable[Any],
    day: date,
    risk: Optional[RiskResult] = None,
) -> WeeklySummary:
    """Build the full weekly summary for the week containing ``day``."""
    entries = list(entries)
    start, end = get_week_range(day)

    summary = WeeklySummary(
        week_start=start,
        week_end=end,
        volume=weekly_training_volume(entries, day),
        average_heart_rate=weekly_average_heart_rate(entries, day),
        mood_trend=weekly_mood_trend(entries, day),
        risk=risk,
    )
    summary.insights = generate_weekly_insights(summary)
    return summary
