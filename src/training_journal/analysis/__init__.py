"""Journal analysis modules."""

from .weekly import (
    WeeklyVolume,
    WeeklyAverage,
    WeeklySummary,
    get_week_range,
    weekly_training_volume,
    weekly_average_heart_rate,
    weekly_mood_trend,
    weekly_training_averages,
    summarize_week,
)

__all__ = [
    "WeeklyVolume",
    "WeeklyAverage",
    "WeeklySummary",
    "get_week_range",
    "weekly_training_volume",
    "weekly_average_heart_rate",
    "weekly_mood_trend",
    "weekly_training_averages",
    "summarize_week",
]
