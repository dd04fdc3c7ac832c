"""Training metrics calculation modules."""

from .load import (
    ACUTE_WINDOW,
    CHRONIC_WINDOW,
    RollingSeries,
    session_load,
    rolling_average,
    acwr_series,
    compute_rolling_series,
    trailing_mean,
    load_spike_pct,
)
from .baselines import (
    BASELINE_WINDOW,
    median,
    population_stddev,
    trailing_baseline,
    mood_baseline,
    resting_hr_baseline,
    is_logged_mood,
)

__all__ = [
    # Load
    "ACUTE_WINDOW",
    "CHRONIC_WINDOW",
    "RollingSeries",
    "session_load",
    "rolling_average",
    "acwr_series",
    "compute_rolling_series",
    "trailing_mean",
    "load_spike_pct",
    # Baselines
    "BASELINE_WINDOW",
    "median",
    "population_stddev",
    "trailing_baseline",
    "mood_baseline",
    "resting_hr_baseline",
    "is_logged_mood",
]
