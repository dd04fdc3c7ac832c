"""Personal baseline calculations.

Deviation is judged against the user's own recent normal: the median of
a trailing window of entries before the target day.
"""

import statistics
from typing import Callable, List, Optional, Sequence


BASELINE_WINDOW = 21


def median(values: Sequence[float]) -> float:
    """Standard median; average of the two middle values for even input. Empty -> 0."""
    if not values:
        return 0.0
    return float(statistics.median(values))


def population_stddev(values: Sequence[float]) -> float:
    """Population standard deviation. Fewer than 2 values -> 0."""
    if len(values) < 2:
        return 0.0
    return statistics.pstdev(values)


def trailing_values(
    series: Sequence[Optional[float]],
    index: int,
    window: int = BASELINE_WINDOW,
    include: Callable[[Optional[float]], bool] = lambda v: v is not None,
) -> List[float]:
    """
    Values strictly before ``index`` within the last ``window`` positions.

    Args:
        series: Per-day values aligned to the timeline
        index: Target position (excluded)
        window: How many preceding positions to consider
        include: Predicate selecting usable values

    Returns:
        Usable values in chronological order
    """
    start = max(0, index - window)
    return [v for v in series[start:max(index, 0)] if include(v)]


def trailing_baseline(
    series: Sequence[Optional[float]],
    index: int,
    window: int = BASELINE_WINDOW,
    include: Callable[[Optional[float]], bool] = lambda v: v is not None,
) -> float:
    """Median of the usable values preceding ``index``. 0 when none."""
    return median(trailing_values(series, index, window, include))


def is_logged_mood(value: Optional[float]) -> bool:
    """Mood 0 is the 'no entry' sentinel, never a very bad mood."""
    return value is not None and value > 0


def mood_baseline(moods: Sequence[int], index: int, window: int = BASELINE_WINDOW) -> float:
    """Median logged mood over the ``window`` entries before ``index``."""
    return trailing_baseline(moods, index, window, include=is_logged_mood)


def resting_hr_baseline(
    heart_rates: Sequence[Optional[float]],
    index: int,
    window: int = BASELINE_WINDOW,
) -> float:
    """Median resting HR over the ``window`` entries before ``index``."""
    return trailing_baseline(heart_rates, index, window)
