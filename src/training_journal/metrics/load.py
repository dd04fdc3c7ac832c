"""Training load calculations (session load, ATL/CTL rolling averages, ACWR)."""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence


ACUTE_WINDOW = 7
CHRONIC_WINDOW = 28

# Chronic averages below this are treated as zero load
ACWR_EPSILON = 1e-6


@dataclass
class RollingSeries:
    """ATL, CTL and ACWR aligned index-for-index with the input loads."""
    atl: List[float] = field(default_factory=list)
    ctl: List[float] = field(default_factory=list)
    acwr: List[float] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.acwr)


def session_load(volume: Optional[float], rpe: Optional[float] = None) -> float:
    """
    Training stress for one day.

    Volume alone when no RPE was recorded, volume x RPE otherwise.
    A day with no recorded volume contributes zero load.
    """
    if volume is None:
        return 0.0
    return volume if rpe is None else volume * rpe


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def rolling_average(series: Sequence[float], window: int) -> List[float]:
    """
    Trailing rolling mean, same length as the input.

    ``out[i]`` is the mean of ``series[max(0, i - window + 1) .. i]``. The
    first ``window - 1`` points average over however many values exist, so
    there is no zero padding and no NaN.

    Args:
        series: Per-day values in chronological order
        window: Window length in entries (must be >= 1)

    Returns:
        List of rolling means
    """
    if window < 1:
        raise ValueError(f"window must be >= 1, got {window}")

    out: List[float] = []
    for i in range(len(series)):
        start = max(0, i - window + 1)
        out.append(_mean(series[start:i + 1]))
    return out


def acwr_from_averages(atl: Sequence[float], ctl: Sequence[float]) -> List[float]:
    """Element-wise ATL / CTL, 0 wherever CTL is effectively zero."""
    return [
        a / c if c > ACWR_EPSILON else 0.0
        for a, c in zip(atl, ctl)
    ]


def acwr_series(series: Sequence[float]) -> List[float]:
    """
    Acute:Chronic Workload Ratio for every index of ``series``.

    ACWR = 7-day rolling average / 28-day rolling average. Values are not
    clamped: a ratio well above 1.0 is exactly the signal of interest.
    """
    return acwr_from_averages(
        rolling_average(series, ACUTE_WINDOW),
        rolling_average(series, CHRONIC_WINDOW),
    )


def compute_rolling_series(
    loads: Sequence[float],
    acute_window: int = ACUTE_WINDOW,
    chronic_window: int = CHRONIC_WINDOW,
) -> RollingSeries:
    """Compute ATL, CTL and ACWR in one pass over the same loads."""
    atl = rolling_average(loads, acute_window)
    ctl = rolling_average(loads, chronic_window)
    return RollingSeries(atl=atl, ctl=ctl, acwr=acwr_from_averages(atl, ctl))


def trailing_mean(series: Sequence[float], index: int, window: int) -> float:
    """Plain mean of the ``window`` entries ending at ``index`` (inclusive)."""
    if index < 0 or not series:
        return 0.0
    start = max(0, index - window + 1)
    return _mean(series[start:index + 1])


def load_spike_pct(
    loads: Sequence[float],
    index: int,
    window: int = CHRONIC_WINDOW,
) -> float:
    """
    Relative jump of the day's load over its trailing mean.

    ``(loads[index] - avg) / avg`` where ``avg`` is the plain mean of the
    last ``window`` entries including the day itself. Returns 0 when the
    average is effectively zero.
    """
    if index < 0 or index >= len(loads):
        return 0.0
    avg = trailing_mean(loads, index, window)
    if avg <= ACWR_EPSILON:
        return 0.0
    return (loads[index] - avg) / avg
