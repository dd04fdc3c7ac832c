"""Tests for personal baselines."""

import pytest

from training_journal.metrics.baselines import (
    median,
    mood_baseline,
    population_stddev,
    resting_hr_baseline,
    trailing_values,
)


class TestMedian:

    def test_odd(self):
        assert median([3, 1, 2]) == 2

    def test_even_averages_middle_pair(self):
        assert median([1, 2, 3, 4]) == 2.5

    def test_empty_is_zero(self):
        assert median([]) == 0.0

    def test_integer_input_returns_float(self):
        result = median([60, 52, 55])
        assert result == 55.0
        assert isinstance(result, float)


class TestPopulationStddev:

    def test_fewer_than_two_values(self):
        assert population_stddev([]) == 0.0
        assert population_stddev([4]) == 0.0

    def test_population_not_sample(self):
        assert population_stddev([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(2.0)

    def test_two_values(self):
        assert population_stddev([1, 3]) == pytest.approx(1.0)


class TestTrailingBaselines:
    """Baselines use only entries strictly before the target."""

    def test_target_excluded(self):
        hrs = [50.0] * 21 + [80.0]
        assert resting_hr_baseline(hrs, 21) == 50.0

    def test_window_is_21_entries(self):
        series = [100.0] * 5 + [50.0] * 21 + [60.0]
        assert trailing_values(series, 26) == [50.0] * 21

    def test_missing_heart_rates_skipped(self):
        hrs = [None, 50.0, None, 52.0, None]
        assert resting_hr_baseline(hrs, 4) == 51.0

    def test_mood_zero_is_not_a_bad_day(self):
        """Mood 0 means 'not logged' and never drags the baseline down."""
        moods = [4, 0, 0, 0, 4, 0, 4, 2]
        assert mood_baseline(moods, 7) == 4.0

    def test_no_history(self):
        assert mood_baseline([3], 0) == 0.0
        assert resting_hr_baseline([None, None], 1) == 0.0
