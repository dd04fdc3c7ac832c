"""
Threshold rules for the readiness-risk model.

Each rule looks at a RiskSignals snapshot and returns a RuleOutcome (or None
when it does not fire). A rule's outcome either raises the running score to
at least its value (MAX) or shifts it by its value (ADD). The engine folds
the rules in list order for each score. Drivers from both scores are
reported in DRIVER_ORDER: load, resting HR, mood, then notes.

ACWR, resting-HR strain and mood floors combine by maximum. Note-derived
bumps stack on top of them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple


# ACWR thresholds
ACWR_STREAK_THRESHOLD = 1.3
ACWR_STREAK_MIN_DAYS = 3
ACWR_HIGH = 1.5
ACWR_RAMP_START = 1.0
ACWR_RAMP_SPAN = 0.5
ACWR_RAMP_MAX_SCORE = 0.6
ACWR_ELEVATED_DRIVER = 1.1
LOAD_SPIKE_PCT = 0.30

# Resting HR (bpm above baseline)
HR_ELEVATED_DELTA = 5
HR_STRAIN_DELTA = 8
HR_WINDOW_DAYS = 3

# Mood
MOOD_DROP_PCT = 0.20
MOOD_WINDOW_DAYS = 6
MOOD_DOWN_DAYS = 4
MOOD_VOLATILITY_STDDEV = 1.2
MOOD_VOLATILITY_SPIKE_PCT = 0.20

# Notes (7-day totals)
FATIGUE_TAG_MIN = 3
PAIN_TAG_MIN = 2
STRESS_TAG_MIN = 3
CONFIDENCE_TAG_MIN = 3
SENTIMENT_NEGATIVE = -0.3
SENTIMENT_POSITIVE = 0.3


class CombineMode(str, Enum):
    """How a rule outcome merges into the running score."""
    MAX = "max"  # score becomes max(score, outcome)
    ADD = "add"  # score becomes score + outcome, floored at 0


@dataclass
class RuleOutcome:
    """Contribution of one fired rule."""
    score: float
    mode: CombineMode
    drivers: List[str] = field(default_factory=list)

    def apply(self, current: float) -> float:
        if self.mode is CombineMode.MAX:
            return max(current, self.score)
        return max(0.0, current + self.score)


@dataclass
class RiskSignals:
    """
    Everything the rules need, computed once per target date.

    Series are aligned with the timeline; ``index`` is the target date's
    position in them.
    """
    index: int
    acwr: Sequence[float]
    spike_pct: float = 0.0
    resting_hrs: Sequence[Optional[float]] = field(default_factory=list)
    hr_baseline: float = 0.0
    moods: Sequence[int] = field(default_factory=list)
    mood_baseline: float = 0.0
    mood_stddev: float = 0.0
    tag_totals: Dict[str, int] = field(default_factory=dict)
    avg_sentiment: float = 0.0

    @property
    def latest_acwr(self) -> float:
        if 0 <= self.index < len(self.acwr):
            return self.acwr[self.index]
        return 0.0

    def tag_total(self, category: str) -> int:
        return self.tag_totals.get(category, 0)


Rule = Callable[[RiskSignals], Optional[RuleOutcome]]


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


# ============================================================================
# Overtraining rules
# ============================================================================

def acwr_streak_days(acwr: Sequence[float], index: int, threshold: float = ACWR_STREAK_THRESHOLD) -> int:
    """Consecutive entries ending at ``index`` (walking back) with ACWR above threshold."""
    streak = 0
    for i in range(index, -1, -1):
        if acwr[i] > threshold:
            streak += 1
        else:
            break
    return streak


def acwr_streak_rule(signals: RiskSignals) -> Optional[RuleOutcome]:
    """Sustained high ACWR: >1.3 for at least 3 entries in a row."""
    streak = acwr_streak_days(signals.acwr, signals.index)
    if streak < ACWR_STREAK_MIN_DAYS:
        return None
    return RuleOutcome(0.5, CombineMode.MAX, [f"ACWR > {ACWR_STREAK_THRESHOLD} for {streak} days"])


def _acwr_spike_fired(signals: RiskSignals) -> bool:
    return signals.latest_acwr > ACWR_HIGH or signals.spike_pct > LOAD_SPIKE_PCT


def acwr_spike_rule(signals: RiskSignals) -> Optional[RuleOutcome]:
    """ACWR in the danger zone, or today's load far above the 4-week mean."""
    if not _acwr_spike_fired(signals):
        return None

    drivers = []
    if signals.latest_acwr > ACWR_HIGH:
        drivers.append(f"ACWR high ({signals.latest_acwr:.2f})")
    if signals.spike_pct > LOAD_SPIKE_PCT:
        drivers.append(f"Load spike +{round(signals.spike_pct * 100)}% vs 4w avg")
    return RuleOutcome(0.8, CombineMode.MAX, drivers)


def acwr_ramp_rule(signals: RiskSignals) -> Optional[RuleOutcome]:
    """Linear ramp for ACWR between 1.0 and 1.5 when no spike fired."""
    acwr = signals.latest_acwr
    if _acwr_spike_fired(signals) or acwr <= ACWR_RAMP_START:
        return None

    score = clamp01((acwr - ACWR_RAMP_START) / ACWR_RAMP_SPAN) * ACWR_RAMP_MAX_SCORE
    drivers = [f"ACWR elevated ({acwr:.2f})"] if acwr > ACWR_ELEVATED_DRIVER else []
    return RuleOutcome(score, CombineMode.MAX, drivers)


def resting_hr_rule(signals: RiskSignals) -> Optional[RuleOutcome]:
    """Resting HR at least +5 bpm over baseline on each of the last 3 entries."""
    index = signals.index
    if signals.hr_baseline <= 0 or index >= len(signals.resting_hrs):
        return None
    if signals.resting_hrs[index] is None:
        return None

    elevated = 0
    max_delta = 0.0
    for hr in signals.resting_hrs[max(0, index - HR_WINDOW_DAYS + 1):index + 1]:
        if hr is None:
            continue
        delta = hr - signals.hr_baseline
        if delta >= HR_ELEVATED_DELTA:
            elevated += 1
        max_delta = max(max_delta, delta)

    if elevated < HR_WINDOW_DAYS:
        return None
    if max_delta >= HR_STRAIN_DELTA:
        return RuleOutcome(0.9, CombineMode.MAX, [f"Resting HR +{max_delta:.0f} bpm for 3 days"])
    return RuleOutcome(0.2, CombineMode.ADD, ["Resting HR elevated 3d"])


def fatigue_notes_rule(signals: RiskSignals) -> Optional[RuleOutcome]:
    count = signals.tag_total("fatigue")
    if count < FATIGUE_TAG_MIN:
        return None
    return RuleOutcome(0.15, CombineMode.ADD, [f"Fatigue noted {count}× in 7d"])


def pain_notes_rule(signals: RiskSignals) -> Optional[RuleOutcome]:
    count = signals.tag_total("pain")
    if count < PAIN_TAG_MIN:
        return None
    return RuleOutcome(0.15, CombineMode.ADD, [f"Pain/soreness noted {count}× in 7d"])


# ============================================================================
# Motivation rules
# ============================================================================

def mood_drop_pct(mood: float, baseline: float) -> float:
    """Fractional drop of ``mood`` below ``baseline`` (negative when above)."""
    return (baseline - mood) / baseline


def mood_down_days(signals: RiskSignals) -> int:
    """Logged days among the last 6 entries with mood >= 20% below baseline."""
    index = signals.index
    window = signals.moods[max(0, index - MOOD_WINDOW_DAYS + 1):index + 1]
    return sum(
        1 for mood in window
        if mood > 0 and mood_drop_pct(mood, signals.mood_baseline) >= MOOD_DROP_PCT
    )


def mood_drop_rule(signals: RiskSignals) -> Optional[RuleOutcome]:
    """Mood persistently (4 of 6 days) or currently 20% under baseline."""
    if signals.mood_baseline <= 0:
        return None

    down_days = mood_down_days(signals)
    if down_days >= MOOD_DOWN_DAYS:
        return RuleOutcome(
            0.6, CombineMode.MAX,
            [f"Mood ↓≥20% on {down_days}/{MOOD_WINDOW_DAYS} days"],
        )

    today = signals.moods[signals.index] if signals.index < len(signals.moods) else 0
    if today > 0 and mood_drop_pct(today, signals.mood_baseline) >= MOOD_DROP_PCT:
        return RuleOutcome(0.35, CombineMode.MAX, ["Mood below baseline"])
    return None


def mood_volatility_rule(signals: RiskSignals) -> Optional[RuleOutcome]:
    """Mood swinging around right after a load jump."""
    if signals.mood_baseline <= 0:
        return None
    if signals.mood_stddev >= MOOD_VOLATILITY_STDDEV and signals.spike_pct > MOOD_VOLATILITY_SPIKE_PCT:
        return RuleOutcome(0.2, CombineMode.ADD, ["Mood volatility up after load jump"])
    return None


def stress_notes_rule(signals: RiskSignals) -> Optional[RuleOutcome]:
    count = signals.tag_total("stress")
    if count < STRESS_TAG_MIN:
        return None
    return RuleOutcome(0.15, CombineMode.ADD, [f"Stress noted {count}× in 7d"])


def sentiment_rule(signals: RiskSignals) -> Optional[RuleOutcome]:
    """Negative notes raise motivation risk; clearly positive notes lower it."""
    if signals.avg_sentiment <= SENTIMENT_NEGATIVE:
        return RuleOutcome(0.2, CombineMode.ADD, ["Notes sentiment negative"])
    if signals.avg_sentiment >= SENTIMENT_POSITIVE:
        return RuleOutcome(-0.1, CombineMode.ADD)
    return None


def confidence_notes_rule(signals: RiskSignals) -> Optional[RuleOutcome]:
    count = signals.tag_total("confidence")
    if count < CONFIDENCE_TAG_MIN:
        return None
    return RuleOutcome(-0.15, CombineMode.ADD, ["Confidence strong recently"])


OVERTRAIN_RULES: Tuple[Rule, ...] = (
    acwr_streak_rule,
    acwr_spike_rule,
    acwr_ramp_rule,
    resting_hr_rule,
    fatigue_notes_rule,
    pain_notes_rule,
)

MOTIVATION_RULES: Tuple[Rule, ...] = (
    mood_drop_rule,
    mood_volatility_rule,
    stress_notes_rule,
    sentiment_rule,
    confidence_notes_rule,
)

# Order in which fired rules report drivers across both scores
DRIVER_ORDER: Tuple[Rule, ...] = (
    acwr_streak_rule,
    acwr_spike_rule,
    acwr_ramp_rule,
    resting_hr_rule,
    mood_drop_rule,
    mood_volatility_rule,
    fatigue_notes_rule,
    pain_notes_rule,
    stress_notes_rule,
    sentiment_rule,
    confidence_notes_rule,
)


def fold_rules(rules: Sequence[Rule], signals: RiskSignals) -> Tuple[float, List[str]]:
    """
    Evaluate ``rules`` in order and combine their outcomes.

    Returns:
        Tuple of (unclamped score, drivers in firing order)
    """
    score = 0.0
    drivers: List[str] = []
    for rule in rules:
        outcome = rule(signals)
        if outcome is None:
            continue
        score = outcome.apply(score)
        drivers.extend(outcome.drivers)
    return score, drivers


def collect_drivers(rules: Sequence[Rule], signals: RiskSignals) -> List[str]:
    """Drivers of the rules that fire, in ``rules`` order."""
    drivers: List[str] = []
    for rule in rules:
        outcome = rule(signals)
        if outcome is not None:
            drivers.extend(outcome.drivers)
    return drivers
