"""Journal data models used by the risk engine.

External rows (entries and metrics) arrive in loosely-typed shapes, with
camelCase and snake_case variants of the same field. The ``from_row``
constructors are the only place those variants are resolved; everything
downstream works with the normalized dataclasses below.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from ..metrics.load import session_load
from ..utils.dates import date_key


TAG_CATEGORIES = ("fatigue", "stress", "pain", "confidence", "sleep", "nutrition")

DEFAULT_MODEL_VERSION = "A-2"
MAX_DRIVERS = 4


def _first_present(row: Mapping[str, Any], *keys: str) -> Any:
    """Return the first value among ``keys`` that is present and not None."""
    for key in keys:
        value = row.get(key)
        if value is not None:
            return value
    return None


def _optional_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    return float(value)


def _optional_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    return int(value)


@dataclass
class NoteSignals:
    """Sentiment and per-category tag counts derived from daily notes."""
    sentiment: float = 0.0  # [-1, 1]
    tags: Dict[str, int] = field(default_factory=lambda: {t: 0 for t in TAG_CATEGORIES})

    def tag(self, category: str) -> int:
        return self.tags.get(category, 0)

    def to_dict(self) -> dict:
        return {"sentiment": self.sentiment, "tags": dict(self.tags)}


@dataclass
class DailyObservation:
    """What the user logged for a day: volume, mood and notes."""
    date: str  # YYYY-MM-DD
    training_volume: Optional[float] = None
    mood: int = 0  # 0 = no entry, 1-5 otherwise
    notes: str = ""

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "DailyObservation":
        """Create from an entries-source row (camelCase or snake_case keys)."""
        return cls(
            date=date_key(str(row["date"])),
            training_volume=_optional_float(
                _first_present(row, "trainingVolume", "training_volume")
            ),
            mood=int(_first_present(row, "mood") or 0),
            notes=_first_present(row, "notes") or "",
        )

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "training_volume": self.training_volume,
            "mood": self.mood,
            "notes": self.notes,
        }


@dataclass
class DailyBioMetric:
    """Per-day physiological and note-derived metrics."""
    date: str  # YYYY-MM-DD
    rpe: Optional[float] = None
    resting_hr: Optional[float] = None
    note_sentiment: Optional[float] = None
    fatigue_tag: Optional[int] = None
    stress_tag: Optional[int] = None
    pain_tag: Optional[int] = None
    confidence_tag: Optional[int] = None
    sleep_tag: Optional[int] = None
    nutrition_tag: Optional[int] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "DailyBioMetric":
        """Create from a metrics-source row (camelCase or snake_case keys)."""
        def tag(category: str) -> Optional[int]:
            return _optional_int(
                _first_present(row, f"{category}Tag", f"{category}_tag")
            )

        return cls(
            date=date_key(str(row["date"])),
            rpe=_optional_float(_first_present(row, "rpe")),
            resting_hr=_optional_float(
                _first_present(row, "restingHeartRate", "restingHr", "resting_hr")
            ),
            note_sentiment=_optional_float(
                _first_present(row, "noteSentiment", "note_sentiment")
            ),
            fatigue_tag=tag("fatigue"),
            stress_tag=tag("stress"),
            pain_tag=tag("pain"),
            confidence_tag=tag("confidence"),
            sleep_tag=tag("sleep"),
            nutrition_tag=tag("nutrition"),
        )

    def persisted_tag(self, category: str) -> Optional[int]:
        """Stored tag count for ``category``, or None if never persisted."""
        return getattr(self, f"{category}_tag", None)

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "rpe": self.rpe,
            "resting_hr": self.resting_hr,
            "note_sentiment": self.note_sentiment,
            **{f"{t}_tag": self.persisted_tag(t) for t in TAG_CATEGORIES},
        }


@dataclass
class TimelineDay:
    """One date of the merged timeline. Either side may be missing."""
    date: str
    observation: Optional[DailyObservation] = None
    metric: Optional[DailyBioMetric] = None

    @property
    def session_load(self) -> float:
        """Volume, multiplied by RPE when RPE was recorded. Absent volume is 0."""
        volume = self.observation.training_volume if self.observation else None
        rpe = self.metric.rpe if self.metric else None
        return session_load(volume, rpe)

    @property
    def mood(self) -> int:
        return self.observation.mood if self.observation else 0

    @property
    def resting_hr(self) -> Optional[float]:
        return self.metric.resting_hr if self.metric else None

    @property
    def notes(self) -> str:
        return self.observation.notes if self.observation else ""


@dataclass
class RiskResult:
    """
    Risk scores for one user and date.

    Always created fresh by the engine; never updated in place.
    """
    user_id: str
    date: str
    overtrain_risk: float  # 0..1
    motivation_risk: float  # 0..1
    performance_risk: float  # 0..1
    drivers: List[str] = field(default_factory=list)  # max 4, priority order
    model_version: str = DEFAULT_MODEL_VERSION

    def to_dict(self) -> dict:
        """Convert to the sink field mapping (camelCase keys)."""
        return {
            "userId": self.user_id,
            "date": self.date,
            "overtrainRisk": self.overtrain_risk,
            "motivationRisk": self.motivation_risk,
            "performanceRisk": self.performance_risk,
            "drivers": list(self.drivers),
            "modelVersion": self.model_version,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RiskResult":
        """Create from a camelCase or snake_case dictionary."""
        return cls(
            user_id=_first_present(data, "userId", "user_id"),
            date=date_key(str(data["date"])),
            overtrain_risk=float(_first_present(data, "overtrainRisk", "overtrain_risk") or 0.0),
            motivation_risk=float(_first_present(data, "motivationRisk", "motivation_risk") or 0.0),
            performance_risk=float(_first_present(data, "performanceRisk", "performance_risk") or 0.0),
            drivers=list(_first_present(data, "drivers") or [])[:MAX_DRIVERS],
            model_version=_first_present(data, "modelVersion", "model_version") or DEFAULT_MODEL_VERSION,
        )
