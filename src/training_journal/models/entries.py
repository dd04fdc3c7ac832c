"""Stored journal rows: one daily entry and one metrics row per user and date."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ..utils.dates import normalize_date
from .journal import DailyBioMetric, DailyObservation


class DailyEntry(BaseModel):
    """A user's logged day as stored in ``daily_entries``."""

    user_id: str = Field(..., min_length=1)
    date: str
    mood: int = Field(default=0, ge=0, le=5, description="0 = not logged")
    heart_rate: Optional[float] = Field(default=None, gt=0)
    training_volume: Optional[float] = Field(default=None, ge=0)
    notes: str = ""
    period_symptoms: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("date", mode="before")
    @classmethod
    def _normalize_date(cls, value):
        normalized = normalize_date(value)
        if normalized is None:
            raise ValueError(f"invalid date: {value!r}")
        return normalized

    @field_validator("notes", mode="before")
    @classmethod
    def _notes_default(cls, value):
        return value or ""

    @classmethod
    def placeholder(cls, user_id: str, date: str) -> "DailyEntry":
        """Empty entry for a day the user did not log."""
        return cls(user_id=user_id, date=date)

    def to_observation(self) -> DailyObservation:
        return DailyObservation(
            date=self.date,
            training_volume=self.training_volume,
            mood=self.mood,
            notes=self.notes,
        )


class DailyMetricsRecord(BaseModel):
    """Per-day metrics as stored in ``daily_metrics``."""

    user_id: str = Field(..., min_length=1)
    date: str
    rpe: Optional[float] = Field(default=None, gt=0, le=10)
    resting_hr: Optional[float] = Field(default=None, gt=0)
    sleep_hours: Optional[float] = Field(default=None, ge=0, le=24)
    note_sentiment: Optional[float] = Field(default=None, ge=-1, le=1)
    fatigue_tag: Optional[int] = Field(default=None, ge=0)
    stress_tag: Optional[int] = Field(default=None, ge=0)
    pain_tag: Optional[int] = Field(default=None, ge=0)
    confidence_tag: Optional[int] = Field(default=None, ge=0)
    sleep_tag: Optional[int] = Field(default=None, ge=0)
    nutrition_tag: Optional[int] = Field(default=None, ge=0)
    updated_at: Optional[datetime] = None

    @field_validator("date", mode="before")
    @classmethod
    def _normalize_date(cls, value):
        normalized = normalize_date(value)
        if normalized is None:
            raise ValueError(f"invalid date: {value!r}")
        return normalized

    def to_bio_metric(self) -> DailyBioMetric:
        return DailyBioMetric(
            date=self.date,
            rpe=self.rpe,
            resting_hr=self.resting_hr,
            note_sentiment=self.note_sentiment,
            fatigue_tag=self.fatigue_tag,
            stress_tag=self.stress_tag,
            pain_tag=self.pain_tag,
            confidence_tag=self.confidence_tag,
            sleep_tag=self.sleep_tag,
            nutrition_tag=self.nutrition_tag,
        )
