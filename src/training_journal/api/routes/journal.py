"""
Journal API routes.

Provides endpoints for:
- Saving and reading daily entries (mood, heart rate, volume, notes)
- Patching daily metrics (RPE, resting HR, sleep)

Every save refreshes the day's risk score; a failed refresh never fails
the save.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ..deps import get_service
from ...exceptions import EntryNotFoundError
from ...models.entries import DailyEntry, DailyMetricsRecord
from ...services.risk_service import RiskService


router = APIRouter()


# ============================================================================
# Request models
# ============================================================================

class EntryUpdate(BaseModel):
    """Fields a client may set on a daily entry. Omitted fields are kept."""
    mood: Optional[int] = Field(default=None, ge=0, le=5)
    heart_rate: Optional[float] = Field(default=None, gt=0)
    training_volume: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None
    period_symptoms: Optional[str] = None


class MetricsUpdate(BaseModel):
    """Fields a client may patch on a day's metrics."""
    rpe: Optional[float] = Field(default=None, gt=0, le=10)
    resting_hr: Optional[float] = Field(default=None, gt=0)
    sleep_hours: Optional[float] = Field(default=None, ge=0, le=24)


# ============================================================================
# Endpoints
# ============================================================================

@router.put("/{user_id}/entries/{day}", response_model=DailyEntry)
async def save_entry(
    user_id: str,
    day: str,
    update: EntryUpdate,
    service: RiskService = Depends(get_service),
):
    """Create or update the entry for one day."""
    return service.save_entry(user_id, day, **update.model_dump(exclude_unset=True))


@router.get("/{user_id}/entries/{day}", response_model=DailyEntry)
async def get_entry(
    user_id: str,
    day: str,
    service: RiskService = Depends(get_service),
):
    """Get the entry for one day."""
    entry = service.entries.get(user_id, day)
    if entry is None:
        raise EntryNotFoundError(user_id, day)
    return entry


@router.get("/{user_id}/entries", response_model=List[DailyEntry])
async def list_entries(
    user_id: str,
    start: str,
    end: str,
    service: RiskService = Depends(get_service),
):
    """Entries between ``start`` and ``end`` inclusive, oldest first."""
    return service.entries.get_range(user_id, start, end)


@router.put("/{user_id}/metrics/{day}", response_model=DailyMetricsRecord)
async def save_metrics(
    user_id: str,
    day: str,
    update: MetricsUpdate,
    service: RiskService = Depends(get_service),
):
    """Patch the metrics for one day."""
    return service.save_metrics(user_id, day, **update.model_dump(exclude_unset=True))
