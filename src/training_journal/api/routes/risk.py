"""Readiness risk and weekly summary API routes."""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Query

from ..deps import get_service
from ...exceptions import RiskNotFoundError
from ...services.risk_service import RiskService


router = APIRouter()


@router.get("/{user_id}/risk/{day}")
async def get_risk(
    user_id: str,
    day: str,
    service: RiskService = Depends(get_service),
) -> Dict[str, Any]:
    """Stored risk scores and drivers for one day."""
    result = service.get_risk(user_id, day)
    if result is None:
        raise RiskNotFoundError(user_id, day)
    return result.to_dict()


@router.post("/{user_id}/risk/{day}/recompute")
async def recompute_risk(
    user_id: str,
    day: str,
    service: RiskService = Depends(get_service),
) -> Dict[str, Any]:
    """Recompute (and store) risk for one day from the journal window."""
    result = service.recompute(user_id, day)
    if result is None:
        raise RiskNotFoundError(user_id, day, details={"reason": "no journal data in window"})
    return result.to_dict()


@router.get("/{user_id}/weeks/{day}")
async def get_week(
    user_id: str,
    day: str,
    service: RiskService = Depends(get_service),
) -> Dict[str, Any]:
    """Summary of the Sunday-start week containing ``day``."""
    return service.get_week_summary(user_id, day).to_dict()


@router.get("/{user_id}/history")
async def get_history(
    user_id: str,
    weeks: int = Query(default=4, ge=1, le=52),
    service: RiskService = Depends(get_service),
) -> List[Dict[str, Any]]:
    """Average training volume per week, oldest first."""
    return [week.to_dict() for week in service.get_training_history(user_id, weeks)]
