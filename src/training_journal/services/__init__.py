"""Service layer for the training journal."""

from .base import BaseService
from .risk_service import RiskService, get_risk_service, prior_signals_from_metrics

__all__ = [
    "BaseService",
    "RiskService",
    "get_risk_service",
    "prior_signals_from_metrics",
]
