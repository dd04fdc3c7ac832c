"""Dependency injection for API routes."""

from ..services.risk_service import RiskService, get_risk_service


def get_service() -> RiskService:
    """Get the risk service instance (overridable in tests)."""
    return get_risk_service()
