"""API route modules."""

from . import journal, risk

__all__ = ["journal", "risk"]
