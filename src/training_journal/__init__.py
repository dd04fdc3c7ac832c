"""Training journal with rule-based readiness-risk scoring."""

__version__ = "0.1.0"
