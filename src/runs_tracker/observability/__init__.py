"""Observability: structured logging."""

from runs_tracker.observability.logging import setup_logging

__all__ = ["setup_logging"]
