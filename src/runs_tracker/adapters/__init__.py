"""Provider adapters for data ingestion."""

from runs_tracker.adapters.odds_api import OddsAPIAdapter

__all__ = ["OddsAPIAdapter"]
