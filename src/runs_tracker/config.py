"""Configuration via pydantic-settings."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Global settings."""

    model_config = SettingsConfigDict(
        env_prefix="RUNS_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── The Odds API ────────────────────────────────────────────────────────
    odds_api_key: str = Field(default="", description="The Odds API key")
    odds_api_base_url: str = Field(default="https://api.the-odds-api.com/v4")
    odds_api_requests_per_second: float = Field(default=2.0)

    # ── Slate ───────────────────────────────────────────────────────────────
    sport_key: str = Field(default="baseball_mlb")
    regions: str = Field(default="us", description="Comma-separated regions, e.g. 'us,us2'")
    odds_format: str = Field(default="american")
    scores_days_from: int = Field(default=3, ge=1, le=3, description="Days of completed scores to fetch")
    include_live_odds: bool = Field(default=True, description="Fetch in-play totals for live games")

    # ── Refresh ─────────────────────────────────────────────────────────────
    poll_interval_seconds: float = Field(default=30.0, description="Seconds between refreshes")

    # ── Logging ─────────────────────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console", description="'console' or 'json'")

    # ── Helpers ─────────────────────────────────────────────────────────────

    @property
    def odds_api_configured(self) -> bool:
        return bool(self.odds_api_key)


def get_settings(**overrides) -> Settings:  # type: ignore
    """Factory with optional overrides."""
    return Settings(**overrides)
