"""
Slate collector: one refresh cycle against the odds provider.

Fetches pregame odds and scores concurrently, then in-play odds for each
live game, and hands back normalized GameSnapshots.
"""

from __future__ import annotations

import asyncio
from typing import Optional

import structlog

from runs_tracker.adapters.odds_api import OddsAPIAdapter
from runs_tracker.config import Settings
from runs_tracker.core.normalize import game_state, map_events
from runs_tracker.errors import ConfigurationError, OddsAPIError
from runs_tracker.models.game import GameSnapshot, GameState

logger = structlog.get_logger()


class SlateCollector:
    """Builds the current slate from The Odds API."""

    def __init__(
        self,
        adapter: OddsAPIAdapter,
        sport: str = "baseball_mlb",
        regions: str = "us",
        odds_format: str = "american",
        scores_days_from: int = 3,
        include_live: bool = True,
    ) -> None:
        self.adapter = adapter
        self.sport = sport
        self.regions = regions
        self.odds_format = odds_format
        self.scores_days_from = scores_days_from
        self.include_live = include_live

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        adapter: Optional[OddsAPIAdapter] = None,
        include_live: Optional[bool] = None,
    ) -> SlateCollector:
        """Create a collector (and adapter, unless given) from settings."""
        if adapter is None:
            if not settings.odds_api_configured:
                raise ConfigurationError("Missing RUNS_TRACKER_ODDS_API_KEY")
            adapter = OddsAPIAdapter(
                api_key=settings.odds_api_key,
                base_url=settings.odds_api_base_url,
                requests_per_second=settings.odds_api_requests_per_second,
            )
        return cls(
            adapter=adapter,
            sport=settings.sport_key,
            regions=settings.regions,
            odds_format=settings.odds_format,
            scores_days_from=settings.scores_days_from,
            include_live=settings.include_live_odds if include_live is None else include_live,
        )

    async def _live_odds(self, event_ids: list[str]) -> dict[str, dict]:
        """In-play odds per live event; a failed event just keeps pregame data."""
        live: dict[str, dict] = {}
        for event_id in event_ids:
            try:
                live[event_id] = await self.adapter.get_event_odds(
                    self.sport,
                    event_id,
                    regions=self.regions,
                    odds_format=self.odds_format,
                )
            except OddsAPIError as e:
                logger.warning("live_odds_failed", event_id=event_id, error=str(e))
        return live

    async def collect(self) -> list[GameSnapshot]:
        """
        Run one refresh cycle.

        Returns:
            One GameSnapshot per event on the odds board

        Raises:
            OddsAPIError: if the odds or scores request fails
        """
        events, scores = await asyncio.gather(
            self.adapter.get_odds(self.sport, regions=self.regions, odds_format=self.odds_format),
            self.adapter.get_scores(self.sport, days_from=self.scores_days_from),
        )

        live_events: dict[str, dict] = {}
        if self.include_live:
            event_ids = {e.get("id") for e in events}
            live_ids = [
                s["id"] for s in scores
                if s.get("id") and s["id"] in event_ids
                and game_state(s) == GameState.IN_PROGRESS
            ]
            live_events = await self._live_odds(live_ids)

        games = map_events(events, scores, live_events)
        logger.info(
            "slate_collected",
            games=len(games),
            live=sum(1 for g in games if g.state == GameState.IN_PROGRESS),
            live_odds=len(live_events),
        )
        return games
