"""
The Odds API adapter.

Fetches MLB totals, alternate totals and scores via The Odds API aggregator.
https://the-odds-api.com/

Requires API key (free tier: 500 requests/month).
"""

from __future__ import annotations

import asyncio
import time
from typing import Optional

import httpx
import structlog
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from runs_tracker.errors import OddsAPIError

logger = structlog.get_logger()

TOTALS_MARKETS = "totals,alternate_totals"


def _is_retryable(exc: BaseException) -> bool:
    """Retry transport failures, rate limits and server errors, not client errors."""
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        return status == 429 or status >= 500
    return isinstance(exc, httpx.TransportError)


class OddsAPIAdapter:
    """
    The Odds API adapter for fetching sportsbook totals and scores.

    Read-only. Use as an async context manager.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.the-odds-api.com/v4",
        requests_per_second: float = 2.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._min_delay = 1.0 / requests_per_second
        self._last_request_time = 0.0
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def connect(self) -> None:
        """Initialize connection."""
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(30.0, connect=10.0),
            transport=self._transport,
        )

    async def close(self) -> None:
        """Close connection."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _throttle(self) -> None:
        now = time.monotonic()
        elapsed = now - self._last_request_time
        if elapsed < self._min_delay:
            await asyncio.sleep(self._min_delay - elapsed)
        self._last_request_time = time.monotonic()

    @retry(
        retry=retry_if_exception(_is_retryable),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=30),
        reraise=True,
    )
    async def _get_with_retry(self, path: str, params: dict) -> dict | list:
        assert self._client is not None, "adapter not connected"
        await self._throttle()

        resp = await self._client.get(path, params={**params, "apiKey": self._api_key})
        resp.raise_for_status()

        logger.debug(
            "odds_api_request",
            path=path,
            status=resp.status_code,
            requests_remaining=resp.headers.get("x-requests-remaining"),
        )
        return resp.json()

    async def _get(self, path: str, params: Optional[dict] = None) -> dict | list:
        try:
            return await self._get_with_retry(path, params or {})
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error("odds_api_http_error", path=path, status=status)
            raise OddsAPIError(f"GET {path} failed: HTTP {status}", status_code=status) from e
        except httpx.HTTPError as e:
            logger.error("odds_api_transport_error", path=path, error=str(e))
            raise OddsAPIError(f"GET {path} failed: {e}") from e
        except ValueError as e:
            # 200 with a non-JSON body, e.g. a gateway error page
            logger.error("odds_api_invalid_json", path=path, error=str(e))
            raise OddsAPIError(f"GET {path} failed: invalid JSON") from e

    async def get_odds(
        self,
        sport: str,
        regions: str = "us",
        markets: str = TOTALS_MARKETS,
        odds_format: str = "american",
        bookmakers: Optional[str] = None,
    ) -> list[dict]:
        """
        Get pregame odds for all events in a sport.

        Args:
            sport: Sport key (e.g., "baseball_mlb")
            regions: Comma-separated regions (us, us2, uk, eu, au)
            markets: Comma-separated market keys
            odds_format: "american" or "decimal"
            bookmakers: Optional comma-separated bookmaker keys

        Returns list of events with odds:
        [
            {
                "id": "event_id",
                "commence_time": "2025-07-04T23:05:00Z",
                "home_team": "New York Yankees",
                "away_team": "Toronto Blue Jays",
                "bookmakers": [
                    {
                        "key": "draftkings",
                        "markets": [
                            {
                                "key": "totals",
                                "outcomes": [
                                    {"name": "Over", "price": -110, "point": 8.5},
                                    {"name": "Under", "price": -110, "point": 8.5}
                                ]
                            }
                        ]
                    }
                ]
            },
            ...
        ]
        """
        params = {
            "regions": regions,
            "markets": markets,
            "oddsFormat": odds_format,
        }
        if bookmakers:
            params["bookmakers"] = bookmakers

        events = await self._get(f"/sports/{sport}/odds", params=params)
        logger.info("odds_fetched", sport=sport, events=len(events))
        return events  # type: ignore

    async def get_scores(self, sport: str, days_from: int = 3) -> list[dict]:
        """
        Get live and recently completed scores.

        Returns list of score objects:
        [
            {
                "id": "event_id",
                "completed": false,
                "home_team": "New York Yankees",
                "away_team": "Toronto Blue Jays",
                "scores": [
                    {"name": "New York Yankees", "score": "3"},
                    {"name": "Toronto Blue Jays", "score": "1"}
                ]
            },
            ...
        ]
        """
        scores = await self._get(f"/sports/{sport}/scores", params={"daysFrom": str(days_from)})
        logger.info("scores_fetched", sport=sport, events=len(scores))
        return scores  # type: ignore

    async def get_event_odds(
        self,
        sport: str,
        event_id: str,
        regions: str = "us",
        markets: str = TOTALS_MARKETS,
        odds_format: str = "american",
    ) -> dict:
        """
        Get current odds for one event.

        Once a game has started this returns in-play prices from books that
        offer them, in the same shape as one element of ``get_odds``.
        """
        params = {
            "regions": regions,
            "markets": markets,
            "oddsFormat": odds_format,
        }
        return await self._get(f"/sports/{sport}/events/{event_id}/odds", params=params)  # type: ignore

    async def __aenter__(self) -> OddsAPIAdapter:
        await self.connect()
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()
