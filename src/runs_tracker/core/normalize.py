"""
Map The Odds API payloads into GameSnapshot records.

Provider quirks (price field names, score strings, status flags) are
handled here so the market math only ever sees the normalized models.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any, Optional

import structlog

from runs_tracker.models.game import GameSnapshot, GameState
from runs_tracker.models.odds import MarketBundle, TwoWayQuote

logger = structlog.get_logger()

MAIN_TOTALS_KEY = "totals"
ALT_TOTALS_KEY = "alternate_totals"

# Books and aggregator plans disagree on where the price lives
PRICE_FIELDS = ("price", "odds", "price_american")


def _to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def read_american(value: Any) -> Optional[float]:
    """
    Read an American price that may be a number, a string, or {"american": n}.

    Examples:
        >>> read_american(-110)
        -110.0
        >>> read_american({"american": "+150"})
        150.0
    """
    if isinstance(value, dict):
        return _to_float(value.get("american"))
    return _to_float(value)


def outcome_price(outcome: dict) -> Optional[float]:
    """First price field present on an outcome, as American odds."""
    for field in PRICE_FIELDS:
        if outcome.get(field) is not None:
            return read_american(outcome[field])
    return None


def _find_outcome(outcomes: list[dict], name: str) -> Optional[dict]:
    for outcome in outcomes:
        if str(outcome.get("name") or "").lower() == name:
            return outcome
    return None


def parse_total_market(market: dict) -> Optional[TwoWayQuote]:
    """
    Build a quote from a totals market with one Over and one Under outcome.

    Returns None unless both sides exist and the Over carries a numeric
    point. Prices may still be missing; the resolver filters those.
    """
    outcomes = market.get("outcomes") or []
    over = _find_outcome(outcomes, "over")
    under = _find_outcome(outcomes, "under")
    if over is None or under is None:
        return None

    line = _to_float(over.get("point"))
    if line is None:
        return None

    return TwoWayQuote.from_american(line, outcome_price(over), outcome_price(under))


def _alternate_quotes(market: dict) -> list[TwoWayQuote]:
    """
    Alternate totals list one Over/Under pair per line in a single market.
    """
    outcomes = market.get("outcomes") or []
    pairs: dict[float, dict[str, dict]] = {}
    for outcome in outcomes:
        side = str(outcome.get("name") or "").lower()
        line = _to_float(outcome.get("point"))
        if side not in ("over", "under") or line is None:
            continue
        pairs.setdefault(line, {})[side] = outcome

    quotes = []
    for line, sides in pairs.items():
        if "over" in sides and "under" in sides:
            quotes.append(TwoWayQuote.from_american(
                line,
                outcome_price(sides["over"]),
                outcome_price(sides["under"]),
            ))
    return quotes


def parse_totals(bookmakers: list[dict]) -> tuple[Optional[TwoWayQuote], list[TwoWayQuote]]:
    """
    Collect main and alternate totals across bookmakers.

    The last main totals market seen wins; every alternate line is kept.

    Returns:
        (main, alts) tuple
    """
    main: Optional[TwoWayQuote] = None
    alts: list[TwoWayQuote] = []

    for bookmaker in bookmakers or []:
        for market in bookmaker.get("markets") or []:
            key = market.get("key")
            if key == MAIN_TOTALS_KEY:
                quote = parse_total_market(market)
                if quote is not None:
                    main = quote
            elif key == ALT_TOTALS_KEY:
                alts.extend(_alternate_quotes(market))

    return main, alts


def game_state(score: Optional[dict]) -> GameState:
    """Map a scores entry onto a GameState; no entry means not started."""
    if not score:
        return GameState.SCHEDULED

    status = score.get("status")
    if status == "complete":
        return GameState.FINAL
    if status == "in_progress":
        return GameState.IN_PROGRESS

    if score.get("completed"):
        return GameState.FINAL
    if score.get("scores"):
        return GameState.IN_PROGRESS
    return GameState.SCHEDULED


def team_runs(score: Optional[dict], team: str) -> float:
    """Runs for the named team, 0 when absent or unreadable."""
    if not score:
        return 0.0
    for entry in score.get("scores") or []:
        if entry.get("name") == team:
            runs = _to_float(entry.get("score"))
            return runs if runs is not None else 0.0
    return 0.0


def _parse_time(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (ValueError, TypeError):
        return None


def map_event_to_game(
    event: dict,
    score: Optional[dict] = None,
    live_event: Optional[dict] = None,
) -> GameSnapshot:
    """
    Build a GameSnapshot from an odds event, its scores entry, and
    optionally its in-play odds.

    Args:
        event: One element of ``OddsAPIAdapter.get_odds``
        score: Matching element of ``OddsAPIAdapter.get_scores``
        live_event: ``OddsAPIAdapter.get_event_odds`` for a live game
    """
    home = event.get("home_team") or ""
    away = event.get("away_team") or ""

    pre_main, pre_alts = parse_totals(event.get("bookmakers") or [])
    live_main: Optional[TwoWayQuote] = None
    live_alts: list[TwoWayQuote] = []
    if live_event:
        live_main, live_alts = parse_totals(live_event.get("bookmakers") or [])

    return GameSnapshot(
        id=str(event.get("id", "")),
        state=game_state(score),
        home_runs=team_runs(score, home),
        away_runs=team_runs(score, away),
        markets=MarketBundle(
            live_main=live_main,
            live_alts=live_alts or None,
            pre_main=pre_main,
            pre_alts=pre_alts or None,
        ),
        home_team=home,
        away_team=away,
        commence_time=_parse_time(event.get("commence_time")),
        detail=str((score or {}).get("details") or ""),
    )


def map_events(
    events: list[dict],
    scores: list[dict],
    live_events: Optional[dict[str, dict]] = None,
) -> list[GameSnapshot]:
    """Map a whole odds response, joining scores and live odds by event id."""
    score_map = {s.get("id"): s for s in scores or []}
    live_events = live_events or {}

    games = []
    for event in events or []:
        event_id = event.get("id")
        if not event_id:
            logger.debug("event_skipped_no_id")
            continue
        games.append(map_event_to_game(event, score_map.get(event_id), live_events.get(event_id)))
    return games
