"""
Pytest fixtures for testing.
"""

import pytest

from runs_tracker.models.game import GameSnapshot, GameState
from runs_tracker.models.odds import MarketBundle, TwoWayQuote


def fair_american(p: float) -> float:
    """American price with no vig for probability p."""
    if p >= 0.5:
        return -100 * p / (1 - p)
    return 100 * (1 - p) / p


def fair_quote(line: float, p_under: float) -> TwoWayQuote:
    """Quote whose de-vigged P(under) is p_under."""
    return TwoWayQuote.from_american(line, fair_american(1 - p_under), fair_american(p_under))


@pytest.fixture
def alt_board() -> list[TwoWayQuote]:
    """Realistic alternate board: P(under) rises with the line."""
    return [
        fair_quote(6.5, 0.25),
        fair_quote(7.5, 0.40),
        fair_quote(8.5, 0.55),
        fair_quote(9.5, 0.70),
        fair_quote(10.5, 0.80),
    ]


@pytest.fixture
def final_game() -> GameSnapshot:
    return GameSnapshot(
        id="evt-final",
        state=GameState.FINAL,
        home_runs=5,
        away_runs=4,
        markets=MarketBundle(pre_main=TwoWayQuote.from_american(7.5, -110, -110)),
        home_team="New York Yankees",
        away_team="Toronto Blue Jays",
    )


@pytest.fixture
def live_game() -> GameSnapshot:
    return GameSnapshot(
        id="evt-live",
        state=GameState.IN_PROGRESS,
        home_runs=2,
        away_runs=1,
        markets=MarketBundle(pre_main=TwoWayQuote.from_american(9.0, -110, -110)),
        home_team="Boston Red Sox",
        away_team="Tampa Bay Rays",
        detail="Top 5th",
    )


def _outcomes(line: float, over: float, under: float) -> list[dict]:
    return [
        {"name": "Over", "price": over, "point": line},
        {"name": "Under", "price": under, "point": line},
    ]


@pytest.fixture
def odds_event() -> dict:
    """One event as returned by /sports/baseball_mlb/odds."""
    return {
        "id": "evt1",
        "sport_key": "baseball_mlb",
        "commence_time": "2025-07-04T23:05:00Z",
        "home_team": "New York Yankees",
        "away_team": "Toronto Blue Jays",
        "bookmakers": [
            {
                "key": "draftkings",
                "markets": [
                    {"key": "totals", "outcomes": _outcomes(8.5, -105, -115)},
                    {
                        "key": "alternate_totals",
                        "outcomes": _outcomes(7.5, -150, 130) + _outcomes(9.5, 135, -160),
                    },
                ],
            },
            {
                "key": "fanduel",
                "markets": [
                    {"key": "totals", "outcomes": _outcomes(9.0, -110, -110)},
                ],
            },
        ],
    }


@pytest.fixture
def live_event() -> dict:
    """In-play odds for evt1 from /events/evt1/odds."""
    return {
        "id": "evt1",
        "home_team": "New York Yankees",
        "away_team": "Toronto Blue Jays",
        "bookmakers": [
            {
                "key": "draftkings",
                "markets": [
                    {"key": "totals", "outcomes": _outcomes(10.5, -110, -110)},
                ],
            },
        ],
    }


@pytest.fixture
def live_score() -> dict:
    """Scores entry for evt1, game under way."""
    return {
        "id": "evt1",
        "completed": False,
        "home_team": "New York Yankees",
        "away_team": "Toronto Blue Jays",
        "scores": [
            {"name": "New York Yankees", "score": "3"},
            {"name": "Toronto Blue Jays", "score": "2"},
        ],
    }
