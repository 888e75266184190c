"""
Slate aggregation: actual runs plus market-expected remaining runs.
"""

from __future__ import annotations

from typing import Iterable

from runs_tracker.core.implied_total import resolve_implied_total_detail
from runs_tracker.models.game import GameProjection, GameSnapshot, SlateSummary


def project_game(game: GameSnapshot) -> GameProjection:
    """
    Expected remaining runs for one game.

    Final games expect nothing more. Unfinished games expect the implied
    total minus runs already scored, floored at 0; no market means 0.
    """
    runs = game.runs_so_far
    implied = None if game.is_final else resolve_implied_total_detail(game.markets)
    remaining = max(implied.value - runs, 0.0) if implied else 0.0

    return GameProjection(
        game_id=game.id,
        state=game.state,
        runs_so_far=runs,
        implied_total=implied,
        expected_remaining=remaining,
    )


def project_slate(games: Iterable[GameSnapshot]) -> list[GameProjection]:
    return [project_game(g) for g in games]


def compute_slate_summary(games: Iterable[GameSnapshot]) -> SlateSummary:
    """
    Sum runs scored and project the slate's final total.

    Args:
        games: Snapshots for every game on the slate, any state

    Returns:
        SlateSummary with ``total_runs_scored`` and ``projected_slate_finish``
    """
    total_runs = 0.0
    expected_remaining = 0.0
    for projection in project_slate(games):
        total_runs += projection.runs_so_far
        expected_remaining += projection.expected_remaining

    return SlateSummary(
        total_runs_scored=total_runs,
        projected_slate_finish=total_runs + expected_remaining,
    )
