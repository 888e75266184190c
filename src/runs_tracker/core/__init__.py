"""Core utilities."""

from runs_tracker.core.odds_math import (
    american_to_prob,
    no_vig_two_way,
    devig_two_way,
    get_overround,
    get_vig_pct,
)
from runs_tracker.core.implied_total import (
    build_alt_line_curve,
    median_from_curve,
    implied_median_from_alternates,
    resolve_implied_total,
    resolve_implied_total_detail,
)
from runs_tracker.core.slate import project_game, project_slate, compute_slate_summary
from runs_tracker.core.collector import SlateCollector

__all__ = [
    "american_to_prob",
    "no_vig_two_way",
    "devig_two_way",
    "get_overround",
    "get_vig_pct",
    "build_alt_line_curve",
    "median_from_curve",
    "implied_median_from_alternates",
    "resolve_implied_total",
    "resolve_implied_total_detail",
    "project_game",
    "project_slate",
    "compute_slate_summary",
    "SlateCollector",
]
