"""Normalized data models for slate run projections."""

from runs_tracker.models.odds import PricedOutcome, TwoWayQuote, MarketBundle
from runs_tracker.models.probability import (
    FairProbabilityPair,
    CurvePoint,
    TotalSource,
    ImpliedTotal,
)
from runs_tracker.models.game import GameState, GameSnapshot, GameProjection, SlateSummary

__all__ = [
    "PricedOutcome",
    "TwoWayQuote",
    "MarketBundle",
    "FairProbabilityPair",
    "CurvePoint",
    "TotalSource",
    "ImpliedTotal",
    "GameState",
    "GameSnapshot",
    "GameProjection",
    "SlateSummary",
]
