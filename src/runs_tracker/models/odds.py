"""Normalized totals market models."""

from __future__ import annotations

import math
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PricedOutcome(BaseModel):
    """
    One side of a market, priced in American odds.

    Carries no probability of its own; see ``core.odds_math``.
    """
    model_config = ConfigDict(frozen=True)

    odds: float = Field(description="American odds, e.g. -110 or +150")

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.odds)


class TwoWayQuote(BaseModel):
    """
    An over/under quote at a single line.

    A quote missing a side, or with a non-finite line or price, is
    unusable and gets filtered out before any math runs.
    """
    model_config = ConfigDict(frozen=True)

    line: Optional[float] = Field(default=None, description="Total runs line, e.g. 8.5")
    over: Optional[PricedOutcome] = None
    under: Optional[PricedOutcome] = None

    @classmethod
    def from_american(
        cls,
        line: Optional[float],
        over_odds: Optional[float],
        under_odds: Optional[float],
    ) -> TwoWayQuote:
        return cls(
            line=line,
            over=PricedOutcome(odds=over_odds) if over_odds is not None else None,
            under=PricedOutcome(odds=under_odds) if under_odds is not None else None,
        )

    @property
    def has_finite_line(self) -> bool:
        return self.line is not None and math.isfinite(self.line)

    @property
    def is_usable(self) -> bool:
        return (
            self.has_finite_line
            and self.over is not None
            and self.under is not None
            and self.over.is_finite
            and self.under.is_finite
        )


class MarketBundle(BaseModel):
    """
    Totals markets attached to a game.

    Every field is optional: a game may have no in-play book, no
    alternates posted, or no market at all.
    """
    model_config = ConfigDict(frozen=True)

    live_main: Optional[TwoWayQuote] = None
    live_alts: Optional[list[TwoWayQuote]] = None
    pre_main: Optional[TwoWayQuote] = None
    pre_alts: Optional[list[TwoWayQuote]] = None

    @property
    def is_empty(self) -> bool:
        return not (self.live_main or self.live_alts or self.pre_main or self.pre_alts)
