"""Fair probability and implied-total models produced by the market math."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class FairProbabilityPair(BaseModel):
    """
    Over/under probabilities after vig removal.

    Only built by ``devig_two_way``; the two sides always sum to 1.
    """
    model_config = ConfigDict(frozen=True)

    p_over: float = Field(ge=0, le=1, description="Fair probability of the over")
    p_under: float = Field(ge=0, le=1, description="Fair probability of the under")


class CurvePoint(BaseModel):
    """One sample of the alternate-line curve."""
    model_config = ConfigDict(frozen=True)

    line: float
    p_under: float = Field(ge=0, le=1)


class TotalSource(str, Enum):
    """Which market produced an implied total."""
    LIVE_ALTERNATES = "live_alternates"
    LIVE_MAIN = "live_main"
    PREGAME_ALTERNATES = "pregame_alternates"
    PREGAME_MAIN = "pregame_main"


class ImpliedTotal(BaseModel):
    """Market-implied total runs for one game and where it came from."""
    model_config = ConfigDict(frozen=True)

    value: float
    source: TotalSource

    @property
    def is_live(self) -> bool:
        return self.source in (TotalSource.LIVE_ALTERNATES, TotalSource.LIVE_MAIN)
