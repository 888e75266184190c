"""Game snapshot and slate summary models."""

from __future__ import annotations

import math
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from runs_tracker.models.odds import MarketBundle
from runs_tracker.models.probability import ImpliedTotal


class GameState(str, Enum):
    """Game lifecycle state."""
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    FINAL = "final"


class GameSnapshot(BaseModel):
    """
    Scores plus market data for one game at one refresh.

    Produced by the normalizer once per refresh cycle and never mutated.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    state: GameState = GameState.SCHEDULED
    home_runs: float = 0
    away_runs: float = 0
    markets: MarketBundle = Field(default_factory=MarketBundle)

    # Display metadata
    home_team: str = ""
    away_team: str = ""
    commence_time: Optional[datetime] = None
    detail: str = Field(default="", description="Inning or status text")

    @property
    def runs_so_far(self) -> float:
        """Combined runs, with negative or garbled counts clamped to 0."""
        total = self.home_runs + self.away_runs
        if not math.isfinite(total):
            return 0.0
        return max(0.0, total)

    @property
    def is_final(self) -> bool:
        return self.state == GameState.FINAL

    @property
    def label(self) -> str:
        if self.away_team and self.home_team:
            return f"{self.away_team} @ {self.home_team}"
        return self.id


class GameProjection(BaseModel):
    """Per-game contribution to the slate projection."""
    model_config = ConfigDict(frozen=True)

    game_id: str
    state: GameState
    runs_so_far: float = Field(ge=0)
    implied_total: Optional[ImpliedTotal] = None
    expected_remaining: float = Field(ge=0)

    @property
    def projected_finish(self) -> float:
        return self.runs_so_far + self.expected_remaining


class SlateSummary(BaseModel):
    """The two headline numbers for a slate."""
    model_config = ConfigDict(frozen=True)

    total_runs_scored: float = Field(ge=0)
    projected_slate_finish: float = Field(ge=0)
