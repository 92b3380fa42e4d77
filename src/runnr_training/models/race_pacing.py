"""Race pacing models for the pacing strategy generator.

This module defines Pydantic models for:
- Pacing strategy styles
- Per-kilometer split targets
- Complete pacing strategies with recommendations
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field

from ..utils.formatting import format_race_time


class PacingStrategyType(str, Enum):
    """Available pacing strategies for race execution."""
    EVEN = "even"
    NEGATIVE = "negative"
    POSITIVE = "positive"


class PacingSplit(BaseModel):
    """Target pace and cumulative figures for one split.

    Paces are in min/km, times in minutes, distances in km.
    """
    split_number: int = Field(..., ge=1, description="Split number (1-indexed)")
    distance: float = Field(..., gt=0, description="Length of this split in km")
    target_pace: float = Field(..., gt=0, description="Target pace in min/km")
    target_time: float = Field(..., gt=0, description="Time for this split in minutes")
    cumulative_distance: float = Field(..., gt=0, description="Distance covered at the end of this split")
    cumulative_time: float = Field(..., gt=0, description="Elapsed time at the end of this split")
    pace_formatted: str = Field(..., description="Target pace as 'M:SS min/km'")
    split_time_formatted: str = Field(..., description="Split time as MM:SS")
    cumulative_time_formatted: str = Field(..., description="Elapsed time as H:MM:SS or MM:SS")
    note: str = Field(default="Even pace", description="Short cue for this split")


class PacingStrategy(BaseModel):
    """Complete race-day pacing plan.

    ``target_time`` is the sum of the split times, so it reflects the
    strategy and fatigue modulation rather than ``base_pace * distance``.
    """
    race_distance: float = Field(..., gt=0, description="Race distance in km")
    base_pace: float = Field(..., gt=0, description="Reference pace the splits are modulated from")
    target_time: float = Field(..., gt=0, description="Total target time in minutes")
    average_pace: float = Field(..., gt=0, description="Average pace across the race in min/km")
    strategy: PacingStrategyType = Field(..., description="Pacing strategy used")
    splits: List[PacingSplit] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)

    @property
    def target_time_formatted(self) -> str:
        return format_race_time(self.target_time)
