"""
Workout deviation value objects.

A WorkoutDeviation is a write-once fact: on one axis, how far a logged
session strayed from what the programme snapshot prescribed.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class DeviationType(str, Enum):
    """Axis or category of a deviation."""

    EXERCISE_SKIPPED = "exercise_skipped"
    EXERCISE_ADDED = "exercise_added"
    EXERCISE_SWAP = "exercise_swap"
    VOLUME_DEVIATION = "volume_deviation"
    INTENSITY_DEVIATION = "intensity_deviation"
    SET_COUNT_DEVIATION = "set_count_deviation"
    REP_DEVIATION = "rep_deviation"
    RPE_DEVIATION = "rpe_deviation"


class WorkoutDeviation(BaseModel):
    """
    One deviation of a session from its prescription.

    `deviation_magnitude` is a signed fraction: +0.15 means 15% over plan.
    Categorical deviations (skip, add, swap) always carry 1.0.
    """

    workout_id: str
    programme_id: str
    exercise_log_id: Optional[str] = None
    deviation_type: DeviationType
    deviation_magnitude: float
    notes: Optional[str] = None
    timestamp: datetime

    model_config = {"frozen": True}


class DeviationSummary(BaseModel):
    """Programme-level roll-up of deviations, for review screens and prompts."""

    programme_name: str
    programme_type: str
    duration_weeks: int = 0
    workouts_completed: int = 0
    workouts_prescribed: int = 0
    avg_volume_deviation_percent: float = 0.0
    avg_intensity_deviation_percent: float = 0.0
    exercise_swap_count: int = 0
    exercise_skip_count: int = 0
    exercise_add_count: int = 0
    key_deviations: List[str] = Field(default_factory=list)
