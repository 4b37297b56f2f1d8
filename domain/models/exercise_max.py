"""
Exercise maximum (1RM) value objects.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class RMScalingType(str, Enum):
    """Which weight->1RM curve an exercise follows."""

    STANDARD = "standard"  # Compound lifts: bench, squat, rows
    WEIGHTED_BODYWEIGHT = "weighted_bodyweight"  # Pull-ups, dips with added load
    ISOLATION = "isolation"  # Curls, extensions, raises


class OneRMType(str, Enum):
    """Provenance of a stored 1RM."""

    MANUALLY_ENTERED = "manually_entered"
    AUTOMATICALLY_CALCULATED = "automatically_calculated"


class MostWeightData(BaseModel):
    """The heaviest set ever logged for an exercise."""

    weight: float = Field(..., ge=0)
    reps: int = Field(..., ge=0)
    rpe: Optional[float] = Field(default=None, ge=0, le=10)
    date: datetime

    model_config = {"frozen": True}


class ExerciseMaxEstimate(BaseModel):
    """
    Tracked maximum for one exercise.

    Holds two distinct facts: the literal heaviest weight lifted
    (`most_weight_*`) and the formula-derived 1RM estimate. The two can
    diverge: a lighter set with more reps may produce a higher estimate
    than the heaviest single actually lifted.
    """

    exercise_id: str = Field(..., min_length=1)
    user_id: Optional[str] = None

    most_weight_lifted: float = Field(..., ge=0)
    most_weight_reps: int = Field(..., ge=0)
    most_weight_rpe: Optional[float] = Field(default=None, ge=0, le=10)
    most_weight_date: datetime

    one_rm_estimate: float = Field(..., ge=0)
    one_rm_context: str = ""
    one_rm_confidence: float = Field(..., ge=0, le=1)
    one_rm_date: datetime
    one_rm_type: OneRMType = OneRMType.AUTOMATICALLY_CALCULATED

    @property
    def most_weight(self) -> MostWeightData:
        """The most-weight-lifted triple as a value object."""
        return MostWeightData(
            weight=self.most_weight_lifted,
            reps=self.most_weight_reps,
            rpe=self.most_weight_rpe,
            date=self.most_weight_date,
        )

    model_config = {"frozen": True}
