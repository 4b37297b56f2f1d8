"""
Personal record value object.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class PRType(str, Enum):
    """Kind of personal record. Only heaviest weight is tracked."""

    WEIGHT = "weight"


class PersonalRecord(BaseModel):
    """
    A personal record for an exercise, linked to the record it beat.

    The previous_* fields are kept for audit display ("102.5kg, up from
    100kg on ..."); superseded records stay in the store as history.
    """

    id: Optional[str] = None
    exercise_id: str = Field(..., min_length=1)
    workout_id: Optional[str] = None

    weight: float = Field(..., gt=0)
    reps: int = Field(..., gt=0)
    rpe: Optional[float] = Field(default=None, ge=0, le=10)
    record_date: datetime

    previous_weight: Optional[float] = None
    previous_reps: Optional[int] = None
    previous_date: Optional[datetime] = None
    improvement_percentage: float = 0.0

    record_type: PRType = PRType.WEIGHT
    volume: float = 0.0
    estimated_1rm: Optional[float] = None
    notes: Optional[str] = None

    model_config = {"frozen": True}
