"""
Progression rules and progression output value objects.

ProgressionRules is the programme-level configuration that drives the
progress/maintain/deload decision. PerformanceRecord is the append-only
log row written after every programme workout, and ProgressionDecision
is the pure output of a decision.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class ProgressionType(str, Enum):
    """How a programme progresses load over time."""

    LINEAR = "linear"  # Add fixed weight each session
    DOUBLE = "double"  # Increase weight when hitting rep target
    WAVE = "wave"  # Cycle through intensities
    PERCENTAGE_BASED = "percentage_based"
    RPE_BASED = "rpe_based"
    CUSTOM = "custom"


class ProgressionAction(str, Enum):
    """What to do with the working weight next session."""

    PROGRESS = "progress"
    MAINTAIN = "maintain"
    DELOAD = "deload"


def default_increments() -> Dict[str, float]:
    """Increment table (kg) for common lifts, keyed by lowercase name."""
    return {
        # Lower body - larger increments
        "squat": 5.0,
        "deadlift": 5.0,
        "front squat": 5.0,
        "romanian deadlift": 5.0,
        "leg press": 10.0,
        # Upper body - smaller increments
        "bench press": 2.5,
        "overhead press": 2.5,
        "incline bench press": 2.5,
        "dumbbell press": 2.5,
        "barbell row": 2.5,
        "pull-up": 2.5,
        "default": 2.5,
    }


class SuccessCriteria(BaseModel):
    """Explicit programme definition of a successful session."""

    required_sets: Optional[int] = Field(default=None, ge=0)
    required_reps: Optional[int] = Field(default=None, ge=0)
    allowed_missed_reps: int = Field(
        default=0, ge=0, description="Total missed reps across all sets"
    )
    min_rpe: Optional[float] = Field(default=None, ge=0, le=10)
    max_rpe: Optional[float] = Field(default=None, ge=0, le=10)

    @model_validator(mode="after")
    def validate_rpe_band(self) -> "SuccessCriteria":
        """Reject an inverted RPE band."""
        if (
            self.min_rpe is not None
            and self.max_rpe is not None
            and self.min_rpe > self.max_rpe
        ):
            raise ValueError("min_rpe cannot be greater than max_rpe")
        return self

    model_config = {"frozen": True}


class DeloadRules(BaseModel):
    """When and how far to drop the load after repeated failures."""

    trigger_after_failures: int = Field(default=3, ge=1)
    deload_percentage: float = Field(
        default=0.85, gt=0, le=1, description="Fraction of the current weight"
    )
    minimum_weight: float = Field(default=20.0, ge=0, description="Bar weight floor")
    auto_deload: bool = True

    model_config = {"frozen": True}


class ProgressionRules(BaseModel):
    """
    Programme progression configuration.

    `success_criteria` is None when the programme does not define its own;
    the outcome recorder then falls back to strict or free-form policies.
    """

    type: ProgressionType = ProgressionType.LINEAR
    increment_rules: Dict[str, float] = Field(default_factory=default_increments)
    success_criteria: Optional[SuccessCriteria] = None
    deload_rules: DeloadRules = Field(default_factory=DeloadRules)
    auto_progression_enabled: bool = True

    @field_validator("increment_rules")
    @classmethod
    def normalize_increment_keys(cls, v: Dict[str, float]) -> Dict[str, float]:
        """Lowercase exercise names so lookups are case-insensitive."""
        return {name.strip().lower(): inc for name, inc in v.items()}

    def increment_for(self, exercise_name: str) -> Optional[float]:
        """Exercise-specific increment, else the table's default, else None."""
        increment = self.increment_rules.get(exercise_name.strip().lower())
        if increment is None:
            increment = self.increment_rules.get("default")
        return increment

    model_config = {"frozen": True}


class ProgressionTemplates:
    """Progression rules of well-known linear programmes."""

    STRONGLIFTS_5X5 = ProgressionRules(
        type=ProgressionType.LINEAR,
        increment_rules={
            "squat": 5.0,
            "deadlift": 5.0,
            "bench press": 2.5,
            "overhead press": 2.5,
            "barbell row": 2.5,
        },
        success_criteria=SuccessCriteria(
            required_sets=5, required_reps=5, allowed_missed_reps=2
        ),
        deload_rules=DeloadRules(trigger_after_failures=3, deload_percentage=0.85),
    )

    STARTING_STRENGTH = ProgressionRules(
        type=ProgressionType.LINEAR,
        increment_rules={
            "squat": 5.0,
            "deadlift": 10.0,
            "bench press": 2.5,
            "overhead press": 2.5,
            "power clean": 2.5,
        },
        success_criteria=SuccessCriteria(
            required_sets=3, required_reps=5, allowed_missed_reps=0
        ),
    )


class PerformanceRecord(BaseModel):
    """
    One row per (programme, exercise, workout) of target vs achieved.

    Append-only: the progression decision reads the most recent rows and
    never edits them.
    """

    id: Optional[str] = None
    programme_id: str
    exercise_name: str
    workout_id: str
    workout_date: datetime

    target_weight: float = Field(default=0.0, ge=0)
    achieved_weight: float = Field(default=0.0, ge=0)
    target_sets: int = Field(default=0, ge=0)
    completed_sets: int = Field(default=0, ge=0)
    target_reps: int = Field(default=0, ge=0)
    achieved_reps: int = Field(default=0, ge=0)
    missed_reps: int = Field(default=0, ge=0)

    was_successful: bool = False
    average_rpe: Optional[float] = None
    is_deload_workout: bool = False

    model_config = {"frozen": True}


class DeloadDetails(BaseModel):
    """How a deload weight was derived."""

    previous_weight: float
    deload_percentage: float
    minimum_weight: float

    model_config = {"frozen": True}


class ProgressionDecision(BaseModel):
    """The next prescribed weight and the reasoning behind it."""

    weight: float
    action: ProgressionAction
    reason: str
    is_deload: bool = False
    deload_details: Optional[DeloadDetails] = None

    model_config = {"frozen": True}


class ExerciseProgressionStatus(BaseModel):
    """Where an exercise stands in its progression cycle."""

    exercise_name: str
    current_weight: float
    consecutive_failures: int
    last_success_date: Optional[datetime] = None
    last_deload_date: Optional[datetime] = None
    total_deloads: int = 0
    is_in_deload_cycle: bool = False
    suggested_action: ProgressionAction = ProgressionAction.MAINTAIN

    model_config = {"frozen": True}
