"""
Logged set and exercise value objects.

A CompletedSet is what the workout logger produced for a single set: the
prescribed slot (target reps/weight/RPE) and what was actually lifted.
An ExerciseLog groups the sets of one exercise instance inside a workout.
"""

from typing import Optional, Tuple

from pydantic import BaseModel, Field


class CompletedSet(BaseModel):
    """
    Value object for one logged set.

    The core never mutates a set; it only reads the actual values and,
    for outcome recording, the prescribed targets of the slot.

    Examples:
        >>> s = CompletedSet(weight=100, reps=5, rpe=8, completed=True)
        >>> s.volume
        500.0
    """

    id: Optional[str] = Field(default=None, description="Set identifier")
    exercise_log_id: Optional[str] = Field(
        default=None, description="Owning exercise instance"
    )
    workout_id: Optional[str] = Field(default=None, description="Owning workout")

    # Actual performance
    weight: float = Field(default=0.0, ge=0, description="Actual weight lifted")
    reps: int = Field(default=0, ge=0, description="Actual reps completed")
    rpe: Optional[float] = Field(
        default=None, ge=0, le=10, description="Actual RPE (0-10)"
    )
    completed: bool = Field(default=False, description="Set marked as completed")

    # Prescribed slot
    target_reps: Optional[int] = Field(default=None, ge=0)
    target_weight: Optional[float] = Field(default=None, ge=0)
    target_rpe: Optional[float] = Field(default=None, ge=0, le=10)

    @property
    def volume(self) -> float:
        """Weight x reps for this set."""
        return float(self.weight * self.reps)

    model_config = {"frozen": True}


class ExerciseLog(BaseModel):
    """
    An exercise actually performed in a workout, with its sets.

    `is_swapped` marks an exercise substituted for the prescribed one.
    """

    id: str = Field(..., min_length=1, description="Exercise instance ID")
    workout_id: Optional[str] = None
    exercise_id: Optional[str] = Field(
        default=None, description="Stable exercise identifier"
    )
    exercise_name: str = ""
    exercise_order: int = Field(default=0, ge=0)
    is_swapped: bool = False
    sets: Tuple[CompletedSet, ...] = Field(default_factory=tuple)

    @property
    def completed_sets(self) -> Tuple[CompletedSet, ...]:
        """Only the sets marked as completed."""
        return tuple(s for s in self.sets if s.completed)

    model_config = {"frozen": True}


class Workout(BaseModel):
    """
    Reference to a logged workout session.

    Only carries what the analytics need to locate the prescription in a
    programme snapshot.
    """

    id: str = Field(..., min_length=1)
    name: Optional[str] = None
    programme_id: Optional[str] = None
    week_number: Optional[int] = Field(default=None, ge=1)
    day_number: Optional[int] = Field(default=None, ge=1)
    is_programme_workout: bool = False

    model_config = {"frozen": True}
