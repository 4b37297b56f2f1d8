"""
Programme and immutable programme snapshot models.

The snapshot is captured once when a programme starts. It is a frozen
value tree (weeks -> workouts -> exercises) built from tuples, with no
reference back to the live, editable plan. Deviation analysis always
compares against this pinned structure.
"""

from enum import Enum
from typing import Annotated, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, Field, model_validator

from domain.models.progression import ProgressionRules

# Fallbacks for unparsable per-set entries
DEFAULT_PER_SET_REPS = 5
DEFAULT_AMRAP_REPS = 1


# =============================================================================
# Reps specification (tagged union)
# =============================================================================


class SingleReps(BaseModel):
    """Same rep target for every set, e.g. 5."""

    kind: Literal["single"] = "single"
    value: int = Field(..., ge=0)

    def per_set(self, set_count: int) -> List[int]:
        return [self.value] * set_count

    model_config = {"frozen": True}


class RepRange(BaseModel):
    """Numeric rep range; the minimum is the target."""

    kind: Literal["range"] = "range"
    min: int = Field(..., ge=0)
    max: int = Field(..., ge=0)

    @model_validator(mode="after")
    def validate_bounds(self) -> "RepRange":
        if self.min > self.max:
            raise ValueError("Rep range min cannot exceed max")
        return self

    def per_set(self, set_count: int) -> List[int]:
        return [self.min] * set_count

    model_config = {"frozen": True}


class RepRangeText(BaseModel):
    """Rep range kept as text, e.g. "8-12"."""

    kind: Literal["range_text"] = "range_text"
    value: str

    def per_set(self, set_count: int) -> List[int]:
        prefix = self.value.split("-")[0].strip()
        minimum = int(prefix) if prefix.isdigit() else 0
        return [minimum] * set_count

    model_config = {"frozen": True}


class PerSetReps(BaseModel):
    """
    One entry per set, e.g. ["5", "3", "1+"].

    A trailing "+" marks an AMRAP set whose floor is the number before it.
    Shorter lists are padded with their last entry, longer ones truncated.
    """

    kind: Literal["per_set"] = "per_set"
    values: Tuple[Union[int, str], ...]

    @staticmethod
    def _parse(entry: str) -> int:
        entry = entry.strip()
        if entry.endswith("+"):
            floor = entry[:-1].strip()
            return int(floor) if floor.isdigit() else DEFAULT_AMRAP_REPS
        return int(entry) if entry.isdigit() else DEFAULT_PER_SET_REPS

    def per_set(self, set_count: int) -> List[int]:
        parsed = [self._parse(str(v)) for v in self.values]
        if len(parsed) >= set_count:
            return parsed[:set_count]
        filler = parsed[-1] if parsed else 0
        return parsed + [filler] * (set_count - len(parsed))

    model_config = {"frozen": True}


RepsSpec = Annotated[
    Union[SingleReps, RepRange, RepRangeText, PerSetReps],
    Field(discriminator="kind"),
]


def target_reps_per_set(reps: RepsSpec, set_count: int) -> List[int]:
    """
    Expand a reps specification into one target per set.

    Args:
        reps: Any RepsSpec variant
        set_count: Prescribed number of sets

    Returns:
        List of `set_count` rep targets (empty when set_count <= 0)
    """
    if set_count <= 0:
        return []
    return reps.per_set(set_count)


# =============================================================================
# Snapshot tree
# =============================================================================


class ExerciseStructure(BaseModel):
    """A prescribed exercise inside a snapshot workout."""

    name: str = Field(..., min_length=1)
    exercise_id: Optional[str] = Field(
        default=None, description="Stable exercise identifier, if known"
    )
    sets: int = Field(..., ge=0)
    reps: RepsSpec
    weights: Optional[Tuple[float, ...]] = Field(
        default=None, description="Target weight per set"
    )
    rpe_values: Optional[Tuple[Optional[float], ...]] = Field(
        default=None, description="Target RPE per set (entries may be null)"
    )
    note: Optional[str] = None

    model_config = {"frozen": True}


class WorkoutSnapshot(BaseModel):
    """A prescribed workout on a given day of a programme week."""

    day_number: int = Field(..., ge=1)
    name: str = ""
    exercises: Tuple[ExerciseStructure, ...] = Field(default_factory=tuple)

    model_config = {"frozen": True}


class WeekSnapshot(BaseModel):
    """One programme week."""

    week_number: int = Field(..., ge=1)
    name: Optional[str] = None
    workouts: Tuple[WorkoutSnapshot, ...] = Field(default_factory=tuple)

    model_config = {"frozen": True}


class ProgrammeSnapshot(BaseModel):
    """
    Frozen, point-in-time copy of a programme's prescribed structure.

    Examples:
        >>> snapshot = ProgrammeSnapshot.model_validate_json(raw_json)
        >>> snapshot.find_workout(week_number=1, day_number=2)
    """

    programme_name: str = ""
    duration_weeks: int = Field(default=0, ge=0)
    weeks: Tuple[WeekSnapshot, ...] = Field(default_factory=tuple)

    def find_week(self, week_number: int) -> Optional[WeekSnapshot]:
        return next((w for w in self.weeks if w.week_number == week_number), None)

    def find_workout(
        self, week_number: int, day_number: int
    ) -> Optional[WorkoutSnapshot]:
        """Locate the prescribed workout for a (week, day), or None."""
        week = self.find_week(week_number)
        if week is None:
            return None
        return next((w for w in week.workouts if w.day_number == day_number), None)

    @property
    def total_workouts(self) -> int:
        return sum(len(w.workouts) for w in self.weeks)

    model_config = {"frozen": True}


# =============================================================================
# Programme
# =============================================================================


class ProgrammeStatus(str, Enum):
    """Lifecycle of a programme run."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ProgrammeType(str, Enum):
    STRENGTH = "strength"
    POWERLIFTING = "powerlifting"
    BODYBUILDING = "bodybuilding"
    GENERAL_FITNESS = "general_fitness"
    OLYMPIC_LIFTING = "olympic_lifting"
    HYBRID = "hybrid"


class Programme(BaseModel):
    """A programme run with its progression rules and pinned snapshot."""

    id: str = Field(..., min_length=1)
    name: str = ""
    programme_type: ProgrammeType = ProgrammeType.STRENGTH
    duration_weeks: int = Field(default=0, ge=0)
    status: ProgrammeStatus = ProgrammeStatus.NOT_STARTED
    progression_rules: Optional[ProgressionRules] = None
    immutable_snapshot: Optional[ProgrammeSnapshot] = None

    @property
    def is_cancelled(self) -> bool:
        return self.status == ProgrammeStatus.CANCELLED

    model_config = {"frozen": True}
