"""
Domain models for the training analytics core.

These models represent the core business concepts:
- CompletedSet / ExerciseLog / Workout: what the user actually logged
- ProgrammeSnapshot: the frozen prescription a programme run started with
- ProgressionRules / PerformanceRecord / ProgressionDecision: load progression
- ExerciseMaxEstimate: tracked 1RM and heaviest lift
- WorkoutDeviation: prescribed-vs-actual differences
- PersonalRecord: heaviest-weight records

All value objects are frozen pydantic models.

Usage:
    >>> from domain.models import ExerciseStructure, SingleReps

    >>> squat = ExerciseStructure(
    ...     name="Squat",
    ...     sets=3,
    ...     reps=SingleReps(value=5),
    ...     weights=(100, 100, 100),
    ... )
    >>> squat.model_dump_json()
"""

from domain.models.deviation import DeviationSummary, DeviationType, WorkoutDeviation
from domain.models.exercise_max import (
    ExerciseMaxEstimate,
    MostWeightData,
    OneRMType,
    RMScalingType,
)
from domain.models.personal_record import PersonalRecord, PRType
from domain.models.programme import (
    ExerciseStructure,
    PerSetReps,
    Programme,
    ProgrammeSnapshot,
    ProgrammeStatus,
    ProgrammeType,
    RepRange,
    RepRangeText,
    RepsSpec,
    SingleReps,
    WeekSnapshot,
    WorkoutSnapshot,
    target_reps_per_set,
)
from domain.models.progression import (
    DeloadDetails,
    DeloadRules,
    ExerciseProgressionStatus,
    PerformanceRecord,
    ProgressionAction,
    ProgressionDecision,
    ProgressionRules,
    ProgressionTemplates,
    ProgressionType,
    SuccessCriteria,
    default_increments,
)
from domain.models.sets import CompletedSet, ExerciseLog, Workout

__all__ = [
    # Logged data
    "CompletedSet",
    "ExerciseLog",
    "Workout",
    # Programme
    "Programme",
    "ProgrammeSnapshot",
    "WeekSnapshot",
    "WorkoutSnapshot",
    "ExerciseStructure",
    "RepsSpec",
    "SingleReps",
    "RepRange",
    "RepRangeText",
    "PerSetReps",
    "target_reps_per_set",
    # Progression
    "ProgressionRules",
    "ProgressionTemplates",
    "SuccessCriteria",
    "DeloadRules",
    "DeloadDetails",
    "PerformanceRecord",
    "ProgressionDecision",
    "ExerciseProgressionStatus",
    "default_increments",
    # Maxes and records
    "ExerciseMaxEstimate",
    "MostWeightData",
    "PersonalRecord",
    # Deviations
    "WorkoutDeviation",
    "DeviationSummary",
    # Enums
    "DeviationType",
    "OneRMType",
    "PRType",
    "ProgrammeStatus",
    "ProgrammeType",
    "ProgressionAction",
    "ProgressionType",
    "RMScalingType",
]
