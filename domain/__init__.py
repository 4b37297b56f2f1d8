"""
Domain layer for the training analytics core.

This package contains pure domain models that are independent of
infrastructure concerns (database, sync, UI).
"""

from domain.models import (
    CompletedSet,
    ExerciseLog,
    ExerciseMaxEstimate,
    PersonalRecord,
    Programme,
    ProgrammeSnapshot,
    WorkoutDeviation,
)

__all__ = [
    "CompletedSet",
    "ExerciseLog",
    "ExerciseMaxEstimate",
    "PersonalRecord",
    "Programme",
    "ProgrammeSnapshot",
    "WorkoutDeviation",
]
