"""
Repository Interfaces (Ports) for the training analytics core.

This package defines abstract interfaces that decouple the analytics from
the store and programme collaborators. Implementations live with those
collaborators; tests use the in-memory fakes in tests/fakes.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the core needs)
- Adapters: Concrete implementations outside this package (how it's provided)

Usage:
    from application.ports import PerformanceRepository

    class ProgressionService:
        def __init__(self, performance_repo: PerformanceRepository):
            self._performance_repo = performance_repo
"""

# Logged workouts
from application.ports.workout_repository import WorkoutRepository

# Programme runs and snapshots
from application.ports.programme_repository import ProgrammeRepository

# Progression history
from application.ports.performance_repository import PerformanceRepository

# 1RM tracking
from application.ports.exercise_max_repository import ExerciseMaxRepository

# Personal records
from application.ports.personal_record_repository import PersonalRecordRepository

# Deviations
from application.ports.deviation_repository import DeviationRepository

__all__ = [
    "WorkoutRepository",
    "ProgrammeRepository",
    "PerformanceRepository",
    "ExerciseMaxRepository",
    "PersonalRecordRepository",
    "DeviationRepository",
]
