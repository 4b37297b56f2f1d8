"""
Fake Repository Implementations for Testing.

This package provides in-memory fake implementations of repository interfaces
for fast, isolated testing. No database or external dependencies required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Factory functions for common test scenarios

Usage:
    from tests.fakes import FakePerformanceRepository, create_performance_repo

    # Direct instantiation
    repo = FakePerformanceRepository()
    repo.seed_records([record])

    # Factory function with a pre-populated history
    repo = create_performance_repo(outcomes=[True, False, False])
"""
from datetime import datetime, timedelta
from typing import List, Optional

from domain.models import PerformanceRecord
from tests.fakes.deviation_repository import FakeDeviationRepository
from tests.fakes.exercise_max_repository import FakeExerciseMaxRepository
from tests.fakes.performance_repository import FakePerformanceRepository
from tests.fakes.personal_record_repository import FakePersonalRecordRepository
from tests.fakes.programme_repository import FakeProgrammeRepository
from tests.fakes.workout_repository import FakeWorkoutRepository


# =============================================================================
# Factory Functions
# =============================================================================


def create_performance_repo(
    *,
    programme_id: str = "prog-1",
    exercise_name: str = "Squat",
    outcomes: Optional[List[bool]] = None,
    weight: float = 100.0,
    start: datetime = datetime(2024, 1, 1, 9, 0),
) -> FakePerformanceRepository:
    """
    Create a FakePerformanceRepository with a history of sessions.

    Args:
        programme_id: Programme UUID
        exercise_name: Exercise name
        outcomes: Success flag per session, oldest first
        weight: Target (and achieved) weight of every session
        start: Date of the first session; sessions are two days apart

    Returns:
        Pre-populated FakePerformanceRepository
    """
    repo = FakePerformanceRepository()

    records = []
    for i, success in enumerate(outcomes or []):
        records.append(
            PerformanceRecord(
                programme_id=programme_id,
                exercise_name=exercise_name,
                workout_id=f"w-{i + 1}",
                workout_date=start + timedelta(days=2 * i),
                target_weight=weight,
                achieved_weight=weight,
                target_sets=5,
                completed_sets=5,
                target_reps=5,
                achieved_reps=25 if success else 20,
                missed_reps=0 if success else 5,
                was_successful=success,
            )
        )
    repo.seed_records(records)

    return repo


__all__ = [
    # Fakes
    "FakeWorkoutRepository",
    "FakeProgrammeRepository",
    "FakePerformanceRepository",
    "FakeExerciseMaxRepository",
    "FakePersonalRecordRepository",
    "FakeDeviationRepository",
    # Factories
    "create_performance_repo",
]
