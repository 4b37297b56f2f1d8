"""
Fake Deviation Repository for Testing.

In-memory implementation of DeviationRepository.
"""
from typing import Dict, List, Optional

from domain.models import WorkoutDeviation


class FakeDeviationRepository:
    """
    In-memory fake implementation of DeviationRepository.

    Set `fail_writes` to simulate a rolled-back transaction, or
    `raise_on_write` to simulate an adapter that raises.
    """

    def __init__(self):
        """Initialize with empty storage."""
        self._by_workout: Dict[str, List[WorkoutDeviation]] = {}
        self.fail_writes = False
        self.raise_on_write: Optional[Exception] = None

    def reset(self) -> None:
        """Clear all stored deviations."""
        self._by_workout.clear()
        self.fail_writes = False
        self.raise_on_write = None

    def get_all(self) -> List[WorkoutDeviation]:
        """Get all stored deviations (test helper)."""
        return [d for deviations in self._by_workout.values() for d in deviations]

    # =========================================================================
    # DeviationRepository Protocol Methods
    # =========================================================================

    def replace_for_workout(
        self, workout_id: str, deviations: List[WorkoutDeviation]
    ) -> bool:
        if self.raise_on_write is not None:
            raise self.raise_on_write
        if self.fail_writes:
            return False
        self._by_workout[workout_id] = list(deviations)
        return True

    def get_for_programme(self, programme_id: str) -> List[WorkoutDeviation]:
        return [d for d in self.get_all() if d.programme_id == programme_id]
