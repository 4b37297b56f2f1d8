"""
Deviation Repository Interface (Port).

This module defines the abstract interface for storing workout deviations.
"""
from typing import Protocol, List

from domain.models import WorkoutDeviation


class DeviationRepository(Protocol):
    """Abstract interface for workout deviation persistence."""

    def replace_for_workout(
        self, workout_id: str, deviations: List[WorkoutDeviation]
    ) -> bool:
        """
        Replace all deviations of a workout in one transaction.

        Re-analysing a workout therefore never duplicates its deviations.

        Args:
            workout_id: Workout UUID
            deviations: New deviations (may be empty)

        Returns:
            True if the transaction committed
        """
        ...

    def get_for_programme(self, programme_id: str) -> List[WorkoutDeviation]:
        """All deviations recorded for a programme run."""
        ...
