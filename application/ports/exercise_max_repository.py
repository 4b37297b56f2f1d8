"""
Exercise Max Repository Interface (Port).

This module defines the abstract interface for tracked 1RM estimates.
Superseded estimates are kept by the store as history.
"""
from typing import Protocol, Optional

from domain.models import ExerciseMaxEstimate


class ExerciseMaxRepository(Protocol):
    """Abstract interface for 1RM / most-weight tracking."""

    def get_current_max(self, exercise_id: str) -> Optional[ExerciseMaxEstimate]:
        """
        Get the current tracked estimate for an exercise.

        Args:
            exercise_id: Exercise ID

        Returns:
            Latest ExerciseMaxEstimate or None if nothing is tracked yet
        """
        ...

    def get_historical_max(self, exercise_id: str) -> Optional[float]:
        """
        Get the current 1RM estimate value for an exercise.

        Args:
            exercise_id: Exercise ID

        Returns:
            1RM estimate or None
        """
        ...

    def get_one_rm_for_exercise_name(self, exercise_name: str) -> Optional[float]:
        """
        Get the current 1RM estimate by exercise name (case-insensitive).

        Used by progression, whose history is keyed by name.
        """
        ...

    def save_estimate(self, estimate: ExerciseMaxEstimate) -> bool:
        """
        Store a new estimate, superseding the current one.

        Returns:
            True if the estimate was stored
        """
        ...
