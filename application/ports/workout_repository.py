"""
Workout Repository Interface (Port).

This module defines the abstract interface for reading logged workouts and
the exercises/sets performed in them. Implementations may use SQLite,
a cloud document store, in-memory storage, or other backends.
"""
from typing import Protocol, Optional, List

from domain.models import ExerciseLog, Workout


class WorkoutRepository(Protocol):
    """
    Abstract interface for logged workout lookups.

    Domain types are used instead of database-specific types to maintain
    clean architecture boundaries.
    """

    def get_workout(self, workout_id: str) -> Optional[Workout]:
        """
        Get a logged workout by ID.

        Args:
            workout_id: Workout UUID

        Returns:
            Workout reference or None if not found
        """
        ...

    def get_exercise_logs(self, workout_id: str) -> List[ExerciseLog]:
        """
        Get the exercises performed in a workout, with their sets.

        Args:
            workout_id: Workout UUID

        Returns:
            Exercise logs ordered by exercise_order (empty if none)
        """
        ...
