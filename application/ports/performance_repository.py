"""
Performance Repository Interface (Port).

This module defines the abstract interface for the append-only exercise
performance log that drives progression decisions.
"""
from typing import Protocol, Optional, List

from domain.models import PerformanceRecord


class PerformanceRepository(Protocol):
    """
    Abstract interface for exercise performance tracking.

    Records are keyed by (programme_id, exercise_name); exercise names are
    compared case-insensitively.
    """

    def get_recent_performance(
        self,
        programme_id: str,
        exercise_name: str,
        limit: int = 5,
    ) -> List[PerformanceRecord]:
        """
        Get the latest performance records for an exercise.

        Args:
            programme_id: Programme UUID
            exercise_name: Exercise name
            limit: Maximum records to return

        Returns:
            Records ordered most recent first
        """
        ...

    def get_consecutive_failures(self, programme_id: str, exercise_name: str) -> int:
        """
        Count unsuccessful sessions since the last success.

        Args:
            programme_id: Programme UUID
            exercise_name: Exercise name

        Returns:
            Length of the current failure streak (0 if last session succeeded)
        """
        ...

    def get_last_success(
        self, programme_id: str, exercise_name: str
    ) -> Optional[PerformanceRecord]:
        """Most recent successful record, or None."""
        ...

    def get_last_deload(
        self, programme_id: str, exercise_name: str
    ) -> Optional[PerformanceRecord]:
        """Most recent deload record, or None."""
        ...

    def get_total_deloads(self, programme_id: str, exercise_name: str) -> int:
        """Number of deload sessions recorded for the exercise."""
        ...

    def insert_performance_record(self, record: PerformanceRecord) -> bool:
        """
        Append a performance record.

        Args:
            record: Record to insert

        Returns:
            True if the record was stored
        """
        ...
