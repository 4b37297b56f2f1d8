"""
Personal Record Repository Interface (Port).

This module defines the abstract interface for personal record storage.
"""
from typing import Protocol, Optional, List

from domain.models import PersonalRecord, PRType


class PersonalRecordRepository(Protocol):
    """
    Abstract interface for personal record persistence.

    History of superseded records is retained; only the merge of records
    set within the same workout deletes rows.
    """

    def get_max_weight_for_exercise(self, exercise_id: str) -> Optional[float]:
        """
        Heaviest weight on record for an exercise.

        Args:
            exercise_id: Exercise ID

        Returns:
            Max weight or None if the exercise has no records
        """
        ...

    def get_latest_record(
        self, exercise_id: str, record_type: PRType
    ) -> Optional[PersonalRecord]:
        """Most recent record of a type for an exercise, or None."""
        ...

    def get_record_for_workout(
        self,
        workout_id: str,
        exercise_id: str,
        record_type: PRType,
    ) -> Optional[PersonalRecord]:
        """Record of a type already set for an exercise within a workout."""
        ...

    def replace_records(
        self,
        delete_ids: List[str],
        records: List[PersonalRecord],
    ) -> bool:
        """
        Delete superseded records and insert new ones in one transaction.

        Either every delete and insert is applied or none is.

        Args:
            delete_ids: IDs of records to delete
            records: Records to insert

        Returns:
            True if the transaction committed
        """
        ...
