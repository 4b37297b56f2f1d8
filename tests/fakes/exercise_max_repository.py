"""
Fake Exercise Max Repository for Testing.

In-memory implementation of ExerciseMaxRepository.
"""
from typing import Dict, List, Optional

from domain.models import ExerciseMaxEstimate


class FakeExerciseMaxRepository:
    """
    In-memory fake implementation of ExerciseMaxRepository.

    Keeps every saved estimate as history; the latest one per exercise is
    the current max. Names map exercise names to IDs for name lookups.
    """

    def __init__(self):
        """Initialize with empty storage."""
        self._history: Dict[str, List[ExerciseMaxEstimate]] = {}
        self._names: Dict[str, str] = {}
        self.fail_saves = False

    def reset(self) -> None:
        """Clear all stored estimates."""
        self._history.clear()
        self._names.clear()
        self.fail_saves = False

    def seed(
        self,
        estimate: ExerciseMaxEstimate,
        exercise_name: Optional[str] = None,
    ) -> None:
        """
        Seed a current estimate.

        Args:
            estimate: Estimate to store
            exercise_name: Optional name for get_one_rm_for_exercise_name()
        """
        self._history.setdefault(estimate.exercise_id, []).append(estimate)
        if exercise_name:
            self._names[exercise_name.lower()] = estimate.exercise_id

    def get_saved(self, exercise_id: str) -> List[ExerciseMaxEstimate]:
        """All estimates stored for an exercise, oldest first (test helper)."""
        return list(self._history.get(exercise_id, []))

    # =========================================================================
    # ExerciseMaxRepository Protocol Methods
    # =========================================================================

    def get_current_max(self, exercise_id: str) -> Optional[ExerciseMaxEstimate]:
        history = self._history.get(exercise_id)
        return history[-1] if history else None

    def get_historical_max(self, exercise_id: str) -> Optional[float]:
        current = self.get_current_max(exercise_id)
        return current.one_rm_estimate if current else None

    def get_one_rm_for_exercise_name(self, exercise_name: str) -> Optional[float]:
        exercise_id = self._names.get(exercise_name.lower())
        if exercise_id is None:
            return None
        return self.get_historical_max(exercise_id)

    def save_estimate(self, estimate: ExerciseMaxEstimate) -> bool:
        if self.fail_saves:
            return False
        self._history.setdefault(estimate.exercise_id, []).append(estimate)
        return True
