"""
Deviation Calculation Service.

Compares what a programme snapshot prescribed for a workout against what
was actually logged, per exercise:
- Exercise-level categories: skipped, added, swapped
- Five numeric axes: volume, intensity, set count, reps, RPE

Deviation analysis is informational. Any missing upstream data (workout,
programme, snapshot, week, day) yields an empty list, never an error.
"""
from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence
import logging

from analytics.core.formulas import average
from analytics.settings import Settings, get_settings
from application.ports.programme_repository import ProgrammeRepository
from application.ports.workout_repository import WorkoutRepository
from domain.models import (
    CompletedSet,
    DeviationType,
    ExerciseLog,
    ExerciseStructure,
    WorkoutDeviation,
    WorkoutSnapshot,
    target_reps_per_set,
)

logger = logging.getLogger(__name__)

CATEGORICAL_MAGNITUDE = 1.0
FLOAT_EPSILON = 0.0001


def _relative_change(actual: float, target: float) -> Optional[float]:
    """(actual - target) / target, or None when the target is not positive."""
    if target < FLOAT_EPSILON:
        return None
    return (actual - target) / target


class _DeviationBuilder:
    """Collects deviations for one workout with shared identifiers."""

    def __init__(
        self,
        workout_id: str,
        programme_id: str,
        timestamp: datetime,
        threshold: float,
    ):
        self.workout_id = workout_id
        self.programme_id = programme_id
        self.timestamp = timestamp
        self.threshold = threshold
        self.deviations: List[WorkoutDeviation] = []

    def categorical(
        self,
        deviation_type: DeviationType,
        exercise_log_id: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> None:
        self.deviations.append(
            WorkoutDeviation(
                workout_id=self.workout_id,
                programme_id=self.programme_id,
                exercise_log_id=exercise_log_id,
                deviation_type=deviation_type,
                deviation_magnitude=CATEGORICAL_MAGNITUDE,
                notes=notes,
                timestamp=self.timestamp,
            )
        )

    def numeric(
        self,
        deviation_type: DeviationType,
        exercise_log_id: str,
        magnitude: Optional[float],
    ) -> None:
        # Threshold is exclusive: exactly 10% is not a deviation
        if magnitude is None or abs(magnitude) <= self.threshold:
            return
        self.deviations.append(
            WorkoutDeviation(
                workout_id=self.workout_id,
                programme_id=self.programme_id,
                exercise_log_id=exercise_log_id,
                deviation_type=deviation_type,
                deviation_magnitude=magnitude,
                timestamp=self.timestamp,
            )
        )


# =============================================================================
# Per-axis magnitudes
# =============================================================================


def volume_deviation(
    target: ExerciseStructure, completed_sets: Sequence[CompletedSet]
) -> Optional[float]:
    """Relative difference in total weight x reps."""
    if target.weights is None:
        return None

    target_reps = target_reps_per_set(target.reps, target.sets)
    if len(target.weights) != len(target_reps):
        logger.warning(
            "Target weights size (%d) != target reps size (%d) for %s, "
            "skipping volume deviation",
            len(target.weights),
            len(target_reps),
            target.name,
        )
        return None

    target_volume = sum(w * r for w, r in zip(target.weights, target_reps))
    actual_volume = sum(s.weight * s.reps for s in completed_sets)
    return _relative_change(actual_volume, target_volume)


def intensity_deviation(
    target: ExerciseStructure, completed_sets: Sequence[CompletedSet]
) -> Optional[float]:
    """Relative difference in average weight per set."""
    if target.weights is None:
        return None
    target_avg = average(target.weights)
    actual_avg = average(s.weight for s in completed_sets)
    if target_avg is None or actual_avg is None:
        return None
    return _relative_change(actual_avg, target_avg)


def set_count_deviation(
    target: ExerciseStructure, completed_sets: Sequence[CompletedSet]
) -> Optional[float]:
    """Relative difference in number of completed sets."""
    return _relative_change(len(completed_sets), target.sets)


def rep_deviation(
    target: ExerciseStructure, completed_sets: Sequence[CompletedSet]
) -> Optional[float]:
    """Relative difference in total reps."""
    target_total = sum(target_reps_per_set(target.reps, target.sets))
    actual_total = sum(s.reps for s in completed_sets)
    return _relative_change(actual_total, target_total)


def rpe_deviation(
    target: ExerciseStructure, completed_sets: Sequence[CompletedSet]
) -> Optional[float]:
    """Relative difference in average RPE."""
    if target.rpe_values is None:
        return None
    target_avg = average(r for r in target.rpe_values if r is not None)
    actual_avg = average(s.rpe for s in completed_sets if s.rpe is not None)
    if target_avg is None or actual_avg is None:
        return None
    return _relative_change(actual_avg, target_avg)


_NUMERIC_AXES = (
    (DeviationType.VOLUME_DEVIATION, volume_deviation),
    (DeviationType.INTENSITY_DEVIATION, intensity_deviation),
    (DeviationType.SET_COUNT_DEVIATION, set_count_deviation),
    (DeviationType.REP_DEVIATION, rep_deviation),
    (DeviationType.RPE_DEVIATION, rpe_deviation),
)


# =============================================================================
# Workout comparison
# =============================================================================


def _process_exercise(
    target: ExerciseStructure,
    actual: ExerciseLog,
    builder: _DeviationBuilder,
) -> None:
    if actual.is_swapped:
        builder.categorical(DeviationType.EXERCISE_SWAP, exercise_log_id=actual.id)

    completed_sets = actual.completed_sets
    if not completed_sets:
        return

    for deviation_type, axis in _NUMERIC_AXES:
        builder.numeric(deviation_type, actual.id, axis(target, completed_sets))


def compute_deviations(
    target_workout: WorkoutSnapshot,
    exercise_logs: Sequence[ExerciseLog],
    *,
    workout_id: str,
    programme_id: str,
    timestamp: datetime,
    threshold: float = 0.10,
) -> List[WorkoutDeviation]:
    """
    Compare a prescribed workout with the exercises actually logged.

    When every prescribed exercise carries an exercise ID, exercises are
    matched by ID (prescribed-only -> skipped, logged-only -> added).
    Otherwise they are matched by position in exercise order.

    Deterministic: identical inputs produce identical lists.

    Args:
        target_workout: Prescribed workout from the programme snapshot
        exercise_logs: Exercises actually performed, with their sets
        workout_id: Workout UUID
        programme_id: Programme UUID
        timestamp: Timestamp stamped on every deviation
        threshold: Minimum |magnitude| (exclusive) for numeric axes

    Returns:
        List of WorkoutDeviation (possibly empty)
    """
    builder = _DeviationBuilder(workout_id, programme_id, timestamp, threshold)
    prescribed = target_workout.exercises
    actual_logs = sorted(exercise_logs, key=lambda log: log.exercise_order)

    match_by_id = bool(prescribed) and all(e.exercise_id is not None for e in prescribed)

    if match_by_id:
        # A repeated exercise_id collapses to its last prescription
        prescribed_by_id: Dict[str, ExerciseStructure] = {
            e.exercise_id: e for e in prescribed
        }
        actual_by_id: Dict[str, ExerciseLog] = {
            log.exercise_id: log for log in actual_logs if log.exercise_id is not None
        }

        for exercise_id, target in prescribed_by_id.items():
            actual = actual_by_id.get(exercise_id)
            if actual is None:
                builder.categorical(DeviationType.EXERCISE_SKIPPED, notes=target.name)
                continue
            _process_exercise(target, actual, builder)

        for log in actual_logs:
            if log.exercise_id not in prescribed_by_id:
                builder.categorical(DeviationType.EXERCISE_ADDED, exercise_log_id=log.id)
    else:
        for index, target in enumerate(prescribed):
            if index >= len(actual_logs):
                builder.categorical(DeviationType.EXERCISE_SKIPPED, notes=target.name)
                continue
            _process_exercise(target, actual_logs[index], builder)

    return builder.deviations


# =============================================================================
# Deviation Calculation Service
# =============================================================================


class DeviationCalculationService:
    """
    Service resolving a logged workout to its prescription and comparing them.

    The prescription always comes from the programme's immutable snapshot,
    so later edits to the live plan never change deviation results.
    """

    def __init__(
        self,
        workout_repo: WorkoutRepository,
        programme_repo: ProgrammeRepository,
        settings: Optional[Settings] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize the deviation service.

        Args:
            workout_repo: Repository for logged workouts and exercise logs
            programme_repo: Repository for programmes and snapshots
            settings: Threshold; defaults to get_settings()
            clock: Source of deviation timestamps
        """
        self._workout_repo = workout_repo
        self._programme_repo = programme_repo
        self._settings = settings or get_settings()
        self._clock = clock

    def calculate_deviations(self, workout_id: str) -> List[WorkoutDeviation]:
        """
        Calculate deviations of a logged workout from its prescription.

        Args:
            workout_id: Workout UUID

        Returns:
            List of WorkoutDeviation; empty when the workout is not part of
            an active programme or its prescription cannot be found
        """
        workout = self._workout_repo.get_workout(workout_id)
        if workout is None:
            logger.warning("Workout not found: %s", workout_id)
            return []

        if not workout.is_programme_workout or workout.programme_id is None:
            return []

        target_workout = self.find_target_workout(
            workout.programme_id, workout.week_number, workout.day_number
        )
        if target_workout is None:
            return []

        exercise_logs = self._workout_repo.get_exercise_logs(workout_id)

        deviations = compute_deviations(
            target_workout,
            exercise_logs,
            workout_id=workout_id,
            programme_id=workout.programme_id,
            timestamp=self._clock(),
            threshold=self._settings.deviation_threshold,
        )
        logger.info(
            "Workout %s: %d deviation(s) from programme %s",
            workout_id,
            len(deviations),
            workout.programme_id,
        )
        return deviations

    def find_target_workout(
        self,
        programme_id: str,
        week_number: Optional[int],
        day_number: Optional[int],
    ) -> Optional[WorkoutSnapshot]:
        """
        Locate the prescribed workout in the programme's snapshot.

        Returns:
            WorkoutSnapshot, or None when the programme is missing or
            cancelled, has no snapshot, or lacks the week/day
        """
        programme = self._programme_repo.get_programme(programme_id)
        if programme is None:
            logger.warning("Programme not found: %s", programme_id)
            return None

        if programme.is_cancelled:
            return None

        snapshot = self._programme_repo.get_immutable_snapshot(programme_id)
        if snapshot is None:
            logger.warning("No immutable programme snapshot found for programme %s", programme_id)
            return None

        if week_number is None or day_number is None:
            logger.warning("Workout has no week/day in programme %s", programme_id)
            return None

        week = snapshot.find_week(week_number)
        if week is None:
            logger.warning("Week %s not found in snapshot", week_number)
            return None

        target = snapshot.find_workout(week_number, day_number)
        if target is None:
            logger.warning("Day %s not found in week %s", day_number, week_number)
        return target
