"""
CompleteWorkout Use Case.

Runs the per-workout analytics when a programme workout is finished:
records each exercise's outcome for progression, then compares the
session with its prescription and stores the deviations.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from analytics.core.deviation_service import DeviationCalculationService
from analytics.core.progression_service import ProgressionService
from analytics.observability import report_persistence_failure
from application.ports import DeviationRepository
from domain.models import ExerciseLog, PerformanceRecord, Programme, WorkoutDeviation

logger = logging.getLogger(__name__)


@dataclass
class CompleteWorkoutResult:
    """Result of the CompleteWorkout use case execution."""

    success: bool
    performance_records: List[PerformanceRecord] = field(default_factory=list)
    deviations: List[WorkoutDeviation] = field(default_factory=list)
    error: Optional[str] = None
    failed_exercises: List[str] = field(default_factory=list)


class CompleteWorkoutUseCase:
    """
    Use case for analysing a finished programme workout.

    Orchestrates the following workflow:
    1. Build and store a performance record per exercise with sets
    2. Calculate deviations from the programme snapshot
    3. Replace the workout's stored deviations

    A failed performance insert does not stop deviation analysis; the
    result reports success=False and the exercises that were not stored.

    Usage:
        >>> use_case = CompleteWorkoutUseCase(
        ...     progression_service=progression_service,
        ...     deviation_service=deviation_service,
        ...     deviation_repo=deviation_repo,
        ... )
        >>> result = use_case.execute("w-123", programme, exercise_logs)
    """

    def __init__(
        self,
        progression_service: ProgressionService,
        deviation_service: DeviationCalculationService,
        deviation_repo: DeviationRepository,
    ) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            progression_service: Outcome recording
            deviation_service: Prescribed-vs-actual comparison
            deviation_repo: Repository for deviations
        """
        self._progression_service = progression_service
        self._deviation_service = deviation_service
        self._deviation_repo = deviation_repo

    def execute(
        self,
        workout_id: str,
        programme: Programme,
        exercise_logs: Sequence[ExerciseLog],
        *,
        is_deload: bool = False,
    ) -> CompleteWorkoutResult:
        """
        Execute the workout completion workflow.

        Args:
            workout_id: Workout UUID
            programme: Programme run the workout belongs to
            exercise_logs: Exercises performed, with their sets
            is_deload: Whether the session was a prescribed deload

        Returns:
            CompleteWorkoutResult with stored records and deviations
        """
        try:
            # Step 1: Performance records
            records: List[PerformanceRecord] = []
            failed: List[str] = []
            for log in exercise_logs:
                if not log.sets:
                    continue
                record = self._progression_service.build_performance_record(
                    workout_id,
                    programme,
                    log.exercise_name,
                    log.sets,
                    is_deload=is_deload,
                )
                if self._progression_service.save_performance_record(record):
                    records.append(record)
                else:
                    failed.append(log.exercise_name)

            # Step 2: Deviations
            deviations = self._deviation_service.calculate_deviations(workout_id)

            # Step 3: Persist deviations
            if not self._deviation_repo.replace_for_workout(workout_id, deviations):
                logger.error("Failed to store deviations for workout %s", workout_id)
                return CompleteWorkoutResult(
                    success=False,
                    performance_records=records,
                    deviations=deviations,
                    error="Failed to save deviations",
                    failed_exercises=failed,
                )

            if failed:
                return CompleteWorkoutResult(
                    success=False,
                    performance_records=records,
                    deviations=deviations,
                    error=f"Failed to save performance for: {', '.join(failed)}",
                    failed_exercises=failed,
                )

            logger.info(
                "Workout %s analysed: %d performance record(s), %d deviation(s)",
                workout_id,
                len(records),
                len(deviations),
            )
            return CompleteWorkoutResult(
                success=True,
                performance_records=records,
                deviations=deviations,
            )

        except Exception as e:
            report_persistence_failure("complete_workout", e)
            return CompleteWorkoutResult(success=False, error=str(e))
