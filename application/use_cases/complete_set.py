"""
CompleteSet Use Case.

Runs the per-set analytics when the user marks a set as completed:
personal record detection and the 1RM update decision, followed by the
persistence of whatever they produced.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from analytics.core.one_rm_service import OneRMService
from analytics.core.pr_detection_service import PRDetectionService
from analytics.observability import report_persistence_failure
from application.ports import ExerciseMaxRepository
from domain.models import CompletedSet, ExerciseMaxEstimate, PersonalRecord, RMScalingType

logger = logging.getLogger(__name__)


@dataclass
class CompleteSetResult:
    """Result of the CompleteSet use case execution."""

    success: bool
    personal_records: List[PersonalRecord] = field(default_factory=list)
    one_rm_estimate: Optional[ExerciseMaxEstimate] = None
    error: Optional[str] = None


class CompleteSetUseCase:
    """
    Use case for analysing a completed set.

    Orchestrates the following workflow:
    1. Detect a weight PR and store it (merging within the workout)
    2. Estimate the 1RM from the set
    3. Store the estimate if it passes the update gates

    Analytics are advisory: PR storage and the 1RM update run
    independently, and a store failure in either is returned as
    success=False, never raised to the workout logger.

    Usage:
        >>> use_case = CompleteSetUseCase(
        ...     pr_service=pr_service,
        ...     one_rm_service=one_rm_service,
        ...     exercise_max_repo=exercise_max_repo,
        ... )
        >>> result = use_case.execute(completed_set, exercise_id="squat")
        >>> result.personal_records
    """

    def __init__(
        self,
        pr_service: PRDetectionService,
        one_rm_service: OneRMService,
        exercise_max_repo: ExerciseMaxRepository,
    ) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            pr_service: Personal record detection
            one_rm_service: 1RM estimation and update gates
            exercise_max_repo: Repository for tracked maxes
        """
        self._pr_service = pr_service
        self._one_rm_service = one_rm_service
        self._exercise_max_repo = exercise_max_repo

    def execute(
        self,
        completed_set: CompletedSet,
        exercise_id: str,
        scaling_type: RMScalingType = RMScalingType.STANDARD,
    ) -> CompleteSetResult:
        """
        Execute the set completion workflow.

        Args:
            completed_set: Set just completed
            exercise_id: Exercise ID
            scaling_type: 1RM curve for the exercise

        Returns:
            CompleteSetResult with detected records and any stored estimate
        """
        records: List[PersonalRecord] = []
        errors: List[str] = []
        estimate: Optional[ExerciseMaxEstimate] = None

        try:
            # Step 1: Personal records
            records = self._pr_service.check_for_pr(completed_set, exercise_id)
            if records and not self._pr_service.save_personal_records(records):
                errors.append("Failed to save personal records")

            # Step 2: 1RM estimate and update decision
            candidate = self._build_one_rm_update(completed_set, exercise_id, scaling_type)

            # Step 3: Persist the new estimate
            if candidate is not None:
                if self._exercise_max_repo.save_estimate(candidate):
                    estimate = candidate
                    logger.info(
                        "New 1RM for %s: %.2f (%s)",
                        exercise_id,
                        candidate.one_rm_estimate,
                        candidate.one_rm_context,
                    )
                else:
                    logger.error("Repository rejected 1RM estimate for %s", exercise_id)
                    errors.append("Failed to save 1RM estimate")

        except Exception as e:
            report_persistence_failure("complete_set", e)
            return CompleteSetResult(
                success=False,
                personal_records=records,
                one_rm_estimate=estimate,
                error=str(e),
            )

        return CompleteSetResult(
            success=not errors,
            personal_records=records,
            one_rm_estimate=estimate,
            error="; ".join(errors) or None,
        )

    def _build_one_rm_update(
        self,
        completed_set: CompletedSet,
        exercise_id: str,
        scaling_type: RMScalingType,
    ) -> Optional[ExerciseMaxEstimate]:
        """Return the estimate to store, or None when the max stays as is."""
        new_estimate = self._one_rm_service.calculate_estimated_1rm(
            completed_set.weight,
            completed_set.reps,
            completed_set.rpe,
            scaling_type,
        )
        if new_estimate is None:
            return None

        current_estimate = self._exercise_max_repo.get_historical_max(exercise_id)

        if not self._one_rm_service.should_update_one_rm(
            completed_set, current_estimate, new_estimate
        ):
            logger.debug(
                "1RM for %s not updated: %.2f vs current %s",
                exercise_id,
                new_estimate,
                current_estimate,
            )
            return None

        if current_estimate:
            percent_of_1rm = completed_set.weight / current_estimate
        else:
            percent_of_1rm = 1.0
        confidence = self._one_rm_service.calculate_confidence(
            completed_set.reps, completed_set.rpe, percent_of_1rm
        )

        # Full record only for carrying the heaviest lift forward
        current = self._exercise_max_repo.get_current_max(exercise_id)

        return self._one_rm_service.create_one_rm_record(
            exercise_id, completed_set, new_estimate, confidence, current
        )
