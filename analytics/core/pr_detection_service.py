"""
PR Detection Service.

Detects heaviest-weight personal records from completed sets and merges
records set more than once within the same workout, so at most one
weight record per exercise per workout is stored.
"""
from datetime import datetime
from typing import Callable, List, Optional
import logging

from analytics.core.formulas import estimate_record_1rm, format_weight
from analytics.settings import Settings, get_settings
from application.ports.personal_record_repository import PersonalRecordRepository
from domain.models import CompletedSet, PersonalRecord, PRType

logger = logging.getLogger(__name__)

FIRST_RECORD_IMPROVEMENT = 100.0


def is_set_eligible_for_pr(completed_set: CompletedSet) -> bool:
    return completed_set.completed and completed_set.weight > 0 and completed_set.reps > 0


def detect_weight_pr(
    completed_set: CompletedSet,
    exercise_id: str,
    current_max: Optional[float],
    previous_record: Optional[PersonalRecord],
    now: datetime,
    *,
    unit: str = "kg",
) -> Optional[PersonalRecord]:
    """
    Decide whether a set is a new heaviest-weight record.

    Reps do not matter: only the weight is compared with the best on
    record. When `previous_record` was set earlier in the same workout it
    is about to be superseded, so the new record links to (and measures
    improvement against) whatever that record had beaten.

    Args:
        completed_set: Set just completed
        exercise_id: Exercise ID
        current_max: Heaviest weight on record, None if none yet
        previous_record: Latest weight record for the exercise
        now: Record timestamp
        unit: Weight unit used in notes

    Returns:
        New PersonalRecord, or None when the set is not a record
    """
    if not is_set_eligible_for_pr(completed_set):
        return None

    weight = completed_set.weight
    reps = completed_set.reps

    if current_max is not None and weight <= current_max:
        return None

    baseline_weight = current_max
    link_weight = link_reps = None
    link_date = None

    if previous_record is not None:
        same_workout = (
            completed_set.workout_id is not None
            and previous_record.workout_id == completed_set.workout_id
        )
        if same_workout:
            baseline_weight = previous_record.previous_weight
            link_weight = previous_record.previous_weight
            link_reps = previous_record.previous_reps
            link_date = previous_record.previous_date
        else:
            link_weight = previous_record.weight
            link_reps = previous_record.reps
            link_date = previous_record.record_date

    if baseline_weight is not None and baseline_weight > 0:
        improvement = (weight - baseline_weight) / baseline_weight * 100
    else:
        improvement = FIRST_RECORD_IMPROVEMENT

    lift = f"{format_weight(weight, unit)} × {reps}"
    notes = f"First weight record: {lift}" if current_max is None else f"New weight PR: {lift}"

    return PersonalRecord(
        exercise_id=exercise_id,
        workout_id=completed_set.workout_id,
        weight=weight,
        reps=reps,
        rpe=completed_set.rpe,
        record_date=now,
        previous_weight=link_weight,
        previous_reps=link_reps,
        previous_date=link_date,
        improvement_percentage=improvement,
        record_type=PRType.WEIGHT,
        volume=weight * reps,
        estimated_1rm=estimate_record_1rm(weight, reps, completed_set.rpe),
        notes=notes,
    )


class PRDetectionService:
    """
    Service for personal record detection and storage.

    Reads the current best from the record store, leaves the decision to
    detect_weight_pr() and applies same-workout merges atomically.
    """

    def __init__(
        self,
        personal_record_repo: PersonalRecordRepository,
        settings: Optional[Settings] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize the PR detection service.

        Args:
            personal_record_repo: Repository for personal records
            settings: Weight unit for notes; defaults to get_settings()
            clock: Source of record timestamps
        """
        self._personal_record_repo = personal_record_repo
        self._settings = settings or get_settings()
        self._clock = clock

    def check_for_pr(
        self,
        completed_set: CompletedSet,
        exercise_id: str,
    ) -> List[PersonalRecord]:
        """
        Check whether a completed set is a new personal record.

        Nothing is stored here; pass the result to save_personal_records().

        Args:
            completed_set: Set just completed
            exercise_id: Exercise ID

        Returns:
            Detected records (empty when the set is not a record)
        """
        if not is_set_eligible_for_pr(completed_set):
            logger.debug("Skipping PR check for %s: set not eligible", exercise_id)
            return []

        current_max = self._personal_record_repo.get_max_weight_for_exercise(exercise_id)
        previous = self._personal_record_repo.get_latest_record(exercise_id, PRType.WEIGHT)

        record = detect_weight_pr(
            completed_set,
            exercise_id,
            current_max,
            previous,
            self._clock(),
            unit=self._settings.weight_unit,
        )
        if record is None:
            return []

        logger.info("Weight PR for %s: %s", exercise_id, record.notes)
        return [record]

    def save_personal_records(self, records: List[PersonalRecord]) -> bool:
        """
        Store detected records, merging with records from the same workout.

        A record set earlier in the same workout is replaced when the new
        one is heavier; otherwise the new one is dropped. All deletes and
        inserts go to the store as one transaction.

        Args:
            records: Records returned by check_for_pr()

        Returns:
            True if the store committed (or there was nothing to store)
        """
        delete_ids: List[str] = []
        to_insert: List[PersonalRecord] = []

        for record in records:
            existing = None
            if record.workout_id is not None:
                existing = self._personal_record_repo.get_record_for_workout(
                    record.workout_id, record.exercise_id, record.record_type
                )

            if existing is not None:
                if record.weight <= existing.weight:
                    logger.debug(
                        "Keeping existing %s record for %s in workout %s",
                        record.record_type.value,
                        record.exercise_id,
                        record.workout_id,
                    )
                    continue
                if existing.id is not None:
                    delete_ids.append(existing.id)

            to_insert.append(record)

        if not to_insert:
            return True

        committed = self._personal_record_repo.replace_records(delete_ids, to_insert)
        if not committed:
            logger.error(
                "Failed to store %d personal record(s), %d replacement(s)",
                len(to_insert),
                len(delete_ids),
            )
        return committed
