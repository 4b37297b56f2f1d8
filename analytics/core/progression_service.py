"""
Progression Service for programme load decisions.

This module provides business logic for load progression within a
structured programme:
- Next-weight decision (progress / maintain / deload / deload recovery)
- Outcome recording of a finished exercise against its targets
- Progression status for an exercise

The decision is a small state machine re-evaluated from the last few
performance records on every call; nothing is cached between calls.
"""
from datetime import datetime
from typing import Callable, List, Optional, Sequence
import logging

from analytics.core.formulas import average, format_number, round_down_to_increment
from analytics.settings import Settings, get_settings
from application.ports.exercise_max_repository import ExerciseMaxRepository
from application.ports.performance_repository import PerformanceRepository
from domain.models import (
    CompletedSet,
    DeloadDetails,
    DeloadRules,
    ExerciseProgressionStatus,
    PerformanceRecord,
    Programme,
    ProgressionAction,
    ProgressionDecision,
    ProgressionRules,
)

logger = logging.getLogger(__name__)

# Completed-set ratio that counts as success for free-form exercises
FREE_FORM_SUCCESS_RATIO = 0.8


# =============================================================================
# Decision
# =============================================================================


def decide_next_weight(
    exercise_name: str,
    rules: Optional[ProgressionRules],
    recent_performance: Sequence[PerformanceRecord],
    consecutive_failures: int,
    *,
    one_rm: Optional[float] = None,
    settings: Optional[Settings] = None,
) -> ProgressionDecision:
    """
    Decide the next prescribed weight for an exercise.

    Args:
        exercise_name: Exercise name (increments are looked up by name)
        rules: Programme progression rules, None if the programme has none
        recent_performance: Latest records, most recent first
        consecutive_failures: Current failure streak
        one_rm: Known 1RM, used only for a first workout
        settings: Defaults and rounding; defaults to get_settings()

    Returns:
        ProgressionDecision
    """
    settings = settings or get_settings()
    unit = settings.weight_unit

    if rules is None:
        return ProgressionDecision(
            weight=settings.empty_bar_weight,
            action=ProgressionAction.MAINTAIN,
            reason="No progression rules defined",
        )

    if not recent_performance:
        logger.info("No performance history for %s - first workout", exercise_name)
        return _first_workout(one_rm, settings)

    last = recent_performance[0]
    deload_rules = rules.deload_rules

    if (
        deload_rules.auto_deload
        and consecutive_failures >= deload_rules.trigger_after_failures
    ):
        return _deload(
            last_weight=last.target_weight,
            deload_rules=deload_rules,
            reason=f"Reached {consecutive_failures} consecutive failures",
            settings=settings,
        )

    increment = rules.increment_for(exercise_name)
    if increment is None:
        increment = settings.default_increment

    if last.is_deload_workout:
        return _deload_recovery(
            deload_weight=last.achieved_weight,
            increment=increment,
            recent_performance=recent_performance,
            unit=unit,
        )

    if last.was_successful:
        new_weight = last.achieved_weight + increment
        logger.info(
            "%s progressing by %s to %s", exercise_name, increment, new_weight
        )
        return ProgressionDecision(
            weight=new_weight,
            action=ProgressionAction.PROGRESS,
            reason=f"Last workout successful - adding {format_number(increment)}{unit}",
        )

    logger.info("%s last workout failed - maintaining weight", exercise_name)
    return ProgressionDecision(
        weight=last.target_weight,
        action=ProgressionAction.MAINTAIN,
        reason="Last workout not successful - repeating weight",
    )


def _first_workout(one_rm: Optional[float], settings: Settings) -> ProgressionDecision:
    unit = settings.weight_unit
    if one_rm is not None and one_rm > 0:
        calculated = one_rm * settings.first_workout_percentage
        starting_weight = max(
            round_down_to_increment(calculated, settings.weight_rounding_increment),
            settings.empty_bar_weight,
        )
        percent = int(settings.first_workout_percentage * 100)
        reason = f"Starting at {percent}% of 1RM ({format_number(one_rm)}{unit})"
    else:
        starting_weight = settings.empty_bar_weight
        reason = "Starting with empty bar"

    return ProgressionDecision(
        weight=starting_weight,
        action=ProgressionAction.PROGRESS,
        reason=reason,
    )


def _deload(
    last_weight: float,
    deload_rules: DeloadRules,
    reason: str,
    settings: Settings,
) -> ProgressionDecision:
    deload_weight = max(
        last_weight * deload_rules.deload_percentage,
        deload_rules.minimum_weight,
    )
    rounded = round_down_to_increment(deload_weight, settings.weight_rounding_increment)

    logger.info(
        "Deload: %s -> %s (%d%%)",
        last_weight,
        rounded,
        int(deload_rules.deload_percentage * 100),
    )

    return ProgressionDecision(
        weight=rounded,
        action=ProgressionAction.DELOAD,
        reason=reason,
        is_deload=True,
        deload_details=DeloadDetails(
            previous_weight=last_weight,
            deload_percentage=deload_rules.deload_percentage,
            minimum_weight=deload_rules.minimum_weight,
        ),
    )


def _deload_recovery(
    deload_weight: float,
    increment: float,
    recent_performance: Sequence[PerformanceRecord],
    unit: str,
) -> ProgressionDecision:
    # The weight we deloaded from caps the recovery step
    pre_deload_weight = next(
        (r.target_weight for r in recent_performance if not r.is_deload_workout),
        deload_weight,
    )
    new_weight = min(deload_weight + increment, pre_deload_weight)

    return ProgressionDecision(
        weight=new_weight,
        action=ProgressionAction.PROGRESS,
        reason=f"Recovering from deload - progressing by {format_number(increment)}{unit}",
    )


# =============================================================================
# Outcome recording
# =============================================================================


def evaluate_success(
    *,
    target_sets: int,
    completed_sets: int,
    target_reps: int,
    missed_reps: int,
    average_rpe: Optional[float],
    rules: Optional[ProgressionRules],
) -> bool:
    """
    Three-tier success policy.

    1. The programme defines success criteria: required sets, missed-rep
       allowance and (if given) an RPE band must all be met.
    2. No criteria but a rep target exists: every set with every rep.
    3. Free-form (no rep target): at least 80% of sets completed.
    """
    criteria = rules.success_criteria if rules is not None else None

    if criteria is not None:
        meets_sets = criteria.required_sets is None or completed_sets >= criteria.required_sets
        meets_reps = (
            criteria.required_reps is None
            or missed_reps <= criteria.allowed_missed_reps
        )
        meets_rpe = average_rpe is None or (
            (criteria.min_rpe is None or average_rpe >= criteria.min_rpe)
            and (criteria.max_rpe is None or average_rpe <= criteria.max_rpe)
        )
        return meets_sets and meets_reps and meets_rpe

    if target_reps > 0:
        return completed_sets == target_sets and missed_reps == 0

    if target_sets == 0:
        return False
    return completed_sets / target_sets >= FREE_FORM_SUCCESS_RATIO


def record_outcome(
    workout_id: str,
    programme_id: str,
    exercise_name: str,
    sets: Sequence[CompletedSet],
    rules: Optional[ProgressionRules],
    *,
    is_deload: bool = False,
    workout_date: Optional[datetime] = None,
) -> PerformanceRecord:
    """
    Build the performance record for one exercise of a finished workout.

    Targets come from the first set's prescription (linear programmes use
    one working weight and rep target across sets).

    Args:
        workout_id: Workout UUID
        programme_id: Programme UUID
        exercise_name: Exercise name
        sets: All sets of the exercise, completed or not
        rules: Programme progression rules
        is_deload: Whether the session was a prescribed deload
        workout_date: Record timestamp; defaults to now

    Returns:
        PerformanceRecord ready to append
    """
    first = sets[0] if sets else None
    completed = [s for s in sets if s.completed]

    target_sets = len(sets)
    completed_sets = len(completed)
    target_reps = (first.target_reps or 0) if first else 0
    total_target_reps = target_sets * target_reps
    achieved_reps = sum(s.reps for s in completed)
    missed_reps = max(total_target_reps - achieved_reps, 0)

    target_weight = (first.target_weight or 0.0) if first else 0.0
    achieved_weight = max((s.weight for s in completed), default=0.0)

    average_rpe = average(s.rpe for s in sets if s.rpe is not None and s.rpe > 0)

    was_successful = evaluate_success(
        target_sets=target_sets,
        completed_sets=completed_sets,
        target_reps=target_reps,
        missed_reps=missed_reps,
        average_rpe=average_rpe,
        rules=rules,
    )

    logger.info(
        "Recorded performance: %s - %s (sets %d/%d, reps %d/%d, missed %d)",
        exercise_name,
        "success" if was_successful else "failed",
        completed_sets,
        target_sets,
        achieved_reps,
        total_target_reps,
        missed_reps,
    )

    return PerformanceRecord(
        programme_id=programme_id,
        exercise_name=exercise_name,
        workout_id=workout_id,
        workout_date=workout_date or datetime.now(),
        target_weight=target_weight,
        achieved_weight=achieved_weight,
        target_sets=target_sets,
        completed_sets=completed_sets,
        target_reps=target_reps,
        achieved_reps=achieved_reps,
        missed_reps=missed_reps,
        was_successful=was_successful,
        average_rpe=average_rpe,
        is_deload_workout=is_deload,
    )


# =============================================================================
# Progression Service
# =============================================================================


class ProgressionService:
    """
    Service for programme progression decisions.

    Provides business logic on top of repository data access:
    - Next weight calculation from performance history
    - Performance recording after a workout
    - Progression status reporting
    """

    def __init__(
        self,
        performance_repo: PerformanceRepository,
        exercise_max_repo: ExerciseMaxRepository,
        settings: Optional[Settings] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize the progression service.

        Args:
            performance_repo: Repository for the performance log
            exercise_max_repo: Repository for known 1RMs
            settings: Defaults and rounding; defaults to get_settings()
            clock: Source of record timestamps
        """
        self._performance_repo = performance_repo
        self._exercise_max_repo = exercise_max_repo
        self._settings = settings or get_settings()
        self._clock = clock

    def calculate_progression_weight(
        self,
        exercise_name: str,
        programme: Programme,
    ) -> ProgressionDecision:
        """
        Calculate the next weight for an exercise in a programme.

        Args:
            exercise_name: Exercise name
            programme: Programme run with its progression rules

        Returns:
            ProgressionDecision
        """
        recent: List[PerformanceRecord] = []
        failures = 0
        one_rm = None

        if programme.progression_rules is not None:
            recent = self._performance_repo.get_recent_performance(
                programme.id,
                exercise_name,
                limit=self._settings.recent_performance_limit,
            )
            if recent:
                failures = self._performance_repo.get_consecutive_failures(
                    programme.id, exercise_name
                )
            else:
                one_rm = self._exercise_max_repo.get_one_rm_for_exercise_name(
                    exercise_name
                )

        decision = decide_next_weight(
            exercise_name,
            programme.progression_rules,
            recent,
            failures,
            one_rm=one_rm,
            settings=self._settings,
        )
        logger.info(
            "Progression for %s in %s: %s %s (%s)",
            exercise_name,
            programme.name or programme.id,
            decision.action.value,
            decision.weight,
            decision.reason,
        )
        return decision

    def build_performance_record(
        self,
        workout_id: str,
        programme: Programme,
        exercise_name: str,
        sets: Sequence[CompletedSet],
        *,
        is_deload: bool = False,
    ) -> PerformanceRecord:
        """Evaluate an exercise against its targets without storing it."""
        return record_outcome(
            workout_id,
            programme.id,
            exercise_name,
            sets,
            programme.progression_rules,
            is_deload=is_deload,
            workout_date=self._clock(),
        )

    def save_performance_record(self, record: PerformanceRecord) -> bool:
        """
        Append a performance record to the log.

        Returns:
            True if the store accepted the record
        """
        if not self._performance_repo.insert_performance_record(record):
            logger.error(
                "Failed to store performance record for %s in workout %s",
                record.exercise_name,
                record.workout_id,
            )
            return False
        return True

    def record_workout_performance(
        self,
        workout_id: str,
        programme: Programme,
        exercise_name: str,
        sets: Sequence[CompletedSet],
        *,
        is_deload: bool = False,
    ) -> bool:
        """
        Record how an exercise went against its targets.

        Args:
            workout_id: Workout UUID
            programme: Programme run
            exercise_name: Exercise name
            sets: All sets of the exercise
            is_deload: Whether the session was a prescribed deload

        Returns:
            True if the record was stored
        """
        record = self.build_performance_record(
            workout_id, programme, exercise_name, sets, is_deload=is_deload
        )
        return self.save_performance_record(record)

    def get_progression_status(
        self,
        programme: Programme,
        exercise_name: str,
    ) -> ExerciseProgressionStatus:
        """
        Summarize where an exercise stands in its progression.

        Args:
            programme: Programme run
            exercise_name: Exercise name

        Returns:
            ExerciseProgressionStatus with a suggested next action
        """
        recent = self._performance_repo.get_recent_performance(
            programme.id, exercise_name, limit=10
        )
        failures = self._performance_repo.get_consecutive_failures(
            programme.id, exercise_name
        )
        last_success = self._performance_repo.get_last_success(programme.id, exercise_name)
        last_deload = self._performance_repo.get_last_deload(programme.id, exercise_name)
        total_deloads = self._performance_repo.get_total_deloads(
            programme.id, exercise_name
        )

        latest = recent[0] if recent else None
        in_deload_cycle = latest.is_deload_workout if latest else False
        rules = programme.progression_rules

        if in_deload_cycle:
            action = ProgressionAction.MAINTAIN
        elif rules is not None and failures >= rules.deload_rules.trigger_after_failures:
            action = ProgressionAction.DELOAD
        elif latest is not None and latest.was_successful:
            action = ProgressionAction.PROGRESS
        else:
            action = ProgressionAction.MAINTAIN

        return ExerciseProgressionStatus(
            exercise_name=exercise_name,
            current_weight=latest.target_weight if latest else 0.0,
            consecutive_failures=failures,
            last_success_date=last_success.workout_date if last_success else None,
            last_deload_date=last_deload.workout_date if last_deload else None,
            total_deloads=total_deloads,
            is_in_deload_cycle=in_deload_cycle,
            suggested_action=action,
        )
