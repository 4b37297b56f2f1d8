"""
1RM Estimation Service.

Turns a single completed set into an estimated one-repetition maximum and
a confidence score, and decides whether that estimate should replace the
stored one.

- Estimates are only made from 1-15 reps and from RPE above 6
- RPE is converted to total rep capacity (reps + reps in reserve)
- The curve depends on the exercise's scaling type
- Four gates (valid set, improvement, load %, confidence) protect the
  tracked max from light, high-rep sets
"""
from datetime import datetime
from typing import Callable, Optional
import logging

from analytics.core.formulas import (
    calculate_1rm_brzycki,
    calculate_1rm_isolation,
    calculate_1rm_weighted_bodyweight,
    format_rpe,
    format_weight,
    total_rep_capacity,
)
from analytics.settings import Settings, get_settings
from domain.models import (
    CompletedSet,
    ExerciseMaxEstimate,
    MostWeightData,
    OneRMType,
    RMScalingType,
)

logger = logging.getLogger(__name__)

# Confidence blend weights: reps matter most, then RPE, then load
REP_SCORE_WEIGHT = 0.5
RPE_SCORE_WEIGHT = 0.3
LOAD_SCORE_WEIGHT = 0.2

# RPE score used when RPE is missing or below the reliable floor
FALLBACK_RPE_SCORE = 0.3


class OneRMService:
    """
    Service for 1RM estimation and update decisions.

    Stateless: every method works on its arguments only.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize the 1RM service.

        Args:
            settings: Thresholds; defaults to get_settings()
            clock: Source of record timestamps
        """
        self._settings = settings or get_settings()
        self._clock = clock

    def calculate_estimated_1rm(
        self,
        weight: float,
        reps: int,
        rpe: Optional[float] = None,
        scaling_type: RMScalingType = RMScalingType.STANDARD,
    ) -> Optional[float]:
        """
        Calculate estimated 1RM using the curve for the exercise type.

        Args:
            weight: Weight lifted
            reps: Reps completed
            rpe: Logged RPE; None means the set was taken to failure
            scaling_type: Which curve the exercise follows

        Returns:
            Estimated 1RM, or None when reps are outside 1-15 or RPE is
            at or below 6 (too unreliable)
        """
        if reps <= 0 or reps > self._settings.one_rm_max_reps:
            logger.debug("Skipping 1RM calc: reps out of range (%s)", reps)
            return None

        if rpe is not None and rpe <= self._settings.one_rm_min_rpe:
            logger.debug("Skipping 1RM calc: RPE too low (%s)", rpe)
            return None

        capacity = total_rep_capacity(reps, rpe)

        if capacity == 1:
            logger.debug("True single detected: %s", weight)
            return float(weight)

        if scaling_type == RMScalingType.WEIGHTED_BODYWEIGHT:
            result = calculate_1rm_weighted_bodyweight(weight, capacity)
        elif scaling_type == RMScalingType.ISOLATION:
            result = calculate_1rm_isolation(weight, capacity)
        else:
            result = calculate_1rm_brzycki(weight, capacity)

        logger.debug(
            "1RM estimate (%s): %s x %s (capacity %s) = %.2f",
            scaling_type.value,
            weight,
            reps,
            capacity,
            result,
        )
        return result

    def calculate_confidence(
        self,
        reps: int,
        rpe: Optional[float],
        percent_of_1rm: float,
    ) -> float:
        """
        Confidence score for a 1RM estimate.

        Weighted blend of a rep score (fewer reps is better), an RPE score
        (harder is better) and how close the load was to the current max.

        Args:
            reps: Reps completed
            rpe: Logged RPE, if any
            percent_of_1rm: Set weight as a fraction of the current 1RM

        Returns:
            Confidence in [0, 1]
        """
        if reps <= 0:
            return 0.0

        capped_reps = min(reps, self._settings.one_rm_max_reps)
        rep_score = (16 - capped_reps) / 15

        if rpe is not None and rpe >= self._settings.one_rm_min_rpe:
            rpe_score = (rpe - 5) / 5
        else:
            rpe_score = FALLBACK_RPE_SCORE

        load_score = min(max(percent_of_1rm, 0.0), 1.0)

        return (
            rep_score * REP_SCORE_WEIGHT
            + rpe_score * RPE_SCORE_WEIGHT
            + load_score * LOAD_SCORE_WEIGHT
        )

    def should_update_one_rm(
        self,
        completed_set: CompletedSet,
        current_estimate: Optional[float],
        new_estimate: float,
    ) -> bool:
        """
        Decide whether a new estimate replaces the stored one.

        All four must hold: the set is valid for estimation, the estimate
        improves, the load is at least 60% of the current max, and the
        confidence is at least 0.5.
        """
        return (
            self.is_set_valid_for_one_rm(completed_set)
            and self._is_improvement(current_estimate, new_estimate)
            and self._is_load_sufficient(completed_set, current_estimate)
            and self._is_confident(completed_set, current_estimate)
        )

    def is_set_valid_for_one_rm(self, completed_set: CompletedSet) -> bool:
        rpe = completed_set.rpe
        return (
            completed_set.completed
            and 0 < completed_set.reps <= self._settings.one_rm_max_reps
            and completed_set.weight > 0
            and (rpe is None or rpe >= self._settings.one_rm_min_rpe)
        )

    @staticmethod
    def _is_improvement(current_estimate: Optional[float], new_estimate: float) -> bool:
        return current_estimate is None or new_estimate > current_estimate

    def _is_load_sufficient(
        self,
        completed_set: CompletedSet,
        current_estimate: Optional[float],
    ) -> bool:
        if current_estimate is None or current_estimate <= 0:
            return True
        load_percentage = completed_set.weight / current_estimate
        return load_percentage >= self._settings.one_rm_min_load_percentage

    def _is_confident(
        self,
        completed_set: CompletedSet,
        current_estimate: Optional[float],
    ) -> bool:
        if current_estimate is not None and current_estimate > 0:
            percent_of_1rm = completed_set.weight / current_estimate
        else:
            percent_of_1rm = 1.0

        confidence = self.calculate_confidence(
            completed_set.reps, completed_set.rpe, percent_of_1rm
        )
        return confidence >= self._settings.one_rm_min_confidence

    def create_one_rm_record(
        self,
        exercise_id: str,
        completed_set: CompletedSet,
        estimate: float,
        confidence: float,
        current: Optional[ExerciseMaxEstimate] = None,
    ) -> ExerciseMaxEstimate:
        """
        Package an approved estimate as a tracked max.

        The heaviest weight ever lifted is carried forward from `current`
        when it is heavier than this set, so a true heavy single stays the
        literal record even when a lighter set yields a higher estimate.

        Args:
            exercise_id: Exercise ID
            completed_set: Set the estimate came from
            estimate: Estimated 1RM
            confidence: Confidence of the estimate
            current: Currently tracked max, if any

        Returns:
            New ExerciseMaxEstimate
        """
        now = self._clock()

        if current is not None and current.most_weight_lifted > completed_set.weight:
            most_weight = current.most_weight
        else:
            most_weight = MostWeightData(
                weight=completed_set.weight,
                reps=completed_set.reps,
                rpe=completed_set.rpe,
                date=now,
            )

        return ExerciseMaxEstimate(
            exercise_id=exercise_id,
            user_id=current.user_id if current else None,
            most_weight_lifted=most_weight.weight,
            most_weight_reps=most_weight.reps,
            most_weight_rpe=most_weight.rpe,
            most_weight_date=most_weight.date,
            one_rm_estimate=estimate,
            one_rm_context=self.build_context(
                completed_set.weight, completed_set.reps, completed_set.rpe
            ),
            one_rm_confidence=min(max(confidence, 0.0), 1.0),
            one_rm_date=now,
            one_rm_type=OneRMType.AUTOMATICALLY_CALCULATED,
        )

    def build_context(self, weight: float, reps: int, rpe: Optional[float]) -> str:
        """Human-readable description of a lift, e.g. "100kg × 5 @ RPE 8"."""
        rpe_str = f" @ RPE {format_rpe(rpe)}" if rpe is not None else ""
        return f"{format_weight(weight, self._settings.weight_unit)} × {reps}{rpe_str}"
