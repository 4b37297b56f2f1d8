"""
Deviation Summary Service.

Rolls the deviations of a programme run up into averages, counts and a
short list of plain-language sentences for review screens.
"""
from collections import defaultdict
from typing import Dict, List, Optional, Sequence
import logging

from analytics.core.formulas import average
from analytics.settings import Settings, get_settings
from domain.models import DeviationSummary, DeviationType, Programme, WorkoutDeviation

logger = logging.getLogger(__name__)


def _average_percent(deviations: Sequence[WorkoutDeviation]) -> float:
    avg = average(d.deviation_magnitude for d in deviations)
    return avg * 100 if avg is not None else 0.0


def _directional(
    deviations: Sequence[WorkoutDeviation], up: str, down: str
) -> tuple:
    percent = _average_percent(deviations)
    direction = up if percent >= 0 else down
    return int(abs(percent)), direction


def build_key_deviations(
    deviations: Sequence[WorkoutDeviation],
    workouts_completed: int,
    limit: int = 7,
) -> List[str]:
    """
    Plain-language sentences for the notable deviation kinds.

    Sentences appear in a fixed order (volume, weight, swaps, skips,
    additions, sets, reps); percentages are truncated to whole numbers.

    Args:
        deviations: Deviations of the programme run
        workouts_completed: Completed workouts, for the swap sentence
        limit: Maximum number of sentences

    Returns:
        Up to `limit` sentences
    """
    by_type: Dict[DeviationType, List[WorkoutDeviation]] = defaultdict(list)
    for deviation in deviations:
        by_type[deviation.deviation_type].append(deviation)

    sentences: List[str] = []

    volume = by_type.get(DeviationType.VOLUME_DEVIATION)
    if volume:
        percent, direction = _directional(volume, "higher", "lower")
        sentences.append(
            f"Volume {percent}% {direction} on average across {len(volume)} exercises"
        )

    intensity = by_type.get(DeviationType.INTENSITY_DEVIATION)
    if intensity:
        percent, direction = _directional(intensity, "heavier", "lighter")
        sentences.append(
            f"Weight {percent}% {direction} on average across {len(intensity)} exercises"
        )

    swaps = by_type.get(DeviationType.EXERCISE_SWAP)
    if swaps:
        swapped_workouts = len({d.workout_id for d in swaps})
        sentences.append(
            f"Swapped exercises in {swapped_workouts} of {workouts_completed} workouts"
        )

    skips = by_type.get(DeviationType.EXERCISE_SKIPPED)
    if skips:
        sentences.append(f"Skipped {len(skips)} prescribed exercises")

    adds = by_type.get(DeviationType.EXERCISE_ADDED)
    if adds:
        sentences.append(f"Added {len(adds)} extra exercises")

    set_counts = by_type.get(DeviationType.SET_COUNT_DEVIATION)
    if set_counts:
        percent, direction = _directional(set_counts, "more", "fewer")
        sentences.append(f"{percent}% {direction} sets on average")

    reps = by_type.get(DeviationType.REP_DEVIATION)
    if reps:
        percent, direction = _directional(reps, "more", "fewer")
        sentences.append(f"{percent}% {direction} reps on average")

    return sentences[:limit]


class DeviationSummaryService:
    """Service summarizing the deviations of a programme run."""

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()

    def summarize_deviations(
        self,
        deviations: Sequence[WorkoutDeviation],
        programme: Programme,
        *,
        workouts_completed: int = 0,
        workouts_prescribed: Optional[int] = None,
    ) -> DeviationSummary:
        """
        Summarize deviations of a programme run.

        Args:
            deviations: All deviations recorded for the programme run
            programme: Programme run
            workouts_completed: Number of workouts finished so far
            workouts_prescribed: Number of workouts in the programme;
                defaults to the snapshot's workout count

        Returns:
            DeviationSummary (zeroed when there are no deviations)
        """
        if workouts_prescribed is None:
            snapshot = programme.immutable_snapshot
            workouts_prescribed = snapshot.total_workouts if snapshot else 0

        by_type: Dict[DeviationType, List[WorkoutDeviation]] = defaultdict(list)
        for deviation in deviations:
            by_type[deviation.deviation_type].append(deviation)

        summary = DeviationSummary(
            programme_name=programme.name,
            programme_type=programme.programme_type.name,
            duration_weeks=programme.duration_weeks,
            workouts_completed=workouts_completed,
            workouts_prescribed=workouts_prescribed,
            avg_volume_deviation_percent=_average_percent(
                by_type[DeviationType.VOLUME_DEVIATION]
            ),
            avg_intensity_deviation_percent=_average_percent(
                by_type[DeviationType.INTENSITY_DEVIATION]
            ),
            exercise_swap_count=len(by_type[DeviationType.EXERCISE_SWAP]),
            exercise_skip_count=len(by_type[DeviationType.EXERCISE_SKIPPED]),
            exercise_add_count=len(by_type[DeviationType.EXERCISE_ADDED]),
            key_deviations=build_key_deviations(
                deviations,
                workouts_completed,
                limit=self._settings.max_key_deviations,
            ),
        )
        logger.debug(
            "Summarized %d deviation(s) for programme %s", len(deviations), programme.id
        )
        return summary
