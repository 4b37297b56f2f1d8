"""
Application Use Cases for the training analytics core.

This package contains application-level use cases that orchestrate the
analytics services and coordinate between ports/adapters. Use cases are
the entry points called by the set-completion and workout-completion
event handlers.

Architecture follows Clean Architecture / Hexagonal pattern:
- Use cases orchestrate analytics services and repository ports
- Dependencies are injected via constructors for testability
- Use cases return result dataclasses, never raise on store failures

Usage:
    from application.use_cases import CompleteSetUseCase, CompleteWorkoutUseCase

    # After a set is marked completed
    set_use_case = CompleteSetUseCase(
        pr_service=pr_service,
        one_rm_service=one_rm_service,
        exercise_max_repo=exercise_max_repo,
    )
    result = set_use_case.execute(completed_set, exercise_id="squat")

    # After a programme workout is finished
    workout_use_case = CompleteWorkoutUseCase(
        progression_service=progression_service,
        deviation_service=deviation_service,
        deviation_repo=deviation_repo,
    )
    result = workout_use_case.execute("w-123", programme, exercise_logs)
"""

from application.use_cases.complete_set import CompleteSetResult, CompleteSetUseCase
from application.use_cases.complete_workout import (
    CompleteWorkoutResult,
    CompleteWorkoutUseCase,
)

__all__ = [
    # CompleteSet
    "CompleteSetUseCase",
    "CompleteSetResult",
    # CompleteWorkout
    "CompleteWorkoutUseCase",
    "CompleteWorkoutResult",
]
