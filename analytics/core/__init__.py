"""
Core analytics services.

Usage:
    from analytics.core import OneRMService, PRDetectionService

    one_rm = OneRMService(settings=settings)
    estimate = one_rm.calculate_estimated_1rm(100, 5, rpe=8)
"""

from analytics.core.deviation_service import DeviationCalculationService, compute_deviations
from analytics.core.deviation_summary_service import DeviationSummaryService
from analytics.core.one_rm_service import OneRMService
from analytics.core.pr_detection_service import PRDetectionService, detect_weight_pr
from analytics.core.progression_service import (
    ProgressionService,
    decide_next_weight,
    record_outcome,
)

__all__ = [
    "OneRMService",
    "ProgressionService",
    "DeviationCalculationService",
    "DeviationSummaryService",
    "PRDetectionService",
    "compute_deviations",
    "decide_next_weight",
    "detect_weight_pr",
    "record_outcome",
]
