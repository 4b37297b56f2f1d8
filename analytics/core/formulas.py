"""
Shared strength formulas and weight utilities.

This module holds the numeric policy shared by the services:
- RPE to total rep capacity conversion
- Weight -> 1RM curves (Brzycki, weighted bodyweight, isolation)
- Plate rounding (truncating, never banker's rounding)
- Weight / RPE formatting for notes and context strings
"""
import math
from typing import Iterable, Optional

# Brzycki coefficients in the linear form: w / (1.0278 - 0.0278 * reps)
BRZYCKI_INTERCEPT = 1.0278
BRZYCKI_SLOPE = 0.0278

WEIGHTED_BODYWEIGHT_FACTOR = 0.035
ISOLATION_EXPONENT = 0.10

MAX_RPE = 10.0
MAX_EFFECTIVE_REPS = 15


# =============================================================================
# Rep capacity
# =============================================================================


def reps_in_reserve(rpe: float) -> int:
    """
    Convert an RPE into whole reps left in the tank.

    RPE 8 -> 2, RPE 8.5 -> 1 (truncated), RPE 10 -> 0.
    """
    return int(max(0.0, MAX_RPE - rpe))


def total_rep_capacity(reps: int, rpe: Optional[float] = None) -> int:
    """
    Reps the lifter could have done: logged reps plus reps in reserve.

    Without an RPE the set is assumed to be taken to failure.

    Args:
        reps: Reps actually completed
        rpe: Rate of perceived exertion, if logged

    Returns:
        Total rep capacity for the set
    """
    if rpe is None:
        return reps
    return reps + reps_in_reserve(rpe)


# =============================================================================
# 1RM curves
# =============================================================================


def calculate_1rm_brzycki(weight: float, capacity: float) -> float:
    """
    Calculate estimated 1RM using Brzycki formula.

    Formula: 1RM = weight / (1.0278 - 0.0278 * reps)

    Most accurate for rep ranges 1-10. Less reliable above 10 reps.

    Args:
        weight: Weight lifted
        capacity: Total rep capacity of the set

    Returns:
        Estimated 1RM
    """
    return weight / (BRZYCKI_INTERCEPT - BRZYCKI_SLOPE * capacity)


def calculate_1rm_weighted_bodyweight(weight: float, capacity: float) -> float:
    """
    Gentler additive curve for loaded bodyweight movements.

    Formula: 1RM = weight * (1 + reps * 0.035)
    """
    return weight * (1 + capacity * WEIGHTED_BODYWEIGHT_FACTOR)


def calculate_1rm_isolation(weight: float, capacity: float) -> float:
    """
    Flat curve for single-joint movements.

    Formula: 1RM = weight * reps^0.10
    """
    return weight * math.pow(capacity, ISOLATION_EXPONENT)


def estimate_record_1rm(weight: float, reps: int, rpe: Optional[float] = None) -> float:
    """
    Estimated 1RM attached to personal records.

    RPE-aware Brzycki. Sets whose effective reps exceed 15 fall back to
    the literal weight, as does a true single.

    Args:
        weight: Weight lifted
        reps: Reps completed
        rpe: Logged RPE, if any

    Returns:
        Estimated 1RM
    """
    capacity = total_rep_capacity(reps, rpe)
    if capacity <= 1 or capacity > MAX_EFFECTIVE_REPS:
        return float(weight)
    return calculate_1rm_brzycki(weight, capacity)


# =============================================================================
# Rounding and aggregation
# =============================================================================


def round_down_to_increment(weight: float, increment: float = 2.5) -> float:
    """
    Truncate a weight to a whole number of plate increments.

    102.4 -> 100.0, 104.99 -> 102.5. Truncation is toward zero so that
    results are reproducible across platforms.
    """
    if increment <= 0:
        return weight
    return int(weight / increment) * increment


def average(values: Iterable[float]) -> Optional[float]:
    """Arithmetic mean, or None for an empty input."""
    values = list(values)
    if not values:
        return None
    return sum(values) / len(values)


# =============================================================================
# Formatting
# =============================================================================


def format_number(value: float, decimals: int = 2) -> str:
    """Format without trailing zeros: 100.0 -> "100", 102.50 -> "102.5"."""
    text = f"{value:.{decimals}f}".rstrip("0").rstrip(".")
    return text or "0"


def format_weight(weight: float, unit: str = "kg") -> str:
    return f"{format_number(weight)}{unit}"


def format_rpe(rpe: float) -> str:
    return format_number(rpe, decimals=1)
