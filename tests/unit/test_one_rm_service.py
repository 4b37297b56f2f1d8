"""
Unit tests for the 1RM Estimation Service.

Tests cover:
- Estimation bounds (reps, RPE floor) and scaling types
- Monotonicity of estimates
- Confidence scoring
- The four update gates
- Record creation and most-weight carry-forward
"""
import pytest
from datetime import datetime

from analytics.core.formulas import calculate_1rm_brzycki
from analytics.core.one_rm_service import OneRMService
from domain.models import CompletedSet, ExerciseMaxEstimate, OneRMType, RMScalingType

pytestmark = pytest.mark.unit

RPES = [6.5, 7.0, 7.5, 8.0, 8.5, 9.0, 9.5, 10.0]


@pytest.fixture
def service(settings, clock):
    return OneRMService(settings=settings, clock=clock)


def make_set(weight, reps, rpe=None, completed=True):
    return CompletedSet(weight=weight, reps=reps, rpe=rpe, completed=completed)


def make_current(one_rm, most_weight=None):
    when = datetime(2024, 1, 1)
    return ExerciseMaxEstimate(
        exercise_id="squat",
        user_id="user-1",
        most_weight_lifted=most_weight if most_weight is not None else one_rm,
        most_weight_reps=1,
        most_weight_date=when,
        one_rm_estimate=one_rm,
        one_rm_confidence=0.9,
        one_rm_date=when,
        one_rm_type=OneRMType.MANUALLY_ENTERED,
    )


# =============================================================================
# Estimation Tests
# =============================================================================


class TestCalculateEstimated1RM:
    """Tests for calculate_estimated_1rm."""

    def test_true_single_is_its_own_max(self, service):
        for weight in (20, 100, 182.5):
            assert service.calculate_estimated_1rm(weight, 1) == weight

    def test_single_at_rpe_10_is_its_own_max(self, service):
        assert service.calculate_estimated_1rm(150, 1, 10) == 150

    def test_sixteen_reps_not_estimated(self, service):
        assert service.calculate_estimated_1rm(60, 16) is None

    def test_fifteen_reps_estimated(self, service):
        assert service.calculate_estimated_1rm(60, 15) is not None

    def test_zero_reps_not_estimated(self, service):
        assert service.calculate_estimated_1rm(100, 0) is None

    def test_rpe_exactly_6_not_estimated(self, service):
        assert service.calculate_estimated_1rm(100, 5, 6.0) is None

    def test_rpe_just_above_6_estimated(self, service):
        assert service.calculate_estimated_1rm(100, 5, 6.01) is not None

    def test_rpe_adds_reps_in_reserve(self, service):
        """5 reps @ RPE 8 is treated as a 7-rep max."""
        result = service.calculate_estimated_1rm(100, 5, 8)
        assert result == pytest.approx(calculate_1rm_brzycki(100, 7))

    def test_weighted_bodyweight_curve(self, service):
        result = service.calculate_estimated_1rm(
            20, 5, scaling_type=RMScalingType.WEIGHTED_BODYWEIGHT
        )
        assert result == pytest.approx(23.5)

    def test_isolation_curve_is_flattest(self, service):
        standard = service.calculate_estimated_1rm(30, 10)
        isolation = service.calculate_estimated_1rm(
            30, 10, scaling_type=RMScalingType.ISOLATION
        )
        assert isolation < standard

    def test_monotonic_in_weight(self, service):
        for reps in range(1, 16):
            for rpe in RPES:
                lighter = service.calculate_estimated_1rm(100, reps, rpe)
                heavier = service.calculate_estimated_1rm(102.5, reps, rpe)
                assert heavier >= lighter, (reps, rpe)

    def test_more_reps_at_same_weight_never_lowers_estimate(self, service):
        for rpe in RPES:
            estimates = [service.calculate_estimated_1rm(100, reps, rpe) for reps in range(1, 16)]
            assert estimates == sorted(estimates), rpe

    def test_deterministic(self, service):
        assert service.calculate_estimated_1rm(97.5, 6, 8.5) == service.calculate_estimated_1rm(
            97.5, 6, 8.5
        )


# =============================================================================
# Confidence Tests
# =============================================================================


class TestConfidence:
    """Tests for calculate_confidence."""

    def test_heavy_single_at_max_effort(self, service):
        assert service.calculate_confidence(1, 10, 1.0) == pytest.approx(1.0)

    def test_high_reps_no_rpe(self, service):
        # 0.5 * 1/15 + 0.3 * 0.3 + 0.2 * 0.5
        assert service.calculate_confidence(15, None, 0.5) == pytest.approx(0.22333, abs=1e-4)

    def test_low_rpe_uses_fallback_score(self, service):
        assert service.calculate_confidence(5, 5, 1.0) == service.calculate_confidence(
            5, None, 1.0
        )

    def test_zero_reps(self, service):
        assert service.calculate_confidence(0, 8, 1.0) == 0.0

    def test_load_clamped(self, service):
        assert service.calculate_confidence(3, 9, 1.4) == service.calculate_confidence(
            3, 9, 1.0
        )


# =============================================================================
# Update Gate Tests
# =============================================================================


class TestShouldUpdate:
    """Tests for should_update_one_rm."""

    def test_first_estimate_accepted(self, service):
        assert service.should_update_one_rm(make_set(100, 5, 8), None, 120) is True

    def test_not_an_improvement(self, service):
        assert service.should_update_one_rm(make_set(100, 3), 120, 110) is False

    def test_equal_estimate_rejected(self, service):
        assert service.should_update_one_rm(make_set(100, 3), 120, 120) is False

    def test_incomplete_set_rejected(self, service):
        assert service.should_update_one_rm(make_set(100, 5, completed=False), None, 120) is False

    def test_zero_weight_rejected(self, service):
        assert service.should_update_one_rm(make_set(0, 5), None, 10) is False

    def test_low_rpe_rejected(self, service):
        assert service.should_update_one_rm(make_set(100, 5, 5.5), None, 120) is False

    def test_load_gate_rejects_light_set(self, service):
        """A set at 50% of the current max never moves it, even if numerically higher."""
        assert service.should_update_one_rm(make_set(50, 5), 100, 150) is False

    def test_load_gate_allows_60_percent(self, service):
        assert service.should_update_one_rm(make_set(60, 5), 100, 150) is True

    def test_confidence_gate(self, service):
        """12 reps to failure at the current max is not confident enough."""
        assert service.should_update_one_rm(make_set(100, 12), 100, 150) is False

    def test_is_set_valid(self, service):
        assert service.is_set_valid_for_one_rm(make_set(100, 15, 6.0)) is True
        assert service.is_set_valid_for_one_rm(make_set(100, 16)) is False


# =============================================================================
# Record Creation Tests
# =============================================================================


class TestCreateOneRMRecord:
    """Tests for create_one_rm_record and build_context."""

    def test_new_record_from_set(self, service, clock):
        record = service.create_one_rm_record("squat", make_set(100, 5, 8), 121.5, 0.8)

        assert record.exercise_id == "squat"
        assert record.one_rm_estimate == 121.5
        assert record.one_rm_confidence == 0.8
        assert record.one_rm_type == OneRMType.AUTOMATICALLY_CALCULATED
        assert record.one_rm_date == clock()
        assert record.most_weight_lifted == 100
        assert record.most_weight_reps == 5
        assert record.most_weight_rpe == 8
        assert record.one_rm_context == "100kg × 5 @ RPE 8"

    def test_heavier_most_weight_carried_forward(self, service):
        current = make_current(one_rm=130, most_weight=140)
        record = service.create_one_rm_record("squat", make_set(120, 5, 9), 142, 0.8, current)

        assert record.most_weight_lifted == 140
        assert record.most_weight_reps == 1
        assert record.most_weight_date == current.most_weight_date
        assert record.user_id == "user-1"

    def test_heavier_set_replaces_most_weight(self, service):
        current = make_current(one_rm=130, most_weight=120)
        record = service.create_one_rm_record("squat", make_set(125, 3), 133, 0.8, current)

        assert record.most_weight_lifted == 125

    def test_context_without_rpe(self, service):
        assert service.build_context(102.5, 3, None) == "102.5kg × 3"

    def test_context_in_pounds(self, clock):
        from analytics.settings import Settings

        service = OneRMService(
            settings=Settings(environment="test", weight_unit="lb", _env_file=None),
            clock=clock,
        )
        assert service.build_context(225, 5, 8.5) == "225lb × 5 @ RPE 8.5"
