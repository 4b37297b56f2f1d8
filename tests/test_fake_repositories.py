"""
Unit tests for fake repository implementations.

These tests verify that fake repositories:
- Support seeding and reset for test isolation
- Return expected values for all operations
- Honour the failure switches used by use case tests
"""
import pytest
from datetime import datetime

from domain.models import (
    ExerciseLog,
    ExerciseMaxEstimate,
    PersonalRecord,
    PRType,
    Programme,
    ProgrammeSnapshot,
    Workout,
)
from tests.fakes import (
    FakeExerciseMaxRepository,
    FakePersonalRecordRepository,
    FakeProgrammeRepository,
    FakeWorkoutRepository,
    create_performance_repo,
)

# All tests in this module are pure logic tests - mark as unit
pytestmark = pytest.mark.unit


# =============================================================================
# FakeWorkoutRepository Tests
# =============================================================================


class TestFakeWorkoutRepository:
    """Tests for FakeWorkoutRepository."""

    def test_logs_sorted_by_order(self):
        repo = FakeWorkoutRepository()
        repo.seed_exercise_logs(
            "w1",
            [ExerciseLog(id="b", exercise_order=1), ExerciseLog(id="a", exercise_order=0)],
        )
        assert [log.id for log in repo.get_exercise_logs("w1")] == ["a", "b"]

    def test_reset(self):
        repo = FakeWorkoutRepository()
        repo.seed_workout(Workout(id="w1"))
        repo.reset()
        assert repo.get_workout("w1") is None
        assert repo.get_exercise_logs("w1") == []


# =============================================================================
# FakeProgrammeRepository Tests
# =============================================================================


class TestFakeProgrammeRepository:
    """Tests for FakeProgrammeRepository."""

    def test_snapshot_from_programme(self):
        repo = FakeProgrammeRepository()
        snapshot = ProgrammeSnapshot(programme_name="A")
        repo.seed_programme(Programme(id="p1", immutable_snapshot=snapshot))
        assert repo.get_immutable_snapshot("p1") == snapshot

    def test_seeded_snapshot_overrides(self):
        repo = FakeProgrammeRepository()
        repo.seed_programme(Programme(id="p1", immutable_snapshot=ProgrammeSnapshot(programme_name="A")))
        repo.seed_snapshot("p1", ProgrammeSnapshot(programme_name="B"))
        assert repo.get_immutable_snapshot("p1").programme_name == "B"

    def test_missing(self):
        assert FakeProgrammeRepository().get_immutable_snapshot("nope") is None


# =============================================================================
# FakePerformanceRepository Tests
# =============================================================================


class TestFakePerformanceRepository:
    """Tests for FakePerformanceRepository and create_performance_repo."""

    def test_recent_first(self):
        repo = create_performance_repo(outcomes=[True, False])
        recent = repo.get_recent_performance("prog-1", "Squat")
        assert [r.workout_id for r in recent] == ["w-2", "w-1"]

    def test_name_lookup_case_insensitive(self):
        repo = create_performance_repo(outcomes=[True])
        assert len(repo.get_recent_performance("prog-1", "SQUAT")) == 1

    def test_consecutive_failures(self):
        repo = create_performance_repo(outcomes=[False, True, False, False])
        assert repo.get_consecutive_failures("prog-1", "Squat") == 2

    def test_last_success(self):
        repo = create_performance_repo(outcomes=[True, True, False])
        assert repo.get_last_success("prog-1", "Squat").workout_id == "w-2"

    def test_no_deloads(self):
        repo = create_performance_repo(outcomes=[True])
        assert repo.get_last_deload("prog-1", "Squat") is None
        assert repo.get_total_deloads("prog-1", "Squat") == 0

    def test_fail_inserts(self):
        repo = create_performance_repo(outcomes=[True])
        record = repo.get_all()[0]
        repo.fail_inserts = True
        assert repo.insert_performance_record(record) is False
        assert len(repo.get_all()) == 1


# =============================================================================
# FakeExerciseMaxRepository Tests
# =============================================================================


class TestFakeExerciseMaxRepository:
    """Tests for FakeExerciseMaxRepository."""

    def _estimate(self, one_rm):
        when = datetime(2024, 1, 1)
        return ExerciseMaxEstimate(
            exercise_id="bench",
            most_weight_lifted=one_rm,
            most_weight_reps=1,
            most_weight_date=when,
            one_rm_estimate=one_rm,
            one_rm_confidence=1.0,
            one_rm_date=when,
        )

    def test_latest_is_current(self):
        repo = FakeExerciseMaxRepository()
        repo.seed(self._estimate(100))
        repo.save_estimate(self._estimate(105))
        assert repo.get_historical_max("bench") == 105
        assert len(repo.get_saved("bench")) == 2

    def test_name_lookup(self):
        repo = FakeExerciseMaxRepository()
        repo.seed(self._estimate(100), exercise_name="Bench Press")
        assert repo.get_one_rm_for_exercise_name("bench press") == 100
        assert repo.get_one_rm_for_exercise_name("Squat") is None


# =============================================================================
# FakePersonalRecordRepository Tests
# =============================================================================


class TestFakePersonalRecordRepository:
    """Tests for FakePersonalRecordRepository."""

    def _record(self, weight, workout_id="w1"):
        return PersonalRecord(
            exercise_id="squat",
            workout_id=workout_id,
            weight=weight,
            reps=5,
            record_date=datetime(2024, 1, 1),
        )

    def test_ids_assigned(self):
        repo = FakePersonalRecordRepository()
        repo.seed([self._record(100)])
        assert repo.get_all()[0].id is not None

    def test_max_and_latest(self):
        repo = FakePersonalRecordRepository()
        repo.seed([self._record(110, "w0"), self._record(100, "w1")])
        assert repo.get_max_weight_for_exercise("squat") == 110
        assert repo.get_latest_record("squat", PRType.WEIGHT).weight == 100

    def test_replace_records_atomic(self):
        repo = FakePersonalRecordRepository()
        repo.seed([self._record(100)])
        old_id = repo.get_all()[0].id

        assert repo.replace_records([old_id], [self._record(105)]) is True
        assert [r.weight for r in repo.get_all()] == [105]
        assert repo.get_record_for_workout("w1", "squat", PRType.WEIGHT).weight == 105

    def test_failed_replace_changes_nothing(self):
        repo = FakePersonalRecordRepository()
        repo.seed([self._record(100)])
        repo.fail_writes = True

        assert repo.replace_records([repo.get_all()[0].id], [self._record(105)]) is False
        assert [r.weight for r in repo.get_all()] == [100]
