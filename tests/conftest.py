"""
Shared pytest fixtures for the analytics tests.

Services are always built with an explicit Settings instance that ignores
any local .env file, and with a fixed clock so timestamps are stable.
"""
from datetime import datetime

import pytest

from analytics.settings import Settings
from tests.fakes import (
    FakeDeviationRepository,
    FakeExerciseMaxRepository,
    FakePerformanceRepository,
    FakePersonalRecordRepository,
    FakeProgrammeRepository,
    FakeWorkoutRepository,
)

FIXED_NOW = datetime(2024, 3, 1, 18, 30)


@pytest.fixture
def settings() -> Settings:
    return Settings(environment="test", _env_file=None)


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def workout_repo() -> FakeWorkoutRepository:
    return FakeWorkoutRepository()


@pytest.fixture
def programme_repo() -> FakeProgrammeRepository:
    return FakeProgrammeRepository()


@pytest.fixture
def performance_repo() -> FakePerformanceRepository:
    return FakePerformanceRepository()


@pytest.fixture
def exercise_max_repo() -> FakeExerciseMaxRepository:
    return FakeExerciseMaxRepository()


@pytest.fixture
def personal_record_repo() -> FakePersonalRecordRepository:
    return FakePersonalRecordRepository()


@pytest.fixture
def deviation_repo() -> FakeDeviationRepository:
    return FakeDeviationRepository()
