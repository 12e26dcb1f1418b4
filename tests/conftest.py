"""공용 테스트 픽스처"""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from practice_session.services import (
    InMemorySessionStorage,
    ManualTicker,
    PracticeSessionController,
)
from yoga_recommendation.services import ExerciseCatalog, RecommendationResolver

CATALOG_PATH = Path(__file__).parent.parent / "data" / "yoga" / "catalog.json"


class FakeClock:
    """호출마다 1초씩 증가하는 시계"""

    def __init__(self, start: datetime = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)):
        self.now = start
        self.calls = 0

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        self.calls += 1
        return current


@pytest.fixture
def small_catalog() -> ExerciseCatalog:
    return ExerciseCatalog.from_mapping(
        {
            "_metadata": {"version": "test"},
            "catalog": {
                "back_pain": [
                    {"name": "Cat-Cow Pose", "instructions": "Alternate arching."},
                    {"name": "Child's Pose", "duration_seconds": 120},
                ],
                "stress": [
                    {"name": "Child's Pose"},
                ],
            },
        },
        default_duration_seconds=300,
    )


@pytest.fixture
def default_catalog() -> ExerciseCatalog:
    return ExerciseCatalog.from_file(CATALOG_PATH)


@pytest.fixture
def resolver(default_catalog) -> RecommendationResolver:
    return RecommendationResolver(default_catalog)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def ticker() -> ManualTicker:
    return ManualTicker()


@pytest.fixture
def storage() -> InMemorySessionStorage:
    return InMemorySessionStorage()


@pytest.fixture
def controller(storage, ticker, clock) -> PracticeSessionController:
    return PracticeSessionController(
        recorder=storage,
        ticker=ticker,
        user_id="user_123",
        clock=clock,
    )
