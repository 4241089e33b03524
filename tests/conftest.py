import os
from datetime import datetime, timedelta
from pathlib import Path

import pytest

os.environ.setdefault(
    "FOCUSFLOW_CONFIG", str(Path(__file__).parent / "config.test.toml")
)

from focusflow.models import FocusSession, SessionOutcome, Task  # noqa: E402

NOW = datetime(2024, 5, 15, 12, 0, 0)


class FakeClock:
    """Manually advanced clock"""

    def __init__(self, start: datetime = NOW):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_task():
    def _make_task(**overrides) -> Task:
        fields = {"title": "Write report", "priority_score": 50}
        fields.update(overrides)
        return Task(**fields)

    return _make_task


@pytest.fixture
def make_session():
    def _make_session(
        start_time: datetime = NOW,
        outcome: SessionOutcome = SessionOutcome.COMPLETED,
        intended: int = 25,
        actual=25,
        interruptions: int = 0,
        task_id: str = "task-1",
    ) -> FocusSession:
        return FocusSession(
            task_id=task_id,
            start_time=start_time,
            end_time=start_time + timedelta(minutes=actual or 0),
            intended_duration_minutes=intended,
            actual_duration_minutes=actual,
            interruptions_count=interruptions,
            outcome=outcome,
        )

    return _make_session


@pytest.fixture
def now():
    return NOW
