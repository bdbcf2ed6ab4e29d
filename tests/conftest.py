from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from task_manager_api.app.settings import Settings
from task_manager_api.app.storage import InMemoryTaskStore
from task_manager_api.main import create_app

FIXED_NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


class FakeClock:
    """Manually advanced clock so timestamps can be asserted exactly."""

    def __init__(self, start: datetime = FIXED_NOW) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta: float) -> datetime:
        self.now = self.now + timedelta(**delta)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> InMemoryTaskStore:
    return InMemoryTaskStore(max_records=1000)


@pytest.fixture
def client(store: InMemoryTaskStore) -> Iterator[TestClient]:
    app = create_app(store=store, settings_override=Settings(app_name="task-manager-test"))
    with TestClient(app) as test_client:
        yield test_client


def future_iso(days: int = 1) -> str:
    return (datetime.now(tz=UTC) + timedelta(days=days)).isoformat()
