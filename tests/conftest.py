import os

# Must be set before app.core.config is imported anywhere
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["CREATE_TABLES_ON_STARTUP"] = "true"
os.environ["ENVIRONMENT"] = "test"

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from app.schemas.state import DailyLog

NOW = datetime(2026, 10, 18, 7, 30, tzinfo=timezone.utc)


def make_log(sleep: float = 8, rhr: float = 60, weight: float = 75, days_ago: float = 0) -> DailyLog:
    return DailyLog(date=NOW - timedelta(days=days_ago), weight=weight, sleep=sleep, rhr=rhr)


@pytest.fixture
def client():
    """Fresh in-memory database per test: lifespan creates tables, shutdown disposes the engine."""
    from app.main import app

    with TestClient(app) as c:
        yield c
