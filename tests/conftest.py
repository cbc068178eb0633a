"""Shared test fixtures for the task dashboard tests."""

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Ensure the repository root is importable
sys.path.insert(0, str(Path(__file__).parent.parent))

from taskdash.config import Config
from taskdash.store import MemStorage
from taskdash_server import create_app


FIXED_NOW = datetime(2025, 3, 14, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Callable clock that tests can move forward."""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    """Store seeded with the demo user and the four sample tasks."""
    return MemStorage()


@pytest.fixture
def empty_store(clock):
    return MemStorage(seed=False, clock=clock)


@pytest.fixture
def client(store):
    app = create_app(store, Config())
    app.testing = True
    return app.test_client()
