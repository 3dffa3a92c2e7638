"""Shared pytest fixtures."""

from datetime import UTC, datetime, timedelta

import pytest

from tictactoe.config import Config
from tictactoe.core.modules.user.models import User
from tictactoe.core.store import DB_FILE_NAME, PersistentStore


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += timedelta(seconds=seconds)


@pytest.fixture
def clock():
    """Create a controllable clock."""
    return FakeClock(datetime(2024, 1, 1, 12, 0, tzinfo=UTC))


@pytest.fixture
def store(tmp_path):
    """Create a store backed by a file in a temporary directory."""
    return PersistentStore(tmp_path / DB_FILE_NAME)


@pytest.fixture
def config(tmp_path):
    """Create a config pointing at a temporary data directory."""
    return Config(
        data_dir=str(tmp_path),
        login_code_sweep_interval_seconds=0.05,
        login_rate_limit=3,
        login_rate_window_seconds=60,
    )


@pytest.fixture
def mock_user():
    """Create a mock user for testing."""
    return User(id="user-1", nickname="alice", secret="alice-secret")
