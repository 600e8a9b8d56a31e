"""
Shared fixtures and test doubles.
"""
from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from launchpad_bookings.clock import Clock
from launchpad_bookings.models.database import Base


class FixedClock(Clock):
    """Clock that always returns the same instant."""

    def __init__(self, now: datetime):
        self._now = now

    def now(self) -> datetime:
        return self._now


@pytest.fixture
def fixed_now():
    """The instant used by time-dependent tests."""
    return datetime(2025, 12, 1, 0, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock(fixed_now):
    """Clock fixed at fixed_now."""
    return FixedClock(fixed_now)


@pytest.fixture
def test_engine():
    """Create test database engine."""
    engine = create_engine(
        "sqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False}
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    """Session factory bound to the test engine."""
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=test_engine)


@pytest.fixture
def test_session(session_factory):
    """Create test database session."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()
