"""Global pytest fixtures for the competition lifecycle service.

This module provides shared fixtures for testing including:
- A fixed clock and an in-memory competition store
- Mock async database sessions for store unit tests
- An httpx client bound to the FastAPI app
"""

from collections.abc import AsyncGenerator
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from eliterank.lifecycle.clock import FixedClock
from eliterank.lifecycle.service import LifecycleService
from eliterank.lifecycle.store import InMemoryCompetitionStore

# ===========================================
# CLOCK AND STORE FIXTURES
# ===========================================


@pytest.fixture
def clock() -> FixedClock:
    """A clock parked before any competition timeline begins."""
    return FixedClock(datetime(2026, 2, 15, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def store() -> InMemoryCompetitionStore:
    return InMemoryCompetitionStore()


@pytest.fixture
def service(store: InMemoryCompetitionStore, clock: FixedClock) -> LifecycleService:
    return LifecycleService(store, clock)


# ===========================================
# DATABASE SESSION FIXTURES
# ===========================================


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncMock, None]:
    """Create a mock async database session for unit tests."""
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.flush = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()

    session.__aenter__ = AsyncMock(return_value=session)
    session.__aexit__ = AsyncMock(return_value=None)

    yield session


# ===========================================
# HTTP CLIENT FIXTURES
# ===========================================


@pytest_asyncio.fixture
async def client(
    store: InMemoryCompetitionStore,
    clock: FixedClock,
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for the app with the store and clock swapped for test doubles.

    The lifespan is not run, so no database or background loop is started.
    """
    from eliterank.main import app
    from eliterank.routes.competitions import get_clock, get_store

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_clock] = lambda: clock

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
