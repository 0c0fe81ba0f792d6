"""API test fixtures — httpx client against the FastAPI app.

Invariants:
    - get_store overridden with the per-test in-memory store
    - Lifespan is not run by ASGITransport; the override replaces it

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
"""

import pytest
from httpx import ASGITransport, AsyncClient

from donation_tracker.api.dependencies import get_store
from donation_tracker.main import app


@pytest.fixture
async def client(store):
    """FastAPI test client with the store dependency overridden."""
    app.dependency_overrides[get_store] = lambda: store
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()
