"""Root conftest — shared test configuration and the DonationStore fixture."""

import os

import pytest

# Tests never touch a real database file unless they ask for one
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")

from donation_tracker.services.donation_store import DonationStore  # noqa: E402


@pytest.fixture
async def store():
    """Fresh in-memory store per test; schema created, closed afterwards."""
    store = DonationStore.from_url("sqlite+aiosqlite:///:memory:")
    await store.initialize()
    yield store
    await store.close()


@pytest.fixture
def valid_payload():
    return {
        "donor_name": "A. Smith",
        "donation_type": "food",
        "quantity": 12,
        "date": "2024-03-01",
    }
