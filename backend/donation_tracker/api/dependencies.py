"""Route Dependencies — hands the application's DonationStore to route handlers.

Invariants:
    - The store is created once by the lifespan and kept on app.state
    - Tests replace it with app.dependency_overrides[get_store]
"""

from fastapi import Request

from donation_tracker.core.repository_protocols import DonationRepository


def get_store(request: Request) -> DonationRepository:
    """FastAPI dependency for the donation store."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError("Donation store not initialized")
    return store
