"""ORM Models — SQLAlchemy declarative models for persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Donation is the sole entity; no relationships

Design Decisions:
    - All models imported here so Base.metadata is complete before create_all
"""

from donation_tracker.models.donation import Donation  # noqa: F401
