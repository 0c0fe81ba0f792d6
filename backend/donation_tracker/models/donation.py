"""Donation ORM — persists donation records in the `donations` table.

Invariants:
    - id is an AUTOINCREMENT integer primary key: never reused after delete
    - CHECK constraints mirror core/donation_rules.py so the database itself
      refuses rows the Store should never have sent
    - created_at <= updated_at at the row level
    - Secondary indexes on date, donation_type and created_at

Design Decisions:
    - Timestamps assigned by the Store, not column defaults: created_at and
      updated_at must be the identical value on insert
    - donation_type stored as plain String + CHECK instead of a native ENUM:
      same DDL on SQLite and PostgreSQL
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Float, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from donation_tracker.core.domain_types import (
    DONATION_TYPE_VALUES,
    MAX_DONOR_NAME_LENGTH,
    MAX_QUANTITY,
    MIN_DONOR_NAME_LENGTH,
)
from donation_tracker.db.base import Base


_TYPE_LIST = ", ".join(f"'{v}'" for v in DONATION_TYPE_VALUES)


class Donation(Base):
    """Donation entity — one row per recorded donation."""
    __tablename__ = "donations"
    __table_args__ = (
        CheckConstraint(
            f"length(trim(donor_name)) >= {MIN_DONOR_NAME_LENGTH} "
            f"AND length(trim(donor_name)) <= {MAX_DONOR_NAME_LENGTH}",
            name="ck_donations_donor_name_length",
        ),
        CheckConstraint(
            f"donation_type IN ({_TYPE_LIST})",
            name="ck_donations_donation_type",
        ),
        CheckConstraint(
            f"quantity > 0 AND quantity <= {int(MAX_QUANTITY)}",
            name="ck_donations_quantity_range",
        ),
        CheckConstraint(
            "updated_at >= created_at",
            name="ck_donations_timestamps_ordered",
        ),
        Index("idx_donations_date", "date"),
        Index("idx_donations_type", "donation_type"),
        Index("idx_donations_created", "created_at"),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    donor_name: Mapped[str] = mapped_column(
        String(MAX_DONOR_NAME_LENGTH), nullable=False,
    )
    donation_type: Mapped[str] = mapped_column(String(20), nullable=False)
    quantity: Mapped[float] = mapped_column(Float, nullable=False)
    date: Mapped[str] = mapped_column(String(10), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
