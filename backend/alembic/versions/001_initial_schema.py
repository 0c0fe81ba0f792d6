"""Initial schema — donations table with rule CHECKs and lookup indexes.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "donations",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("donor_name", sa.String(100), nullable=False),
        sa.Column("donation_type", sa.String(20), nullable=False),
        sa.Column("quantity", sa.Float, nullable=False),
        sa.Column("date", sa.String(10), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "length(trim(donor_name)) >= 2 AND length(trim(donor_name)) <= 100",
            name="ck_donations_donor_name_length",
        ),
        sa.CheckConstraint(
            "donation_type IN ('money', 'food', 'clothing', 'toys', "
            "'books', 'household', 'other')",
            name="ck_donations_donation_type",
        ),
        sa.CheckConstraint(
            "quantity > 0 AND quantity <= 1000000",
            name="ck_donations_quantity_range",
        ),
        sa.CheckConstraint(
            "updated_at >= created_at",
            name="ck_donations_timestamps_ordered",
        ),
        sqlite_autoincrement=True,
    )
    op.create_index("idx_donations_date", "donations", ["date"])
    op.create_index("idx_donations_type", "donations", ["donation_type"])
    op.create_index("idx_donations_created", "donations", ["created_at"])


def downgrade() -> None:
    op.drop_index("idx_donations_created", table_name="donations")
    op.drop_index("idx_donations_type", table_name="donations")
    op.drop_index("idx_donations_date", table_name="donations")
    op.drop_table("donations")
