"""Domain Types — verifies the donation categories, ABSENT marker and patch shape.

Tests:
    - DonationType has exactly the seven categories and serializes to string
    - DonationPatch reports only supplied fields, in declaration order
    - Records and drafts are immutable
"""

import dataclasses
from datetime import datetime, timezone

import pytest

from donation_tracker.core.domain_types import (
    ABSENT, DONATION_TYPE_VALUES, PATCHABLE_FIELDS,
    DonationDraft, DonationId, DonationPatch, DonationRecord, DonationType,
)


def test_donation_type_has_seven_categories():
    assert DONATION_TYPE_VALUES == (
        "money", "food", "clothing", "toys", "books", "household", "other",
    )


def test_donation_type_is_a_string():
    assert DonationType.FOOD == "food"
    assert DonationType("books") is DonationType.BOOKS


def test_donation_id_wraps_int():
    assert DonationId(7) == 7


def test_empty_patch_has_no_present_fields():
    patch = DonationPatch()
    assert patch.present_fields() == {}
    assert patch.is_empty


def test_patch_reports_only_supplied_fields():
    patch = DonationPatch(date="2024-03-02", quantity=20.0)
    assert patch.present_fields() == {"quantity": 20.0, "date": "2024-03-02"}
    assert not patch.is_empty
    assert patch.donor_name is ABSENT


def test_patchable_fields_are_the_four_caller_fields():
    assert PATCHABLE_FIELDS == ("donor_name", "donation_type", "quantity", "date")


def test_absent_repr_is_readable():
    assert repr(ABSENT) == "ABSENT"


def test_draft_as_fields():
    draft = DonationDraft("Ann", DonationType.MONEY, 5.0, "2024-01-01")
    assert draft.as_fields() == {
        "donor_name": "Ann",
        "donation_type": DonationType.MONEY,
        "quantity": 5.0,
        "date": "2024-01-01",
    }


def test_record_is_frozen():
    now = datetime.now(timezone.utc)
    record = DonationRecord(
        DonationId(1), "Ann", DonationType.TOYS, 3.0, "2024-01-01", now, now,
    )
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.quantity = 4.0
