"""Donation Field Rules — verifies the shared predicates used by Validator and Store.

Tests:
    - donor_name judged after trimming, bounds 2..100
    - quantity bounds 0 < q <= 1,000,000, NaN rejected
    - dates parsed from ISO date or datetime text
    - find_violations reports every bad field, never just the first
"""

import math

import pytest

from donation_tracker.core import donation_rules
from donation_tracker.core.donation_rules import (
    DONOR_NAME_TOO_LONG, DONOR_NAME_TOO_SHORT, INVALID_DATE,
    QUANTITY_NOT_POSITIVE, QUANTITY_TOO_LARGE,
)


# ─── donor_name ──────────────────────────────────────────────────

@pytest.mark.parametrize("name", ["Al", "A. Smith", "x" * 100, "  Al  "])
def test_donor_name_accepts_valid_lengths(name):
    assert donation_rules.donor_name_problem(name) is None


@pytest.mark.parametrize("name", ["", "X", "  X  ", "   "])
def test_donor_name_too_short_after_trim(name):
    assert donation_rules.donor_name_problem(name) == DONOR_NAME_TOO_SHORT


def test_donor_name_too_long():
    assert donation_rules.donor_name_problem("x" * 101) == DONOR_NAME_TOO_LONG


def test_donor_name_messages():
    assert DONOR_NAME_TOO_SHORT == "Donor name must be at least 2 characters"
    assert DONOR_NAME_TOO_LONG == "Donor name must be less than 100 characters"


# ─── donation_type ───────────────────────────────────────────────

def test_known_donation_type_accepted():
    assert donation_rules.donation_type_problem("household") is None


def test_unknown_donation_type_lists_expected_values():
    problem = donation_rules.donation_type_problem("cash")
    assert problem == (
        "Invalid enum value. Expected 'money' | 'food' | 'clothing' | "
        "'toys' | 'books' | 'household' | 'other', received 'cash'"
    )


def test_donation_type_is_case_sensitive():
    assert donation_rules.donation_type_problem("Food") is not None


# ─── quantity ────────────────────────────────────────────────────

@pytest.mark.parametrize("quantity", [0.01, 1, 12, 1_000_000, 999_999.99])
def test_quantity_in_range(quantity):
    assert donation_rules.quantity_problem(quantity) is None


@pytest.mark.parametrize("quantity", [0, -1, -0.5, math.nan])
def test_quantity_not_positive(quantity):
    assert donation_rules.quantity_problem(quantity) == QUANTITY_NOT_POSITIVE


@pytest.mark.parametrize("quantity", [1_000_000.01, 10**30, math.inf])
def test_quantity_too_large(quantity):
    assert donation_rules.quantity_problem(quantity) == QUANTITY_TOO_LARGE


def test_is_number_excludes_bool_and_strings():
    assert donation_rules.is_number(3)
    assert donation_rules.is_number(3.5)
    assert not donation_rules.is_number(True)
    assert not donation_rules.is_number("3")
    assert not donation_rules.is_number(None)


# ─── date ────────────────────────────────────────────────────────

def test_parse_plain_date():
    assert donation_rules.parse_calendar_date("2024-03-01").isoformat() == "2024-03-01"


def test_parse_datetime_keeps_calendar_day():
    parsed = donation_rules.parse_calendar_date("2024-03-01T10:30:00Z")
    assert parsed.isoformat() == "2024-03-01"


@pytest.mark.parametrize("raw", ["2024-W10-5", "2024-W10", "2024-061", "20240301"])
def test_only_extended_calendar_form_accepted(raw):
    assert donation_rules.parse_calendar_date(raw) is None
    assert donation_rules.date_problem(raw) == INVALID_DATE


@pytest.mark.parametrize("raw", ["", "   ", "yesterday", "2024-02-30", "2024-13-01"])
def test_invalid_dates(raw):
    assert donation_rules.parse_calendar_date(raw) is None
    assert donation_rules.date_problem(raw) == INVALID_DATE


# ─── ids ─────────────────────────────────────────────────────────

@pytest.mark.parametrize("value", [1, 42, 2**63 - 1])
def test_valid_donation_ids(value):
    assert donation_rules.is_valid_donation_id(value)


@pytest.mark.parametrize("value", [0, -1, 2**63, True, 1.0, "1", None])
def test_invalid_donation_ids(value):
    assert not donation_rules.is_valid_donation_id(value)


# ─── find_violations ─────────────────────────────────────────────

def test_find_violations_clean_record():
    values = {
        "donor_name": "A. Smith", "donation_type": "food",
        "quantity": 12, "date": "2024-03-01",
    }
    assert donation_rules.find_violations(values) == []


def test_find_violations_reports_every_field():
    values = {
        "donor_name": "X", "donation_type": "cash",
        "quantity": 0, "date": "not a date",
    }
    violations = donation_rules.find_violations(values)
    assert len(violations) == 4
    assert violations[0] == f"donor_name: {DONOR_NAME_TOO_SHORT}"
    assert violations[1].startswith("donation_type: Invalid enum value.")
    assert violations[2] == f"quantity: {QUANTITY_NOT_POSITIVE}"
    assert violations[3] == f"date: {INVALID_DATE}"


def test_find_violations_checks_only_present_fields():
    assert donation_rules.find_violations({"quantity": 20}) == []


def test_find_violations_reports_wrong_types():
    violations = donation_rules.find_violations(
        {"donor_name": None, "quantity": "12", "date": 20240301},
    )
    assert violations == [
        "donor_name: Expected string, received null",
        "quantity: Expected number, received string",
        "date: Expected string, received number",
    ]
