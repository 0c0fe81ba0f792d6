"""Donation Field Rules — pure predicates shared by the Validator and the Store.

Invariants:
    - Every predicate returns None when the value is acceptable, else a
      human-readable message (never raises)
    - donor_name is judged AFTER trimming surrounding whitespace
    - quantity bounds: 0 < q <= MAX_QUANTITY (NaN is never positive)
    - find_violations checks every supplied field; it never stops at the first

Design Decisions:
    - One module for both layers: the Validator rejects early for good error
      messages, the Store re-checks as the final authority, and both produce
      identical "field: message" strings
"""

import re
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from donation_tracker.core.domain_types import (
    DONATION_TYPE_VALUES,
    MAX_DONOR_NAME_LENGTH,
    MAX_QUANTITY,
    MIN_DONOR_NAME_LENGTH,
)


DONOR_NAME_TOO_SHORT = (
    f"Donor name must be at least {MIN_DONOR_NAME_LENGTH} characters"
)
DONOR_NAME_TOO_LONG = (
    f"Donor name must be less than {MAX_DONOR_NAME_LENGTH} characters"
)
QUANTITY_NOT_POSITIVE = "Quantity must be a positive number"
QUANTITY_TOO_LARGE = "Quantity seems too large"
INVALID_DATE = "Please provide a valid date"
INVALID_DONATION_ID = "Invalid donation ID"

# Extended calendar form, optionally with a time part
_CALENDAR_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}(?:[T ].+)?")

# Largest signed 64-bit integer: the widest id SQLite and PostgreSQL BIGINT hold
MAX_DONATION_ID = 2**63 - 1


def received_type_name(value: Any) -> str:
    """JSON-ish type name used in 'Expected X, received Y' messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__


def expected_type_message(expected: str, value: Any) -> str:
    return f"Expected {expected}, received {received_type_name(value)}"


def is_number(value: Any) -> bool:
    """True for int/float, False for bool (bool is an int subclass)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_valid_donation_id(value: Any) -> bool:
    """Positive int only; bool, float and str are rejected."""
    return (
        isinstance(value, int) and not isinstance(value, bool)
        and 0 < value <= MAX_DONATION_ID
    )


def donor_name_problem(donor_name: str) -> str | None:
    length = len(donor_name.strip())
    if length < MIN_DONOR_NAME_LENGTH:
        return DONOR_NAME_TOO_SHORT
    if length > MAX_DONOR_NAME_LENGTH:
        return DONOR_NAME_TOO_LONG
    return None


def donation_type_problem(donation_type: str) -> str | None:
    if donation_type in DONATION_TYPE_VALUES:
        return None
    expected = " | ".join(f"'{v}'" for v in DONATION_TYPE_VALUES)
    received = getattr(donation_type, "value", donation_type)
    return f"Invalid enum value. Expected {expected}, received '{received}'"


def quantity_problem(quantity: float) -> str | None:
    if not quantity > 0:
        return QUANTITY_NOT_POSITIVE
    if quantity > MAX_QUANTITY:
        return QUANTITY_TOO_LARGE
    return None


def parse_calendar_date(raw: str) -> date | None:
    """Parse YYYY-MM-DD, optionally followed by an ISO time, into a calendar date.

    Week dates (2024-W10-5), ordinal dates and the compact 20240301 form are
    valid ISO 8601 but rejected: only the extended calendar form is accepted.
    """
    text = raw.strip()
    if not _CALENDAR_DATE.fullmatch(text):
        return None
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def date_problem(raw: str) -> str | None:
    return None if parse_calendar_date(raw) else INVALID_DATE


def find_violations(values: Mapping[str, Any]) -> list[str]:
    """Check every known field present in `values`. Pure, never raises."""
    violations: list[str] = []

    if "donor_name" in values:
        name = values["donor_name"]
        problem = (
            donor_name_problem(name) if isinstance(name, str)
            else expected_type_message("string", name)
        )
        if problem:
            violations.append(f"donor_name: {problem}")

    if "donation_type" in values:
        kind = values["donation_type"]
        problem = (
            donation_type_problem(kind) if isinstance(kind, str)
            else expected_type_message("string", kind)
        )
        if problem:
            violations.append(f"donation_type: {problem}")

    if "quantity" in values:
        quantity = values["quantity"]
        problem = (
            quantity_problem(quantity) if is_number(quantity)
            else expected_type_message("number", quantity)
        )
        if problem:
            violations.append(f"quantity: {problem}")

    if "date" in values:
        raw_date = values["date"]
        problem = (
            date_problem(raw_date) if isinstance(raw_date, str)
            else expected_type_message("string", raw_date)
        )
        if problem:
            violations.append(f"date: {problem}")

    return violations
