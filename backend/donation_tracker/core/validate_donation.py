"""Donation Validator — turns an untrusted field map into a normalized draft or patch.

Invariants:
    - Pure: no IO, no state, same input -> same outcome
    - Never short-circuits: ValidationFailed lists every violated field
    - Error strings are "field: message"; missing fields read "field: Required"
    - validate_update with no known field -> InvalidArgument, not ValidationFailed
    - Never raises for bad input

Design Decisions:
    - pydantic models (schemas/donation.py) do the per-field work; this module
      only adapts their ValidationError into outcome values
    - parse_donation_id lives here because path ids arrive as untrusted text too
"""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from donation_tracker.core import donation_rules
from donation_tracker.core.domain_types import (
    PATCHABLE_FIELDS, DonationDraft, DonationId, DonationPatch,
)
from donation_tracker.core.outcomes import InvalidArgument, Ok, ValidationFailed
from donation_tracker.schemas.donation import DonationCreate, DonationUpdate


NO_FIELDS_SUPPLIED = "No fields supplied for update"


def validate_create(payload: Any) -> Ok[DonationDraft] | ValidationFailed:
    """Validate a create payload. All four caller fields are required."""
    if not isinstance(payload, Mapping):
        return _not_an_object(payload)
    try:
        body = DonationCreate.model_validate(dict(payload))
    except ValidationError as exc:
        return ValidationFailed(errors=format_validation_errors(exc.errors()))
    return Ok(body.to_draft())


def validate_update(
    payload: Any,
) -> Ok[DonationPatch] | ValidationFailed | InvalidArgument:
    """Validate a partial update. Rules apply only to the fields present."""
    if not isinstance(payload, Mapping):
        return _not_an_object(payload)
    if not any(name in payload for name in PATCHABLE_FIELDS):
        return InvalidArgument(NO_FIELDS_SUPPLIED)
    try:
        body = DonationUpdate.model_validate(dict(payload))
    except ValidationError as exc:
        return ValidationFailed(errors=format_validation_errors(exc.errors()))
    return Ok(body.to_patch())


def parse_donation_id(raw: Any) -> Ok[DonationId] | InvalidArgument:
    """Accept a positive int or a string of ASCII digits (path parameters)."""
    candidate = raw
    if isinstance(raw, str):
        text = raw.strip()
        if not (text.isascii() and text.isdigit()):
            return InvalidArgument(donation_rules.INVALID_DONATION_ID)
        candidate = int(text)
    if not donation_rules.is_valid_donation_id(candidate):
        return InvalidArgument(donation_rules.INVALID_DONATION_ID)
    return Ok(DonationId(candidate))


def format_validation_errors(errors: list[dict]) -> tuple[str, ...]:
    """Flatten pydantic error dicts into "field: message" strings."""
    return tuple(_format_error(error) for error in errors)


def _format_error(error: dict) -> str:
    field = ".".join(str(loc) for loc in error.get("loc", ())) or "body"
    message = "Required" if error.get("type") == "missing" else error["msg"]
    return f"{field}: {message}"


def _not_an_object(payload: Any) -> ValidationFailed:
    message = donation_rules.expected_type_message("object", payload)
    return ValidationFailed(errors=(f"body: {message}",))
