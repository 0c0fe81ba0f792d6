"""Donation Schemas — pydantic models for donation input and API output.

Invariants:
    - DonationCreate requires all four caller fields; DonationUpdate makes each optional
    - Every field check delegates to core/donation_rules.py (single source of truth)
    - donor_name is trimmed, date is normalized to YYYY-MM-DD, quantity becomes float
    - An explicit null in DonationUpdate is a violation, not "leave unchanged"
    - Unknown keys are ignored

Design Decisions:
    - BeforeValidator + PydanticCustomError over Field(min_length=...): messages
      match the Store's constraint messages word for word
    - Quantity must arrive as a JSON number: numeric strings are rejected
    - ApiEnvelope is the one response shape for every endpoint
"""

from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic_core import PydanticCustomError

from donation_tracker.core import donation_rules
from donation_tracker.core.domain_types import (
    DonationDraft, DonationPatch, DonationType,
)


def _rejected(kind: str, reason: str) -> PydanticCustomError:
    return PydanticCustomError(kind, "{reason}", {"reason": reason})


def _normalize_donor_name(value: Any) -> str:
    if not isinstance(value, str):
        raise _rejected(
            "string_type", donation_rules.expected_type_message("string", value),
        )
    problem = donation_rules.donor_name_problem(value)
    if problem:
        raise _rejected("donor_name", problem)
    return value.strip()


def _normalize_donation_type(value: Any) -> DonationType:
    if not isinstance(value, str):
        raise _rejected(
            "string_type", donation_rules.expected_type_message("string", value),
        )
    problem = donation_rules.donation_type_problem(value)
    if problem:
        raise _rejected("enum", problem)
    return DonationType(value)


def _normalize_quantity(value: Any) -> float:
    if not donation_rules.is_number(value):
        raise _rejected(
            "number_type", donation_rules.expected_type_message("number", value),
        )
    problem = donation_rules.quantity_problem(value)
    if problem:
        raise _rejected("quantity", problem)
    return float(value)


def _normalize_date(value: Any) -> str:
    if not isinstance(value, str):
        raise _rejected(
            "string_type", donation_rules.expected_type_message("string", value),
        )
    parsed = donation_rules.parse_calendar_date(value)
    if parsed is None:
        raise _rejected("date", donation_rules.INVALID_DATE)
    return parsed.isoformat()


DonorName = Annotated[str, BeforeValidator(_normalize_donor_name)]
DonationTypeField = Annotated[DonationType, BeforeValidator(_normalize_donation_type)]
Quantity = Annotated[float, BeforeValidator(_normalize_quantity)]
DonationDate = Annotated[str, BeforeValidator(_normalize_date)]


class DonationCreate(BaseModel):
    """Create payload — all fields required."""
    model_config = ConfigDict(extra="ignore")

    donor_name: DonorName
    donation_type: DonationTypeField
    quantity: Quantity
    date: DonationDate

    def to_draft(self) -> DonationDraft:
        return DonationDraft(
            donor_name=self.donor_name,
            donation_type=self.donation_type,
            quantity=self.quantity,
            date=self.date,
        )


class DonationUpdate(BaseModel):
    """Update payload — absent fields stay None and are left out of the patch.

    The before-validators run on any supplied value, including null, so an
    explicit null is reported instead of being mistaken for "absent".
    """
    model_config = ConfigDict(extra="ignore")

    donor_name: Annotated[str | None, BeforeValidator(_normalize_donor_name)] = None
    donation_type: Annotated[
        DonationType | None, BeforeValidator(_normalize_donation_type)
    ] = None
    quantity: Annotated[float | None, BeforeValidator(_normalize_quantity)] = None
    date: Annotated[str | None, BeforeValidator(_normalize_date)] = None

    def to_patch(self) -> DonationPatch:
        supplied = {name: getattr(self, name) for name in self.model_fields_set}
        return DonationPatch(**supplied)


class DonationOut(BaseModel):
    """Public donation representation — field names exactly as stored."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    donor_name: str
    donation_type: DonationType
    quantity: float
    date: str
    created_at: datetime
    updated_at: datetime


class ApiEnvelope(BaseModel):
    """Uniform response body: {success, data?, message?, errors?}."""
    success: bool
    data: Any = None
    message: str | None = None
    errors: list[str] | None = None
