"""Donation Routes — CRUD endpoints over the DonationStore.

Invariants:
    - Every body passes the Validator before it reaches the Store
    - Path ids are parsed once here; the Store only ever sees integers
    - delete of a missing id (Ok(False)) answers 404, same as get/update

Design Decisions:
    - Body typed as Any: the Validator owns shape checking, so a non-object
      body yields the same ValidationFailed envelope as a bad field
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, status

from donation_tracker.api.dependencies import get_store
from donation_tracker.api.envelope import (
    envelope_response, failure_response, outcome_response,
)
from donation_tracker.core.outcomes import NotFound, Ok
from donation_tracker.core.repository_protocols import DonationRepository
from donation_tracker.core.validate_donation import (
    parse_donation_id, validate_create, validate_update,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/donations", tags=["donations"])


@router.get("")
async def list_donations(store: DonationRepository = Depends(get_store)):
    outcome = await store.list_all()
    message = (
        f"Retrieved {len(outcome.value)} donations"
        if isinstance(outcome, Ok) else ""
    )
    return outcome_response(outcome, message)


@router.post("")
async def create_donation(
    payload: Any = Body(None),
    store: DonationRepository = Depends(get_store),
):
    checked = validate_create(payload)
    if not isinstance(checked, Ok):
        return failure_response(checked)
    outcome = await store.create(checked.value)
    return outcome_response(
        outcome, "Donation created successfully", status.HTTP_201_CREATED,
    )


@router.get("/{donation_id}")
async def get_donation(
    donation_id: str, store: DonationRepository = Depends(get_store),
):
    parsed = parse_donation_id(donation_id)
    if not isinstance(parsed, Ok):
        return failure_response(parsed)
    outcome = await store.get_by_id(parsed.value)
    return outcome_response(outcome, "Donation retrieved successfully")


@router.put("/{donation_id}")
async def update_donation(
    donation_id: str,
    payload: Any = Body(None),
    store: DonationRepository = Depends(get_store),
):
    parsed = parse_donation_id(donation_id)
    if not isinstance(parsed, Ok):
        return failure_response(parsed)
    checked = validate_update(payload)
    if not isinstance(checked, Ok):
        return failure_response(checked)
    outcome = await store.update(parsed.value, checked.value)
    return outcome_response(outcome, "Donation updated successfully")


@router.delete("/{donation_id}")
async def delete_donation(
    donation_id: str, store: DonationRepository = Depends(get_store),
):
    parsed = parse_donation_id(donation_id)
    if not isinstance(parsed, Ok):
        return failure_response(parsed)
    outcome = await store.delete(parsed.value)
    if not isinstance(outcome, Ok):
        return failure_response(outcome)
    if not outcome.value:
        return failure_response(NotFound(donation_id=parsed.value))
    return envelope_response(
        status.HTTP_200_OK, True, message="Donation deleted successfully",
    )
