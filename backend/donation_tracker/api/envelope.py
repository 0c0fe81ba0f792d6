"""Response Envelope — maps operation outcomes onto HTTP status + envelope body.

Invariants:
    - Ok -> success=true with data (records serialized via DonationOut)
    - Every failure -> its own http_status and to_envelope() body
    - Keys with no value are omitted from the body
"""

from typing import Any

from fastapi.responses import JSONResponse

from donation_tracker.core.domain_types import DonationRecord
from donation_tracker.core.outcomes import Failure, Ok
from donation_tracker.schemas.donation import ApiEnvelope, DonationOut


def envelope_response(
    status_code: int,
    success: bool,
    data: Any = None,
    message: str | None = None,
    errors: list[str] | None = None,
) -> JSONResponse:
    body = ApiEnvelope(
        success=success, data=data, message=message, errors=errors,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
    )


def failure_response(failure: Failure) -> JSONResponse:
    return JSONResponse(
        status_code=failure.http_status, content=failure.to_envelope(),
    )


def outcome_response(
    outcome: Ok | Failure, message: str, status_code: int = 200,
) -> JSONResponse:
    """Ok -> success envelope with `message`; failure -> its own envelope."""
    if isinstance(outcome, Ok):
        return envelope_response(
            status_code, True, data=_serialize(outcome.value), message=message,
        )
    return failure_response(outcome)


def _serialize(value: Any) -> Any:
    if isinstance(value, DonationRecord):
        return DonationOut.model_validate(value).model_dump(mode="json")
    if isinstance(value, list):
        return [_serialize(item) for item in value]
    return value
