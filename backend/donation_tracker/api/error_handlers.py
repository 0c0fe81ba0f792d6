"""Error Handlers — global exception handlers for the Donation API.

Invariants:
    - DonationTrackerError → envelope with its own http_status
    - RequestValidationError → 400 envelope with "field: message" errors
    - HTTPException (unknown route, wrong method) → envelope, never {"detail": ...}
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (DonationTrackerError), validation (Pydantic),
      catch-all (Exception); HTTP errors only reshaped into the envelope
    - Extracted from main.py to keep the composition root small
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from donation_tracker.api.envelope import envelope_response
from donation_tracker.core.errors import DonationTrackerError
from donation_tracker.core.validate_donation import format_validation_errors

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register donation domain/infrastructure error handler."""

    @app.exception_handler(DonationTrackerError)
    async def domain_error_handler(request: Request, exc: DonationTrackerError):
        """Handle errors that escaped the Store's outcome mapping."""
        logger.error(
            f"DonationTrackerError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle request parsing errors (malformed JSON, bad path params)."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return envelope_response(
            status.HTTP_400_BAD_REQUEST,
            False,
            message="Validation failed",
            errors=list(format_validation_errors(exc.errors())),
        )


def _register_http_error_handler(app: FastAPI) -> None:
    """Register handler reshaping Starlette HTTP errors into the envelope."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            message = f"Route not found: {request.method} {request.url.path}"
        else:
            message = str(exc.detail)
        return envelope_response(exc.status_code, False, message=message)


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return envelope_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            False,
            message="Internal server error",
        )
