"""Operation Outcomes — discriminated results returned by the Validator and the Store.

Invariants:
    - Every Validator/Store operation returns exactly one of:
      Ok | ValidationFailed | NotFound | InvalidArgument | ConstraintViolation | StorageFault
    - Expected conditions are values, never exceptions
    - Each failure knows its code, HTTP status class and envelope shape

Design Decisions:
    - Frozen dataclasses over a dict with "status" keys: callers branch with
      isinstance and the type checker sees every case
    - ValidationFailed.errors is a tuple: outcomes are hashable and immutable
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar


T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a record, a list of records or a flag."""
    value: T

    ok: ClassVar[bool] = True


class Failure:
    """Shared behaviour of every failed outcome."""
    ok: ClassVar[bool] = False
    code: ClassVar[str] = "FAILURE"
    http_status: ClassVar[int] = 500
    message: str

    def to_envelope(self) -> dict[str, Any]:
        return {"success": False, "message": self.message}


@dataclass(frozen=True)
class ValidationFailed(Failure):
    """Input rejected by field rules; carries every violation, not just the first."""
    errors: tuple[str, ...]
    message: str = "Validation failed"

    code: ClassVar[str] = "VALIDATION_FAILED"
    http_status: ClassVar[int] = 400

    def to_envelope(self) -> dict[str, Any]:
        return {
            "success": False,
            "message": self.message,
            "errors": list(self.errors),
        }


@dataclass(frozen=True)
class NotFound(Failure):
    """No record with the requested id."""
    donation_id: int | None = None
    resource: str = "Donation"

    code: ClassVar[str] = "NOT_FOUND"
    http_status: ClassVar[int] = 404

    @property
    def message(self) -> str:
        return f"{self.resource} not found"


@dataclass(frozen=True)
class InvalidArgument(Failure):
    """Malformed identifier or empty update payload."""
    message: str

    code: ClassVar[str] = "INVALID_ARGUMENT"
    http_status: ClassVar[int] = 400


@dataclass(frozen=True)
class ConstraintViolation(Failure):
    """Storage-level rules rejected data (a Validator/Store mismatch if validated)."""
    message: str
    violations: tuple[str, ...] = ()

    code: ClassVar[str] = "CONSTRAINT_VIOLATION"
    http_status: ClassVar[int] = 400

    def to_envelope(self) -> dict[str, Any]:
        return {
            "success": False,
            "message": "Donation violates storage constraints",
            "errors": list(self.violations) or [self.message],
        }


@dataclass(frozen=True)
class StorageFault(Failure):
    """Medium-level failure; fatal to the operation, not to the Store."""
    message: str

    code: ClassVar[str] = "STORAGE_FAULT"
    http_status: ClassVar[int] = 500


