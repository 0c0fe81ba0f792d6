"""Error Hierarchy — typed exceptions for conditions that are raised, not returned.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Expected outcomes (validation, not-found) are NOT exceptions — see core/outcomes.py
    - Exceptions here cross the infrastructure -> Store boundary only; the Store
      converts them into outcomes before they reach a caller
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with DonationTrackerError base: the FastAPI global handler
      catches anything that escapes (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    CONSTRAINT = "constraint"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None


class DonationTrackerError(Exception):
    """Base exception for all donation tracker errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the standard response envelope."""
        return {"success": False, "message": self.message}


# ─── Data Errors (400-level) ────────────────────────────────────

class ConstraintError(DonationTrackerError):
    """Storage refused a row (CHECK / NOT NULL / UNIQUE)."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            message, "CONSTRAINT_VIOLATION", ErrorCategory.CONSTRAINT,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.operation = operation


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(DonationTrackerError):
    """Database operation failed at the medium level."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation


class StoreClosedError(DonationTrackerError):
    """Operation attempted after the store released its storage handle."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Donation store is closed",
            "STORE_CLOSED", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
