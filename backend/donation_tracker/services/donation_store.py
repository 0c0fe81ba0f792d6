"""Donation Store — durable CRUD over donation records with storage-level rule enforcement.

Invariants:
    - Every operation returns an outcome (core/outcomes.py); expected conditions never raise
    - Field rules re-checked before any write: a record that bypassed the Validator
      is rejected with ConstraintViolation, never persisted
    - create: created_at == updated_at; update: updated_at strictly increases
    - update is all-or-nothing: one transaction, only present patch fields applied
    - delete of a missing id is Ok(False), never NotFound
    - Mutations on one id are serialized by a per-id asyncio.Lock; on SQLite every
      write also takes one store-wide lock (single writer); reads take no lock
    - close() waits for in-flight operations before the engine is disposed;
      afterwards every operation returns StorageFault

Design Decisions:
    - Explicit instance owned by the composition root (FastAPI lifespan): no global handle
    - Locks kept in a WeakValueDictionary: an id's lock lives only while someone holds
      or waits on it
    - ConstraintError from the database means the Validator and the Store disagree:
      logged at ERROR as a defect signal
"""

import asyncio
import logging
from contextlib import AsyncExitStack, asynccontextmanager
from datetime import datetime, timedelta, timezone
from typing import Any, AsyncGenerator
from weakref import WeakValueDictionary

from sqlalchemy import delete, select

from donation_tracker.core import donation_rules
from donation_tracker.core.domain_types import (
    DonationDraft, DonationId, DonationPatch, DonationRecord, DonationType,
)
from donation_tracker.core.errors import (
    ConstraintError, DonationTrackerError, StoreClosedError,
)
from donation_tracker.core.outcomes import (
    ConstraintViolation, InvalidArgument, NotFound, Ok, StorageFault,
)
from donation_tracker.db.base import Base
from donation_tracker.infrastructure.database import DatabaseSessionManager
from donation_tracker.models.donation import Donation

logger = logging.getLogger(__name__)

NO_FIELDS_PROVIDED = "No fields provided for update"

_TIMESTAMP_STEP = timedelta(microseconds=1)


class DonationStore:
    """Owns the persisted donation collection. Safe for concurrent callers."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db
        self._locks: WeakValueDictionary[int, asyncio.Lock] = WeakValueDictionary()
        self._write_lock = asyncio.Lock()
        self._single_writer = db.engine.dialect.name == "sqlite"
        self._closed = False
        self._in_flight = 0
        self._drained = asyncio.Event()
        self._drained.set()

    @classmethod
    def from_url(
        cls, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ) -> "DonationStore":
        return cls(DatabaseSessionManager.from_url(
            database_url, pool_size=pool_size, max_overflow=max_overflow,
        ))

    @property
    def closed(self) -> bool:
        return self._closed

    # ─── Lifecycle ───────────────────────────────────────────────

    async def initialize(self) -> None:
        """Create the schema if absent. Raises DatabaseError: fatal at startup."""
        await self._db.create_schema(Base.metadata)
        logger.info("Donations table initialized")

    async def close(self) -> None:
        """Refuse new work, let in-flight operations finish, release the engine."""
        if self._closed:
            return
        self._closed = True
        await self._drained.wait()
        await self._db.dispose()
        logger.info("Database connection closed")

    async def health_check(self) -> bool:
        if self._closed:
            return False
        return await self._db.health_check()

    # ─── Operations ──────────────────────────────────────────────

    async def list_all(self) -> Ok[list[DonationRecord]] | StorageFault:
        """All donations, newest first (created_at DESC, then id DESC)."""
        try:
            async with self._operation(), self._db.session() as db:
                result = await db.execute(
                    select(Donation).order_by(
                        Donation.created_at.desc(), Donation.id.desc(),
                    ),
                )
                rows = result.scalars().all()
        except DonationTrackerError as e:
            return self._failed("list_all", e, "Failed to retrieve donations")
        logger.info(f"Retrieved {len(rows)} donations")
        return Ok([_to_record(row) for row in rows])

    async def create(
        self, draft: DonationDraft,
    ) -> Ok[DonationRecord] | ConstraintViolation | StorageFault:
        """Persist a new donation; assigns id, created_at and updated_at."""
        fields = draft.as_fields()
        violations = donation_rules.find_violations(fields)
        if violations:
            return _rejected("create", violations)

        now = _utcnow()
        row = Donation(**_to_columns(fields), created_at=now, updated_at=now)
        try:
            async with (
                self._operation(),
                self._writing(),
                self._db.session() as db,
            ):
                async with db.begin():
                    db.add(row)
        except DonationTrackerError as e:
            return self._failed("create", e, "Failed to create donation")

        record = _to_record(row)
        logger.info(
            f"Created donation with ID: {record.id}",
            extra={"donation_id": record.id, "operation": "create"},
        )
        return Ok(record)

    async def get_by_id(
        self, donation_id: Any,
    ) -> Ok[DonationRecord] | NotFound | InvalidArgument | StorageFault:
        if not donation_rules.is_valid_donation_id(donation_id):
            return InvalidArgument(donation_rules.INVALID_DONATION_ID)
        try:
            async with self._operation(), self._db.session() as db:
                row = await db.get(Donation, donation_id)
        except DonationTrackerError as e:
            return self._failed("get_by_id", e, "Failed to retrieve donation")
        if row is None:
            return NotFound(donation_id=donation_id)
        return Ok(_to_record(row))

    async def update(
        self, donation_id: Any, patch: DonationPatch,
    ) -> (
        Ok[DonationRecord] | NotFound | InvalidArgument
        | ConstraintViolation | StorageFault
    ):
        """Apply only the patch's present fields and refresh updated_at, atomically."""
        if not donation_rules.is_valid_donation_id(donation_id):
            return InvalidArgument(donation_rules.INVALID_DONATION_ID)
        if patch.is_empty:
            return InvalidArgument(NO_FIELDS_PROVIDED)
        changes = patch.present_fields()
        violations = donation_rules.find_violations(changes)
        if violations:
            return _rejected("update", violations)

        columns = _to_columns(changes)
        try:
            async with (
                self._operation(),
                self._writing(donation_id),
                self._db.session() as db,
            ):
                async with db.begin():
                    row = await db.get(
                        Donation, donation_id, with_for_update=True,
                    )
                    if row is not None:
                        for name, value in columns.items():
                            setattr(row, name, value)
                        row.updated_at = _next_timestamp(row.updated_at)
        except DonationTrackerError as e:
            return self._failed("update", e, "Failed to update donation")

        if row is None:
            logger.warning(
                f"No donation found with ID: {donation_id}",
                extra={"donation_id": donation_id, "operation": "update"},
            )
            return NotFound(donation_id=donation_id)
        logger.info(
            f"Updated donation ID: {donation_id}",
            extra={"donation_id": donation_id, "operation": "update"},
        )
        return Ok(_to_record(row))

    async def delete(
        self, donation_id: Any,
    ) -> Ok[bool] | InvalidArgument | StorageFault:
        """Hard delete. Ok(False) when the id did not exist."""
        if not donation_rules.is_valid_donation_id(donation_id):
            return InvalidArgument(donation_rules.INVALID_DONATION_ID)
        try:
            async with (
                self._operation(),
                self._writing(donation_id),
                self._db.session() as db,
            ):
                async with db.begin():
                    result = await db.execute(
                        delete(Donation).where(Donation.id == donation_id),
                    )
                removed = result.rowcount > 0
        except DonationTrackerError as e:
            return self._failed("delete", e, "Failed to delete donation")

        if not removed:
            logger.warning(
                f"No donation found with ID: {donation_id}",
                extra={"donation_id": donation_id, "operation": "delete"},
            )
            return Ok(False)
        logger.info(
            f"Deleted donation ID: {donation_id}",
            extra={"donation_id": donation_id, "operation": "delete"},
        )
        return Ok(True)

    # ─── Internals ───────────────────────────────────────────────

    @asynccontextmanager
    async def _operation(self) -> AsyncGenerator[None, None]:
        """Count an operation as in-flight so close() can wait for it."""
        if self._closed:
            raise StoreClosedError()
        self._in_flight += 1
        self._drained.clear()
        try:
            yield
        finally:
            self._in_flight -= 1
            if self._in_flight == 0:
                self._drained.set()

    @asynccontextmanager
    async def _writing(
        self, donation_id: int | None = None,
    ) -> AsyncGenerator[None, None]:
        """Serialize writes: per id always, store-wide on single-writer engines."""
        async with AsyncExitStack() as stack:
            if donation_id is not None:
                await stack.enter_async_context(self._lock_for(donation_id))
            if self._single_writer:
                await stack.enter_async_context(self._write_lock)
            yield

    def _lock_for(self, donation_id: int) -> asyncio.Lock:
        lock = self._locks.get(donation_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[donation_id] = lock
        return lock

    def _failed(
        self, operation: str, error: DonationTrackerError, message: str,
    ) -> ConstraintViolation | StorageFault:
        extra = {"operation": operation, "error_code": error.code}
        if isinstance(error, ConstraintError):
            logger.error(
                "Storage rejected a donation that passed field rules "
                "(validator/store rule mismatch)",
                extra=extra,
            )
            return ConstraintViolation(error.message)
        if isinstance(error, StoreClosedError):
            logger.warning(f"{operation} refused: store is closed", extra=extra)
            return StorageFault(error.message)
        logger.error(f"{message}: {error.message}", extra=extra)
        return StorageFault(message)


# ─── Pure helpers ────────────────────────────────────────────────

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; every stored timestamp is UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _next_timestamp(previous: datetime) -> datetime:
    return max(_utcnow(), _as_utc(previous) + _TIMESTAMP_STEP)


def _to_columns(fields: dict[str, Any]) -> dict[str, Any]:
    """Normalize already-checked field values into column values."""
    columns: dict[str, Any] = {}
    if "donor_name" in fields:
        columns["donor_name"] = fields["donor_name"].strip()
    if "donation_type" in fields:
        columns["donation_type"] = DonationType(fields["donation_type"]).value
    if "quantity" in fields:
        columns["quantity"] = float(fields["quantity"])
    if "date" in fields:
        columns["date"] = donation_rules.parse_calendar_date(
            fields["date"],
        ).isoformat()
    return columns


def _to_record(row: Donation) -> DonationRecord:
    return DonationRecord(
        id=DonationId(row.id),
        donor_name=row.donor_name,
        donation_type=DonationType(row.donation_type),
        quantity=row.quantity,
        date=row.date,
        created_at=_as_utc(row.created_at),
        updated_at=_as_utc(row.updated_at),
    )


def _rejected(operation: str, violations: list[str]) -> ConstraintViolation:
    logger.error(
        f"Storage rules rejected donation on {operation}",
        extra={
            "operation": operation,
            "error_code": ConstraintViolation.code,
            "violations": violations,
        },
    )
    return ConstraintViolation("; ".join(violations), tuple(violations))
