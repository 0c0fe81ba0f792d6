"""Boundary Protocols — contract between the HTTP shell and the donation store.

Invariants:
    - Core NEVER imports from the store implementation — dependency arrows point inward only
    - Every method returns an outcome value; none raises for expected conditions
    - Implementation provided by services/donation_store.py via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
    - Async in Protocol: implementations do IO, the pure Validator never awaits
"""

from typing import Any, Protocol

from donation_tracker.core.domain_types import (
    DonationDraft, DonationPatch, DonationRecord,
)
from donation_tracker.core.outcomes import (
    ConstraintViolation, InvalidArgument, NotFound, Ok, StorageFault,
)


class DonationRepository(Protocol):
    """Contract for donation persistence — implemented by DonationStore."""

    async def list_all(self) -> Ok[list[DonationRecord]] | StorageFault: ...

    async def create(
        self, draft: DonationDraft,
    ) -> Ok[DonationRecord] | ConstraintViolation | StorageFault: ...

    async def get_by_id(
        self, donation_id: Any,
    ) -> Ok[DonationRecord] | NotFound | InvalidArgument | StorageFault: ...

    async def update(
        self, donation_id: Any, patch: DonationPatch,
    ) -> (
        Ok[DonationRecord] | NotFound | InvalidArgument
        | ConstraintViolation | StorageFault
    ): ...

    async def delete(
        self, donation_id: Any,
    ) -> Ok[bool] | InvalidArgument | StorageFault: ...

    async def health_check(self) -> bool: ...
