"""Domain Types — the DonationRecord entity and the shapes that feed it.

Invariants:
    - DonationType is the closed set of donation categories (7 members)
    - DonationDraft carries only caller-supplied fields; id and timestamps
      are assigned by the Store
    - DonationPatch marks every field present or ABSENT — never a loose dict
    - DonationRecord is immutable once read from storage

Design Decisions:
    - str Enum for DonationType: serializes to JSON without custom encoders
    - ABSENT sentinel instead of None: None is a value a caller can send,
      absence is not
"""

from dataclasses import dataclass, fields
from datetime import datetime
from enum import Enum
from typing import Any, NewType


DonationId = NewType("DonationId", int)


class DonationType(str, Enum):
    """Donation categories — maps to the `donation_type` column."""
    MONEY = "money"
    FOOD = "food"
    CLOTHING = "clothing"
    TOYS = "toys"
    BOOKS = "books"
    HOUSEHOLD = "household"
    OTHER = "other"


DONATION_TYPE_VALUES: tuple[str, ...] = tuple(t.value for t in DonationType)

MIN_DONOR_NAME_LENGTH: int = 2
MAX_DONOR_NAME_LENGTH: int = 100
MAX_QUANTITY: float = 1_000_000


class _Absent(Enum):
    """Marker for a patch field the caller did not supply."""
    ABSENT = "absent"

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = _Absent.ABSENT


@dataclass(frozen=True)
class DonationDraft:
    """A donation ready to be created (normalized by the Validator)."""
    donor_name: str
    donation_type: DonationType
    quantity: float
    date: str

    def as_fields(self) -> dict[str, Any]:
        return {
            "donor_name": self.donor_name,
            "donation_type": self.donation_type,
            "quantity": self.quantity,
            "date": self.date,
        }


@dataclass(frozen=True)
class DonationPatch:
    """Partial update — each field is either a value or ABSENT."""
    donor_name: str | _Absent = ABSENT
    donation_type: DonationType | _Absent = ABSENT
    quantity: float | _Absent = ABSENT
    date: str | _Absent = ABSENT

    def present_fields(self) -> dict[str, Any]:
        """Only the fields the caller supplied, in declaration order."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not ABSENT
        }

    @property
    def is_empty(self) -> bool:
        return not self.present_fields()


PATCHABLE_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(DonationPatch))


@dataclass(frozen=True)
class DonationRecord:
    """A persisted donation, as returned by every Store read."""
    id: DonationId
    donor_name: str
    donation_type: DonationType
    quantity: float
    date: str
    created_at: datetime
    updated_at: datetime

