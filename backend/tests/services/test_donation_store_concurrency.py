"""Donation Store concurrency — serialized mutations and draining close().

Invariants:
    - Concurrent updates to one id all succeed with distinct updated_at values
    - Concurrent creates get distinct ids
    - close() lets in-flight work finish before the engine is released

Design Decisions:
    - File-backed SQLite (tmp_path): every session gets its own connection,
      unlike :memory: which shares one
"""

import asyncio

import pytest

from donation_tracker.core.domain_types import DonationDraft, DonationPatch, DonationType
from donation_tracker.core.outcomes import Ok, StorageFault
from donation_tracker.services.donation_store import DonationStore


@pytest.fixture
async def file_store(tmp_path):
    store = DonationStore.from_url(f"sqlite+aiosqlite:///{tmp_path / 'donations.db'}")
    await store.initialize()
    yield store
    await store.close()


def _draft(name: str = "A. Smith") -> DonationDraft:
    return DonationDraft(name, DonationType.MONEY, 10.0, "2024-03-01")


async def test_concurrent_updates_are_serialized(file_store):
    record = (await file_store.create(_draft())).value

    outcomes = await asyncio.gather(*(
        file_store.update(record.id, DonationPatch(quantity=float(q)))
        for q in range(1, 11)
    ))

    assert all(isinstance(o, Ok) for o in outcomes)
    stamps = [o.value.updated_at for o in outcomes]
    assert len(set(stamps)) == len(stamps)
    latest = max(outcomes, key=lambda o: o.value.updated_at).value
    assert (await file_store.get_by_id(record.id)).value == latest


async def test_concurrent_creates_get_distinct_ids(file_store):
    outcomes = await asyncio.gather(*(
        file_store.create(_draft(f"Donor {i}")) for i in range(10)
    ))
    ids = [o.value.id for o in outcomes]
    assert len(set(ids)) == 10
    assert len((await file_store.list_all()).value) == 10


async def test_close_waits_for_in_flight_operation(tmp_path):
    store = DonationStore.from_url(f"sqlite+aiosqlite:///{tmp_path / 'close.db'}")
    await store.initialize()

    pending = asyncio.create_task(store.create(_draft()))
    await asyncio.sleep(0)
    await store.close()

    assert isinstance(pending.result(), Ok)
    assert await store.get_by_id(1) == StorageFault("Donation store is closed")
