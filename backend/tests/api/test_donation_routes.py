"""Donation Routes — verifies status codes and envelopes for every CRUD endpoint.

Invariants:
    - Success: {success: true, data, message}; failures: {success: false, message, errors?}
    - 201 on create, 400 for validation / malformed id / empty update, 404 when missing
    - DELETE of a missing id answers 404 like GET and PUT
"""

from datetime import datetime

import pytest


async def _create(client, payload):
    res = await client.post("/api/donations", json=payload)
    assert res.status_code == 201
    return res.json()["data"]


# ─── POST /api/donations ─────────────────────────────────────────

async def test_create_returns_201_with_record(client, valid_payload):
    res = await client.post("/api/donations", json=valid_payload)

    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "Donation created successfully"
    data = body["data"]
    assert data["id"] == 1
    assert data["donor_name"] == "A. Smith"
    assert data["donation_type"] == "food"
    assert data["quantity"] == 12.0
    assert data["date"] == "2024-03-01"
    assert data["created_at"] == data["updated_at"]
    assert "errors" not in body


async def test_create_with_short_name_returns_400(client, valid_payload):
    res = await client.post(
        "/api/donations", json={**valid_payload, "donor_name": "X"},
    )

    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    assert body["message"] == "Validation failed"
    assert body["errors"] == [
        "donor_name: Donor name must be at least 2 characters",
    ]


async def test_create_with_missing_fields_lists_all(client):
    res = await client.post("/api/donations", json={"donor_name": "Ann"})
    assert res.status_code == 400
    assert res.json()["errors"] == [
        "donation_type: Required", "quantity: Required", "date: Required",
    ]


async def test_create_with_array_body(client):
    res = await client.post("/api/donations", json=[1, 2])
    assert res.status_code == 400
    assert res.json()["errors"] == ["body: Expected object, received array"]


async def test_create_with_malformed_json(client):
    res = await client.post(
        "/api/donations",
        content="{not json",
        headers={"content-type": "application/json"},
    )
    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    assert body["message"] == "Validation failed"
    assert body["errors"]


# ─── GET /api/donations ──────────────────────────────────────────

async def test_list_returns_newest_first(client, valid_payload):
    first = await _create(client, valid_payload)
    second = await _create(client, {**valid_payload, "donor_name": "B. Jones"})

    res = await client.get("/api/donations")

    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Retrieved 2 donations"
    assert [d["id"] for d in body["data"]] == [second["id"], first["id"]]


async def test_list_empty(client):
    res = await client.get("/api/donations")
    assert res.json() == {
        "success": True, "data": [], "message": "Retrieved 0 donations",
    }


# ─── GET /api/donations/{id} ─────────────────────────────────────

async def test_get_one(client, valid_payload):
    created = await _create(client, valid_payload)

    res = await client.get(f"/api/donations/{created['id']}")

    assert res.status_code == 200
    assert res.json()["message"] == "Donation retrieved successfully"
    assert res.json()["data"] == created


@pytest.mark.parametrize("raw_id", ["abc", "0", "-1", "1.5"])
async def test_malformed_id_returns_400(client, raw_id):
    res = await client.get(f"/api/donations/{raw_id}")
    assert res.status_code == 400
    assert res.json() == {"success": False, "message": "Invalid donation ID"}


async def test_get_missing_returns_404(client):
    res = await client.get("/api/donations/999")
    assert res.status_code == 404
    assert res.json() == {"success": False, "message": "Donation not found"}


# ─── PUT /api/donations/{id} ─────────────────────────────────────

async def test_partial_update(client, valid_payload):
    created = await _create(client, valid_payload)

    res = await client.put(f"/api/donations/{created['id']}", json={"quantity": 20})

    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Donation updated successfully"
    assert body["data"]["quantity"] == 20.0
    assert body["data"]["donor_name"] == "A. Smith"
    assert body["data"]["created_at"] == created["created_at"]
    assert (
        datetime.fromisoformat(body["data"]["updated_at"])
        > datetime.fromisoformat(created["updated_at"])
    )


async def test_update_with_no_fields_returns_400(client, valid_payload):
    created = await _create(client, valid_payload)
    res = await client.put(f"/api/donations/{created['id']}", json={})
    assert res.status_code == 400
    assert res.json()["message"] == "No fields supplied for update"


async def test_update_with_bad_value_returns_400(client, valid_payload):
    created = await _create(client, valid_payload)
    res = await client.put(
        f"/api/donations/{created['id']}", json={"quantity": 5_000_000},
    )
    assert res.status_code == 400
    assert res.json()["errors"] == ["quantity: Quantity seems too large"]


async def test_update_missing_returns_404(client):
    res = await client.put("/api/donations/999", json={"quantity": 3})
    assert res.status_code == 404
    assert res.json()["message"] == "Donation not found"


async def test_update_malformed_id_checked_before_body(client):
    res = await client.put("/api/donations/abc", json={})
    assert res.status_code == 400
    assert res.json()["message"] == "Invalid donation ID"


# ─── DELETE /api/donations/{id} ──────────────────────────────────

async def test_delete_then_get_is_404(client, valid_payload):
    created = await _create(client, valid_payload)

    res = await client.delete(f"/api/donations/{created['id']}")
    assert res.status_code == 200
    assert res.json() == {
        "success": True, "message": "Donation deleted successfully",
    }

    res = await client.get(f"/api/donations/{created['id']}")
    assert res.status_code == 404


async def test_delete_missing_returns_404(client):
    for _ in range(2):
        res = await client.delete("/api/donations/4242")
        assert res.status_code == 404
        assert res.json()["message"] == "Donation not found"


# ─── Index & fallback ────────────────────────────────────────────

async def test_unknown_api_endpoint(client):
    res = await client.get("/api/unknown")
    assert res.status_code == 404
    body = res.json()
    assert body["success"] is False
    assert body["message"] == "API endpoint not found: GET /api/unknown"
    assert "POST /api/donations" in body["data"]["availableEndpoints"]


async def test_unknown_route_outside_api(client):
    res = await client.get("/nowhere")
    assert res.status_code == 404
    assert res.json() == {
        "success": False, "message": "Route not found: GET /nowhere",
    }


async def test_api_index(client):
    res = await client.get("/")
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Donation Management API"
    assert body["version"] == "1.0.0"
    assert body["endpoints"]["donations"]["create"] == "POST /api/donations"
