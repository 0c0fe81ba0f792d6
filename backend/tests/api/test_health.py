"""Health & Readiness Probes — liveness always 200, readiness follows the database."""


async def test_liveness(client):
    res = await client.get("/api/health")
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "Donation Management API is running"
    assert body["data"]["status"] == "healthy"
    assert body["data"]["version"] == "1.0.0"
    assert "timestamp" in body["data"]


async def test_readiness_with_database(client):
    res = await client.get("/api/health/ready")
    assert res.status_code == 200
    assert res.json()["data"]["checks"] == {"database": "healthy"}


async def test_readiness_after_store_closed(client, store):
    await store.close()
    res = await client.get("/api/health/ready")
    assert res.status_code == 503
    body = res.json()
    assert body["success"] is False
    assert body["data"]["reason"] == "database_unavailable"
