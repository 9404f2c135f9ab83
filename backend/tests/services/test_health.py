"""Health, Readiness and Segments: probes and catalog endpoints."""

import results_service.infrastructure.database as db_module


async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "healthy"
    assert body["service"] == "results-service"


async def test_readiness_reports_item_count(client):
    await client.post(
        "/api/v1/marketplace-items",
        json={"external_item_id": "ml-1", "title": "Lamp", "platform_id": 1},
    )
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json() == {
        "status": "ready", "checks": {"database": "healthy"}, "item_count": 1,
    }


async def test_readiness_without_database(client):
    db_module.db_manager = None
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"


async def test_segments_catalog(client):
    res = await client.get("/api/v1/segments")
    assert res.status_code == 200
    segments = res.json()
    assert [s["id"] for s in segments] == [1, 2, 3, 4, 5, 6]
    social = next(s for s in segments if s["name"] == "SOCIAL_MEDIA")
    assert social["supports_real_time_monitoring"] is False
