"""Request Logging Middleware: correlation id propagation and access log."""

import logging

CORRELATION_HEADER = "X-Correlation-ID"


async def test_generates_correlation_id(client):
    res = await client.get("/api/v1/health/")
    assert len(res.headers[CORRELATION_HEADER]) == 36


async def test_echoes_incoming_correlation_id(client):
    res = await client.get("/api/v1/health/", headers={CORRELATION_HEADER: "abc-123"})
    assert res.headers[CORRELATION_HEADER] == "abc-123"


async def test_error_responses_carry_correlation_id(client):
    res = await client.get(
        "/api/v1/marketplace-items/999", headers={CORRELATION_HEADER: "trace-404"},
    )
    assert res.status_code == 404
    assert res.headers[CORRELATION_HEADER] == "trace-404"


async def test_logs_one_record_per_request(client, caplog):
    with caplog.at_level(logging.INFO, logger="results_service.api.request_logging"):
        await client.get("/api/v1/segments")
    records = [r for r in caplog.records if r.name == "results_service.api.request_logging"]
    assert len(records) == 1
    assert records[0].status_code == 200
    assert records[0].getMessage() == "GET /api/v1/segments -> 200"
