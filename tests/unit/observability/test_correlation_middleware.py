"""Unit tests for CorrelationIdMiddleware."""

from __future__ import annotations

import structlog
from fastapi import FastAPI
from fastapi.testclient import TestClient

from listing_catalog.observability.correlation import CorrelationIdMiddleware


def _app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(CorrelationIdMiddleware)

    @app.get("/ctx")
    async def ctx() -> dict:
        return dict(structlog.contextvars.get_contextvars())

    return app


class TestCorrelationIdMiddleware:
    def test_binds_correlation_id_for_the_request(self) -> None:
        client = TestClient(_app())
        resp = client.get("/ctx", headers={"X-Correlation-ID": "cid-1"})
        assert resp.json() == {"correlation_id": "cid-1"}
        assert resp.headers["x-correlation-id"] == "cid-1"

    def test_unbinds_after_the_request(self) -> None:
        client = TestClient(_app())
        client.get("/ctx", headers={"X-Correlation-ID": "cid-2"})
        assert "correlation_id" not in structlog.contextvars.get_contextvars()

    def test_blank_header_is_ignored(self) -> None:
        client = TestClient(_app())
        resp = client.get("/ctx", headers={"X-Correlation-ID": "  ", "X-Request-ID": "rid"})
        assert resp.json()["correlation_id"] == "rid"
