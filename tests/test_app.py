"""
Noteful API - Application Wiring Tests
======================================

What we test:
    ✅ Health check reports database connectivity
    ✅ Request ids are generated or echoed
    ✅ Unexpected failures become a generic 500 without internal detail
    ✅ The 500 response and its log line keep the request id
    ✅ Malformed JSON is a 400 in the standard error envelope
"""

import logging
from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient, ASGITransport

from noteful.main import GENERIC_SERVER_ERROR, create_app


class TestHealth:

    @pytest.mark.asyncio
    async def test_healthy(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"


class TestRequestId:

    @pytest.mark.asyncio
    async def test_generated(self, test_client):
        response = await test_client.get("/api/folders")

        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_echoed(self, test_client):
        response = await test_client.get(
            "/api/folders", headers={"X-Request-ID": "trace-123"}
        )

        assert response.headers["X-Request-ID"] == "trace-123"


class TestErrorEnvelope:

    @pytest.mark.asyncio
    async def test_malformed_json(self, test_client):
        response = await test_client.post(
            "/api/folders",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert set(response.json()) == {"error"}

    @pytest.mark.asyncio
    async def test_unexpected_error_is_generic(self, engine, test_settings):
        app = create_app(test_settings, engine=engine)
        transport = ASGITransport(app=app, raise_app_exceptions=False)

        with patch(
            "noteful.routes.folders.folder_service.list_folders",
            new=AsyncMock(side_effect=RuntimeError("connection string leaked")),
        ):
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                response = await client.get("/api/folders")

        assert response.status_code == 500
        assert response.json() == {"error": {"message": GENERIC_SERVER_ERROR}}
        assert "leaked" not in response.text

    @pytest.mark.asyncio
    async def test_unexpected_error_keeps_request_id(self, engine, test_settings, caplog):
        app = create_app(test_settings, engine=engine)
        transport = ASGITransport(app=app, raise_app_exceptions=False)

        with patch(
            "noteful.routes.folders.folder_service.list_folders",
            new=AsyncMock(side_effect=RuntimeError("boom")),
        ):
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                with caplog.at_level(logging.ERROR, logger="noteful.main"):
                    response = await client.get(
                        "/api/folders", headers={"X-Request-ID": "trace-500"}
                    )

        assert response.status_code == 500
        assert response.headers["X-Request-ID"] == "trace-500"
        assert any(
            "[trace-500] Unexpected error" in record.getMessage()
            for record in caplog.records
        )
