"""
Device Registry Backend — Middleware Tests
============================================

What:  Request id handling and the access log.

What we test:
    ✅ Client X-Request-ID is echoed; unsafe or missing ids are replaced
    ✅ Log records carry the request id, "-" outside of a request
    ✅ Access log level follows the status, including unhandled errors
"""

import logging
from unittest.mock import AsyncMock

import pytest

from app.middleware.logging import level_for_status
from app.middleware.request_id import RequestIdLogFilter, request_id_var, resolve_request_id
from app.services.device_service import device_service


def _record() -> logging.LogRecord:
    return logging.LogRecord("test", logging.INFO, __file__, 1, "message", None, None)


class TestRequestIdResolution:

    def test_client_id_is_kept(self):
        assert resolve_request_id("req-42_a.b") == "req-42_a.b"

    def test_missing_id_is_generated(self):
        rid = resolve_request_id(None)
        assert len(rid) == 8

    def test_unsafe_id_is_replaced(self):
        assert resolve_request_id("abc\r\nInjected: 1") != "abc\r\nInjected: 1"
        assert len(resolve_request_id("x" * 65)) == 8


class TestRequestIdLogFilter:

    def test_stamps_current_request_id(self):
        token = request_id_var.set("abc123")
        try:
            record = _record()
            assert RequestIdLogFilter().filter(record) is True
            assert record.request_id == "abc123"
        finally:
            request_id_var.reset(token)

    def test_dash_outside_request(self):
        record = _record()
        RequestIdLogFilter().filter(record)
        assert record.request_id == "-"


class TestRequestIdHeader:

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, test_client, seed_data):
        response = await test_client.get("/api/devices", headers={"X-Request-ID": "abc123"})

        assert response.headers["x-request-id"] == "abc123"

    @pytest.mark.asyncio
    async def test_request_id_is_generated(self, test_client, seed_data):
        response = await test_client.get("/api/devices")

        assert len(response.headers["x-request-id"]) == 8

    @pytest.mark.asyncio
    async def test_oversized_request_id_is_replaced(self, test_client, seed_data):
        response = await test_client.get("/api/devices", headers={"X-Request-ID": "a" * 200})

        assert len(response.headers["x-request-id"]) == 8


class TestAccessLog:

    def test_level_for_status(self):
        assert level_for_status(200) == logging.INFO
        assert level_for_status(204) == logging.INFO
        assert level_for_status(404) == logging.WARNING
        assert level_for_status(500) == logging.ERROR

    @pytest.mark.asyncio
    async def test_not_found_logged_as_warning(self, test_client, seed_data, caplog):
        caplog.set_level(logging.INFO, logger="registry.access")

        await test_client.get("/api/devices/9999")

        records = [r for r in caplog.records if r.name == "registry.access"]
        assert len(records) == 1
        assert records[0].levelno == logging.WARNING
        assert records[0].status == 404

    @pytest.mark.asyncio
    async def test_health_is_not_logged(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="registry.access")

        await test_client.get("/health")

        assert not [r for r in caplog.records if r.name == "registry.access"]

    @pytest.mark.asyncio
    async def test_unhandled_error_logged_as_500(self, server_error_client, seed_data, caplog, monkeypatch):
        monkeypatch.setattr(device_service, "list_devices", AsyncMock(side_effect=RuntimeError("boom")))
        caplog.set_level(logging.INFO, logger="registry.access")

        response = await server_error_client.get("/api/devices")

        assert response.status_code == 500
        records = [r for r in caplog.records if r.name == "registry.access"]
        assert len(records) == 1
        assert records[0].levelno == logging.ERROR
        assert records[0].status == 500
