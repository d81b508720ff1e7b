"""
Device Registry Backend — Employee and Health Endpoint Tests
==============================================================

What:  End-to-end tests for /api/employees and /health.
"""

import pytest


class TestListEmployees:

    @pytest.mark.asyncio
    async def test_full_names_include_middle_segment(self, test_client, seed_data):
        response = await test_client.get("/api/employees")

        assert response.status_code == 200
        assert response.json() == [
            # No middle name: the empty segment leaves a double space
            {"id": seed_data["ann_id"], "fullName": "Ann  Lee"},
            {"id": seed_data["john_id"], "fullName": "John Michael Smith"},
        ]


class TestGetEmployee:

    @pytest.mark.asyncio
    async def test_employee_detail(self, test_client, seed_data):
        response = await test_client.get(f"/api/employees/{seed_data['ann_id']}")

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == seed_data["ann_id"]
        assert body["passportNumber"] == "AB123456"
        assert body["firstName"] == "Ann"
        assert body["middleName"] is None
        assert body["lastName"] == "Lee"
        assert body["phoneNumber"] == "+48111222333"
        assert body["email"] == "ann.lee@example.com"
        assert body["salary"] == 5500.5
        assert body["position"] == {"id": seed_data["position_id"], "name": "Engineer"}
        assert body["hireDate"].startswith("2020-03-01T00:00:00")

    @pytest.mark.asyncio
    async def test_unknown_employee_is_404(self, test_client, seed_data):
        response = await test_client.get("/api/employees/9999")

        assert response.status_code == 404
        assert response.content == b""

    @pytest.mark.asyncio
    async def test_non_integer_id_is_400(self, test_client, seed_data):
        response = await test_client.get("/api/employees/abc")

        assert response.status_code == 400


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_reports_database(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert "uptimeSeconds" in body
