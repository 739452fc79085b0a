"""Tests for the health check endpoint and the error envelope."""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from src.teamhub.core.db import Database
from src.teamhub.core.documents import DocumentStore

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


class TestHealth:
    """Tests for GET /health."""

    async def test_healthy(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "healthy"
        assert body["document_store"] == "healthy"
        assert body["cached"] is False

    async def test_second_call_is_cached(self, client: AsyncClient) -> None:
        await client.get("/api/health")

        response = await client.get("/api/health")

        assert response.json()["cached"] is True
        assert response.json()["cache_age_seconds"] >= 0

    async def test_document_store_outage_is_degraded(
        self,
        client: AsyncClient,
        document_store: DocumentStore,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        async def refuse() -> None:
            raise ConnectionError("connection refused")

        monkeypatch.setattr(document_store, "ping", refuse)

        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "degraded"
        assert response.json()["document_store"].startswith("unhealthy")

    async def test_database_outage_is_unhealthy(
        self, client: AsyncClient, database: Database, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def refuse() -> None:
            raise ConnectionError("connection refused")

        monkeypatch.setattr(database, "ping", refuse)

        response = await client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"


class TestErrorEnvelope:
    """Every error response carries success=false and the request id."""

    async def test_unknown_route(self, client: AsyncClient) -> None:
        request_id = str(uuid4())

        response = await client.get("/api/nothing-here", headers={"X-Request-ID": request_id})

        assert response.status_code == 404
        assert response.json()["success"] is False
        assert response.json()["request_id"] == request_id
        assert response.headers["x-request-id"] == request_id

    async def test_generated_request_id(self, client: AsyncClient) -> None:
        response = await client.get("/api/nothing-here")

        assert response.json()["request_id"]
        assert response.json()["request_id"] == response.headers["x-request-id"]

    async def test_validation_error_is_400(self, client: AsyncClient) -> None:
        response = await client.post("/api/auth/login", json={"email": "not-an-email"})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert isinstance(body["detail"], list)
        assert body["request_id"]

    async def test_missing_capability_detail(
        self, client: AsyncClient, member_headers: dict
    ) -> None:
        response = await client.get("/api/admin/users/logs", headers=member_headers)

        assert response.status_code == 403
        assert response.json() == {
            "success": False,
            "detail": "Missing permission: can_manage_users",
            "request_id": response.headers["x-request-id"],
        }
