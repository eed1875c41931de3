"""HTTP API tests through the in-process ASGI transport."""

from typing import Any

import httpx
import pytest


async def create(client: httpx.AsyncClient, path: str, payload: dict[str, Any]) -> Any:
    response = await client.post(f"/{path}/create", json=payload)
    assert response.status_code == 200, response.text
    return response.json()


class TestCrudEndpoints:
    """Tests for the generic CRUD router, exercised on bus models."""

    @pytest.mark.asyncio
    async def test_create_and_get(
        self, http_client: httpx.AsyncClient, bus_model_payload: dict[str, Any]
    ) -> None:
        """Test creating a record and reading it back."""
        created = await create(http_client, "bus-models", bus_model_payload)

        response = await http_client.get(f"/bus-models/{created['id']}")

        assert response.status_code == 200
        assert response.json()["manufacturer"] == "Volvo"
        assert response.json()["amenities"] == ["wifi", "restroom"]

    @pytest.mark.asyncio
    async def test_list_all(
        self, http_client: httpx.AsyncClient, bus_model_payload: dict[str, Any]
    ) -> None:
        """Test the unpaginated list envelope."""
        await create(http_client, "bus-models", bus_model_payload)

        response = await http_client.post("/bus-models/list/all", json={})

        assert response.status_code == 200
        assert len(response.json()["data"]) == 1

    @pytest.mark.asyncio
    async def test_list_paginated(
        self, http_client: httpx.AsyncClient, bus_model_payload: dict[str, Any]
    ) -> None:
        """Test page slicing, ordering and metadata."""
        for year in (2019, 2021, 2020):
            await create(http_client, "bus-models", {**bus_model_payload, "year": year})

        response = await http_client.post(
            "/bus-models/list",
            json={
                "page": 1,
                "page_size": 2,
                "order_by": [{"field": "year", "direction": "desc"}],
            },
        )

        body = response.json()
        assert [record["year"] for record in body["data"]] == [2021, 2020]
        assert body["pagination"] == {
            "current_page": 1,
            "page_size": 2,
            "total_count": 3,
            "total_pages": 2,
            "has_next_page": True,
            "has_previous_page": False,
        }

    @pytest.mark.asyncio
    async def test_update(
        self, http_client: httpx.AsyncClient, bus_model_payload: dict[str, Any]
    ) -> None:
        """Test a partial update."""
        created = await create(http_client, "bus-models", bus_model_payload)

        response = await http_client.put(
            f"/bus-models/{created['id']}/update", json={"model": "9900"}
        )

        assert response.status_code == 200
        assert response.json()["model"] == "9900"
        assert response.json()["manufacturer"] == "Volvo"

    @pytest.mark.asyncio
    async def test_soft_delete(
        self, http_client: httpx.AsyncClient, bus_model_payload: dict[str, Any]
    ) -> None:
        """Test that delete returns the record and hides it afterwards."""
        created = await create(http_client, "bus-models", bus_model_payload)

        response = await http_client.delete(f"/bus-models/{created['id']}/delete")

        assert response.status_code == 200
        assert response.json()["deleted_at"] is not None
        assert (await http_client.get(f"/bus-models/{created['id']}")).status_code == 404
        listed = await http_client.post("/bus-models/list/all", json={})
        assert listed.json()["data"] == []


class TestErrorMapping:
    """Tests for error codes and HTTP statuses."""

    @pytest.mark.asyncio
    async def test_not_found(self, http_client: httpx.AsyncClient) -> None:
        """Test the not-found body."""
        response = await http_client.get("/buses/123")

        assert response.status_code == 404
        assert response.json() == {
            "code": "not_found",
            "message": "Bus with id 123 not found",
            "details": {"id": 123},
        }

    @pytest.mark.asyncio
    async def test_request_validation(self, http_client: httpx.AsyncClient) -> None:
        """Test that invalid bodies are reported as invalid_argument."""
        response = await http_client.post("/bus-models/create", json={"year": 1800})

        assert response.status_code == 400
        assert response.json()["code"] == "invalid_argument"
        assert response.json()["details"]["errors"]

    @pytest.mark.asyncio
    async def test_non_numeric_id(self, http_client: httpx.AsyncClient) -> None:
        """Test that path ids must be integers."""
        response = await http_client.get("/drivers/abc")

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_page_size_limit(self, http_client: httpx.AsyncClient) -> None:
        """Test that page sizes above 100 are refused."""
        response = await http_client.post("/routes/list", json={"page_size": 500})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_duplicate(
        self, http_client: httpx.AsyncClient, terminal_payload: Any
    ) -> None:
        """Test that duplicates map to 409 already_exists."""
        await create(http_client, "terminals", terminal_payload())

        response = await http_client.post(
            "/terminals/create", json=terminal_payload("Other name")
        )

        assert response.status_code == 409
        assert response.json()["code"] == "already_exists"

    @pytest.mark.asyncio
    async def test_missing_relation(
        self, http_client: httpx.AsyncClient, bus_payload: Any
    ) -> None:
        """Test that a missing bus model is a 404."""
        response = await http_client.post("/buses/create", json=bus_payload(99))

        assert response.status_code == 404
        assert response.json()["message"] == "Bus model with id 99 not found"

    @pytest.mark.asyncio
    async def test_invalid_order_field(self, http_client: httpx.AsyncClient) -> None:
        """Test that an unknown order field is a 400."""
        response = await http_client.post(
            "/populations/list/all", json={"order_by": [{"field": "nope"}]}
        )

        assert response.status_code == 400
        assert response.json()["code"] == "invalid_argument"


class TestResourceSpecifics:
    """Tests for per-resource behavior."""

    @pytest.mark.asyncio
    async def test_driver_status_flow(
        self, http_client: httpx.AsyncClient, driver_payload: Any
    ) -> None:
        """Test valid-next-statuses and a rejected transition."""
        driver = await create(http_client, "drivers", driver_payload())

        statuses = await http_client.get(f"/drivers/{driver['id']}/valid-next-statuses")
        assert statuses.json() == {"data": ["active", "probation", "terminated"]}

        response = await http_client.put(
            f"/drivers/{driver['id']}/update", json={"status": "on_leave"}
        )
        assert response.status_code == 400
        assert response.json()["code"] == "failed_precondition"

    @pytest.mark.asyncio
    async def test_user_password_never_returned(
        self, http_client: httpx.AsyncClient
    ) -> None:
        """Test that user responses carry no password material."""
        user = await create(
            http_client,
            "users",
            {
                "username": "ana",
                "email": "ana@example.com",
                "password": "s3cret-pass",
                "first_name": "Ana",
                "last_name": "López",
            },
        )

        assert "password" not in user
        assert "password_hash" not in user
        assert user["is_active"] is True

    @pytest.mark.asyncio
    async def test_terminal_slug(
        self, http_client: httpx.AsyncClient, terminal_payload: Any
    ) -> None:
        """Test that the slug is filled in by the server."""
        terminal = await create(http_client, "terminals", terminal_payload())

        assert terminal["slug"] == "central-del-norte"

    @pytest.mark.asyncio
    async def test_health(self, http_client: httpx.AsyncClient) -> None:
        """Test the health endpoint."""
        response = await http_client.get("/health")

        assert response.json() == {"status": "healthy", "database": "connected"}
