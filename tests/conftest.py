"""Pytest configuration for fleetims tests."""

from collections.abc import AsyncIterator
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from fleetims import (
    InMemoryToastNotifier,
    InventoryClient,
    QueryClient,
    TranslationCatalog,
    create_inventory_hooks,
)
from fleetims.hooks import InventoryHooks
from fleetims.server import Database, ServerConfig, create_app


@pytest.fixture
def query_client() -> QueryClient:
    """Create a query client with default configuration."""
    return QueryClient()


@pytest.fixture
def notifier() -> InMemoryToastNotifier:
    """Create a notifier that records every toast."""
    return InMemoryToastNotifier()


@pytest.fixture
def translator() -> TranslationCatalog:
    """Create an English catalog so assertions read naturally."""
    return TranslationCatalog("en-US")


@pytest_asyncio.fixture
async def database() -> AsyncIterator[Database]:
    """Create a connected in-memory database."""
    async with Database() as db:
        yield db


@pytest.fixture
def app(database: Database) -> FastAPI:
    """Create the API bound to the test database."""
    return create_app(ServerConfig(), database=database)


@pytest_asyncio.fixture
async def http_client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    """Create an httpx client talking to the app in-process."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def inventory_client(http_client: httpx.AsyncClient) -> InventoryClient:
    """Create the remote client on top of the in-process transport."""
    return InventoryClient(http=http_client)


@pytest.fixture
def hooks(
    inventory_client: InventoryClient,
    query_client: QueryClient,
    translator: TranslationCatalog,
    notifier: InMemoryToastNotifier,
) -> InventoryHooks:
    """Create the inventory hooks wired to the in-process API."""
    return create_inventory_hooks(
        inventory_client,
        query_client,
        translator=translator,
        notifier=notifier,
    )


@pytest.fixture
def bus_model_payload() -> dict[str, Any]:
    return {
        "manufacturer": "Volvo",
        "model": "9800",
        "year": 2022,
        "seating_capacity": 44,
        "num_floors": 1,
        "seats_per_floor": [
            {"floor_number": 1, "num_rows": 11, "seats_left": 2, "seats_right": 2}
        ],
        "amenities": ["wifi", "restroom"],
        "engine_type": "diesel",
    }


@pytest.fixture
def bus_payload() -> Any:
    """Return a factory for bus payloads referencing a bus model."""

    def make(model_id: int, economic_number: str = "ECO-001") -> dict[str, Any]:
        return {
            "economic_number": economic_number,
            "registration_number": f"REG-{economic_number}",
            "license_plate_type": "NATIONAL",
            "license_plate_number": f"PL-{economic_number}",
            "status": "ACTIVE",
            "model_id": model_id,
            "serial_number": f"SN-{economic_number}",
            "chassis_number": f"CH-{economic_number}",
            "gross_vehicle_weight": 18000,
            "purchase_date": "2022-01-15",
            "expiration_date": "2032-01-15",
        }

    return make


@pytest.fixture
def driver_payload() -> Any:
    """Return a factory for driver payloads."""

    def make(key: str = "DRV-001", **overrides: Any) -> dict[str, Any]:
        payload = {
            "driver_key": key,
            "payroll_key": f"PAY-{key}",
            "first_name": "Ana",
            "last_name": "López",
            "license": f"LIC-{key}",
            "status": "in_training",
        }
        payload.update(overrides)
        return payload

    return make


@pytest.fixture
def terminal_payload() -> Any:
    """Return a factory for terminal payloads."""

    def make(name: str = "Central del Norte", code: str = "CDN") -> dict[str, Any]:
        return {
            "name": name,
            "code": code,
            "address": "Av. de los Cien Metros 4907",
            "latitude": 19.479,
            "longitude": -99.140,
            "facilities": [{"name": "Waiting room"}],
        }

    return make
