"""Remote client exposing one EntityClient per inventory collection."""

from typing import Any

import httpx

from fleetims.client.entity_client import EntityClient
from fleetims.inventory.models import (
    Bus,
    BusModel,
    Driver,
    DriverStatus,
    Population,
    Route,
    Terminal,
    User,
)
from fleetims.inventory.resources import RESOURCES

DEFAULT_BASE_URL = "http://localhost:8000"


class DriverClient(EntityClient[Driver]):
    """Driver calls, plus the status transition lookup."""

    async def valid_next_statuses(self, entity_id: int) -> list[DriverStatus]:
        body = await self._request(
            "GET", f"{self.path}/{entity_id}/valid-next-statuses"
        )
        return [DriverStatus(status) for status in body["data"]]


class InventoryClient:
    """Async HTTP client for the inventory service.

    Attributes are generated from the resource registry: ``bus_models``,
    ``buses``, ``drivers``, ``routes``, ``terminals``, ``populations`` and
    ``users``.

    Example:
        async with InventoryClient("http://localhost:8000") as client:
            page = await client.buses.list_paginated(PaginationParams(page=2))
            bus = await client.buses.get(page.data[0].id)
    """

    bus_models: EntityClient[BusModel]
    buses: EntityClient[Bus]
    drivers: DriverClient
    routes: EntityClient[Route]
    terminals: EntityClient[Terminal]
    populations: EntityClient[Population]
    users: EntityClient[User]

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
        headers: dict[str, str] | None = None,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Root URL of the inventory service.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport, e.g. ``httpx.ASGITransport``.
            headers: Extra headers sent with every request.
            http: A preconfigured httpx client. Overrides the other options.
        """
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers=headers,
        )
        self._entities: dict[str, EntityClient[Any]] = {}
        for resource in RESOURCES:
            client_class = DriverClient if resource.key == "drivers" else EntityClient
            entity_client = client_class(self._http, resource.path, resource.record_model)
            self._entities[resource.key] = entity_client
            setattr(self, resource.attribute, entity_client)

    @property
    def http(self) -> httpx.AsyncClient:
        return self._http

    def entity(self, key: str) -> EntityClient[Any]:
        """Return the client of a collection by its cache key."""
        return self._entities[key]

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "InventoryClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

