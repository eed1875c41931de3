"""Async HTTP client for the inventory service."""

from fleetims.client.entity_client import EntityClient
from fleetims.client.inventory_client import (
    DEFAULT_BASE_URL,
    DriverClient,
    InventoryClient,
)

__all__ = [
    "DEFAULT_BASE_URL",
    "DriverClient",
    "EntityClient",
    "InventoryClient",
]
