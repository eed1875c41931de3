"""Inventory records, payloads and the resource registry."""

from fleetims.inventory.resources import RESOURCES, Resource, get_resource

__all__ = ["RESOURCES", "Resource", "get_resource"]
