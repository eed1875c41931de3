"""Query store implementations."""

from fleetims.infrastructure.stores.memory import InMemoryQueryStore

__all__ = ["InMemoryQueryStore"]
