"""Core domain layer for fleetims."""

from fleetims.core.entities import (
    BaseDomainEntity,
    QueryClientConfig,
    QueryEntry,
    QueryKey,
    is_entity_persisted,
)
from fleetims.core.interfaces import (
    IEntityClient,
    IQueryStore,
    IToastNotifier,
    ITranslator,
)
from fleetims.core.services import QueryClient

__all__ = [
    # Entities
    "BaseDomainEntity",
    "QueryClientConfig",
    "QueryEntry",
    "QueryKey",
    "is_entity_persisted",
    # Interfaces
    "IEntityClient",
    "IQueryStore",
    "IToastNotifier",
    "ITranslator",
    # Services
    "QueryClient",
]
