"""Per-entity query and mutation bundles generated from the resource registry."""

from collections.abc import Iterator
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from fleetims.client.entity_client import EntityClient
from fleetims.client.inventory_client import InventoryClient
from fleetims.core.entities.pagination import PaginationParams
from fleetims.core.entities.query_result import (
    ListQueryResult,
    MutationResult,
    QueryResult,
)
from fleetims.core.interfaces.notifier import IToastNotifier
from fleetims.core.interfaces.translator import ITranslator
from fleetims.core.services.collection_mutations import (
    CollectionMutations,
    create_collection_mutations,
)
from fleetims.core.services.collection_queries import (
    CollectionItemQuery,
    CollectionListQuery,
    create_collection_item_query,
    create_collection_list_query,
)
from fleetims.core.services.query_client import QueryClient
from fleetims.inventory.models import (
    Bus,
    BusModel,
    Driver,
    Population,
    Route,
    Terminal,
    User,
)
from fleetims.inventory.resources import RESOURCES, Resource

T = TypeVar("T", bound=BaseModel)


class EntityHooks(Generic[T]):
    """Item query, list query and mutations of one entity, bound to a cache."""

    def __init__(
        self,
        resource: Resource,
        entity_client: EntityClient[T],
        query_client: QueryClient,
        translator: ITranslator | None = None,
        notifier: IToastNotifier | None = None,
    ) -> None:
        self.resource = resource
        self.query_client = query_client
        self.item_query: CollectionItemQuery[T] = create_collection_item_query(
            resource.key, entity_client.get
        )
        self.list_query: CollectionListQuery[T] = create_collection_list_query(
            resource.key, entity_client.list_paginated
        )
        self.mutations: CollectionMutations[T] = create_collection_mutations(
            resource.key,
            resource.key,
            create=entity_client.create,
            update=entity_client.update,
            delete=entity_client.delete,
            translator=translator,
            notifier=notifier,
        )

    @property
    def key(self) -> str:
        return self.resource.key

    def peek(self, entity_id: Any, enabled: bool = True) -> QueryResult[T]:
        """Return the record's state without waiting on the network."""
        return self.item_query.initial_result(self.query_client, entity_id, enabled)

    async def get(self, entity_id: Any, enabled: bool = True) -> QueryResult[T]:
        return await self.item_query.fetch(self.query_client, entity_id, enabled)

    async def list(
        self, params: PaginationParams | None = None, enabled: bool = True
    ) -> ListQueryResult:
        return await self.list_query.fetch(self.query_client, params, enabled)

    async def create(self, payload: BaseModel | dict[str, Any]) -> MutationResult[T]:
        return await self.mutations.create.mutate(self.query_client, payload)

    async def update(
        self, entity_id: Any, payload: BaseModel | dict[str, Any]
    ) -> MutationResult[T]:
        return await self.mutations.update.mutate(self.query_client, entity_id, payload)

    async def delete(self, entity_id: Any) -> MutationResult[T]:
        return await self.mutations.delete.mutate(self.query_client, entity_id)

    def __repr__(self) -> str:
        return f"EntityHooks({self.resource.key!r})"


class InventoryHooks:
    """One EntityHooks per inventory resource, sharing a query client."""

    bus_models: EntityHooks[BusModel]
    buses: EntityHooks[Bus]
    drivers: EntityHooks[Driver]
    routes: EntityHooks[Route]
    terminals: EntityHooks[Terminal]
    populations: EntityHooks[Population]
    users: EntityHooks[User]

    def __init__(self, hooks: dict[str, EntityHooks[Any]]) -> None:
        self._hooks = hooks
        for entity_hooks in hooks.values():
            setattr(self, entity_hooks.resource.attribute, entity_hooks)

    def entity(self, key: str) -> EntityHooks[Any]:
        """Return the hooks of a resource by its cache key."""
        return self._hooks[key]

    def __iter__(self) -> Iterator[EntityHooks[Any]]:
        return iter(self._hooks.values())


def create_inventory_hooks(
    inventory_client: InventoryClient,
    query_client: QueryClient,
    *,
    translator: ITranslator | None = None,
    notifier: IToastNotifier | None = None,
) -> InventoryHooks:
    """Generate the hooks of every inventory resource.

    Args:
        inventory_client: Remote client providing the per-entity calls.
        query_client: Cache shared by every generated query.
        translator: Message lookup for mutation toasts.
        notifier: Toast sink for mutations.

    Returns:
        The hook bundles, reachable as ``hooks.buses``, ``hooks.drivers``...

    Example:
        hooks = create_inventory_hooks(InventoryClient(), QueryClient())
        page = await hooks.buses.list(PaginationParams(page=1))
        result = await hooks.buses.create(payload)
    """
    if translator is None:
        from fleetims.infrastructure.translations import TranslationCatalog

        translator = TranslationCatalog()

    return InventoryHooks(
        {
            resource.key: EntityHooks(
                resource,
                inventory_client.entity(resource.key),
                query_client,
                translator=translator,
                notifier=notifier,
            )
            for resource in RESOURCES
        }
    )
