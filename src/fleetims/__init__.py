"""fleetims - Fleet and inventory management data layer.

A Python library for reading and writing fleet inventory (buses, bus
models, drivers, routes, terminals, populations and users) through a
query cache with key-prefix invalidation, plus the FastAPI backend
that serves it.

Example:
    from fleetims import (
        InMemoryToastNotifier,
        InventoryClient,
        PaginationParams,
        QueryClient,
        create_inventory_hooks,
    )

    async with InventoryClient("http://localhost:8000") as client:
        hooks = create_inventory_hooks(
            client,
            QueryClient(),
            notifier=InMemoryToastNotifier(),
        )

        # Lists are cached under ("buses", "list", <params>)
        page = await hooks.buses.list(PaginationParams(page=1, page_size=20))

        # A bus found in a cached list renders before its own fetch resolves
        first = hooks.buses.peek(page.items[0].id)
        assert first.is_placeholder_data

        # Mutations show toasts and invalidate every ("buses", ...) query
        result = await hooks.buses.update(first.data.id, {"status": "REPAIR"})

Running the backend:
    $ FLEETIMS_DATABASE_PATH=fleet.db fleetims-server
"""

from fleetims.client import EntityClient, InventoryClient
from fleetims.core.entities import (
    BaseDomainEntity,
    FetchStatus,
    ListParams,
    ListQueryResult,
    MutationResult,
    MutationStatus,
    OrderBy,
    PaginatedResult,
    PaginationMeta,
    PaginationParams,
    QueryClientConfig,
    QueryEntry,
    QueryKey,
    QueryResult,
    QueryStatus,
    Toast,
    ToastLevel,
    ensure_persisted_id,
    is_entity_persisted,
)
from fleetims.core.interfaces import (
    IEntityClient,
    IQueryStore,
    IToastNotifier,
    ITranslator,
)
from fleetims.core.services import (
    CollectionItemQuery,
    CollectionListQuery,
    CollectionMutation,
    CollectionMutations,
    QueryClient,
    create_collection_item_query,
    create_collection_list_query,
    create_collection_mutations,
)
from fleetims.errors import (
    DuplicateError,
    FleetImsError,
    ForeignKeyError,
    InvalidStateTransitionError,
    NotFoundError,
    NotPersistedError,
    RemoteError,
    ValidationError,
)
from fleetims.hooks import EntityHooks, InventoryHooks, create_inventory_hooks
from fleetims.infrastructure import (
    InMemoryQueryStore,
    InMemoryToastNotifier,
    LoggingToastNotifier,
    TranslationCatalog,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Entity identity
    "BaseDomainEntity",
    "is_entity_persisted",
    "ensure_persisted_id",
    # Query cache
    "QueryClient",
    "QueryClientConfig",
    "QueryEntry",
    "QueryKey",
    "QueryResult",
    "ListQueryResult",
    "QueryStatus",
    "FetchStatus",
    "MutationResult",
    "MutationStatus",
    # Pagination
    "OrderBy",
    "ListParams",
    "PaginationParams",
    "PaginationMeta",
    "PaginatedResult",
    # Toasts
    "Toast",
    "ToastLevel",
    # Collection factories
    "CollectionItemQuery",
    "CollectionListQuery",
    "CollectionMutation",
    "CollectionMutations",
    "create_collection_item_query",
    "create_collection_list_query",
    "create_collection_mutations",
    # Core interfaces
    "IEntityClient",
    "IQueryStore",
    "IToastNotifier",
    "ITranslator",
    # Remote client and hooks
    "EntityClient",
    "InventoryClient",
    "EntityHooks",
    "InventoryHooks",
    "create_inventory_hooks",
    # Infrastructure implementations
    "InMemoryQueryStore",
    "InMemoryToastNotifier",
    "LoggingToastNotifier",
    "TranslationCatalog",
    # Errors
    "FleetImsError",
    "ValidationError",
    "NotPersistedError",
    "NotFoundError",
    "ForeignKeyError",
    "DuplicateError",
    "InvalidStateTransitionError",
    "RemoteError",
]
