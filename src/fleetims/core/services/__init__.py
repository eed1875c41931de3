"""Core services for fleetims."""

from fleetims.core.services.collection_mutations import (
    CollectionMutation,
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

__all__ = [
    "QueryClient",
    "CollectionItemQuery",
    "CollectionListQuery",
    "CollectionMutation",
    "CollectionMutations",
    "create_collection_item_query",
    "create_collection_list_query",
    "create_collection_mutations",
]
