"""Domain entities for fleetims."""

from fleetims.core.entities.entity import (
    BaseDomainEntity,
    ensure_persisted_id,
    is_entity_persisted,
)
from fleetims.core.entities.pagination import (
    ListParams,
    ListResult,
    OrderBy,
    PaginatedResult,
    PaginationMeta,
    PaginationParams,
)
from fleetims.core.entities.query_config import QueryClientConfig
from fleetims.core.entities.query_entry import QueryEntry
from fleetims.core.entities.query_key import QueryKey, QueryKeyLike
from fleetims.core.entities.query_result import (
    FetchStatus,
    ListQueryResult,
    MutationResult,
    MutationStatus,
    QueryResult,
    QueryStatus,
)
from fleetims.core.entities.toast import Toast, ToastLevel, ToastMessages

__all__ = [
    "BaseDomainEntity",
    "is_entity_persisted",
    "ensure_persisted_id",
    "QueryClientConfig",
    "QueryEntry",
    "QueryKey",
    "QueryKeyLike",
    "QueryResult",
    "ListQueryResult",
    "QueryStatus",
    "FetchStatus",
    "MutationResult",
    "MutationStatus",
    "OrderBy",
    "ListParams",
    "ListResult",
    "PaginationParams",
    "PaginationMeta",
    "PaginatedResult",
    "Toast",
    "ToastLevel",
    "ToastMessages",
]
