"""Result objects produced by query and mutation operations."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Generic, TypeVar

from fleetims.core.entities.pagination import PaginatedResult, PaginationMeta
from fleetims.errors import FleetImsError, is_not_found

T = TypeVar("T")


class QueryStatus(str, Enum):
    """Whether a query has data, an error, or neither yet."""

    PENDING = "pending"
    ERROR = "error"
    SUCCESS = "success"


class FetchStatus(str, Enum):
    """Whether a fetch is running for the query."""

    IDLE = "idle"
    FETCHING = "fetching"


class MutationStatus(str, Enum):
    """Lifecycle of a single mutation call."""

    IDLE = "idle"
    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class QueryResult(Generic[T]):
    """Immutable snapshot of a query's state."""

    status: QueryStatus
    data: T | None = None
    error: FleetImsError | None = None
    fetch_status: FetchStatus = FetchStatus.IDLE
    is_placeholder_data: bool = False
    updated_at: datetime | None = None

    @property
    def is_pending(self) -> bool:
        return self.status is QueryStatus.PENDING

    @property
    def is_success(self) -> bool:
        return self.status is QueryStatus.SUCCESS

    @property
    def is_error(self) -> bool:
        return self.status is QueryStatus.ERROR

    @property
    def is_fetching(self) -> bool:
        return self.fetch_status is FetchStatus.FETCHING

    @property
    def is_loading(self) -> bool:
        """True while there is no data yet and a fetch is running."""
        return self.is_pending and self.is_fetching

    @property
    def is_not_found(self) -> bool:
        return is_not_found(self.error)

    @classmethod
    def pending(cls, fetching: bool = False) -> "QueryResult[Any]":
        return cls(
            status=QueryStatus.PENDING,
            fetch_status=FetchStatus.FETCHING if fetching else FetchStatus.IDLE,
        )


@dataclass(frozen=True)
class ListQueryResult(QueryResult[PaginatedResult[Any]]):
    """Query snapshot for one page of a collection."""

    @property
    def items(self) -> list[Any]:
        """Records of the current page, empty until data arrives."""
        if self.data is None:
            return []
        return list(self.data.data)

    @property
    def pagination(self) -> PaginationMeta | None:
        if self.data is None:
            return None
        return self.data.pagination


@dataclass(frozen=True)
class MutationResult(Generic[T]):
    """Outcome of a single mutation call."""

    status: MutationStatus
    data: T | None = None
    error: FleetImsError | None = None

    @property
    def is_success(self) -> bool:
        return self.status is MutationStatus.SUCCESS

    @property
    def is_error(self) -> bool:
        return self.status is MutationStatus.ERROR
