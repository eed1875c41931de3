"""Factories for reusable collection item and list queries.

Each factory is parameterized by the collection's cache key prefix and a
remote fetch function, and returns an object whose operations take the
QueryClient to read from. One pair of factories serves every entity
type.

Example:
    bus_query = create_collection_item_query("buses", client.buses.get)
    buses_query = create_collection_list_query(
        "buses", client.buses.list_paginated
    )

    page = await buses_query.fetch(query_client, PaginationParams(page=1))
    first = bus_query.initial_result(query_client, page.items[0].id)
    assert first.is_placeholder_data  # seeded from the cached page
"""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Iterable
from typing import Any, Generic, TypeVar

from fleetims.core.entities.entity import is_entity_persisted
from fleetims.core.entities.pagination import PaginatedResult, PaginationParams
from fleetims.core.entities.query_key import QueryKey, QueryKeyLike
from fleetims.core.entities.query_result import (
    FetchStatus,
    ListQueryResult,
    QueryResult,
    QueryStatus,
)
from fleetims.core.services.query_client import QueryClient
from fleetims.errors import FleetImsError

logger = logging.getLogger(__name__)

T = TypeVar("T")

LIST_SEGMENT = "list"


class CollectionItemQuery(Generic[T]):
    """Query for a single record of a collection.

    Before any fetch resolves, the cached lists of the collection are
    searched for the record so a detail view can render immediately.
    """

    def __init__(
        self,
        query_key: QueryKeyLike,
        fetch_item: Callable[[int], Awaitable[T]],
    ) -> None:
        self._prefix = QueryKey.of(query_key)
        self._fetch_item = fetch_item

    @property
    def prefix(self) -> QueryKey:
        return self._prefix

    def query_key_for(self, item_id: int) -> QueryKey:
        return self._prefix.child(item_id)

    def should_fetch(self, item_id: Any, enabled: bool = True) -> bool:
        """Only positive integer ids of enabled queries reach the network."""
        return (
            enabled
            and isinstance(item_id, int)
            and is_entity_persisted(item_id)
        )

    def initial_result(
        self,
        client: QueryClient,
        item_id: Any,
        enabled: bool = True,
    ) -> QueryResult[T]:
        """Return the state a consumer sees before any fetch resolves.

        Args:
            client: The query client holding the cache.
            item_id: Identifier of the record.
            enabled: Whether the consumer allows fetching.

        Returns:
            A success result seeded from the cache, or a pending result.
        """
        fetching = self.should_fetch(item_id, enabled)
        fetch_status = FetchStatus.FETCHING if fetching else FetchStatus.IDLE

        if not is_entity_persisted(item_id):
            return QueryResult(status=QueryStatus.PENDING, fetch_status=fetch_status)

        entry = client.get_query_entry(self.query_key_for(item_id))
        if entry is not None:
            if fetching and not entry.is_stale(client.config.stale_time):
                fetch_status = FetchStatus.IDLE
            return QueryResult(
                status=QueryStatus.SUCCESS,
                data=entry.data,
                fetch_status=fetch_status,
                updated_at=entry.updated_at,
            )

        seed = self.find_in_lists(client, item_id)
        if seed is not None:
            return QueryResult(
                status=QueryStatus.SUCCESS,
                data=seed,
                fetch_status=fetch_status,
                is_placeholder_data=True,
            )

        return QueryResult(status=QueryStatus.PENDING, fetch_status=fetch_status)

    def find_in_lists(self, client: QueryClient, item_id: Any) -> T | None:
        """Search every cached list of the collection for a record.

        Args:
            client: The query client holding the cache.
            item_id: Identifier to look for.

        Returns:
            The cached record, or None.
        """
        item_key_size = len(self._prefix) + 1
        for key, data in client.get_queries_data(self._prefix):
            if len(key) == item_key_size and isinstance(key.parts[-1], int):
                continue  # single-record entry, not a list
            for record in _records_in(data):
                if _record_id(record) == item_id:
                    logger.debug("Seeded %s from cached list %s", item_id, key)
                    return record
        return None

    async def fetch(
        self,
        client: QueryClient,
        item_id: Any,
        enabled: bool = True,
    ) -> QueryResult[T]:
        """Resolve the record through the cache.

        Disabled queries and invalid ids never reach the network; they
        return the initial state.

        Args:
            client: The query client holding the cache.
            item_id: Identifier of the record.
            enabled: Whether the consumer allows fetching.

        Returns:
            The settled query state.
        """
        if not self.should_fetch(item_id, enabled):
            return self.initial_result(client, item_id, enabled=False)

        key = self.query_key_for(item_id)
        try:
            data = await client.fetch_query(key, lambda: self._fetch_item(item_id))
        except FleetImsError as error:
            logger.debug("Fetching %s failed: %s", key, error.code)
            return QueryResult(status=QueryStatus.ERROR, error=error)

        entry = client.get_query_entry(key)
        return QueryResult(
            status=QueryStatus.SUCCESS,
            data=data,
            updated_at=entry.updated_at if entry is not None else None,
        )

    async def observe(
        self,
        client: QueryClient,
        item_id: Any,
        enabled: bool = True,
    ) -> AsyncIterator[QueryResult[T]]:
        """Yield the initial state, then the settled state if a fetch runs."""
        initial = self.initial_result(client, item_id, enabled=enabled)
        yield initial
        if initial.is_fetching:
            yield await self.fetch(client, item_id, enabled=enabled)


class CollectionListQuery(Generic[T]):
    """Query for one page of a collection.

    Filtering, ordering and pagination are passed through to the remote
    side untouched; nothing is re-sorted or re-filtered locally.
    """

    def __init__(
        self,
        query_key: QueryKeyLike,
        fetch_page: Callable[[PaginationParams], Awaitable[PaginatedResult[Any]]],
    ) -> None:
        self._prefix = QueryKey.of(query_key)
        self._fetch_page = fetch_page

    @property
    def prefix(self) -> QueryKey:
        return self._prefix

    def query_key_for(self, params: PaginationParams | None = None) -> QueryKey:
        params = params or PaginationParams()
        return self._prefix.child(LIST_SEGMENT, params.cache_segment())

    def initial_result(
        self,
        client: QueryClient,
        params: PaginationParams | None = None,
        enabled: bool = True,
    ) -> ListQueryResult:
        """Return the state a consumer sees before any fetch resolves."""
        entry = client.get_query_entry(self.query_key_for(params))
        if entry is None:
            return ListQueryResult(
                status=QueryStatus.PENDING,
                fetch_status=FetchStatus.FETCHING if enabled else FetchStatus.IDLE,
            )

        fetching = enabled and entry.is_stale(client.config.stale_time)
        return ListQueryResult(
            status=QueryStatus.SUCCESS,
            data=entry.data,
            fetch_status=FetchStatus.FETCHING if fetching else FetchStatus.IDLE,
            updated_at=entry.updated_at,
        )

    async def fetch(
        self,
        client: QueryClient,
        params: PaginationParams | None = None,
        enabled: bool = True,
    ) -> ListQueryResult:
        """Resolve a page through the cache.

        Args:
            client: The query client holding the cache.
            params: Page, ordering, filters and search term.
            enabled: Whether the consumer allows fetching.

        Returns:
            The settled query state.
        """
        params = params or PaginationParams()
        if not enabled:
            return self.initial_result(client, params, enabled=False)

        key = self.query_key_for(params)
        try:
            page = await client.fetch_query(key, lambda: self._fetch_page(params))
        except FleetImsError as error:
            logger.debug("Fetching %s failed: %s", key, error.code)
            return ListQueryResult(status=QueryStatus.ERROR, error=error)

        entry = client.get_query_entry(key)
        return ListQueryResult(
            status=QueryStatus.SUCCESS,
            data=page,
            updated_at=entry.updated_at if entry is not None else None,
        )

    async def observe(
        self,
        client: QueryClient,
        params: PaginationParams | None = None,
        enabled: bool = True,
    ) -> AsyncIterator[ListQueryResult]:
        """Yield the initial state, then the settled state if a fetch runs."""
        initial = self.initial_result(client, params, enabled=enabled)
        yield initial
        if initial.is_fetching:
            yield await self.fetch(client, params, enabled=enabled)


def create_collection_item_query(
    query_key: QueryKeyLike,
    fetch_item: Callable[[int], Awaitable[T]],
) -> CollectionItemQuery[T]:
    """Create the single-record query for a collection.

    Args:
        query_key: Cache key prefix of the owning collection.
        fetch_item: Remote fetch by identifier.

    Returns:
        The item query.
    """
    return CollectionItemQuery(query_key, fetch_item)


def create_collection_list_query(
    query_key: QueryKeyLike,
    fetch_page: Callable[[PaginationParams], Awaitable[PaginatedResult[Any]]],
) -> CollectionListQuery[Any]:
    """Create the paginated list query for a collection.

    Args:
        query_key: Cache key prefix of the collection.
        fetch_page: Remote paginated fetch.

    Returns:
        The list query.
    """
    return CollectionListQuery(query_key, fetch_page)


def _records_in(data: Any) -> Iterable[Any]:
    if isinstance(data, PaginatedResult):
        return data.data
    if isinstance(data, (list, tuple)):
        return data
    if isinstance(data, dict) and isinstance(data.get("data"), list):
        return data["data"]
    records = getattr(data, "data", None)
    if isinstance(records, list):
        return records
    return ()


def _record_id(record: Any) -> Any:
    if isinstance(record, dict):
        return record.get("id")
    return getattr(record, "id", None)
