"""Query client - main orchestrator for cached queries."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import timedelta
from typing import Any, TypeVar

from fleetims.core.entities.query_config import QueryClientConfig
from fleetims.core.entities.query_entry import QueryEntry
from fleetims.core.entities.query_key import QueryKey, QueryKeyLike
from fleetims.core.interfaces.query_store import IQueryStore
from fleetims.errors import RemoteError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class QueryClient:
    """Service that owns the query cache.

    Maps query keys to cached entries, coalesces concurrent fetches for
    the same key, and invalidates by key prefix. Mutations never write
    into the cache; they only invalidate.
    """

    def __init__(
        self,
        store: IQueryStore | None = None,
        config: QueryClientConfig | None = None,
    ) -> None:
        """Initialize the query client.

        Args:
            store: The store holding entries. Defaults to an in-memory store
                sized from the configuration.
            config: Optional configuration. Uses defaults if not provided.
        """
        self._config = config or QueryClientConfig()
        if store is None:
            from fleetims.infrastructure.stores.memory import InMemoryQueryStore

            store = InMemoryQueryStore(
                maxsize=self._config.max_queries,
                gc_time=self._config.gc_time,
            )
        self._store = store
        self._in_flight: dict[QueryKey, asyncio.Task[Any]] = {}
        # Bumped when an in-flight fetch is invalidated; older results are dropped.
        self._generations: dict[QueryKey, int] = {}

        # Statistics
        self._hits = 0
        self._misses = 0
        self._fetches = 0
        self._invalidations = 0

    @property
    def config(self) -> QueryClientConfig:
        """Get the client configuration."""
        return self._config

    @property
    def store(self) -> IQueryStore:
        return self._store

    @property
    def stats(self) -> dict[str, int]:
        """Get cache statistics.

        Returns:
            Dictionary with hits, misses, fetches, invalidations and total
            requests.
        """
        return {
            "hits": self._hits,
            "misses": self._misses,
            "fetches": self._fetches,
            "invalidations": self._invalidations,
            "total": self._hits + self._misses,
        }

    def get_query_entry(self, key: QueryKeyLike) -> QueryEntry | None:
        return self._store.get(QueryKey.of(key))

    def get_query_data(self, key: QueryKeyLike) -> Any | None:
        """Return the cached value for a key, stale or not.

        Args:
            key: The query key.

        Returns:
            The cached value, or None if nothing is cached.
        """
        entry = self._store.get(QueryKey.of(key))
        return entry.data if entry is not None else None

    def set_query_data(self, key: QueryKeyLike, data: Any) -> QueryEntry:
        """Store a value as freshly fetched.

        Args:
            key: The query key.
            data: The value to cache.

        Returns:
            The stored entry.
        """
        query_key = QueryKey.of(key)
        entry = QueryEntry.create(query_key, data)
        self._store.set(query_key, entry)
        return entry

    def find_queries(self, prefix: QueryKeyLike) -> list[QueryEntry]:
        """Return every cached entry whose key starts with the prefix."""
        prefix_key = QueryKey.of(prefix)
        entries = []
        for key in self._store.keys():
            if not key.starts_with(prefix_key):
                continue
            entry = self._store.get(key)
            if entry is not None:
                entries.append(entry)
        return entries

    def get_queries_data(self, prefix: QueryKeyLike) -> list[tuple[QueryKey, Any]]:
        """Return ``(key, data)`` pairs for every entry under the prefix."""
        return [(entry.key, entry.data) for entry in self.find_queries(prefix)]

    def is_fetching(self, key: QueryKeyLike) -> bool:
        return QueryKey.of(key) in self._in_flight

    async def fetch_query(
        self,
        key: QueryKeyLike,
        fetcher: Callable[[], Awaitable[T]],
        stale_time: timedelta | None = None,
    ) -> T:
        """Return the data for a key, fetching it when missing or stale.

        Concurrent calls for the same key share one in-flight fetch. A
        caller that is cancelled while waiting does not abort the shared
        fetch. A failed fetch leaves the cache untouched.

        Args:
            key: The query key.
            fetcher: Zero-argument coroutine function performing the fetch.
            stale_time: Overrides the configured stale time for this call.

        Returns:
            The fresh or freshly fetched data.

        Raises:
            FleetImsError: Whatever the fetcher raised on its last attempt.
        """
        query_key = QueryKey.of(key)
        effective_stale_time = (
            stale_time if stale_time is not None else self._config.stale_time
        )

        entry = self._store.get(query_key)
        if entry is not None and not entry.is_stale(effective_stale_time):
            self._hits += 1
            logger.debug("Query hit: %s", query_key)
            return entry.data

        self._misses += 1
        task = self._in_flight.get(query_key)
        if task is None:
            logger.debug("Query miss, fetching: %s", query_key)
            generation = self._generations.get(query_key, 0)
            task = asyncio.ensure_future(
                self._run_fetch(query_key, fetcher, generation)
            )
            self._in_flight[query_key] = task
            task.add_done_callback(
                lambda done, k=query_key: self._forget_in_flight(k, done)
            )
        else:
            logger.debug("Query miss, joining in-flight fetch: %s", query_key)

        return await asyncio.shield(task)

    def invalidate_queries(self, prefix: QueryKeyLike) -> int:
        """Flag every entry under the prefix as stale.

        Flagged entries keep their data until the next fetch replaces it.
        Fetches already in flight under the prefix are detached: their
        current awaiters still get the result, but it is not cached and
        later callers start a new fetch.

        Args:
            prefix: The key prefix, usually the collection name.

        Returns:
            Number of entries invalidated.
        """
        prefix_key = QueryKey.of(prefix)
        count = 0
        for entry in self.find_queries(prefix_key):
            self._store.set(entry.key, entry.mark_invalidated())
            count += 1

        for key in [k for k in self._in_flight if k.starts_with(prefix_key)]:
            del self._in_flight[key]
            self._generations[key] = self._generations.get(key, 0) + 1
            logger.debug("Detached in-flight fetch: %s", key)

        self._invalidations += 1
        logger.info("Invalidated %d queries under %s", count, prefix_key)
        return count

    def remove_queries(self, prefix: QueryKeyLike) -> int:
        """Drop every entry under the prefix.

        Args:
            prefix: The key prefix.

        Returns:
            Number of entries removed.
        """
        count = 0
        for entry in self.find_queries(prefix):
            if self._store.delete(entry.key):
                count += 1
        return count

    def clear(self) -> None:
        """Clear all cached entries and reset statistics."""
        self._store.clear()
        self._hits = 0
        self._misses = 0
        self._fetches = 0
        self._invalidations = 0

    async def _run_fetch(
        self,
        key: QueryKey,
        fetcher: Callable[[], Awaitable[T]],
        generation: int,
    ) -> T:
        attempt = 0
        while True:
            self._fetches += 1
            try:
                data = await fetcher()
            except RemoteError as error:
                if attempt >= self._config.retry:
                    raise
                attempt += 1
                logger.warning(
                    "Fetch for %s failed (%s), retry %d of %d",
                    key,
                    error.code,
                    attempt,
                    self._config.retry,
                )
                await asyncio.sleep(self._config.retry_delay)
                continue

            if self._generations.get(key, 0) == generation:
                self._store.set(key, QueryEntry.create(key, data))
            else:
                logger.debug("Dropped result of invalidated fetch: %s", key)
            return data

    def _forget_in_flight(self, key: QueryKey, task: asyncio.Task[Any]) -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]
        # Mark the exception retrieved; awaiters already re-raise it.
        if not task.cancelled():
            task.exception()
