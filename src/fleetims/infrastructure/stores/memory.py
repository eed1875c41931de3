"""In-memory query store implementation."""

import time
from collections.abc import Callable
from datetime import timedelta

from cachetools import TTLCache  # type: ignore[import-untyped]

from fleetims.core.entities.query_entry import QueryEntry
from fleetims.core.entities.query_key import QueryKey


class InMemoryQueryStore:
    """In-memory query store using LRU with TTL support.

    The TTL plays the role of the garbage-collection time: entries not
    written for ``gc_time`` disappear. Invalidation rewrites an entry,
    which restarts its clock.
    """

    def __init__(
        self,
        maxsize: int = 1000,
        gc_time: timedelta | None = None,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the in-memory query store.

        Args:
            maxsize: Maximum number of entries kept.
            gc_time: How long an entry lives after its last write.
            timer: Clock used for expiry, injectable for tests.
        """
        self._maxsize = maxsize
        self._gc_time = gc_time or timedelta(minutes=5)
        self._cache: TTLCache[QueryKey, QueryEntry] = TTLCache(
            maxsize=maxsize,
            ttl=self._gc_time.total_seconds(),
            timer=timer,
        )

    def get(self, key: QueryKey) -> QueryEntry | None:
        """Retrieve an entry by key.

        Args:
            key: The query key to look up.

        Returns:
            The entry, or None if missing or expired.
        """
        result = self._cache.get(key)
        return result if isinstance(result, QueryEntry) else None

    def set(self, key: QueryKey, entry: QueryEntry) -> None:
        """Store an entry under a key."""
        self._cache[key] = entry

    def delete(self, key: QueryKey) -> bool:
        """Delete an entry.

        Args:
            key: The query key to delete.

        Returns:
            True if the key existed and was deleted, False otherwise.
        """
        try:
            del self._cache[key]
            return True
        except KeyError:
            return False

    def keys(self) -> list[QueryKey]:
        """Return the keys of all live entries."""
        self._cache.expire()
        return list(self._cache.keys())

    def clear(self) -> None:
        """Clear all entries."""
        self._cache.clear()

    def __len__(self) -> int:
        """Return the number of live entries."""
        self._cache.expire()
        return len(self._cache)

    @property
    def maxsize(self) -> int:
        """Return the maximum number of entries."""
        return self._maxsize
