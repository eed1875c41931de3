"""Query cache entry entity."""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Any

from fleetims.core.entities.query_key import QueryKey


@dataclass(frozen=True)
class QueryEntry:
    """Immutable cache entry value object.

    Holds the last fetched value for a query key with the time it was
    fetched. Invalidation flags the entry instead of removing it, so
    consumers can keep showing the previous value while it is refetched.
    """

    key: QueryKey
    data: Any
    updated_at: datetime
    invalidated: bool = False

    def age(self, now: datetime | None = None) -> timedelta:
        """Return how long ago the data was fetched."""
        return (now or datetime.now(timezone.utc)) - self.updated_at

    def is_stale(self, stale_time: timedelta, now: datetime | None = None) -> bool:
        """Check whether the entry must be refetched before being trusted.

        Args:
            stale_time: How long fetched data stays fresh.
            now: Reference time, defaults to the current time.

        Returns:
            True if invalidated or older than ``stale_time``.
        """
        if self.invalidated:
            return True
        return self.age(now) >= stale_time

    def mark_invalidated(self) -> "QueryEntry":
        """Return a copy flagged as invalidated."""
        return replace(self, invalidated=True)

    @classmethod
    def create(cls, key: QueryKey, data: Any) -> "QueryEntry":
        """Factory method for a freshly fetched entry.

        Args:
            key: The query key.
            data: The fetched value.

        Returns:
            A new, valid QueryEntry stamped with the current time.
        """
        return cls(
            key=key,
            data=data,
            updated_at=datetime.now(timezone.utc),
        )
