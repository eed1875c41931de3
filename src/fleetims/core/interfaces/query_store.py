"""Query store interface."""

from typing import Protocol

from fleetims.core.entities.query_entry import QueryEntry
from fleetims.core.entities.query_key import QueryKey


class IQueryStore(Protocol):
    """Contract for query cache storage.

    Stores are synchronous: a consumer must be able to read cached data
    in the same step that renders it, before any fetch completes.
    """

    def get(self, key: QueryKey) -> QueryEntry | None:
        """Retrieve an entry by key.

        Args:
            key: The query key to look up.

        Returns:
            The entry, or None if missing or garbage-collected.
        """
        ...

    def set(self, key: QueryKey, entry: QueryEntry) -> None:
        """Store an entry under a key.

        Args:
            key: The query key.
            entry: The entry to store.
        """
        ...

    def delete(self, key: QueryKey) -> bool:
        """Delete an entry.

        Args:
            key: The query key to delete.

        Returns:
            True if the key existed and was deleted, False otherwise.
        """
        ...

    def keys(self) -> list[QueryKey]:
        """Return the keys of all live entries."""
        ...

    def clear(self) -> None:
        """Remove every entry."""
        ...

    def __len__(self) -> int:
        ...
