"""Query key value object."""

from collections.abc import Hashable, Iterable
from dataclasses import dataclass
from typing import Any, Union

from fleetims.utils.normalize import normalize_segment

QueryKeyLike = Union["QueryKey", str, Iterable[Any]]


@dataclass(frozen=True)
class QueryKey:
    """Immutable, ordered cache key.

    The first segment names the collection; the following segments scope
    the query (identifiers, filter objects, pagination parameters).
    Prefix matching on the segments is the only invalidation mechanism.
    """

    parts: tuple[Hashable, ...]

    def __post_init__(self) -> None:
        if not self.parts:
            raise ValueError("A query key needs at least one segment")

    @classmethod
    def of(cls, key: QueryKeyLike) -> "QueryKey":
        """Build a QueryKey from a key, a single name or a sequence of segments.

        Args:
            key: An existing QueryKey, a collection name, or raw segments.

        Returns:
            A normalized QueryKey.
        """
        if isinstance(key, QueryKey):
            return key
        if isinstance(key, str):
            return cls((key,))
        return cls(tuple(normalize_segment(part) for part in key))

    @property
    def collection(self) -> Hashable:
        """Return the leading segment."""
        return self.parts[0]

    def child(self, *segments: Any) -> "QueryKey":
        """Return a longer key scoped under this one."""
        return QueryKey(
            self.parts + tuple(normalize_segment(part) for part in segments)
        )

    def starts_with(self, prefix: QueryKeyLike) -> bool:
        """Check whether this key lies under the given prefix.

        Args:
            prefix: The prefix to test.

        Returns:
            True if the leading segments equal the prefix segments.
        """
        prefix_key = QueryKey.of(prefix)
        size = len(prefix_key.parts)
        return self.parts[:size] == prefix_key.parts

    def __len__(self) -> int:
        return len(self.parts)

    def __str__(self) -> str:
        return ":".join(str(part) for part in self.parts)
