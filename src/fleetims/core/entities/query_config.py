"""Query client configuration entity."""

from dataclasses import dataclass
from datetime import timedelta


@dataclass
class QueryClientConfig:
    """Query client configuration.

    Freshness and garbage collection follow the usual query-cache model:
    data younger than ``stale_time`` is served without a refetch, and
    entries nobody touched for ``gc_time`` are dropped from the store.

    Retries:
        Only remote failures are retried. Not-found and validation
        errors are final on the first attempt.
    """

    stale_time: timedelta | None = None
    gc_time: timedelta | None = None
    max_queries: int = 1000

    retry: int = 0
    retry_delay: float = 0.0  # seconds between attempts

    def __post_init__(self) -> None:
        """Set default durations if not provided."""
        if self.stale_time is None:
            self.stale_time = timedelta(minutes=1)
        if self.gc_time is None:
            self.gc_time = timedelta(minutes=5)
        if self.retry < 0:
            raise ValueError("retry must be zero or positive")
