"""Tests for InMemoryQueryStore."""

from datetime import timedelta

import pytest

from fleetims import InMemoryQueryStore, QueryEntry, QueryKey


class FakeTimer:
    """Manually advanced clock."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def entry(*parts: object) -> QueryEntry:
    return QueryEntry.create(QueryKey.of(parts), list(parts))


class TestInMemoryQueryStore:
    """Tests for InMemoryQueryStore."""

    @pytest.fixture
    def timer(self) -> FakeTimer:
        return FakeTimer()

    @pytest.fixture
    def store(self, timer: FakeTimer) -> InMemoryQueryStore:
        """Create a store with a controllable clock."""
        return InMemoryQueryStore(
            maxsize=3, gc_time=timedelta(seconds=60), timer=timer
        )

    def test_set_and_get(self, store: InMemoryQueryStore) -> None:
        """Test basic set and get operations."""
        e = entry("buses", 1)
        store.set(e.key, e)
        assert store.get(e.key) is e

    def test_get_missing_key(self, store: InMemoryQueryStore) -> None:
        """Test getting a missing key returns None."""
        assert store.get(QueryKey.of("nope")) is None

    def test_delete(self, store: InMemoryQueryStore) -> None:
        """Test deleting a key."""
        e = entry("buses", 1)
        store.set(e.key, e)

        assert store.delete(e.key) is True
        assert store.get(e.key) is None
        assert store.delete(e.key) is False

    def test_entries_are_collected_after_gc_time(
        self, store: InMemoryQueryStore, timer: FakeTimer
    ) -> None:
        """Test that entries expire after the garbage-collection time."""
        e = entry("buses", 1)
        store.set(e.key, e)

        timer.now = 59
        assert store.get(e.key) is e

        timer.now = 61
        assert store.get(e.key) is None
        assert store.keys() == []
        assert len(store) == 0

    def test_size_bound(self, store: InMemoryQueryStore) -> None:
        """Test that the store never holds more than maxsize entries."""
        for i in range(5):
            e = entry("buses", i)
            store.set(e.key, e)

        assert len(store) == 3
        assert store.maxsize == 3

    def test_keys_and_clear(self, store: InMemoryQueryStore) -> None:
        """Test listing and clearing keys."""
        first, second = entry("buses", 1), entry("drivers", 1)
        store.set(first.key, first)
        store.set(second.key, second)

        assert set(store.keys()) == {first.key, second.key}

        store.clear()
        assert len(store) == 0
