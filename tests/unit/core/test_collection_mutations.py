"""Tests for the collection mutation factory."""

from typing import Any

import pytest

from fleetims import (
    DuplicateError,
    InMemoryToastNotifier,
    MutationStatus,
    NotPersistedError,
    QueryClient,
    TranslationCatalog,
    ValidationError,
    create_collection_mutations,
)
from fleetims.core.entities.toast import ToastLevel


class FakeModelApi:
    """Remote double for bus models."""

    def __init__(self) -> None:
        self.next_id = 1
        self.calls: list[tuple[str, Any]] = []
        self.fail_with: Exception | None = None

    async def create(self, payload: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(("create", payload))
        if self.fail_with is not None:
            raise self.fail_with
        record = {"id": self.next_id, **payload}
        self.next_id += 1
        return record

    async def update(self, entity_id: int, payload: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(("update", entity_id))
        if self.fail_with is not None:
            raise self.fail_with
        return {"id": entity_id, **payload}

    async def delete(self, entity_id: int) -> dict[str, Any]:
        self.calls.append(("delete", entity_id))
        return {"id": entity_id}


@pytest.fixture
def api() -> FakeModelApi:
    return FakeModelApi()


@pytest.fixture
def mutations(
    api: FakeModelApi,
    translator: TranslationCatalog,
    notifier: InMemoryToastNotifier,
) -> Any:
    return create_collection_mutations(
        "busModels",
        "busModels",
        create=api.create,
        update=api.update,
        delete=api.delete,
        translator=translator,
        notifier=notifier,
    )


@pytest.fixture
def populated_client(query_client: QueryClient) -> QueryClient:
    """A cache holding bus model queries and an unrelated driver query."""
    query_client.set_query_data(["busModels", "list", {"page": 1}], [{"id": 1}])
    query_client.set_query_data(["busModels", 1], {"id": 1})
    query_client.set_query_data(["drivers", 1], {"id": 1})
    return query_client


def snapshot(client: QueryClient) -> dict[Any, tuple[Any, bool]]:
    entries = client.find_queries("busModels") + client.find_queries("drivers")
    return {entry.key: (entry.data, entry.invalidated) for entry in entries}


class TestCreateMutation:
    """Tests for the create mutation."""

    @pytest.mark.asyncio
    async def test_success_invalidates_once_and_toasts(
        self,
        mutations: Any,
        populated_client: QueryClient,
        notifier: InMemoryToastNotifier,
    ) -> None:
        """Test one prefix invalidation and a success toast."""
        record = await mutations.create.mutate_async(
            populated_client, {"manufacturer": "Volvo"}
        )

        assert record["id"] == 1
        assert populated_client.stats["invalidations"] == 1
        assert notifier.levels() == [ToastLevel.LOADING, ToastLevel.SUCCESS]
        assert notifier.toasts[0].message == "Bus model created successfully"

    @pytest.mark.asyncio
    async def test_success_marks_every_query_under_prefix(
        self, mutations: Any, populated_client: QueryClient
    ) -> None:
        """Test that all busModels queries are stale and others untouched."""
        await mutations.create.mutate_async(populated_client, {})

        assert populated_client.get_query_entry(["busModels", 1]).invalidated
        assert populated_client.get_query_entry(
            ["busModels", "list", {"page": 1}]
        ).invalidated
        assert not populated_client.get_query_entry(["drivers", 1]).invalidated

    @pytest.mark.asyncio
    async def test_cache_is_never_patched(
        self, mutations: Any, populated_client: QueryClient
    ) -> None:
        """Test that the returned record is not written into any query."""
        await mutations.create.mutate_async(populated_client, {"model": "new"})

        assert populated_client.get_query_data(
            ["busModels", "list", {"page": 1}]
        ) == [{"id": 1}]

    @pytest.mark.asyncio
    async def test_failure_leaves_cache_unchanged(
        self,
        mutations: Any,
        api: FakeModelApi,
        populated_client: QueryClient,
        notifier: InMemoryToastNotifier,
    ) -> None:
        """Test zero invalidations and an error toast on rejection."""
        before = snapshot(populated_client)
        api.fail_with = DuplicateError("Bus model already exists")

        with pytest.raises(DuplicateError):
            await mutations.create.mutate_async(populated_client, {})

        assert snapshot(populated_client) == before
        assert populated_client.stats["invalidations"] == 0
        assert notifier.levels() == [ToastLevel.LOADING, ToastLevel.ERROR]
        toast = notifier.toasts[0]
        assert toast.message == "Failed to create bus model"
        assert toast.description == "Bus model already exists"

    @pytest.mark.asyncio
    async def test_mutate_returns_error_result(
        self, mutations: Any, api: FakeModelApi, query_client: QueryClient
    ) -> None:
        """Test that mutate reports failures instead of raising."""
        api.fail_with = ValidationError("year out of range")

        result = await mutations.create.mutate(query_client, {})

        assert result.status is MutationStatus.ERROR
        assert isinstance(result.error, ValidationError)

    @pytest.mark.asyncio
    async def test_mutate_returns_success_result(
        self, mutations: Any, query_client: QueryClient
    ) -> None:
        """Test that mutate wraps the created record."""
        result = await mutations.create.mutate(query_client, {"model": "9800"})

        assert result.is_success
        assert result.data["model"] == "9800"

    @pytest.mark.asyncio
    async def test_unexpected_errors_propagate(
        self,
        mutations: Any,
        api: FakeModelApi,
        query_client: QueryClient,
    ) -> None:
        """Test that non-domain exceptions are not turned into results."""
        api.fail_with = RuntimeError("bug")

        with pytest.raises(RuntimeError):
            await mutations.create.mutate(query_client, {})
        assert query_client.stats["invalidations"] == 0


class TestUpdateDeleteMutations:
    """Tests for update and delete."""

    @pytest.mark.asyncio
    async def test_update_requires_persisted_id(
        self,
        mutations: Any,
        api: FakeModelApi,
        query_client: QueryClient,
        notifier: InMemoryToastNotifier,
    ) -> None:
        """Test that a transient id fails before any toast or remote call."""
        with pytest.raises(NotPersistedError):
            await mutations.update.mutate_async(query_client, 0, {})

        assert api.calls == []
        assert query_client.stats["invalidations"] == 0
        assert notifier.levels() == [ToastLevel.ERROR]
        assert notifier.toasts[0].message == "Failed to update bus model"

    @pytest.mark.asyncio
    async def test_update_refuses_fractional_id(
        self,
        mutations: Any,
        api: FakeModelApi,
        query_client: QueryClient,
    ) -> None:
        """Test that 2.5 is refused rather than sent as record 2."""
        result = await mutations.update.mutate(query_client, 2.5, {"model": "x"})

        assert isinstance(result.error, NotPersistedError)
        assert api.calls == []

    @pytest.mark.asyncio
    async def test_integral_float_id_is_sent_as_int(
        self,
        mutations: Any,
        api: FakeModelApi,
        query_client: QueryClient,
    ) -> None:
        """Test that the remote call receives the normalized id."""
        await mutations.delete.mutate_async(query_client, 4.0)

        assert api.calls == [("delete", 4)]
        assert isinstance(api.calls[0][1], int)

    @pytest.mark.asyncio
    async def test_delete_requires_persisted_id(
        self, mutations: Any, api: FakeModelApi, query_client: QueryClient
    ) -> None:
        """Test that delete refuses a missing id."""
        result = await mutations.delete.mutate(query_client, None)

        assert result.is_error
        assert api.calls == []

    @pytest.mark.asyncio
    async def test_update_success(
        self,
        mutations: Any,
        api: FakeModelApi,
        populated_client: QueryClient,
        notifier: InMemoryToastNotifier,
    ) -> None:
        """Test the update flow end to end."""
        record = await mutations.update.mutate_async(
            populated_client, 1, {"model": "9900"}
        )

        assert record == {"id": 1, "model": "9900"}
        assert api.calls == [("update", 1)]
        assert populated_client.get_query_entry(["busModels", 1]).invalidated
        assert notifier.toasts[0].message == "Bus model updated successfully"

    @pytest.mark.asyncio
    async def test_delete_success(
        self,
        mutations: Any,
        populated_client: QueryClient,
        notifier: InMemoryToastNotifier,
    ) -> None:
        """Test the delete flow end to end."""
        await mutations.delete.mutate_async(populated_client, 1)

        assert populated_client.stats["invalidations"] == 1
        assert notifier.toasts[0].message == "Bus model deleted successfully"


class TestDefaults:
    """Tests for default collaborators."""

    @pytest.mark.asyncio
    async def test_default_catalog_is_spanish(
        self, api: FakeModelApi, query_client: QueryClient
    ) -> None:
        """Test that the bundled es-MX messages are used by default."""
        mutations = create_collection_mutations(
            "busModels",
            "busModels",
            create=api.create,
            update=api.update,
            delete=api.delete,
        )

        assert mutations.create.messages.loading == "Creando el modelo de autobús..."
        await mutations.create.mutate_async(query_client, {})
