"""Factory for create/update/delete mutations of a collection."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from fleetims.core.entities.entity import ensure_persisted_id
from fleetims.core.entities.query_key import QueryKey, QueryKeyLike
from fleetims.core.entities.query_result import MutationResult, MutationStatus
from fleetims.core.entities.toast import ToastMessages
from fleetims.core.interfaces.notifier import IToastNotifier
from fleetims.core.interfaces.translator import ITranslator
from fleetims.core.services.query_client import QueryClient
from fleetims.errors import FleetImsError

logger = logging.getLogger(__name__)

T = TypeVar("T")

CREATE = "create"
UPDATE = "update"
DELETE = "delete"


class CollectionMutation(Generic[T]):
    """A remote write that reports through toasts and invalidates on success.

    The cache is never patched with the returned record. A successful
    call flags every query under the collection prefix so that views
    refetch; a failed call leaves the cache exactly as it was.
    """

    def __init__(
        self,
        query_key: QueryKeyLike,
        namespace: str,
        action: str,
        mutation_fn: Callable[..., Awaitable[T]],
        translator: ITranslator,
        notifier: IToastNotifier,
        requires_id: bool = False,
    ) -> None:
        self._prefix = QueryKey.of(query_key)
        self._namespace = namespace
        self._action = action
        self._mutation_fn = mutation_fn
        self._translator = translator
        self._notifier = notifier
        self._requires_id = requires_id

    @property
    def action(self) -> str:
        return self._action

    @property
    def prefix(self) -> QueryKey:
        return self._prefix

    @property
    def messages(self) -> ToastMessages:
        return ToastMessages.for_action(
            self._translator, self._namespace, self._action
        )

    async def mutate_async(self, client: QueryClient, *args: Any, **kwargs: Any) -> T:
        """Run the mutation and raise on failure.

        Args:
            client: The query client whose cache is invalidated on success.
            *args: Forwarded to the wrapped remote call.
            **kwargs: Forwarded to the wrapped remote call.

        Returns:
            The record returned by the remote call.

        Raises:
            NotPersistedError: If the mutation targets a record by id and
                the id is transient. Only an error toast is shown.
            FleetImsError: The typed error of the failed call.
        """
        messages = self.messages
        try:
            args, kwargs = self._checked_arguments(args, kwargs)
        except FleetImsError as error:
            self._report_failure(messages, error)
            raise

        toast_id = self._notifier.loading(messages.loading)
        try:
            data = await self._mutation_fn(*args, **kwargs)
        except FleetImsError as error:
            self._report_failure(messages, error, toast_id)
            raise

        client.invalidate_queries(self._prefix)
        self._notifier.success(messages.success, toast_id=toast_id)
        return data

    async def mutate(
        self, client: QueryClient, *args: Any, **kwargs: Any
    ) -> MutationResult[T]:
        """Run the mutation and report the outcome as a result object."""
        try:
            data = await self.mutate_async(client, *args, **kwargs)
        except FleetImsError as error:
            return MutationResult(status=MutationStatus.ERROR, error=error)
        return MutationResult(status=MutationStatus.SUCCESS, data=data)

    def _checked_arguments(
        self, args: tuple[Any, ...], kwargs: dict[str, Any]
    ) -> tuple[tuple[Any, ...], dict[str, Any]]:
        if not self._requires_id:
            return args, kwargs
        entity_name = str(self._prefix.collection)
        if args:
            return (ensure_persisted_id(args[0], entity_name), *args[1:]), kwargs
        entity_id = ensure_persisted_id(kwargs.get("entity_id"), entity_name)
        return args, {**kwargs, "entity_id": entity_id}

    def _report_failure(
        self,
        messages: ToastMessages,
        error: FleetImsError,
        toast_id: str | None = None,
    ) -> None:
        logger.warning(
            "%s %s failed: %s (%s)",
            self._namespace,
            self._action,
            error.message,
            error.code,
        )
        self._notifier.error(
            messages.error, toast_id=toast_id, description=error.message
        )


@dataclass(frozen=True)
class CollectionMutations(Generic[T]):
    """The three mutations of one collection."""

    create: CollectionMutation[T]
    update: CollectionMutation[T]
    delete: CollectionMutation[T]


def create_collection_mutations(
    query_key: QueryKeyLike,
    namespace: str,
    *,
    create: Callable[[Any], Awaitable[T]],
    update: Callable[[int, Any], Awaitable[T]],
    delete: Callable[[int], Awaitable[T]],
    translator: ITranslator | None = None,
    notifier: IToastNotifier | None = None,
) -> CollectionMutations[T]:
    """Create the create/update/delete mutations for a collection.

    Update and delete require a persisted identifier; a transient one
    fails with NotPersistedError before any toast or remote call.

    Args:
        query_key: Cache key prefix invalidated after every success.
        namespace: Translation namespace holding ``messages.<action>.*``.
        create: Remote create call taking the payload.
        update: Remote update call taking the id and the payload.
        delete: Remote delete call taking the id.
        translator: Message lookup. Defaults to the bundled catalog.
        notifier: Toast sink. Defaults to a logging notifier.

    Returns:
        The bound mutations.

    Example:
        mutations = create_collection_mutations(
            "busModels",
            "busModels",
            create=client.bus_models.create,
            update=client.bus_models.update,
            delete=client.bus_models.delete,
        )
        model = await mutations.create.mutate_async(query_client, payload)
    """
    if translator is None:
        from fleetims.infrastructure.translations import TranslationCatalog

        translator = TranslationCatalog()
    if notifier is None:
        from fleetims.infrastructure.notifiers import LoggingToastNotifier

        notifier = LoggingToastNotifier()

    def build(
        action: str, fn: Callable[..., Awaitable[T]], requires_id: bool = False
    ) -> CollectionMutation[T]:
        return CollectionMutation(
            query_key, namespace, action, fn, translator, notifier, requires_id
        )

    return CollectionMutations(
        create=build(CREATE, create),
        update=build(UPDATE, update, requires_id=True),
        delete=build(DELETE, delete, requires_id=True),
    )
