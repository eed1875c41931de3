"""Entity identity helpers and the domain-entity capability contract."""

from numbers import Real
from typing import Any, Protocol, TypeVar, runtime_checkable

from fleetims.errors import NotPersistedError

E = TypeVar("E", bound="BaseDomainEntity")


def is_entity_persisted(entity_id: Any) -> bool:
    """Check whether an identifier belongs to a saved record.

    Args:
        entity_id: The identifier, possibly None.

    Returns:
        True only for a strictly positive integral number. Booleans and
        fractional values such as 2.5 are not identifiers.
    """
    if entity_id is None or isinstance(entity_id, bool):
        return False
    if isinstance(entity_id, int):
        return entity_id > 0
    if not isinstance(entity_id, Real):
        return False
    return entity_id > 0 and float(entity_id).is_integer()


def ensure_persisted_id(entity_id: Any, entity_name: str = "Entity") -> int:
    """Return the identifier, or fail when it does not denote a saved record.

    Args:
        entity_id: The identifier to check.
        entity_name: Name used in the error message.

    Returns:
        The identifier as an int.

    Raises:
        NotPersistedError: If the identifier is missing, not positive or not
            integral.
    """
    if not is_entity_persisted(entity_id):
        raise NotPersistedError(
            f"Cannot operate on a {entity_name} that has not been saved "
            f"(id={entity_id!r})",
            details={"id": entity_id},
        )
    return int(entity_id)


@runtime_checkable
class BaseDomainEntity(Protocol):
    """Capabilities shared by entity wrappers.

    Implementations wrap plain record data and know how to persist it.
    ``update`` must fail fast with NotPersistedError when the entity
    was never saved.
    """

    @property
    def id(self) -> int | None:
        ...

    @property
    def is_persisted(self) -> bool:
        ...

    async def save(self: E) -> E:
        ...

    async def update(self: E, payload: dict[str, Any]) -> E:
        ...
