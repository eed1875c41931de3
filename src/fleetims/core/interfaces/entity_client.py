"""Remote entity client interface."""

from typing import Any, Generic, Protocol, TypeVar

from pydantic import BaseModel

from fleetims.core.entities.pagination import (
    ListParams,
    PaginatedResult,
    PaginationParams,
)

T = TypeVar("T", covariant=True)


class IEntityClient(Protocol, Generic[T]):
    """Contract for the per-entity remote method set."""

    async def list(self, params: ListParams | None = None) -> list[T]:
        ...

    async def list_paginated(
        self, params: PaginationParams | None = None
    ) -> PaginatedResult[Any]:
        ...

    async def get(self, entity_id: int) -> T:
        ...

    async def create(self, payload: BaseModel | dict[str, Any]) -> T:
        ...

    async def update(
        self, entity_id: int, payload: BaseModel | dict[str, Any]
    ) -> T:
        ...

    async def delete(self, entity_id: int) -> T:
        ...
