"""Generic CRUD router shared by every inventory resource."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Request

from fleetims.core.entities.pagination import (
    ListParams,
    ListResult,
    PaginatedResult,
    PaginationParams,
)
from fleetims.inventory.resources import Resource
from fleetims.server.database import Database
from fleetims.server.entities import DomainEntity, DriverEntity
from fleetims.server.repository import BaseRepository


def get_database(request: Request) -> Database:
    return request.app.state.database


def create_crud_router(
    resource: Resource, entity_class: type[DomainEntity]
) -> APIRouter:
    """Create the six CRUD endpoints of a resource.

    Endpoints, relative to ``/<resource.path>``:
        POST   /list/all          every active record, ``{"data": [...]}``
        POST   /list              one page with pagination metadata
        GET    /{id}              one record
        POST   /create            create from the resource's create payload
        PUT    /{id}/update       partial update
        DELETE /{id}/delete       soft delete, returns the deleted record

    Args:
        resource: Naming and models of the collection.
        entity_class: Domain entity enforcing the collection's rules.

    Returns:
        The router, to be included in the app.
    """
    router = APIRouter(prefix=f"/{resource.path}", tags=[resource.key])
    record_model = resource.record_model
    create_model = resource.create_model
    update_model = resource.update_model

    def get_repository(database: Database = Depends(get_database)) -> BaseRepository:
        return entity_class.repository_class(database)

    @router.post("/list/all", response_model=ListResult[record_model])
    async def list_all(
        params: ListParams | None = Body(default=None),
        repository: BaseRepository = Depends(get_repository),
    ) -> dict[str, Any]:
        records = await repository.find_all(params)
        return {"data": records}

    @router.post("/list", response_model=PaginatedResult[record_model])
    async def list_paginated(
        params: PaginationParams | None = Body(default=None),
        repository: BaseRepository = Depends(get_repository),
    ) -> PaginatedResult[Any]:
        return await repository.find_all_paginated(params)

    @router.get("/{entity_id}", response_model=record_model)
    async def get_one(
        entity_id: int,
        repository: BaseRepository = Depends(get_repository),
    ) -> Any:
        entity = await entity_class.find(repository, entity_id)
        return entity.to_record()

    @router.post("/create", response_model=record_model)
    async def create(
        payload: create_model,  # type: ignore[valid-type]
        repository: BaseRepository = Depends(get_repository),
    ) -> Any:
        entity = await entity_class.create(repository, payload).save()
        return entity.to_record()

    @router.put("/{entity_id}/update", response_model=record_model)
    async def update(
        entity_id: int,
        payload: update_model,  # type: ignore[valid-type]
        repository: BaseRepository = Depends(get_repository),
    ) -> Any:
        entity = await entity_class.find(repository, entity_id)
        return (await entity.update(payload)).to_record()

    @router.delete("/{entity_id}/delete", response_model=record_model)
    async def delete(
        entity_id: int,
        repository: BaseRepository = Depends(get_repository),
    ) -> Any:
        entity = await entity_class.find(repository, entity_id)
        return (await entity.delete()).to_record()

    return router


def create_driver_router(resource: Resource) -> APIRouter:
    """CRUD endpoints for drivers plus the status transition lookup."""
    router = create_crud_router(resource, DriverEntity)

    def get_repository(database: Database = Depends(get_database)) -> BaseRepository:
        return DriverEntity.repository_class(database)

    @router.get("/{entity_id}/valid-next-statuses")
    async def valid_next_statuses(
        entity_id: int,
        repository: BaseRepository = Depends(get_repository),
    ) -> dict[str, list[str]]:
        driver = await DriverEntity.find(repository, entity_id)
        return {"data": [status.value for status in driver.valid_next_statuses()]}

    return router
