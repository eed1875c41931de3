"""HTTP client for one inventory collection."""

import logging
from typing import Any, Generic, TypeVar

import httpx
from pydantic import BaseModel

from fleetims.core.entities.pagination import (
    ListParams,
    ListResult,
    PaginatedResult,
    PaginationParams,
)
from fleetims.errors import FleetImsError, RemoteError, error_from_payload

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class EntityClient(Generic[T]):
    """Remote CRUD calls for a single collection.

    Every call returns parsed records, or raises the typed error the
    server reported. Transport failures raise RemoteError with code
    ``unavailable``.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        path: str,
        record_model: type[T],
    ) -> None:
        self._http = http
        self._path = "/" + path.strip("/")
        self._record_model = record_model

    @property
    def path(self) -> str:
        return self._path

    async def list_paginated(
        self, params: PaginationParams | None = None
    ) -> PaginatedResult[T]:
        """Fetch one page of the collection.

        Args:
            params: Page, ordering, filters and search term.

        Returns:
            The page with its pagination metadata.
        """
        params = params or PaginationParams()
        body = await self._request(
            "POST", f"{self._path}/list", json=_dump(params)
        )
        return PaginatedResult[self._record_model].model_validate(body)

    async def get(self, entity_id: int) -> T:
        body = await self._request("GET", f"{self._path}/{entity_id}")
        return self._record_model.model_validate(body)

    async def create(self, payload: BaseModel | dict[str, Any]) -> T:
        body = await self._request(
            "POST", f"{self._path}/create", json=_dump(payload)
        )
        return self._record_model.model_validate(body)

    async def update(self, entity_id: int, payload: BaseModel | dict[str, Any]) -> T:
        body = await self._request(
            "PUT", f"{self._path}/{entity_id}/update", json=_dump(payload)
        )
        return self._record_model.model_validate(body)

    async def delete(self, entity_id: int) -> T:
        """Soft-delete a record and return it as it was stored."""
        body = await self._request("DELETE", f"{self._path}/{entity_id}/delete")
        return self._record_model.model_validate(body)

    async def list(self, params: ListParams | None = None) -> list[T]:
        """Fetch every record of the collection, without pagination."""
        params = params or ListParams()
        body = await self._request(
            "POST", f"{self._path}/list/all", json=_dump(params)
        )
        return ListResult[self._record_model].model_validate(body).data

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            response = await self._http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise RemoteError(
                f"Could not reach the inventory service: {e}", code="unavailable"
            ) from e

        if response.is_success:
            return response.json()

        raise _error_from_response(response)

    def __repr__(self) -> str:
        return f"EntityClient({self._path!r}, {self._record_model.__name__})"


def _dump(payload: BaseModel | dict[str, Any]) -> dict[str, Any]:
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", exclude_unset=True)
    return payload


def _error_from_response(response: httpx.Response) -> FleetImsError:
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and "code" in body:
        return error_from_payload(body, status_code=response.status_code)

    return RemoteError(
        response.text or response.reason_phrase,
        code="unknown",
        status_code=response.status_code,
    )
