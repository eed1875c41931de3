"""Generic soft-delete repository over the SQLite database."""

import json
import logging
import sqlite3
from datetime import datetime, timezone
from typing import Any

from fleetims.core.entities.entity import ensure_persisted_id
from fleetims.core.entities.pagination import (
    ListParams,
    PaginatedResult,
    PaginationMeta,
    PaginationParams,
)
from fleetims.errors import (
    DuplicateError,
    FleetImsError,
    ForeignKeyError,
    NotFoundError,
    ValidationError,
)
from fleetims.server.database import Database
from fleetims.utils.hashing import hash_password

logger = logging.getLogger(__name__)

Record = dict[str, Any]

ACTIVE_ROWS = "deleted_at IS NULL"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class BaseRepository:
    """CRUD access to one table with soft deletion.

    Rows whose ``deleted_at`` is set are invisible to every read.
    Subclasses name the table and describe their JSON, searchable and
    hidden columns.
    """

    table: str = ""
    entity_name: str = "Entity"
    json_fields: tuple[str, ...] = ()
    searchable_fields: tuple[str, ...] = ()
    hidden_fields: tuple[str, ...] = ()

    def __init__(self, database: Database) -> None:
        self._db = database
        self._columns: tuple[str, ...] | None = None

    @property
    def database(self) -> Database:
        return self._db

    async def columns(self) -> tuple[str, ...]:
        """Return the column names of the table."""
        if self._columns is None:
            rows = await self._db.fetch_all(f"PRAGMA table_info({self.table})")
            self._columns = tuple(row["name"] for row in rows)
        return self._columns

    async def find_one(self, entity_id: int) -> Record:
        """Return an active record.

        Raises:
            NotFoundError: If no active row has this id.
        """
        row = await self._db.fetch_one(
            f"SELECT * FROM {self.table} WHERE id = ? AND {ACTIVE_ROWS}",
            (entity_id,),
        )
        if row is None:
            raise NotFoundError(
                f"{self.entity_name} with id {entity_id} not found",
                details={"id": entity_id},
            )
        return self._to_record(row)

    async def find_all(self, params: ListParams | None = None) -> list[Record]:
        """Return every active record matching the filters and search term."""
        params = params or ListParams()
        where, values = await self._where(params)
        order = await self._order(params)
        rows = await self._db.fetch_all(
            f"SELECT * FROM {self.table} WHERE {where} ORDER BY {order}", values
        )
        return [self._to_record(row) for row in rows]

    async def find_all_paginated(
        self, params: PaginationParams | None = None
    ) -> PaginatedResult[Record]:
        """Return one page of active records plus pagination metadata."""
        params = params or PaginationParams()
        where, values = await self._where(params)
        order = await self._order(params)

        total = await self._db.fetch_value(
            f"SELECT COUNT(*) FROM {self.table} WHERE {where}", values
        )
        rows = await self._db.fetch_all(
            f"SELECT * FROM {self.table} WHERE {where} ORDER BY {order} "
            "LIMIT ? OFFSET ?",
            [*values, params.page_size, params.offset],
        )
        return PaginatedResult[Record](
            data=[self._to_record(row) for row in rows],
            pagination=PaginationMeta.create(total, params.page, params.page_size),
        )

    async def create(self, data: Record) -> Record:
        """Insert a record and return it as stored."""
        values = self._prepare(data)
        now = _now()
        values["created_at"] = now
        values["updated_at"] = now
        await self._check_columns(values)

        names = ", ".join(values)
        placeholders = ", ".join("?" for _ in values)
        entity_id = await self._write(
            f"INSERT INTO {self.table} ({names}) VALUES ({placeholders})",
            list(values.values()),
        )
        logger.debug("Created %s %s", self.entity_name, entity_id)
        return await self.find_one(entity_id)

    async def update(self, entity_id: int, data: Record) -> Record:
        """Update the given fields of an active record.

        Raises:
            NotFoundError: If no active row has this id.
        """
        entity_id = ensure_persisted_id(entity_id, self.entity_name)
        await self.find_one(entity_id)

        values = self._prepare(data)
        if not values:
            return await self.find_one(entity_id)
        values["updated_at"] = _now()
        await self._check_columns(values)

        assignments = ", ".join(f"{name} = ?" for name in values)
        await self._write(
            f"UPDATE {self.table} SET {assignments} "
            f"WHERE id = ? AND {ACTIVE_ROWS}",
            [*values.values(), entity_id],
        )
        logger.debug("Updated %s %s", self.entity_name, entity_id)
        return await self.find_one(entity_id)

    async def delete(self, entity_id: int) -> Record:
        """Soft-delete an active record and return it with ``deleted_at`` set.

        Raises:
            NotFoundError: If no active row has this id.
        """
        entity_id = ensure_persisted_id(entity_id, self.entity_name)
        await self.find_one(entity_id)

        now = _now()
        await self._write(
            f"UPDATE {self.table} SET deleted_at = ?, updated_at = ? WHERE id = ?",
            [now, now, entity_id],
        )
        row = await self._db.fetch_one(
            f"SELECT * FROM {self.table} WHERE id = ?", (entity_id,)
        )
        logger.debug("Deleted %s %s", self.entity_name, entity_id)
        return self._to_record(row)

    async def exists_by(
        self, field: str, value: Any, exclude_id: int | None = None
    ) -> bool:
        """Check whether an active record holds a value in a column."""
        await self._check_columns({field: value})
        sql = f"SELECT 1 FROM {self.table} WHERE {field} = ? AND {ACTIVE_ROWS}"
        params: list[Any] = [value]
        if exclude_id is not None:
            sql += " AND id <> ?"
            params.append(exclude_id)
        return await self._db.fetch_value(f"{sql} LIMIT 1", params) is not None

    async def check_uniqueness(
        self, fields: dict[str, Any], exclude_id: int | None = None
    ) -> list[dict[str, Any]]:
        """Find the fields whose values are already taken.

        Args:
            fields: Column to value mapping; None values are skipped.
            exclude_id: Record to ignore, for updates.

        Returns:
            One ``{"field", "value"}`` entry per conflicting column.
        """
        conflicts = []
        for field, value in fields.items():
            if value is None:
                continue
            if await self.exists_by(field, value, exclude_id=exclude_id):
                conflicts.append({"field": field, "value": value})
        return conflicts

    async def validate_relation_exists(
        self, table: str, relation_id: int, relation_name: str
    ) -> None:
        """Check that an active row exists in a related table.

        Raises:
            ForeignKeyError: If the related row does not exist.
        """
        found = await self._db.fetch_value(
            f"SELECT 1 FROM {table} WHERE id = ? AND {ACTIVE_ROWS}",
            (relation_id,),
        )
        if found is None:
            raise ForeignKeyError(
                f"{relation_name} with id {relation_id} not found",
                details={"relation": relation_name, "id": relation_id},
            )

    def _prepare(self, data: Record) -> Record:
        values = {}
        for name, value in data.items():
            if name in ("id", "created_at", "updated_at", "deleted_at"):
                continue
            if name in self.json_fields and value is not None:
                value = json.dumps(value)
            values[name] = value
        return values

    def _to_record(self, row: Record) -> Record:
        record = dict(row)
        for name in self.json_fields:
            if isinstance(record.get(name), str):
                record[name] = json.loads(record[name])
        for name in self.hidden_fields:
            record.pop(name, None)
        return record

    async def _check_columns(self, values: Record) -> None:
        columns = await self.columns()
        unknown = [name for name in values if name not in columns]
        if unknown:
            raise ValidationError(
                f"Unknown field(s) for {self.entity_name}: {', '.join(unknown)}",
                details={"fields": unknown},
            )

    async def _where(self, params: ListParams) -> tuple[str, list[Any]]:
        clauses = [ACTIVE_ROWS]
        values: list[Any] = []
        columns = await self.columns()

        for field, value in (params.filters or {}).items():
            if field not in columns or field in self.hidden_fields:
                raise ValidationError(
                    f"Cannot filter {self.entity_name} by {field!r}",
                    details={"field": field},
                )
            if value is None:
                clauses.append(f"{field} IS NULL")
            else:
                clauses.append(f"{field} = ?")
                values.append(value)

        if params.search_term and self.searchable_fields:
            like = " OR ".join(f"{field} LIKE ?" for field in self.searchable_fields)
            clauses.append(f"({like})")
            values.extend(f"%{params.search_term}%" for _ in self.searchable_fields)

        return " AND ".join(clauses), values

    async def _order(self, params: ListParams) -> str:
        if not params.order_by:
            return "id ASC"

        columns = await self.columns()
        terms = []
        for clause in params.order_by:
            if clause.field not in columns or clause.field in self.hidden_fields:
                raise ValidationError(
                    f"Cannot order {self.entity_name} by {clause.field!r}",
                    details={"field": clause.field},
                )
            terms.append(f"{clause.field} {clause.direction.upper()}")
        terms.append("id ASC")
        return ", ".join(terms)

    async def _write(self, sql: str, params: list[Any]) -> int:
        try:
            return await self._db.execute(sql, params)
        except sqlite3.IntegrityError as e:
            raise self._integrity_error(e) from e

    def _integrity_error(self, error: sqlite3.IntegrityError) -> FleetImsError:
        message = str(error)
        if message.startswith("UNIQUE constraint failed"):
            fields = [
                column.split(".")[-1]
                for column in message.split(":", 1)[1].split(",")
            ]
            return DuplicateError(
                f"{self.entity_name} with the same {', '.join(fields)} already exists",
                details={"fields": fields},
            )
        if message.startswith("FOREIGN KEY constraint failed"):
            return ForeignKeyError(
                f"{self.entity_name} references a record that does not exist"
            )
        return ValidationError(f"Invalid {self.entity_name}: {message}")


class BusModelRepository(BaseRepository):
    table = "bus_models"
    entity_name = "Bus model"
    json_fields = ("seats_per_floor", "amenities")
    searchable_fields = ("manufacturer", "model", "engine_type")


class BusRepository(BaseRepository):
    table = "buses"
    entity_name = "Bus"
    searchable_fields = (
        "economic_number",
        "registration_number",
        "license_plate_number",
        "serial_number",
    )


class DriverRepository(BaseRepository):
    table = "drivers"
    entity_name = "Driver"
    searchable_fields = (
        "driver_key",
        "payroll_key",
        "first_name",
        "last_name",
        "email",
    )


class TerminalRepository(BaseRepository):
    table = "terminals"
    entity_name = "Terminal"
    json_fields = ("facilities", "operating_hours")
    searchable_fields = ("name", "code", "address")


class PopulationRepository(BaseRepository):
    table = "populations"
    entity_name = "Population"
    searchable_fields = ("code", "name", "description")


class RouteRepository(BaseRepository):
    table = "routes"
    entity_name = "Route"
    searchable_fields = ("name", "description")


class UserRepository(BaseRepository):
    """Users; plain passwords are replaced by their hash before writing."""

    table = "users"
    entity_name = "User"
    searchable_fields = ("username", "email", "first_name", "last_name")
    hidden_fields = ("password_hash",)

    def _prepare(self, data: Record) -> Record:
        data = dict(data)
        password = data.pop("password", None)
        if password is not None:
            data["password_hash"] = hash_password(password)
        return super()._prepare(data)

    async def find_password_hash(self, username: str) -> str | None:
        return await self._db.fetch_value(
            f"SELECT password_hash FROM {self.table} "
            f"WHERE username = ? AND {ACTIVE_ROWS}",
            (username,),
        )
