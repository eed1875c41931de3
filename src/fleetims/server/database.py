"""SQLite storage for the inventory backend."""

import logging
from collections.abc import Iterable
from typing import Any

import aiosqlite

from fleetims.server.config import MEMORY_DATABASE

logger = logging.getLogger(__name__)

# Unique columns use partial indexes; soft-deleted rows do not hold values.
SCHEMA = """
CREATE TABLE IF NOT EXISTS bus_models (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    manufacturer TEXT NOT NULL,
    model TEXT NOT NULL,
    year INTEGER NOT NULL,
    seating_capacity INTEGER NOT NULL CHECK (seating_capacity > 0),
    num_floors INTEGER NOT NULL DEFAULT 1,
    seats_per_floor TEXT NOT NULL DEFAULT '[]',
    amenities TEXT NOT NULL DEFAULT '[]',
    engine_type TEXT,
    distribution_type TEXT,
    active INTEGER NOT NULL DEFAULT 1,
    created_at TEXT,
    updated_at TEXT,
    deleted_at TEXT
);

CREATE TABLE IF NOT EXISTS buses (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    economic_number TEXT NOT NULL,
    registration_number TEXT NOT NULL,
    license_plate_type TEXT NOT NULL,
    license_plate_number TEXT NOT NULL,
    status TEXT NOT NULL,
    model_id INTEGER NOT NULL REFERENCES bus_models(id),
    serial_number TEXT NOT NULL,
    chassis_number TEXT NOT NULL,
    gross_vehicle_weight REAL NOT NULL,
    purchase_date TEXT NOT NULL,
    expiration_date TEXT NOT NULL,
    current_kilometer REAL,
    last_maintenance_date TEXT,
    next_maintenance_date TEXT,
    active INTEGER NOT NULL DEFAULT 1,
    created_at TEXT,
    updated_at TEXT,
    deleted_at TEXT
);
CREATE UNIQUE INDEX IF NOT EXISTS buses_economic_number_idx
    ON buses (economic_number) WHERE deleted_at IS NULL;

CREATE TABLE IF NOT EXISTS drivers (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    driver_key TEXT NOT NULL,
    payroll_key TEXT NOT NULL,
    first_name TEXT NOT NULL,
    last_name TEXT NOT NULL,
    email TEXT,
    phone TEXT,
    license TEXT NOT NULL,
    license_expiry TEXT,
    hire_date TEXT,
    status TEXT NOT NULL,
    status_date TEXT,
    bus_line_id INTEGER,
    emergency_contact_name TEXT,
    emergency_contact_phone TEXT,
    created_at TEXT,
    updated_at TEXT,
    deleted_at TEXT
);
CREATE UNIQUE INDEX IF NOT EXISTS drivers_driver_key_idx
    ON drivers (driver_key) WHERE deleted_at IS NULL;
CREATE UNIQUE INDEX IF NOT EXISTS drivers_payroll_key_idx
    ON drivers (payroll_key) WHERE deleted_at IS NULL;

CREATE TABLE IF NOT EXISTS terminals (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    code TEXT NOT NULL,
    slug TEXT NOT NULL,
    address TEXT NOT NULL,
    city_id INTEGER,
    latitude REAL NOT NULL,
    longitude REAL NOT NULL,
    contact_phone TEXT,
    facilities TEXT NOT NULL DEFAULT '[]',
    operating_hours TEXT,
    active INTEGER NOT NULL DEFAULT 1,
    created_at TEXT,
    updated_at TEXT,
    deleted_at TEXT
);
CREATE UNIQUE INDEX IF NOT EXISTS terminals_code_idx
    ON terminals (code) WHERE deleted_at IS NULL;
CREATE UNIQUE INDEX IF NOT EXISTS terminals_slug_idx
    ON terminals (slug) WHERE deleted_at IS NULL;

CREATE TABLE IF NOT EXISTS populations (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    code TEXT NOT NULL,
    name TEXT NOT NULL,
    description TEXT,
    active INTEGER NOT NULL DEFAULT 1,
    created_at TEXT,
    updated_at TEXT,
    deleted_at TEXT
);
CREATE UNIQUE INDEX IF NOT EXISTS populations_code_idx
    ON populations (code) WHERE deleted_at IS NULL;

CREATE TABLE IF NOT EXISTS routes (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    description TEXT,
    origin_terminal_id INTEGER NOT NULL REFERENCES terminals(id),
    destination_terminal_id INTEGER NOT NULL REFERENCES terminals(id),
    distance REAL NOT NULL,
    base_time INTEGER NOT NULL,
    is_compound INTEGER NOT NULL DEFAULT 0,
    created_at TEXT,
    updated_at TEXT,
    deleted_at TEXT,
    CHECK (origin_terminal_id <> destination_terminal_id)
);

CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    username TEXT NOT NULL,
    email TEXT NOT NULL,
    password_hash TEXT NOT NULL,
    first_name TEXT NOT NULL,
    last_name TEXT NOT NULL,
    phone TEXT,
    position TEXT,
    employee_id TEXT,
    department_id INTEGER,
    is_active INTEGER NOT NULL DEFAULT 1,
    is_system_admin INTEGER NOT NULL DEFAULT 0,
    last_login TEXT,
    created_at TEXT,
    updated_at TEXT,
    deleted_at TEXT
);
CREATE UNIQUE INDEX IF NOT EXISTS users_username_idx
    ON users (username) WHERE deleted_at IS NULL;
CREATE UNIQUE INDEX IF NOT EXISTS users_email_idx
    ON users (email) WHERE deleted_at IS NULL;
"""


class Database:
    """A single aiosqlite connection with the inventory schema.

    Use as an async context manager, or call ``connect`` and ``close``
    explicitly.
    """

    def __init__(self, path: str = MEMORY_DATABASE) -> None:
        self._path = path
        self._connection: aiosqlite.Connection | None = None

    @property
    def path(self) -> str:
        return self._path

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    @property
    def connection(self) -> aiosqlite.Connection:
        if self._connection is None:
            raise RuntimeError("Database is not connected")
        return self._connection

    async def connect(self) -> None:
        """Open the connection and create missing tables."""
        if self._connection is not None:
            return
        logger.info("Opening database %s", self._path)
        self._connection = await aiosqlite.connect(self._path)
        self._connection.row_factory = aiosqlite.Row
        await self._connection.execute("PRAGMA foreign_keys = ON")
        await self._connection.executescript(SCHEMA)
        await self._connection.commit()

    async def close(self) -> None:
        if self._connection is None:
            return
        await self._connection.close()
        self._connection = None
        logger.info("Closed database %s", self._path)

    async def fetch_one(
        self, sql: str, params: Iterable[Any] = ()
    ) -> dict[str, Any] | None:
        async with self.connection.execute(sql, tuple(params)) as cursor:
            row = await cursor.fetchone()
        return dict(row) if row is not None else None

    async def fetch_all(
        self, sql: str, params: Iterable[Any] = ()
    ) -> list[dict[str, Any]]:
        async with self.connection.execute(sql, tuple(params)) as cursor:
            rows = await cursor.fetchall()
        return [dict(row) for row in rows]

    async def fetch_value(self, sql: str, params: Iterable[Any] = ()) -> Any:
        async with self.connection.execute(sql, tuple(params)) as cursor:
            row = await cursor.fetchone()
        return row[0] if row is not None else None

    async def execute(self, sql: str, params: Iterable[Any] = ()) -> int:
        """Run a write statement and commit it.

        Args:
            sql: The statement.
            params: Positional parameters.

        Returns:
            The last inserted row id.

        Raises:
            sqlite3.IntegrityError: If a constraint is violated. The
                transaction is rolled back first.
        """
        try:
            async with self.connection.execute(sql, tuple(params)) as cursor:
                lastrowid = cursor.lastrowid
            await self.connection.commit()
        except aiosqlite.Error:
            await self.connection.rollback()
            raise
        return lastrowid

    async def __aenter__(self) -> "Database":
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
