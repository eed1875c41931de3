"""Inventory backend: SQLite storage, domain rules and the FastAPI app."""

from fleetims.server.app import create_app
from fleetims.server.config import ServerConfig
from fleetims.server.database import Database
from fleetims.server.entities import (
    ENTITY_CLASSES,
    BusEntity,
    BusModelEntity,
    DomainEntity,
    DriverEntity,
    PopulationEntity,
    RouteEntity,
    TerminalEntity,
    UserEntity,
)
from fleetims.server.repository import BaseRepository, UserRepository
from fleetims.server.routers import create_crud_router

__all__ = [
    "BaseRepository",
    "BusEntity",
    "BusModelEntity",
    "Database",
    "DomainEntity",
    "DriverEntity",
    "ENTITY_CLASSES",
    "PopulationEntity",
    "RouteEntity",
    "ServerConfig",
    "TerminalEntity",
    "UserEntity",
    "UserRepository",
    "create_app",
    "create_crud_router",
]
