"""FastAPI application factory for the inventory backend."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fleetims.errors import FleetImsError, ValidationError
from fleetims.inventory.resources import RESOURCES
from fleetims.server.config import ServerConfig
from fleetims.server.database import Database
from fleetims.server.entities import ENTITY_CLASSES
from fleetims.server.routers import create_crud_router, create_driver_router

logger = logging.getLogger(__name__)

STATUS_CODES: dict[str, int] = {
    "not_found": 404,
    "invalid_argument": 400,
    "already_exists": 409,
    "failed_precondition": 400,
}


def status_code_for(error: FleetImsError) -> int:
    return STATUS_CODES.get(error.code, 500)


async def handle_fleetims_error(request: Request, exc: FleetImsError) -> JSONResponse:
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %r", request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(exc.to_dict()))


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    error = ValidationError(
        "Invalid request",
        details={"errors": jsonable_encoder(exc.errors())},
    )
    return JSONResponse(
        status_code=status_code_for(error), content=jsonable_encoder(error.to_dict())
    )


def create_app(
    config: ServerConfig | None = None,
    database: Database | None = None,
) -> FastAPI:
    """Create the inventory API.

    Args:
        config: Server configuration. Read from the environment if not given.
        database: Database to serve. Opened from ``config.database_path``
            if not given; a given database is left open on shutdown.

    Returns:
        The application, with ``app.state.database`` set.
    """
    config = config or ServerConfig.from_env()
    owns_database = database is None
    database = database or Database(config.database_path)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Application lifespan handler."""
        logger.info("Starting inventory API")
        await database.connect()
        yield
        if owns_database:
            await database.close()
        logger.info("Stopped inventory API")

    app = FastAPI(
        title="fleetims",
        description="Fleet and inventory management API",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(FleetImsError, handle_fleetims_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

    for resource in RESOURCES:
        if resource.key == "drivers":
            app.include_router(create_driver_router(resource))
        else:
            app.include_router(create_crud_router(resource, ENTITY_CLASSES[resource.key]))

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {
            "status": "healthy",
            "database": "connected" if database.is_connected else "disconnected",
        }

    return app
