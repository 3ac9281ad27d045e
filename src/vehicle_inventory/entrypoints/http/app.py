import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from vehicle_inventory.config import api_prefix, log_level
from vehicle_inventory.entrypoints.http.exception_handlers import register_exception_handlers
from vehicle_inventory.entrypoints.http.routes.health import router as health_router
from vehicle_inventory.entrypoints.http.routes.vehicles import router as vehicles_router
from vehicle_inventory.infra.db.session import dispose_engine


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    dispose_engine()


def build_app() -> FastAPI:
    logging.basicConfig(
        level=log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Vehicle Inventory API",
        description="""
        Inventory of vehicles for one dealership lot (new or used).

        ## Features
        - Paginated, sortable and searchable vehicle list
        - Show, create, partially update and delete vehicles

        ## Authentication
        Currently no authentication required.

        ## Responses
        Every endpoint answers with the envelope
        `{"message": ..., "data": ..., "errors": ...}`.
        `errors` maps field names to lists of messages.
        """,
        version="0.1.0",
        docs_url="/docs",  # Swagger UI
        redoc_url="/redoc",  # ReDoc alternative
        openapi_url="/openapi.json",  # OpenAPI schema
        license_info={
            "name": "Proprietary",
        },
        lifespan=lifespan,
    )

    # Register global exception handlers
    register_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(vehicles_router, prefix=api_prefix())

    return app


app = build_app()
