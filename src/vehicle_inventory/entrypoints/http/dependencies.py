"""
Dependency injection for FastAPI routes.

Key principle: Database sessions should be per-request, not cached.
Only stateless singletons should use lru_cache.
"""

from __future__ import annotations

import json
from typing import Any, Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from vehicle_inventory.adapters.sqlalchemy_vehicle_repository import (
    SqlAlchemyVehicleRepository,
)
from vehicle_inventory.config import vehicle_partition
from vehicle_inventory.domain.errors import ValidationError
from vehicle_inventory.infra.db.session import get_session
from vehicle_inventory.ports.vehicle_repository import VehicleRepository
from vehicle_inventory.use_cases.create_vehicle import CreateVehicle
from vehicle_inventory.use_cases.delete_vehicle import DeleteVehicle
from vehicle_inventory.use_cases.get_vehicle_by_id import GetVehicleById
from vehicle_inventory.use_cases.list_vehicles import ListVehicles
from vehicle_inventory.use_cases.update_vehicle import UpdateVehicle

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_db() -> Generator[Session, None, None]:
    """
    Provides a database session for a single request.

    FastAPI will:
    1. Call this function when a request starts
    2. Inject the session into the route
    3. Commit/rollback and close the session when the request ends

    Yields:
        Session: SQLAlchemy database session (per-request)
    """
    with get_session() as session:
        yield session


def get_vehicle_repository(db: Session = Depends(get_db)) -> VehicleRepository:
    return SqlAlchemyVehicleRepository(session=db)


def get_partition() -> str:
    """Vehicle type served by this deployment (from VEHICLE_TYPE)."""
    return vehicle_partition()


def get_list_vehicles_use_case(
    repository: VehicleRepository = Depends(get_vehicle_repository),
    partition: str = Depends(get_partition),
) -> ListVehicles:
    """
    Factory function that returns a configured ListVehicles use case.

    Called per-request, so each request gets a fresh repository bound to
    its own database session.
    """
    return ListVehicles(vehicle_repository=repository, partition=partition)


def get_get_vehicle_by_id_use_case(
    repository: VehicleRepository = Depends(get_vehicle_repository),
    partition: str = Depends(get_partition),
) -> GetVehicleById:
    return GetVehicleById(vehicle_repository=repository, partition=partition)


def get_create_vehicle_use_case(
    repository: VehicleRepository = Depends(get_vehicle_repository),
) -> CreateVehicle:
    return CreateVehicle(vehicle_repository=repository)


def get_update_vehicle_use_case(
    repository: VehicleRepository = Depends(get_vehicle_repository),
) -> UpdateVehicle:
    return UpdateVehicle(vehicle_repository=repository)


def get_delete_vehicle_use_case(
    repository: VehicleRepository = Depends(get_vehicle_repository),
) -> DeleteVehicle:
    return DeleteVehicle(vehicle_repository=repository)


async def get_vehicle_fields(request: Request) -> dict[str, Any]:
    """
    Decode the submitted vehicle fields from the request body.

    Accepts JSON objects and form data (urlencoded or multipart). An empty
    body decodes to an empty mapping, which the use cases reject as
    "no data sent".

    Raises:
        ValidationError: If the body is not valid JSON or not a JSON object
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

    if content_type in FORM_CONTENT_TYPES:
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}

    body = await request.body()
    if not body.strip():
        return {}

    try:
        payload = json.loads(body)
    except ValueError:
        raise ValidationError(errors={"data": ["Malformed JSON body."]})

    if not isinstance(payload, dict):
        raise ValidationError(errors={"data": ["Request body must be a JSON object."]})

    return payload
