from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from vehicle_inventory.domain.errors import (
    ConflictError,
    EmptyPayloadError,
    NotFoundError,
    ValidationError,
)
from vehicle_inventory.domain.vehicle import Vehicle
from vehicle_inventory.domain.vehicle_validation import (
    VIN_TAKEN,
    apply_fields,
    to_vehicle,
    validate_vehicle,
)
from vehicle_inventory.ports.vehicle_repository import VehicleRepository
from vehicle_inventory.use_cases.create_vehicle import Clock, utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class UpdateVehicleRequest:
    vehicle_id: int
    fields: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class UpdateVehicleResponse:
    vehicle: Vehicle


class UpdateVehicle:
    """
    Partially updates a vehicle.

    Only submitted fields change, but the whole merged record is validated,
    so a stored value that no longer satisfies the constraints (e.g. a model
    year that fell out of range) fails the update even if it wasn't touched.
    """

    def __init__(self, vehicle_repository: VehicleRepository, clock: Clock = utc_now) -> None:
        self._repository = vehicle_repository
        self._clock = clock

    def execute(self, request: UpdateVehicleRequest) -> UpdateVehicleResponse:
        """
        Raises:
            NotFoundError: If no vehicle with this id exists
            EmptyPayloadError: If no fields were submitted
            ValidationError: With every field violation found on the merged record
        """
        existing = self._repository.get_by_id(request.vehicle_id)
        if existing is None:
            raise NotFoundError(request.vehicle_id)

        if not request.fields:
            raise EmptyPayloadError()

        record = apply_fields(existing.fields(), request.fields)
        errors = validate_vehicle(
            record,
            current_year=self._clock().year,
            vin_is_taken=lambda vin: self._repository.vin_exists(vin, exclude_id=existing.id),
        )
        if errors:
            raise ValidationError(errors=errors)

        updated = to_vehicle(record, date_added=existing.date_added, vehicle_id=existing.id)
        try:
            vehicle = self._repository.update(updated)
        except ConflictError as exc:
            raise ValidationError(errors={"vin": [VIN_TAKEN]}) from exc

        logger.info(
            "Vehicle updated",
            extra={"vehicle_id": vehicle.id, "fields": sorted(request.fields)},
        )
        return UpdateVehicleResponse(vehicle=vehicle)
