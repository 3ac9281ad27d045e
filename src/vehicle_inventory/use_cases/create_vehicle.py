from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable

from vehicle_inventory.domain.errors import ConflictError, EmptyPayloadError, ValidationError
from vehicle_inventory.domain.vehicle import Vehicle
from vehicle_inventory.domain.vehicle_validation import (
    VIN_TAKEN,
    apply_fields,
    new_record,
    to_vehicle,
    validate_vehicle,
)
from vehicle_inventory.ports.vehicle_repository import VehicleRepository

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class CreateVehicleRequest:
    fields: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class CreateVehicleResponse:
    vehicle: Vehicle


class CreateVehicle:
    """
    Adds a vehicle.

    Submitted fields are applied over the defaults (deleted=false) and the
    resulting record is validated in full. The store assigns the id; the
    creation timestamp comes from the clock.
    """

    def __init__(self, vehicle_repository: VehicleRepository, clock: Clock = utc_now) -> None:
        self._repository = vehicle_repository
        self._clock = clock

    def execute(self, request: CreateVehicleRequest) -> CreateVehicleResponse:
        """
        Raises:
            EmptyPayloadError: If no fields were submitted
            ValidationError: With every field violation found
        """
        if not request.fields:
            raise EmptyPayloadError()

        now = self._clock()
        record = apply_fields(new_record(), request.fields)
        errors = validate_vehicle(
            record,
            current_year=now.year,
            vin_is_taken=self._repository.vin_exists,
        )
        if errors:
            raise ValidationError(errors=errors)

        try:
            vehicle = self._repository.add(to_vehicle(record, date_added=now))
        except ConflictError as exc:
            # Another request stored the same VIN after our uniqueness check
            raise ValidationError(errors={"vin": [VIN_TAKEN]}) from exc

        logger.info("Vehicle created", extra={"vehicle_id": vehicle.id})
        return CreateVehicleResponse(vehicle=vehicle)
