from __future__ import annotations

import logging
from dataclasses import dataclass

from vehicle_inventory.domain.errors import NotFoundError
from vehicle_inventory.ports.vehicle_repository import VehicleRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DeleteVehicleRequest:
    vehicle_id: int


class DeleteVehicle:
    """
    Permanently removes a vehicle.

    This is a hard delete; the ``deleted`` flag is a separate list-visibility
    toggle and is not touched here.
    """

    def __init__(self, vehicle_repository: VehicleRepository) -> None:
        self._repository = vehicle_repository

    def execute(self, request: DeleteVehicleRequest) -> None:
        """
        Raises:
            NotFoundError: If no vehicle with this id exists
        """
        if self._repository.get_by_id(request.vehicle_id) is None:
            raise NotFoundError(request.vehicle_id)

        self._repository.delete(request.vehicle_id)

        logger.info("Vehicle deleted", extra={"vehicle_id": request.vehicle_id})
