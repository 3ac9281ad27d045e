"""Get vehicle by ID use case."""

from __future__ import annotations

from dataclasses import dataclass

from vehicle_inventory.domain.errors import NotFoundError
from vehicle_inventory.domain.vehicle import Vehicle
from vehicle_inventory.ports.vehicle_repository import VehicleRepository


@dataclass(frozen=True, slots=True)
class GetVehicleByIdRequest:
    """Request to get a vehicle by ID."""

    vehicle_id: int


@dataclass(frozen=True, slots=True)
class GetVehicleByIdResponse:
    """Response containing the requested vehicle."""

    vehicle: Vehicle


class GetVehicleById:
    """
    Use case for retrieving a single vehicle by ID.

    Responsibilities:
    - Delegate to repository for data access
    - Hide vehicles that belong to the other partition
    - Raise NotFoundError if the vehicle doesn't exist (or is hidden)

    Vehicles flagged as deleted are still returned.
    """

    def __init__(self, vehicle_repository: VehicleRepository, partition: str) -> None:
        """
        Initialize use case with dependencies.

        Args:
            vehicle_repository: Repository for vehicle data access
            partition: Vehicle type served by this deployment
        """
        self._repository = vehicle_repository
        self._partition = partition

    def execute(self, request: GetVehicleByIdRequest) -> GetVehicleByIdResponse:
        """
        Raises:
            NotFoundError: If no vehicle with this id exists in the partition
        """
        vehicle = self._repository.get_by_id(request.vehicle_id)

        if vehicle is None or not vehicle.belongs_to(self._partition):
            raise NotFoundError(request.vehicle_id)

        return GetVehicleByIdResponse(vehicle=vehicle)
