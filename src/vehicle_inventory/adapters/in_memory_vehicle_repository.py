from __future__ import annotations

from dataclasses import replace

from vehicle_inventory.domain.errors import ConflictError
from vehicle_inventory.domain.pagination import VehicleQuery
from vehicle_inventory.domain.vehicle import Vehicle
from vehicle_inventory.ports.vehicle_repository import SearchResult, VehicleRepository

_SORT_ATTRIBUTES = {
    "id": "id",
    "dateAdded": "date_added",
    "msrp": "msrp",
    "year": "year",
    "make": "make",
    "model": "model",
    "miles": "miles",
    "vin": "vin",
}


class InMemoryVehicleRepository(VehicleRepository):
    """
    Canonical contract implementation for tests.

    - Assigns ids sequentially, starting after the highest seeded id
    - Filters by partition and deleted flag, then by search term
    - Sorts by the requested column with id as tiebreak
    - Applies paging AFTER filtering
    - Returns total_count of matching vehicles before paging
    """

    def __init__(self, vehicles: list[Vehicle] | None = None) -> None:
        self._vehicles: dict[int, Vehicle] = {}
        self._next_id = 1
        for vehicle in vehicles or []:
            self.add(vehicle)

    def search(self, query: VehicleQuery) -> SearchResult:
        # Trust that UseCase has validated inputs (contract programming)
        matches = [v for v in self._vehicles.values() if self._matches(v, query)]
        total_count = len(matches)  # Count BEFORE paging

        attribute = _SORT_ATTRIBUTES[query.order_by]
        matches.sort(key=lambda v: v.id or 0)
        # sort() is stable, so equal keys keep ascending id order in both directions
        matches.sort(key=lambda v: getattr(v, attribute), reverse=query.direction == "DESC")

        page = matches[query.offset : query.offset + query.limit]
        return SearchResult(vehicles=page, total_count=total_count)

    def get_by_id(self, vehicle_id: int) -> Vehicle | None:
        return self._vehicles.get(vehicle_id)

    def vin_exists(self, vin: str, exclude_id: int | None = None) -> bool:
        return any(v.vin == vin and v.id != exclude_id for v in self._vehicles.values())

    def add(self, vehicle: Vehicle) -> Vehicle:
        vehicle_id = vehicle.id if vehicle.id is not None else self._next_id
        self._ensure_unique_vin(vehicle.vin, exclude_id=None)
        stored = replace(vehicle, id=vehicle_id)
        self._vehicles[vehicle_id] = stored
        self._next_id = max(self._next_id, vehicle_id + 1)
        return stored

    def update(self, vehicle: Vehicle) -> Vehicle:
        if vehicle.id is None:
            raise ValueError("Cannot update a vehicle that was never stored")
        self._ensure_unique_vin(vehicle.vin, exclude_id=vehicle.id)
        self._vehicles[vehicle.id] = vehicle
        return vehicle

    def delete(self, vehicle_id: int) -> None:
        self._vehicles.pop(vehicle_id, None)

    def _ensure_unique_vin(self, vin: str, exclude_id: int | None) -> None:
        if self.vin_exists(vin, exclude_id=exclude_id):
            raise ConflictError(f"Vehicle with VIN '{vin}' already exists", field="vin")

    def _matches(self, vehicle: Vehicle, query: VehicleQuery) -> bool:
        if vehicle.type != query.partition or vehicle.deleted:
            return False
        if query.search:
            term = query.search.lower()
            return any(term in value.lower() for value in (vehicle.make, vehicle.model, vehicle.vin))
        return True
