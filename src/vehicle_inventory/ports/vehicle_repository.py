from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from vehicle_inventory.domain.pagination import VehicleQuery
from vehicle_inventory.domain.vehicle import Vehicle


@dataclass(frozen=True)
class SearchResult:
    """Result from a vehicle list query including pagination metadata."""

    vehicles: list[Vehicle]
    total_count: int  # Total matching vehicles before paging


class VehicleRepository(ABC):
    """
    Port for vehicle data access (the record store).

    Contract (Preconditions):
        - queries are pre-validated by the caller (UseCase)
        - vehicles passed to add/update have passed field validation
        - implementations enforce VIN uniqueness on write and raise
          ConflictError(field="vin") when it is violated
    """

    @abstractmethod
    def search(self, query: VehicleQuery) -> SearchResult:
        """
        List one page of visible vehicles.

        Visible means: type equals query.partition and deleted is false.
        Ordered by query.order_by/query.direction, then by id ascending.

        Args:
            query: Pre-validated query plan

        Returns:
            SearchResult with the page and the total count before paging
        """
        ...

    @abstractmethod
    def get_by_id(self, vehicle_id: int) -> Vehicle | None: ...

    @abstractmethod
    def vin_exists(self, vin: str, exclude_id: int | None = None) -> bool:
        """Whether a vehicle other than ``exclude_id`` holds this VIN."""
        ...

    @abstractmethod
    def add(self, vehicle: Vehicle) -> Vehicle:
        """Insert a vehicle and return it with its store-assigned id."""
        ...

    @abstractmethod
    def update(self, vehicle: Vehicle) -> Vehicle: ...

    @abstractmethod
    def delete(self, vehicle_id: int) -> None:
        """Remove the row permanently."""
        ...
