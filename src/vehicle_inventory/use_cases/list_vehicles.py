from __future__ import annotations

from dataclasses import dataclass

from vehicle_inventory.domain.pagination import PaginationRequest, total_pages
from vehicle_inventory.domain.vehicle import Vehicle
from vehicle_inventory.ports.vehicle_repository import VehicleRepository


@dataclass(frozen=True, slots=True)
class ListVehiclesRequest:
    pagination: PaginationRequest


@dataclass(frozen=True, slots=True)
class ListVehiclesResponse:
    vehicles: list[Vehicle]
    total_count: int  # Total matching vehicles before paging
    total_pages: int


class ListVehicles:
    """
    Paginated, sortable and searchable vehicle list.

    This use case validates the list parameters, turns them into a query
    plan restricted to the configured partition, and delegates filtering
    to the repository adapter. No filtering logic exists in the use case.
    """

    def __init__(self, vehicle_repository: VehicleRepository, partition: str) -> None:
        self._vehicle_repository = vehicle_repository
        self._partition = partition

    def execute(self, request: ListVehiclesRequest) -> ListVehiclesResponse:
        """
        Execute the list query.

        Args:
            request: Untrusted pagination, sort and search parameters

        Returns:
            Response with one page of vehicles, total count and page count

        Raises:
            ValidationError: If any list parameter is invalid (all violations reported)
        """
        request.pagination.validate()
        query = request.pagination.to_query(self._partition)

        result = self._vehicle_repository.search(query)

        return ListVehiclesResponse(
            vehicles=result.vehicles,
            total_count=result.total_count,
            total_pages=total_pages(result.total_count, query.limit),
        )
