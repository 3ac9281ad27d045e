from __future__ import annotations

from typing import Any

from vehicle_inventory.domain.pagination import PaginationRequest
from vehicle_inventory.domain.vehicle import Vehicle
from vehicle_inventory.entrypoints.http.dtos.vehicles import (
    VehicleCreatedDTO,
    VehicleDetailDTO,
    VehicleListDTO,
    VehicleListItemDTO,
    VehicleListQueryDTO,
)
from vehicle_inventory.use_cases.list_vehicles import ListVehiclesRequest, ListVehiclesResponse


class VehicleMapper:
    """Maps between REST DTOs and domain models for vehicles.

    Payloads are returned as JSON-ready dicts (camelCase keys, Decimal as
    string, datetime as ISO-8601) to be placed in the response envelope.
    """

    @staticmethod
    def to_list_request(dto: VehicleListQueryDTO) -> ListVehiclesRequest:
        return ListVehiclesRequest(
            pagination=PaginationRequest(
                page=dto.page,
                page_size=dto.max,  # DTO uses 'max', domain uses 'page_size'
                order_by=dto.order,
                direction=dto.sort,
                search=dto.search,
            )
        )

    @staticmethod
    def to_list_item(vehicle: Vehicle) -> VehicleListItemDTO:
        return VehicleListItemDTO(
            id=vehicle.id,
            date_added=vehicle.date_added,
            msrp=str(vehicle.msrp),  # Decimal → str at boundary
            year=vehicle.year,
            make=vehicle.make,
            model=vehicle.model,
            miles=vehicle.miles,
            vin=vehicle.vin,
        )

    @staticmethod
    def to_list_data(result: ListVehiclesResponse) -> dict[str, Any]:
        dto = VehicleListDTO(
            pages=result.total_pages,
            total=result.total_count,
            vehicles=[VehicleMapper.to_list_item(vehicle) for vehicle in result.vehicles],
        )
        return dto.model_dump(mode="json", by_alias=True)

    @staticmethod
    def to_detail_data(vehicle: Vehicle) -> dict[str, Any]:
        dto = VehicleDetailDTO(
            id=vehicle.id,
            date_added=vehicle.date_added,
            type=vehicle.type,
            msrp=str(vehicle.msrp),
            year=vehicle.year,
            make=vehicle.make,
            model=vehicle.model,
            miles=vehicle.miles,
            vin=vehicle.vin,
            deleted=vehicle.deleted,
        )
        return dto.model_dump(mode="json", by_alias=True)

    @staticmethod
    def to_created_data(vehicle: Vehicle) -> dict[str, Any]:
        return VehicleCreatedDTO(id=vehicle.id).model_dump(mode="json")
