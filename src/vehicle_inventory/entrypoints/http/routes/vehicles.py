from typing import Any

from fastapi import APIRouter, Depends

from vehicle_inventory.entrypoints.http.dependencies import (
    get_create_vehicle_use_case,
    get_delete_vehicle_use_case,
    get_get_vehicle_by_id_use_case,
    get_list_vehicles_use_case,
    get_update_vehicle_use_case,
    get_vehicle_fields,
)
from vehicle_inventory.entrypoints.http.dtos.vehicles import VehicleListQueryDTO
from vehicle_inventory.entrypoints.http.error_responses import EnvelopeResponse, success
from vehicle_inventory.entrypoints.http.mappers.vehicle_mapper import VehicleMapper
from vehicle_inventory.use_cases.create_vehicle import CreateVehicle, CreateVehicleRequest
from vehicle_inventory.use_cases.delete_vehicle import DeleteVehicle, DeleteVehicleRequest
from vehicle_inventory.use_cases.get_vehicle_by_id import GetVehicleById, GetVehicleByIdRequest
from vehicle_inventory.use_cases.list_vehicles import ListVehicles
from vehicle_inventory.use_cases.update_vehicle import UpdateVehicle, UpdateVehicleRequest

router = APIRouter(prefix="/vehicles", tags=["Vehicles"])

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    404: {"model": EnvelopeResponse, "description": "Vehicle not found"},
    422: {"model": EnvelopeResponse, "description": "Validation error"},
}

_FIELDS_DESCRIPTION = """
    Fields are sent as a JSON object or as form data:

    - `type`: new/used
    - `msrp`: decimal(20,2), up to 2 decimal places, e.g. `8500.99`
    - `year`: built year, between 1900 and next year
    - `make`, `model`: non-blank
    - `miles`: odometer miles, non-negative integer
    - `vin`: letters and numbers only, unique
    - `deleted`: true/false/t/f/1/0, hides the vehicle from the list
"""


@router.get(
    "/",
    response_model=EnvelopeResponse,
    summary="List vehicles",
    description="""
    Paginated, sortable, and searchable list of the vehicles of this
    deployment's type. Vehicles flagged as deleted are not listed.

    ## Pagination
    - `page` (default 1) and `max` (default 20) must be positive integers

    ## Sorting
    - `order`: id/dateAdded/msrp/year/make/model/miles/vin (default dateAdded)
    - `sort`: ASC or DESC, case-insensitive (default ASC)

    ## Search
    - `search` matches make, model or vin (case-insensitive substring)

    ## Example
    ```
    GET /api/vehicles/?page=2&max=10&order=msrp&sort=desc&search=ford
    ```
    """,
    responses={
        200: {
            "description": "Successful response",
            "content": {
                "application/json": {
                    "example": {
                        "message": "success",
                        "data": {
                            "pages": 5,
                            "total": 100,
                            "vehicles": [
                                {
                                    "id": 538,
                                    "dateAdded": "2022-03-11T01:59:39Z",
                                    "msrp": "8500.99",
                                    "year": 2022,
                                    "make": "Ford",
                                    "model": "F150",
                                    "miles": 35000,
                                    "vin": "1FTEW1C58NKD33222",
                                }
                            ],
                        },
                        "errors": {},
                    }
                }
            },
        },
        422: _ERROR_RESPONSES[422],
    },
)
def list_vehicles(
    query: VehicleListQueryDTO = Depends(),
    use_case: ListVehicles = Depends(get_list_vehicles_use_case),
) -> EnvelopeResponse:
    """List endpoint following parse → execute → map → return pattern."""
    # 1. Map to domain request
    request = VehicleMapper.to_list_request(query)

    # 2. Execute use case
    result = use_case.execute(request)

    # 3. Map to response
    return success(VehicleMapper.to_list_data(result))


@router.get(
    "/show/{id}",
    response_model=EnvelopeResponse,
    summary="Show a vehicle",
    description="Returns one vehicle of this deployment's type, including its `deleted` flag.",
    responses={404: _ERROR_RESPONSES[404], 422: _ERROR_RESPONSES[422]},
)
def show_vehicle(
    id: int,
    use_case: GetVehicleById = Depends(get_get_vehicle_by_id_use_case),
) -> EnvelopeResponse:
    result = use_case.execute(GetVehicleByIdRequest(vehicle_id=id))
    return success(VehicleMapper.to_detail_data(result.vehicle))


@router.post(
    "/create",
    response_model=EnvelopeResponse,
    summary="Add a vehicle",
    description="All fields but `deleted` are required." + _FIELDS_DESCRIPTION,
    responses={422: _ERROR_RESPONSES[422]},
)
def create_vehicle(
    fields: dict[str, Any] = Depends(get_vehicle_fields),
    use_case: CreateVehicle = Depends(get_create_vehicle_use_case),
) -> EnvelopeResponse:
    result = use_case.execute(CreateVehicleRequest(fields=fields))
    return success(VehicleMapper.to_created_data(result.vehicle))


@router.patch(
    "/update/{id}",
    response_model=EnvelopeResponse,
    summary="Update a vehicle",
    description=(
        "Only the submitted fields change; the whole vehicle is then validated."
        + _FIELDS_DESCRIPTION
    ),
    responses=_ERROR_RESPONSES,
)
def update_vehicle(
    id: int,
    fields: dict[str, Any] = Depends(get_vehicle_fields),
    use_case: UpdateVehicle = Depends(get_update_vehicle_use_case),
) -> EnvelopeResponse:
    use_case.execute(UpdateVehicleRequest(vehicle_id=id, fields=fields))
    return success()


@router.delete(
    "/delete/{id}",
    response_model=EnvelopeResponse,
    summary="Delete a vehicle",
    description="Removes the vehicle permanently.",
    responses={404: _ERROR_RESPONSES[404], 422: _ERROR_RESPONSES[422]},
)
def delete_vehicle(
    id: int,
    use_case: DeleteVehicle = Depends(get_delete_vehicle_use_case),
) -> EnvelopeResponse:
    use_case.execute(DeleteVehicleRequest(vehicle_id=id))
    return success()
