from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class VehicleListQueryDTO(BaseModel):
    """Query parameters for the vehicle list.

    Kept as raw strings: the domain validates them and reports every
    problem in the response envelope instead of failing on the first one.
    """

    page: str = Field(default="1", description="Page number", examples=["1"])
    max: str = Field(
        default="20",
        description="Maximum number of vehicles per page",
        examples=["20"],
    )
    order: str = Field(
        default="dateAdded",
        description="Field to be ordered (id/dateAdded/msrp/year/make/model/miles/vin)",
        examples=["make"],
    )
    sort: str = Field(
        default="ASC",
        description="Sort direction (ASC or DESC, case-insensitive)",
        examples=["ASC"],
    )
    search: str | None = Field(
        default=None,
        description="Search criteria to find vehicles by make, model, or vin",
        examples=["Ford"],
    )


class VehicleListItemDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    date_added: datetime = Field(serialization_alias="dateAdded")
    msrp: str
    year: int
    make: str
    model: str
    miles: int
    vin: str


class VehicleListDTO(BaseModel):
    pages: int
    total: int
    vehicles: list[VehicleListItemDTO]


class VehicleDetailDTO(VehicleListItemDTO):
    type: str
    deleted: bool


class VehicleCreatedDTO(BaseModel):
    id: int
