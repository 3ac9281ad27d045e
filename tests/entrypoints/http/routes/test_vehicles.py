"""
Test suite for the /api/vehicles routes.

Requests run through the real use cases against an in-memory repository,
so these cover the whole HTTP contract:
- Query parameters and bodies reach the use cases
- Every answer is wrapped in the response envelope
- Domain errors map to the right status codes
"""

from __future__ import annotations

from typing import Any, Callable, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from vehicle_inventory.adapters.in_memory_vehicle_repository import InMemoryVehicleRepository
from vehicle_inventory.adapters.sqlalchemy_vehicle_repository import SqlAlchemyVehicleRepository
from vehicle_inventory.domain.vehicle import Vehicle
from vehicle_inventory.entrypoints.http.dependencies import (
    get_partition,
    get_vehicle_repository,
)
from vehicle_inventory.entrypoints.http.exception_handlers import register_exception_handlers
from vehicle_inventory.entrypoints.http.routes.vehicles import router
from vehicle_inventory.infra.db.models import Base

LIST_URL = "/api/vehicles/"


@pytest.fixture
def repository() -> InMemoryVehicleRepository:
    return InMemoryVehicleRepository()


@pytest.fixture
def app(repository: InMemoryVehicleRepository) -> FastAPI:
    """Test app with the vehicles router, serving the "new" partition."""
    test_app = FastAPI()
    register_exception_handlers(test_app)
    test_app.include_router(router, prefix="/api")

    test_app.dependency_overrides[get_vehicle_repository] = lambda: repository
    test_app.dependency_overrides[get_partition] = lambda: "new"
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def stocked(
    repository: InMemoryVehicleRepository, make_vehicle: Callable[..., Vehicle]
) -> InMemoryVehicleRepository:
    """Five listed new vehicles, one hidden new vehicle and one used vehicle."""
    makes = ["Ford", "Toyota", "Honda", "Ford", "Jeep"]
    for index, make in enumerate(makes, start=1):
        repository.add(make_vehicle(make=make, vin=f"NEWVIN{index}", miles=index * 10))
    repository.add(make_vehicle(vin="HIDDEN1", deleted=True))
    repository.add(make_vehicle(type="used", vin="USED1"))
    return repository


# ==============================================================================
# List
# ==============================================================================


def test_list_returns_envelope_with_pages_and_total(
    client: TestClient, stocked: InMemoryVehicleRepository
) -> None:
    response = client.get(LIST_URL, params={"page": "1", "max": "2"})

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "success"
    assert body["errors"] == {}
    assert body["data"]["total"] == 5
    assert body["data"]["pages"] == 3
    assert len(body["data"]["vehicles"]) == 2


def test_list_orders_and_searches(
    client: TestClient, stocked: InMemoryVehicleRepository
) -> None:
    response = client.get(
        LIST_URL, params={"order": "miles", "sort": "desc", "search": "fOrD"}
    )

    assert response.status_code == 200
    vehicles = response.json()["data"]["vehicles"]
    assert [vehicle["vin"] for vehicle in vehicles] == ["NEWVIN4", "NEWVIN1"]


def test_list_hides_deleted_and_other_partition(
    client: TestClient, stocked: InMemoryVehicleRepository
) -> None:
    response = client.get(LIST_URL, params={"max": "50"})

    vins = {vehicle["vin"] for vehicle in response.json()["data"]["vehicles"]}
    assert "HIDDEN1" not in vins
    assert "USED1" not in vins


def test_list_reports_every_invalid_parameter(client: TestClient) -> None:
    response = client.get(
        LIST_URL, params={"page": "abc", "max": "0", "order": "color", "sort": "up"}
    )

    assert response.status_code == 422
    body = response.json()
    assert body["message"] == "Errors found!"
    assert body["data"] == {}
    assert body["errors"] == {
        "page": ["This value should be of type digit."],
        "max": ["This value should be positive."],
        "order": ["Only id/dateAdded/msrp/year/make/model/miles/vin options are allowed."],
        "sort": ["Only ASC/DESC/asc/desc options are allowed."],
    }


def test_list_on_empty_inventory(client: TestClient) -> None:
    response = client.get(LIST_URL)

    assert response.status_code == 200
    assert response.json()["data"] == {"pages": 0, "total": 0, "vehicles": []}


# ==============================================================================
# Show
# ==============================================================================


def test_show_returns_vehicle_detail(
    client: TestClient, repository: InMemoryVehicleRepository, make_vehicle: Callable[..., Vehicle]
) -> None:
    stored = repository.add(make_vehicle(deleted=True))

    response = client.get(f"/api/vehicles/show/{stored.id}")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"] == stored.id
    assert data["type"] == "new"
    assert data["msrp"] == "8500.99"
    assert data["vin"] == "1FTEW1C58NKD33222"
    assert data["deleted"] is True


def test_show_hides_other_partition(
    client: TestClient, repository: InMemoryVehicleRepository, make_vehicle: Callable[..., Vehicle]
) -> None:
    stored = repository.add(make_vehicle(type="used"))

    response = client.get(f"/api/vehicles/show/{stored.id}")

    assert response.status_code == 404
    assert response.json()["errors"] == {"id": [f"No product found for id {stored.id}"]}


def test_show_rejects_non_integer_id(client: TestClient) -> None:
    response = client.get("/api/vehicles/show/abc")

    assert response.status_code == 422
    assert list(response.json()["errors"]) == ["id"]


# ==============================================================================
# Create
# ==============================================================================


def test_create_then_show(client: TestClient, valid_fields: dict[str, Any]) -> None:
    created = client.post("/api/vehicles/create", json=valid_fields)

    assert created.status_code == 200
    body = created.json()
    assert body["message"] == "success"
    assert body["errors"] == {}
    vehicle_id = body["data"]["id"]
    assert isinstance(vehicle_id, int)
    assert vehicle_id > 0

    shown = client.get(f"/api/vehicles/show/{vehicle_id}").json()["data"]
    assert shown["type"] == "new"
    assert shown["msrp"] == "8500.99"
    assert shown["year"] == 2022
    assert shown["make"] == "Ford"
    assert shown["model"] == "F150"
    assert shown["miles"] == 35000
    assert shown["vin"] == "1FTEW1C58NKD33222"
    assert shown["deleted"] is False


def test_create_accepts_form_data(client: TestClient, valid_fields: dict[str, Any]) -> None:
    form = {key: str(value) for key, value in valid_fields.items()}

    response = client.post("/api/vehicles/create", data=form)

    assert response.status_code == 200
    assert "id" in response.json()["data"]


def test_create_reports_year_out_of_range(
    client: TestClient, repository: InMemoryVehicleRepository, valid_fields: dict[str, Any]
) -> None:
    response = client.post("/api/vehicles/create", json={**valid_fields, "year": 1899})

    assert response.status_code == 422
    errors = response.json()["errors"]
    assert list(errors) == ["year"]
    assert errors["year"][0].startswith("The vehicle year should be between 1900 and ")
    assert not repository.vin_exists(valid_fields["vin"])


def test_create_rejects_duplicate_vin(client: TestClient, valid_fields: dict[str, Any]) -> None:
    client.post("/api/vehicles/create", json=valid_fields)

    response = client.post("/api/vehicles/create", json=valid_fields)

    assert response.status_code == 422
    assert response.json()["errors"] == {"vin": ["This value is already used."]}


def test_create_rejects_empty_body(client: TestClient) -> None:
    response = client.post("/api/vehicles/create")

    assert response.status_code == 422
    assert response.json() == {
        "message": "Errors found!",
        "data": {},
        "errors": {"data": ["No data sent to update."]},
    }


# ==============================================================================
# Update
# ==============================================================================


def test_update_changes_only_submitted_fields(
    client: TestClient, repository: InMemoryVehicleRepository, make_vehicle: Callable[..., Vehicle]
) -> None:
    stored = repository.add(make_vehicle())

    response = client.patch(
        f"/api/vehicles/update/{stored.id}",
        json={"make": "test_make", "model": "test_model"},
    )

    assert response.status_code == 200
    assert response.json() == {"message": "success", "data": {}, "errors": {}}
    updated = repository.get_by_id(stored.id)
    assert updated.make == "test_make"
    assert updated.model == "test_model"
    assert updated.vin == stored.vin
    assert updated.date_added == stored.date_added


def test_update_unknown_id_returns_404(client: TestClient) -> None:
    response = client.patch("/api/vehicles/update/999", json={"make": "Ford"})

    assert response.status_code == 404
    assert response.json()["errors"] == {"id": ["No product found for id 999"]}


def test_update_with_empty_body(
    client: TestClient, repository: InMemoryVehicleRepository, make_vehicle: Callable[..., Vehicle]
) -> None:
    stored = repository.add(make_vehicle())

    response = client.patch(f"/api/vehicles/update/{stored.id}")

    assert response.status_code == 422
    assert response.json()["errors"] == {"data": ["No data sent to update."]}


def test_update_reports_invalid_values(
    client: TestClient, repository: InMemoryVehicleRepository, make_vehicle: Callable[..., Vehicle]
) -> None:
    stored = repository.add(make_vehicle())

    response = client.patch(
        f"/api/vehicles/update/{stored.id}",
        json={"msrp": "12.345", "vin": "NOT-A-VIN", "deleted": "maybe"},
    )

    assert response.status_code == 422
    assert response.json()["errors"] == {
        "msrp": ["MSRP must be decimal(20,2), up to 2 decimal places."],
        "vin": ["VIN must contain only letter and numbers"],
        "deleted": ["Only true/false/t/f/0/1 options are allowed."],
    }
    assert repository.get_by_id(stored.id) == stored


# ==============================================================================
# Delete
# ==============================================================================


def test_delete_then_show_returns_404(
    client: TestClient, repository: InMemoryVehicleRepository, make_vehicle: Callable[..., Vehicle]
) -> None:
    stored = repository.add(make_vehicle())

    deleted = client.delete(f"/api/vehicles/delete/{stored.id}")

    assert deleted.status_code == 200
    assert deleted.json() == {"message": "success", "data": {}, "errors": {}}

    shown = client.get(f"/api/vehicles/show/{stored.id}")
    assert shown.status_code == 404
    assert shown.json()["errors"] == {"id": [f"No product found for id {stored.id}"]}


def test_delete_unknown_id_returns_404(client: TestClient) -> None:
    response = client.delete("/api/vehicles/delete/999")

    assert response.status_code == 404
    assert response.json()["errors"] == {"id": ["No product found for id 999"]}


# ==============================================================================
# Out-of-range integers against the SQL store
# ==============================================================================


@pytest.fixture
def sql_client() -> Iterator[TestClient]:
    """Test app backed by the SQLAlchemy repository on in-memory SQLite."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    with Session(engine, expire_on_commit=False) as session:
        test_app = FastAPI()
        register_exception_handlers(test_app)
        test_app.include_router(router, prefix="/api")
        test_app.dependency_overrides[get_vehicle_repository] = lambda: (
            SqlAlchemyVehicleRepository(session)
        )
        test_app.dependency_overrides[get_partition] = lambda: "new"

        yield TestClient(test_app, raise_server_exceptions=False)

    engine.dispose()


def test_sql_create_and_list(sql_client: TestClient, valid_fields: dict[str, Any]) -> None:
    created = sql_client.post("/api/vehicles/create", json=valid_fields)

    assert created.status_code == 200
    listed = sql_client.get(LIST_URL).json()["data"]
    assert listed["total"] == 1
    assert listed["vehicles"][0]["vin"] == valid_fields["vin"]


def test_sql_create_with_oversized_miles_is_a_field_error(
    sql_client: TestClient, valid_fields: dict[str, Any]
) -> None:
    response = sql_client.post(
        "/api/vehicles/create", json={**valid_fields, "miles": "99999999999999999999"}
    )

    assert response.status_code == 422
    assert response.json()["errors"] == {
        "miles": ["This value should be less than or equal to 2147483647."]
    }


def test_sql_list_with_oversized_page_is_a_field_error(sql_client: TestClient) -> None:
    response = sql_client.get(LIST_URL, params={"page": "99999999999999999999"})

    assert response.status_code == 422
    assert response.json()["errors"] == {
        "page": ["This value should be less than or equal to 2147483647."]
    }


def test_sql_show_with_oversized_id_is_not_found(sql_client: TestClient) -> None:
    response = sql_client.get("/api/vehicles/show/99999999999999999999")

    assert response.status_code == 404
    assert response.json()["errors"] == {"id": ["No product found for id 99999999999999999999"]}
