"""SQLAlchemy implementation of VehicleRepository."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import exists, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from vehicle_inventory.domain.constraints import MAX_INTEGER
from vehicle_inventory.domain.errors import ConflictError
from vehicle_inventory.domain.pagination import VehicleQuery
from vehicle_inventory.domain.vehicle import Vehicle
from vehicle_inventory.infra.db.models.vehicle import VehicleRow
from vehicle_inventory.ports.vehicle_repository import SearchResult, VehicleRepository

if TYPE_CHECKING:
    from sqlalchemy.sql import Select

_ORDER_COLUMNS = {
    "id": VehicleRow.id,
    "dateAdded": VehicleRow.date_added,
    "msrp": VehicleRow.msrp,
    "year": VehicleRow.year,
    "make": VehicleRow.make,
    "model": VehicleRow.model,
    "miles": VehicleRow.miles,
    "vin": VehicleRow.vin,
}


class SqlAlchemyVehicleRepository(VehicleRepository):
    """
    SQLAlchemy implementation of VehicleRepository (PostgreSQL in production).

    - Applies partition, visibility and search filters as SQL WHERE clauses
    - Binds the search term as a parameter; LIKE wildcards in it are escaped
    - Returns total_count via COUNT(*) query
    - Converts VehicleRow (infrastructure) to Vehicle (domain)
    - Turns VIN unique-constraint violations into ConflictError
    """

    def __init__(self, session: Session) -> None:
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self._session = session

    def search(self, query: VehicleQuery) -> SearchResult:
        """
        Executes two queries:
        1. COUNT(*) to get total matching vehicles (before paging)
        2. SELECT with ORDER BY/OFFSET/LIMIT to get the page
        """
        statement = self._build_query(query)

        count_query = select(func.count()).select_from(statement.subquery())
        total_count = self._session.execute(count_query).scalar() or 0

        column = _ORDER_COLUMNS[query.order_by]
        ordering = column.desc() if query.direction == "DESC" else column.asc()
        statement = (
            statement.order_by(ordering, VehicleRow.id.asc())
            .offset(query.offset)
            .limit(query.limit)
        )

        rows = self._session.execute(statement).scalars().all()
        return SearchResult(
            vehicles=[self._to_domain(row) for row in rows],
            total_count=total_count,
        )

    def get_by_id(self, vehicle_id: int) -> Vehicle | None:
        row = self._get_row(vehicle_id)
        return self._to_domain(row) if row else None

    def vin_exists(self, vin: str, exclude_id: int | None = None) -> bool:
        condition = VehicleRow.vin == vin
        if exclude_id is not None:
            condition = condition & (VehicleRow.id != exclude_id)
        return bool(self._session.execute(select(exists().where(condition))).scalar())

    def add(self, vehicle: Vehicle) -> Vehicle:
        row = VehicleRow(
            date_added=vehicle.date_added,
            type=vehicle.type,
            msrp=vehicle.msrp,
            year=vehicle.year,
            make=vehicle.make,
            model=vehicle.model,
            miles=vehicle.miles,
            vin=vehicle.vin,
            deleted=vehicle.deleted,
        )
        self._session.add(row)
        self._flush(vehicle.vin)
        return self._to_domain(row)

    def update(self, vehicle: Vehicle) -> Vehicle:
        row = self._session.get(VehicleRow, vehicle.id)
        if row is None:
            raise ValueError(f"Vehicle {vehicle.id} is not stored")

        # id and date_added are immutable
        row.type = vehicle.type
        row.msrp = vehicle.msrp
        row.year = vehicle.year
        row.make = vehicle.make
        row.model = vehicle.model
        row.miles = vehicle.miles
        row.vin = vehicle.vin
        row.deleted = vehicle.deleted

        self._flush(vehicle.vin)
        return self._to_domain(row)

    def delete(self, vehicle_id: int) -> None:
        row = self._get_row(vehicle_id)
        if row is not None:
            self._session.delete(row)
            self._session.flush()

    def _get_row(self, vehicle_id: int) -> VehicleRow | None:
        # Ids outside the INTEGER column range cannot be stored
        if not 0 < vehicle_id <= MAX_INTEGER:
            return None
        return self._session.get(VehicleRow, vehicle_id)

    def _flush(self, vin: str) -> None:
        try:
            self._session.flush()
        except IntegrityError as exc:
            self._session.rollback()
            raise ConflictError(f"Vehicle with VIN '{vin}' already exists", field="vin") from exc

    def _build_query(self, query: VehicleQuery) -> Select[tuple[VehicleRow]]:
        """
        Build the filtered (not yet ordered or paged) SELECT.

        Args:
            query: Query plan to apply

        Returns:
            SQLAlchemy select statement with WHERE clauses
        """
        statement = select(VehicleRow).where(
            VehicleRow.type == query.partition,
            VehicleRow.deleted.is_(False),
        )

        # Case-insensitive substring match on make, model or vin
        if query.search:
            statement = statement.where(
                or_(
                    VehicleRow.make.icontains(query.search, autoescape=True),
                    VehicleRow.model.icontains(query.search, autoescape=True),
                    VehicleRow.vin.icontains(query.search, autoescape=True),
                )
            )

        return statement

    def _to_domain(self, row: VehicleRow) -> Vehicle:
        return Vehicle(
            id=row.id,
            date_added=row.date_added,
            type=row.type,
            msrp=row.msrp,  # Already Decimal from NUMERIC column
            year=row.year,
            make=row.make,
            model=row.model,
            miles=row.miles,
            vin=row.vin,
            deleted=row.deleted,
        )
